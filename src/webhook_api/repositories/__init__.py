"""Repository layer - data access abstraction."""

from src.webhook_api.repositories.base import BaseRepository
from src.webhook_api.repositories.invitation import ProjectInvitationRepository
from src.webhook_api.repositories.project import ProjectRepository
from src.webhook_api.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "ProjectInvitationRepository",
    "ProjectRepository",
    "UserRepository",
]
