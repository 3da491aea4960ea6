"""Model exports.

Import from here: `from src.webhook_api.models import Project, User`
"""

from src.webhook_api.models.enums import (
    InvitationStatus,
    ProjectStatus,
    ProjectType,
    ProjectVisibility,
    UserRole,
)
from src.webhook_api.models.invitation import ProjectInvitation
from src.webhook_api.models.project import Project
from src.webhook_api.models.user import User

__all__ = [
    # Enums
    "InvitationStatus",
    "ProjectStatus",
    "ProjectType",
    "ProjectVisibility",
    "UserRole",
    # Tables
    "Project",
    "ProjectInvitation",
    "User",
]
