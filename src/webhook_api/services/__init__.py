"""Service layer - business logic and transaction control."""

from src.webhook_api.services.invitation_service import InvitationService
from src.webhook_api.services.project_service import ProjectService
from src.webhook_api.services.project_stats import ProjectStatsAggregator, compute_project_stats
from src.webhook_api.services.user_service import UserService

__all__ = [
    "InvitationService",
    "ProjectService",
    "ProjectStatsAggregator",
    "UserService",
    "compute_project_stats",
]
