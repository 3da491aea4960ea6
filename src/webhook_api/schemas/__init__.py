"""Request and response schemas."""

from src.webhook_api.schemas.envelope import (
    ApiResponse,
    Availability,
    CamelModel,
    PaginationMeta,
)
from src.webhook_api.schemas.invitation import (
    BulkInvitationCreate,
    ExpiredCount,
    InvitationCreate,
    InvitationDetailView,
    InvitationListView,
    InvitationResponse,
    InvitationStats,
    InvitationUpdate,
)
from src.webhook_api.schemas.project import (
    ProjectCreate,
    ProjectDetailView,
    ProjectListView,
    ProjectStats,
    ProjectUpdate,
)
from src.webhook_api.schemas.user import (
    UserCreate,
    UserDetailView,
    UserListView,
    UserStats,
    UserSummary,
    UserUpdate,
)

__all__ = [
    # Envelope
    "ApiResponse",
    "Availability",
    "CamelModel",
    "PaginationMeta",
    # Invitations
    "BulkInvitationCreate",
    "ExpiredCount",
    "InvitationCreate",
    "InvitationDetailView",
    "InvitationListView",
    "InvitationResponse",
    "InvitationStats",
    "InvitationUpdate",
    # Projects
    "ProjectCreate",
    "ProjectDetailView",
    "ProjectListView",
    "ProjectStats",
    "ProjectUpdate",
    # Users
    "UserCreate",
    "UserDetailView",
    "UserListView",
    "UserStats",
    "UserSummary",
    "UserUpdate",
]
