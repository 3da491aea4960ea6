"""Project schemas for API request/response."""

from datetime import datetime

from pydantic import Field, field_validator

from src.webhook_api.models.enums import ProjectStatus, ProjectType, ProjectVisibility
from src.webhook_api.schemas.envelope import CamelModel
from src.webhook_api.schemas.user import UserSummary


def _validate_name(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Project name must be between 2 and 100 characters")
    return v


def _validate_description(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


class ProjectCreate(CamelModel):
    """Schema for creating a project. Status and visibility are defaulted when absent."""

    name: str = Field(min_length=2, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    avatar_url: str | None = Field(default=None, max_length=2048)
    visibility: ProjectVisibility | None = None
    status: ProjectStatus | None = None
    type: ProjectType

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _validate_name(v)  # type: ignore[return-value]

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return _validate_description(v)


class ProjectUpdate(CamelModel):
    """Partial update; absent or null fields are left unchanged."""

    name: str | None = Field(default=None, min_length=2, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    avatar_url: str | None = Field(default=None, max_length=2048)
    visibility: ProjectVisibility | None = None
    status: ProjectStatus | None = None
    type: ProjectType | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return _validate_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return _validate_description(v)


class ProjectListView(CamelModel):
    """Flattened listing row."""

    id: str
    name: str
    description: str | None
    status: ProjectStatus
    visibility: ProjectVisibility
    type: ProjectType
    type_display_name: str
    avatar_url: str | None
    owner_id: str
    owner_first_name: str | None
    owner_last_name: str | None
    member_count: int
    created_at: datetime
    updated_at: datetime


class ProjectDetailView(ProjectListView):
    """Listing row plus related user summaries and audit metadata."""

    owner: UserSummary | None
    members: list[UserSummary]
    invited_users: list[UserSummary]
    created_by: str | None
    updated_by: str | None


class ProjectStats(CamelModel):
    """Per-owner counts. ARCHIVED projects count toward the total only."""

    total_projects: int = 0
    active_projects: int = 0
    draft_projects: int = 0
    completed_projects: int = 0
