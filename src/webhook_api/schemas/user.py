from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from src.webhook_api.models.enums import UserRole
from src.webhook_api.schemas.envelope import CamelModel


def _strip_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if len(v) < 2:
        raise ValueError("must be between 2 and 50 characters")
    return v


class UserCreate(CamelModel):
    first_name: str = Field(min_length=2, max_length=50)
    last_name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)
    role: UserRole = UserRole.MEMBER

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _strip_name(v)  # type: ignore[return-value]


class UserUpdate(CamelModel):
    """Partial update; absent or null fields are left unchanged."""

    first_name: str | None = Field(default=None, min_length=2, max_length=50)
    last_name: str | None = Field(default=None, min_length=2, max_length=50)
    email: EmailStr | None = None
    role: UserRole | None = None
    active: bool | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return _strip_name(v)


class UserSummary(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str


class UserListView(UserSummary):
    role: UserRole
    active: bool


class UserDetailView(UserListView):
    created_at: datetime
    updated_at: datetime
    created_by: str | None
    updated_by: str | None


class UserStats(CamelModel):
    active_users_count: int
