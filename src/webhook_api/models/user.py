"""User model."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.webhook_api.core.security.identifiers import OBJECT_ID_LENGTH, new_object_id
from src.webhook_api.models.base import utc_now
from src.webhook_api.models.enums import UserRole


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(
        default_factory=new_object_id, primary_key=True, max_length=OBJECT_ID_LENGTH
    )
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    email: str = Field(max_length=255, unique=True, index=True)
    hashed_password: str = Field(max_length=255)
    role: str = Field(default=UserRole.MEMBER.value, max_length=20)
    active: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: str | None = Field(default=None, max_length=64)
    updated_by: str | None = Field(default=None, max_length=64)
