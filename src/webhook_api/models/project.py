"""Project model."""

from datetime import datetime

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.webhook_api.core.security.identifiers import OBJECT_ID_LENGTH, new_object_id
from src.webhook_api.models.base import utc_now
from src.webhook_api.models.enums import ProjectStatus, ProjectVisibility


class Project(SQLModel, table=True):
    """Project owned by a single user.

    ``member_ids`` and ``invited_user_ids`` are JSON arrays used as sets.
    Always assign a new list instead of mutating in place so the change
    is tracked.
    """

    __tablename__ = "projects"

    id: str = Field(
        default_factory=new_object_id, primary_key=True, max_length=OBJECT_ID_LENGTH
    )
    name: str = Field(max_length=100, unique=True, index=True)
    description: str | None = Field(default=None, max_length=500)
    avatar_url: str | None = Field(default=None, max_length=2048)
    status: str = Field(default=ProjectStatus.DRAFT.value, max_length=20, index=True)
    visibility: str = Field(default=ProjectVisibility.PRIVATE.value, max_length=20)
    type: str = Field(max_length=32)
    owner_id: str = Field(max_length=OBJECT_ID_LENGTH, index=True)
    member_ids: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    invited_user_ids: list[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: str | None = Field(default=None, max_length=64)
    updated_by: str | None = Field(default=None, max_length=64)

    @property
    def member_count(self) -> int:
        return len(self.member_ids or [])

    def is_owned_by(self, user_id: str) -> bool:
        return self.owner_id == user_id

    def add_member(self, user_id: str) -> None:
        if user_id not in self.member_ids:
            self.member_ids = [*self.member_ids, user_id]

    def add_invited_user(self, user_id: str) -> None:
        if user_id not in self.invited_user_ids:
            self.invited_user_ids = [*self.invited_user_ids, user_id]

    def remove_invited_user(self, user_id: str) -> None:
        self.invited_user_ids = [uid for uid in self.invited_user_ids if uid != user_id]
