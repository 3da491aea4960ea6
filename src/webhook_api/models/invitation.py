"""Project invitation model."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.webhook_api.core.security.identifiers import OBJECT_ID_LENGTH, new_object_id
from src.webhook_api.models.base import utc_now
from src.webhook_api.models.enums import InvitationStatus


class ProjectInvitation(SQLModel, table=True):
    __tablename__ = "project_invitations"

    id: str = Field(
        default_factory=new_object_id, primary_key=True, max_length=OBJECT_ID_LENGTH
    )
    project_id: str = Field(max_length=OBJECT_ID_LENGTH, index=True)
    inviter_id: str = Field(max_length=OBJECT_ID_LENGTH, index=True)
    invitee_id: str = Field(max_length=OBJECT_ID_LENGTH, index=True)
    sent_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime
    status: str = Field(default=InvitationStatus.PENDING.value, max_length=20, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    created_by: str | None = Field(default=None, max_length=64)
    updated_by: str | None = Field(default=None, max_length=64)

    @property
    def status_enum(self) -> InvitationStatus:
        return InvitationStatus(self.status)

    def is_expired(self, now: datetime | None = None) -> bool:
        """True when stored as EXPIRED, or still PENDING past its expiry."""
        if self.status == InvitationStatus.EXPIRED.value:
            return True
        now = now or utc_now()
        return self.status == InvitationStatus.PENDING.value and now > self.expires_at
