"""Project invitation schemas."""

from datetime import datetime
from typing import Self

from pydantic import EmailStr, Field, field_validator, model_validator

from src.webhook_api.models.base import to_naive_utc
from src.webhook_api.models.enums import InvitationStatus
from src.webhook_api.schemas.envelope import CamelModel


def _naive_expiry(v: datetime | None) -> datetime | None:
    return to_naive_utc(v) if v is not None else None


class InvitationCreate(CamelModel):
    """Invite one user, identified by id or by email."""

    project_id: str
    invitee_id: str | None = None
    invitee_email: EmailStr | None = None
    expires_at: datetime | None = None

    @field_validator("expires_at")
    @classmethod
    def validate_expires_at(cls, v: datetime | None) -> datetime | None:
        return _naive_expiry(v)

    @model_validator(mode="after")
    def validate_invitee(self) -> Self:
        if (self.invitee_id is None) == (self.invitee_email is None):
            raise ValueError("Exactly one of inviteeId or inviteeEmail is required")
        return self


class BulkInvitationCreate(CamelModel):
    project_id: str
    emails: list[EmailStr] = Field(min_length=1, max_length=50)
    expires_at: datetime | None = None

    @field_validator("expires_at")
    @classmethod
    def validate_expires_at(cls, v: datetime | None) -> datetime | None:
        return _naive_expiry(v)


class InvitationUpdate(CamelModel):
    """Partial update by the inviter or project owner."""

    status: InvitationStatus | None = None
    expires_at: datetime | None = None

    @field_validator("expires_at")
    @classmethod
    def validate_expires_at(cls, v: datetime | None) -> datetime | None:
        return _naive_expiry(v)


class InvitationResponse(CamelModel):
    """Invitee's answer to an invitation."""

    status: InvitationStatus

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: InvitationStatus) -> InvitationStatus:
        if v not in (InvitationStatus.ACCEPTED, InvitationStatus.REJECTED):
            raise ValueError("Response must be ACCEPTED or REJECTED")
        return v


class InvitationListView(CamelModel):
    id: str
    project_id: str
    project_name: str | None
    inviter_id: str
    invitee_id: str
    sent_at: datetime
    expires_at: datetime
    status: InvitationStatus
    is_expired: bool


class InvitationDetailView(InvitationListView):
    created_at: datetime
    updated_at: datetime
    created_by: str | None
    updated_by: str | None


class InvitationStats(CamelModel):
    """Counts per status; PENDING invitations past expiry count as expired."""

    total: int = 0
    pending: int = 0
    accepted: int = 0
    rejected: int = 0
    expired: int = 0


class ExpiredCount(CamelModel):
    expired: int
