from datetime import datetime

from src.webhook_api.models import InvitationStatus, ProjectInvitation
from src.webhook_api.schemas.invitation import InvitationDetailView, InvitationListView


def to_list_view(
    invitation: ProjectInvitation,
    project_name: str | None = None,
    now: datetime | None = None,
) -> InvitationListView:
    return InvitationListView(
        id=invitation.id,
        project_id=invitation.project_id,
        project_name=project_name,
        inviter_id=invitation.inviter_id,
        invitee_id=invitation.invitee_id,
        sent_at=invitation.sent_at,
        expires_at=invitation.expires_at,
        status=InvitationStatus(invitation.status),
        is_expired=invitation.is_expired(now),
    )


def to_detail_view(
    invitation: ProjectInvitation,
    project_name: str | None = None,
    now: datetime | None = None,
) -> InvitationDetailView:
    return InvitationDetailView(
        **to_list_view(invitation, project_name, now).model_dump(),
        created_at=invitation.created_at,
        updated_at=invitation.updated_at,
        created_by=invitation.created_by,
        updated_by=invitation.updated_by,
    )
