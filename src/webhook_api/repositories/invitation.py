"""Repository for ProjectInvitation entity."""

from datetime import datetime

from sqlalchemy import delete
from sqlmodel import select

from src.webhook_api.models import InvitationStatus, ProjectInvitation
from src.webhook_api.models.base import utc_now
from src.webhook_api.repositories.base import BaseRepository
from src.webhook_api.repositories.query import Criteria, Eq, Range, SortSpec


class ProjectInvitationRepository(BaseRepository[ProjectInvitation]):
    """Repository for ProjectInvitation entity."""

    model = ProjectInvitation
    sortable_fields = {
        "id": ProjectInvitation.id,
        "project_id": ProjectInvitation.project_id,
        "status": ProjectInvitation.status,
        "sent_at": ProjectInvitation.sent_at,
        "expires_at": ProjectInvitation.expires_at,
        "created_at": ProjectInvitation.created_at,
    }

    @staticmethod
    def build_criteria(
        project_id: str | None = None,
        inviter_id: str | None = None,
        invitee_id: str | None = None,
        status: InvitationStatus | None = None,
    ) -> Criteria:
        return (
            Criteria()
            .eq_if_not_blank(ProjectInvitation.project_id, project_id)
            .eq_if_not_blank(ProjectInvitation.inviter_id, inviter_id)
            .eq_if_not_blank(ProjectInvitation.invitee_id, invitee_id)
            .eq_if_present(ProjectInvitation.status, status.value if status else None)
        )

    async def get_pending(self, project_id: str, invitee_id: str) -> ProjectInvitation | None:
        """Get the pending invitation of a user to a project, if any."""
        result = await self.session.execute(
            select(ProjectInvitation).where(
                ProjectInvitation.project_id == project_id,
                ProjectInvitation.invitee_id == invitee_id,
                ProjectInvitation.status == InvitationStatus.PENDING.value,
            )
        )
        return result.scalars().first()

    async def find_pending_for_invitee(self, invitee_id: str) -> list[ProjectInvitation]:
        criteria = Criteria(
            Eq(ProjectInvitation.invitee_id, invitee_id),
            Eq(ProjectInvitation.status, InvitationStatus.PENDING.value),
        )
        return await self.find_all(criteria, SortSpec.of("sent_at", "desc"))

    async def find_sent_by(self, inviter_id: str) -> list[ProjectInvitation]:
        criteria = Criteria(Eq(ProjectInvitation.inviter_id, inviter_id))
        return await self.find_all(criteria, SortSpec.of("sent_at", "desc"))

    async def find_by_project(self, project_id: str) -> list[ProjectInvitation]:
        return await self.find_all(Criteria(Eq(ProjectInvitation.project_id, project_id)))

    async def delete_by_project(self, project_id: str) -> int:
        """Delete all invitations of a project (no commit).

        Returns:
            Number of invitations deleted
        """
        result = await self.session.execute(
            delete(ProjectInvitation).where(
                ProjectInvitation.project_id == project_id  # type: ignore[arg-type]
            )
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def find_overdue(self, now: datetime | None = None) -> list[ProjectInvitation]:
        """PENDING invitations whose expiry is strictly before ``now``."""
        criteria = Criteria(
            Eq(ProjectInvitation.status, InvitationStatus.PENDING.value),
            Range(ProjectInvitation.expires_at, upper=now or utc_now()),
        )
        return await self.find_all(criteria)
