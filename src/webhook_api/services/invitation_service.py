"""Project invitation service."""

from collections import Counter
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from src.webhook_api.core.config import get_settings
from src.webhook_api.core.errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from src.webhook_api.core.logging import get_logger, log_operation
from src.webhook_api.core.security import validate_object_id
from src.webhook_api.mappers import apply_update
from src.webhook_api.mappers import invitation as invitation_mapper
from src.webhook_api.models import InvitationStatus, Project, ProjectInvitation, User
from src.webhook_api.models.base import utc_now
from src.webhook_api.repositories import (
    ProjectInvitationRepository,
    ProjectRepository,
    UserRepository,
)
from src.webhook_api.repositories.query import SortSpec
from src.webhook_api.schemas.envelope import PaginationMeta
from src.webhook_api.schemas.invitation import (
    BulkInvitationCreate,
    InvitationCreate,
    InvitationDetailView,
    InvitationListView,
    InvitationResponse,
    InvitationStats,
    InvitationUpdate,
)
from src.webhook_api.services.pagination import to_page_request

logger = get_logger(__name__)


class InvitationService:
    """Service for project invitations.

    Keeps ``Project.invited_user_ids`` and ``Project.member_ids`` in step with
    invitation status: a PENDING invitee is in the invited set, an ACCEPTED
    invitee is a member.
    """

    def __init__(
        self,
        invitation_repo: ProjectInvitationRepository,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
        session: AsyncSession,
    ):
        self.invitation_repo = invitation_repo
        self.project_repo = project_repo
        self.user_repo = user_repo
        self.session = session

    async def invite(self, data: InvitationCreate, requestor_id: str) -> InvitationDetailView:
        """Invite one user, by id or email, to a project owned by the requestor.

        Raises:
            NotFoundError: If the project or invitee does not exist.
            ForbiddenError: If the requestor does not own the project.
            ConflictError: If the invitee is the owner, a member, or already invited.
        """
        with log_operation(
            logger, "invitation.create", project_id=data.project_id, requestor_id=requestor_id
        ) as outcome:
            project = await self._get_owned_project(data.project_id, requestor_id)
            invitee = await self._resolve_invitee(data)
            expires_at = self._expiry(data.expires_at)

            await self._ensure_invitable(project, invitee)
            invitation = self._new_invitation(project, invitee, expires_at, requestor_id)
            await self._commit()
            outcome["invitation_id"] = invitation.id
        return invitation_mapper.to_detail_view(invitation, project.name)

    async def bulk_invite(
        self, data: BulkInvitationCreate, requestor_id: str
    ) -> list[InvitationListView]:
        """Invite several users by email in one transaction.

        Every email is validated before anything is written.

        Raises:
            BadRequestError: If more emails are given than allowed.
            NotFoundError: If the project or any invitee does not exist.
            ForbiddenError: If the requestor does not own the project.
            ConflictError: If any invitee cannot be invited.
        """
        max_invites = get_settings().max_bulk_invites
        emails = list(dict.fromkeys(str(email) for email in data.emails))
        if len(emails) > max_invites:
            raise BadRequestError(f"At most {max_invites} invitations can be sent at once")

        with log_operation(
            logger,
            "invitation.bulk_create",
            project_id=data.project_id,
            count=len(emails),
            requestor_id=requestor_id,
        ):
            project = await self._get_owned_project(data.project_id, requestor_id)
            expires_at = self._expiry(data.expires_at)

            users_by_email = await self.user_repo.get_many_by_email(emails)
            missing = [email for email in emails if email not in users_by_email]
            if missing:
                raise NotFoundError(f"No user registered with email: {', '.join(missing)}")

            invitations = []
            for email in emails:
                invitee = users_by_email[email]
                await self._ensure_invitable(project, invitee)
                invitations.append(
                    self._new_invitation(project, invitee, expires_at, requestor_id)
                )
            await self._commit()

        now = utc_now()
        return [invitation_mapper.to_list_view(i, project.name, now) for i in invitations]

    async def search(
        self,
        *,
        project_id: str | None = None,
        inviter_id: str | None = None,
        invitee_id: str | None = None,
        status: InvitationStatus | None = None,
        page: int = 1,
        size: int = 10,
        sort_by: str = "sentAt",
        sort_direction: str | None = "desc",
    ) -> tuple[list[InvitationListView], PaginationMeta]:
        page_request = to_page_request(page, size)
        criteria = self.invitation_repo.build_criteria(project_id, inviter_id, invitee_id, status)
        result = await self.invitation_repo.search(
            criteria, page_request, SortSpec.of(sort_by, sort_direction)
        )
        views = await self._to_list_views(result.items)
        return views, PaginationMeta.of(page=page, size=size, total=result.total)

    async def find_by_id(self, invitation_id: str) -> InvitationDetailView:
        invitation = await self._get_invitation(invitation_id)
        project = await self.project_repo.get_by_id(invitation.project_id)
        return invitation_mapper.to_detail_view(invitation, project.name if project else None)

    async def find_for_invitee(self, user_id: str) -> list[InvitationListView]:
        """Pending invitations received by the user."""
        invitations = await self.invitation_repo.find_pending_for_invitee(user_id)
        return await self._to_list_views(invitations)

    async def find_sent(self, user_id: str) -> list[InvitationListView]:
        invitations = await self.invitation_repo.find_sent_by(user_id)
        return await self._to_list_views(invitations)

    async def respond(
        self, invitation_id: str, response: InvitationResponse, requestor_id: str
    ) -> InvitationDetailView:
        """Accept or reject an invitation as its invitee.

        Raises:
            NotFoundError: If the invitation or its project does not exist.
            ForbiddenError: If the requestor is not the invitee.
            BadRequestError: If the invitation is no longer pending or has expired.
        """
        with log_operation(
            logger,
            "invitation.respond",
            invitation_id=invitation_id,
            response=response.status.value,
            requestor_id=requestor_id,
        ):
            invitation = await self._get_invitation(invitation_id)
            if invitation.invitee_id != requestor_id:
                raise ForbiddenError("Only the invitee can respond to this invitation")
            if invitation.status != InvitationStatus.PENDING.value:
                raise BadRequestError(
                    f"Invitation has already been {invitation.status.lower()}"
                )
            if invitation.is_expired():
                raise BadRequestError("Invitation has expired")

            project = await self.project_repo.get_by_id(invitation.project_id)
            if project is None:
                raise NotFoundError(f"Project not found: {invitation.project_id}")

            invitation.status = response.status.value
            self._touch(invitation, requestor_id)
            self._sync_project(project, invitation, requestor_id)
            await self._commit()
        return invitation_mapper.to_detail_view(invitation, project.name)

    async def update(
        self, invitation_id: str, data: InvitationUpdate, requestor_id: str
    ) -> InvitationDetailView:
        """Change status or expiry as the inviter or the project owner.

        Raises:
            NotFoundError: If the invitation does not exist.
            ForbiddenError: If the requestor is neither inviter nor project owner.
            BadRequestError: If the update tries to accept on the invitee's behalf,
                changes the status of an invitation that is no longer pending,
                or sets an expiry that is not in the future.
        """
        with log_operation(
            logger, "invitation.update", invitation_id=invitation_id, requestor_id=requestor_id
        ) as outcome:
            invitation = await self._get_invitation(invitation_id)
            project = await self._authorize_manage(invitation, requestor_id)
            if data.status == InvitationStatus.ACCEPTED:
                raise BadRequestError("Only the invitee can accept an invitation")
            # Settled invitations are final; a new invitation must be sent instead.
            if (
                data.status is not None
                and data.status.value != invitation.status
                and invitation.status != InvitationStatus.PENDING.value
            ):
                raise BadRequestError(
                    f"Invitation has already been {invitation.status.lower()}"
                )
            if data.expires_at is not None:
                self._expiry(data.expires_at)

            outcome["fields"] = apply_update(invitation, data)
            self._touch(invitation, requestor_id)
            if project is not None:
                self._sync_project(project, invitation, requestor_id)
            await self._commit()
        return invitation_mapper.to_detail_view(invitation, project.name if project else None)

    async def delete(self, invitation_id: str, requestor_id: str) -> None:
        """Delete an invitation; a pending invitee leaves the invited set.

        Raises:
            NotFoundError: If the invitation does not exist.
            ForbiddenError: If the requestor is neither inviter nor project owner.
        """
        with log_operation(
            logger, "invitation.delete", invitation_id=invitation_id, requestor_id=requestor_id
        ):
            invitation = await self._get_invitation(invitation_id)
            project = await self._authorize_manage(invitation, requestor_id)
            if project is not None and invitation.status == InvitationStatus.PENDING.value:
                project.remove_invited_user(invitation.invitee_id)
                self._touch(project, requestor_id)
            await self.invitation_repo.delete(invitation)
            await self._commit()

    async def stats(self, project_id: str) -> InvitationStats:
        """Counts by status; PENDING invitations past expiry count as expired.

        Raises:
            NotFoundError: If the project does not exist.
        """
        await self._get_project(project_id)
        invitations = await self.invitation_repo.find_by_project(project_id)
        now = utc_now()
        counts = Counter(
            InvitationStatus.EXPIRED.value if i.is_expired(now) else i.status for i in invitations
        )
        return InvitationStats(
            total=len(invitations),
            pending=counts[InvitationStatus.PENDING.value],
            accepted=counts[InvitationStatus.ACCEPTED.value],
            rejected=counts[InvitationStatus.REJECTED.value],
            expired=counts[InvitationStatus.EXPIRED.value],
        )

    async def expire_overdue(self) -> int:
        """Mark overdue PENDING invitations as EXPIRED.

        Returns:
            Number of invitations expired
        """
        with log_operation(logger, "invitation.expire_overdue") as outcome:
            now = utc_now()
            overdue = await self.invitation_repo.find_overdue(now)
            projects = await self._load_projects(overdue)
            for invitation in overdue:
                invitation.status = InvitationStatus.EXPIRED.value
                invitation.updated_at = now
                project = projects.get(invitation.project_id)
                if project is not None:
                    project.remove_invited_user(invitation.invitee_id)
            await self._commit()
            outcome["expired"] = len(overdue)
        return len(overdue)

    async def _get_invitation(self, invitation_id: str) -> ProjectInvitation:
        validate_object_id(invitation_id, "invitation id")
        invitation = await self.invitation_repo.get_by_id(invitation_id)
        if invitation is None:
            raise NotFoundError(f"Invitation not found: {invitation_id}")
        return invitation

    async def _get_project(self, project_id: str) -> Project:
        validate_object_id(project_id, "project id")
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")
        return project

    async def _get_owned_project(self, project_id: str, requestor_id: str) -> Project:
        project = await self._get_project(project_id)
        if not project.is_owned_by(requestor_id):
            raise ForbiddenError("Only the project owner can invite users")
        return project

    async def _authorize_manage(
        self, invitation: ProjectInvitation, requestor_id: str
    ) -> Project | None:
        """Return the invitation's project if the requestor may manage the invitation."""
        project = await self.project_repo.get_by_id(invitation.project_id)
        is_owner = project is not None and project.is_owned_by(requestor_id)
        if invitation.inviter_id != requestor_id and not is_owner:
            raise ForbiddenError("Only the inviter or the project owner can manage this invitation")
        return project

    async def _resolve_invitee(self, data: InvitationCreate) -> User:
        if data.invitee_id is not None:
            validate_object_id(data.invitee_id, "invitee id")
            invitee = await self.user_repo.get_by_id(data.invitee_id)
            if invitee is None:
                raise NotFoundError(f"User not found: {data.invitee_id}")
            return invitee
        invitee = await self.user_repo.get_by_email(str(data.invitee_email))
        if invitee is None:
            raise NotFoundError(f"No user registered with email: {data.invitee_email}")
        return invitee

    async def _ensure_invitable(self, project: Project, invitee: User) -> None:
        if project.is_owned_by(invitee.id):
            raise ConflictError("The project owner cannot be invited")
        if invitee.id in project.member_ids:
            raise ConflictError(f"{invitee.email} is already a member of this project")
        pending = await self.invitation_repo.get_pending(project.id, invitee.id)
        if pending is not None:
            if not pending.is_expired():
                raise ConflictError(f"{invitee.email} already has a pending invitation")
            # Superseded by the new invitation.
            pending.status = InvitationStatus.EXPIRED.value
            pending.updated_at = utc_now()
            project.remove_invited_user(invitee.id)

    def _new_invitation(
        self, project: Project, invitee: User, expires_at: datetime, requestor_id: str
    ) -> ProjectInvitation:
        now = utc_now()
        invitation = ProjectInvitation(
            project_id=project.id,
            inviter_id=requestor_id,
            invitee_id=invitee.id,
            sent_at=now,
            expires_at=expires_at,
            status=InvitationStatus.PENDING.value,
            created_by=requestor_id,
            updated_by=requestor_id,
        )
        self.invitation_repo.add(invitation)
        project.add_invited_user(invitee.id)
        self._touch(project, requestor_id)
        return invitation

    @staticmethod
    def _expiry(expires_at: datetime | None) -> datetime:
        now = utc_now()
        if expires_at is None:
            return now + timedelta(days=get_settings().invite_expire_days)
        if expires_at <= now:
            raise BadRequestError("Invitation expiry must be in the future")
        return expires_at

    def _sync_project(
        self, project: Project, invitation: ProjectInvitation, requestor_id: str
    ) -> None:
        invitee_id = invitation.invitee_id
        if invitation.status == InvitationStatus.PENDING.value:
            project.add_invited_user(invitee_id)
        else:
            project.remove_invited_user(invitee_id)
            if invitation.status == InvitationStatus.ACCEPTED.value:
                project.add_member(invitee_id)
        self._touch(project, requestor_id)

    @staticmethod
    def _touch(entity: Project | ProjectInvitation, requestor_id: str) -> None:
        entity.updated_at = utc_now()
        entity.updated_by = requestor_id

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def _load_projects(self, invitations: list[ProjectInvitation]) -> dict[str, Project]:
        projects: dict[str, Project] = {}
        for project_id in {i.project_id for i in invitations}:
            project = await self.project_repo.get_by_id(project_id)
            if project is not None:
                projects[project_id] = project
        return projects

    async def _to_list_views(
        self, invitations: list[ProjectInvitation]
    ) -> list[InvitationListView]:
        projects = await self._load_projects(invitations)
        now = utc_now()
        return [
            invitation_mapper.to_list_view(
                i, projects[i.project_id].name if i.project_id in projects else None, now
            )
            for i in invitations
        ]
