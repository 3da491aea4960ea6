"""Project service - search, ownership-gated mutations and statistics."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.webhook_api.core.errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from src.webhook_api.core.logging import get_logger, log_operation
from src.webhook_api.core.security import validate_object_id
from src.webhook_api.mappers import apply_update
from src.webhook_api.mappers import project as project_mapper
from src.webhook_api.models import (
    Project,
    ProjectStatus,
    ProjectType,
    ProjectVisibility,
)
from src.webhook_api.models.base import utc_now
from src.webhook_api.repositories import (
    ProjectInvitationRepository,
    ProjectRepository,
    UserRepository,
)
from src.webhook_api.repositories.query import SortSpec
from src.webhook_api.schemas.envelope import PaginationMeta
from src.webhook_api.schemas.project import (
    ProjectCreate,
    ProjectDetailView,
    ProjectListView,
    ProjectStats,
    ProjectUpdate,
)
from src.webhook_api.services.pagination import to_page_request
from src.webhook_api.services.project_stats import ProjectStatsAggregator

logger = get_logger(__name__)


class ProjectService:
    """Service for project operations.

    Only the owner may update, delete or change the status of a project.
    Name uniqueness is checked up front and enforced again by the unique
    constraint at commit time.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
        invitation_repo: ProjectInvitationRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.user_repo = user_repo
        self.invitation_repo = invitation_repo
        self.session = session
        self.stats_aggregator = ProjectStatsAggregator(project_repo)

    async def search(
        self,
        *,
        name: str | None = None,
        status: ProjectStatus | None = None,
        visibility: ProjectVisibility | None = None,
        type: ProjectType | None = None,
        owner_id: str | None = None,
        page: int = 1,
        size: int = 10,
        sort_by: str = "name",
        sort_direction: str | None = "asc",
    ) -> tuple[list[ProjectListView], PaginationMeta]:
        """Filtered, sorted, paginated project search with 1-based ``page``.

        Raises:
            BadRequestError: If paging is out of range or the sort field is unknown.
        """
        page_request = to_page_request(page, size)
        with log_operation(
            logger, "project.search", name=name, owner_id=owner_id, page=page, size=size
        ) as outcome:
            result = await self.project_repo.search_projects(
                name=name,
                status=status,
                visibility=visibility,
                type=type,
                owner_id=owner_id,
                page=page_request,
                sort=SortSpec.of(sort_by, sort_direction),
            )
            outcome["total"] = result.total
        views = await self._to_list_views(result.items)
        return views, PaginationMeta.of(page=page, size=size, total=result.total)

    async def find_by_id(self, project_id: str) -> ProjectDetailView:
        """Get a project detail view.

        Raises:
            BadRequestError: If the id is malformed.
            NotFoundError: If no project has this id.
        """
        project = await self._get_project(project_id)
        return await self._to_detail_view(project)

    async def create(self, data: ProjectCreate, requestor_id: str) -> ProjectDetailView:
        """Create a project owned by the requestor.

        Raises:
            ConflictError: If the name is already in use.
        """
        with log_operation(
            logger, "project.create", name=data.name, requestor_id=requestor_id
        ) as outcome:
            if await self.project_repo.exists_by_name(data.name):
                raise ConflictError(f"A project named '{data.name}' already exists")

            project = project_mapper.from_create(data, requestor_id)
            self.project_repo.add(project)
            await self._commit(f"A project named '{data.name}' already exists")
            outcome["project_id"] = project.id
        return await self._to_detail_view(project)

    async def update(
        self, project_id: str, data: ProjectUpdate, requestor_id: str
    ) -> ProjectDetailView:
        """Apply the present fields of ``data``.

        Raises:
            NotFoundError: If the project does not exist.
            ForbiddenError: If the requestor is not the owner.
            ConflictError: If the new name belongs to another project.
        """
        with log_operation(
            logger, "project.update", project_id=project_id, requestor_id=requestor_id
        ) as outcome:
            project = await self._get_owned_project(project_id, requestor_id)

            if data.name is not None and data.name != project.name:
                if await self.project_repo.exists_by_name_excluding(data.name, project.id):
                    raise ConflictError(f"A project named '{data.name}' already exists")

            outcome["fields"] = apply_update(project, data)
            self._touch(project, requestor_id)
            await self._commit(f"A project named '{project.name}' already exists")
        return await self._to_detail_view(project)

    async def change_status(
        self, project_id: str, status: ProjectStatus, requestor_id: str
    ) -> ProjectDetailView:
        """Overwrite the status; any status may follow any other.

        Raises:
            NotFoundError: If the project does not exist.
            ForbiddenError: If the requestor is not the owner.
        """
        with log_operation(
            logger,
            "project.change_status",
            project_id=project_id,
            status=status.value,
            requestor_id=requestor_id,
        ):
            project = await self._get_owned_project(project_id, requestor_id)
            project.status = status.value
            self._touch(project, requestor_id)
            await self._commit()
        return await self._to_detail_view(project)

    async def delete(self, project_id: str, requestor_id: str) -> None:
        """Physically delete a project together with its invitations.

        Raises:
            NotFoundError: If the project does not exist.
            ForbiddenError: If the requestor is not the owner.
        """
        with log_operation(
            logger, "project.delete", project_id=project_id, requestor_id=requestor_id
        ) as outcome:
            project = await self._get_owned_project(project_id, requestor_id)
            outcome["invitations_deleted"] = await self.invitation_repo.delete_by_project(
                project.id
            )
            await self.project_repo.delete(project)
            await self._commit()

    async def find_by_owner(self, owner_id: str) -> list[ProjectListView]:
        projects = await self.project_repo.find_by_owner(owner_id)
        return await self._to_list_views(projects)

    async def find_accessible(self, user_id: str) -> list[ProjectListView]:
        """Projects the user owns, is a member of, or that are public."""
        projects = await self.project_repo.find_accessible(user_id)
        return await self._to_list_views(projects)

    async def stats(self, owner_id: str) -> ProjectStats:
        return await self.stats_aggregator.stats(owner_id)

    async def is_name_available(self, name: str) -> bool:
        """Raises BadRequestError for a blank name."""
        name = name.strip()
        if not name:
            raise BadRequestError("Project name must not be blank")
        return not await self.project_repo.exists_by_name(name)

    async def _get_project(self, project_id: str) -> Project:
        validate_object_id(project_id, "project id")
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")
        return project

    async def _get_owned_project(self, project_id: str, requestor_id: str) -> Project:
        project = await self._get_project(project_id)
        if not project.is_owned_by(requestor_id):
            raise ForbiddenError("Only the project owner can modify this project")
        return project

    @staticmethod
    def _touch(project: Project, requestor_id: str) -> None:
        project.updated_at = utc_now()
        project.updated_by = requestor_id

    async def _commit(self, conflict_message: str = "Conflicting project data") -> None:
        """Commit, mapping unique-constraint violations to ConflictError."""
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(conflict_message) from e
        except Exception:
            await self.session.rollback()
            raise

    async def _to_list_views(self, projects: list[Project]) -> list[ProjectListView]:
        owners = await self.user_repo.get_many([p.owner_id for p in projects])
        return [project_mapper.to_list_view(p, owners.get(p.owner_id)) for p in projects]

    async def _to_detail_view(self, project: Project) -> ProjectDetailView:
        users = await self.user_repo.get_many(project_mapper.referenced_user_ids(project))
        return project_mapper.to_detail_view(project, users)
