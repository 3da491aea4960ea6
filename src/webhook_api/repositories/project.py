"""Repository for Project entity."""

from sqlmodel import select

from src.webhook_api.models import Project, ProjectStatus, ProjectType, ProjectVisibility
from src.webhook_api.repositories.base import BaseRepository
from src.webhook_api.repositories.query import (
    AnyOf,
    ArrayContains,
    Criteria,
    Eq,
    Page,
    PageRequest,
    SortSpec,
)


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project
    sortable_fields = {
        "id": Project.id,
        "name": Project.name,
        "status": Project.status,
        "visibility": Project.visibility,
        "type": Project.type,
        "owner_id": Project.owner_id,
        "created_at": Project.created_at,
        "updated_at": Project.updated_at,
    }

    @staticmethod
    def build_criteria(
        name: str | None = None,
        status: ProjectStatus | None = None,
        visibility: ProjectVisibility | None = None,
        type: ProjectType | None = None,
        owner_id: str | None = None,
    ) -> Criteria:
        """Conjunctive project filter; absent or blank criteria are omitted.

        ``name`` matches as a case-sensitive substring, ``owner_id`` exactly.
        """
        return (
            Criteria()
            .contains_if_present(Project.name, name)
            .eq_if_present(Project.status, status.value if status else None)
            .eq_if_present(Project.visibility, visibility.value if visibility else None)
            .eq_if_present(Project.type, type.value if type else None)
            .eq_if_not_blank(Project.owner_id, owner_id)
        )

    async def search_projects(
        self,
        *,
        name: str | None = None,
        status: ProjectStatus | None = None,
        visibility: ProjectVisibility | None = None,
        type: ProjectType | None = None,
        owner_id: str | None = None,
        page: PageRequest,
        sort: SortSpec,
    ) -> Page[Project]:
        criteria = self.build_criteria(name, status, visibility, type, owner_id)
        return await self.search(criteria, page, sort)

    async def get_by_name(self, name: str) -> Project | None:
        """Get project by name."""
        result = await self.session.execute(select(Project).where(Project.name == name))
        return result.scalar_one_or_none()

    async def exists_by_name(self, name: str) -> bool:
        return await self.count(Criteria(Eq(Project.name, name))) > 0

    async def exists_by_name_excluding(self, name: str, project_id: str) -> bool:
        """Whether a project other than ``project_id`` uses ``name``."""
        project = await self.get_by_name(name)
        return project is not None and project.id != project_id

    async def find_by_owner(self, owner_id: str) -> list[Project]:
        return await self.find_all(
            Criteria(Eq(Project.owner_id, owner_id)), SortSpec.of("created_at", "desc")
        )

    async def find_accessible(self, user_id: str) -> list[Project]:
        """Projects the user owns, is a member of, or that are public."""
        criteria = Criteria(
            AnyOf(
                Eq(Project.owner_id, user_id),
                ArrayContains(Project.member_ids, user_id),
                Eq(Project.visibility, ProjectVisibility.PUBLIC.value),
            )
        )
        return await self.find_all(criteria, SortSpec.of("created_at", "desc"))
