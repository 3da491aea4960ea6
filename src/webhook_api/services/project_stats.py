"""Per-owner project statistics."""

from collections import Counter
from collections.abc import Iterable

from src.webhook_api.models import Project, ProjectStatus
from src.webhook_api.repositories import ProjectRepository
from src.webhook_api.schemas.project import ProjectStats


def compute_project_stats(projects: Iterable[Project]) -> ProjectStats:
    """Count projects by status. ARCHIVED counts toward the total only."""
    counts = Counter(project.status for project in projects)
    return ProjectStats(
        total_projects=sum(counts.values()),
        active_projects=counts[ProjectStatus.ACTIVE.value],
        draft_projects=counts[ProjectStatus.DRAFT.value],
        completed_projects=counts[ProjectStatus.COMPLETED.value],
    )


class ProjectStatsAggregator:
    """Loads every project of an owner and counts them in memory.

    Cost is linear in the number of projects owned; nothing is cached, so
    each call is a snapshot.
    """

    def __init__(self, project_repo: ProjectRepository):
        self.project_repo = project_repo

    async def stats(self, owner_id: str) -> ProjectStats:
        projects = await self.project_repo.find_by_owner(owner_id)
        return compute_project_stats(projects)
