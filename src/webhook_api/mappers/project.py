from collections.abc import Mapping

from src.webhook_api.mappers import user as user_mapper
from src.webhook_api.models import (
    Project,
    ProjectStatus,
    ProjectType,
    ProjectVisibility,
    User,
)
from src.webhook_api.schemas.project import ProjectCreate, ProjectDetailView, ProjectListView


def to_list_view(project: Project, owner: User | None = None) -> ProjectListView:
    """Listing row. Owner names are None when the owner is not a known user."""
    project_type = ProjectType(project.type)
    return ProjectListView(
        id=project.id,
        name=project.name,
        description=project.description,
        status=ProjectStatus(project.status),
        visibility=ProjectVisibility(project.visibility),
        type=project_type,
        type_display_name=project_type.display_name,
        avatar_url=project.avatar_url,
        owner_id=project.owner_id,
        owner_first_name=owner.first_name if owner else None,
        owner_last_name=owner.last_name if owner else None,
        member_count=project.member_count,
        created_at=project.created_at,
        updated_at=project.updated_at,
    )


def to_detail_view(project: Project, users: Mapping[str, User]) -> ProjectDetailView:
    """Detail view; ``users`` holds every known user referenced by the project.

    Dangling member or invitee references are skipped.
    """
    owner = users.get(project.owner_id)
    return ProjectDetailView(
        **to_list_view(project, owner).model_dump(),
        owner=user_mapper.to_summary(owner) if owner else None,
        members=[user_mapper.to_summary(users[uid]) for uid in project.member_ids if uid in users],
        invited_users=[
            user_mapper.to_summary(users[uid]) for uid in project.invited_user_ids if uid in users
        ],
        created_by=project.created_by,
        updated_by=project.updated_by,
    )


def referenced_user_ids(project: Project) -> list[str]:
    return [project.owner_id, *project.member_ids, *project.invited_user_ids]


def from_create(data: ProjectCreate, requestor_id: str) -> Project:
    """Build a new project owned by the requestor with defaults applied."""
    return Project(
        name=data.name,
        description=data.description,
        avatar_url=data.avatar_url,
        status=(data.status or ProjectStatus.DRAFT).value,
        visibility=(data.visibility or ProjectVisibility.PRIVATE).value,
        type=data.type.value,
        owner_id=requestor_id,
        member_ids=[],
        invited_user_ids=[],
        created_by=requestor_id,
        updated_by=requestor_id,
    )
