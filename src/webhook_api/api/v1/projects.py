"""Project endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.webhook_api.api.dependencies import CurrentUserId, ProjectServiceDep
from src.webhook_api.models import ProjectStatus, ProjectType, ProjectVisibility
from src.webhook_api.schemas.envelope import ApiResponse, Availability
from src.webhook_api.schemas.project import (
    ProjectCreate,
    ProjectDetailView,
    ProjectListView,
    ProjectStats,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    summary="Search projects",
    description=(
        "Filter by name substring (case-sensitive), status, visibility, type and owner. "
        "Pages are 1-based; size is capped at 100."
    ),
    responses={400: {"description": "Invalid paging or sort field"}},
)
async def search_projects(
    service: ProjectServiceDep,
    name: Annotated[str | None, Query(description="Substring of the project name")] = None,
    status_: Annotated[ProjectStatus | None, Query(alias="status")] = None,
    visibility: ProjectVisibility | None = None,
    type_: Annotated[ProjectType | None, Query(alias="type")] = None,
    owner_id: Annotated[str | None, Query(alias="ownerId")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    size: Annotated[int, Query(ge=1)] = 10,
    sort_by: Annotated[str, Query(alias="sortBy")] = "name",
    sort_direction: Annotated[str, Query(alias="sortDirection")] = "asc",
) -> ApiResponse[list[ProjectListView]]:
    projects, meta = await service.search(
        name=name,
        status=status_,
        visibility=visibility,
        type=type_,
        owner_id=owner_id,
        page=page,
        size=size,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    return ApiResponse(data=projects, meta=meta)


@router.get("/check-name", summary="Check project name availability")
async def check_name(
    service: ProjectServiceDep,
    name: Annotated[str, Query(min_length=1)],
) -> ApiResponse[Availability]:
    available = await service.is_name_available(name)
    return ApiResponse(data=Availability(available=available))


@router.get("/my", summary="Projects owned by the caller")
async def my_projects(
    service: ProjectServiceDep, user_id: CurrentUserId
) -> ApiResponse[list[ProjectListView]]:
    return ApiResponse(data=await service.find_by_owner(user_id))


@router.get("/my/stats", summary="Project statistics for the caller")
async def my_stats(service: ProjectServiceDep, user_id: CurrentUserId) -> ApiResponse[ProjectStats]:
    return ApiResponse(data=await service.stats(user_id))


@router.get("/accessible", summary="Projects the caller owns, belongs to, or that are public")
async def accessible_projects(
    service: ProjectServiceDep, user_id: CurrentUserId
) -> ApiResponse[list[ProjectListView]]:
    return ApiResponse(data=await service.find_accessible(user_id))


@router.get("/stats/{owner_id}", summary="Project statistics for an owner")
async def owner_stats(owner_id: str, service: ProjectServiceDep) -> ApiResponse[ProjectStats]:
    return ApiResponse(data=await service.stats(owner_id))


@router.get("/owner/{owner_id}", summary="Projects owned by a user")
async def owner_projects(
    owner_id: str, service: ProjectServiceDep
) -> ApiResponse[list[ProjectListView]]:
    return ApiResponse(data=await service.find_by_owner(owner_id))


@router.get(
    "/{project_id}",
    summary="Get project",
    responses={
        400: {"description": "Malformed project id"},
        404: {"description": "Project not found"},
    },
)
async def get_project(project_id: str, service: ProjectServiceDep) -> ApiResponse[ProjectDetailView]:
    return ApiResponse(data=await service.find_by_id(project_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        400: {"description": "Validation error"},
        409: {"description": "Project name already in use"},
    },
)
async def create_project(
    data: ProjectCreate, service: ProjectServiceDep, user_id: CurrentUserId
) -> ApiResponse[ProjectDetailView]:
    project = await service.create(data, user_id)
    return ApiResponse(message="Project created", data=project)


@router.put(
    "/{project_id}",
    summary="Update project",
    description="Partial update: absent or null fields are left unchanged.",
    responses={
        403: {"description": "Caller is not the owner"},
        404: {"description": "Project not found"},
        409: {"description": "Project name already in use"},
    },
)
async def update_project(
    project_id: str,
    data: ProjectUpdate,
    service: ProjectServiceDep,
    user_id: CurrentUserId,
) -> ApiResponse[ProjectDetailView]:
    project = await service.update(project_id, data, user_id)
    return ApiResponse(message="Project updated", data=project)


@router.put(
    "/{project_id}/status",
    summary="Change project status",
    responses={
        400: {"description": "Missing or invalid status"},
        403: {"description": "Caller is not the owner"},
        404: {"description": "Project not found"},
    },
)
async def change_project_status(
    project_id: str,
    status_: Annotated[ProjectStatus, Query(alias="status")],
    service: ProjectServiceDep,
    user_id: CurrentUserId,
) -> ApiResponse[ProjectDetailView]:
    project = await service.change_status(project_id, status_, user_id)
    return ApiResponse(message="Project status updated", data=project)


@router.delete(
    "/{project_id}",
    summary="Delete project",
    responses={
        403: {"description": "Caller is not the owner"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: str, service: ProjectServiceDep, user_id: CurrentUserId
) -> ApiResponse[None]:
    await service.delete(project_id, user_id)
    return ApiResponse(message="Project deleted")
