"""User management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.webhook_api.api.dependencies import CurrentUserId, UserServiceDep
from src.webhook_api.schemas.envelope import ApiResponse, Availability
from src.webhook_api.schemas.user import (
    UserCreate,
    UserDetailView,
    UserListView,
    UserStats,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    summary="List users",
    responses={400: {"description": "Invalid paging or sort field"}},
)
async def list_users(
    service: UserServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    size: Annotated[int, Query(ge=1)] = 10,
    sort_by: Annotated[str, Query(alias="sortBy")] = "createdAt",
    sort_direction: Annotated[str, Query(alias="sortDirection")] = "desc",
) -> ApiResponse[list[UserListView]]:
    users, meta = await service.list_users(
        page=page, size=size, sort_by=sort_by, sort_direction=sort_direction
    )
    return ApiResponse(data=users, meta=meta)


@router.get("/check-email", summary="Check email availability")
async def check_email(
    service: UserServiceDep,
    email: Annotated[str, Query(min_length=1)],
) -> ApiResponse[Availability]:
    return ApiResponse(data=Availability(available=await service.is_email_available(email)))


@router.get("/stats", summary="User statistics")
async def user_stats(service: UserServiceDep) -> ApiResponse[UserStats]:
    return ApiResponse(data=await service.stats())


@router.get("/{user_id}", summary="Get user")
async def get_user(user_id: str, service: UserServiceDep) -> ApiResponse[UserDetailView]:
    return ApiResponse(data=await service.find_by_id(user_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    responses={409: {"description": "Email already registered"}},
)
async def create_user(
    data: UserCreate, service: UserServiceDep, requestor_id: CurrentUserId
) -> ApiResponse[UserDetailView]:
    user = await service.create(data, requestor_id)
    return ApiResponse(message="User created", data=user)


@router.put("/{user_id}", summary="Update user")
async def update_user(
    user_id: str,
    data: UserUpdate,
    service: UserServiceDep,
    requestor_id: CurrentUserId,
) -> ApiResponse[UserDetailView]:
    user = await service.update(user_id, data, requestor_id)
    return ApiResponse(message="User updated", data=user)


@router.delete("/{user_id}", summary="Delete user")
async def delete_user(
    user_id: str, service: UserServiceDep, requestor_id: CurrentUserId
) -> ApiResponse[None]:
    await service.delete(user_id, requestor_id)
    return ApiResponse(message="User deleted")
