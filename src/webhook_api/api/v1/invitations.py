"""Project invitation endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.webhook_api.api.dependencies import CurrentUserId, InvitationServiceDep
from src.webhook_api.models import InvitationStatus
from src.webhook_api.schemas.envelope import ApiResponse
from src.webhook_api.schemas.invitation import (
    BulkInvitationCreate,
    ExpiredCount,
    InvitationCreate,
    InvitationDetailView,
    InvitationListView,
    InvitationResponse,
    InvitationStats,
    InvitationUpdate,
)

router = APIRouter(prefix="/invitations", tags=["invitations"])


@router.get("", summary="Search invitations")
async def search_invitations(
    service: InvitationServiceDep,
    project_id: Annotated[str | None, Query(alias="projectId")] = None,
    inviter_id: Annotated[str | None, Query(alias="inviterId")] = None,
    invitee_id: Annotated[str | None, Query(alias="inviteeId")] = None,
    status_: Annotated[InvitationStatus | None, Query(alias="status")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    size: Annotated[int, Query(ge=1)] = 10,
    sort_by: Annotated[str, Query(alias="sortBy")] = "sentAt",
    sort_direction: Annotated[str, Query(alias="sortDirection")] = "desc",
) -> ApiResponse[list[InvitationListView]]:
    invitations, meta = await service.search(
        project_id=project_id,
        inviter_id=inviter_id,
        invitee_id=invitee_id,
        status=status_,
        page=page,
        size=size,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    return ApiResponse(data=invitations, meta=meta)


@router.get("/my", summary="Pending invitations received by the caller")
async def my_invitations(
    service: InvitationServiceDep, user_id: CurrentUserId
) -> ApiResponse[list[InvitationListView]]:
    return ApiResponse(data=await service.find_for_invitee(user_id))


@router.get("/sent", summary="Invitations sent by the caller")
async def sent_invitations(
    service: InvitationServiceDep, user_id: CurrentUserId
) -> ApiResponse[list[InvitationListView]]:
    return ApiResponse(data=await service.find_sent(user_id))


@router.get("/stats/{project_id}", summary="Invitation statistics for a project")
async def invitation_stats(
    project_id: str, service: InvitationServiceDep
) -> ApiResponse[InvitationStats]:
    return ApiResponse(data=await service.stats(project_id))


@router.post("/expire", summary="Expire overdue pending invitations")
async def expire_invitations(service: InvitationServiceDep) -> ApiResponse[ExpiredCount]:
    expired = await service.expire_overdue()
    return ApiResponse(message=f"{expired} invitation(s) expired", data=ExpiredCount(expired=expired))


@router.get("/{invitation_id}", summary="Get invitation")
async def get_invitation(
    invitation_id: str, service: InvitationServiceDep
) -> ApiResponse[InvitationDetailView]:
    return ApiResponse(data=await service.find_by_id(invitation_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Invite a user to a project",
    responses={
        403: {"description": "Caller does not own the project"},
        404: {"description": "Project or user not found"},
        409: {"description": "User is the owner, a member, or already invited"},
    },
)
async def create_invitation(
    data: InvitationCreate, service: InvitationServiceDep, user_id: CurrentUserId
) -> ApiResponse[InvitationDetailView]:
    invitation = await service.invite(data, user_id)
    return ApiResponse(message="Invitation sent", data=invitation)


@router.post(
    "/bulk",
    status_code=status.HTTP_201_CREATED,
    summary="Invite several users by email",
)
async def bulk_create_invitations(
    data: BulkInvitationCreate, service: InvitationServiceDep, user_id: CurrentUserId
) -> ApiResponse[list[InvitationListView]]:
    invitations = await service.bulk_invite(data, user_id)
    return ApiResponse(message=f"{len(invitations)} invitation(s) sent", data=invitations)


@router.put("/{invitation_id}", summary="Update invitation")
async def update_invitation(
    invitation_id: str,
    data: InvitationUpdate,
    service: InvitationServiceDep,
    user_id: CurrentUserId,
) -> ApiResponse[InvitationDetailView]:
    invitation = await service.update(invitation_id, data, user_id)
    return ApiResponse(message="Invitation updated", data=invitation)


@router.post(
    "/{invitation_id}/respond",
    summary="Accept or reject an invitation",
    responses={
        400: {"description": "Invitation is not pending or has expired"},
        403: {"description": "Caller is not the invitee"},
    },
)
async def respond_to_invitation(
    invitation_id: str,
    data: InvitationResponse,
    service: InvitationServiceDep,
    user_id: CurrentUserId,
) -> ApiResponse[InvitationDetailView]:
    invitation = await service.respond(invitation_id, data, user_id)
    return ApiResponse(message=f"Invitation {data.status.value.lower()}", data=invitation)


@router.delete("/{invitation_id}", summary="Delete invitation")
async def delete_invitation(
    invitation_id: str, service: InvitationServiceDep, user_id: CurrentUserId
) -> ApiResponse[None]:
    await service.delete(invitation_id, user_id)
    return ApiResponse(message="Invitation deleted")
