"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.webhook_api.api.dependencies.db import DBSession
from src.webhook_api.api.dependencies.repositories import InvitationRepo, ProjectRepo, UserRepo
from src.webhook_api.services import InvitationService, ProjectService, UserService


def get_user_service(user_repo: UserRepo, session: DBSession) -> UserService:
    """Get user service."""
    return UserService(user_repo, session)


def get_project_service(
    project_repo: ProjectRepo,
    user_repo: UserRepo,
    invitation_repo: InvitationRepo,
    session: DBSession,
) -> ProjectService:
    """Get project service."""
    return ProjectService(project_repo, user_repo, invitation_repo, session)


def get_invitation_service(
    invitation_repo: InvitationRepo,
    project_repo: ProjectRepo,
    user_repo: UserRepo,
    session: DBSession,
) -> InvitationService:
    """Get invitation service."""
    return InvitationService(invitation_repo, project_repo, user_repo, session)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
InvitationServiceDep = Annotated[InvitationService, Depends(get_invitation_service)]
