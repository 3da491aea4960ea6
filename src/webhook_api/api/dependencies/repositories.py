"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.webhook_api.api.dependencies.db import DBSession
from src.webhook_api.repositories import (
    ProjectInvitationRepository,
    ProjectRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_invitation_repository(session: DBSession) -> ProjectInvitationRepository:
    return ProjectInvitationRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
InvitationRepo = Annotated[ProjectInvitationRepository, Depends(get_invitation_repository)]
