"""FastAPI dependency injection definitions."""

from src.webhook_api.api.dependencies.db import DBSession, get_db_session
from src.webhook_api.api.dependencies.principal import (
    CurrentUserId,
    PlaceholderPrincipalResolver,
    PrincipalResolver,
    get_current_user_id,
    get_principal_resolver,
)
from src.webhook_api.api.dependencies.repositories import (
    InvitationRepo,
    ProjectRepo,
    UserRepo,
    get_invitation_repository,
    get_project_repository,
    get_user_repository,
)
from src.webhook_api.api.dependencies.services import (
    InvitationServiceDep,
    ProjectServiceDep,
    UserServiceDep,
    get_invitation_service,
    get_project_service,
    get_user_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Principal
    "CurrentUserId",
    "PlaceholderPrincipalResolver",
    "PrincipalResolver",
    "get_current_user_id",
    "get_principal_resolver",
    # Repositories
    "InvitationRepo",
    "ProjectRepo",
    "UserRepo",
    "get_invitation_repository",
    "get_project_repository",
    "get_user_repository",
    # Services
    "InvitationServiceDep",
    "ProjectServiceDep",
    "UserServiceDep",
    "get_invitation_service",
    "get_project_service",
    "get_user_service",
]
