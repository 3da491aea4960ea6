from src.webhook_api.models import User, UserRole
from src.webhook_api.schemas.user import (
    UserCreate,
    UserDetailView,
    UserListView,
    UserSummary,
)


def to_summary(user: User) -> UserSummary:
    return UserSummary(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
    )


def to_list_view(user: User) -> UserListView:
    return UserListView(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        role=UserRole(user.role),
        active=user.active,
    )


def to_detail_view(user: User) -> UserDetailView:
    return UserDetailView(
        **to_list_view(user).model_dump(),
        created_at=user.created_at,
        updated_at=user.updated_at,
        created_by=user.created_by,
        updated_by=user.updated_by,
    )


def from_create(data: UserCreate, hashed_password: str, requestor_id: str) -> User:
    """Build a new user; the plain password never reaches the entity."""
    return User(
        first_name=data.first_name,
        last_name=data.last_name,
        email=str(data.email),
        hashed_password=hashed_password,
        role=data.role.value,
        created_by=requestor_id,
        updated_by=requestor_id,
    )
