"""User service."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.webhook_api.core.errors import BadRequestError, ConflictError, NotFoundError
from src.webhook_api.core.logging import get_logger, log_operation
from src.webhook_api.core.security import hash_password, validate_object_id
from src.webhook_api.mappers import apply_update
from src.webhook_api.mappers import user as user_mapper
from src.webhook_api.models import User
from src.webhook_api.models.base import utc_now
from src.webhook_api.repositories import UserRepository
from src.webhook_api.repositories.query import Criteria, SortSpec
from src.webhook_api.schemas.envelope import PaginationMeta
from src.webhook_api.schemas.user import (
    UserCreate,
    UserDetailView,
    UserListView,
    UserStats,
    UserUpdate,
)
from src.webhook_api.services.pagination import to_page_request

logger = get_logger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    async def list_users(
        self,
        page: int = 1,
        size: int = 10,
        sort_by: str = "createdAt",
        sort_direction: str | None = "desc",
    ) -> tuple[list[UserListView], PaginationMeta]:
        page_request = to_page_request(page, size)
        result = await self.user_repo.search(
            Criteria(), page_request, SortSpec.of(sort_by, sort_direction)
        )
        views = [user_mapper.to_list_view(user) for user in result.items]
        return views, PaginationMeta.of(page=page, size=size, total=result.total)

    async def find_by_id(self, user_id: str) -> UserDetailView:
        user = await self._get_user(user_id)
        return user_mapper.to_detail_view(user)

    async def create(self, data: UserCreate, requestor_id: str) -> UserDetailView:
        """Create a user with an Argon2 password hash.

        Raises:
            ConflictError: If the email is already registered.
        """
        email = str(data.email)
        with log_operation(logger, "user.create", requestor_id=requestor_id) as outcome:
            if await self.user_repo.exists_by_email(email):
                raise ConflictError(f"Email already registered: {email}")

            user = user_mapper.from_create(data, hash_password(data.password), requestor_id)
            self.user_repo.add(user)
            await self._commit(f"Email already registered: {email}")
            outcome["user_id"] = user.id
        return user_mapper.to_detail_view(user)

    async def update(self, user_id: str, data: UserUpdate, requestor_id: str) -> UserDetailView:
        """Apply the present fields of ``data``.

        Raises:
            NotFoundError: If the user does not exist.
            ConflictError: If the new email belongs to another user.
        """
        with log_operation(
            logger, "user.update", user_id=user_id, requestor_id=requestor_id
        ) as outcome:
            user = await self._get_user(user_id)

            if data.email is not None and str(data.email) != user.email:
                other = await self.user_repo.get_by_email(str(data.email))
                if other is not None and other.id != user.id:
                    raise ConflictError(f"Email already registered: {data.email}")

            outcome["fields"] = apply_update(user, data)
            user.updated_at = utc_now()
            user.updated_by = requestor_id
            await self._commit(f"Email already registered: {user.email}")
        return user_mapper.to_detail_view(user)

    async def delete(self, user_id: str, requestor_id: str) -> None:
        """Delete a user. Project and invitation references are left as is."""
        with log_operation(logger, "user.delete", user_id=user_id, requestor_id=requestor_id):
            user = await self._get_user(user_id)
            await self.user_repo.delete(user)
            await self._commit()

    async def is_email_available(self, email: str) -> bool:
        email = email.strip()
        if not email:
            raise BadRequestError("Email must not be blank")
        return not await self.user_repo.exists_by_email(email)

    async def stats(self) -> UserStats:
        return UserStats(active_users_count=await self.user_repo.count_active())

    async def _get_user(self, user_id: str) -> User:
        validate_object_id(user_id, "user id")
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}")
        return user

    async def _commit(self, conflict_message: str = "Conflicting user data") -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(conflict_message) from e
        except Exception:
            await self.session.rollback()
            raise
