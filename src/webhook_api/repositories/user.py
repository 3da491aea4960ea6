"""Repository for User entity."""

from sqlmodel import select

from src.webhook_api.models import User
from src.webhook_api.repositories.base import BaseRepository
from src.webhook_api.repositories.query import Criteria, Eq


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    model = User
    sortable_fields = {
        "id": User.id,
        "first_name": User.first_name,
        "last_name": User.last_name,
        "email": User.email,
        "role": User.role,
        "created_at": User.created_at,
        "updated_at": User.updated_at,
    }

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with the given email exists."""
        user = await self.get_by_email(email)
        return user is not None

    async def get_many(self, ids: list[str]) -> dict[str, User]:
        """Load users by id, keyed by id. Unknown ids are absent from the result."""
        if not ids:
            return {}
        result = await self.session.execute(
            select(User).where(User.id.in_(set(ids)))  # type: ignore[attr-defined]
        )
        return {user.id: user for user in result.scalars().all()}

    async def get_many_by_email(self, emails: list[str]) -> dict[str, User]:
        """Load users by email, keyed by email."""
        if not emails:
            return {}
        result = await self.session.execute(
            select(User).where(User.email.in_(set(emails)))  # type: ignore[attr-defined]
        )
        return {user.email: user for user in result.scalars().all()}

    async def count_active(self) -> int:
        return await self.count(Criteria(Eq(User.active, True)))
