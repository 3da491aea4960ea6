"""Base repository with common CRUD and search operations."""

from collections.abc import Mapping
from typing import Any, ClassVar

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.webhook_api.repositories.query import Criteria, Page, PageRequest, SortSpec


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]
    # snake_case field name -> column; the only fields accepted for sorting
    sortable_fields: ClassVar[Mapping[str, Any]] = {}

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: str) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        """Mark entity for deletion (no commit)."""
        await self.session.delete(entity)

    async def find_all(
        self, criteria: Criteria | None = None, sort: SortSpec | None = None
    ) -> list[ModelType]:
        """All records matching the criteria, unpaginated."""
        query = select(self.model)
        if criteria is not None:
            query = criteria.apply(query)
        if sort is not None:
            query = query.order_by(*self._order_by(sort))
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, criteria: Criteria | None = None) -> int:
        """Number of records matching the criteria."""
        query = select(func.count()).select_from(self.model)
        if criteria is not None:
            query = criteria.apply(query)
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def search(
        self, criteria: Criteria, page: PageRequest, sort: SortSpec
    ) -> Page[ModelType]:
        """One sorted page of matching records plus the total match count.

        The page and the count are separate reads and may disagree under
        concurrent writes.

        Raises:
            BadRequestError: If the sort field is not sortable.
        """
        order_by = self._order_by(sort)
        query = page.apply(criteria.apply(select(self.model)).order_by(*order_by))
        result = await self.session.execute(query)
        items = list(result.scalars().all())
        total = await self.count(criteria)
        return Page(items=items, total=total)

    def _order_by(self, sort: SortSpec) -> list[Any]:
        return sort.order_by(self.sortable_fields, tie_breaker=self.model.id)  # type: ignore[attr-defined]
