"""Typed query building for filtered, sorted and paginated searches.

Filters are composed from clause objects and translated into SQLAlchemy
expressions, so every value reaches the database as a bound parameter.

    criteria = (
        Criteria()
        .contains_if_present(Project.name, name)
        .eq_if_present(Project.status, status)
    )
    query = criteria.apply(select(Project))
"""

import json
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Self

from sqlalchemy import Integer, String, and_, cast, or_
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.functions import GenericFunction

from src.webhook_api.core.errors import BadRequestError


class strpos(GenericFunction):
    """1-based position of a substring, 0 when absent. Case-sensitive."""

    type = Integer()
    inherit_cache = True


@compiles(strpos, "sqlite")
def _compile_strpos_sqlite(element: strpos, compiler: Any, **kw: Any) -> str:
    # LIKE is case-insensitive on SQLite; instr is not.
    return "instr(%s)" % compiler.process(element.clauses, **kw)


class Clause(ABC):
    """A single filter condition."""

    @abstractmethod
    def to_expression(self) -> ColumnElement[bool]: ...


@dataclass(frozen=True, eq=False)
class Eq(Clause):
    column: Any
    value: Any

    def to_expression(self) -> ColumnElement[bool]:
        return self.column == self.value


@dataclass(frozen=True, eq=False)
class Contains(Clause):
    """Case-sensitive substring match anywhere in the column."""

    column: Any
    substring: str

    def to_expression(self) -> ColumnElement[bool]:
        return strpos(self.column, self.substring) > 0


@dataclass(frozen=True, eq=False)
class Range(Clause):
    """Bounded range: lower bound inclusive, upper bound exclusive.

    Either bound may be omitted.
    """

    column: Any
    lower: Any = None
    upper: Any = None

    def to_expression(self) -> ColumnElement[bool]:
        conditions = []
        if self.lower is not None:
            conditions.append(self.column >= self.lower)
        if self.upper is not None:
            conditions.append(self.column < self.upper)
        if not conditions:
            raise ValueError("Range requires at least one bound")
        return and_(*conditions)


@dataclass(frozen=True, eq=False)
class ArrayContains(Clause):
    """Membership of a string value in a JSON array column."""

    column: Any
    value: str

    def to_expression(self) -> ColumnElement[bool]:
        return strpos(cast(self.column, String), json.dumps(self.value)) > 0


@dataclass(frozen=True, eq=False, init=False)
class AnyOf(Clause):
    """Disjunction of clauses."""

    clauses: tuple[Clause, ...]

    def __init__(self, *clauses: Clause):
        if not clauses:
            raise ValueError("AnyOf requires at least one clause")
        object.__setattr__(self, "clauses", clauses)

    def to_expression(self) -> ColumnElement[bool]:
        return or_(*(clause.to_expression() for clause in self.clauses))


def _strip_or_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


class Criteria:
    """Conjunction of clauses. Absent criteria are skipped, never matched as empty."""

    def __init__(self, *clauses: Clause):
        self._clauses: list[Clause] = list(clauses)

    @property
    def clauses(self) -> tuple[Clause, ...]:
        return tuple(self._clauses)

    def __len__(self) -> int:
        return len(self._clauses)

    def add(self, clause: Clause) -> Self:
        self._clauses.append(clause)
        return self

    def eq_if_present(self, column: Any, value: Any) -> Self:
        if value is not None:
            self._clauses.append(Eq(column, value))
        return self

    def eq_if_not_blank(self, column: Any, value: str | None) -> Self:
        stripped = _strip_or_none(value)
        if stripped is not None:
            self._clauses.append(Eq(column, stripped))
        return self

    def contains_if_present(self, column: Any, value: str | None) -> Self:
        stripped = _strip_or_none(value)
        if stripped is not None:
            self._clauses.append(Contains(column, stripped))
        return self

    def to_expression(self) -> ColumnElement[bool] | None:
        if not self._clauses:
            return None
        return and_(*(clause.to_expression() for clause in self._clauses))

    def apply(self, query: Any) -> Any:
        expression = self.to_expression()
        return query if expression is None else query.where(expression)


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


@dataclass(frozen=True)
class SortSpec:
    """Sort field and direction.

    ``direction`` is "desc" (any case) for descending; anything else,
    including None, sorts ascending.
    """

    field: str
    descending: bool = False

    @classmethod
    def of(cls, field: str, direction: str | None = None) -> "SortSpec":
        descending = direction is not None and direction.strip().lower() == "desc"
        return cls(field=field, descending=descending)

    def resolve(self, sortable: Mapping[str, Any]) -> Any:
        """Look up the column to order by.

        Accepts the camelCase wire name or the snake_case column name.

        Raises:
            BadRequestError: If the field is not sortable.
        """
        column = sortable.get(self.field)
        if column is None:
            column = sortable.get(to_snake_case(self.field))
        if column is None:
            allowed = ", ".join(sorted(sortable))
            raise BadRequestError(
                f"Cannot sort by '{self.field}'. Allowed fields: {allowed}"
            )
        return column

    def order_by(self, sortable: Mapping[str, Any], tie_breaker: Any) -> list[Any]:
        """ORDER BY clauses, with a tie-breaker so page boundaries are stable."""
        column = self.resolve(sortable)
        primary = column.desc() if self.descending else column.asc()
        if column is tie_breaker:
            return [primary]
        return [primary, tie_breaker.asc()]


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index and page size."""

    page: int = 0
    size: int = 10

    @property
    def offset(self) -> int:
        return self.page * self.size

    def apply(self, query: Any) -> Any:
        return query.offset(self.offset).limit(self.size)


@dataclass
class Page[ModelType]:
    """One page of results plus the total match count."""

    items: list[ModelType] = field(default_factory=list)
    total: int = 0
