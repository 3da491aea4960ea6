"""Base factory configuration for polyfactory."""

from datetime import UTC, datetime

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from src.webhook_api.core.security import new_object_id


def utc_now() -> datetime:
    """Generate current UTC time (naive for PostgreSQL compatibility)."""
    return datetime.now(UTC).replace(tzinfo=None)


def generate_object_id() -> str:
    """Generate a 24-hex identifier for primary keys."""
    return new_object_id()


class BaseFactory(SQLAlchemyFactory):
    """Base factory with common configuration for all models.

    Provides:
    - 24-hex identifier generation for primary keys
    - UTC timestamp generation
    - Disabled auto-relationship setting (we control references manually)
    """

    __is_base_factory__ = True
    __set_relationships__ = False
    __set_foreign_keys__ = False
