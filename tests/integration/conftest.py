"""Integration test fixtures for database and HTTP client operations.

Runs the app against an in-memory SQLite database shared through a
single connection. Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import src.webhook_api.core.db.engine as engine_module
from src.webhook_api.api.dependencies import get_principal_resolver
from src.webhook_api.core.config import get_settings
from src.webhook_api.core.health import reset_health_cache
from src.webhook_api.main import create_app
from src.webhook_api.models import Project, User
from tests.factories import ProjectFactory, UserFactory
from tests.helpers import HeaderPrincipalResolver


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database with all tables, installed as the app engine."""
    await engine_module.dispose_engine()

    test_engine = create_async_engine(
        get_settings().database_url,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    engine_module._engine = test_engine
    reset_health_cache()
    yield test_engine

    engine_module._engine = None
    await test_engine.dispose()
    reset_health_cache()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for seeding and inspecting data.

    Changes must be committed explicitly to be visible to the app.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """Test client whose caller is chosen per request via ``as_user``."""
    app = create_app()
    app.dependency_overrides[get_principal_resolver] = HeaderPrincipalResolver

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable:
    """Persist a user built by UserFactory."""

    async def _make_user(**kwargs) -> User:
        user = UserFactory.build(**kwargs)
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_project(db_session: AsyncSession) -> Callable:
    """Persist a project built by ProjectFactory."""

    async def _make_project(**kwargs) -> Project:
        project = ProjectFactory.build(**kwargs)
        db_session.add(project)
        await db_session.commit()
        return project

    return _make_project


@pytest.fixture
async def owner(make_user: Callable) -> User:
    return await make_user(first_name="Grace", last_name="Hopper")


@pytest.fixture
async def other_user(make_user: Callable) -> User:
    return await make_user(first_name="Alan", last_name="Turing")
