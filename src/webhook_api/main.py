from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.webhook_api.api.middlewares import setup_middlewares
from src.webhook_api.api.v1.router import api_router
from src.webhook_api.core.config import get_settings
from src.webhook_api.core.db import dispose_engine
from src.webhook_api.core.exceptions import setup_exception_handlers
from src.webhook_api.core.health import setup_health_endpoint, setup_metrics
from src.webhook_api.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}", env=settings.app_env)

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "users", "description": "User accounts"},
    {"name": "projects", "description": "Projects, search and statistics"},
    {"name": "invitations", "description": "Project invitations"},
    {"name": "operations", "description": "Health and metrics"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Users, projects and invitations for the webhook testing platform",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
