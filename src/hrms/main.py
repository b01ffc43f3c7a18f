from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.hrms.api.middlewares import setup_middlewares
from src.hrms.api.v1.router import api_router
from src.hrms.core.config import get_settings
from src.hrms.core.db import dispose_engine, reset_session_factory
from src.hrms.core.exceptions import setup_exception_handlers
from src.hrms.core.health import setup_health_endpoint
from src.hrms.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug, sql_echo=settings.database_echo)
    logger.info(f"Starting {settings.app_name}", env=settings.app_env)

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    reset_session_factory()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "companies", "description": "Companies, their statistics and aggregations"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="HR management data API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)
    app.include_router(api_router)
    setup_health_endpoint(app)

    return app


app = create_app()
