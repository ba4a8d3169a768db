"""FastAPI application entry point.

Run with ``uvicorn app.main:app --port 8123``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import get_settings
from app.core.database import dispose_engine
from app.core.exceptions import register_exception_handlers
from app.core.health import router as health_router
from app.core.logging import configure_logging, get_logger
from app.core.middleware import RequestIdMiddleware
from app.features.menu_import.routes import router as menu_import_router
from app.features.restaurants.routes import router as restaurants_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging on startup; release pooled connections on shutdown."""
    settings = get_settings()

    configure_logging()
    logger.info(
        "app.started",
        app_name=settings.app_name,
        app_env=settings.app_env,
        import_max_body_bytes=settings.import_max_body_bytes,
    )

    yield

    await dispose_engine()
    logger.info("app.stopped")


def create_app() -> FastAPI:
    """Build the application: middleware, error handlers, routers."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Idempotent import of restaurants, menus and menu items",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(menu_import_router)
    app.include_router(restaurants_router)

    return app


app = create_app()
