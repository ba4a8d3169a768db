"""Liveness and readiness probes."""

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])

# Present once migrations have run; the importer cannot work without it.
SCHEMA_PROBE = text("SELECT 1 FROM restaurant LIMIT 1")


class HealthResponse(BaseModel):
    """Probe result."""

    status: Literal["ok", "degraded", "unhealthy"]
    database: Literal["connected", "disconnected"] | None = None
    schema_ready: bool | None = None


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
async def health_check() -> HealthResponse:
    """Liveness: the process is serving requests."""
    return HealthResponse(status="ok")


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(
    db: AsyncSession = Depends(get_db),
) -> HealthResponse:
    """Readiness: the database answers and the menu tables exist.

    Returns ``degraded`` when the database is reachable but migrations have
    not been applied, ``unhealthy`` when it cannot be reached at all.
    """
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.error(
            "health.database_disconnected",
            error=str(e),
            error_type=type(e).__name__,
        )
        return HealthResponse(status="unhealthy", database="disconnected", schema_ready=False)

    try:
        async with db.begin_nested():
            await db.execute(SCHEMA_PROBE)
    except SQLAlchemyError as e:
        logger.warning("health.schema_missing", error=str(e))
        return HealthResponse(status="degraded", database="connected", schema_ready=False)

    logger.debug("health.ready")
    return HealthResponse(status="ok", database="connected", schema_ready=True)
