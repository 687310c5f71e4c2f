"""Health check endpoints."""

from datetime import datetime

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from infrastructure.database.schema import missing_tables
from infrastructure.database.session import get_async_session

logger = structlog.get_logger()

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None
    schema_status: str | None = None
    missing_tables: list[str] = Field(default_factory=list)


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """
    Basic health check for load balancers.

    Returns service status without checking dependencies. Fast and lightweight.
    """
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """
    Detailed health check including database connectivity and schema.

    The schema is provisioned by migrations; a table missing here means
    `alembic upgrade head` has not been run against this database.
    """
    db_status = "unknown"
    schema_status = "unknown"
    absent: list[str] = []

    try:
        await db.execute(text("SELECT 1"))
        db_status = "healthy"
        conn = await db.connection()
        absent = await missing_tables(conn)
        schema_status = "missing_tables" if absent else "ok"
    except (SQLAlchemyError, ConnectionError) as e:
        logger.warning("health_check_database_failed", error=str(e))
        if db_status != "healthy":
            db_status = f"unhealthy: {e}"

    overall_status = "healthy" if db_status == "healthy" and schema_status == "ok" else "degraded"

    return HealthResponse(
        status=overall_status,
        version=API_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        database=db_status,
        schema_status=schema_status,
        missing_tables=absent,
    )
