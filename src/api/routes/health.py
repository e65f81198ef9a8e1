from __future__ import annotations

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from src.api.deps import get_db_session
from src.core.config import get_settings

router = APIRouter(tags=["Observability"])
logger = structlog.get_logger()


async def check_database(session: AsyncSession) -> dict:
    """Check the catalog database connection."""
    try:
        await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        return {"status": "error", "message": str(e)[:100]}
    return {"status": "ok"}


@router.get("/health", summary="Service health probe")
async def health_check(session: AsyncSession = Depends(get_db_session)) -> dict:
    """Return basic service and datastore status information."""
    settings = get_settings()

    database_status = await check_database(session)
    overall_status = "ok" if database_status.get("status") == "ok" else "degraded"

    payload = {
        "service": settings.app_name,
        "version": settings.version,
        "status": overall_status,
        "timestamp": datetime.now(UTC).isoformat(),
        "datastores": {
            "database": database_status,
        },
    }
    logger.info("health_probe", **payload)
    return payload
