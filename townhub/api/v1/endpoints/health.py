# townhub/api/v1/endpoints/health.py
import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from townhub.core.config import settings
from townhub.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

_started = time.monotonic()


def _base_status() -> dict:
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": time.monotonic() - _started,
        "environment": settings.NODE_ENV,
    }


@router.get("/health")
def liveness_probe():
    """Process is up; does not touch the database."""
    return {
        "status": "ok",
        **_base_status(),
        "database": "configured" if settings.database_configured else "not configured",
    }


@router.get("/api/health")
def db_health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Database health check failed: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "status": "ERROR",
                **_base_status(),
                "database": "disconnected",
                "error": str(exc),
            },
        )
    return {"status": "OK", **_base_status(), "database": "connected"}
