from __future__ import annotations

import logging
import sqlite3
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.api.dependencies import store_for
from app.config import load_settings
from app.deals.errors import DealStoreError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

APP_VERSION = "0.1.0"


@router.get("/health")
def health() -> JSONResponse:
    """Report store connectivity and the number of stored deals."""
    settings = load_settings()
    try:
        total = store_for(settings.db_path).count()
    except (DealStoreError, sqlite3.Error, OSError) as exc:
        logger.error("Health check failed", exc_info=exc)
        return JSONResponse(
            status_code=503,
            content={
                "status": "down",
                "service": settings.service_name,
                "database": "unavailable",
                "error": str(exc),
            },
        )

    logger.debug("Health check - Total FX deals in database: %d", total)
    return JSONResponse(
        status_code=200,
        content={
            "status": "ok",
            "service": settings.service_name,
            "database": "connected",
            "totalDeals": total,
        },
    )


@router.get("/info")
def info() -> dict:
    return {
        "application": {
            "name": load_settings().service_name,
            "description": "Data warehouse service for importing and persisting FX deals",
            "version": APP_VERSION,
            "timestamp": datetime.now().isoformat(timespec="seconds"),
        },
        "capabilities": {
            "import": "Support for single and batch FX deal imports",
            "validation": "Comprehensive deal validation",
            "persistence": "SQLite database keyed by deal id",
        },
    }
