"""
╔═══════════════════════════════════════════════════════════════════════════════╗
║                         HEALTH ROUTER                                          ║
║                    System Health Check Endpoints                               ║
╠═══════════════════════════════════════════════════════════════════════════════╣
║  Endpoints:                                                                    ║
║  - /health (basic health check)                                                ║
║  - /health/db (fleet database connectivity)                                    ║
╚═══════════════════════════════════════════════════════════════════════════════╝
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from database_mysql import get_db_connection
from models import HealthCheck
from settings import APP

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System Health"])


def check_fleet_db() -> dict:
    """Check fleet database connectivity"""
    try:
        with get_db_connection() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "healthy", "message": "Connected"}
    except SQLAlchemyError as e:
        logger.warning(f"Fleet DB health check failed: {e}")
        return {"status": "unhealthy", "message": str(e)}


@router.get("/health", response_model=HealthCheck)
def health():
    """Basic liveness check (no database access)"""
    return HealthCheck(
        status="ok",
        version=APP.version,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/health/db")
def health_db():
    """Database connectivity check"""
    return {"fleet_db": check_fleet_db()}
