"""
Health API Routes
"""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workflow_sync.database import database_health, get_db, server_time

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check() -> JSONResponse:
    """Report whether the database answers a round-trip."""
    database = database_health()
    if database["ok"]:
        return JSONResponse(content={"status": "healthy", "database": database})
    logger.warning("Health check failed: database unreachable")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "degraded", "database": database},
    )


@router.get("/test-db")
async def test_db(db: Session = Depends(get_db)) -> JSONResponse:
    """Round-trip to the database and report its clock."""
    try:
        now = server_time(db)
    except SQLAlchemyError as exc:
        logger.error(f"Database error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Database error"},
        )
    return JSONResponse(content={"success": True, "serverTime": str(now)})
