"""
Health check routes
"""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, HTTPException, Request

from linkedin_api import __version__

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    db = request.app.state.db
    if db.pool is None:
        db_status = "not_initialized"
    else:
        try:
            await db.fetchval("SELECT 1")
            db_status = "healthy"
        except Exception as e:
            logger.error("Health check failed", error=str(e))
            raise HTTPException(status_code=503, detail="Database unavailable")

    return {
        "service": request.app.state.settings.service_name,
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": db_status,
        "version": __version__,
    }
