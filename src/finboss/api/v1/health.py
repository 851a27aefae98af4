from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from finboss.api.middleware.rate_limit import limiter
from finboss.db.session import get_db

router = APIRouter(tags=["health"])


@router.get("/health")
@limiter.exempt
async def health():
    """Basic health check."""
    return {
        "status": "success",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/ready")
@limiter.exempt
async def health_ready(db: AsyncSession = Depends(get_db)):
    """Readiness check with database connection."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "error", "message": "Database unavailable"},
        )
    return {"status": "success", "database": "connected"}
