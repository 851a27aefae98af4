"""API version 1 routes."""

from fastapi import APIRouter

from finboss import __version__
from finboss.api.v1 import analytics, auth, budgets, categories, transactions

router = APIRouter(prefix="/api/v1")

# Include routers
router.include_router(auth.router)
router.include_router(transactions.router)
router.include_router(budgets.router)
router.include_router(categories.router)
router.include_router(analytics.router)


@router.get("", tags=["meta"], summary="API version")
async def api_version():
    return {"status": "success", "version": "v1", "message": f"FinBoss API v1 ({__version__})"}
