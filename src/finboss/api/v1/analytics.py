"""Cross-resource analytics endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from finboss.api.deps import CurrentUser, DateRangeParams, get_analytics_service
from finboss.schemas.analytics import BudgetComparison
from finboss.schemas.common import SuccessResponse
from finboss.services.analytics import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get(
    "/budget-vs-actual",
    response_model=SuccessResponse[list[BudgetComparison]],
    summary="Budget vs. actual spending",
    description="""
    Compare every budget with expense spending in its category.

    Actuals cover **startDate**..**endDate** (all time when omitted).
    Rows are sorted by variance, most over budget first.
    """,
)
async def budget_vs_actual(
    current_user: CurrentUser,
    date_range: DateRangeParams,
    service: Annotated[AnalyticsService, Depends(get_analytics_service)],
) -> SuccessResponse[list[BudgetComparison]]:
    rows = await service.compare(current_user.id, date_range)
    return SuccessResponse(data=rows)
