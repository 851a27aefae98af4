"""Transaction endpoints: CRUD plus summary, category, trend and forecast views."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from finboss.api.deps import CurrentUser, DateRangeParams, get_transaction_service
from finboss.core.exceptions import ValidationError
from finboss.schemas.common import SuccessResponse
from finboss.schemas.transaction import (
    CategoryTotal,
    GroupBy,
    SpendingForecast,
    TransactionCreate,
    TransactionListResult,
    TransactionResponse,
    TransactionSummary,
    TransactionType,
    TransactionUpdate,
    TrendPoint,
)
from finboss.services.transaction import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])

Service = Annotated[TransactionService, Depends(get_transaction_service)]


@router.get(
    "/summary",
    response_model=SuccessResponse[TransactionSummary],
    summary="Income, expense and balance",
)
async def get_summary(
    current_user: CurrentUser, date_range: DateRangeParams, service: Service
) -> SuccessResponse[TransactionSummary]:
    summary = await service.summary(current_user.id, date_range)
    return SuccessResponse(data=summary)


@router.get(
    "/analytics/category",
    response_model=SuccessResponse[list[CategoryTotal]],
    summary="Totals per category",
    description="Sum and count per category within the optional date range, largest total first.",
)
async def get_by_category(
    current_user: CurrentUser, date_range: DateRangeParams, service: Service
) -> SuccessResponse[list[CategoryTotal]]:
    totals = await service.by_category(current_user.id, date_range)
    return SuccessResponse(data=totals)


@router.get(
    "/trends",
    response_model=SuccessResponse[list[TrendPoint]],
    summary="Income/expense trend",
    description="""
    Income, expense and balance per day, week or month.

    - **startDate** and **endDate** are required
    - Week buckets are labelled by their Monday; month buckets as YYYY-MM
    - Buckets without transactions are omitted
    """,
)
async def get_trends(
    current_user: CurrentUser,
    date_range: DateRangeParams,
    service: Service,
    group_by: Annotated[GroupBy, Query(alias="groupBy")] = "day",
    type: Annotated[TransactionType | None, Query()] = None,
) -> SuccessResponse[list[TrendPoint]]:
    if not date_range.is_bounded:
        raise ValidationError("startDate and endDate are required")
    points = await service.trends(current_user.id, date_range, group_by=group_by, type=type)
    return SuccessResponse(data=points)


@router.get(
    "/forecast",
    response_model=SuccessResponse[SpendingForecast],
    summary="Spending forecast",
    description="Project expense spending from the last three full calendar months.",
)
async def get_forecast(
    current_user: CurrentUser,
    service: Service,
    months: Annotated[int, Query(ge=1, le=12, description="Months to project")] = 3,
    category: Annotated[str | None, Query(description="Restrict to one category")] = None,
) -> SuccessResponse[SpendingForecast]:
    forecast = await service.forecast(current_user.id, months=months, category=category)
    return SuccessResponse(data=forecast)


@router.get(
    "",
    response_model=SuccessResponse[TransactionListResult],
    summary="List transactions with filters",
)
async def list_transactions(
    current_user: CurrentUser,
    date_range: DateRangeParams,
    service: Service,
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Items per page (1-100)")] = 20,
    type: Annotated[TransactionType | None, Query(description="income or expense")] = None,
    category: Annotated[str | None, Query(description="Filter by category")] = None,
) -> SuccessResponse[TransactionListResult]:
    """
    List transactions newest first.

    Args:
        current_user: Authenticated user
        date_range: Optional startDate/endDate filter
        service: Transaction service
        page: Page number (1-indexed)
        limit: Items per page
        type: Optional type filter
        category: Optional category filter

    Returns:
        Transactions plus pagination metadata
    """
    result = await service.list_for_user(
        current_user.id, type, category, date_range, page, limit
    )
    return SuccessResponse(data=result)


@router.post(
    "",
    response_model=SuccessResponse[TransactionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Record a transaction",
)
async def create_transaction(
    data: TransactionCreate, current_user: CurrentUser, service: Service
) -> SuccessResponse[TransactionResponse]:
    transaction = await service.create(current_user.id, data)
    return SuccessResponse(
        message="Transaction created successfully",
        data=TransactionResponse.model_validate(transaction),
    )


@router.get(
    "/{transaction_id}",
    response_model=SuccessResponse[TransactionResponse],
    summary="Get a transaction",
)
async def get_transaction(
    transaction_id: UUID, current_user: CurrentUser, service: Service
) -> SuccessResponse[TransactionResponse]:
    transaction = await service.get(current_user.id, transaction_id)
    return SuccessResponse(data=TransactionResponse.model_validate(transaction))


@router.put(
    "/{transaction_id}",
    response_model=SuccessResponse[TransactionResponse],
    summary="Update a transaction",
)
async def update_transaction(
    transaction_id: UUID,
    data: TransactionUpdate,
    current_user: CurrentUser,
    service: Service,
) -> SuccessResponse[TransactionResponse]:
    transaction = await service.update(current_user.id, transaction_id, data)
    return SuccessResponse(
        message="Transaction updated successfully",
        data=TransactionResponse.model_validate(transaction),
    )


@router.delete(
    "/{transaction_id}",
    response_model=SuccessResponse[TransactionResponse],
    summary="Delete a transaction",
)
async def delete_transaction(
    transaction_id: UUID, current_user: CurrentUser, service: Service
) -> SuccessResponse[TransactionResponse]:
    transaction = await service.delete(current_user.id, transaction_id)
    return SuccessResponse(
        message="Transaction deleted successfully",
        data=TransactionResponse.model_validate(transaction),
    )
