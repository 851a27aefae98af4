"""Budget endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from finboss.api.deps import CurrentUser, get_budget_service
from finboss.schemas.budget import (
    BudgetCreate,
    BudgetPeriod,
    BudgetResponse,
    BudgetStatus,
    BudgetUpdate,
)
from finboss.schemas.common import SuccessResponse
from finboss.services.budget import BudgetService

router = APIRouter(prefix="/budgets", tags=["budgets"])

Service = Annotated[BudgetService, Depends(get_budget_service)]


@router.get(
    "",
    response_model=SuccessResponse[list[BudgetResponse]],
    summary="List budgets with current spending",
)
async def list_budgets(
    current_user: CurrentUser,
    service: Service,
    period: Annotated[BudgetPeriod | None, Query(description="monthly or yearly")] = None,
) -> SuccessResponse[list[BudgetResponse]]:
    budgets = await service.list_for_user(current_user.id, period=period)
    return SuccessResponse(data=budgets)


@router.get(
    "/status/overview",
    response_model=SuccessResponse[list[BudgetStatus]],
    summary="Budget health overview",
    description="""
    Every budget with its status for the current period.

    - **over**: spent > limit
    - **warning**: spent > 80% of limit
    - **ok**: otherwise

    Ordered over, then warning, then ok.
    """,
)
async def get_status_overview(
    current_user: CurrentUser, service: Service
) -> SuccessResponse[list[BudgetStatus]]:
    rows = await service.status_overview(current_user.id)
    return SuccessResponse(data=rows)


@router.post(
    "",
    response_model=SuccessResponse[BudgetResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a budget",
)
async def create_budget(
    data: BudgetCreate, current_user: CurrentUser, service: Service
) -> SuccessResponse[BudgetResponse]:
    """
    Create a budget for a category and period.

    Raises:
        409: A budget for this category and period already exists
    """
    budget = await service.create(current_user.id, data)
    return SuccessResponse(message="Budget created successfully", data=budget)


@router.get(
    "/{budget_id}", response_model=SuccessResponse[BudgetResponse], summary="Get a budget"
)
async def get_budget(
    budget_id: UUID, current_user: CurrentUser, service: Service
) -> SuccessResponse[BudgetResponse]:
    budget = await service.get(current_user.id, budget_id)
    return SuccessResponse(data=budget)


@router.put(
    "/{budget_id}", response_model=SuccessResponse[BudgetResponse], summary="Update a budget"
)
async def update_budget(
    budget_id: UUID, data: BudgetUpdate, current_user: CurrentUser, service: Service
) -> SuccessResponse[BudgetResponse]:
    budget = await service.update(current_user.id, budget_id, data)
    return SuccessResponse(message="Budget updated successfully", data=budget)


@router.delete(
    "/{budget_id}", response_model=SuccessResponse[BudgetResponse], summary="Delete a budget"
)
async def delete_budget(
    budget_id: UUID, current_user: CurrentUser, service: Service
) -> SuccessResponse[BudgetResponse]:
    budget = await service.delete(current_user.id, budget_id)
    return SuccessResponse(message="Budget deleted successfully", data=budget)
