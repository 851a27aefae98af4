"""Category endpoints. Listing works anonymously; changes need a user."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from finboss.api.deps import CurrentUser, get_category_service, get_optional_user_id
from finboss.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryType,
    CategoryUpdate,
)
from finboss.schemas.common import MessageResponse, SuccessResponse
from finboss.services.category import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])

Service = Annotated[CategoryService, Depends(get_category_service)]


@router.get(
    "",
    response_model=SuccessResponse[list[CategoryResponse]],
    summary="List categories",
    description="Default categories, plus the caller's own when a bearer token is sent.",
)
async def list_categories(
    user_id: Annotated[UUID | None, Depends(get_optional_user_id)],
    service: Service,
    type: Annotated[CategoryType | None, Query(description="income or expense")] = None,
) -> SuccessResponse[list[CategoryResponse]]:
    categories = await service.list_visible(user_id, type=type)
    return SuccessResponse(
        data=[CategoryResponse.model_validate(category) for category in categories]
    )


@router.post(
    "",
    response_model=SuccessResponse[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a custom category",
)
async def create_category(
    data: CategoryCreate, current_user: CurrentUser, service: Service
) -> SuccessResponse[CategoryResponse]:
    """
    Create a category owned by the caller.

    Raises:
        409: Name collides with a default or an existing own category
    """
    category = await service.create(current_user.id, data)
    return SuccessResponse(
        message="Category created successfully",
        data=CategoryResponse.model_validate(category),
    )


@router.put(
    "/{category_id}",
    response_model=SuccessResponse[CategoryResponse],
    summary="Update a custom category",
)
async def update_category(
    category_id: UUID, data: CategoryUpdate, current_user: CurrentUser, service: Service
) -> SuccessResponse[CategoryResponse]:
    category = await service.update(current_user.id, category_id, data)
    return SuccessResponse(
        message="Category updated successfully",
        data=CategoryResponse.model_validate(category),
    )


@router.delete(
    "/{category_id}", response_model=MessageResponse, summary="Delete a custom category"
)
async def delete_category(
    category_id: UUID, current_user: CurrentUser, service: Service
) -> MessageResponse:
    await service.delete(current_user.id, category_id)
    return MessageResponse(message="Category deleted successfully")
