"""Meal logging endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from macrotracker.api.dependencies import get_container, require_api_token
from macrotracker.api.models import (
    AddFoodRequest,
    CreateMealRequest,
    MealItemPayload,
    UpdateQuantityRequest,
)

router = APIRouter(tags=["meals"], dependencies=[Depends(require_api_token)])


@router.post("/users/{user_id}/meals", status_code=status.HTTP_201_CREATED)
async def create_meal(
    user_id: UUID, body: CreateMealRequest, request: Request
) -> dict[str, str]:
    """Return the daily log for a date, creating it when missing."""
    service = get_container(request).meal_log_service
    log_id = service.create_meal(user_id, body.log_date)
    return {"id": str(log_id)}


@router.post("/meals/{log_id}/items", status_code=status.HTTP_201_CREATED)
async def add_food(
    log_id: UUID, body: AddFoodRequest, request: Request
) -> dict[str, str]:
    """Log a product to a meal."""
    service = get_container(request).meal_log_service
    off_id = await service.add_food_to_meal(
        log_id,
        body.product.to_record(),
        body.quantity_grams,
        meal_type=body.meal_type,
    )
    return {"off_id": off_id}


@router.get("/meals/{log_id}/items")
async def list_items(log_id: UUID, request: Request) -> list[MealItemPayload]:
    """Return the items logged in a daily log."""
    items = get_container(request).meal_log_service.list_meal_items(log_id)
    return [MealItemPayload.from_record(item) for item in items]


@router.patch("/meal-items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_quantity(
    item_id: UUID, body: UpdateQuantityRequest, request: Request
) -> None:
    """Change the grams of a meal item."""
    get_container(request).meal_log_service.update_meal_item_quantity(
        item_id, body.quantity_grams
    )


@router.delete("/meal-items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: UUID, request: Request) -> None:
    """Remove a meal item."""
    get_container(request).meal_log_service.delete_meal_item(item_id)
