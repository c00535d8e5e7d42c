"""Per-user goal and subscription endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status

from macrotracker.api.dependencies import get_container, require_api_token
from macrotracker.api.models import MacroGoalsPayload, SubscriptionPayload

router = APIRouter(
    prefix="/users", tags=["users"], dependencies=[Depends(require_api_token)]
)


@router.get("/{user_id}/macro-goals")
async def get_macro_goals(user_id: UUID, request: Request) -> MacroGoalsPayload:
    """Return a user's macro goals."""
    goals = get_container(request).macro_goal_service.get_goals(user_id)
    if goals is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return MacroGoalsPayload.from_goals(goals)


@router.put("/{user_id}/macro-goals")
async def set_macro_goals(
    user_id: UUID, body: MacroGoalsPayload, request: Request
) -> MacroGoalsPayload:
    """Replace a user's macro goals."""
    get_container(request).macro_goal_service.set_goals(user_id, body.to_goals())
    return body


@router.get("/{user_id}/subscription")
async def get_subscription(user_id: UUID, request: Request) -> SubscriptionPayload:
    """Return a user's subscription status."""
    subscription = get_container(request).subscription_service.get_subscription(
        user_id
    )
    return SubscriptionPayload.from_subscription(subscription)
