"""Subscription status lookups."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from macrotracker.domain.subscriptions import Subscription


class SubscriptionRepository(Protocol):
    """Read interface for billing subscriptions."""

    def get_subscription(self, user_id: UUID) -> Subscription | None:
        """Return the user's subscription, if any."""


@dataclass
class SubscriptionService:
    """Service answering whether a user has an active subscription."""

    repository: SubscriptionRepository

    def get_subscription(self, user_id: UUID) -> Subscription | None:
        """Return the user's subscription or None."""
        return self.repository.get_subscription(user_id)

    def is_active(self, user_id: UUID) -> bool:
        """Return True for active or trialing subscriptions."""
        subscription = self.repository.get_subscription(user_id)
        return subscription is not None and subscription.is_active
