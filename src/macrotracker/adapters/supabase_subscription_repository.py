"""Supabase repository for Stripe subscriptions."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from macrotracker.domain.subscriptions import Subscription
from macrotracker.services.subscriptions import SubscriptionRepository


@dataclass
class SupabaseSubscriptionRepository(SubscriptionRepository):
    """Reads subscriptions from the ``stripe_user_subscriptions`` view."""

    client: Client

    def get_subscription(self, user_id: UUID) -> Subscription | None:
        """Return the user's subscription, if any."""
        response = (
            self.client.table("stripe_user_subscriptions")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Subscription(
            status=str(row.get("subscription_status") or "not_started"),
            price_id=row.get("price_id"),
            current_period_end=_parse_timestamp(row.get("current_period_end")),
            cancel_at_period_end=bool(row.get("cancel_at_period_end")),
        )


def _parse_timestamp(value: object) -> datetime | None:
    """Parse epoch seconds or ISO strings into aware datetimes."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return datetime.fromtimestamp(value, tz=UTC)
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
