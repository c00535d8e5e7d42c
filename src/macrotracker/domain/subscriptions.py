"""Domain models for subscriptions."""

from dataclasses import dataclass
from datetime import datetime

ACTIVE_STATUSES = frozenset({"active", "trialing"})


@dataclass(frozen=True)
class Subscription:
    """A user's billing subscription."""

    status: str
    price_id: str | None = None
    current_period_end: datetime | None = None
    cancel_at_period_end: bool = False

    @property
    def is_active(self) -> bool:
        """Return True when the subscription grants access."""
        return self.status in ACTIVE_STATUSES
