"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class DailyLog:
    """A user's food log for one calendar day."""

    id: UUID
    user_id: UUID
    log_date: date


@dataclass(frozen=True)
class MealItemRecord:
    """A product logged to a meal within a daily log."""

    id: UUID
    daily_log_id: UUID
    meal_type: str
    external_id: str | None
    name: str | None
    quantity_grams: float
