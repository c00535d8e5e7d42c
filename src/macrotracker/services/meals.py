"""Meal logging service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from macrotracker.domain.meals import DailyLog, MealItemRecord
from macrotracker.domain.products import ProductRecord
from macrotracker.services.identifiers import synthesize_temp_id
from macrotracker.services.product_cache import ProductCacheWriter

DEFAULT_MEAL_TYPE = "frukost"
DEFAULT_QUANTITY_GRAMS = 100.0

_logger = logging.getLogger(__name__)


class MealLogRepository(Protocol):
    """Persistence interface for daily logs and meal items."""

    def get_daily_log(self, user_id: UUID, log_date: date) -> DailyLog | None:
        """Return the user's log for a date, if present."""

    def create_daily_log(self, user_id: UUID, log_date: date) -> DailyLog:
        """Create and return a daily log."""

    def create_meal_item(  # noqa: PLR0913
        self,
        daily_log_id: UUID,
        meal_type: str,
        external_id: str,
        name: str,
        quantity_grams: float,
    ) -> UUID:
        """Create a meal item row and return its id."""

    def list_meal_items(self, daily_log_id: UUID) -> list[MealItemRecord]:
        """Return the items logged in a daily log."""

    def delete_meal_item(self, item_id: UUID) -> None:
        """Delete a meal item."""

    def update_meal_item_quantity(self, item_id: UUID, quantity_grams: float) -> None:
        """Set a meal item's quantity."""


@dataclass
class MealLogService:
    """Service that records products eaten per day and meal."""

    repository: MealLogRepository
    cache_writer: ProductCacheWriter

    def create_meal(self, user_id: UUID, log_date: date | None = None) -> UUID:
        """Return the id of the user's daily log, creating it if needed."""
        day = log_date or datetime.now(tz=UTC).date()
        existing = self.repository.get_daily_log(user_id, day)
        if existing:
            return existing.id
        created = self.repository.create_daily_log(user_id, day)
        _logger.info("Created daily log %s for %s", created.id, day.isoformat())
        return created.id

    async def add_food_to_meal(
        self,
        daily_log_id: UUID,
        product: ProductRecord,
        quantity_grams: float,
        meal_type: str = DEFAULT_MEAL_TYPE,
    ) -> str:
        """Log ``product`` to a meal and return the product id used."""
        quantity = quantity_grams if quantity_grams > 0 else DEFAULT_QUANTITY_GRAMS
        external_id = product.external_id
        if not external_id:
            external_id = synthesize_temp_id(product.name, product.brand)
            await self.cache_writer.write([replace(product, external_id=external_id)])
        self.repository.create_meal_item(
            daily_log_id=daily_log_id,
            meal_type=meal_type.lower(),
            external_id=external_id,
            name=product.name,
            quantity_grams=quantity,
        )
        return external_id

    def list_meal_items(self, daily_log_id: UUID) -> list[MealItemRecord]:
        """Return every item logged in a daily log."""
        return self.repository.list_meal_items(daily_log_id)

    def delete_meal_item(self, item_id: UUID) -> None:
        """Remove a meal item."""
        self.repository.delete_meal_item(item_id)

    def update_meal_item_quantity(self, item_id: UUID, quantity_grams: float) -> None:
        """Change how many grams a meal item holds."""
        if quantity_grams <= 0:
            raise ValueError("quantity_grams must be positive")
        self.repository.update_meal_item_quantity(item_id, quantity_grams)
