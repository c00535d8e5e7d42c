"""Supabase repository for daily logs and meal items."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from macrotracker.domain.meals import DailyLog, MealItemRecord
from macrotracker.services.meals import MealLogRepository

DAILY_LOG_TABLE = "daglig_matlogg"
MEAL_ITEM_TABLE = "maltidsinlagg"


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation for meal logging."""

    client: Client

    def get_daily_log(self, user_id: UUID, log_date: date) -> DailyLog | None:
        """Return the user's log for a date, if present."""
        response = (
            self.client.table(DAILY_LOG_TABLE)
            .select("id, user_id, loggdatum")
            .eq("user_id", str(user_id))
            .eq("loggdatum", log_date.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_daily_log(response.data[0])

    def create_daily_log(self, user_id: UUID, log_date: date) -> DailyLog:
        """Create a daily log row and return it."""
        response = (
            self.client.table(DAILY_LOG_TABLE)
            .insert({"user_id": str(user_id), "loggdatum": log_date.isoformat()})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create daily log")
        return _parse_daily_log(response.data[0])

    def create_meal_item(  # noqa: PLR0913
        self,
        daily_log_id: UUID,
        meal_type: str,
        external_id: str,
        name: str,
        quantity_grams: float,
    ) -> UUID:
        """Create a meal item row and return its id."""
        response = (
            self.client.table(MEAL_ITEM_TABLE)
            .insert(
                {
                    "daglig_logg_id": str(daily_log_id),
                    "maltidstyp": meal_type,
                    "off_id": external_id,
                    "custom_namn": name,
                    "antal_gram": quantity_grams,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal item")
        return UUID(response.data[0]["id"])

    def list_meal_items(self, daily_log_id: UUID) -> list[MealItemRecord]:
        """Return the meal items of a daily log."""
        response = (
            self.client.table(MEAL_ITEM_TABLE)
            .select("id, daglig_logg_id, maltidstyp, off_id, custom_namn, antal_gram")
            .eq("daglig_logg_id", str(daily_log_id))
            .execute()
        )
        return [_parse_meal_item(row) for row in response.data or []]

    def delete_meal_item(self, item_id: UUID) -> None:
        """Delete a meal item row."""
        self.client.table(MEAL_ITEM_TABLE).delete().eq("id", str(item_id)).execute()

    def update_meal_item_quantity(self, item_id: UUID, quantity_grams: float) -> None:
        """Update the grams of a meal item row."""
        self.client.table(MEAL_ITEM_TABLE).update({"antal_gram": quantity_grams}).eq(
            "id", str(item_id)
        ).execute()


def _parse_daily_log(row: dict[str, object]) -> DailyLog:
    return DailyLog(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        log_date=date.fromisoformat(str(row["loggdatum"])),
    )


def _parse_meal_item(row: dict[str, object]) -> MealItemRecord:
    external_id = row.get("off_id")
    name = row.get("custom_namn")
    return MealItemRecord(
        id=UUID(str(row["id"])),
        daily_log_id=UUID(str(row["daglig_logg_id"])),
        meal_type=str(row.get("maltidstyp") or ""),
        external_id=str(external_id) if external_id else None,
        name=str(name) if name else None,
        quantity_grams=float(row.get("antal_gram") or 0.0),
    )
