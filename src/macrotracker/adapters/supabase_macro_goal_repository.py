"""Supabase repository for macro goals."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from macrotracker.domain.goals import MacroGoals
from macrotracker.services.goals import MacroGoalRepository


@dataclass
class SupabaseMacroGoalRepository(MacroGoalRepository):
    """Supabase implementation for macro goals."""

    client: Client

    def get_goals(self, user_id: UUID) -> MacroGoals | None:
        """Return the stored goals for a user."""
        response = (
            self.client.table("makro_mal")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return MacroGoals(
            calories_kcal=float(row.get("kalorier_kcal") or 0.0),
            protein_g=float(row.get("protein_g") or 0.0),
            carbs_g=float(row.get("kolhydrater_g") or 0.0),
            fat_g=float(row.get("fett_g") or 0.0),
        )

    def upsert_goals(self, user_id: UUID, goals: MacroGoals) -> None:
        """Create or replace a user's goals."""
        self.client.table("makro_mal").upsert(
            {
                "user_id": str(user_id),
                "kalorier_kcal": goals.calories_kcal,
                "protein_g": goals.protein_g,
                "kolhydrater_g": goals.carbs_g,
                "fett_g": goals.fat_g,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()
