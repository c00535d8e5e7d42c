"""Macro goal service."""

from dataclasses import dataclass, fields
from typing import Protocol
from uuid import UUID

from macrotracker.domain.goals import MacroGoals


class MacroGoalRepository(Protocol):
    """Persistence interface for macro goals."""

    def get_goals(self, user_id: UUID) -> MacroGoals | None:
        """Return the user's goals, if set."""

    def upsert_goals(self, user_id: UUID, goals: MacroGoals) -> None:
        """Create or replace the user's goals."""


@dataclass
class MacroGoalService:
    """Service for reading and updating macro goals."""

    repository: MacroGoalRepository

    def get_goals(self, user_id: UUID) -> MacroGoals | None:
        """Return the user's goals or None when unset."""
        return self.repository.get_goals(user_id)

    def set_goals(self, user_id: UUID, goals: MacroGoals) -> None:
        """Persist the user's goals."""
        for entry in fields(goals):
            if getattr(goals, entry.name) < 0:
                raise ValueError(f"{entry.name} must not be negative")
        self.repository.upsert_goals(user_id, goals)
