"""Domain models for macro goals."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroGoals:
    """Daily macro-nutrient targets."""

    calories_kcal: float
    protein_g: float
    carbs_g: float
    fat_g: float
