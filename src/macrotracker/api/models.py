"""Pydantic models for API payloads."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, computed_field

from macrotracker.domain.goals import MacroGoals
from macrotracker.domain.meals import MealItemRecord
from macrotracker.domain.products import ProductRecord
from macrotracker.domain.subscriptions import Subscription
from macrotracker.services.identifiers import is_synthesized_id


class ProductPayload(BaseModel):
    """Food product with macros per 100 grams."""

    name: str = Field(min_length=1)
    brand: str = ""
    calories: float = Field(default=0.0, ge=0)
    protein: float = Field(default=0.0, ge=0)
    fat: float = Field(default=0.0, ge=0)
    carbs: float = Field(default=0.0, ge=0)
    sugar: float | None = None
    image_url: str = ""
    off_id: str | None = None

    @computed_field
    @property
    def is_temporary(self) -> bool:
        """True when the product has no catalog id yet."""
        return is_synthesized_id(self.off_id)

    @classmethod
    def from_record(cls, record: ProductRecord) -> "ProductPayload":
        """Build a payload from a product record."""
        return cls(
            name=record.name,
            brand=record.brand,
            calories=record.calories,
            protein=record.protein,
            fat=record.fat,
            carbs=record.carbs,
            sugar=record.sugar,
            image_url=record.image_url,
            off_id=record.external_id,
        )

    def to_record(self) -> ProductRecord:
        """Convert to a product record; the id may be empty."""
        return ProductRecord(
            name=self.name,
            brand=self.brand,
            calories=self.calories,
            protein=self.protein,
            fat=self.fat,
            carbs=self.carbs,
            sugar=self.sugar,
            image_url=self.image_url,
            external_id=self.off_id or "",
        )


class CreateMealRequest(BaseModel):
    """Request to open a daily log."""

    log_date: date | None = None


class AddFoodRequest(BaseModel):
    """Request to log a product to a meal."""

    product: ProductPayload
    quantity_grams: float = 100.0
    meal_type: str = "frukost"


class UpdateQuantityRequest(BaseModel):
    """Request to change a meal item's grams."""

    quantity_grams: float = Field(gt=0)


class MacroGoalsPayload(BaseModel):
    """Daily macro goals."""

    calories_kcal: float = Field(ge=0)
    protein_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)

    @classmethod
    def from_goals(cls, goals: MacroGoals) -> "MacroGoalsPayload":
        """Build a payload from domain goals."""
        return cls(
            calories_kcal=goals.calories_kcal,
            protein_g=goals.protein_g,
            carbs_g=goals.carbs_g,
            fat_g=goals.fat_g,
        )

    def to_goals(self) -> MacroGoals:
        """Convert to domain goals."""
        return MacroGoals(
            calories_kcal=self.calories_kcal,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )


class SubscriptionPayload(BaseModel):
    """Subscription status for a user."""

    status: str | None
    is_active: bool
    price_id: str | None = None
    current_period_end: datetime | None = None
    cancel_at_period_end: bool = False

    @classmethod
    def from_subscription(
        cls, subscription: Subscription | None
    ) -> "SubscriptionPayload":
        """Build a payload; a missing subscription is inactive."""
        if subscription is None:
            return cls(status=None, is_active=False)
        return cls(
            status=subscription.status,
            is_active=subscription.is_active,
            price_id=subscription.price_id,
            current_period_end=subscription.current_period_end,
            cancel_at_period_end=subscription.cancel_at_period_end,
        )


class MealItemPayload(BaseModel):
    """A logged meal item."""

    id: UUID
    daily_log_id: UUID
    meal_type: str
    off_id: str | None
    name: str | None
    quantity_grams: float

    @computed_field
    @property
    def is_temporary(self) -> bool:
        """True when the item refers to a product without a catalog id."""
        return is_synthesized_id(self.off_id)

    @classmethod
    def from_record(cls, record: MealItemRecord) -> "MealItemPayload":
        """Build a payload from a meal item record."""
        return cls(
            id=record.id,
            daily_log_id=record.daily_log_id,
            meal_type=record.meal_type,
            off_id=record.external_id,
            name=record.name,
            quantity_grams=record.quantity_grams,
        )
