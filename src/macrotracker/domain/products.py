"""Domain models for food products and search attempts."""

from dataclasses import dataclass, replace
from enum import Enum


@dataclass(frozen=True)
class ProductRecord:
    """A food item returned by search, with macros per 100 grams."""

    name: str
    brand: str
    calories: float
    protein: float
    fat: float
    carbs: float
    image_url: str
    external_id: str
    sugar: float | None = None


@dataclass(frozen=True)
class CachedProduct:
    """Cached form of a product, keyed by its external id."""

    external_id: str
    name: str
    brand: str | None
    calories_100g: float
    protein_100g: float
    carbs_100g: float
    fat_100g: float
    image_url: str | None

    @classmethod
    def from_record(cls, record: ProductRecord, external_id: str) -> "CachedProduct":
        """Build a cache row from a product record."""
        return cls(
            external_id=external_id,
            name=record.name,
            brand=record.brand or None,
            calories_100g=record.calories or 0.0,
            protein_100g=record.protein or 0.0,
            carbs_100g=record.carbs or 0.0,
            fat_100g=record.fat or 0.0,
            image_url=record.image_url or None,
        )


class SearchState(Enum):
    """States of a single search call."""

    ATTEMPTING = "attempting"
    BACKOFF = "backoff"
    SUCCEEDED = "succeeded"
    NOT_FOUND = "not_found"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class SearchAttempt:
    """Progress of one search call across its attempts."""

    number: int = 1
    waited_seconds: float = 0.0
    last_error: Exception | None = None

    def failed(self, error: Exception) -> "SearchAttempt":
        """Return this attempt with its failure recorded."""
        return replace(self, last_error=error)

    def next(self, delay_seconds: float) -> "SearchAttempt":
        """Return the following attempt after waiting ``delay_seconds``."""
        return replace(
            self,
            number=self.number + 1,
            waited_seconds=self.waited_seconds + delay_seconds,
        )
