"""Food search: fetch, normalize and cache products."""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

from macrotracker.domain.products import ProductRecord
from macrotracker.services.background import BackgroundTasks
from macrotracker.services.identifiers import synthesize_temp_id
from macrotracker.services.product_cache import ProductCacheWriter
from macrotracker.services.search import SearchRetrier

_ID_KEYS = ("off_id", "barcode", "code")
_UNKNOWN_NAME = "Unknown product"

_logger = logging.getLogger(__name__)


@dataclass
class FoodSearchService:
    """Searches products by name and caches what it finds."""

    retrier: SearchRetrier
    cache_writer: ProductCacheWriter
    background: BackgroundTasks

    async def search_products_by_name(self, query: str) -> list[ProductRecord]:
        """Return normalized products matching ``query``.

        Raises ``NetworkUnavailableError`` or ``SearchFailedError`` once retries
        are exhausted. Caching runs in the background and never fails the call.
        """
        cleaned = query.strip()
        if not cleaned:
            return []
        raw_items = await self.retrier.search(cleaned)
        products: list[ProductRecord] = []
        for item in raw_items:
            if not isinstance(item, Mapping):
                _logger.warning("Skipping non-object search result: %r", item)
                continue
            products.append(normalize_product(item))
        if products:
            self.background.spawn(
                self.cache_writer.write(products), name=f"cache-products:{cleaned}"
            )
        return products


def normalize_product(item: Mapping[str, object]) -> ProductRecord:
    """Normalize a raw search result into a ``ProductRecord``."""
    name = _to_text(item.get("name") or item.get("product_name")) or _UNKNOWN_NAME
    brand = _to_text(item.get("brand") or item.get("brands"))
    external_id = _resolve_id(item) or synthesize_temp_id(name, brand)
    sugar = item.get("sugar")
    return ProductRecord(
        name=name,
        brand=brand,
        calories=_to_float(item.get("calories")),
        protein=_to_float(item.get("protein")),
        fat=_to_float(item.get("fat")),
        carbs=_to_float(item.get("carbs")),
        sugar=_to_float(sugar) if sugar is not None else None,
        image_url=_to_text(item.get("image_url")),
        external_id=external_id,
    )


def _resolve_id(item: Mapping[str, object]) -> str:
    for key in _ID_KEYS:
        value = _to_text(item.get(key))
        if value:
            return value
    return ""


def _to_text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _to_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        if isinstance(value, int | float):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.replace(",", "."))
        else:
            return 0.0
    except (OverflowError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return max(number, 0.0)
