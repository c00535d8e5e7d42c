"""Supabase repository for the product cache."""

import logging
from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client

from macrotracker.domain.products import CachedProduct
from macrotracker.errors import CacheWriteFailedError
from macrotracker.services.product_cache import ProductCacheRepository

CACHE_TABLE = "livsmedelskache"
UNIQUE_VIOLATION = "23505"

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseProductCacheRepository(ProductCacheRepository):
    """Supabase-backed product cache keyed by ``off_id``."""

    client: Client

    def exists(self, external_id: str) -> bool:
        """Return True if the product is already cached."""
        try:
            response = (
                self.client.table(CACHE_TABLE)
                .select("off_id")
                .eq("off_id", external_id)
                .limit(1)
                .execute()
            )
        except APIError as exc:
            raise CacheWriteFailedError(
                f"Failed to look up cached product {external_id}: {exc.message}"
            ) from exc
        return bool(response.data)

    def insert(self, product: CachedProduct) -> None:
        """Insert a cache row; a duplicate key counts as already cached."""
        try:
            self.client.table(CACHE_TABLE).insert(
                {
                    "off_id": product.external_id,
                    "produktnamn": product.name,
                    "varumarke": product.brand,
                    "energi_kcal_100g": product.calories_100g,
                    "protein_100g": product.protein_100g,
                    "kolhydrater_100g": product.carbs_100g,
                    "fett_100g": product.fat_100g,
                    "bild_url": product.image_url,
                }
            ).execute()
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                _logger.info("Product %s cached concurrently", product.external_id)
                return
            raise CacheWriteFailedError(
                f"Failed to cache product {product.external_id}: {exc.message}"
            ) from exc
