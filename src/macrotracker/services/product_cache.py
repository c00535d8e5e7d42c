"""Best-effort cache of searched products."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from macrotracker.domain.products import CachedProduct, ProductRecord
from macrotracker.services.identifiers import synthesize_temp_id

_logger = logging.getLogger(__name__)


class ProductCacheRepository(Protocol):
    """Persistence interface for the product cache."""

    def exists(self, external_id: str) -> bool:
        """Return True if a row with this id is cached."""

    def insert(self, product: CachedProduct) -> None:
        """Insert a cache row."""


@dataclass
class ProductCacheWriter:
    """Writes products into the cache, skipping ones already present."""

    repository: ProductCacheRepository

    async def write(self, products: Sequence[ProductRecord]) -> int:
        """Cache ``products`` and return how many rows were inserted.

        Failures are logged per product and never raised.
        """
        inserted = 0
        for product in products:
            external_id = product.external_id or synthesize_temp_id(
                product.name, product.brand
            )
            if not external_id:
                continue
            try:
                if await asyncio.to_thread(self.repository.exists, external_id):
                    continue
                await asyncio.to_thread(
                    self.repository.insert,
                    CachedProduct.from_record(product, external_id),
                )
            except Exception:
                _logger.exception("Failed to cache product %s", external_id)
                continue
            inserted += 1
        _logger.info("Cached %s of %s products", inserted, len(products))
        return inserted
