"""Synthesized identifiers for products without a catalog id."""

import time

TEMP_ID_PREFIX = "temp_"


def synthesize_temp_id(
    name: str | None, brand: str | None = None, *, now_ms: int | None = None
) -> str:
    """Build a ``temp_`` id from the current time and a name/brand checksum."""
    timestamp = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    combined = f"{name or ''}{brand or ''}{timestamp}"
    checksum = sum(ord(char) for char in combined)
    return f"{TEMP_ID_PREFIX}{timestamp}_{checksum}"


def is_synthesized_id(value: str | None) -> bool:
    """Return True when the id was produced by ``synthesize_temp_id``."""
    return bool(value) and str(value).startswith(TEMP_ID_PREFIX)
