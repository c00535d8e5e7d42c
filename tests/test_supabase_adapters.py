"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

import pytest
from postgrest.exceptions import APIError

from macrotracker.adapters.supabase_macro_goal_repository import (
    SupabaseMacroGoalRepository,
)
from macrotracker.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from macrotracker.adapters.supabase_product_cache_repository import (
    SupabaseProductCacheRepository,
)
from macrotracker.adapters.supabase_subscription_repository import (
    SupabaseSubscriptionRepository,
)
from macrotracker.domain.goals import MacroGoals
from macrotracker.domain.products import CachedProduct
from macrotracker.errors import CacheWriteFailedError


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    error: Exception | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _cached(external_id: str = "7310865") -> CachedProduct:
    return CachedProduct(
        external_id=external_id,
        name="Milk",
        brand=None,
        calories_100g=64,
        protein_100g=3.4,
        carbs_100g=4.8,
        fat_100g=3.0,
        image_url=None,
    )


def test_product_cache_exists_and_insert() -> None:
    client = FakeSupabaseClient()
    table = client.table("livsmedelskache")
    table.queue("select", [{"off_id": "7310865"}])

    repository = SupabaseProductCacheRepository(client)

    assert repository.exists("7310865") is True
    assert repository.exists("other") is False
    repository.insert(_cached())
    assert table.last_payload == {
        "off_id": "7310865",
        "produktnamn": "Milk",
        "varumarke": None,
        "energi_kcal_100g": 64,
        "protein_100g": 3.4,
        "kolhydrater_100g": 4.8,
        "fett_100g": 3.0,
        "bild_url": None,
    }


def test_product_cache_ignores_duplicate_key() -> None:
    client = FakeSupabaseClient()
    client.table("livsmedelskache").error = APIError(
        {"message": "duplicate key value", "code": "23505"}
    )

    SupabaseProductCacheRepository(client).insert(_cached())


def test_product_cache_wraps_other_errors() -> None:
    client = FakeSupabaseClient()
    client.table("livsmedelskache").error = APIError(
        {"message": "permission denied", "code": "42501"}
    )

    with pytest.raises(CacheWriteFailedError, match="permission denied"):
        SupabaseProductCacheRepository(client).insert(_cached())


def test_product_cache_wraps_lookup_errors() -> None:
    client = FakeSupabaseClient()
    client.table("livsmedelskache").error = APIError(
        {"message": "relation does not exist", "code": "42P01"}
    )

    with pytest.raises(CacheWriteFailedError, match="relation does not exist"):
        SupabaseProductCacheRepository(client).exists("7310865")


def test_meal_log_repository() -> None:
    client = FakeSupabaseClient()
    logs = client.table("daglig_matlogg")
    items = client.table("maltidsinlagg")
    user_id = uuid4()
    log_id = str(uuid4())
    item_id = str(uuid4())
    logs.queue(
        "insert", [{"id": log_id, "user_id": str(user_id), "loggdatum": "2026-10-18"}]
    )
    items.queue("insert", [{"id": item_id}])

    repository = SupabaseMealLogRepository(client)

    assert repository.get_daily_log(user_id, date(2026, 10, 18)) is None
    created = repository.create_daily_log(user_id, date(2026, 10, 18))
    assert str(created.id) == log_id
    assert created.log_date == date(2026, 10, 18)

    new_item = repository.create_meal_item(
        daily_log_id=created.id,
        meal_type="lunch",
        external_id="7310865",
        name="Milk",
        quantity_grams=200,
    )
    assert str(new_item) == item_id
    assert items.last_payload == {
        "daglig_logg_id": log_id,
        "maltidstyp": "lunch",
        "off_id": "7310865",
        "custom_namn": "Milk",
        "antal_gram": 200,
    }

    items.queue(
        "select",
        [
            {
                "id": item_id,
                "daglig_logg_id": log_id,
                "maltidstyp": "lunch",
                "off_id": "7310865",
                "custom_namn": "Milk",
                "antal_gram": 200,
            }
        ],
    )
    [listed] = repository.list_meal_items(created.id)
    assert listed.quantity_grams == 200
    assert listed.external_id == "7310865"

    repository.update_meal_item_quantity(new_item, 50)
    assert items.last_payload == {"antal_gram": 50}
    repository.delete_meal_item(new_item)
    assert ("id", item_id) in items.last_filters


def test_macro_goal_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("makro_mal")
    table.queue(
        "select",
        [{"kalorier_kcal": 2200, "protein_g": 160, "kolhydrater_g": 240, "fett_g": 70}],
    )
    repository = SupabaseMacroGoalRepository(client)

    goals = repository.get_goals(uuid4())
    assert goals == MacroGoals(calories_kcal=2200, protein_g=160, carbs_g=240, fat_g=70)
    assert repository.get_goals(uuid4()) is None

    repository.upsert_goals(uuid4(), goals)
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["kolhydrater_g"] == 240
    assert "updated_at" in table.last_payload


def test_subscription_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("stripe_user_subscriptions")
    table.queue(
        "select",
        [
            {
                "subscription_status": "trialing",
                "price_id": "price_123",
                "current_period_end": 1_800_000_000,
                "cancel_at_period_end": False,
            }
        ],
    )
    repository = SupabaseSubscriptionRepository(client)

    subscription = repository.get_subscription(uuid4())
    assert subscription is not None
    assert subscription.is_active
    assert subscription.current_period_end is not None
    assert subscription.current_period_end.year == 2027
    assert repository.get_subscription(uuid4()) is None
