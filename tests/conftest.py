"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4

import pytest

from macrotracker.adapters.food_search_client import FoodSearchClient
from macrotracker.config import Settings
from macrotracker.containers import AppContainer
from macrotracker.domain.goals import MacroGoals
from macrotracker.domain.meals import DailyLog, MealItemRecord
from macrotracker.domain.products import CachedProduct
from macrotracker.domain.subscriptions import Subscription
from macrotracker.errors import CacheWriteFailedError
from macrotracker.services.background import BackgroundTasks
from macrotracker.services.food_search import FoodSearchService
from macrotracker.services.goals import MacroGoalRepository, MacroGoalService
from macrotracker.services.meals import MealLogRepository, MealLogService
from macrotracker.services.product_cache import (
    ProductCacheRepository,
    ProductCacheWriter,
)
from macrotracker.services.search import SearchRetrier
from macrotracker.services.subscriptions import (
    SubscriptionRepository,
    SubscriptionService,
)

SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJyb2xlIjoic2VydmljZV9yb2xlIn0"
    ".c2lnbmF0dXJl"
)


@dataclass
class ScriptedSearchClient(FoodSearchClient):
    """Search client that replays scripted payloads or errors in order."""

    responses: list[object] = field(default_factory=list)
    queries: list[str] = field(default_factory=list)

    async def search(self, query: str) -> object:
        self.queries.append(query)
        response = self.responses.pop(0) if self.responses else []
        if isinstance(response, Exception):
            raise response
        return response


@dataclass
class RecordingSleep:
    """Async sleep stand-in that records requested delays."""

    delays: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@dataclass
class InMemoryProductCacheRepository(ProductCacheRepository):
    """In-memory product cache for tests."""

    rows: dict[str, CachedProduct] = field(default_factory=dict)
    failing_ids: set[str] = field(default_factory=set)
    insert_attempts: int = 0

    def exists(self, external_id: str) -> bool:
        return external_id in self.rows

    def insert(self, product: CachedProduct) -> None:
        self.insert_attempts += 1
        if product.external_id in self.failing_ids:
            raise CacheWriteFailedError(f"cannot cache {product.external_id}")
        self.rows.setdefault(product.external_id, product)


@dataclass
class InMemoryMealLogRepository(MealLogRepository):
    """In-memory meal log repository for tests."""

    logs: dict[UUID, DailyLog] = field(default_factory=dict)
    items: dict[UUID, MealItemRecord] = field(default_factory=dict)

    def get_daily_log(self, user_id: UUID, log_date: date) -> DailyLog | None:
        for log in self.logs.values():
            if log.user_id == user_id and log.log_date == log_date:
                return log
        return None

    def create_daily_log(self, user_id: UUID, log_date: date) -> DailyLog:
        log = DailyLog(id=uuid4(), user_id=user_id, log_date=log_date)
        self.logs[log.id] = log
        return log

    def create_meal_item(  # noqa: PLR0913
        self,
        daily_log_id: UUID,
        meal_type: str,
        external_id: str,
        name: str,
        quantity_grams: float,
    ) -> UUID:
        item = MealItemRecord(
            id=uuid4(),
            daily_log_id=daily_log_id,
            meal_type=meal_type,
            external_id=external_id,
            name=name,
            quantity_grams=quantity_grams,
        )
        self.items[item.id] = item
        return item.id

    def list_meal_items(self, daily_log_id: UUID) -> list[MealItemRecord]:
        return [
            item for item in self.items.values() if item.daily_log_id == daily_log_id
        ]

    def delete_meal_item(self, item_id: UUID) -> None:
        self.items.pop(item_id, None)

    def update_meal_item_quantity(self, item_id: UUID, quantity_grams: float) -> None:
        item = self.items[item_id]
        self.items[item_id] = MealItemRecord(
            id=item.id,
            daily_log_id=item.daily_log_id,
            meal_type=item.meal_type,
            external_id=item.external_id,
            name=item.name,
            quantity_grams=quantity_grams,
        )


@dataclass
class InMemoryMacroGoalRepository(MacroGoalRepository):
    """In-memory macro goal repository for tests."""

    goals: dict[UUID, MacroGoals] = field(default_factory=dict)

    def get_goals(self, user_id: UUID) -> MacroGoals | None:
        return self.goals.get(user_id)

    def upsert_goals(self, user_id: UUID, goals: MacroGoals) -> None:
        self.goals[user_id] = goals


@dataclass
class InMemorySubscriptionRepository(SubscriptionRepository):
    """In-memory subscription repository for tests."""

    subscriptions: dict[UUID, Subscription] = field(default_factory=dict)

    def get_subscription(self, user_id: UUID) -> Subscription | None:
        return self.subscriptions.get(user_id)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=SERVICE_KEY,
        api_token="api-token",
    )


@pytest.fixture
def search_client() -> ScriptedSearchClient:
    return ScriptedSearchClient()


@pytest.fixture
def cache_repository() -> InMemoryProductCacheRepository:
    return InMemoryProductCacheRepository()


@pytest.fixture
def container(
    settings: Settings,
    search_client: ScriptedSearchClient,
    cache_repository: InMemoryProductCacheRepository,
) -> AppContainer:
    background_tasks = BackgroundTasks()
    cache_writer = ProductCacheWriter(cache_repository)
    food_search_service = FoodSearchService(
        retrier=SearchRetrier(client=search_client, sleep=RecordingSleep()),
        cache_writer=cache_writer,
        background=background_tasks,
    )
    meal_log_service = MealLogService(
        repository=InMemoryMealLogRepository(),
        cache_writer=cache_writer,
    )

    async def close_resources() -> None:
        await background_tasks.drain()

    return AppContainer(
        settings=settings,
        background_tasks=background_tasks,
        food_search_service=food_search_service,
        meal_log_service=meal_log_service,
        macro_goal_service=MacroGoalService(InMemoryMacroGoalRepository()),
        subscription_service=SubscriptionService(InMemorySubscriptionRepository()),
        close_resources=close_resources,
    )
