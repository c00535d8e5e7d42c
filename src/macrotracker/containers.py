"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from macrotracker.adapters.food_search_client import HttpxFoodSearchClient
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
from macrotracker.config import Settings
from macrotracker.services.background import BackgroundTasks
from macrotracker.services.food_search import FoodSearchService
from macrotracker.services.goals import MacroGoalService
from macrotracker.services.meals import MealLogService
from macrotracker.services.product_cache import ProductCacheWriter
from macrotracker.services.search import SearchRetrier
from macrotracker.services.subscriptions import SubscriptionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    background_tasks: BackgroundTasks
    food_search_service: FoodSearchService
    meal_log_service: MealLogService
    macro_goal_service: MacroGoalService
    subscription_service: SubscriptionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    search_client = HttpxFoodSearchClient.create(
        base_url=resolved_settings.supabase_url,
        api_key=resolved_settings.supabase_service_key,
        function_name=resolved_settings.food_search_function,
        timeout_seconds=resolved_settings.search_timeout_seconds,
    )
    background_tasks = BackgroundTasks()
    cache_writer = ProductCacheWriter(SupabaseProductCacheRepository(supabase_client))
    food_search_service = FoodSearchService(
        retrier=SearchRetrier(
            client=search_client,
            max_attempts=resolved_settings.search_max_attempts,
            base_delay_seconds=resolved_settings.search_base_delay_seconds,
            max_jitter_seconds=resolved_settings.search_max_jitter_seconds,
        ),
        cache_writer=cache_writer,
        background=background_tasks,
    )
    meal_log_service = MealLogService(
        repository=SupabaseMealLogRepository(supabase_client),
        cache_writer=cache_writer,
    )
    macro_goal_service = MacroGoalService(SupabaseMacroGoalRepository(supabase_client))
    subscription_service = SubscriptionService(
        SupabaseSubscriptionRepository(supabase_client)
    )

    async def close_resources() -> None:
        await background_tasks.drain()
        await search_client.close()

    return AppContainer(
        settings=resolved_settings,
        background_tasks=background_tasks,
        food_search_service=food_search_service,
        meal_log_service=meal_log_service,
        macro_goal_service=macro_goal_service,
        subscription_service=subscription_service,
        close_resources=close_resources,
    )
