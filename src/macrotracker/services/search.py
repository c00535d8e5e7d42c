"""Search endpoint calls with retry, backoff and jitter."""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from macrotracker.adapters.food_search_client import FoodSearchClient
from macrotracker.domain.products import SearchAttempt, SearchState
from macrotracker.errors import (
    MalformedResponseError,
    NetworkUnavailableError,
    SearchEndpointError,
    SearchFailedError,
    SearchTransportError,
)

NOT_FOUND_STATUS = 404

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Outcome:
    state: SearchState
    payload: list[object] | None = None
    error: Exception | None = None


@dataclass
class SearchRetrier:
    """Calls the search endpoint up to ``max_attempts`` times.

    Each call walks ATTEMPTING -> (SUCCEEDED | NOT_FOUND | BACKOFF | EXHAUSTED).
    BACKOFF waits ``base_delay_seconds * 2 ** (attempt - 1)`` plus a jitter in
    ``[0, max_jitter_seconds)`` and returns to ATTEMPTING.
    """

    client: FoodSearchClient
    max_attempts: int = 3
    base_delay_seconds: float = 1.0
    max_jitter_seconds: float = 0.2
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    rng: random.Random = field(default_factory=random.Random)

    async def search(self, query: str) -> list[object]:
        """Return the raw results for ``query``; ``[]`` when nothing matches."""
        attempt = SearchAttempt()
        state = SearchState.ATTEMPTING
        payload: list[object] = []
        while True:
            if state is SearchState.ATTEMPTING:
                _logger.info(
                    "Searching products: query=%s attempt=%s", query, attempt.number
                )
                outcome = await self._attempt(query, attempt)
                if outcome.error is not None:
                    attempt = attempt.failed(outcome.error)
                state = outcome.state
                payload = outcome.payload or []
            elif state is SearchState.BACKOFF:
                delay = self.backoff_delay(attempt.number)
                _logger.warning(
                    "Search attempt %s/%s failed (%s), retrying in %.0fms",
                    attempt.number,
                    self.max_attempts,
                    attempt.last_error,
                    delay * 1000,
                )
                await self.sleep(delay)
                attempt = attempt.next(delay)
                state = SearchState.ATTEMPTING
            elif state is SearchState.SUCCEEDED:
                return payload
            elif state is SearchState.NOT_FOUND:
                return []
            else:
                _logger.error(
                    "Search gave up after %s attempts, waited %.0fms in backoff",
                    attempt.number,
                    attempt.waited_seconds * 1000,
                )
                raise _terminal_error(attempt) from attempt.last_error

    def backoff_delay(self, attempt_number: int) -> float:
        """Seconds to wait after the given failed attempt."""
        jitter = self.rng.random() * self.max_jitter_seconds
        return self.base_delay_seconds * 2 ** (attempt_number - 1) + jitter

    async def _attempt(self, query: str, attempt: SearchAttempt) -> _Outcome:
        try:
            payload = await self.client.search(query)
        except SearchEndpointError as exc:
            if exc.status == NOT_FOUND_STATUS:
                return _Outcome(SearchState.NOT_FOUND)
            return self._failure(exc, attempt)
        except Exception as exc:
            return self._failure(exc, attempt)
        if not isinstance(payload, list):
            return self._failure(
                MalformedResponseError("Invalid response from server"), attempt
            )
        return _Outcome(SearchState.SUCCEEDED, payload=payload)

    def _failure(self, error: Exception, attempt: SearchAttempt) -> _Outcome:
        _logger.error(
            "Error searching products (attempt %s): %s", attempt.number, error
        )
        if attempt.number >= self.max_attempts:
            return _Outcome(SearchState.EXHAUSTED, error=error)
        return _Outcome(SearchState.BACKOFF, error=error)


def _terminal_error(attempt: SearchAttempt) -> Exception:
    """Map the last failure of an exhausted search to a caller-facing error."""
    error = attempt.last_error
    if isinstance(error, SearchTransportError | ConnectionError):
        return NetworkUnavailableError()
    message = str(error) if error is not None else ""
    return SearchFailedError(f"Search failed: {message}" if message else None)
