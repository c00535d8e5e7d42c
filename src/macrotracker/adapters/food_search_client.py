"""Client for the food-search edge function."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from macrotracker.errors import (
    MalformedResponseError,
    SearchEndpointError,
    SearchTransportError,
)


class FoodSearchClient(Protocol):
    """Interface for the remote food search endpoint."""

    async def search(self, query: str) -> object:
        """Search products by name and return the decoded JSON payload."""


@dataclass
class HttpxFoodSearchClient(FoodSearchClient):
    """HTTPX-backed client for a Supabase edge function."""

    base_url: str
    api_key: str
    http_client: httpx.AsyncClient
    function_name: str = "food-search"
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls,
        base_url: str,
        api_key: str,
        function_name: str = "food-search",
        timeout_seconds: float = 15,
    ) -> "HttpxFoodSearchClient":
        """Create a search client with a managed httpx session."""
        return cls(
            base_url=base_url,
            api_key=api_key,
            http_client=httpx.AsyncClient(),
            function_name=function_name,
            timeout_seconds=timeout_seconds,
        )

    async def search(self, query: str) -> object:
        """Invoke the edge function with ``{"query": query}``."""
        url = f"{self.base_url.rstrip('/')}/functions/v1/{self.function_name}"
        try:
            response = await self.http_client.post(
                url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "apikey": self.api_key,
                },
                json={"query": query},
                timeout=self.timeout_seconds,
            )
        except httpx.TransportError as exc:
            raise SearchTransportError(f"Network error: {exc}") from exc
        if response.is_error:
            raise SearchEndpointError(
                _error_message(response), status=response.status_code
            )
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(
                "Invalid response from server", status=response.status_code
            ) from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _error_message(response: httpx.Response) -> str:
    """Pull an error message out of an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message", "msg"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    text = response.text.strip()
    if text:
        return text
    return f"HTTP {response.status_code} {response.reason_phrase}".strip()
