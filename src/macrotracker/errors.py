"""Error types for the food search pipeline."""


class SearchError(Exception):
    """Base class for search errors surfaced to callers."""


class NetworkUnavailableError(SearchError):
    """The search service could not be reached after all attempts."""

    default_message = (
        "Could not connect to the server. "
        "Check your internet connection and try again."
    )

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class SearchFailedError(SearchError):
    """The search failed for a reason other than connectivity."""

    default_message = "Something went wrong while searching. Try again shortly."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class SearchEndpointError(Exception):
    """Error reported by the remote search endpoint."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class SearchTransportError(SearchEndpointError):
    """Connectivity failure while calling the search endpoint."""


class MalformedResponseError(SearchEndpointError):
    """The search endpoint returned a payload that is not a list."""


class CacheWriteFailedError(Exception):
    """A product could not be written to the local cache."""
