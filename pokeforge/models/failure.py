"""
Catalog failure taxonomy.

Every error raised while talking to the catalog falls into one of a few
kinds. Only two messages ever reach the user; the distinction between them
is whether the failure looks like a slow upstream or like throttling.

Cancellation is not a failure. It surfaces as `asyncio.CancelledError` and
is never classified, retried, or shown.
"""

import asyncio
from enum import Enum

import httpx


class FailureKind(str, Enum):
    """Classification of catalog failures."""

    RATE_LIMITED = "rate_limited"
    UPSTREAM_TIMEOUT = "upstream_timeout"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    CANCELLED = "cancelled"
    LOOKUP_MISS = "lookup_miss"


class CatalogError(Exception):
    """Base class for catalog request failures."""

    kind: FailureKind = FailureKind.HTTP_ERROR


class CatalogHTTPError(CatalogError):
    """Raised for a non-retryable HTTP status."""

    def __init__(self, status_code: int, url: str = "") -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP {status_code}")


class MaxRetriesError(CatalogError):
    """
    Raised when every attempt was throttled or timed out upstream.

    Attributes:
        last_status: Status of the final attempt (429 or 504)
        attempts: Number of attempts made
    """

    def __init__(self, last_status: int, attempts: int) -> None:
        self.last_status = last_status
        self.attempts = attempts
        self.kind = (
            FailureKind.UPSTREAM_TIMEOUT if last_status == 504 else FailureKind.RATE_LIMITED
        )
        super().__init__(f"Max retries reached after {attempts} attempts (HTTP {last_status})")


SLOW_API_MESSAGE = (
    "The API is responding slowly — this happens with broad filters. "
    "Try a more specific search or pick a different filter combo."
)
RATE_LIMITED_MESSAGE = (
    "Failed to fetch cards. You may be rate-limited — try again in a moment."
)


def classify_failure(exc: BaseException) -> FailureKind:
    """Map an exception from the catalog client to a FailureKind."""
    if isinstance(exc, asyncio.CancelledError):
        return FailureKind.CANCELLED
    if isinstance(exc, MaxRetriesError):
        return exc.kind
    if isinstance(exc, CatalogHTTPError):
        if exc.status_code == 429:
            return FailureKind.RATE_LIMITED
        if exc.status_code == 504:
            return FailureKind.UPSTREAM_TIMEOUT
        return FailureKind.HTTP_ERROR
    if isinstance(exc, httpx.TimeoutException):
        return FailureKind.UPSTREAM_TIMEOUT
    if isinstance(exc, httpx.TransportError):
        return FailureKind.NETWORK_ERROR
    return FailureKind.HTTP_ERROR


def looks_slow(exc: BaseException) -> bool:
    """True when a failure smells like a timeout or retry exhaustion."""
    return isinstance(exc, MaxRetriesError) or classify_failure(exc) == (
        FailureKind.UPSTREAM_TIMEOUT
    )


def user_message(exc: BaseException) -> str | None:
    """
    The message shown to the user for a failed search.

    Returns None for cancellation, which is never surfaced.
    """
    if classify_failure(exc) == FailureKind.CANCELLED:
        return None
    return SLOW_API_MESSAGE if looks_slow(exc) else RATE_LIMITED_MESSAGE
