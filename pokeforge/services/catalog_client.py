"""
Pokémon TCG catalog client.

Issues catalog requests with retry and backoff, and serves repeated
searches from the injected caches.

Retry policy:
- 429 (rate limited): wait, double the backoff, retry
- 504 (gateway timeout): wait, grow the backoff by 1.5x, retry
- other non-2xx: fail immediately
- transport error: wait, double the backoff, retry; re-raise on the last attempt

Cancellation is asyncio task cancellation. `asyncio.CancelledError` escapes
both the request and the backoff sleep and is never retried.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Any

import httpx

from pokeforge.config import (
    CARD_FIELDS,
    DEFAULT_PAGE_SIZE,
    INITIAL_BACKOFF_SECONDS,
    MAX_ATTEMPTS,
    settings,
)
from pokeforge.models.card import Card
from pokeforge.models.failure import CatalogHTTPError, MaxRetriesError
from pokeforge.services.query_builder import exact_name_query
from pokeforge.services.response_cache import SearchCache, SetsCache

logger = logging.getLogger(__name__)

RATE_LIMITED = 429
GATEWAY_TIMEOUT = 504

# Growth factor applied to the backoff after each kind of retry
RATE_LIMIT_BACKOFF_FACTOR = 2.0
TIMEOUT_BACKOFF_FACTOR = 1.5
NETWORK_BACKOFF_FACTOR = 2.0

SETS_PAGE_SIZE = 250

Sleep = Callable[[float], Awaitable[Any]]


class CatalogClient:
    """
    Async client for the catalog read API.

    Usage:
        async with CatalogClient(search_cache=SearchCache()) as client:
            page = await client.search('name:"Pikachu*"')
    """

    def __init__(
        self,
        search_cache: SearchCache | None = None,
        sets_cache: SetsCache | None = None,
        *,
        http: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.search_cache = search_cache if search_cache is not None else SearchCache()
        self.sets_cache = sets_cache
        self.base_url = (base_url or settings.catalog_base_url).rstrip("/")
        self.api_key = settings.pokemontcg_api_key if api_key is None else api_key
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=30.0, follow_redirects=True)
        self._sleep = sleep

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        return {"X-Api-Key": self.api_key} if self.api_key else {}

    async def fetch_with_retry(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        max_attempts: int = MAX_ATTEMPTS,
        initial_backoff: float = INITIAL_BACKOFF_SECONDS,
    ) -> Any:
        """
        GET a catalog URL and return the decoded JSON body.

        Args:
            url: Absolute URL to request
            params: Query parameters
            max_attempts: Total attempts, including the first
            initial_backoff: Seconds to wait before the first retry

        Raises:
            CatalogHTTPError: On a non-retryable HTTP status
            MaxRetriesError: When every attempt was throttled or timed out
            httpx.TransportError: When the final attempt fails at the network level
            asyncio.CancelledError: When the calling task is cancelled
        """
        backoff = initial_backoff
        last_status = 0

        for attempt in range(1, max_attempts + 1):
            final = attempt == max_attempts

            try:
                response = await self._http.get(url, params=params, headers=self._headers())
            except httpx.TransportError as e:
                if final:
                    raise
                logger.warning(
                    "Network error (%s), retry %d/%d in %.1fs", e, attempt, max_attempts, backoff
                )
                await self._sleep(backoff)
                backoff *= NETWORK_BACKOFF_FACTOR
                continue

            status = response.status_code
            if status in (RATE_LIMITED, GATEWAY_TIMEOUT):
                last_status = status
                if final:
                    break
                if status == RATE_LIMITED:
                    logger.warning(
                        "Rate limited, retry %d/%d in %.1fs", attempt, max_attempts, backoff
                    )
                    await self._sleep(backoff)
                    backoff *= RATE_LIMIT_BACKOFF_FACTOR
                else:
                    logger.warning(
                        "Gateway timeout (504), retry %d/%d in %.1fs",
                        attempt,
                        max_attempts,
                        backoff,
                    )
                    await self._sleep(backoff)
                    backoff *= TIMEOUT_BACKOFF_FACTOR
                continue

            if not response.is_success:
                raise CatalogHTTPError(status, url)

            return response.json()

        raise MaxRetriesError(last_status, max_attempts)

    async def search(
        self,
        query: str,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> dict[str, Any]:
        """
        Search cards, serving repeats from the search cache.

        Args:
            query: Catalog `q` expression; empty means no filter
            page: 1-based page number
            page_size: Cards per page

        Returns:
            Raw response body: {"data": [...], "page", "pageSize", "count", "totalCount"}

        Raises:
            ValueError: If the body is not JSON or not a JSON object
        """
        key = (query, page, page_size)
        cached = self.search_cache.get(key)
        if cached is not None:
            logger.debug("Search cache hit for %r page %d", query, page)
            return cached

        params: dict[str, Any] = {
            "page": page,
            "pageSize": page_size,
            "orderBy": "-set.releaseDate",
            "select": CARD_FIELDS,
        }
        if query:
            params["q"] = query

        data = await self.fetch_with_retry(f"{self.base_url}/cards", params)
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected search response: {type(data).__name__}")
        self.search_cache.put(key, data)
        return data

    async def find_card_by_name(self, name: str) -> Card | None:
        """
        Resolve a card by exact name.

        Returns the first catalog match (most recent printing), or None.
        """
        data = await self.search(exact_name_query(name), page=1, page_size=1)
        cards = data.get("data") or []
        if not isinstance(cards, list):
            raise ValueError(f"Unexpected card list: {type(cards).__name__}")
        if not cards:
            return None
        return Card.from_api(cards[0])

    async def load_sets(self) -> list[dict[str, Any]]:
        """
        Load the catalog's set list, newest first.

        Reads the persisted sets cache before falling back to the network,
        and writes back after every successful network refresh.
        """
        if self.sets_cache is not None:
            cached = await self.sets_cache.load()
            if cached is not None:
                logger.info("Sets loaded from cache (%d sets)", len(cached))
                return cached

        body = await self.fetch_with_retry(
            f"{self.base_url}/sets",
            {"orderBy": "-releaseDate", "pageSize": SETS_PAGE_SIZE},
        )
        sets: list[dict[str, Any]] = body.get("data") or []

        if self.sets_cache is not None:
            await self.sets_cache.store(sets)

        logger.info("Sets loaded from API (%d sets)", len(sets))
        return sets
