"""
Card search session.

Headless equivalent of the search panel: holds the current filters and the
visible result page, and guarantees that only the most recently issued
search can update that state.

A new search cancels the previous in-flight one. A response that arrives
after it was superseded is dropped even if it completed.
"""

import asyncio
import dataclasses
import logging
import math

import httpx

from pokeforge.models.card import Card
from pokeforge.models.failure import CatalogError, user_message
from pokeforge.services.catalog_client import CatalogClient
from pokeforge.services.query_builder import SearchFilters, build_query

logger = logging.getLogger(__name__)

DEFAULT_SESSION_PAGE_SIZE = 16
DEFAULT_FILTERS = SearchFilters(legality="standard")


class SearchSession:
    """
    Latest-wins card search state.

    Attributes:
        filters: Filters of the most recent search
        cards: Visible results
        page: Page currently shown (1-based)
        total_pages: Page count for the current filters
        error: User-facing message of the last failed search, if any
        loading: True while the latest search is in flight
    """

    def __init__(
        self,
        client: CatalogClient,
        page_size: int = DEFAULT_SESSION_PAGE_SIZE,
        filters: SearchFilters = DEFAULT_FILTERS,
    ) -> None:
        self.client = client
        self.page_size = page_size
        self.filters = filters
        self.cards: list[Card] = []
        self.page = 1
        self.total_pages = 1
        self.error: str | None = None
        self.loading = False
        self._generation = 0
        self._task: asyncio.Task | None = None

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def search(self, filters: SearchFilters | None = None, page: int = 1) -> bool:
        """
        Run a search and apply its results.

        Returns:
            True if this search's results were applied; False if it failed
            or was superseded by a newer search.
        """
        if filters is not None:
            self.filters = filters

        if self._task is not None and not self._task.done():
            self._task.cancel()

        self._generation += 1
        generation = self._generation
        self.loading = True
        self.error = None

        query = build_query(self.filters)
        task = asyncio.create_task(self.client.search(query, page, self.page_size))
        self._task = task

        try:
            data = await task
            if not self._is_current(generation):
                logger.debug("Dropping superseded results for %r", query)
                return False
            cards = [Card.from_api(item) for item in data.get("data") or []]
            total_pages = math.ceil((data.get("totalCount") or 0) / self.page_size)
        except asyncio.CancelledError:
            if not self._is_current(generation):
                return False
            raise
        except (CatalogError, httpx.HTTPError, TypeError, ValueError) as e:
            if not self._is_current(generation):
                return False
            logger.warning("Search failed for %r: %s", query, e)
            self.error = user_message(e)
            self.cards = []
            self.loading = False
            return False

        self.cards = cards
        self.total_pages = total_pages
        self.page = page
        self.loading = False
        return True

    async def update_filters(self, **changes: str) -> bool:
        """Change some filters and search from the first page."""
        return await self.search(dataclasses.replace(self.filters, **changes), page=1)

    async def clear_filters(self) -> bool:
        """Reset every filter except the name back to the defaults."""
        return await self.search(dataclasses.replace(DEFAULT_FILTERS, name=self.filters.name))

    async def go_to_page(self, page: int) -> bool:
        return await self.search(page=page)
