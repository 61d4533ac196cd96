"""Tests for latest-wins search behavior."""

import asyncio
from typing import Any

import httpx
import respx
from conftest import CATALOG_URL, card_payload

from pokeforge.models.failure import (
    RATE_LIMITED_MESSAGE,
    SLOW_API_MESSAGE,
    CatalogHTTPError,
    MaxRetriesError,
)
from pokeforge.services.catalog_client import CatalogClient
from pokeforge.services.query_builder import SearchFilters
from pokeforge.services.search_session import SearchSession


class GatedClient:
    """Catalog stand-in whose searches block until released."""

    def __init__(self, *, ignore_cancel: bool = False) -> None:
        self.started: dict[str, asyncio.Event] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.ignore_cancel = ignore_cancel

    def _events(self, query: str) -> tuple[asyncio.Event, asyncio.Event]:
        self.started.setdefault(query, asyncio.Event())
        self.gates.setdefault(query, asyncio.Event())
        return self.started[query], self.gates[query]

    async def wait_started(self, query: str) -> None:
        await self._events(query)[0].wait()

    def release(self, query: str) -> None:
        self._events(query)[1].set()

    async def search(self, query: str, page: int = 1, page_size: int = 20) -> dict[str, Any]:
        started, gate = self._events(query)
        started.set()
        try:
            await gate.wait()
        except asyncio.CancelledError:
            if not self.ignore_cancel:
                raise
        return {"data": [card_payload(query or "Any", card_id=query)], "totalCount": 40}


class FailingClient:
    def __init__(self, exc: BaseException) -> None:
        self.exc = exc

    async def search(self, query: str, page: int = 1, page_size: int = 20) -> dict[str, Any]:
        raise self.exc


PIKA = SearchFilters(name="Pika")
CHAR = SearchFilters(name="Char")


class TestApplyResults:
    @respx.mock
    async def test_applies_cards_and_pages(self, fake_sleep) -> None:
        payload = {"data": [card_payload("Pikachu")], "totalCount": 33}
        respx.get(f"{CATALOG_URL}/cards").mock(return_value=httpx.Response(200, json=payload))

        async with CatalogClient(base_url=CATALOG_URL, api_key="", sleep=fake_sleep) as client:
            session = SearchSession(client, page_size=16)
            applied = await session.search(PIKA, page=2)

        assert applied is True
        assert [c.name for c in session.cards] == ["Pikachu"]
        assert session.total_pages == 3
        assert session.page == 2
        assert session.loading is False
        assert session.error is None

    def test_default_filters_are_standard_legal(self) -> None:
        session = SearchSession(GatedClient())

        assert session.filters.legality == "standard"


class TestLatestWins:
    async def test_new_search_cancels_previous(self) -> None:
        client = GatedClient()
        session = SearchSession(client)

        first = asyncio.create_task(session.search(PIKA))
        await client.wait_started('name:"Pika*"')

        second = asyncio.create_task(session.search(CHAR))
        await client.wait_started('name:"Char*"')
        client.release('name:"Char*"')

        assert await second is True
        assert await first is False
        assert [c.id for c in session.cards] == ['name:"Char*"']
        assert session.filters == CHAR

    async def test_superseded_response_is_discarded(self) -> None:
        """A response that completes after being superseded never lands."""
        client = GatedClient(ignore_cancel=True)
        session = SearchSession(client)

        first = asyncio.create_task(session.search(PIKA))
        await client.wait_started('name:"Pika*"')

        second = asyncio.create_task(session.search(CHAR))
        assert await first is False

        client.release('name:"Char*"')
        assert await second is True
        assert [c.id for c in session.cards] == ['name:"Char*"']

    async def test_update_filters_keeps_other_filters(self) -> None:
        client = GatedClient()
        session = SearchSession(client, filters=SearchFilters(type="Fire", legality="standard"))
        query = 'name:"Char*" types:Fire legalities.standard:legal'
        client.release(query)

        await session.update_filters(name="Char")

        assert session.filters == SearchFilters(name="Char", type="Fire", legality="standard")

    async def test_clear_filters_keeps_name(self) -> None:
        client = GatedClient()
        session = SearchSession(client, filters=SearchFilters(name="Mew", type="Psychic"))
        client.release('name:"Mew*" legalities.standard:legal')

        await session.clear_filters()

        assert session.filters == SearchFilters(name="Mew", legality="standard")


class TestErrors:
    async def test_timeout_like_failure_shows_slow_message(self, make_card) -> None:
        session = SearchSession(FailingClient(MaxRetriesError(504, 3)))
        session.cards = [make_card("Old")]

        assert await session.search(PIKA) is False

        assert session.error == SLOW_API_MESSAGE
        assert session.cards == []
        assert session.filters == PIKA
        assert session.loading is False

    async def test_other_failure_shows_rate_limit_message(self) -> None:
        session = SearchSession(FailingClient(CatalogHTTPError(500)))

        await session.search(PIKA)

        assert session.error == RATE_LIMITED_MESSAGE

    async def test_network_timeout_shows_slow_message(self) -> None:
        session = SearchSession(FailingClient(httpx.ReadTimeout("slow")))

        await session.search(PIKA)

        assert session.error == SLOW_API_MESSAGE

    async def test_error_cleared_by_next_success(self) -> None:
        session = SearchSession(FailingClient(CatalogHTTPError(500)))
        await session.search(PIKA)

        client = GatedClient()
        client.release('name:"Char*"')
        session.client = client
        await session.search(CHAR)

        assert session.error is None
        assert len(session.cards) == 1

    @respx.mock
    async def test_malformed_card_shows_error(self, fake_sleep) -> None:
        """A result page with an unparseable card is reported like any failure."""
        payload = {"data": [{"id": "x"}], "totalCount": 1}
        respx.get(f"{CATALOG_URL}/cards").mock(return_value=httpx.Response(200, json=payload))

        async with CatalogClient(base_url=CATALOG_URL, api_key="", sleep=fake_sleep) as client:
            session = SearchSession(client)
            applied = await session.search(PIKA)

        assert applied is False
        assert session.error == RATE_LIMITED_MESSAGE
        assert session.cards == []
        assert session.loading is False
