"""
Archetype and decklist resolution.

Turns name/count lists into concrete catalog cards with one exact-name
lookup per entry. Lookups run strictly one at a time with a fixed pause
between them.

Entries that cannot be resolved are logged and skipped. A partial deck is
an acceptable result.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import httpx

from pokeforge.config import ARCHETYPE_LOOKUP_DELAY_SECONDS
from pokeforge.models.card import Card
from pokeforge.models.deck import Archetype, ArchetypeEntry
from pokeforge.models.failure import CatalogError, FailureKind, classify_failure
from pokeforge.parsers.decklist import parse_decklist
from pokeforge.services.catalog_client import CatalogClient, Sleep
from pokeforge.services.deck_store import DeckStore

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class SequentialQueue:
    """
    Task queue with a concurrency of one and a fixed delay between tasks.

    Batches submitted from different coroutines never interleave.
    """

    def __init__(self, delay: float, sleep: Sleep = asyncio.sleep) -> None:
        self.delay = delay
        self._sleep = sleep
        self._lock = asyncio.Lock()

    async def map(self, items: Sequence[T], task: Callable[[T], Awaitable[R]]) -> list[R]:
        """Run `task` over `items` in order, pausing between successive tasks."""
        results: list[R] = []
        async with self._lock:
            for index, item in enumerate(items):
                if index > 0:
                    await self._sleep(self.delay)
                results.append(await task(item))
        return results


class ArchetypeLoader:
    """
    Resolves archetypes and pasted decklists against the catalog.

    Usage:
        loader = ArchetypeLoader(client)
        await loader.load_into(store, get_archetype("Charizard ex"))
    """

    def __init__(
        self,
        client: CatalogClient,
        delay: float = ARCHETYPE_LOOKUP_DELAY_SECONDS,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.client = client
        self.queue = SequentialQueue(delay, sleep=sleep)

    async def _lookup(self, entry: ArchetypeEntry) -> Card | None:
        try:
            card = await self.client.find_card_by_name(entry.name)
        except (CatalogError, httpx.HTTPError, ValueError) as e:
            logger.warning(
                "Could not find: %s (%s: %s)", entry.name, classify_failure(e).value, e
            )
            return None

        if card is None:
            logger.warning(
                "Could not find: %s (%s)", entry.name, FailureKind.LOOKUP_MISS.value
            )
        return card

    async def resolve(self, entries: Sequence[ArchetypeEntry]) -> list[Card]:
        """
        Resolve entries to a deck, in entry order.

        Each resolved card is repeated `count` times.
        """
        resolved = await self.queue.map(entries, self._lookup)

        deck: list[Card] = []
        for entry, card in zip(entries, resolved, strict=True):
            if card is not None:
                deck.extend([card] * entry.count)
        return deck

    async def load(self, archetype: Archetype) -> list[Card]:
        """Resolve an archetype's Pokémon, Trainer and Energy entries."""
        logger.info("Loading archetype %s (%d entries)", archetype.name, len(archetype.entries()))
        return await self.resolve(archetype.entries())

    async def import_text(self, text: str) -> list[Card]:
        """
        Resolve a pasted decklist.

        Lines that are not card entries (headers, notes) are ignored. Set codes
        and numbers are not used for matching.
        """
        parsed = parse_decklist(text)
        entries = [ArchetypeEntry(name=e.name, count=e.count) for e in parsed.entries]
        return await self.resolve(entries)

    async def load_into(self, store: DeckStore, archetype: Archetype) -> list[Card]:
        """
        Load an archetype into the working deck and rename it.

        The store is left untouched if nothing resolved.
        """
        cards = await self.load(archetype)
        if cards:
            store.replace_all(cards)
            store.rename(archetype.name)
        return cards

    async def import_into(self, store: DeckStore, text: str) -> list[Card]:
        """Replace the working deck with a pasted decklist, if anything resolved."""
        cards = await self.import_text(text)
        if cards:
            store.replace_all(cards)
        return cards
