"""
Blob store operations.

Provides async functions for reading and writing named JSON blobs, and the
saved-deck collection stored in one of them.
"""

import json
import logging
from datetime import date
from typing import Any

from pydantic import ValidationError
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from pokeforge.models.card import Card
from pokeforge.models.db import BlobDB
from pokeforge.models.deck import SavedDeck

logger = logging.getLogger(__name__)

SAVED_DECKS_KEY = "ptcg-decks"
SETS_CACHE_KEY = "ptcg-sets-cache"


# --- Raw blobs ---


async def get_blob(session: AsyncSession, key: str) -> str | None:
    """
    Get the raw text stored under a key.

    Returns None if nothing is stored.
    """
    blob = await session.get(BlobDB, key)
    return blob.value if blob else None


async def put_blob(session: AsyncSession, key: str, value: str) -> None:
    """Insert or overwrite the text stored under a key."""
    blob = await session.get(BlobDB, key)
    if blob is None:
        session.add(BlobDB(key=key, value=value))
    else:
        blob.value = value
    await session.flush()


async def delete_blob(session: AsyncSession, key: str) -> bool:
    """
    Delete the blob stored under a key.

    Returns True if a blob was deleted.
    """
    result = await session.execute(delete(BlobDB).where(BlobDB.key == key))
    return bool(result.rowcount)


# --- Saved decks ---


def saved_deck_to_dict(deck: SavedDeck) -> dict[str, Any]:
    """Convert a saved deck to its stored JSON shape."""
    return {
        "name": deck.name,
        "cards": [card.to_api() for card in deck.cards],
        "date": deck.date.isoformat(),
    }


def saved_deck_from_dict(data: dict[str, Any]) -> SavedDeck:
    """
    Convert a stored JSON object back to a saved deck.

    Raises:
        KeyError: If a required field is missing
        ValueError: If the date or a card is malformed
    """
    return SavedDeck(
        name=str(data["name"]),
        cards=tuple(Card.from_api(card) for card in data["cards"]),
        date=date.fromisoformat(data["date"]),
    )


async def load_saved_decks(session: AsyncSession) -> list[SavedDeck]:
    """
    Load the saved-deck collection, most recent first.

    A missing or unreadable collection is treated as empty. Individual
    malformed entries are skipped.
    """
    raw = await get_blob(session, SAVED_DECKS_KEY)
    if raw is None:
        return []

    try:
        entries = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Saved decks blob is corrupt; starting with no saved decks")
        return []

    if not isinstance(entries, list):
        logger.warning("Saved decks blob is not a list; starting with no saved decks")
        return []

    decks: list[SavedDeck] = []
    for entry in entries:
        try:
            decks.append(saved_deck_from_dict(entry))
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.warning("Skipping malformed saved deck: %s", e)
    return decks


async def store_saved_decks(session: AsyncSession, decks: list[SavedDeck]) -> None:
    """Replace the stored saved-deck collection."""
    payload = json.dumps([saved_deck_to_dict(deck) for deck in decks], ensure_ascii=False)
    await put_blob(session, SAVED_DECKS_KEY, payload)
