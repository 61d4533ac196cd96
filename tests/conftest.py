from collections.abc import Callable
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pokeforge.models.card import Card
from pokeforge.models.db import Base

CATALOG_URL = "https://catalog.test/v2"


def card_payload(
    name: str,
    supertype: str = "Pokémon",
    *,
    card_id: str | None = None,
    hp: str | None = None,
    types: list[str] | None = None,
    subtypes: list[str] | None = None,
    set_code: str = "OBF",
    number: str = "1",
) -> dict[str, Any]:
    """Build a catalog JSON object the way the API returns it."""
    payload: dict[str, Any] = {
        "id": card_id or f"{set_code.lower()}-{name.lower().replace(' ', '-')}",
        "name": name,
        "supertype": supertype,
        "number": number,
        "set": {"id": set_code.lower(), "name": "Obsidian Flames", "ptcgoCode": set_code},
        "legalities": {"standard": "Legal", "expanded": "Legal", "unlimited": "Legal"},
    }
    if hp is not None:
        payload["hp"] = hp
    if types is not None:
        payload["types"] = types
    if subtypes is not None:
        payload["subtypes"] = subtypes
    return payload


@pytest.fixture
def make_card() -> Callable[..., Card]:
    """Factory for catalog cards."""

    def _make(name: str, supertype: str = "Pokémon", **kwargs: Any) -> Card:
        return Card.from_api(card_payload(name, supertype, **kwargs))

    return _make


@pytest.fixture
def charizard(make_card) -> Card:
    return make_card(
        "Charizard ex",
        card_id="sv3-125",
        hp="330",
        types=["Darkness"],
        subtypes=["Stage 2", "Tera", "ex"],
        number="125",
    )


@pytest.fixture
def fire_energy(make_card) -> Card:
    return make_card("Fire Energy", "Energy", card_id="sve-2", set_code="SVE", number="2")


@pytest.fixture
def rare_candy(make_card) -> Card:
    return make_card(
        "Rare Candy", "Trainer", card_id="sv1-191", subtypes=["Item"], set_code="SVI", number="191"
    )


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session


class RecordingSleep:
    """Stand-in for asyncio.sleep that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def fake_sleep() -> RecordingSleep:
    return RecordingSleep()
