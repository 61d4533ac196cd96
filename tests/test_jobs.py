"""Tests for command-line jobs."""

from datetime import date
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import respx

from pokeforge.analysis.deck_analyzer import analyze_deck
from pokeforge.config import settings
from pokeforge.db.operations import load_saved_decks, store_saved_decks
from pokeforge.jobs.analyze_deck import (
    delete_saved_deck,
    format_analysis,
    list_saved_decks,
    load_saved_deck,
    run_analysis,
)
from pokeforge.jobs.refresh_sets import run_refresh
from pokeforge.models.deck import SavedDeck
from pokeforge.services.response_cache import SetsCache

SETS_URL = f"{settings.catalog_base_url.rstrip('/')}/sets"


class TestFormatAnalysis:
    def test_report_lines(self, charizard, rare_candy, fire_energy) -> None:
        result = analyze_deck([charizard] * 2 + [rare_candy] * 4 + [fire_energy] * 10)

        report = format_analysis("Zard", result)

        lines = report.splitlines()
        assert lines[0] == "Zard: NOT VALID"
        assert "Cards: 16 (Pokémon 2, Trainer 4, Energy 10)" in report
        assert "Average HP: 330" in report
        assert "Types: Darkness 2" in report
        assert "Trainers: Item 4" in report
        assert lines[-1] == "  ! 16/60 cards"


class TestRunAnalysis:
    @pytest.fixture
    def loader_cls(self, charizard, fire_energy):
        cards = [charizard] * 3 + [fire_energy] * 5

        async def fill(store, source):
            store.replace_all(cards)
            if hasattr(source, "tier"):
                store.rename(source.name)
            return cards

        with patch("pokeforge.jobs.analyze_deck.ArchetypeLoader") as loader_cls:
            loader_cls.return_value.load_into = AsyncMock(side_effect=fill)
            loader_cls.return_value.import_into = AsyncMock(side_effect=fill)
            yield loader_cls

    async def test_archetype_names_the_deck(self, loader_cls) -> None:
        store = await run_analysis(archetype_name="charizard ex")

        assert store.name == "Charizard ex"
        assert len(store) == 8

    async def test_name_override(self, loader_cls) -> None:
        store = await run_analysis(decklist="3 Charizard ex", deck_name="Mine")

        assert store.name == "Mine"
        loader_cls.return_value.import_into.assert_awaited_once()

    async def test_unknown_archetype(self, loader_cls) -> None:
        with pytest.raises(ValueError, match="Unknown archetype"):
            await run_analysis(archetype_name="Nope")

    async def test_nothing_resolved(self) -> None:
        with patch("pokeforge.jobs.analyze_deck.ArchetypeLoader") as loader_cls:
            loader_cls.return_value.import_into = AsyncMock(return_value=[])

            with pytest.raises(ValueError, match="No cards"):
                await run_analysis(decklist="4 Missingno")

    async def test_save_prepends_to_collection(self, loader_cls, session_factory) -> None:
        with (
            patch("pokeforge.jobs.analyze_deck.init_db", new_callable=AsyncMock),
            patch("pokeforge.jobs.analyze_deck.async_session_factory", session_factory),
        ):
            await run_analysis(archetype_name="Charizard ex", save=True)
            await run_analysis(archetype_name="Gardevoir ex", save=True)

        async with session_factory() as session:
            decks = await load_saved_decks(session)

        assert [d.name for d in decks] == ["Gardevoir ex", "Charizard ex"]
        assert len(decks[0]) == 8


class TestSavedDeckJobs:
    @pytest.fixture
    async def saved(self, session_factory, charizard, fire_energy):
        decks = [
            SavedDeck(name="Energy", cards=(fire_energy,) * 3, date=date(2024, 6, 1)),
            SavedDeck(name="Zard", cards=(charizard,) * 2, date=date(2024, 5, 1)),
        ]
        async with session_factory() as session:
            await store_saved_decks(session, decks)
            await session.commit()

        with (
            patch("pokeforge.jobs.analyze_deck.init_db", new_callable=AsyncMock),
            patch("pokeforge.jobs.analyze_deck.async_session_factory", session_factory),
        ):
            yield decks

    async def test_list(self, saved) -> None:
        assert await list_saved_decks() == saved

    async def test_load_restores_deck(self, saved) -> None:
        store = await load_saved_deck(1)

        assert store.name == "Zard"
        assert len(store) == 2
        assert store.analysis().pokemon == 2

    async def test_delete_persists(self, saved, session_factory) -> None:
        deleted = await delete_saved_deck(0)

        assert deleted.name == "Energy"
        async with session_factory() as session:
            assert [d.name for d in await load_saved_decks(session)] == ["Zard"]

    async def test_bad_index(self, saved) -> None:
        with pytest.raises(ValueError, match="No saved deck"):
            await load_saved_deck(5)
        with pytest.raises(ValueError, match="No saved deck"):
            await delete_saved_deck(5)


class TestRunRefresh:
    @respx.mock
    async def test_fetches_and_caches_sets(self, session_factory) -> None:
        route = respx.get(SETS_URL).mock(
            return_value=httpx.Response(200, json={"data": [{"id": "sv1"}, {"id": "sv2"}]})
        )

        with (
            patch("pokeforge.jobs.refresh_sets.init_db", new_callable=AsyncMock),
            patch("pokeforge.jobs.refresh_sets.async_session_factory", session_factory),
        ):
            assert await run_refresh() == 2
            assert await run_refresh() == 2

        assert route.call_count == 1
        assert await SetsCache(session_factory).load() == [{"id": "sv1"}, {"id": "sv2"}]

    @respx.mock
    async def test_force_refetches(self, session_factory) -> None:
        route = respx.get(SETS_URL).mock(
            return_value=httpx.Response(200, json={"data": [{"id": "sv1"}]})
        )
        await SetsCache(session_factory).store([{"id": "old"}])

        with (
            patch("pokeforge.jobs.refresh_sets.init_db", new_callable=AsyncMock),
            patch("pokeforge.jobs.refresh_sets.async_session_factory", session_factory),
        ):
            assert await run_refresh(force=True) == 1

        assert route.call_count == 1

    @respx.mock
    async def test_catalog_failure_is_raised(self, session_factory) -> None:
        respx.get(SETS_URL).mock(return_value=httpx.Response(500))

        with (
            patch("pokeforge.jobs.refresh_sets.init_db", new_callable=AsyncMock),
            patch("pokeforge.jobs.refresh_sets.async_session_factory", session_factory),
            pytest.raises(Exception, match="HTTP 500"),
        ):
            await run_refresh()
