"""
Resolve and analyze a deck from the command line.

Loads a meta archetype or a pasted decklist file, resolves every entry
against the catalog, prints the analysis and the exported decklist, and
optionally saves the deck to the local store. Saved decks can be listed,
re-analyzed or deleted.

Usage:
    python -m pokeforge.jobs.analyze_deck --list
    python -m pokeforge.jobs.analyze_deck --archetype "Charizard ex" --save
    python -m pokeforge.jobs.analyze_deck --file my_deck.txt --name "Lugia"
    python -m pokeforge.jobs.analyze_deck --saved
    python -m pokeforge.jobs.analyze_deck --load-saved 0
    python -m pokeforge.jobs.analyze_deck --delete-saved 2
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pokeforge.db.database import async_session_factory, init_db
from pokeforge.db.operations import load_saved_decks, store_saved_decks
from pokeforge.models.deck import AnalysisResult, SavedDeck
from pokeforge.services.archetype_loader import ArchetypeLoader
from pokeforge.services.archetypes import ARCHETYPES, get_archetype
from pokeforge.services.catalog_client import CatalogClient
from pokeforge.services.deck_store import DeckStore
from pokeforge.services.decklist_formatter import format_decklist

logger = logging.getLogger(__name__)


def format_analysis(name: str, result: AnalysisResult) -> str:
    """Render an analysis as a short plain-text report."""
    hp = result.hp_buckets
    lines = [
        f"{name}: {'VALID' if result.valid else 'NOT VALID'}",
        f"  Cards: {result.total} "
        f"(Pokémon {result.pokemon}, Trainer {result.trainer}, Energy {result.energy})",
        f"  Average HP: {result.average_hp}",
        f"  HP: <=70: {hp.low}, 71-120: {hp.mid}, 121-200: {hp.high}, 200+: {hp.very_high}",
    ]
    if result.type_distribution:
        types = ", ".join(f"{t} {n}" for t, n in sorted(result.type_distribution.items()))
        lines.append(f"  Types: {types}")
    trainers = ", ".join(f"{k} {v}" for k, v in result.trainer_breakdown.items() if v)
    if trainers:
        lines.append(f"  Trainers: {trainers}")
    for issue in result.issues:
        lines.append(f"  ! {issue}")
    return "\n".join(lines)


async def run_analysis(
    *,
    archetype_name: str | None = None,
    decklist: str | None = None,
    deck_name: str | None = None,
    save: bool = False,
) -> DeckStore:
    """
    Resolve a deck into a fresh DeckStore, optionally persisting it.

    Raises:
        ValueError: If the archetype is unknown or nothing resolved
    """
    store = DeckStore()

    async with CatalogClient() as client:
        loader = ArchetypeLoader(client)
        if archetype_name is not None:
            archetype = get_archetype(archetype_name)
            if archetype is None:
                raise ValueError(f"Unknown archetype: {archetype_name}")
            cards = await loader.load_into(store, archetype)
        else:
            cards = await loader.import_into(store, decklist or "")

    if not cards:
        raise ValueError("No cards could be resolved against the catalog")

    if deck_name:
        store.rename(deck_name)

    if save:
        await init_db()
        async with async_session_factory() as session:
            store.saved = await load_saved_decks(session)
            store.save()
            await store_saved_decks(session, store.saved)
            await session.commit()

    return store


async def list_saved_decks() -> list[SavedDeck]:
    """Read the saved-deck collection, most recent first."""
    await init_db()
    async with async_session_factory() as session:
        return await load_saved_decks(session)


async def load_saved_deck(index: int) -> DeckStore:
    """
    Restore a saved deck into a fresh DeckStore.

    Raises:
        ValueError: If there is no saved deck at `index`
    """
    store = DeckStore(saved=await list_saved_decks())
    try:
        store.load_saved(index)
    except IndexError as e:
        raise ValueError(str(e)) from e
    return store


async def delete_saved_deck(index: int) -> SavedDeck:
    """
    Delete a saved deck and persist the shortened collection.

    Raises:
        ValueError: If there is no saved deck at `index`
    """
    await init_db()
    async with async_session_factory() as session:
        store = DeckStore(saved=await load_saved_decks(session))
        try:
            deck = store.delete_saved(index)
        except IndexError as e:
            raise ValueError(str(e)) from e
        await store_saved_decks(session, store.saved)
        await session.commit()
    return deck


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Resolve and analyze a Pokémon TCG deck")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--list", action="store_true", help="List the meta archetypes")
    source.add_argument("--archetype", help="Name of a meta archetype to load")
    source.add_argument("--file", type=Path, help="Decklist text file to import")
    source.add_argument("--saved", action="store_true", help="List the saved decks")
    source.add_argument("--load-saved", type=int, metavar="N", help="Analyze saved deck N")
    source.add_argument("--delete-saved", type=int, metavar="N", help="Delete saved deck N")
    parser.add_argument("--name", help="Deck name (defaults to the archetype name)")
    parser.add_argument("--save", action="store_true", help="Save the deck locally")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.list:
        for archetype in ARCHETYPES:
            print(f"[{archetype.tier}] {archetype.name} ({archetype.type})")
        return

    if args.saved:
        for i, deck in enumerate(asyncio.run(list_saved_decks())):
            print(f"{i}: {deck.name} ({len(deck)} cards, {deck.date.isoformat()})")
        return

    decklist = args.file.read_text(encoding="utf-8") if args.file else None

    try:
        if args.delete_saved is not None:
            deleted = asyncio.run(delete_saved_deck(args.delete_saved))
            print(f"Deleted {deleted.name}")
            return
        if args.load_saved is not None:
            store = asyncio.run(load_saved_deck(args.load_saved))
        else:
            store = asyncio.run(
                run_analysis(
                    archetype_name=args.archetype,
                    decklist=decklist,
                    deck_name=args.name,
                    save=args.save,
                )
            )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(format_analysis(store.name, store.analysis()))
    print()
    print(format_decklist(store.cards))


if __name__ == "__main__":
    main()
