from pokeforge.services.archetype_loader import ArchetypeLoader, SequentialQueue
from pokeforge.services.archetypes import ARCHETYPES, get_archetype
from pokeforge.services.catalog_client import CatalogClient
from pokeforge.services.deck_store import DeckStore, group_cards
from pokeforge.services.decklist_formatter import format_decklist
from pokeforge.services.query_builder import SearchFilters, build_query, exact_name_query
from pokeforge.services.response_cache import SearchCache, SetsCache
from pokeforge.services.search_session import SearchSession

__all__ = [
    "ARCHETYPES",
    "ArchetypeLoader",
    "CatalogClient",
    "DeckStore",
    "SearchCache",
    "SearchFilters",
    "SearchSession",
    "SequentialQueue",
    "SetsCache",
    "build_query",
    "exact_name_query",
    "format_decklist",
    "get_archetype",
    "group_cards",
]
