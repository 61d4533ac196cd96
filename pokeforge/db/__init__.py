from pokeforge.db.database import async_session_factory, get_session, init_db
from pokeforge.db.operations import (
    SAVED_DECKS_KEY,
    SETS_CACHE_KEY,
    delete_blob,
    get_blob,
    load_saved_decks,
    put_blob,
    saved_deck_from_dict,
    saved_deck_to_dict,
    store_saved_decks,
)

__all__ = [
    "SAVED_DECKS_KEY",
    "SETS_CACHE_KEY",
    "async_session_factory",
    "delete_blob",
    "get_blob",
    "get_session",
    "init_db",
    "load_saved_decks",
    "put_blob",
    "saved_deck_from_dict",
    "saved_deck_to_dict",
    "store_saved_decks",
]
