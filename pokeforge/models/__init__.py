from pokeforge.models.card import (
    Ability,
    Attack,
    Card,
    CardImages,
    CardSet,
    Category,
    TypeModifier,
)
from pokeforge.models.deck import (
    AnalysisResult,
    Archetype,
    ArchetypeEntry,
    CardGroup,
    HpBuckets,
    SavedDeck,
)
from pokeforge.models.failure import (
    RATE_LIMITED_MESSAGE,
    SLOW_API_MESSAGE,
    CatalogError,
    CatalogHTTPError,
    FailureKind,
    MaxRetriesError,
    classify_failure,
    user_message,
)

__all__ = [
    "Ability",
    "AnalysisResult",
    "Archetype",
    "ArchetypeEntry",
    "Attack",
    "Card",
    "CardGroup",
    "CardImages",
    "CardSet",
    "CatalogError",
    "CatalogHTTPError",
    "Category",
    "FailureKind",
    "HpBuckets",
    "MaxRetriesError",
    "RATE_LIMITED_MESSAGE",
    "SLOW_API_MESSAGE",
    "SavedDeck",
    "TypeModifier",
    "classify_failure",
    "user_message",
]
