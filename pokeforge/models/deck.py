from dataclasses import dataclass, field
from datetime import date

from pokeforge.models.card import Card


@dataclass(frozen=True, slots=True)
class CardGroup:
    """All copies of one card id, as shown in a deck list."""

    card: Card
    count: int


@dataclass(frozen=True)
class SavedDeck:
    """
    A snapshot of the working deck.

    Attributes:
        name: Deck name at save time
        cards: Cards in insertion order (duplicates are copies)
        date: Calendar date of the save
    """

    name: str
    cards: tuple[Card, ...]
    date: date

    def __len__(self) -> int:
        return len(self.cards)


@dataclass
class HpBuckets:
    """Pokémon HP histogram."""

    low: int = 0  # <= 70
    mid: int = 0  # 71-120
    high: int = 0  # 121-200
    very_high: int = 0  # > 200


@dataclass
class AnalysisResult:
    """
    Derived statistics for a deck. Recomputed on every change, never stored.

    Attributes:
        total: Number of cards, including cards of unknown category
        pokemon: Pokémon count
        trainer: Trainer count
        energy: Energy count
        type_distribution: Type -> number of Pokémon listing it
        hp_buckets: HP histogram over Pokémon
        trainer_breakdown: Trainer first subtype -> count
        issues: Human-readable problems, in detection order
        average_hp: Rounded mean HP over Pokémon, 0 if none
        valid: Tournament-ready flag
    """

    total: int
    pokemon: int
    trainer: int
    energy: int
    type_distribution: dict[str, int] = field(default_factory=dict)
    hp_buckets: HpBuckets = field(default_factory=HpBuckets)
    trainer_breakdown: dict[str, int] = field(default_factory=dict)
    issues: list[str] = field(default_factory=list)
    average_hp: int = 0
    valid: bool = False


@dataclass(frozen=True, slots=True)
class ArchetypeEntry:
    name: str
    count: int


@dataclass(frozen=True)
class Archetype:
    """
    A pre-defined competitive deck template.

    Card lists hold names only; they are resolved against the catalog at load time.
    """

    name: str
    tier: str
    type: str
    description: str
    pokemon: tuple[ArchetypeEntry, ...] = ()
    trainers: tuple[ArchetypeEntry, ...] = ()
    energy: tuple[ArchetypeEntry, ...] = ()
    tips: str = ""

    def entries(self) -> tuple[ArchetypeEntry, ...]:
        """All entries, Pokémon first, then Trainers, then Energy."""
        return self.pokemon + self.trainers + self.energy

    def card_count(self) -> int:
        return sum(entry.count for entry in self.entries())
