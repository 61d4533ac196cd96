"""
Working deck store.

Holds the deck under construction as an ordered multiset of catalog cards.
`add` enforces the deck-size and copy limits; decks that arrive through
`replace_all` (archetype load, import) are accepted as-is and left to the
analyzer to flag.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import date

from pokeforge.analysis.deck_analyzer import analyze_deck
from pokeforge.config import BASIC_ENERGY, MAX_COPIES, MAX_DECK_SIZE
from pokeforge.models.card import Card, Category
from pokeforge.models.deck import AnalysisResult, CardGroup, SavedDeck

logger = logging.getLogger(__name__)

DEFAULT_DECK_NAME = "My Deck"

# Display sections; cards of unknown category are shown with Trainers
SECTIONS = (Category.POKEMON, Category.TRAINER, Category.ENERGY)


def display_section(card: Card) -> Category:
    category = card.category
    return Category.TRAINER if category is Category.UNKNOWN else category


def group_cards(cards: Iterable[Card]) -> dict[Category, list[CardGroup]]:
    """
    Group cards by id within their display section.

    Groups keep first-appearance order. This is a projection; the card list
    stays the source of truth.
    """
    counts: dict[Category, dict[str, list]] = {section: {} for section in SECTIONS}
    for card in cards:
        section = counts[display_section(card)]
        if card.id in section:
            section[card.id][1] += 1
        else:
            section[card.id] = [card, 1]

    return {
        section: [CardGroup(card=card, count=count) for card, count in groups.values()]
        for section, groups in counts.items()
    }


class DeckStore:
    """
    The deck under construction plus the saved-deck collection.

    Usage:
        store = DeckStore()
        store.add(card)
        store.analysis().valid
    """

    def __init__(
        self,
        name: str = DEFAULT_DECK_NAME,
        saved: Iterable[SavedDeck] | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.name = name
        self.saved: list[SavedDeck] = list(saved or [])
        self._cards: list[Card] = []
        self._today = today

    def __len__(self) -> int:
        return len(self._cards)

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def copies_of(self, name: str) -> int:
        return sum(1 for card in self._cards if card.name == name)

    def can_add(self, card: Card) -> bool:
        if len(self._cards) >= MAX_DECK_SIZE:
            return False
        if card.name in BASIC_ENERGY:
            return True
        return self.copies_of(card.name) < MAX_COPIES

    def add(self, card: Card) -> bool:
        """
        Append one copy of a card.

        Returns False (and leaves the deck unchanged) when the deck is full or
        the card's name is already at the copy limit.
        """
        if not self.can_add(card):
            logger.debug("Not adding %s: deck or copy limit reached", card.name)
            return False
        self._cards.append(card)
        return True

    def remove(self, card: Card) -> bool:
        """
        Remove the last copy of a card, matched by id.

        Returns False if the card is not in the deck.
        """
        for index in range(len(self._cards) - 1, -1, -1):
            if self._cards[index].id == card.id:
                del self._cards[index]
                return True
        return False

    def clear(self) -> None:
        self._cards.clear()

    def replace_all(self, cards: Iterable[Card]) -> None:
        """Replace the whole deck. Limits are not enforced here."""
        self._cards = list(cards)

    def rename(self, name: str) -> None:
        self.name = name

    def save(self) -> SavedDeck:
        """
        Snapshot the working deck into the saved collection.

        The snapshot is prepended (most recent first). The working deck is kept.
        """
        snapshot = SavedDeck(name=self.name, cards=tuple(self._cards), date=self._today())
        self.saved.insert(0, snapshot)
        logger.info("Saved deck %r (%d cards)", snapshot.name, len(snapshot))
        return snapshot

    def _saved_at(self, index: int) -> SavedDeck:
        if not 0 <= index < len(self.saved):
            raise IndexError(f"No saved deck at position {index}")
        return self.saved[index]

    def load_saved(self, index: int) -> SavedDeck:
        """
        Make a saved deck the working deck, taking its name.

        Raises:
            IndexError: If there is no saved deck at `index`
        """
        deck = self._saved_at(index)
        self.replace_all(deck.cards)
        self.rename(deck.name)
        return deck

    def delete_saved(self, index: int) -> SavedDeck:
        """
        Remove a saved deck from the collection. The working deck is untouched.

        Raises:
            IndexError: If there is no saved deck at `index`
        """
        deck = self._saved_at(index)
        del self.saved[index]
        logger.info("Deleted saved deck %r", deck.name)
        return deck

    def grouped(self) -> dict[Category, list[CardGroup]]:
        return group_cards(self._cards)

    def analysis(self) -> AnalysisResult:
        return analyze_deck(self._cards)
