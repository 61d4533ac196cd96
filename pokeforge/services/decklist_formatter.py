"""
Decklist export.

Renders a deck in the text shape accepted by PTCG Live and Limitless:
one "<Section>: <total>" header per non-empty section, then one
"<count> <name> <set code> <number>" line per distinct card.
"""

from collections.abc import Iterable

from pokeforge.models.card import Card
from pokeforge.models.deck import CardGroup
from pokeforge.services.deck_store import group_cards


def format_card_line(group: CardGroup) -> str:
    card = group.card
    return f"{group.count} {card.name} {card.set_code} {card.number or ''}".strip()


def format_decklist(cards: Iterable[Card]) -> str:
    """
    Format a deck as decklist text.

    Args:
        cards: The deck, in insertion order

    Returns:
        Decklist text; empty string for an empty deck
    """
    blocks: list[str] = []
    for section, groups in group_cards(cards).items():
        if not groups:
            continue
        total = sum(group.count for group in groups)
        lines = [f"{section.value}: {total}"]
        lines.extend(format_card_line(group) for group in groups)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)
