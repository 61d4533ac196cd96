from pokeforge.parsers.decklist import (
    DecklistEntry,
    ParsedDecklist,
    parse_card_line,
    parse_decklist,
)

__all__ = [
    "DecklistEntry",
    "ParsedDecklist",
    "parse_card_line",
    "parse_decklist",
]
