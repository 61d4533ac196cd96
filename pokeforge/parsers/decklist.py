"""
Decklist text parser.

THIS MODULE HANDLES SYNTAX ONLY.

Extracts entries from pasted decklist text in the common PTCG Live /
Limitless shape:

    Pokémon: 12
    4 Charmander OBF 26
    3 Charizard ex OBF 125

    Trainer: 36
    4 Rare Candy SVI 191

    Energy: 12
    12 Fire Energy

Card names are NOT resolved here. Entries are looked up against the catalog
by the archetype loader.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class DecklistEntry:
    """
    One card line from a decklist.

    The set code and number are kept for reference but are not used to
    match the card.
    """

    count: int
    name: str
    set_code: str | None
    number: str | None
    line_number: int
    section: str | None = None


@dataclass
class ParsedDecklist:
    """Parsed decklist: card entries plus any lines that could not be read."""

    entries: list[DecklistEntry] = field(default_factory=list)
    section_totals: dict[str, int] = field(default_factory=dict)
    unparseable_lines: list[tuple[int, str]] = field(default_factory=list)

    def total_cards(self) -> int:
        return sum(entry.count for entry in self.entries)


# "<count> <name> [<setcode> <number>]"; set code and number are optional together
CARD_LINE_PATTERN = re.compile(r"^(\d+)\s+(.+?)(?:\s+(\w+)\s+(\d+))?$", re.ASCII)

# "Pokémon: 12", "Trainer", "Energy: 8"
_SECTION_PATTERN = re.compile(
    r"^(Pok[ée]mon|Trainers?|Energy)\s*:?\s*(\d+)?$",
    re.IGNORECASE,
)

_SECTION_NAMES = {
    "pokémon": "Pokémon",
    "pokemon": "Pokémon",
    "trainer": "Trainer",
    "trainers": "Trainer",
    "energy": "Energy",
}


def parse_card_line(line: str, line_number: int = 0) -> DecklistEntry | None:
    """
    Parse a single card line.

    Returns None if the line doesn't look like a card entry.
    """
    match = CARD_LINE_PATTERN.match(line.strip())
    if not match:
        return None

    count, name, set_code, number = match.groups()
    return DecklistEntry(
        count=int(count),
        name=name.strip(),
        set_code=set_code,
        number=number,
        line_number=line_number,
    )


def parse_decklist(text: str) -> ParsedDecklist:
    """
    Parse decklist text.

    Blank lines are skipped. Section headers set the section of the entries
    that follow and record the header's declared total, if any.

    Args:
        text: Raw decklist text

    Returns:
        ParsedDecklist with entries in input order
    """
    parsed = ParsedDecklist()
    section: str | None = None

    for line_number, line in enumerate(text.split("\n"), 1):
        stripped = line.strip()
        if not stripped:
            continue

        header = _SECTION_PATTERN.match(stripped)
        if header:
            section = _SECTION_NAMES[header.group(1).lower()]
            if header.group(2) is not None:
                parsed.section_totals[section] = int(header.group(2))
            continue

        entry = parse_card_line(stripped, line_number)
        if entry is None:
            parsed.unparseable_lines.append((line_number, stripped))
            continue

        parsed.entries.append(
            DecklistEntry(
                count=entry.count,
                name=entry.name,
                set_code=entry.set_code,
                number=entry.number,
                line_number=line_number,
                section=section,
            )
        )

    return parsed
