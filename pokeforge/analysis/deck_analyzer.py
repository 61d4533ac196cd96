"""
Deck composition analysis.

Pure function over a list of cards. Cheap enough to run after every deck
mutation (decks are bounded at a few dozen cards).

Validity is deliberately narrower than "no issues": a 60-card deck with at
least one Pokémon and no copy-limit violation is valid even when it reports
"No Energy".
"""

import math
import re
from collections import Counter
from collections.abc import Sequence

from pokeforge.config import BASIC_ENERGY, MAX_COPIES, MAX_DECK_SIZE
from pokeforge.models.card import Card, Category
from pokeforge.models.deck import AnalysisResult, HpBuckets

DEFAULT_TYPE = "Colorless"
TRAINER_SUBTYPES = ("Item", "Supporter", "Stadium", "Tool")
OTHER_SUBTYPE = "Other"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_hp(hp: str | None) -> int:
    """
    Parse catalog HP text.

    Reads the leading integer ("120" -> 120, "60HP" -> 60); anything
    non-numeric or missing is 0.
    """
    if not hp:
        return 0
    match = _LEADING_INT.match(hp)
    return int(match.group(1)) if match else 0


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def exceeds_copy_limit(name: str, count: int) -> bool:
    return count > MAX_COPIES and name not in BASIC_ENERGY


def analyze_deck(cards: Sequence[Card]) -> AnalysisResult:
    """
    Compute composition statistics and legality issues.

    Issues are reported in a fixed order:
    1. Deck size other than 60
    2. One entry per card name over the copy limit (basic energy exempt)
    3. No Pokémon
    4. No Energy (non-empty decks only)

    Args:
        cards: The deck, in insertion order

    Returns:
        AnalysisResult for the deck
    """
    pokemon = [c for c in cards if c.category is Category.POKEMON]
    trainers = [c for c in cards if c.category is Category.TRAINER]
    energy = [c for c in cards if c.category is Category.ENERGY]

    type_distribution: Counter[str] = Counter()
    for card in pokemon:
        for pokemon_type in card.types or (DEFAULT_TYPE,):
            type_distribution[pokemon_type] += 1

    buckets = HpBuckets()
    for card in pokemon:
        hp = parse_hp(card.hp)
        if hp <= 70:
            buckets.low += 1
        elif hp <= 120:
            buckets.mid += 1
        elif hp <= 200:
            buckets.high += 1
        else:
            buckets.very_high += 1

    trainer_breakdown = dict.fromkeys(TRAINER_SUBTYPES + (OTHER_SUBTYPE,), 0)
    for card in trainers:
        subtype = card.subtypes[0] if card.subtypes else None
        if subtype in TRAINER_SUBTYPES:
            trainer_breakdown[subtype] += 1
        else:
            trainer_breakdown[OTHER_SUBTYPE] += 1

    issues: list[str] = []
    if len(cards) != MAX_DECK_SIZE:
        issues.append(f"{len(cards)}/{MAX_DECK_SIZE} cards")

    name_counts = Counter(card.name for card in cards)
    over_limit = False
    for name, count in name_counts.items():
        if exceeds_copy_limit(name, count):
            issues.append(f"{name}: {count}× (max {MAX_COPIES})")
            over_limit = True

    if not pokemon:
        issues.append("No Pokémon")
    if not energy and cards:
        issues.append("No Energy")

    average_hp = 0
    if pokemon:
        average_hp = _round_half_up(sum(parse_hp(c.hp) for c in pokemon) / len(pokemon))

    return AnalysisResult(
        total=len(cards),
        pokemon=len(pokemon),
        trainer=len(trainers),
        energy=len(energy),
        type_distribution=dict(type_distribution),
        hp_buckets=buckets,
        trainer_breakdown=trainer_breakdown,
        issues=issues,
        average_hp=average_hp,
        valid=len(cards) == MAX_DECK_SIZE and not over_limit and bool(pokemon),
    )
