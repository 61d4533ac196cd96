from pokeforge.analysis.deck_analyzer import analyze_deck, exceeds_copy_limit, parse_hp

__all__ = [
    "analyze_deck",
    "exceeds_copy_limit",
    "parse_hp",
]
