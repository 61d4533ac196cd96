"""
Catalog query builder.

Translates filter selections into the catalog's Lucene-like `q` syntax.
Output is deterministic so that equal filters always hit the same
search-cache key.
"""

from dataclasses import dataclass

from pokeforge.config import POKEMON_TYPES

# Only these formats produce a legality clause
LEGALITY_FORMATS = ("standard", "expanded")


@dataclass(frozen=True)
class SearchFilters:
    """
    Filter selections for a card search.

    Empty strings mean "no filter".

    Attributes:
        name: Name prefix
        type: Elemental type (e.g. "Lightning"), one of POKEMON_TYPES
        supertype: "Pokémon", "Trainer" or "Energy"
        set_id: Catalog set id (e.g. "sv3")
        legality: "standard", "expanded", or anything else for any format
    """

    name: str = ""
    type: str = ""
    supertype: str = ""
    set_id: str = ""
    legality: str = ""

    def __post_init__(self) -> None:
        if self.type and self.type not in POKEMON_TYPES:
            raise ValueError(f"Unknown type: {self.type}")


def build_query(filters: SearchFilters) -> str:
    """
    Build the `q` parameter for a card search.

    Clauses always appear in the same order: name, type, supertype, set,
    legality.

    Example:
        >>> build_query(SearchFilters(name="Pika", type="Lightning"))
        'name:"Pika*" types:Lightning'
    """
    clauses: list[str] = []
    if filters.name:
        clauses.append(f'name:"{filters.name}*"')
    if filters.type:
        clauses.append(f"types:{filters.type}")
    if filters.supertype:
        clauses.append(f"supertype:{filters.supertype}")
    if filters.set_id:
        clauses.append(f"set.id:{filters.set_id}")
    if filters.legality in LEGALITY_FORMATS:
        clauses.append(f"legalities.{filters.legality}:legal")
    return " ".join(clauses)


def exact_name_query(name: str) -> str:
    """Query matching a card name exactly."""
    return f'name:"{name.strip()}"'
