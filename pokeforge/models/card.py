"""
Catalog card model.

Cards are immutable values parsed from the Pokémon TCG API. The deck holds
references to these values; nothing mutates them locally.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    """Card supertype as a closed set."""

    POKEMON = "Pokémon"
    TRAINER = "Trainer"
    ENERGY = "Energy"
    UNKNOWN = "Unknown"

    @classmethod
    def from_supertype(cls, supertype: str | None) -> "Category":
        """Map a catalog supertype string, routing anything unexpected to UNKNOWN."""
        for category in (cls.POKEMON, cls.TRAINER, cls.ENERGY):
            if supertype == category.value:
                return category
        return cls.UNKNOWN


class _CatalogModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class CardSet(_CatalogModel):
    """The release a card belongs to."""

    id: str
    name: str = ""
    series: str | None = None
    ptcgo_code: str | None = None
    release_date: str | None = None
    total: int | None = None


class Attack(_CatalogModel):
    name: str
    cost: tuple[str, ...] = ()
    damage: str = ""
    text: str = ""


class Ability(_CatalogModel):
    name: str
    text: str = ""
    type: str = ""


class TypeModifier(_CatalogModel):
    """A weakness or resistance entry."""

    type: str
    value: str = ""


class CardImages(_CatalogModel):
    small: str | None = None
    large: str | None = None


class Card(_CatalogModel):
    """
    A single catalog card.

    Attributes:
        id: Catalog identifier (e.g. "sv3-125")
        name: Card name as printed
        supertype: Raw catalog supertype; see `category`
        hp: Hit points as text, exactly as the catalog sends it
        legalities: Format -> "Legal" / "Banned"
    """

    id: str
    name: str
    supertype: str = ""
    subtypes: tuple[str, ...] = ()
    types: tuple[str, ...] = ()
    hp: str | None = None
    number: str | None = None
    rarity: str | None = None
    set: CardSet | None = None
    legalities: dict[str, str] = Field(default_factory=dict)
    images: CardImages | None = None
    attacks: tuple[Attack, ...] = ()
    abilities: tuple[Ability, ...] = ()
    weaknesses: tuple[TypeModifier, ...] = ()
    resistances: tuple[TypeModifier, ...] = ()
    retreat_cost: tuple[str, ...] = ()
    evolves_from: str | None = None
    evolves_to: tuple[str, ...] = ()

    @property
    def category(self) -> Category:
        return Category.from_supertype(self.supertype)

    @property
    def set_code(self) -> str:
        """Short set code used in decklists; falls back to the set id."""
        if self.set is None:
            return ""
        return self.set.ptcgo_code or self.set.id

    def is_legal_in(self, format_name: str) -> bool:
        return self.legalities.get(format_name) == "Legal"

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Card":
        """Build a card from a catalog JSON object."""
        return cls.model_validate(payload)

    def to_api(self) -> dict[str, Any]:
        """Serialize back to the catalog's camelCase JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
