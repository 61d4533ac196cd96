"""
Meta archetypes.

Static list of current competitive Standard decks. Entries are card names
only; the archetype loader resolves them against the catalog on demand, so
no card data is bundled.
"""

from pokeforge.models.deck import Archetype, ArchetypeEntry


def _entries(*pairs: tuple[str, int]) -> tuple[ArchetypeEntry, ...]:
    return tuple(ArchetypeEntry(name=name, count=count) for name, count in pairs)


ARCHETYPES: tuple[Archetype, ...] = (
    Archetype(
        name="Dragapult ex",
        tier="S",
        type="Psychic",
        description=(
            "Top-tier spread damage deck using Phantom Dive to soften multiple Pokémon, "
            "then clean up with powerful attacks. Extremely consistent with Pidgeot ex "
            "for search."
        ),
        pokemon=_entries(
            ("Dragapult ex", 2),
            ("Drakloak", 3),
            ("Dreepy", 4),
            ("Pidgeot ex", 2),
            ("Pidgey", 2),
            ("Mew ex", 1),
        ),
        trainers=_entries(
            ("Professor's Research", 4),
            ("Iono", 3),
            ("Boss's Orders", 2),
            ("Ultra Ball", 4),
            ("Nest Ball", 3),
            ("Rare Candy", 4),
            ("Super Rod", 2),
            ("Switch", 2),
            ("Lost Vacuum", 1),
            ("Forest Seal Stone", 1),
            ("Pal Pad", 1),
        ),
        energy=_entries(("Psychic Energy", 8), ("Jet Energy", 2)),
        tips=(
            "Set up Dragapult ex ASAP with Rare Candy. Use Phantom Dive every turn to "
            "stack damage. Pidgeot ex keeps your engine running."
        ),
    ),
    Archetype(
        name="Gholdengo ex",
        tier="S",
        type="Metal",
        description=(
            "Self-sustaining draw engine via Gimmighoul's Coin Bonus ability. Gholdengo ex "
            "hits hard while maintaining hand size. Very consistent."
        ),
        pokemon=_entries(
            ("Gholdengo ex", 3),
            ("Gimmighoul", 4),
            ("Mew ex", 1),
            ("Lumineon V", 1),
        ),
        trainers=_entries(
            ("Professor's Research", 4),
            ("Iono", 4),
            ("Boss's Orders", 3),
            ("Ultra Ball", 4),
            ("Level Ball", 4),
            ("Super Rod", 2),
            ("Switch", 2),
            ("Energy Recycler", 1),
            ("Lost Vacuum", 1),
            ("Pal Pad", 1),
        ),
        energy=_entries(("Metal Energy", 10), ("Jet Energy", 1)),
        tips=(
            "Flood the bench with Gimmighoul early. Evolve into Gholdengo ex and use Make "
            "It Rain for big damage while drawing cards with Coin Bonus."
        ),
    ),
    Archetype(
        name="Charizard ex",
        tier="A",
        type="Fire",
        description=(
            "Infernal Reign powers up your board fast. Pair with Pidgeot ex for consistent "
            "search every turn. Heavy hitter that's hard to one-shot."
        ),
        pokemon=_entries(
            ("Charizard ex", 3),
            ("Charmeleon", 1),
            ("Charmander", 4),
            ("Pidgeot ex", 2),
            ("Pidgey", 2),
            ("Manaphy", 1),
            ("Lumineon V", 1),
        ),
        trainers=_entries(
            ("Professor's Research", 3),
            ("Iono", 3),
            ("Boss's Orders", 2),
            ("Arven", 2),
            ("Ultra Ball", 4),
            ("Rare Candy", 4),
            ("Nest Ball", 2),
            ("Super Rod", 2),
            ("Switch", 2),
            ("Forest Seal Stone", 1),
            ("Lost Vacuum", 1),
        ),
        energy=_entries(("Fire Energy", 12)),
        tips=(
            "Rush Charizard ex with Rare Candy. Use Infernal Reign to attach energy to "
            "benched Pokémon. Pidgeot ex guarantees you find what you need every turn."
        ),
    ),
    Archetype(
        name="Gardevoir ex",
        tier="A",
        type="Psychic",
        description=(
            "Psychic Embrace lets you attach Psychic Energy from discard to your Pokémon "
            "(at the cost of damage counters). Flexible attacker choices."
        ),
        pokemon=_entries(
            ("Gardevoir ex", 3),
            ("Kirlia", 4),
            ("Ralts", 4),
            ("Scream Tail", 2),
            ("Mew ex", 1),
            ("Munkidori", 1),
        ),
        trainers=_entries(
            ("Professor's Research", 4),
            ("Iono", 3),
            ("Boss's Orders", 2),
            ("Level Ball", 4),
            ("Ultra Ball", 2),
            ("Fog Crystal", 4),
            ("Rare Candy", 3),
            ("Super Rod", 2),
            ("Switch", 1),
            ("Pal Pad", 1),
        ),
        energy=_entries(("Psychic Energy", 11)),
        tips=(
            "Get multiple Kirlia on bench ASAP, they draw cards with Refinement. Use "
            "Psychic Embrace to fuel attackers from discard. Scream Tail hits hard as a "
            "single-prizer."
        ),
    ),
    Archetype(
        name="Raging Bolt ex",
        tier="A",
        type="Lightning",
        description=(
            "Ancient Pokémon that deals massive damage scaling with energy. Pair with "
            "Ogerpon ex for energy acceleration."
        ),
        pokemon=_entries(
            ("Raging Bolt ex", 4),
            ("Ogerpon ex", 2),
            ("Squawkabilly ex", 1),
        ),
        trainers=_entries(
            ("Professor's Research", 4),
            ("Iono", 4),
            ("Boss's Orders", 2),
            ("Explorer's Guidance", 4),
            ("Ultra Ball", 4),
            ("Nest Ball", 4),
            ("Switch", 3),
            ("Super Rod", 2),
            ("Maximum Belt", 2),
            ("Lost Vacuum", 1),
            ("Pokéstop", 2),
        ),
        energy=_entries(("Lightning Energy", 12), ("Grass Energy", 2)),
        tips=(
            "Stack energy on Raging Bolt ex using Explorer's Guidance and Ogerpon ex. Each "
            "energy adds 70 damage. Maximum Belt helps hit KO thresholds on ex Pokémon."
        ),
    ),
)


def get_archetype(name: str) -> Archetype | None:
    """Find an archetype by name, case-insensitively."""
    wanted = name.strip().lower()
    for archetype in ARCHETYPES:
        if archetype.name.lower() == wanted:
            return archetype
    return None
