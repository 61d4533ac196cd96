from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "PokeForge"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./pokeforge.db"

    catalog_base_url: str = "https://api.pokemontcg.io/v2"

    # Raises the upstream quota to 20,000 requests/day when present
    pokemontcg_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("POKEMONTCG_API_KEY", "VITE_POKEMONTCG_API_KEY"),
    )


settings = Settings()


# =============================================================================
# DECK RULES
# =============================================================================

MAX_DECK_SIZE = 60
MAX_COPIES = 4

# Basic energy is exempt from the copy limit
BASIC_ENERGY: frozenset[str] = frozenset(
    {
        "Grass Energy",
        "Fire Energy",
        "Water Energy",
        "Lightning Energy",
        "Psychic Energy",
        "Fighting Energy",
        "Darkness Energy",
        "Metal Energy",
        "Fairy Energy",
    }
)

# Type filter options. The catalog's /types endpoint is not queried.
POKEMON_TYPES: tuple[str, ...] = (
    "Colorless",
    "Darkness",
    "Dragon",
    "Fairy",
    "Fighting",
    "Fire",
    "Grass",
    "Lightning",
    "Metal",
    "Psychic",
    "Water",
)


# =============================================================================
# CATALOG CLIENT
# =============================================================================

MAX_ATTEMPTS = 3
INITIAL_BACKOFF_SECONDS = 1.5

SEARCH_CACHE_TTL_SECONDS = 5 * 60
SEARCH_CACHE_CAPACITY = 100
SETS_CACHE_TTL_SECONDS = 24 * 60 * 60

DEFAULT_PAGE_SIZE = 20

# Delay between sequential name lookups when resolving an archetype
ARCHETYPE_LOOKUP_DELAY_SECONDS = 0.2

# Fields requested from /cards; keeps responses small
CARD_FIELDS = (
    "id,name,supertype,subtypes,types,hp,images,set,legalities,evolvesFrom,"
    "evolvesTo,attacks,weaknesses,resistances,retreatCost,rarity"
)
