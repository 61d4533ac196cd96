from pokeforge.api.health import router as health_router
from pokeforge.api.proxy import router as proxy_router

__all__ = [
    "health_router",
    "proxy_router",
]
