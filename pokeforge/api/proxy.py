"""
Catalog proxy endpoint.

Forwards catalog reads to the Pokémon TCG API so browsers never see the API
key. Only a small allow-list of endpoints is reachable, and successful
responses carry edge-cache headers.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from pokeforge.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["proxy"])

ALLOWED_ENDPOINTS = frozenset({"cards", "sets", "types"})

# Cache successful responses for 5 minutes at the edge
CACHE_CONTROL = "s-maxage=300, stale-while-revalidate=600"


async def get_upstream_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Dependency that provides an HTTP client for the upstream catalog."""
    async with httpx.AsyncClient(timeout=30.0, follow_redirects=True) as client:
        yield client


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("/proxy")
async def proxy(
    request: Request,
    client: Annotated[httpx.AsyncClient, Depends(get_upstream_client)],
) -> JSONResponse:
    """
    Forward a catalog request.

    The `endpoint` query parameter selects the catalog endpoint; every other
    query parameter is passed through unchanged.
    """
    endpoint = request.query_params.get("endpoint")
    if not endpoint:
        return _error(status.HTTP_400_BAD_REQUEST, "Missing endpoint parameter")
    if endpoint not in ALLOWED_ENDPOINTS:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid endpoint")

    params = [(k, v) for k, v in request.query_params.multi_items() if k != "endpoint"]
    url = f"{settings.catalog_base_url.rstrip('/')}/{endpoint}"

    headers: dict[str, str] = {}
    if settings.pokemontcg_api_key:
        headers["X-Api-Key"] = settings.pokemontcg_api_key

    try:
        response = await client.get(url, params=params, headers=headers)
        if not response.is_success:
            return _error(response.status_code, f"API returned {response.status_code}")
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Proxy error: %s", e)
        return _error(status.HTTP_502_BAD_GATEWAY, "Failed to reach Pokemon TCG API")

    return JSONResponse(content=data, headers={"Cache-Control": CACHE_CONTROL})
