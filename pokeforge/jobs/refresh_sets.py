"""
Refresh the cached set list.

Run this job to prime or refresh the persisted sets cache so that startup
never waits on the catalog.

Usage:
    python -m pokeforge.jobs.refresh_sets [--force]
"""

import argparse
import asyncio
import logging

from pokeforge.db.database import async_session_factory, init_db
from pokeforge.services.catalog_client import CatalogClient
from pokeforge.services.response_cache import SetsCache

logger = logging.getLogger(__name__)


async def run_refresh(*, force: bool = False) -> int:
    """
    Load the set list, refetching from the catalog when stale or forced.

    Returns:
        Number of sets cached
    """
    await init_db()
    sets_cache = SetsCache(async_session_factory)
    if force:
        await sets_cache.clear()

    try:
        async with CatalogClient(sets_cache=sets_cache) as client:
            sets = await client.load_sets()
    except Exception as e:
        logger.error("Failed to refresh sets: %s", e)
        raise

    logger.info("Sets cache holds %d sets", len(sets))
    return len(sets)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Refresh the cached set list")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Refetch even if the cache is still fresh",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_refresh(force=args.force))


if __name__ == "__main__":
    main()
