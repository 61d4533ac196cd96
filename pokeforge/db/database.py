"""
Local blob store connection.

Saved decks and the sets cache live as JSON text in a single `kv_blobs`
table. By default that table sits in a SQLite file next to the process;
`DATABASE_URL` can point it anywhere SQLAlchemy's async drivers reach.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from pokeforge.config import settings
from pokeforge.models.db import Base

engine = create_async_engine(settings.database_url, echo=settings.debug)

# Blobs are plain values; keep them readable after commit
async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a blob store session.

    Commits when the request handler returns, rolls back on database errors.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the `kv_blobs` table if it does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
