# app/db/engine.py

import contextlib
import logging
from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.config import Settings
from app.db.schema import metadata

logger = logging.getLogger(__name__)


def create_engine(settings: Settings) -> AsyncEngine:
    kwargs = {"echo": settings.DATABASE_ECHO}
    if not settings.DATABASE_URL.startswith("sqlite"):
        kwargs.update(
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_pre_ping=True,
        )
    return create_async_engine(settings.DATABASE_URL, **kwargs)


@contextlib.asynccontextmanager
async def with_async_engine(settings: Settings) -> AsyncIterator[AsyncEngine]:
    """
    Creates the async engine and makes sure its pool is disposed after use.
    """
    engine = create_engine(settings)
    logger.debug("Connected engine to %s", engine.url.render_as_string())
    try:
        yield engine
    finally:
        await engine.dispose()
        logger.debug("Disposed engine for %s", engine.url.render_as_string())


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def drop_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
