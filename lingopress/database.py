"""
Database resource handle.

One ``Database`` is built per process in ``create_app()`` and stored on
``app.state.database``. Request handlers obtain sessions from it through the
``get_db`` dependency; every session is returned to the pool when its
``async with`` block exits.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from lingopress.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Owns the async engine (and its connection pool) plus a session factory."""

    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.sessionmaker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.sessionmaker() as db:
            try:
                yield db
            except Exception as e:
                logger.error(f"Database session error: {e}")
                await db.rollback()
                raise

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed.")


def create_database(settings: Settings) -> Database:
    """Build the process-wide database handle with environment-based pool settings."""
    if settings.database_url.startswith("sqlite"):
        return Database(settings.database_url, echo=settings.debug)

    if settings.is_production:
        return Database(
            settings.database_url,
            pool_size=20,
            max_overflow=50,
            pool_timeout=60,
            pool_recycle=1800,
            pool_pre_ping=True,
        )

    return Database(
        settings.database_url,
        echo=settings.debug,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
    )


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    database: Database = request.app.state.database
    logger.debug("Opening database session...")
    async with database.session() as db:
        yield db
    logger.debug("Database session closed.")
