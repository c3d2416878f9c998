"""Database engine and session utilities."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from tradelog.db.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Configure an async SQLAlchemy engine and session factory."""

    def __init__(self, url: str, *, echo: bool = False):
        self._url = url
        self._engine: AsyncEngine = create_async_engine(url, future=True, echo=echo, pool_pre_ping=True)
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False, class_=AsyncSession)

    @property
    def url(self) -> str:
        return self._url

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def create_all(self) -> None:
        """Create all tables defined on the declarative metadata."""

        # Import models so that SQLAlchemy is aware of all tables before create_all runs.
        import tradelog.models  # noqa: F401  # pylint: disable=unused-import

        async with self._engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Return ``True`` when the database answers a trivial query."""

        try:
            async with self._engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError):
            logger.warning("Database ping failed", exc_info=True)
            return False
        return True

    async def dispose(self) -> None:
        await self._engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            yield session


__all__ = ["Database"]
