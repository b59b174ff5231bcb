"""
Database Connection Module

Owns the datastore client handle. A single Database instance is built from
settings when the application starts, disposed when it stops, and passed to
every store that needs it; nothing in this module connects at import time.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import Settings
from app.core.errors import StorageError

logger = logging.getLogger(__name__)

# Driver-level connection failures are not always wrapped by SQLAlchemy
STORAGE_FAILURES = (SQLAlchemyError, OSError)


# Base class for all our models
class Base(DeclarativeBase):
    pass


class Database:
    """
    Datastore client handle.

    Wraps an async SQLAlchemy engine and its session factory with an
    explicit lifecycle:

        database = Database.from_settings(settings)
        database.connect()
        await database.init_models()
        ...
        await database.dispose()

    Attributes:
        url: SQLAlchemy async connection URL
        echo: Log every SQL statement
        pool_size: Connection pool size (ignored for SQLite)
        max_overflow: Extra connections when the pool is full (ignored for SQLite)
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
    ):
        self.url = url
        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow

        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build an unconnected handle from application settings."""
        return cls(
            url=settings.database_url,
            echo=settings.database_echo,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def dialect(self) -> str:
        return self.url.split(":", 1)[0]

    def connect(self) -> None:
        """
        Create the engine and session factory.

        The engine opens connections lazily, so an unreachable datastore is
        reported by the first query rather than here.
        """
        if self.is_connected:
            return

        engine_kwargs: dict[str, Any] = {"echo": self.echo}
        if not self.url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_pre_ping=True,
            )

        self._engine = create_async_engine(self.url, **engine_kwargs)
        self._session_maker = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Objects remain accessible after commit
        )
        logger.info(f"Datastore engine created ({self.dialect})")

    async def init_models(self) -> None:
        """
        Create all tables in the datastore.
        Called once at application startup.
        """
        # Registers the mapped tables on Base.metadata
        from app import models  # noqa: F401

        async with storage_errors("initialize schema"):
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        logger.info("Datastore tables ready")

    async def dispose(self) -> None:
        """Close every pooled connection and forget the engine."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        logger.info("Datastore engine disposed")

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise StorageError("Datastore is not connected")
        return self._engine

    def session(self) -> AsyncSession:
        """Open a new session; use it as an async context manager."""
        if self._session_maker is None:
            raise StorageError("Datastore is not connected")
        return self._session_maker()

    async def ping(self) -> bool:
        """Run a trivial query to check the datastore is reachable."""
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except (StorageError, *STORAGE_FAILURES) as e:
            logger.error(f"Datastore ping failed: {e}")
            return False


@asynccontextmanager
async def storage_errors(operation: str) -> AsyncIterator[None]:
    """
    Translate datastore exceptions raised inside the block into StorageError.

    Args:
        operation: Short description used in the log line
    """
    try:
        yield
    except STORAGE_FAILURES as e:
        logger.error(f"Datastore failure during {operation}: {e}")
        raise StorageError(str(e)) from e


def get_database(request: Request) -> Database:
    """
    Dependency injection for FastAPI routes.
    Returns the handle opened by the application lifespan.
    """
    return request.app.state.database
