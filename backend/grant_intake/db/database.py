"""Database Configuration.

AsyncPG + SQLAlchemy setup with one process-wide engine owned by
DatabaseConnectionManager.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from ..core.config import settings
from ..core.constants import DatabaseLimits, ErrorMessages
from ..core.exceptions import DatabaseConnectionError
from ..core.logging import get_logger
from ..core.metrics import db_connection_status

logger = get_logger(__name__)

Base = declarative_base()


class DatabaseConnectionManager:
    """Owns the engine and its readiness state.

    The engine is created lazily on the first ensure_connected() call. While a
    connection attempt is in flight, later callers await the same attempt
    instead of starting another one. A failed attempt is forgotten so that the
    next call tries again.
    """

    def __init__(
        self,
        database_url: str,
        create_schema: bool = False,
        connect_timeout: float = 10.0,
        **engine_options: Any
    ):
        self.database_url = database_url
        self.create_schema = create_schema
        self.connect_timeout = connect_timeout
        self._engine_options = engine_options
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._ready = False
        self._connecting: asyncio.Task | None = None

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def engine(self) -> AsyncEngine | None:
        return self._engine

    async def ensure_connected(self) -> None:
        """Return once the store is reachable.

        Raises:
            DatabaseConnectionError: If the store cannot be reached
        """
        if self._ready:
            return

        if self._connecting is None:
            self._connecting = asyncio.create_task(self._connect())

        attempt = self._connecting
        try:
            await asyncio.shield(attempt)
        finally:
            if attempt.done() and self._connecting is attempt:
                self._connecting = None

    async def ping(self) -> None:
        """Run a live round-trip against the store.

        Unlike ensure_connected(), this never trusts cached readiness.

        Raises:
            DatabaseConnectionError: If the store cannot be reached
        """
        await self.ensure_connected()

        try:
            async with asyncio.timeout(self.connect_timeout):
                async with self._engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
        except Exception as e:
            self._mark_unready()
            logger.error(
                "Database ping failed",
                extra={'error': str(e), 'error_type': type(e).__name__},
                exc_info=True
            )
            raise DatabaseConnectionError(
                ErrorMessages.DATABASE_UNREACHABLE.format(error=_describe(e))
            ) from e

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session bound to the shared engine.

        Usage:
            await manager.ensure_connected()
            async with manager.session() as db:
                ...
        """
        if self._session_factory is None:
            raise DatabaseConnectionError("Database connection has not been established")

        async with self._session_factory() as session:
            yield session

    async def close(self) -> None:
        """Dispose the engine and forget readiness."""
        if self._connecting is not None and not self._connecting.done():
            self._connecting.cancel()
        self._connecting = None

        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")

        self._engine = None
        self._session_factory = None
        self._mark_unready()

    async def _connect(self) -> None:
        try:
            if self._engine is None:
                self._create_engine()

            async with asyncio.timeout(self.connect_timeout):
                async with self._engine.begin() as conn:
                    await conn.execute(text("SELECT 1"))
                    if self.create_schema:
                        await conn.run_sync(_create_tables)
        except Exception as e:
            self._mark_unready()
            logger.error(
                "Failed to connect to database",
                extra={'error': str(e), 'error_type': type(e).__name__},
                exc_info=True
            )
            raise DatabaseConnectionError(
                ErrorMessages.DATABASE_UNREACHABLE.format(error=_describe(e))
            ) from e

        self._ready = True
        db_connection_status.set(1)
        logger.info(
            "Database connection established",
            extra={'schema_created': self.create_schema}
        )

    def _create_engine(self) -> None:
        """Build the engine and session factory.

        Bound parameters are kept out of SQLAlchemy error messages and echo
        output since they carry applicant contact details.
        """
        options = {'hide_parameters': True, **self._engine_options}
        engine = create_async_engine(self.database_url, **options)
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )
        self._engine = engine

    def _mark_unready(self) -> None:
        self._ready = False
        db_connection_status.set(0)


def _create_tables(sync_conn) -> None:
    # Models register themselves on Base.metadata at import time
    from ..models import application  # noqa: F401

    Base.metadata.create_all(bind=sync_conn, checkfirst=True)


def _describe(error: Exception) -> str:
    if isinstance(error, TimeoutError):
        return "connection attempt timed out"
    return str(error) or type(error).__name__


def _engine_options_for(url: str) -> dict[str, Any]:
    options: dict[str, Any] = {'echo': settings.DEBUG}
    if not url.startswith('sqlite'):
        options.update(
            pool_pre_ping=True,
            pool_size=DatabaseLimits.POOL_SIZE,
            max_overflow=DatabaseLimits.MAX_OVERFLOW
        )
    return options


db_manager = DatabaseConnectionManager(
    settings.async_database_url,
    create_schema=settings.DATABASE_CREATE_SCHEMA,
    connect_timeout=settings.DATABASE_CONNECT_TIMEOUT,
    **_engine_options_for(settings.async_database_url)
)


def get_connection_manager() -> DatabaseConnectionManager:
    """Dependency returning the process-wide connection manager.

    Usage in FastAPI:
        @router.get("/items")
        async def read_items(manager: DatabaseConnectionManager = Depends(get_connection_manager)):
            ...
    """
    return db_manager
