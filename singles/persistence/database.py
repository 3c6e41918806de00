"""Database connection and unit-of-work management.

``SqlStore`` is the single entry point repositories use to reach the
relational store. Every call runs as one transaction with a deadline and
a bounded retry on transient failures.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import logfire
from sqlalchemy import inspect
from sqlalchemy.exc import DBAPIError, DisconnectionError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from singles.config import DatabaseSettings
from singles.persistence.error import SchemaNotReadyError, StoreUnavailableError
from singles.persistence.schema import SchemaGuard
from singles.persistence.tables import metadata

T = TypeVar("T")

TRANSIENT_MESSAGE_FRAGMENTS = (
    "connection lost",
    "connection reset",
    "connection was closed",
    "connection is closed",
    "server closed the connection",
    "timeout",
    "timed out",
)

SCHEMA_CHECK_KEY = "tables"


def create_engine(settings: DatabaseSettings, debug: bool = False) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Database settings
        debug: Log SQL statements

    Returns:
        Configured async engine
    """
    options: dict = {
        "echo": debug,
        "pool_pre_ping": True,  # Verify connections before using
    }
    if not settings.url.startswith("sqlite"):
        options["pool_size"] = settings.pool_size
        options["max_overflow"] = settings.max_overflow
    return create_async_engine(settings.url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
    )


def is_transient_error(error: BaseException) -> bool:
    """Whether an error is worth retrying on a fresh connection.

    Connection resets, invalidated connections and timeouts are transient.
    Constraint violations, missing tables and programming errors are not.
    """
    if isinstance(error, (TimeoutError, asyncio.TimeoutError, ConnectionError)):
        return True
    if isinstance(error, DisconnectionError):
        return True
    if isinstance(error, DBAPIError):
        if error.connection_invalidated:
            return True
        if isinstance(error.orig, (TimeoutError, ConnectionError)):
            return True
    if isinstance(error, (DBAPIError, OSError)):
        message = str(error).lower()
        return any(fragment in message for fragment in TRANSIENT_MESSAGE_FRAGMENTS)
    return False


class SqlStore:
    """Retrying unit of work over a lazily created, process-wide engine.

    The engine is created on first use under a lock, so concurrent first
    calls share one engine. After a transient failure the engine is
    disposed and recreated on the next attempt.
    """

    def __init__(
        self,
        settings: DatabaseSettings,
        schema_guard: SchemaGuard | None = None,
        debug: bool = False,
        on_engine_created: Callable[[AsyncEngine], None] | None = None,
    ) -> None:
        self.settings = settings
        self.schema_guard = schema_guard or SchemaGuard()
        self.debug = debug
        self.on_engine_created = on_engine_created
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._engine_lock = asyncio.Lock()

    async def get_engine(self) -> AsyncEngine:
        engine, _ = await self._acquire()
        return engine

    async def run(self, operation: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """Run ``operation`` in a transaction, retrying transient failures.

        Args:
            operation: Coroutine function receiving the session

        Returns:
            Whatever ``operation`` returns

        Raises:
            StoreUnavailableError: If every attempt failed transiently
            Exception: Any non-transient error, unchanged and without retry
        """
        attempts = max(self.settings.retry_attempts, 1)
        attempt = 0
        while True:
            attempt += 1
            engine, session_factory = await self._acquire()
            try:
                if self.settings.verify_schema:
                    await self.schema_guard.ensure(SCHEMA_CHECK_KEY, self._check_tables)
                return await asyncio.wait_for(
                    self._run_once(session_factory, operation),
                    timeout=self.settings.operation_timeout_seconds,
                )
            except Exception as e:
                if not is_transient_error(e):
                    raise
                logfire.warn(
                    "Transient store error",
                    attempt=attempt,
                    attempts=attempts,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                await self.invalidate(engine)
                if attempt >= attempts:
                    logfire.error("Store unavailable", attempts=attempts)
                    raise StoreUnavailableError(attempts, e) from e
                await asyncio.sleep(self.settings.retry_base_delay_ms * attempt / 1000)

    async def invalidate(self, engine: AsyncEngine | None = None) -> None:
        """Drop the current engine so the next call creates a fresh pool.

        When ``engine`` is given, only that engine is dropped; a newer
        engine created by another caller is left alone.
        """
        async with self._engine_lock:
            current = self._engine
            if current is None or (engine is not None and engine is not current):
                return
            self._engine = None
            self._session_factory = None
        logfire.warn("Database engine invalidated")
        await current.dispose()

    async def dispose(self) -> None:
        async with self._engine_lock:
            engine = self._engine
            self._engine = None
            self._session_factory = None
        if engine is not None:
            await engine.dispose()

    async def _acquire(
        self,
    ) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
        async with self._engine_lock:
            if self._engine is None or self._session_factory is None:
                engine = create_engine(self.settings, self.debug)
                if self.on_engine_created:
                    self.on_engine_created(engine)
                self._engine = engine
                self._session_factory = create_session_factory(engine)
                logfire.info("Database engine created")
            return self._engine, self._session_factory

    @staticmethod
    async def _run_once(
        session_factory: async_sessionmaker[AsyncSession],
        operation: Callable[[AsyncSession], Awaitable[T]],
    ) -> T:
        async with session_factory() as session:
            async with session.begin():
                return await operation(session)

    async def _check_tables(self) -> None:
        engine = await self.get_engine()
        async with engine.connect() as conn:
            existing = await conn.run_sync(
                lambda sync_conn: set(inspect(sync_conn).get_table_names())
            )
        missing = sorted(set(metadata.tables) - existing)
        if missing:
            raise SchemaNotReadyError(missing)
