"""SQLAlchemy engine, session factory, and startup connection handling.

Nothing here is created at import time: the application lifespan builds the
engine and session factory and hands them to whoever needs them.
"""

import asyncio
import logging

from sqlalchemy import event, inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.domain.exceptions import DatabaseUnavailableError, SchemaVerificationError
from app.infrastructure.database.base import Base

logger = logging.getLogger(__name__)

_REQUIRED_TABLES = frozenset({"customizations", "chess_pieces"})


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings, url: str | None = None) -> AsyncEngine:
    """Create the async engine for ``url`` (default: the configured database)."""
    async_url = _get_async_url(url or settings.resolved_database_url())

    if async_url.startswith("sqlite"):
        kwargs: dict = {}
        if ":memory:" in async_url or async_url.rstrip("/").endswith("aiosqlite:"):
            kwargs["poolclass"] = StaticPool
        engine = create_async_engine(async_url, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        async_url,
        pool_size=settings.db_pool_size,
        pool_timeout=settings.db_connection_timeout_ms / 1000,
        pool_recycle=settings.db_idle_timeout_ms / 1000,
        pool_pre_ping=True,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def wait_for_database(
    engine: AsyncEngine,
    *,
    max_retries: int,
    retry_delay_ms: int,
    backoff_multiplier: float,
) -> None:
    """Probe the database with ``SELECT 1``, retrying with exponential backoff.

    Raises DatabaseUnavailableError once every attempt has failed.
    """
    last_error: Exception | None = None

    for attempt in range(1, max_retries + 1):
        try:
            logger.info(
                "Testing database connection (attempt %d/%d)...", attempt, max_retries
            )
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connection successful")
            return
        except (SQLAlchemyError, OSError) as exc:
            last_error = exc
            logger.warning("Database connection attempt %d failed: %s", attempt, exc)
            if attempt < max_retries:
                delay_ms = retry_delay_ms * backoff_multiplier ** (attempt - 1)
                logger.info("Retrying in %dms...", delay_ms)
                await asyncio.sleep(delay_ms / 1000)

    raise DatabaseUnavailableError(max_retries, last_error)


async def init_schema(engine: AsyncEngine) -> None:
    """Create the customization tables if they do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema initialized")


async def _table_names(engine: AsyncEngine) -> set[str]:
    async with engine.connect() as conn:
        names = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    return set(names)


async def tables_exist(engine: AsyncEngine) -> bool:
    """True when both the customizations and chess_pieces tables exist."""
    return _REQUIRED_TABLES.issubset(await _table_names(engine))


async def verify_schema(engine: AsyncEngine) -> None:
    """Create the schema, then confirm both tables are really there.

    Raises SchemaVerificationError naming the tables that are missing.
    """
    await init_schema(engine)

    if not await tables_exist(engine):
        missing = sorted(_REQUIRED_TABLES - await _table_names(engine))
        raise SchemaVerificationError(missing)
    logger.info("Database tables verified")
