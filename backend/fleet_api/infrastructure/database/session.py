"""SQLAlchemy engine and session factory construction."""

import logging

import asyncpg
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from fleet_api.config import Settings
from fleet_api.infrastructure.database.base import Base

logger = logging.getLogger(__name__)

# Execution options for a session that reads and then writes. On SQLite the
# transaction starts with BEGIN IMMEDIATE so the write lock is taken up front.
WRITE_LOCK_OPTIONS = {"fleet_write_lock": True}

# Seconds a SQLite connection waits for another writer before failing.
SQLITE_BUSY_TIMEOUT = 30


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def _install_sqlite_locking(engine: AsyncEngine) -> None:
    """Let SQLAlchemy emit BEGIN itself so write sessions can ask for IMMEDIATE.

    The sqlite3 driver otherwise defers BEGIN until the first write, after
    the read that the write depends on.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin(conn):
        if conn.get_execution_options().get("fleet_write_lock"):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


def build_engine(settings: Settings) -> AsyncEngine:
    url = _get_async_url(settings.database_url)
    if make_url(url).get_backend_name() != "sqlite":
        return create_async_engine(url, future=True)

    engine = create_async_engine(
        url, future=True, connect_args={"timeout": SQLITE_BUSY_TIMEOUT}
    )
    _install_sqlite_locking(engine)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


async def ensure_database(settings: Settings) -> None:
    """Create the configured PostgreSQL database when the server lacks it.

    Other backends are left alone; a SQLite file appears on first connect.
    Connection problems are logged and startup carries on, so the engine
    reports the real failure when it first connects.
    """
    url = make_url(settings.database_url)
    if url.get_backend_name() != "postgresql" or not url.database:
        return

    target = url.database
    admin_dsn = url.set(drivername="postgresql", database="postgres").render_as_string(
        hide_password=False
    )
    try:
        conn = await asyncpg.connect(admin_dsn)
    except (OSError, asyncpg.PostgresError) as exc:
        logger.warning("Cannot reach PostgreSQL to check database '%s': %s", target, exc)
        return

    try:
        found = await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", target)
        if found:
            logger.debug("Database '%s' is present", target)
            return
        # Not allowed inside a transaction block, so no transaction here.
        await conn.execute(f"CREATE DATABASE {_quote_identifier(target)}")
        logger.info("Created database '%s'", target)
    except asyncpg.PostgresError as exc:
        logger.warning("Could not create database '%s': %s", target, exc)
    finally:
        await conn.close()
