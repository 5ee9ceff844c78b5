"""Database connection and session handling.

Uses service-specific config with fail-fast validation.
"""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from src.config import get_settings


def configure_sqlite(engine: AsyncEngine) -> None:
    """Make SQLite take the write lock when a transaction begins.

    The driver's deferred BEGIN lets two writers each hold a read lock and
    then fail with "database is locked" when both try to upgrade. BEGIN
    IMMEDIATE makes the second writer wait on the busy timeout instead.
    Also turns on foreign key enforcement so ON DELETE SET NULL applies.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(database_url: str) -> AsyncEngine:
    """Create the async engine for ``database_url``."""
    engine = create_async_engine(database_url, echo=False)
    if database_url.startswith("sqlite"):
        configure_sqlite(engine)
    return engine


# Get validated settings - will fail fast if DATABASE_URL is not set
settings = get_settings()

engine = build_engine(settings.database_url)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Get async database session."""
    async with async_session_maker() as session:
        yield session
