"""Engine & Session Factory — one place that turns a URL into a configured engine.

Invariants:
    - SQLite connections run with PRAGMA foreign_keys=ON, so the invoice_tag
      ON DELETE CASCADE holds there as it does on PostgreSQL
    - Sessions never expire attributes on commit (records stay readable after delete)

Design Decisions:
    - Separate from infrastructure/database.py: the app, alembic-free scripts,
      and test fixtures all build engines here
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, **engine_kwargs) -> AsyncEngine:
    """Create an async engine; SQLite engines enforce foreign keys."""
    engine = create_async_engine(database_url, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the given engine."""
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
