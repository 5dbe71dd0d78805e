"""Database Session Manager — request sessions with rollback and error translation.

Invariants:
    - Every session rolls back on exception (no partial commits leak)
    - Constraint violations → IntegrityViolationError (409) naming the constraint
      when the driver reports it; every other SQLAlchemy failure → DatabaseError (503)
    - Connection pool uses pool_pre_ping for stale connection detection

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - Engine and session factory come from db/session.py (SQLite FK pragma lives there)
    - SQLite URLs skip pool sizing: aiosqlite engines do not take QueuePool arguments
"""

import logging
import re
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_api.core.errors import DatabaseError, IntegrityViolationError
from invoice_api.db.session import build_engine, create_session_factory

logger = logging.getLogger(__name__)

# SQLite: "CHECK constraint failed: invoices_status_check"
# PostgreSQL: 'violates check constraint "invoices_status_check"'
_CONSTRAINT_NAME = re.compile(r'constraint (?:failed: ([\w.]+)|"([^"]+)")')

# Most specific first: OperationalError is a DBAPIError
_FAILURE_KINDS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def violated_constraint(exc: IntegrityError) -> str | None:
    """Name of the constraint a rejected write broke, if the driver says."""
    match = _CONSTRAINT_NAME.search(str(exc.orig))
    if match is None:
        return None
    return match.group(1) or match.group(2)


def _describe_failure(exc: SQLAlchemyError) -> tuple[str, str]:
    for kind, message, operation in _FAILURE_KINDS:
        if isinstance(exc, kind):
            return message, operation
    return "Database operation failed", "unknown"


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that translate DB failures."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = build_engine(database_url, **engine_kwargs)
        self._session_factory = create_session_factory(self.engine)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; on failure roll back and raise a domain error."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            constraint = violated_constraint(e)
            logger.warning(
                f"Write rejected by constraint {constraint or '<unnamed>'}: {e.orig}",
                extra={"error_code": "INTEGRITY_VIOLATION"},
            )
            raise IntegrityViolationError(constraint) from e
        except SQLAlchemyError as e:
            await session.rollback()
            message, operation = _describe_failure(e)
            logger.error(
                f"DB {operation} error: {e}",
                extra={"error_code": "DATABASE_ERROR"},
            )
            raise DatabaseError(message, operation) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Round-trip a SELECT 1 on a fresh connection (readiness probe)."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one managed session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized; init_db() runs in the app lifespan")
    async with db_manager.session() as session:
        yield session
