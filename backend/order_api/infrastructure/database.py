"""Database Lifecycle — the engine, per-request sessions and readiness check behind the OrderItem store.

Invariants:
    - A session that sees an exception is rolled back and closed before the error propagates
    - SQLAlchemy errors escaping a request become DatabaseError (503) with the failing phase named
    - Errors already typed as OrderApiError pass through unchanged
    - SQLite URLs (tests, local runs) get no pool sizing; Postgres gets pool_size/max_overflow/recycle

Design Decisions:
    - One module-level db_manager, created by init_db() in the app lifespan and disposed there
    - Sessions come from db.session.create_session_factory so scripts and requests share settings
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from order_api.core.errors import DatabaseError
from order_api.db.session import create_session_factory

logger = logging.getLogger(__name__)

# SQLAlchemy error class → (user-facing reason, phase), most specific first
_ERROR_PHASES: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    options = {"pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
        )
    return options


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    """Name the failing phase of a SQLAlchemy error without leaking its SQL."""
    for error_type, reason, phase in _ERROR_PHASES:
        if isinstance(exc, error_type):
            return DatabaseError(reason, phase)
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the async engine and hands out one session per request."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **_engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = create_session_factory(self.engine)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; roll back and translate SQLAlchemy errors on the way out."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = to_database_error(e)
            logger.error(
                f"{error.message}: {e}",
                extra={"operation": error.operation, "error_code": error.code},
            )
            raise error from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when the database answers SELECT 1."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database readiness check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session for the OrderItem repository."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
