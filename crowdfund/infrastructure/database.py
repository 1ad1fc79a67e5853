"""Database Engine — one async engine per process, one session per request.

Invariants:
    - A session that leaves with an exception is rolled back, then closed
    - SQLAlchemy failures surface as DatabaseError (FAIL); domain errors pass through untouched
    - Concurrency conflicts are translated by SqlProjectStore before they reach here

Design Decisions:
    - Server URLs get a sized, recycled pool; SQLite keeps the driver's default pool
    - expire_on_commit=False: SqlProjectStore reads its records back after commit
    - db_manager is set by the app lifespan; get_db is the per-request dependency
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from crowdfund.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors.
_FAILURE_KINDS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Database unavailable", "execute"),
    (DBAPIError, "Database driver error", "query"),
)


def classify_failure(exc: SQLAlchemyError) -> DatabaseError:
    """Map a SQLAlchemy exception onto the FAIL-class DatabaseError."""
    for kind, message, operation in _FAILURE_KINDS:
        if isinstance(exc, kind):
            return DatabaseError(message, operation)
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the engine and hands out rollback-on-error sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        options: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            options.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **options)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            failure = classify_failure(e)
            logger.error(f"{failure.message}: {e}")
            raise failure from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
