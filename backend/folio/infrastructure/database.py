"""Database Session Manager - lazily created async engine with typed error mapping.

Invariants:
    - One engine per manager, created on first use and reused until dispose()
    - Every session rolls back on exception (no partial commits leak)
    - SQLAlchemy failures surface as FolioError subclasses only:
      IntegrityError -> ResourceValidationError, everything else -> StoreUnavailableError
    - A failure affects the request that hit it; the manager stays usable

Design Decisions:
    - Singleton db_manager created by the FastAPI lifespan and disposed on
      shutdown; stores receive it by injection (get_db_manager dependency)
    - expire_on_commit=False: rows stay readable after the session closes
    - Pool sizing options are skipped for SQLite, which uses its own pool classes
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from folio.core.errors import (
    ErrorContext, ResourceValidationError, StoreUnavailableError,
)
from folio.db.base import Base

logger = logging.getLogger(__name__)


def _engine_options(
    database_url: str, pool_size: int, max_overflow: int, pool_timeout: int,
) -> dict:
    options: dict = {"pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        return options
    options.update(
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_timeout=pool_timeout,
        pool_recycle=3600,
    )
    return options


class DatabaseSessionManager:
    """Owns the shared engine; hands out sessions with rollback and error mapping."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_timeout: int = 30,
    ):
        self.database_url = database_url
        self._options = _engine_options(
            database_url, pool_size, max_overflow, pool_timeout,
        )
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        """Wrap an already created engine (test fixtures, scripts)."""
        manager = cls(engine.url.render_as_string(hide_password=False))
        manager._attach(engine)
        return manager

    def _attach(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        """The shared engine, created on first access."""
        if self._engine is None:
            try:
                engine = create_async_engine(self.database_url, **self._options)
            except (SQLAlchemyError, ImportError) as e:
                logger.error(
                    f"DB engine creation failed: {e}",
                    extra={"operation": "connect"},
                )
                raise StoreUnavailableError(
                    "connect", ErrorContext(operation="connect"),
                ) from e
            self._attach(engine)
            logger.info("DB engine created")
        return self._engine

    def _get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._attach(self.engine)
        return self._session_factory

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback and typed error mapping."""
        session = self._get_session_factory()()
        try:
            yield session
        except IntegrityError as e:
            await _safe_rollback(session)
            logger.error(f"DB integrity error: {e}")
            raise ResourceValidationError(
                {"record": ["Record violates a storage constraint"]},
            ) from e
        except (SQLAlchemyError, OSError) as e:
            await _safe_rollback(session)
            logger.error(
                f"DB error ({type(e).__name__}): {e}",
                extra={"operation": "execute"},
            )
            raise StoreUnavailableError("execute") from e
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create all ORM tables (local/dev and tests; production uses Alembic)."""
        # Import models so their tables are registered on Base.metadata.
        from folio.models import experience, portfolio  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"DB table creation failed: {e}")
            raise StoreUnavailableError("create_tables") from e

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except StoreUnavailableError:
            return False

    async def dispose(self) -> None:
        """Release pooled connections (process shutdown)."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("DB engine disposed")


async def _safe_rollback(session: AsyncSession) -> None:
    """Rollback that tolerates a dead connection."""
    try:
        await session.rollback()
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"DB rollback failed: {e}")


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


def get_db_manager() -> DatabaseSessionManager:
    """FastAPI dependency for the shared session manager."""
    if db_manager is None:
        raise StoreUnavailableError("connect", ErrorContext(operation="connect"))
    return db_manager
