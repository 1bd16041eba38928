"""Database Session Managers — one async connection pool per store, with rollback and health checks.

Invariants:
    - Every store has its own DatabaseSessionManager: own engine, own pool, own sessions
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy and socket-level exceptions mapped to DatabaseError (core/errors.py)
    - Domain errors (StorefrontError) pass through untouched

Design Decisions:
    - Managers registered on startup by init_stores: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - Engine creation is lazy about connectivity: an unreachable store still gets a manager,
      so later requests fail per-request instead of the process failing at boot
    - An unusable URL (sync driver, unknown dialect, unparseable string) leaves the manager
      without an engine: config_error records why, every session raises DatabaseError
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import MetaData, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from storefront.core.domain_types import StoreName
from storefront.core.errors import DatabaseError, ErrorContext
from storefront.db.base import CustomerBase, OrderBase
# Registers every model on its store metadata
import storefront.models  # noqa: F401

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async sessions for ONE store with pooling, rollback, and health checks."""

    def __init__(
        self,
        name: StoreName,
        database_url: str,
        metadata: MetaData,
        pool_size: int = 20,
        max_overflow: int = 10,
    ):
        self.name = name
        self.metadata = metadata
        self.engine: AsyncEngine | None = None
        self.config_error: str | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        try:
            self.engine = self._create_engine(database_url, pool_size, max_overflow)
        except Exception as e:
            self.config_error = f"{type(e).__name__}: {e}"
            logger.error(
                f"Store '{name.value}' has an unusable connection string: "
                f"{self.config_error}",
                extra={"store": name.value},
            )
            return
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @staticmethod
    def _create_engine(
        database_url: str, pool_size: int, max_overflow: int,
    ) -> AsyncEngine:
        engine_kwargs = {"pool_pre_ping": True}
        # SQLite :memory: pools reject sizing arguments
        if make_url(database_url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        return create_async_engine(database_url, **engine_kwargs)

    @property
    def is_configured(self) -> bool:
        return self.engine is not None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        ctx = ErrorContext(store=self.name.value)
        if self._session_factory is None:
            raise DatabaseError(
                f"Store not configured ({self.config_error})", "connect", ctx,
            )
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}", extra={"store": self.name.value})
            raise DatabaseError("Integrity constraint violated", "commit", ctx)
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}", extra={"store": self.name.value})
            raise DatabaseError("Connection or operational error", "execute", ctx)
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}", extra={"store": self.name.value})
            raise DatabaseError("Database driver error", "query", ctx)
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}", extra={"store": self.name.value})
            raise DatabaseError("Database operation failed", "unknown", ctx)
        except OSError as e:
            # Raw socket errors from the driver never opened a transaction
            logger.error(f"Store unreachable: {e}", extra={"store": self.name.value})
            raise DatabaseError("Store unreachable", "connect", ctx)
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check store connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(
                f"DB health check failed: {e}", extra={"store": self.name.value},
            )
            return False

    async def dispose(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()


# Registry (initialized on startup), keyed by store
stores: dict[StoreName, DatabaseSessionManager] = {}


def init_stores(
    customer_database_url: str, order_database_url: str, **kwargs,
) -> dict[StoreName, DatabaseSessionManager]:
    """Create one manager per store and register them."""
    stores[StoreName.CUSTOMERS] = DatabaseSessionManager(
        StoreName.CUSTOMERS, customer_database_url, CustomerBase.metadata, **kwargs,
    )
    stores[StoreName.ORDERS] = DatabaseSessionManager(
        StoreName.ORDERS, order_database_url, OrderBase.metadata, **kwargs,
    )
    return stores


async def close_stores() -> None:
    for manager in stores.values():
        await manager.dispose()
    stores.clear()


def get_store(name: StoreName) -> DatabaseSessionManager:
    manager = stores.get(name)
    if manager is None:
        raise RuntimeError(f"Store '{name.value}' not initialized")
    return manager


def get_customer_store() -> DatabaseSessionManager:
    """FastAPI dependency for the customer store."""
    return get_store(StoreName.CUSTOMERS)


def get_order_store() -> DatabaseSessionManager:
    """FastAPI dependency for the order store."""
    return get_store(StoreName.ORDERS)
