"""Store Initializer — idempotent create-if-absent schema bootstrap, one store at a time.

Invariants:
    - Never drops, never alters: only tables missing from the store are created
    - ensure_schema NEVER raises: every failure becomes a StoreInitResult
    - A store whose URL could not build an engine is reported FAILED up front
    - Stores are bootstrapped independently — one failing never blocks the other
    - The latest result per store is kept for the readiness probe

Design Decisions:
    - Broad catch on purpose: connectivity errors are classified UNREACHABLE, anything
      else FAILED (logged with traceback). A narrow catch would let an unanticipated
      error type abort startup, and the service must come up degraded instead
    - Inspect-then-create over bare create_all(checkfirst=True): lets the log say whether
      the schema was created or already present
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable

from sqlalchemy import inspect
from sqlalchemy.exc import InterfaceError, OperationalError

from storefront.core.domain_types import StoreInitStatus, StoreName
from storefront.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)

CONNECTIVITY_ERRORS = (OperationalError, InterfaceError, OSError)

OPERATOR_HINT = "Check connection strings and database availability."


@dataclass
class StoreInitResult:
    """Outcome of bootstrapping one store."""
    store: StoreName
    status: StoreInitStatus
    created_tables: list[str] = field(default_factory=list)
    error: str | None = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "created_tables": self.created_tables,
            "error": self.error,
            "checked_at": self.checked_at.isoformat(),
        }


_last_results: dict[StoreName, StoreInitResult] = {}


def get_store_status(name: StoreName) -> StoreInitResult | None:
    """Latest bootstrap result for a store, or None if never attempted."""
    return _last_results.get(name)


def reset_store_status() -> None:
    _last_results.clear()


def _create_missing_tables(sync_conn, metadata) -> list[str]:
    existing = set(inspect(sync_conn).get_table_names())
    missing = [t for t in metadata.sorted_tables if t.name not in existing]
    if missing:
        metadata.create_all(sync_conn, tables=missing, checkfirst=True)
    return [t.name for t in missing]


async def ensure_schema(store: DatabaseSessionManager) -> StoreInitResult:
    """Create the store's tables if absent. Reports failure instead of raising."""
    extra = {"store": store.name.value}
    if not store.is_configured:
        logger.error(
            f"Store '{store.name.value}' schema initialization skipped: "
            f"{store.config_error}. Hint: {OPERATOR_HINT}",
            extra=extra,
        )
        result = StoreInitResult(
            store.name, StoreInitStatus.FAILED, error=store.config_error,
        )
        _last_results[store.name] = result
        return result
    try:
        async with store.engine.begin() as conn:
            created = await conn.run_sync(_create_missing_tables, store.metadata)
    except CONNECTIVITY_ERRORS as e:
        logger.error(
            f"Store '{store.name.value}' unreachable during initialization. "
            f"Service starts degraded; operations on this store will fail until "
            f"connectivity is restored. Hint: {OPERATOR_HINT} ({e})",
            extra=extra,
        )
        result = StoreInitResult(
            store.name, StoreInitStatus.UNREACHABLE, error=str(e),
        )
    except Exception as e:
        logger.error(
            f"Store '{store.name.value}' schema initialization failed: {e}",
            extra=extra,
            exc_info=True,
        )
        result = StoreInitResult(store.name, StoreInitStatus.FAILED, error=str(e))
    else:
        if created:
            logger.info(
                f"Store '{store.name.value}' schema created: {', '.join(created)}",
                extra=extra,
            )
            result = StoreInitResult(
                store.name, StoreInitStatus.CREATED, created_tables=created,
            )
        else:
            logger.info(
                f"Store '{store.name.value}' schema already present", extra=extra,
            )
            result = StoreInitResult(store.name, StoreInitStatus.ALREADY_PRESENT)

    _last_results[store.name] = result
    return result


async def initialize_stores(
    stores: Iterable[DatabaseSessionManager],
) -> dict[StoreName, StoreInitResult]:
    """Bootstrap every store concurrently and independently."""
    managers = list(stores)
    results = await asyncio.gather(*(ensure_schema(m) for m in managers))
    return {result.store: result for result in results}
