"""Root conftest — shared test configuration and per-store fixtures.

Invariants:
    - Every test gets two fresh file-backed SQLite stores (one per entity family)
    - The stores never share an engine, a file, or a pool
    - Store registry and startup status are reset after each test

Design Decisions:
    - File-backed over :memory: SQLite: a real connection pool per store, so two sessions
      can race against the same row the way two requests would
"""

import os

import pytest

# Settings() requires both URLs at import of storefront.main
os.environ.setdefault("CUSTOMER_DATABASE_URL", "sqlite+aiosqlite:///customers-test.db")
os.environ.setdefault("ORDER_DATABASE_URL", "sqlite+aiosqlite:///orders-test.db")

from storefront.core.domain_types import StoreName  # noqa: E402
from storefront.db.base import CustomerBase, OrderBase  # noqa: E402
from storefront.infrastructure import database  # noqa: E402
from storefront.infrastructure.database import DatabaseSessionManager  # noqa: E402
from storefront.infrastructure.store_initializer import (  # noqa: E402
    ensure_schema, reset_store_status,
)
import storefront.models  # noqa: E402,F401


def sqlite_url(path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
async def customer_store(tmp_path):
    manager = DatabaseSessionManager(
        StoreName.CUSTOMERS, sqlite_url(tmp_path / "customers.db"),
        CustomerBase.metadata,
    )
    await ensure_schema(manager)
    yield manager
    await manager.dispose()


@pytest.fixture
async def order_store(tmp_path):
    manager = DatabaseSessionManager(
        StoreName.ORDERS, sqlite_url(tmp_path / "orders.db"),
        OrderBase.metadata,
    )
    await ensure_schema(manager)
    yield manager
    await manager.dispose()


@pytest.fixture
def unreachable_url(tmp_path) -> str:
    """SQLite URL whose parent directory does not exist — connect always fails."""
    return sqlite_url(tmp_path / "missing-dir" / "store.db")


@pytest.fixture
def registered_stores(customer_store, order_store):
    """Register both test stores as the process-wide store registry."""
    database.stores[StoreName.CUSTOMERS] = customer_store
    database.stores[StoreName.ORDERS] = order_store
    yield database.stores
    database.stores.clear()


@pytest.fixture(autouse=True)
def _reset_store_status():
    yield
    reset_store_status()
