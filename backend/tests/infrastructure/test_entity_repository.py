"""Entity Repository — CRUD against a real store plus concurrent-write classification.

Tests cover:
    - insert assigns fresh identities, version starts at 1
    - get / delete / update of a missing id → ResourceNotFoundError
    - identity mismatch rejected before any statement runs
    - update bumps version and keeps immutable fields
    - raced update → ConcurrencyConflictError, winner's write kept
    - raced delete → ResourceNotFoundError, never a conflict
    - a delete landing after a committed update leaves the update reported as applied

Design Decisions:
    - Races staged deterministically: a repository subclass runs the competing write
      through a second session right after reading the version it will condition on
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import delete

from storefront.core.errors import (
    ConcurrencyConflictError, IdentityMismatchError, ResourceNotFoundError,
)
from storefront.infrastructure.entity_repository import SqlAlchemyEntityRepository
from storefront.models.customer import Customer
from storefront.models.order import Order


def _now():
    return datetime.now(timezone.utc)


def _order_values(**overrides) -> dict:
    values = {
        "customer_id": 5, "product_name": "Widget",
        "amount": Decimal("10.00"), "order_date": _now(),
    }
    values.update(overrides)
    return values


@pytest.fixture
def orders(order_store):
    return SqlAlchemyEntityRepository(order_store, Order, "Order")


@pytest.fixture
def customers(customer_store):
    return SqlAlchemyEntityRepository(customer_store, Customer, "Customer")


class _RacingRepository(SqlAlchemyEntityRepository):
    """Runs `race` between reading the version and the conditioned write."""

    def __init__(self, *args, race, **kwargs):
        super().__init__(*args, **kwargs)
        self._race = race

    async def _read_version(self, db, entity_id):
        version = await super()._read_version(db, entity_id)
        await self._race()
        return version


# ─── insert / get / list ─────────────────────────────────────────

async def test_insert_assigns_distinct_ids(orders):
    first = await orders.insert(_order_values())
    second = await orders.insert(_order_values(product_name="Gadget"))
    assert first.id is not None
    assert second.id is not None
    assert first.id != second.id


async def test_insert_starts_at_version_one(orders):
    order = await orders.insert(_order_values())
    assert order.version == 1


async def test_insert_keeps_two_decimal_amount(orders):
    order = await orders.insert(_order_values(amount=Decimal("19.99")))
    fetched = await orders.get(order.id)
    assert fetched.amount == Decimal("19.99")


async def test_get_missing_raises_not_found(orders):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await orders.get(999)
    assert exc_info.value.context.store == "orders"
    assert exc_info.value.context.entity_id == 999


async def test_list_all_returns_every_row(customers):
    await customers.insert({"name": "Ada", "email": "ada@example.com", "created_date": _now()})
    await customers.insert({"name": "Bob", "email": "bob@example.com", "created_date": _now()})
    rows = await customers.list_all()
    assert sorted(c.name for c in rows) == ["Ada", "Bob"]


async def test_list_all_empty_store(customers):
    assert await customers.list_all() == []


async def test_exists(orders):
    order = await orders.insert(_order_values())
    assert await orders.exists(order.id)
    assert not await orders.exists(order.id + 1000)


# ─── update ──────────────────────────────────────────────────────

async def test_update_replaces_fields_and_bumps_version(orders):
    order = await orders.insert(_order_values())
    result = await orders.update(
        order.id, order.id,
        {"customer_id": 6, "product_name": "Gizmo", "amount": Decimal("3.50")},
    )
    assert result is None
    updated = await orders.get(order.id)
    assert updated.customer_id == 6
    assert updated.product_name == "Gizmo"
    assert updated.amount == Decimal("3.50")
    assert updated.version == 2
    assert updated.order_date == order.order_date


async def test_update_mismatch_never_touches_store(order_store):
    class _Untouchable(SqlAlchemyEntityRepository):
        async def _read_version(self, db, entity_id):
            raise AssertionError("store touched")

    repo = _Untouchable(order_store, Order, "Order")
    with pytest.raises(IdentityMismatchError):
        await repo.update(7, 8, {"product_name": "X"})


async def test_update_missing_raises_not_found(orders):
    with pytest.raises(ResourceNotFoundError):
        await orders.update(404, 404, {"product_name": "X"})


async def test_update_after_delete_raises_not_found(orders):
    order = await orders.insert(_order_values())
    await orders.delete(order.id)
    with pytest.raises(ResourceNotFoundError):
        await orders.update(order.id, order.id, {"product_name": "X"})


async def test_raced_update_raises_conflict_and_keeps_winner(order_store, orders):
    order = await orders.insert(_order_values())

    async def competing_update():
        await orders.update(order.id, order.id, {"product_name": "Winner"})

    loser = _RacingRepository(order_store, Order, "Order", race=competing_update)
    with pytest.raises(ConcurrencyConflictError) as exc_info:
        await loser.update(order.id, order.id, {"product_name": "Loser"})

    assert exc_info.value.http_status == 500
    stored = await orders.get(order.id)
    assert stored.product_name == "Winner"
    assert stored.version == 2


async def test_raced_delete_raises_not_found_not_conflict(order_store, orders):
    order = await orders.insert(_order_values())

    async def competing_delete():
        await orders.delete(order.id)

    loser = _RacingRepository(order_store, Order, "Order", race=competing_delete)
    with pytest.raises(ResourceNotFoundError):
        await loser.update(order.id, order.id, {"product_name": "Loser"})
    assert not await orders.exists(order.id)


async def test_delete_after_commit_does_not_undo_applied_update(
    order_store, orders, monkeypatch,
):
    order = await orders.insert(_order_values())
    original_session = order_store.session

    @asynccontextmanager
    async def session_deleting_after_commit():
        async with original_session() as db:
            original_commit = db.commit

            async def commit_then_delete():
                await original_commit()
                async with original_session() as other:
                    await other.execute(delete(Order).where(Order.id == order.id))
                    await other.commit()

            db.commit = commit_then_delete
            yield db

    monkeypatch.setattr(order_store, "session", session_deleting_after_commit)
    await orders.update(order.id, order.id, {"product_name": "Applied"})

    monkeypatch.undo()
    assert not await orders.exists(order.id)


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_then_get_not_found(customers):
    customer = await customers.insert(
        {"name": "Ada", "email": "ada@example.com", "created_date": _now()},
    )
    await customers.delete(customer.id)
    with pytest.raises(ResourceNotFoundError):
        await customers.get(customer.id)


async def test_delete_missing_raises_not_found(customers):
    with pytest.raises(ResourceNotFoundError):
        await customers.delete(99)


async def test_delete_twice_second_not_found(customers):
    customer = await customers.insert(
        {"name": "Ada", "email": "ada@example.com", "created_date": _now()},
    )
    await customers.delete(customer.id)
    with pytest.raises(ResourceNotFoundError):
        await customers.delete(customer.id)
