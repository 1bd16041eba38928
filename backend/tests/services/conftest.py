"""Service test fixtures — in-memory fake repository recording every store call.

Invariants:
    - FakeRepository honours the EntityRepository contract (not-found, identity guard)
    - calls lists every method that reached the "store", in order
"""

from types import SimpleNamespace

import pytest

from storefront.core.enforce_identity import check_identity_match
from storefront.core.errors import ResourceNotFoundError


class FakeRepository:
    """Dict-backed EntityRepository for handler tests."""

    def __init__(self, entity_name: str = "Order"):
        self.entity_name = entity_name
        self.rows: dict[int, SimpleNamespace] = {}
        self.calls: list[str] = []
        self._next_id = 1

    async def list_all(self):
        self.calls.append("list_all")
        return list(self.rows.values())

    async def get(self, entity_id):
        self.calls.append("get")
        if entity_id not in self.rows:
            raise ResourceNotFoundError(self.entity_name, entity_id)
        return self.rows[entity_id]

    async def insert(self, values):
        self.calls.append("insert")
        row = SimpleNamespace(id=self._next_id, version=1, **values)
        self.rows[row.id] = row
        self._next_id += 1
        return row

    async def update(self, entity_id, payload_id, values):
        check_identity_match(entity_id, payload_id)
        self.calls.append("update")
        if entity_id not in self.rows:
            raise ResourceNotFoundError(self.entity_name, entity_id)
        row = self.rows[entity_id]
        for key, value in values.items():
            setattr(row, key, value)
        row.version += 1

    async def delete(self, entity_id):
        self.calls.append("delete")
        if entity_id not in self.rows:
            raise ResourceNotFoundError(self.entity_name, entity_id)
        del self.rows[entity_id]

    async def exists(self, entity_id):
        self.calls.append("exists")
        return entity_id in self.rows


@pytest.fixture
def fake_orders():
    return FakeRepository("Order")


@pytest.fixture
def fake_customers():
    return FakeRepository("Customer")
