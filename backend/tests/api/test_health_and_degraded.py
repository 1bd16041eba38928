"""Health probes and degraded operation — one store down, the other keeps serving.

Tests cover:
    - liveness always 200
    - readiness 200 with both stores up, 503 naming the store that is down
    - requests against an unreachable store fail 503 for that request only
    - the healthy store's endpoints keep working meanwhile
"""

import pytest

from storefront.core.domain_types import StoreName
from storefront.db.base import CustomerBase
from storefront.infrastructure import database
from storefront.infrastructure.database import DatabaseSessionManager


@pytest.fixture
async def broken_customer_store(client, unreachable_url):
    manager = DatabaseSessionManager(
        StoreName.CUSTOMERS, unreachable_url, CustomerBase.metadata,
    )
    database.stores[StoreName.CUSTOMERS] = manager
    yield manager
    await manager.dispose()


async def test_liveness(client):
    res = await client.get("/api/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_both_stores_up(client):
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    checks = res.json()["checks"]
    assert checks["customers"]["reachable"] is True
    assert checks["orders"]["reachable"] is True


async def test_readiness_reports_startup_initialization(client):
    res = await client.get("/api/health/ready")
    init = res.json()["checks"]["orders"]["initialization"]
    assert init["status"] in ("created", "already_present")


async def test_readiness_names_down_store(client, broken_customer_store):
    res = await client.get("/api/health/ready")
    assert res.status_code == 503
    body = res.json()
    assert body["reason"] == "store_unavailable"
    assert body["checks"]["customers"]["reachable"] is False
    assert body["checks"]["orders"]["reachable"] is True


async def test_request_against_down_store_fails_503(client, broken_customer_store):
    res = await client.get("/api/Customers")
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "DATABASE_ERROR"
    assert res.json()["error"]["context"]["store"] == "customers"


async def test_other_store_keeps_serving(client, broken_customer_store):
    res = await client.post(
        "/api/Orders", json={"customerId": 1, "productName": "Widget", "amount": 2.5},
    )
    assert res.status_code == 201
    assert (await client.get("/api/Orders")).status_code == 200
