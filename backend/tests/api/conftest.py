"""API test fixtures — FastAPI app over the two per-test stores.

Invariants:
    - The app resolves stores through the registry, so registered_stores is enough
    - Lifespan is NOT run here (ASGITransport skips it); lifespan has its own tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from storefront.main import app


@pytest.fixture
async def client(registered_stores):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
