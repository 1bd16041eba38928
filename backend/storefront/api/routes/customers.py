"""Customer Routes — /api/Customers, bound to the customer store.

Invariants:
    - Every route touches the customer store only
"""

from storefront.api.routes.entity_router import build_entity_router
from storefront.infrastructure.database import get_customer_store
from storefront.services.entity_registry import CUSTOMER

router = build_entity_router(CUSTOMER, get_customer_store)
