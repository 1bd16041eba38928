"""Order Routes — /api/Orders, bound to the order store.

Invariants:
    - Every route touches the order store only
    - customerId is never looked up in the customer store
"""

from storefront.api.routes.entity_router import build_entity_router
from storefront.infrastructure.database import get_order_store
from storefront.services.entity_registry import ORDER

router = build_entity_router(ORDER, get_order_store)
