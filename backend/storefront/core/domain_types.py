"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EntityId wraps the store-generated integer identity
    - Any identity crossing the wire fits ENTITY_ID_MIN..ENTITY_ID_MAX (32-bit columns)
    - Every store is named by StoreName — no raw string matching
    - StoreInitStatus encodes every startup outcome of a store

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (readiness probe payload)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EntityId = NewType("EntityId", int)

# Identity columns are 32-bit INTEGER in both stores
ENTITY_ID_MIN = -(2**31)
ENTITY_ID_MAX = 2**31 - 1


# ─── Enums ───────────────────────────────────────────────────────

class StoreName(str, Enum):
    """The two independent backing stores."""
    CUSTOMERS = "customers"
    ORDERS = "orders"


class StoreInitStatus(str, Enum):
    """Outcome of schema bootstrap for one store."""
    CREATED = "created"
    ALREADY_PRESENT = "already_present"
    UNREACHABLE = "unreachable"
    FAILED = "failed"

    @property
    def is_ready(self) -> bool:
        return self in (StoreInitStatus.CREATED, StoreInitStatus.ALREADY_PRESENT)
