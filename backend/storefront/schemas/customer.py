"""Customer Schemas — wire contract for /api/Customers.

Invariants:
    - name and email: required, 1-200 chars (mirrors the customer store columns)
    - id and createdDate accepted on input but never trusted: id is only compared
      against the path on replace, createdDate is always server-owned
"""

from datetime import datetime

from pydantic import Field

from storefront.core.domain_types import ENTITY_ID_MAX, ENTITY_ID_MIN
from storefront.models.customer import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH
from storefront.schemas.base import WireModel


class CustomerPayload(WireModel):
    """Customer create/replace body."""
    id: int | None = Field(None, ge=ENTITY_ID_MIN, le=ENTITY_ID_MAX)
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    email: str = Field(min_length=1, max_length=EMAIL_MAX_LENGTH)
    created_date: datetime | None = None


class CustomerResponse(WireModel):
    """Customer as persisted."""
    id: int
    name: str
    email: str
    created_date: datetime
