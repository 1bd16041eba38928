"""Order Schemas — wire contract for /api/Orders.

Invariants:
    - customerId, productName, amount default to 0 / "" / 0 so that a missing field
      reaches the order rules and gets their specific message
    - amount carries at most two decimal places; serialized as a JSON number
    - id and customerId must fit the 32-bit identity columns; out of range is a schema error
    - id and orderDate accepted on input but never trusted
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import Field, PlainSerializer

from storefront.core.domain_types import ENTITY_ID_MAX, ENTITY_ID_MIN
from storefront.models.order import PRODUCT_NAME_MAX_LENGTH
from storefront.schemas.base import WireModel

Money = Annotated[
    Decimal,
    Field(max_digits=18, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class OrderPayload(WireModel):
    """Order create/replace body."""
    id: int | None = Field(None, ge=ENTITY_ID_MIN, le=ENTITY_ID_MAX)
    customer_id: int = Field(0, ge=ENTITY_ID_MIN, le=ENTITY_ID_MAX)
    product_name: str = Field("", max_length=PRODUCT_NAME_MAX_LENGTH)
    amount: Money = Decimal("0")
    order_date: datetime | None = None


class OrderResponse(WireModel):
    """Order as persisted."""
    id: int
    customer_id: int
    product_name: str
    amount: Money
    order_date: datetime
