"""Entity Registry — the per-entity parameters of the generic CRUD pipeline.

Invariants:
    - One EntityDescriptor per entity family; customers and orders differ ONLY here
    - writable_fields never include identity, server timestamp, or version
    - timestamp_field is stamped by the handler on create, never written on replace

Design Decisions:
    - Descriptor dataclass over subclass-per-entity: the pipeline stays one piece of code,
      so the two entity paths cannot drift apart
"""

from dataclasses import dataclass, field

from pydantic import BaseModel

from storefront.core.domain_types import StoreName
from storefront.core.enforce_order import ORDER_RULES
from storefront.core.enforce_rules import Rule
from storefront.models.customer import Customer
from storefront.models.order import Order
from storefront.schemas.customer import CustomerPayload, CustomerResponse
from storefront.schemas.order import OrderPayload, OrderResponse


@dataclass(frozen=True)
class EntityDescriptor:
    """Everything the generic handler and router need to know about one entity."""
    name: str
    collection: str
    store: StoreName
    model: type
    payload_schema: type[BaseModel]
    response_schema: type[BaseModel]
    writable_fields: tuple[str, ...]
    timestamp_field: str
    rules: tuple[Rule, ...] = field(default_factory=tuple)


CUSTOMER = EntityDescriptor(
    name="Customer",
    collection="Customers",
    store=StoreName.CUSTOMERS,
    model=Customer,
    payload_schema=CustomerPayload,
    response_schema=CustomerResponse,
    writable_fields=("name", "email"),
    timestamp_field="created_date",
)

ORDER = EntityDescriptor(
    name="Order",
    collection="Orders",
    store=StoreName.ORDERS,
    model=Order,
    payload_schema=OrderPayload,
    response_schema=OrderResponse,
    writable_fields=("customer_id", "product_name", "amount"),
    timestamp_field="order_date",
    rules=ORDER_RULES,
)
