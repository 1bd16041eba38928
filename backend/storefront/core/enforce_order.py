"""Order Rules — pure business validation for order payloads.

Invariants:
    - Every rule is PURE: takes field values, returns the violation message or None
    - ORDER_RULES order is the reporting order: customer, product, amount
    - Messages are user-facing and stable (clients match on them)

Design Decisions:
    - No foreign-key check of customer_id against the customer store: the stores are
      siloed, so "valid" means "positive", nothing more
"""

from decimal import Decimal
from typing import Mapping

from storefront.core.enforce_rules import Rule


CUSTOMER_ID_REQUIRED = "Valid CustomerId is required."
PRODUCT_NAME_REQUIRED = "Product name is required."
AMOUNT_NOT_POSITIVE = "Amount must be greater than zero."


def check_customer_id(values: Mapping) -> str | None:
    customer_id = values.get("customer_id")
    if customer_id is None or customer_id <= 0:
        return CUSTOMER_ID_REQUIRED
    return None


def check_product_name(values: Mapping) -> str | None:
    name = values.get("product_name")
    if name is None or not name.strip():
        return PRODUCT_NAME_REQUIRED
    return None


def check_amount(values: Mapping) -> str | None:
    amount = values.get("amount")
    if amount is None or Decimal(amount) <= 0:
        return AMOUNT_NOT_POSITIVE
    return None


ORDER_RULES: tuple[Rule, ...] = (
    check_customer_id,
    check_product_name,
    check_amount,
)
