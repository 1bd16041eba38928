"""Order ORM — persists orders in the order store.

Invariants:
    - id is an autoincrementing integer primary key (store-generated)
    - customer_id is a plain integer: no FK, the customer table lives in another store
    - amount is NUMERIC(18,2) — two-decimal monetary precision
    - order_date is stamped by the handler at insert and never rewritten
    - version starts at 1 and increments on every successful update
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import OrderBase

PRODUCT_NAME_MAX_LENGTH = 200


class Order(OrderBase):
    """Order entity."""
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    customer_id: Mapped[int] = mapped_column(Integer, nullable=False)
    product_name: Mapped[str] = mapped_column(
        String(PRODUCT_NAME_MAX_LENGTH), nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(18, 2, asdecimal=True), nullable=False,
    )
    order_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1,
    )
