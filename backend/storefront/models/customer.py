"""Customer ORM — persists customers in the customer store.

Invariants:
    - id is an autoincrementing integer primary key (store-generated)
    - name and email are non-nullable, bounded to 200 chars
    - created_date is stamped by the handler at insert and never rewritten
    - version starts at 1 and increments on every successful update

Design Decisions:
    - Explicit version column over SQLAlchemy version_id_col: the repository performs
      the conditioned write itself so "row gone" and "row changed" can be told apart
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import CustomerBase

NAME_MAX_LENGTH = 200
EMAIL_MAX_LENGTH = 200


class Customer(CustomerBase):
    """Customer entity."""
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH), nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH), nullable=False,
    )
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1,
    )
