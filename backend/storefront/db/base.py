"""SQLAlchemy Declarative Bases — one base (and one MetaData) per store.

Invariants:
    - Customer models inherit CustomerBase, order models inherit OrderBase
    - Each Base.metadata holds exactly the tables of one store

Design Decisions:
    - Separate bases over one shared metadata: create_all on the customer store must
      never create order tables, and vice versa (stores are siloed)
"""

from sqlalchemy.orm import DeclarativeBase


class CustomerBase(DeclarativeBase):
    """Base class for ORM models living in the customer store."""
    pass


class OrderBase(DeclarativeBase):
    """Base class for ORM models living in the order store."""
    pass
