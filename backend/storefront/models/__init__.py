"""ORM Models — SQLAlchemy declarative models, one per store.

Invariants:
    - Customer inherits CustomerBase, Order inherits OrderBase (db/base.py)
    - No relationship crosses stores

Design Decisions:
    - One file per entity for locality
    - All models imported here so each Base.metadata is populated before
      the store initializer runs create-if-absent
"""

from storefront.models.customer import Customer  # noqa: F401
from storefront.models.order import Order  # noqa: F401
