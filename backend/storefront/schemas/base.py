"""Wire Base — shared pydantic config for camelCase JSON payloads.

Invariants:
    - Wire names are camelCase (customerId, productName, createdDate ...)
    - Python attribute names stay snake_case; both accepted on input
    - Responses built straight from ORM rows (from_attributes)
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for every request/response schema."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
