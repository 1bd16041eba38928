"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All store IO accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - One generic contract for both entity families: customers and orders differ only
      in field names and rules, never in data-access shape
"""

from typing import Any, Protocol, TypeVar

from storefront.core.domain_types import EntityId

ModelT = TypeVar("ModelT")


class EntityRepository(Protocol[ModelT]):
    """Contract for single-entity persistence in one store — implemented by shell."""
    async def list_all(self) -> list[ModelT]: ...
    async def get(self, entity_id: EntityId) -> ModelT: ...
    async def insert(self, values: dict[str, Any]) -> ModelT: ...
    async def update(
        self, entity_id: EntityId, payload_id: int | None, values: dict[str, Any],
    ) -> None: ...
    async def delete(self, entity_id: EntityId) -> None: ...
    async def exists(self, entity_id: EntityId) -> bool: ...
