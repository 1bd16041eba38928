"""Entity Handler — validates payloads, stamps server-owned fields, delegates to the repository.

Invariants:
    - create() ALWAYS overwrites the timestamp with current UTC time (not configurable)
    - Business rules run before the store is touched; first violation → EntityValidationError
    - Only descriptor.writable_fields flow from a payload into the store
    - replace() checks identity, then rules, then touches the store
    - Repository errors (not found, conflict, store failure) propagate unchanged —
      the API error handlers map them to status codes

Design Decisions:
    - Raise typed errors over returning result unions: matches the global
      StorefrontError handler, routes stay free of branching
    - Rules re-checked on replace: a full-record update must not store an order
      that create would have rejected
"""

import logging
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from storefront.core.domain_types import EntityId
from storefront.core.enforce_identity import check_identity_match
from storefront.core.enforce_rules import first_violation
from storefront.core.errors import EntityValidationError, ErrorContext
from storefront.core.repository_protocols import EntityRepository
from storefront.services.entity_registry import EntityDescriptor

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class EntityHandler(Generic[ModelT]):
    """Request handler for one entity family."""

    def __init__(
        self, descriptor: EntityDescriptor, repository: EntityRepository[ModelT],
    ):
        self.descriptor = descriptor
        self.repository = repository

    async def list_all(self) -> list[ModelT]:
        return await self.repository.list_all()

    async def get(self, entity_id: EntityId) -> ModelT:
        return await self.repository.get(entity_id)

    async def create(self, payload: BaseModel) -> ModelT:
        """Validate, stamp the server timestamp, insert."""
        values = self._writable_values(payload)
        self._enforce_rules(values)
        values[self.descriptor.timestamp_field] = datetime.now(timezone.utc)
        return await self.repository.insert(values)

    async def replace(self, entity_id: EntityId, payload: BaseModel) -> None:
        """Full-record update of an existing entity."""
        payload_id = getattr(payload, "id", None)
        check_identity_match(entity_id, payload_id, self._context(entity_id))
        values = self._writable_values(payload)
        self._enforce_rules(values, entity_id)
        await self.repository.update(entity_id, payload_id, values)

    async def remove(self, entity_id: EntityId) -> None:
        await self.repository.delete(entity_id)

    def _writable_values(self, payload: BaseModel) -> dict[str, Any]:
        return payload.model_dump(include=set(self.descriptor.writable_fields))

    def _enforce_rules(
        self, values: dict[str, Any], entity_id: int | None = None,
    ) -> None:
        message = first_violation(self.descriptor.rules, values)
        if message is None:
            return
        logger.warning(
            f"{self.descriptor.name} rejected: {message}",
            extra={"entity": self.descriptor.name, "entity_id": entity_id},
        )
        raise EntityValidationError(message, self._context(entity_id))

    def _context(self, entity_id: int | None = None) -> ErrorContext:
        return ErrorContext(
            store=self.descriptor.store.value,
            entity=self.descriptor.name,
            entity_id=entity_id,
        )
