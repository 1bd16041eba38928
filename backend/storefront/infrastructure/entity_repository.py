"""Entity Repository — generic SQLAlchemy data-access boundary for one entity in one store.

Invariants:
    - Each operation opens its own session on the entity's store (no cross-request state)
    - update() rejects an identity mismatch BEFORE any statement reaches the store
    - update() is a conditioned write keyed by (id, version), never a blind upsert
    - Zero rows affected on update/delete → exists() decides "not found" vs "conflict"
    - update() reports nothing back: once committed the write counts as applied
    - No automatic retries, no application-level locks

Design Decisions:
    - Core UPDATE/DELETE statements over ORM unit-of-work: rowcount is the signal that
      separates a raced delete from a raced update, and the ORM hides it behind StaleDataError
    - version read and conditioned write share one transaction; the store's row locking
      resolves concurrent writers, this class only classifies the loser
"""

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.domain_types import EntityId
from storefront.core.enforce_identity import check_identity_match
from storefront.core.errors import (
    ConcurrencyConflictError, ErrorContext, ResourceNotFoundError,
)
from storefront.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class SqlAlchemyEntityRepository(Generic[ModelT]):
    """EntityRepository implementation over a DatabaseSessionManager."""

    def __init__(
        self, store: DatabaseSessionManager, model: type[ModelT], entity_name: str,
    ):
        self._store = store
        self._model = model
        self._entity_name = entity_name

    def _context(self, entity_id: int | None = None) -> ErrorContext:
        return ErrorContext(
            store=self._store.name.value,
            entity=self._entity_name,
            entity_id=entity_id,
        )

    def _log_extra(self, entity_id: int | None = None) -> dict:
        return {
            "store": self._store.name.value,
            "entity": self._entity_name,
            "entity_id": entity_id,
        }

    def _not_found(self, entity_id: int) -> ResourceNotFoundError:
        return ResourceNotFoundError(
            self._entity_name, entity_id, self._context(entity_id),
        )

    async def list_all(self) -> list[ModelT]:
        async with self._store.session() as db:
            result = await db.execute(select(self._model))
            return list(result.scalars().all())

    async def get(self, entity_id: EntityId) -> ModelT:
        async with self._store.session() as db:
            entity = await db.get(self._model, entity_id)
            if entity is None:
                raise self._not_found(entity_id)
            return entity

    async def insert(self, values: dict[str, Any]) -> ModelT:
        """Persist a new row; the store assigns identity."""
        async with self._store.session() as db:
            entity = self._model(**values)
            db.add(entity)
            await db.commit()
            await db.refresh(entity)
            logger.info(
                f"{self._entity_name} {entity.id} created",
                extra=self._log_extra(entity.id),
            )
            return entity

    async def update(
        self, entity_id: EntityId, payload_id: int | None, values: dict[str, Any],
    ) -> None:
        """Full-record replace of an existing row, conditioned on its version.

        Raises IdentityMismatchError, ResourceNotFoundError, or
        ConcurrencyConflictError when the row moved underneath the write.
        """
        check_identity_match(entity_id, payload_id, self._context(entity_id))

        async with self._store.session() as db:
            expected_version = await self._read_version(db, entity_id)
            if expected_version is None:
                raise self._not_found(entity_id)

            result = await db.execute(
                update(self._model)
                .where(self._model.id == entity_id)
                .where(self._model.version == expected_version)
                .values(**values, version=expected_version + 1),
            )
            if result.rowcount == 0:
                await db.rollback()
                if not await self._exists_in(db, entity_id):
                    logger.warning(
                        f"{self._entity_name} {entity_id} deleted during update",
                        extra=self._log_extra(entity_id),
                    )
                    raise self._not_found(entity_id)
                logger.error(
                    f"{self._entity_name} {entity_id} modified concurrently "
                    f"(expected version {expected_version})",
                    extra=self._log_extra(entity_id),
                )
                raise ConcurrencyConflictError(
                    self._entity_name, entity_id, self._context(entity_id),
                )
            await db.commit()
            logger.info(
                f"{self._entity_name} {entity_id} updated to version {expected_version + 1}",
                extra=self._log_extra(entity_id),
            )

    async def delete(self, entity_id: EntityId) -> None:
        async with self._store.session() as db:
            if not await self._exists_in(db, entity_id):
                raise self._not_found(entity_id)
            result = await db.execute(
                delete(self._model).where(self._model.id == entity_id),
            )
            # Another delete won the race between lookup and removal
            if result.rowcount == 0:
                await db.rollback()
                raise self._not_found(entity_id)
            await db.commit()
            logger.info(
                f"{self._entity_name} {entity_id} deleted",
                extra=self._log_extra(entity_id),
            )

    async def exists(self, entity_id: EntityId) -> bool:
        async with self._store.session() as db:
            return await self._exists_in(db, entity_id)

    async def _read_version(
        self, db: AsyncSession, entity_id: EntityId,
    ) -> int | None:
        result = await db.execute(
            select(self._model.version).where(self._model.id == entity_id),
        )
        return result.scalar_one_or_none()

    async def _exists_in(self, db: AsyncSession, entity_id: EntityId) -> bool:
        result = await db.execute(
            select(exists().where(self._model.id == entity_id)),
        )
        return bool(result.scalar())
