"""Entity Router Factory — builds the five CRUD routes for one entity family.

Invariants:
    - Routes never contain business logic (delegate to EntityHandler)
    - Every request gets a fresh handler + repository bound to the entity's own store
    - POST answers 201 with a Location header pointing at the GET route for the new id
    - PUT and DELETE answer 204 with an empty body
    - Path ids outside the 32-bit identity range fail validation (400) before any store call
    - Errors are raised, never returned: global handlers map them to status codes

Design Decisions:
    - Factory over two hand-written routers: one set of route code serves both families
    - Store dependency passed in explicitly: tests override get_customer_store /
      get_order_store independently
"""

from typing import Annotated, Callable

from fastapi import APIRouter, Depends, Path, Request, Response, status

from storefront.core.domain_types import ENTITY_ID_MAX, ENTITY_ID_MIN, EntityId
from storefront.infrastructure.database import DatabaseSessionManager
from storefront.infrastructure.entity_repository import SqlAlchemyEntityRepository
from storefront.services.entity_handler import EntityHandler
from storefront.services.entity_registry import EntityDescriptor

PathId = Annotated[int, Path(ge=ENTITY_ID_MIN, le=ENTITY_ID_MAX)]


def build_entity_router(
    descriptor: EntityDescriptor,
    get_store: Callable[[], DatabaseSessionManager],
) -> APIRouter:
    """Create the /api/{collection} router for one entity descriptor."""
    router = APIRouter(
        prefix=f"/api/{descriptor.collection}",
        tags=[descriptor.collection.lower()],
    )
    payload_schema = descriptor.payload_schema
    response_schema = descriptor.response_schema
    singular = descriptor.name.lower()
    get_route_name = f"get_{singular}"

    def get_handler(
        store: DatabaseSessionManager = Depends(get_store),
    ) -> EntityHandler:
        repository = SqlAlchemyEntityRepository(
            store, descriptor.model, descriptor.name,
        )
        return EntityHandler(descriptor, repository)

    @router.get(
        "", response_model=list[response_schema],
        name=f"list_{descriptor.collection.lower()}",
    )
    async def list_entities(handler: EntityHandler = Depends(get_handler)):
        """List every entity in the store."""
        return await handler.list_all()

    @router.get(
        "/{entity_id}", response_model=response_schema, name=get_route_name,
    )
    async def get_entity(
        entity_id: PathId, handler: EntityHandler = Depends(get_handler),
    ):
        """Fetch one entity by identity."""
        return await handler.get(EntityId(entity_id))

    @router.post(
        "", response_model=response_schema,
        status_code=status.HTTP_201_CREATED, name=f"create_{singular}",
    )
    async def create_entity(
        body: payload_schema,
        request: Request,
        response: Response,
        handler: EntityHandler = Depends(get_handler),
    ):
        """Create an entity; server assigns identity and timestamp."""
        entity = await handler.create(body)
        response.headers["Location"] = str(
            request.url_for(get_route_name, entity_id=entity.id),
        )
        return entity

    @router.put(
        "/{entity_id}", status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response, name=f"replace_{singular}",
    )
    async def replace_entity(
        entity_id: PathId,
        body: payload_schema,
        handler: EntityHandler = Depends(get_handler),
    ):
        """Replace an existing entity (full record, same identity)."""
        await handler.replace(EntityId(entity_id), body)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete(
        "/{entity_id}", status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response, name=f"delete_{singular}",
    )
    async def delete_entity(
        entity_id: PathId, handler: EntityHandler = Depends(get_handler),
    ):
        """Delete an existing entity."""
        await handler.remove(EntityId(entity_id))
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
