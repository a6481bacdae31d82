"""FastAPI routes for the catalog: one resource path per entity kind."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response, status

from uicatalog.catalog.engine import CatalogEngine
from uicatalog.catalog.registry import ENTITY_KINDS, EntityKind


def get_engine(request: Request) -> CatalogEngine:
    return request.app.state.engine


def build_router(entity: EntityKind) -> APIRouter:
    """CRUD routes for one entity kind, mounted at /{entity.key}."""
    kind = entity.key
    router = APIRouter(prefix=f"/{kind}", tags=[entity.label])

    @router.get("", summary=f"List {kind}")
    def list_records(engine: CatalogEngine = Depends(get_engine)) -> list[dict[str, Any]]:
        return engine.list_records(kind)

    @router.get("/{record_id}", summary=f"Get one {entity.label.lower()}")
    def get_record(record_id: str, engine: CatalogEngine = Depends(get_engine)) -> dict[str, Any]:
        return engine.get(kind, record_id)

    @router.post("", status_code=status.HTTP_201_CREATED, summary=f"Create a {entity.label.lower()}")
    def create_record(
        payload: dict[str, Any] = Body(...),
        engine: CatalogEngine = Depends(get_engine),
    ) -> dict[str, Any]:
        return engine.create(kind, payload)

    @router.put("/{record_id}", summary=f"Update a {entity.label.lower()}")
    def update_record(
        record_id: str,
        payload: dict[str, Any] = Body(...),
        engine: CatalogEngine = Depends(get_engine),
    ) -> dict[str, Any]:
        return engine.update(kind, record_id, payload)

    @router.delete(
        "/{record_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        summary=f"Delete a {entity.label.lower()}",
    )
    def delete_record(record_id: str, engine: CatalogEngine = Depends(get_engine)) -> Response:
        engine.delete(kind, record_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


def endpoint_directory() -> dict[str, Any]:
    """Static map of every route, served at GET /."""
    endpoints = {}
    for kind in ENTITY_KINDS:
        endpoints[kind] = {
            "getAll": f"/{kind} (GET)",
            "getById": f"/{kind}/:id (GET)",
            "create": f"/{kind} (POST)",
            "update": f"/{kind}/:id (PUT)",
            "delete": f"/{kind}/:id (DELETE)",
        }
    return {"message": "Welcome to the uicatalog API!", "endpoints": endpoints}


router = APIRouter()

for _entity in ENTITY_KINDS.values():
    router.include_router(build_router(_entity))
