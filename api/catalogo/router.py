"""
Routes for the simple catalog resources: one list and one get-by-id route
per entry in `resources.RESOURCES`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.pagination import ListFilter, list_filter
from core.params import path_id

from . import service
from .resources import RESOURCES, Resource
from .schemas import VoceCatalogo, list_response_model

router = APIRouter()


def _add_routes(resource: Resource) -> None:
    async def list_route(filters: ListFilter = Depends(list_filter)):
        return await service.list_voci(resource, filters)

    async def get_route(item_id: str) -> VoceCatalogo:
        return await service.get_voce(resource, path_id(resource.id_param, item_id))

    router.add_api_route(
        f"/{resource.path}",
        list_route,
        methods=["GET"],
        name=f"list_{resource.path}",
        response_model=list_response_model(resource.kind, resource.envelope),
        response_model_exclude_none=True,
        tags=[resource.path],
    )
    router.add_api_route(
        f"/{resource.path}/{{item_id}}",
        get_route,
        methods=["GET"],
        name=f"get_{resource.path}",
        response_model=VoceCatalogo,
        response_model_exclude_none=True,
        tags=[resource.path],
    )


for _resource in RESOURCES:
    _add_routes(_resource)
