"""
Spells API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.pagination import ListFilter, list_filter
from core.params import path_id

from . import service
from .filters import IncantesimiFilter, incantesimi_filter
from .schemas import Incantesimo, ListIncantesimiResponse

router = APIRouter()


@router.get("/incantesimi", response_model=ListIncantesimiResponse, response_model_exclude_none=True)
async def list_incantesimi(
    filters: ListFilter = Depends(list_filter),
    spell_filters: IncantesimiFilter = Depends(incantesimi_filter),
) -> ListIncantesimiResponse:
    return await service.list_incantesimi(filters, spell_filters)


@router.get("/incantesimi/{id_incantesimo}", response_model=Incantesimo, response_model_exclude_none=True)
async def get_incantesimo(id_incantesimo: str) -> Incantesimo:
    return await service.get_incantesimo(path_id("id-incantesimo", id_incantesimo))
