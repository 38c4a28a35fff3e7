"""
Classes API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.pagination import ListFilter, list_filter
from core.params import path_id

from . import service
from .schemas import Classe, ListClassiResponse, ListSottoclassiResponse, SottoClasse

router = APIRouter()


@router.get("/classi", response_model=ListClassiResponse, response_model_exclude_none=True)
async def list_classi(filters: ListFilter = Depends(list_filter)) -> ListClassiResponse:
    return await service.list_classi(filters)


@router.get("/classi/{id_classe}", response_model=Classe, response_model_exclude_none=True)
async def get_classe(id_classe: str) -> Classe:
    return await service.get_classe(path_id("id-classe", id_classe))


@router.get(
    "/classi/{id_classe}/sotto-classi",
    response_model=ListSottoclassiResponse,
    response_model_exclude_none=True,
)
async def list_sottoclassi(
    id_classe: str,
    filters: ListFilter = Depends(list_filter),
) -> ListSottoclassiResponse:
    return await service.list_sottoclassi(path_id("id-classe", id_classe), filters)


@router.get(
    "/classi/{id_classe}/sotto-classi/{id_sotto_classe}",
    response_model=SottoClasse,
    response_model_exclude_none=True,
)
async def get_sottoclasse(id_classe: str, id_sotto_classe: str) -> SottoClasse:
    classe_id = path_id("id-classe", id_classe)
    sottoclasse_id = path_id("id-sotto-classe", id_sotto_classe)
    return await service.get_sottoclasse(classe_id, sottoclasse_id)
