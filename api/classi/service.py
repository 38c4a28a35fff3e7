"""
Classes / subclasses business logic.

Subclass lookups are scoped under a parent class: the parent is checked first
and a missing parent is reported as not-found before any subclass query runs.
"""

from __future__ import annotations

import logging

from core import errors
from core.pagination import ListFilter

from . import repository
from .schemas import Classe, ListClassiResponse, ListSottoclassiResponse, SottoClasse

KIND_CLASSE = "Classe"
KIND_SOTTOCLASSE = "SottoClasse"

logger = logging.getLogger(__name__)


async def list_classi(list_filter: ListFilter) -> ListClassiResponse:
    try:
        items, total = await repository.list_classi(list_filter)
    except Exception as exc:
        logger.exception("list_failed resource=classi")
        raise errors.internal(exc) from exc

    return ListClassiResponse(pagina=list_filter.page, numero_di_elementi=total, classi=items)


async def get_classe(classe_id: str) -> Classe:
    try:
        classe = await repository.get_classe(classe_id)
    except Exception as exc:
        logger.exception("get_failed resource=classi id=%s", classe_id)
        raise errors.internal(exc) from exc

    if classe is None:
        raise errors.not_found(KIND_CLASSE, classe_id)
    return classe


async def _ensure_classe_exists(classe_id: str) -> None:
    # Same lookup as get_classe; errors surface the same way.
    await get_classe(classe_id)


async def list_sottoclassi(classe_id: str, list_filter: ListFilter) -> ListSottoclassiResponse:
    await _ensure_classe_exists(classe_id)

    try:
        items, total = await repository.list_sottoclassi(classe_id, list_filter)
    except Exception as exc:
        logger.exception("list_failed resource=sottoclassi classe_id=%s", classe_id)
        raise errors.internal(exc) from exc

    return ListSottoclassiResponse(pagina=list_filter.page, numero_di_elementi=total, sottoclassi=items)


async def get_sottoclasse(classe_id: str, sottoclasse_id: str) -> SottoClasse:
    await _ensure_classe_exists(classe_id)

    try:
        sottoclasse = await repository.get_sottoclasse(classe_id, sottoclasse_id)
    except Exception as exc:
        logger.exception(
            "get_failed resource=sottoclassi classe_id=%s id=%s",
            classe_id,
            sottoclasse_id,
        )
        raise errors.internal(exc) from exc

    if sottoclasse is None:
        raise errors.not_found(KIND_SOTTOCLASSE, sottoclasse_id)
    return sottoclasse
