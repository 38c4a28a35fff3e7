from __future__ import annotations

import logging

from core import errors
from core.pagination import ListFilter
from core.schemas import PageMeta

from . import repository
from .resources import Resource
from .schemas import VoceCatalogo, list_response_model

logger = logging.getLogger(__name__)


async def list_voci(resource: Resource, list_filter: ListFilter) -> PageMeta:
    try:
        items, total = await repository.list_voci(resource, list_filter)
    except Exception as exc:
        logger.exception("list_failed resource=%s", resource.path)
        raise errors.internal(exc) from exc

    model = list_response_model(resource.kind, resource.envelope)
    return model(pagina=list_filter.page, numero_di_elementi=total, items=items)


async def get_voce(resource: Resource, voce_id: str) -> VoceCatalogo:
    try:
        voce = await repository.get_voce(resource, voce_id)
    except Exception as exc:
        logger.exception("get_failed resource=%s id=%s", resource.path, voce_id)
        raise errors.internal(exc) from exc

    if voce is None:
        raise errors.not_found(resource.kind, voce_id)
    return voce
