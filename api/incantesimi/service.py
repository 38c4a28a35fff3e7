from __future__ import annotations

import logging

from core import errors
from core.pagination import ListFilter

from . import repository
from .filters import IncantesimiFilter
from .schemas import Incantesimo, ListIncantesimiResponse

KIND = "Incantesimo"

logger = logging.getLogger(__name__)


async def list_incantesimi(
    list_filter: ListFilter,
    spell_filter: IncantesimiFilter,
) -> ListIncantesimiResponse:
    try:
        items, total = await repository.list_incantesimi(list_filter, spell_filter)
    except Exception as exc:
        logger.exception("list_failed resource=incantesimi")
        raise errors.internal(exc) from exc

    return ListIncantesimiResponse(pagina=list_filter.page, numero_di_elementi=total, incantesimi=items)


async def get_incantesimo(incantesimo_id: str) -> Incantesimo:
    try:
        incantesimo = await repository.get_incantesimo(incantesimo_id)
    except Exception as exc:
        logger.exception("get_failed resource=incantesimi id=%s", incantesimo_id)
        raise errors.internal(exc) from exc

    if incantesimo is None:
        raise errors.not_found(KIND, incantesimo_id)
    return incantesimo
