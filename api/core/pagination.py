"""
Universal list filter (name, source document, sort, limit/offset) shared by
every list endpoint, and the FastAPI dependency that parses it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from fastapi import Query, Request

from . import errors
from .params import first_query_value
from .validation import ParamError, check_range, multi, optional_text, parse_int

DEFAULT_LIMIT = 20
MAX_LIMIT = 100
NOME_MAX_LENGTH = 100
MAX_DOCUMENTS = 10
DOCUMENT_MAX_LENGTH = 100


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ListFilter:
    nome: str | None = None
    documentazione_di_riferimento: tuple[str, ...] = ()
    sort: SortOrder = SortOrder.ASC
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    @property
    def page(self) -> int:
        if self.limit == 0:
            return 0
        return (self.offset // self.limit) + 1


def parse_sort(raw: str | None) -> SortOrder:
    if not raw:
        return SortOrder.ASC
    try:
        return SortOrder(raw)
    except ValueError as exc:
        raise ParamError("sort", "sort must be one of: asc, desc") from exc


def parse_list_filter(
    *,
    nome: str | None = None,
    sort: str | None = None,
    limit: str | None = None,
    offset: str | None = None,
    documentazione_di_riferimento: Iterable[str] | None = None,
) -> ListFilter:
    """
    Parse raw query strings into a `ListFilter`.

    Raises `ParamError` for the first invalid parameter. Non-numeric
    `$limit` / `$offset` are reported first, then `nome`, `sort`, the
    `$limit` / `$offset` ranges and finally the document tags. `$limit`
    out of 1..100 is an error, not clamped.
    """
    limit_value = parse_int("$limit", limit, default=DEFAULT_LIMIT)
    offset_value = parse_int("$offset", offset, default=0)

    nome_value = optional_text("nome", nome, max_length=NOME_MAX_LENGTH)
    sort_value = parse_sort(sort)
    check_range("$limit", limit_value, minimum=1, maximum=MAX_LIMIT)
    check_range("$offset", offset_value, minimum=0)

    documents = multi(
        "documentazione-di-riferimento",
        documentazione_di_riferimento,
        max_items=MAX_DOCUMENTS,
        max_length=DOCUMENT_MAX_LENGTH,
    )
    return ListFilter(
        nome=nome_value,
        documentazione_di_riferimento=tuple(documents),
        sort=sort_value,
        limit=limit_value,
        offset=offset_value,
    )


async def list_filter(
    request: Request,
    nome: str | None = Query(default=None, description="Case-insensitive substring of the name."),
    documentazione_di_riferimento: list[str] | None = Query(
        default=None,
        alias="documentazione-di-riferimento",
        description="Source document tag (repeatable, any-of).",
    ),
    sort: str | None = Query(default=None, description="asc (default) or desc, by name."),
    limit: str | None = Query(default=None, alias="$limit", description="1..100, default 20."),
    offset: str | None = Query(default=None, alias="$offset", description=">= 0, default 0."),
) -> ListFilter:
    """
    FastAPI dependency for the universal list parameters.

    The scalar parameters are declared for the OpenAPI document; their values
    are read with `first_query_value` so `?nome=a&nome=b` filters on "a".
    """
    try:
        return parse_list_filter(
            nome=first_query_value(request, "nome"),
            sort=first_query_value(request, "sort"),
            limit=first_query_value(request, "$limit"),
            offset=first_query_value(request, "$offset"),
            documentazione_di_riferimento=documentazione_di_riferimento,
        )
    except ParamError as exc:
        raise errors.bad_request(str(exc), exc) from exc
