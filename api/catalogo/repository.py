"""
Generic persistence for the simple catalog tables.

Table names come from `resources.RESOURCES` only.
"""

from __future__ import annotations

from typing import Any

from core import db
from core.pagination import ListFilter
from core.query import PaginatedQuery, columns_sql

from .resources import Resource
from .schemas import VoceCatalogo

CATALOGO_COLUMNS = columns_sql(["id", "nome", "descrizione", "documentazione_di_riferimento"])


def row_to_voce(row: dict[str, Any]) -> VoceCatalogo:
    return VoceCatalogo(
        id=row["id"],
        nome=row["nome"],
        descrizione=row.get("descrizione"),
        documentazione_di_riferimento=row["documentazione_di_riferimento"],
    )


async def list_voci(resource: Resource, list_filter: ListFilter) -> tuple[list[VoceCatalogo], int]:
    q = PaginatedQuery(resource.table, CATALOGO_COLUMNS).apply_list_filter(list_filter)

    total = await q.count()
    rows = await q.rows()
    return [row_to_voce(row) for row in rows], total


async def get_voce(resource: Resource, voce_id: str) -> VoceCatalogo | None:
    row = await db.fetch_one(
        f"SELECT {CATALOGO_COLUMNS} FROM {resource.table} WHERE id = $1",
        voce_id,
    )
    if row is None:
        return None
    return row_to_voce(row)
