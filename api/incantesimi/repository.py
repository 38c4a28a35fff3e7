"""
Spells persistence (raw SQL).

Table: incantesimi (see migrations/0003_create_incantesimi.sql).
"""

from __future__ import annotations

from typing import Any

from core import db
from core.pagination import ListFilter
from core.query import PaginatedQuery, columns_sql
from core.rows import json_column, text_list

from .filters import SPELL_PREDICATES, IncantesimiFilter
from .schemas import EffettoIncantesimo, Incantesimo

INCANTESIMO_COLUMNS = columns_sql(
    [
        "id",
        "nome",
        "livello",
        "scuola_di_magia",
        "tempo_di_lancio",
        "gittata",
        "area",
        "concentrazione",
        "sempre_preparato",
        "rituale",
        "componenti",
        "componenti_materiali",
        "durata",
        "descrizione",
        "effetto_incantesimo",
        "effetto_livello_maggiore",
        "classi",
        "documentazione_di_riferimento",
    ]
)


def _effetto(row: dict[str, Any], column: str) -> EffettoIncantesimo | None:
    data = json_column(row, column)
    if data is None:
        return None
    return EffettoIncantesimo.model_validate(data)


def row_to_incantesimo(row: dict[str, Any]) -> Incantesimo:
    return Incantesimo(
        id=row["id"],
        nome=row["nome"],
        livello=row["livello"],
        scuola_di_magia=row["scuola_di_magia"],
        tempo_di_lancio=row["tempo_di_lancio"],
        gittata=row["gittata"],
        area=row.get("area"),
        concentrazione=row["concentrazione"],
        sempre_preparato=row["sempre_preparato"],
        rituale=row["rituale"],
        componenti=text_list(row, "componenti"),
        componenti_materiali=row.get("componenti_materiali"),
        durata=row["durata"],
        descrizione=row["descrizione"],
        effetto_incantesimo=_effetto(row, "effetto_incantesimo"),
        effetto_livello_maggiore=_effetto(row, "effetto_livello_maggiore"),
        classi=row["classi"],
        documentazione_di_riferimento=row["documentazione_di_riferimento"],
    )


def build_query(list_filter: ListFilter, spell_filter: IncantesimiFilter) -> PaginatedQuery:
    q = PaginatedQuery("incantesimi", INCANTESIMO_COLUMNS).apply_list_filter(list_filter)
    for name, value in spell_filter.items():
        q.filter(SPELL_PREDICATES[name], name, value)
    return q


async def list_incantesimi(
    list_filter: ListFilter,
    spell_filter: IncantesimiFilter,
) -> tuple[list[Incantesimo], int]:
    q = build_query(list_filter, spell_filter)

    total = await q.count()
    rows = await q.rows()
    return [row_to_incantesimo(row) for row in rows], total


async def get_incantesimo(incantesimo_id: str) -> Incantesimo | None:
    row = await db.fetch_one(
        f"""
        SELECT {INCANTESIMO_COLUMNS}
        FROM incantesimi
        WHERE id = $1
        """,
        incantesimo_id,
    )
    if row is None:
        return None
    return row_to_incantesimo(row)
