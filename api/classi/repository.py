"""
Classes / subclasses persistence (raw SQL).

Tables:
- classi       (id, nome, descrizione, documentazione_di_riferimento, dado_vita,
                equipaggiamento_partenza jsonb, proprieta_di_classe jsonb)
- sottoclassi  (..., id_classe_associata -> classi.id, proprieta_di_sottoclasse jsonb)

"Not found" is returned as None; database errors propagate unchanged.
"""

from __future__ import annotations

from typing import Any

from core import db
from core.pagination import ListFilter
from core.query import PaginatedQuery, columns_sql
from core.rows import json_column, nonempty

from .schemas import (
    Classe,
    EquipaggiamentoPartenza,
    ProprietaLivello,
    RiferimentoSottoclasse,
    SottoClasse,
)

CLASSE_COLUMNS = columns_sql(
    [
        "id",
        "nome",
        "descrizione",
        "documentazione_di_riferimento",
        "dado_vita",
        "equipaggiamento_partenza",
        "proprieta_di_classe",
    ]
)

SOTTOCLASSE_COLUMNS = columns_sql(
    [
        "id",
        "nome",
        "descrizione",
        "documentazione_di_riferimento",
        "id_classe_associata",
        "proprieta_di_sottoclasse",
    ]
)


def _proprieta(row: dict[str, Any], column: str) -> list[ProprietaLivello] | None:
    data = json_column(row, column)
    if not data:
        return None
    return [ProprietaLivello.model_validate(item) for item in data]


def _equipaggiamento(row: dict[str, Any]) -> EquipaggiamentoPartenza | None:
    data = json_column(row, "equipaggiamento_partenza")
    if data is None:
        return None
    eq = EquipaggiamentoPartenza.model_validate(data)
    if eq.opzione_a is None and eq.opzione_b is None:
        return None
    return eq


def row_to_classe(row: dict[str, Any], sottoclassi: list[RiferimentoSottoclasse] | None = None) -> Classe:
    return Classe(
        id=row["id"],
        nome=row["nome"],
        descrizione=row.get("descrizione") or "",
        documentazione_di_riferimento=row["documentazione_di_riferimento"],
        dado_vita=row["dado_vita"],
        elenco_sottoclassi=nonempty(sottoclassi),
        equipaggiamento_partenza=_equipaggiamento(row),
        proprieta_di_classe=_proprieta(row, "proprieta_di_classe"),
    )


def row_to_sottoclasse(row: dict[str, Any]) -> SottoClasse:
    return SottoClasse(
        id=row["id"],
        nome=row["nome"],
        descrizione=row.get("descrizione") or "",
        documentazione_di_riferimento=row["documentazione_di_riferimento"],
        id_classe_associata=row["id_classe_associata"],
        proprieta_di_sottoclasse=_proprieta(row, "proprieta_di_sottoclasse"),
    )


async def list_classi(list_filter: ListFilter) -> tuple[list[Classe], int]:
    q = PaginatedQuery("classi", CLASSE_COLUMNS).apply_list_filter(list_filter)

    total = await q.count()
    rows = await q.rows()

    refs = await sottoclassi_refs_by_classe([row["id"] for row in rows])
    return [row_to_classe(row, refs.get(row["id"])) for row in rows], total


async def get_classe(classe_id: str) -> Classe | None:
    row = await db.fetch_one(
        f"""
        SELECT {CLASSE_COLUMNS}
        FROM classi
        WHERE id = $1
        """,
        classe_id,
    )
    if row is None:
        return None

    refs = await sottoclassi_refs(classe_id)
    return row_to_classe(row, refs)


async def sottoclassi_refs(classe_id: str) -> list[RiferimentoSottoclasse]:
    rows = await db.fetch_all(
        """
        SELECT id
        FROM sottoclassi
        WHERE id_classe_associata = $1
        ORDER BY nome
        """,
        classe_id,
    )
    return [RiferimentoSottoclasse(id_sottoclasse=row["id"]) for row in rows]


async def sottoclassi_refs_by_classe(classe_ids: list[str]) -> dict[str, list[RiferimentoSottoclasse]]:
    """
    Subclass references for a whole page of classes in one round trip.
    """
    result: dict[str, list[RiferimentoSottoclasse]] = {}
    if not classe_ids:
        return result

    rows = await db.fetch_all(
        """
        SELECT id, id_classe_associata
        FROM sottoclassi
        WHERE id_classe_associata = ANY($1)
        ORDER BY nome
        """,
        classe_ids,
    )
    for row in rows:
        result.setdefault(row["id_classe_associata"], []).append(
            RiferimentoSottoclasse(id_sottoclasse=row["id"])
        )
    return result


async def list_sottoclassi(classe_id: str, list_filter: ListFilter) -> tuple[list[SottoClasse], int]:
    q = PaginatedQuery("sottoclassi", SOTTOCLASSE_COLUMNS)
    q.where(f"id_classe_associata = {q.bind('classe_id', classe_id)}")
    q.apply_list_filter(list_filter)

    total = await q.count()
    rows = await q.rows()
    return [row_to_sottoclasse(row) for row in rows], total


async def get_sottoclasse(classe_id: str, sottoclasse_id: str) -> SottoClasse | None:
    row = await db.fetch_one(
        f"""
        SELECT {SOTTOCLASSE_COLUMNS}
        FROM sottoclassi
        WHERE id = $1
          AND id_classe_associata = $2
        """,
        sottoclasse_id,
        classe_id,
    )
    if row is None:
        return None
    return row_to_sottoclasse(row)
