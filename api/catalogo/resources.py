"""
Registry of the simple catalog resources.

Each entry drives one table, two routes and one list envelope. All of them
share the columns id, nome, descrizione, documentazione_di_riferimento.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Resource:
    path: str
    table: str
    id_param: str
    kind: str
    envelope: str


RESOURCES: tuple[Resource, ...] = (
    Resource("background", "background", "id-background", "Background", "background"),
    Resource("bastioni", "bastioni", "id-bastione", "Bastione", "bastioni"),
    Resource("condizioni", "condizioni", "id-condizione", "Condizione", "condizioni"),
    Resource("divinita", "divinita", "id-divinita", "Divinita", "divinita"),
    Resource("linguaggi", "linguaggi", "id-linguaggio", "Linguaggio", "linguaggi"),
    Resource("maestrie", "maestrie", "id-maestria", "Maestria", "maestrie"),
    Resource("mostri", "mostri", "id-mostro", "Mostro", "mostri"),
    Resource("oggetti", "oggetti", "id-oggetto", "Oggetto", "oggetti"),
    Resource("regole", "regole", "id-regola", "Regola", "regole"),
    Resource("specie", "specie", "id-specie", "Specie", "specie"),
    Resource("talenti", "talenti", "id-talento", "Talento", "talenti"),
)

BY_PATH = {r.path: r for r in RESOURCES}
