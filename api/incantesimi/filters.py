"""
Spell-specific list filters.

`SPELL_PREDICATES` maps every filter field to its column and SQL operator;
the repository walks it in order, so adding a filter means one entry here
plus its parsing below.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, fields

from fastapi import Query, Request

from core import errors
from core.params import first_query_value
from core.query import CONTAINS, EQ, ILIKE, ILIKE_ALL, Predicate
from core.validation import ParamError, multi, one_of, optional_text, parse_bool, parse_int

from .schemas import Componente, ScuolaDiMagia

MIN_LIVELLO = 0
MAX_LIVELLO = 9
MAX_COMPONENTI = 3
COMPONENTI_MATERIALI_MAX_LENGTH = 500
TEXT_MAX_LENGTH = 255
MAX_CLASSI = 20
CLASSE_MAX_LENGTH = 100

SCUOLE = [s.value for s in ScuolaDiMagia]
COMPONENTI = [c.value for c in Componente]


@dataclass(frozen=True)
class IncantesimiFilter:
    livello: int | None = None
    scuola_di_magia: str | None = None
    concentrazione: bool | None = None
    rituale: bool | None = None
    componenti: tuple[str, ...] = ()
    componenti_materiali: str | None = None
    tempo_di_lancio: str | None = None
    gittata: str | None = None
    durata: str | None = None
    classi: tuple[str, ...] = ()

    def items(self):
        for f in fields(self):
            yield f.name, getattr(self, f.name)


SPELL_PREDICATES: dict[str, Predicate] = {
    "livello": Predicate("livello", EQ),
    "scuola_di_magia": Predicate("scuola_di_magia", EQ),
    "concentrazione": Predicate("concentrazione", EQ),
    "rituale": Predicate("rituale", EQ),
    "componenti": Predicate("componenti", CONTAINS),
    "componenti_materiali": Predicate("componenti_materiali", ILIKE),
    "tempo_di_lancio": Predicate("tempo_di_lancio", ILIKE),
    "gittata": Predicate("gittata", ILIKE),
    "durata": Predicate("durata", ILIKE),
    "classi": Predicate("classi", ILIKE_ALL),
}


def check_predicates() -> None:
    """
    Every filter field needs exactly one predicate entry; a mismatch would
    silently drop a filter or fail on every request.
    """
    field_names = {f.name for f in fields(IncantesimiFilter)}
    if set(SPELL_PREDICATES) != field_names:
        mismatched = sorted(field_names ^ set(SPELL_PREDICATES))
        raise RuntimeError(f"SPELL_PREDICATES out of sync with IncantesimiFilter: {mismatched}")


check_predicates()


def parse_incantesimi_filter(
    *,
    livello: str | None = None,
    scuola_di_magia: str | None = None,
    concentrazione: str | None = None,
    rituale: str | None = None,
    componenti: Iterable[str] | None = None,
    componenti_materiali: str | None = None,
    tempo_di_lancio: str | None = None,
    gittata: str | None = None,
    durata: str | None = None,
    classi: Iterable[str] | None = None,
) -> IncantesimiFilter:
    """
    Parse the raw spell query parameters. Raises `ParamError` for the first
    invalid one.
    """
    return IncantesimiFilter(
        livello=parse_int("livello", livello, minimum=MIN_LIVELLO, maximum=MAX_LIVELLO),
        scuola_di_magia=one_of("scuola-di-magia", scuola_di_magia, SCUOLE),
        concentrazione=parse_bool("concentrazione", concentrazione),
        rituale=parse_bool("rituale", rituale),
        componenti=tuple(
            multi("componenti", componenti, max_items=MAX_COMPONENTI, allowed=COMPONENTI)
        ),
        componenti_materiali=optional_text(
            "componenti-materiali", componenti_materiali, max_length=COMPONENTI_MATERIALI_MAX_LENGTH
        ),
        tempo_di_lancio=optional_text("tempo-di-lancio", tempo_di_lancio, max_length=TEXT_MAX_LENGTH),
        gittata=optional_text("gittata", gittata, max_length=TEXT_MAX_LENGTH),
        durata=optional_text("durata", durata, max_length=TEXT_MAX_LENGTH),
        classi=tuple(multi("classi", classi, max_items=MAX_CLASSI, max_length=CLASSE_MAX_LENGTH)),
    )


async def incantesimi_filter(
    request: Request,
    livello: str | None = Query(default=None, description="Spell level, 0..9."),
    scuola_di_magia: str | None = Query(default=None, alias="scuola-di-magia"),
    concentrazione: str | None = Query(default=None),
    rituale: str | None = Query(default=None),
    componenti: list[str] | None = Query(default=None, description="V, S, M (repeatable, all-of)."),
    componenti_materiali: str | None = Query(default=None, alias="componenti-materiali"),
    tempo_di_lancio: str | None = Query(default=None, alias="tempo-di-lancio"),
    gittata: str | None = Query(default=None),
    durata: str | None = Query(default=None),
    classi: list[str] | None = Query(default=None, description="Class name substring (repeatable, all-of)."),
) -> IncantesimiFilter:
    # Scalars are declared for the OpenAPI document and read as first occurrence.
    try:
        return parse_incantesimi_filter(
            livello=first_query_value(request, "livello"),
            scuola_di_magia=first_query_value(request, "scuola-di-magia"),
            concentrazione=first_query_value(request, "concentrazione"),
            rituale=first_query_value(request, "rituale"),
            componenti=componenti,
            componenti_materiali=first_query_value(request, "componenti-materiali"),
            tempo_di_lancio=first_query_value(request, "tempo-di-lancio"),
            gittata=first_query_value(request, "gittata"),
            durata=first_query_value(request, "durata"),
            classi=classi,
        )
    except ParamError as exc:
        raise errors.bad_request(str(exc), exc) from exc
