"""
Pydantic schemas for spells (incantesimi).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from core.schemas import PageMeta, Schema


class ScuolaDiMagia(str, Enum):
    ABIURAZIONE = "Abiurazione"
    DIVINAZIONE = "Divinazione"
    EVOCAZIONE = "Evocazione"
    INVOCAZIONE = "Invocazione"
    NECROMANZIA = "Necromamzia"
    ILLUSIONE = "Illusione"
    TRANSMUTAZIONE = "Transmutazione"
    INCANTAMENTO = "Incantamento"


class Componente(str, Enum):
    VERBALE = "V"
    SOMATICA = "S"
    MATERIALE = "M"


class EffettoIncantesimo(Schema):
    ripetizione_effetto: int | None = Field(default=None, alias="ripetizione-effetto")
    effetto: Any = None


class Incantesimo(Schema):
    id: str
    nome: str
    livello: int
    scuola_di_magia: ScuolaDiMagia = Field(alias="scuola-di-magia")
    tempo_di_lancio: str = Field(alias="tempo-di-lancio")
    gittata: str
    area: str | None = None
    concentrazione: bool
    sempre_preparato: bool = Field(alias="sempre-preparato")
    rituale: bool
    componenti: list[Componente] = Field(default_factory=list)
    componenti_materiali: str | None = Field(default=None, alias="componenti-materiali")
    durata: str
    descrizione: str
    effetto_incantesimo: EffettoIncantesimo | None = Field(default=None, alias="effetto-incantesimo")
    effetto_livello_maggiore: EffettoIncantesimo | None = Field(
        default=None, alias="effetto-livello-maggiore"
    )
    classi: str
    documentazione_di_riferimento: str = Field(alias="documentazione-di-riferimento")


class ListIncantesimiResponse(PageMeta):
    incantesimi: list[Incantesimo]
