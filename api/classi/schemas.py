"""
Pydantic schemas for classes (classi) and subclasses (sotto-classi).
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from core.schemas import PageMeta, Schema


class TipoDiDado(str, Enum):
    D3 = "d3"
    D4 = "d4"
    D6 = "d6"
    D8 = "d8"
    D10 = "d10"
    D12 = "d12"
    D20 = "d20"


class TipoAzione(str, Enum):
    NESSUNA = "Nessuna"
    AZIONE_BONUS = "Azione Bonus"
    AZIONE = "Azione"
    REAZIONE = "Reazione"
    AZIONE_GRATUITA = "Azione Gratuita"


class Valuta(str, Enum):
    MR = "MR"
    MA = "MA"
    ME = "ME"
    MO = "MO"
    MP = "MP"


class Tratto(Schema):
    id: str | None = None
    nome: str = ""
    descrizione: str | None = None
    tipo_azione: TipoAzione | None = Field(default=None, alias="tipo-azione")
    tipo_di_sorgente: str | None = Field(default=None, alias="tipo-di-sorgente")


class SlotIncantesimo(Schema):
    numero_slot: int = Field(default=0, alias="numero-slot")
    livello_slot_incantesimo: int = Field(default=0, alias="livello-slot-incantesimo")


class IncantesimiClasse(Schema):
    slot_incantesimi: list[SlotIncantesimo] | None = Field(default=None, alias="slot-incantesimi")
    incantesimi_preparati: int | None = Field(default=None, alias="incantesimi-preparati")


class ProprietaLivello(Schema):
    livello_classe: int = Field(default=0, alias="livello-classe")
    tratto_di_classe: Tratto | None = Field(default=None, alias="tratto-di-classe")
    incantesimi_classe: IncantesimiClasse | None = Field(default=None, alias="incantesimi-di-classe")


class RiferimentoSottoclasse(Schema):
    id_sottoclasse: str = Field(alias="id-sottoclasse")


class Importo(Schema):
    quantita: int = Field(default=0, alias="quantità")
    valuta: Valuta | None = None


class OggettoPartenza(Schema):
    id: str | None = None
    nome: str | None = None
    quantita: int | None = Field(default=None, alias="quantità")


class EquipaggiamentoPartenza(Schema):
    opzione_a: list[OggettoPartenza] | None = Field(default=None, alias="opzione-a")
    opzione_b: Importo | None = Field(default=None, alias="opzione-b")


class Classe(Schema):
    id: str
    nome: str
    descrizione: str = ""
    documentazione_di_riferimento: str = Field(alias="documentazione-di-riferimento")
    dado_vita: TipoDiDado = Field(alias="dado-vita")
    elenco_sottoclassi: list[RiferimentoSottoclasse] | None = Field(default=None, alias="elenco-sottoclassi")
    equipaggiamento_partenza: EquipaggiamentoPartenza | None = Field(
        default=None, alias="equipaggiamento-id-partenza"
    )
    proprieta_di_classe: list[ProprietaLivello] | None = Field(default=None, alias="proprietà-di-classe")


class SottoClasse(Schema):
    id: str
    nome: str
    descrizione: str = ""
    documentazione_di_riferimento: str = Field(alias="documentazione-di-riferimento")
    id_classe_associata: str = Field(alias="id-classe-associata")
    proprieta_di_sottoclasse: list[ProprietaLivello] | None = Field(
        default=None, alias="proprietà-di-sottoclasse"
    )


class ListClassiResponse(PageMeta):
    classi: list[Classe]


class ListSottoclassiResponse(PageMeta):
    sottoclassi: list[SottoClasse]
