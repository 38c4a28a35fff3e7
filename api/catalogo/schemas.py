"""
Pydantic schemas for the simple catalog resources.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, create_model

from core.schemas import PageMeta, Schema


class VoceCatalogo(Schema):
    id: str
    nome: str
    descrizione: str | None = None
    documentazione_di_riferimento: str = Field(alias="documentazione-di-riferimento")


@lru_cache(maxsize=None)
def list_response_model(kind: str, envelope: str) -> type[PageMeta]:
    """
    List envelope for one resource: `pagina`, `numero-di-elementi` and the
    items under the resource's plural key.
    """
    return create_model(
        f"List{kind}Response",
        __base__=PageMeta,
        items=(list[VoceCatalogo], Field(alias=envelope)),
    )
