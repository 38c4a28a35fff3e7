"""
Base pydantic models shared by the resource schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Schema(BaseModel):
    # Wire names are hyphenated Italian keys (aliases); code uses snake_case.
    model_config = ConfigDict(populate_by_name=True)


class PageMeta(Schema):
    pagina: int
    numero_di_elementi: int = Field(alias="numero-di-elementi")
