"""
Row -> entity mapping helpers shared by the repositories.
"""

from __future__ import annotations

import json
from typing import Any


class RowMappingError(ValueError):
    pass


def json_column(row: dict[str, Any], column: str) -> Any:
    """
    Decode a json/jsonb column.

    asyncpg hands jsonb back as text unless a codec is registered, so both the
    raw string and an already-decoded value are accepted. NULL -> None;
    malformed JSON raises `RowMappingError`.
    """
    value = row.get(column)
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError as exc:
            raise RowMappingError(f"Column {column!r} holds malformed JSON.") from exc
    return value


def text_list(row: dict[str, Any], column: str) -> list[str]:
    value = row.get(column)
    if value is None:
        return []
    return [str(item) for item in value]


def nonempty(value: list | None) -> list | None:
    # Empty lists are serialized as absent.
    return value or None
