"""
Request parameter helpers: slug ids are validated before any service call
and reported as 400 BAD_REQUEST; repeated scalar query parameters resolve to
their first occurrence.
"""

from __future__ import annotations

from fastapi import Request

from . import errors
from .validation import ParamError, validate_id


def path_id(name: str, value: str | None) -> str:
    try:
        return validate_id(name, value)
    except ParamError as exc:
        raise errors.bad_request(str(exc), exc) from exc


def first_query_value(request: Request, name: str) -> str | None:
    """
    First occurrence of a scalar query parameter. FastAPI binds the last one
    when a scalar is repeated; the first is the one honoured here.
    """
    values = request.query_params.getlist(name)
    return values[0] if values else None
