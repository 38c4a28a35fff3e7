"""
Auth dependency for protected FastAPI routes (shared API key).
"""

from __future__ import annotations

import secrets

from fastapi import Header

from core import errors, settings

API_KEY_HEADER = "X-API-Key"


def _check_api_key(provided: str | None, expected: str) -> None:
    if not expected:
        # No key configured: dev mode, everything passes.
        return None

    provided = (provided or "").strip()
    if not provided:
        raise errors.unauthorized("missing API key")

    if not secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        raise errors.unauthorized("invalid API key")


async def require_api_key(x_api_key: str | None = Header(default=None, alias=API_KEY_HEADER)) -> None:
    _check_api_key(x_api_key, settings.api_key())
