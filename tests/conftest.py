"""Shared fixtures.

HTTP tests drive the real app through httpx's ASGI transport. The transport
does not run the lifespan, so no pool is opened; tests patch the repository
functions or the `core.db` helpers instead.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from core import db

_ENV_VARS = (
    "APP_VERSION",
    "DATABASE_URL",
    "DB_POOL_MAX_SIZE",
    "API_KEY",
    "REQUEST_TIMEOUT_S",
    "CORS_ALLOWED_ORIGINS",
    "CORS_ALLOWED_METHODS",
    "LOG_FORMAT",
    "LOG_LEVEL",
    "RATE_LIMIT_ENABLED",
    "RATE_LIMIT_RPM",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_db(monkeypatch):
    """Replace the `core.db` fetch helpers with AsyncMocks."""
    mocks = {
        "fetch_one": AsyncMock(return_value=None),
        "fetch_all": AsyncMock(return_value=[]),
        "fetch_val": AsyncMock(return_value=0),
        "ping": AsyncMock(return_value=None),
    }
    for name, mock in mocks.items():
        monkeypatch.setattr(db, name, mock)
    return mocks


@pytest.fixture
def app():
    from main import create_app

    return create_app()


@pytest.fixture
async def client(app):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        yield c
