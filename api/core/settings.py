"""
Runtime settings read from environment variables.

Every accessor re-reads the environment so tests can monkeypatch values
without reloading modules. Empty or unparsable values fall back to defaults.
"""

from __future__ import annotations

import os

DEV_VERSION = "dev"
DEFAULT_RATE_LIMIT_RPM = 60


class SettingsError(RuntimeError):
    pass


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip()
    if raw in ("1", "t", "T", "TRUE", "true", "True"):
        return True
    if raw in ("0", "f", "F", "FALSE", "false", "False"):
        return False
    return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name, "")
    values = [part.strip() for part in raw.split(",") if part.strip()]
    return values or list(default)


def app_version() -> str:
    return _env_str("APP_VERSION", DEV_VERSION)


def database_url() -> str:
    return os.environ.get("DATABASE_URL", "").strip()


def db_pool_min_size() -> int:
    return _env_int("DB_POOL_MIN_SIZE", 1)


def db_pool_max_size() -> int:
    return _env_int("DB_POOL_MAX_SIZE", 25)


def db_conn_max_lifetime_s() -> float:
    return _env_float("DB_CONN_MAX_LIFETIME_S", 300.0)


def db_command_timeout_s() -> float:
    return _env_float("DB_COMMAND_TIMEOUT_S", 30.0)


def request_timeout_s() -> float:
    return _env_float("REQUEST_TIMEOUT_S", 30.0)


def rate_limit_enabled() -> bool:
    return _env_bool("RATE_LIMIT_ENABLED", True)


def rate_limit_rpm() -> int:
    # Requests per client IP per minute; non-positive values fall back.
    value = _env_int("RATE_LIMIT_RPM", DEFAULT_RATE_LIMIT_RPM)
    return value if value > 0 else DEFAULT_RATE_LIMIT_RPM


def api_key() -> str:
    # Empty means the API-key check is disabled.
    return os.environ.get("API_KEY", "").strip()


def cors_allowed_origins() -> list[str]:
    return _env_list("CORS_ALLOWED_ORIGINS", ["*"])


def cors_allowed_methods() -> list[str]:
    return _env_list("CORS_ALLOWED_METHODS", ["GET", "OPTIONS"])


def cors_max_age() -> int:
    return _env_int("CORS_MAX_AGE", 300)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def log_format() -> str:
    return _env_str("LOG_FORMAT", "text").lower()


def validate() -> None:
    """
    Fail fast on startup when required settings are missing.
    """
    if not database_url():
        raise SettingsError("DATABASE_URL environment variable is required.")
    if not api_key() and app_version() != DEV_VERSION:
        raise SettingsError(
            f"API_KEY environment variable is required in non-dev environments (APP_VERSION={app_version()!r})."
        )
