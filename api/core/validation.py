"""
Query/path parameter validators.

Each helper validates one parameter and either returns the typed value or
raises `ParamError` naming that parameter. Parsers call them in order, so the
first invalid parameter is the one reported.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

SLUG_MAX_LENGTH = 50

_SLUG_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_INT_RE = re.compile(r"[+-]?[0-9]+")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Strict spellings only; "yes"/"on" are rejected.
_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


class ParamError(ValueError):
    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(message)


def validate_id(name: str, value: str | None) -> str:
    value = value or ""
    if not value:
        raise ParamError(name, f"{name} is required")
    if len(value) > SLUG_MAX_LENGTH:
        raise ParamError(name, f"{name} cannot exceed {SLUG_MAX_LENGTH} characters")
    if not _SLUG_RE.match(value):
        raise ParamError(name, f"{name} contains invalid characters (allowed: a-z, A-Z, 0-9, -, _)")
    return value


def optional_text(name: str, raw: str | None, *, max_length: int) -> str | None:
    if not raw:
        return None
    if len(raw) > max_length:
        raise ParamError(name, f"{name}: value exceeds max length of {max_length}")
    return raw


def check_range(
    name: str,
    value: int,
    *,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int:
    if minimum is not None and maximum is not None:
        if not (minimum <= value <= maximum):
            raise ParamError(name, f"{name} must be between {minimum} and {maximum}")
        return value
    if minimum is not None and value < minimum:
        raise ParamError(name, f"{name} must be at least {minimum}")
    if maximum is not None and value > maximum:
        raise ParamError(name, f"{name} cannot exceed {maximum}")
    return value


def parse_int(
    name: str,
    raw: str | None,
    *,
    default: int | None = None,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int | None:
    """
    Plain ASCII decimal with an optional sign, within 64-bit range. Spaces,
    underscores and non-ASCII digits are rejected, as is anything the
    database could not bind as a bigint.
    """
    if raw is None or raw == "":
        return default
    if not _INT_RE.fullmatch(raw):
        raise ParamError(name, f"{name} must be a valid integer")
    value = int(raw)
    if not (INT64_MIN <= value <= INT64_MAX):
        raise ParamError(name, f"{name} must be a valid integer")
    return check_range(name, value, minimum=minimum, maximum=maximum)


def parse_bool(name: str, raw: str | None) -> bool | None:
    if raw is None or raw == "":
        return None
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ParamError(name, f"{name} must be a valid boolean")


def one_of(name: str, raw: str | None, allowed: Sequence[str]) -> str | None:
    if not raw:
        return None
    if raw not in allowed:
        raise ParamError(name, f"{name} must be one of: {', '.join(allowed)}")
    return raw


def multi(
    name: str,
    values: Iterable[str] | None,
    *,
    max_items: int,
    max_length: int | None = None,
    allowed: Sequence[str] | None = None,
) -> list[str]:
    items = list(values or [])
    if len(items) > max_items:
        raise ParamError(name, f"{name}: too many values (max {max_items})")
    for item in items:
        if allowed is not None and item not in allowed:
            raise ParamError(name, f"{name} must be one of: {', '.join(allowed)}")
        if max_length is not None and len(item) > max_length:
            raise ParamError(name, f"{name}: value exceeds max length of {max_length}")
    return items
