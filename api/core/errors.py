"""
Application error taxonomy and the JSON error envelope.

Services raise `AppError`; `api/main.py` turns it into
`{"errors": [{"code", "title", "detail"}]}` with the matching status code.
The `cause` stays server-side (logged) and is never serialized.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

BAD_REQUEST = "BAD_REQUEST"
NOT_FOUND = "NOT_FOUND"
INTERNAL_ERROR = "INTERNAL_ERROR"
UNAUTHORIZED = "UNAUTHORIZED"
TOO_MANY_REQUESTS = "TOO_MANY_REQUESTS"

_TITLES = {
    BAD_REQUEST: "Bad Request",
    NOT_FOUND: "Not Found",
    INTERNAL_ERROR: "Internal Server Error",
    UNAUTHORIZED: "Unauthorized",
    TOO_MANY_REQUESTS: "Too Many Requests",
}

INTERNAL_DETAIL = "an unexpected error occurred"


class ErrorItem(BaseModel):
    code: str
    title: str
    detail: str | None = Field(default=None)


class ErrorBody(BaseModel):
    errors: list[ErrorItem]


class AppError(Exception):
    def __init__(
        self,
        status_code: int,
        code: str,
        detail: str = "",
        *,
        cause: BaseException | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.title = _TITLES.get(code, "Error")
        self.detail = detail
        self.cause = cause
        super().__init__(str(cause) if cause is not None else (detail or self.title))

    def body(self) -> dict:
        return error_body(self.code, self.detail)


def error_body(code: str, detail: str = "") -> dict:
    item = ErrorItem(code=code, title=_TITLES.get(code, "Error"), detail=detail or None)
    return ErrorBody(errors=[item]).model_dump(exclude_none=True)


def bad_request(detail: str, cause: BaseException | None = None) -> AppError:
    return AppError(400, BAD_REQUEST, detail, cause=cause)


def not_found(kind: str, id: str) -> AppError:
    return AppError(404, NOT_FOUND, f"{kind} with id '{id}' not found")


def internal(cause: BaseException | None = None) -> AppError:
    return AppError(500, INTERNAL_ERROR, INTERNAL_DETAIL, cause=cause)


def unauthorized(detail: str) -> AppError:
    return AppError(401, UNAUTHORIZED, detail)


def too_many_requests(detail: str = "rate limit exceeded") -> AppError:
    return AppError(429, TOO_MANY_REQUESTS, detail)
