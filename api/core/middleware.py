"""
HTTP middleware: request logging with request ids, and cancellation of the
handler on client disconnect or when the per-request ceiling expires.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from . import errors

REQUEST_ID_HEADER = "X-Request-ID"

logger = logging.getLogger("quintaedizione.request")


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def log_requests(request: Request, call_next):
    """
    One log line per request; the request id is reused from the incoming
    header when present and echoed on the response.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:16]
    request.state.request_id = request_id
    start = time.monotonic()

    response = await call_next(request)

    duration_ms = round((time.monotonic() - start) * 1000, 1)
    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        "request method=%s path=%s status=%d duration_ms=%.1f ip=%s rid=%s",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
        client_ip(request),
        request_id,
        extra={
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": duration_ms,
            "client_ip": client_ip(request),
            "request_id": request_id,
        },
    )
    return response


class RequestCancellationMiddleware:
    """
    Pure ASGI middleware that aborts the handler (and any in-flight asyncpg
    query it awaits) when the client disconnects or the request exceeds
    `timeout_s`.

    The handler runs as its own task. A watcher reads the server's `receive`
    channel: body messages are forwarded to the handler, `http.disconnect`
    cancels it. On timeout a 504 error envelope is sent if nothing was sent
    yet. `timeout_s <= 0` disables the timeout only.
    """

    def __init__(self, app: Any, timeout_s: float) -> None:
        self.app = app
        self.timeout_s = timeout_s

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False
        response_complete = False
        disconnected = False
        inbox: asyncio.Queue = asyncio.Queue()

        async def tracking_send(message: dict) -> None:
            nonlocal response_started, response_complete
            if message["type"] == "http.response.start":
                response_started = True
            elif message["type"] == "http.response.body" and not message.get("more_body", False):
                response_complete = True
            await send(message)

        async def forwarded_receive() -> dict:
            return await inbox.get()

        handler = asyncio.ensure_future(self.app(scope, forwarded_receive, tracking_send))

        async def watch_disconnect() -> None:
            nonlocal disconnected
            while not handler.done():
                message = await receive()
                await inbox.put(message)
                if message["type"] == "http.disconnect":
                    if not response_complete:
                        disconnected = True
                        handler.cancel()
                    return

        watcher = asyncio.ensure_future(watch_disconnect())
        timeout = self.timeout_s if self.timeout_s > 0 else None
        try:
            done, _ = await asyncio.wait({handler}, timeout=timeout)
            if not done:
                handler.cancel()
                await asyncio.wait({handler})
                logger.error("request_timeout path=%s timeout_s=%s", scope.get("path"), self.timeout_s)
                if not response_started:
                    response = JSONResponse(
                        status_code=504,
                        content=errors.error_body(errors.INTERNAL_ERROR, "request timed out"),
                    )
                    await response(scope, receive, send)
                return

            if disconnected:
                logger.info("client_disconnected path=%s", scope.get("path"))
                if not handler.cancelled():
                    handler.exception()
                return

            handler.result()
        finally:
            watcher.cancel()
            if not handler.done():
                handler.cancel()
