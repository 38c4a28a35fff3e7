"""
Per-client-IP rate limiting (sliding one-minute window, in memory).

State lives on the limiter instance created by `create_app()`, so every
app (and every test) starts with empty counters. Counters are per process.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict, deque
from collections.abc import Callable

from fastapi import Request
from fastapi.responses import JSONResponse

from . import errors
from .middleware import client_ip

WINDOW_S = 60.0
MAX_TRACKED_IPS = 10_000
CLEANUP_INTERVAL_S = 300.0

logger = logging.getLogger("quintaedizione.request")


class RateLimiter:
    def __init__(self, requests_per_minute: int, *, clock: Callable[[], float] = time.monotonic) -> None:
        self.limit = requests_per_minute
        self.clock = clock
        self._hits: dict[str, deque[float]] = defaultdict(deque)
        self._last_cleanup = clock()

    def hit(self, key: str) -> tuple[bool, int]:
        """
        Record one request for `key`. Returns (allowed, remaining); a rejected
        request is not counted.
        """
        now = self.clock()
        self._cleanup(now)

        hits = self._hits[key]
        window_start = now - WINDOW_S
        while hits and hits[0] <= window_start:
            hits.popleft()

        if len(hits) >= self.limit:
            return False, 0
        hits.append(now)
        return True, self.limit - len(hits)

    def tracked(self) -> int:
        return len(self._hits)

    def _cleanup(self, now: float) -> None:
        if now - self._last_cleanup < CLEANUP_INTERVAL_S and len(self._hits) <= MAX_TRACKED_IPS:
            return
        self._last_cleanup = now
        window_start = now - WINDOW_S
        for key in [k for k, hits in self._hits.items() if not hits or hits[-1] <= window_start]:
            del self._hits[key]
        # Still too many: drop the least active clients.
        if len(self._hits) > MAX_TRACKED_IPS:
            excess = len(self._hits) - MAX_TRACKED_IPS
            for key in sorted(self._hits, key=lambda k: len(self._hits[k]))[:excess]:
                del self._hits[key]


def rate_limit(limiter: RateLimiter):
    """
    HTTP middleware rejecting a client IP over its per-minute budget with a
    429 error envelope.
    """

    async def middleware(request: Request, call_next):
        ip = client_ip(request)
        allowed, remaining = limiter.hit(ip)
        if not allowed:
            logger.warning("rate_limited ip=%s path=%s limit=%d", ip, request.url.path, limiter.limit)
            err = errors.too_many_requests()
            return JSONResponse(
                status_code=err.status_code,
                content=err.body(),
                headers={
                    "Retry-After": str(int(WINDOW_S)),
                    "X-RateLimit-Limit": str(limiter.limit),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(limiter.limit)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response

    return middleware
