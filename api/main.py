import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth.dependencies import require_api_key
from catalogo import router as catalogo_router
from classi import router as classi_router
from core import db, errors, settings
from core.log import configure_logging
from core.middleware import RequestCancellationMiddleware, log_requests
from core.ratelimit import RateLimiter, rate_limit
from health import router as health_router
from incantesimi import router as incantesimi_router

API_PREFIX = "/v1"
GZIP_MIN_SIZE = 1024

logger = logging.getLogger("quintaedizione.api")

_STATUS_CODES = {
    400: errors.BAD_REQUEST,
    401: errors.UNAUTHORIZED,
    404: errors.NOT_FOUND,
    429: errors.TOO_MANY_REQUESTS,
}


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Fail fast on bad config, then open the DB pool once per process.
    settings.validate()
    await db.init_pool()
    logger.info("startup version=%s", settings.app_version())
    try:
        yield
    finally:
        await db.close_pool()
        logger.info("shutdown")


async def app_error_handler(request: Request, exc: errors.AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request_failed path=%s code=%s cause=%r",
            request.url.path,
            exc.code,
            exc.cause,
            exc_info=exc.cause,
        )
    else:
        logger.warning("request_rejected path=%s code=%s detail=%s", request.url.path, exc.code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    detail = "invalid request parameters"
    problems = exc.errors()
    if problems:
        first = problems[0]
        name = first.get("loc", ["", ""])[-1]
        detail = f"{name}: {first.get('msg', 'invalid value')}"
    logger.warning("request_rejected path=%s code=%s detail=%s", request.url.path, errors.BAD_REQUEST, detail)
    return JSONResponse(status_code=400, content=errors.error_body(errors.BAD_REQUEST, detail))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown routes and wrong methods from the router itself.
    code = _STATUS_CODES.get(exc.status_code, errors.BAD_REQUEST)
    if exc.status_code >= 500:
        code = errors.INTERNAL_ERROR
    return JSONResponse(
        status_code=exc.status_code,
        content=errors.error_body(code, str(exc.detail) if exc.detail else ""),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error path=%s", request.url.path)
    return JSONResponse(status_code=500, content=errors.error_body(errors.INTERNAL_ERROR, errors.INTERNAL_DETAIL))


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Quintaedizione API",
        version=settings.app_version(),
        lifespan=lifespan,
    )

    # Added innermost first. Outermost to innermost: CORS answers preflights,
    # GZip, cancellation on disconnect or timeout, request log (so it sees
    # 429s), per-IP rate limit.
    if settings.rate_limit_enabled():
        app.middleware("http")(rate_limit(RateLimiter(settings.rate_limit_rpm())))
    app.middleware("http")(log_requests)
    app.add_middleware(RequestCancellationMiddleware, timeout_s=settings.request_timeout_s())
    app.add_middleware(GZipMiddleware, minimum_size=GZIP_MIN_SIZE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins(),
        allow_methods=settings.cors_allowed_methods(),
        allow_headers=["*"],
        max_age=settings.cors_max_age(),
    )

    app.add_exception_handler(errors.AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    protected = [Depends(require_api_key)]
    app.include_router(classi_router.router, prefix=API_PREFIX, dependencies=protected, tags=["classi"])
    app.include_router(
        incantesimi_router.router, prefix=API_PREFIX, dependencies=protected, tags=["incantesimi"]
    )
    app.include_router(catalogo_router.router, prefix=API_PREFIX, dependencies=protected)
    app.include_router(health_router.router, tags=["health"])

    return app


app = create_app()
