"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from swapgate import __version__
from swapgate.aggregator.jupiter import create_jupiter_client
from swapgate.api.ingress import (
    INTERNAL_SERVER_ERROR,
    AccessLogMiddleware,
    InternalErrorMiddleware,
    OriginGuardMiddleware,
    SecurityHeadersMiddleware,
)
from swapgate.api.limiter import ApiRateLimitMiddleware, configure_limiter
from swapgate.api.responses import error_response
from swapgate.config import Settings, get_settings
from swapgate.errors import PayloadTooLargeError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings: Settings = app.state.settings
    logger.info(f"[{settings.app_name}] starting")
    logger.info(f"CORS: {', '.join(settings.allowed_origins)}")
    logger.info(f"Jupiter: {settings.jupiter_base}")
    logger.info(f"Settings: {settings.get_safe_dict()}")
    yield
    logger.info(f"[{settings.app_name}] shutting down")


def _register_error_handlers(app: FastAPI) -> None:
    """Map errors that escape the routes onto the JSON error envelope."""

    @app.exception_handler(PayloadTooLargeError)
    async def payload_too_large_handler(request: Request, exc: PayloadTooLargeError):
        return error_response(413, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"ok": False, "error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Last resort for failures inside the middleware stack itself."""
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return error_response(500, INTERNAL_SERVER_ERROR)


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        transport: httpx transport for upstream calls (tests inject a mock)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Jupiter swap proxy API",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.jupiter = create_jupiter_client(settings, transport=transport)
    app.state.limiter = configure_limiter(settings)

    # Middleware: the last one added runs first on the way in
    app.add_middleware(InternalErrorMiddleware)
    app.add_middleware(
        ApiRateLimitMiddleware,
        limiter=app.state.limiter,
        limit=settings.rate_limit,
        trust_proxy=settings.trust_proxy,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "HEAD", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(OriginGuardMiddleware, allowed_origins=settings.allowed_origins)
    app.add_middleware(AccessLogMiddleware, log_format=settings.log_format)
    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(SecurityHeadersMiddleware)

    _register_error_handlers(app)

    # Register routes
    from swapgate.api.routes import health, jupiter

    app.include_router(health.router, tags=["Health"])
    app.include_router(jupiter.router)

    return app
