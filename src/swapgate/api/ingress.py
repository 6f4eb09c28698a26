"""Ingress middleware: origin guard, security headers, access log, error guard.

None of these touch application data. They only add headers or short-circuit
the request with an error envelope.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Iterable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from swapgate.api.responses import error_response
from swapgate.errors import OriginNotAllowedError

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("swapgate.access")

INTERNAL_SERVER_ERROR = "Internal server error"

# Same defaults helmet applies, with cross-origin resource loading allowed
# so browsers on the allowed origins can read responses.
SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
        "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
        "object-src 'none';script-src 'self';script-src-attr 'none';"
        "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "cross-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}

ACCESS_LOG_FORMATS = {
    "dev": "{method} {url} {status} {elapsed_ms:.3f} ms - {length}",
    "tiny": "{method} {url} {status} {length} - {elapsed_ms:.3f} ms",
    "short": "{remote_addr} {method} {url} HTTP/{http_version} {status} {length} - {elapsed_ms:.3f} ms",
    "common": '{remote_addr} - - [{date}] "{method} {url} HTTP/{http_version}" {status} {length}',
    "combined": (
        '{remote_addr} - - [{date}] "{method} {url} HTTP/{http_version}" {status} {length} '
        '"{referrer}" "{user_agent}"'
    ),
}


def check_origin(origin: Optional[str], allowed_origins: Iterable[str]) -> None:
    """Accept requests with no Origin header or an allow-listed one.

    Raises:
        OriginNotAllowedError: if the origin is present and not allowed
    """
    if origin and origin not in allowed_origins:
        raise OriginNotAllowedError(origin)


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """Reject cross-origin requests from origins outside the allow-list."""

    def __init__(self, app, allowed_origins: list[str]):
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            check_origin(request.headers.get("origin"), self.allowed_origins)
        except OriginNotAllowedError as e:
            logger.warning(f"Rejected origin {e.origin!r} on {request.method} {request.url.path}")
            return error_response(403, e.message)
        return await call_next(request)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add the standard hardening headers to every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log one line per request in a morgan-style format."""

    def __init__(self, app, log_format: str = "dev"):
        super().__init__(app)
        if log_format not in ACCESS_LOG_FORMATS:
            logger.warning(f"Unknown LOG_FORMAT {log_format!r}, using 'dev'")
            log_format = "dev"
        self.template = ACCESS_LOG_FORMATS[log_format]

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"

        access_logger.info(
            self.template.format(
                method=request.method,
                url=url,
                status=response.status_code,
                elapsed_ms=elapsed_ms,
                length=response.headers.get("content-length", "-"),
                remote_addr=request.client.host if request.client else "-",
                http_version=request.scope.get("http_version", "1.1"),
                date=datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S +0000"),
                referrer=request.headers.get("referer", "-"),
                user_agent=request.headers.get("user-agent", "-"),
            )
        )
        return response


class InternalErrorMiddleware(BaseHTTPMiddleware):
    """Turn unexpected exceptions into the generic 500 envelope.

    Installed inside the header and CORS layers so 500s carry them too.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(
                f"Unhandled exception on {request.method} {request.url.path}: {e}",
                exc_info=e,
            )
            return error_response(500, INTERNAL_SERVER_ERROR)
