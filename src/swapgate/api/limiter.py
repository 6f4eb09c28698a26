"""Rate limiting for everything under /api.

A single SlowAPI limiter with a moving (sliding) window keyed by client
address. Every path under the prefix shares one bucket per client, so a
client gets ``RATE_LIMIT_MAX`` calls per window across tokens, quote, swap
and unknown /api paths together.
"""

import logging
import time

from fastapi import Request
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from swapgate.api.responses import error_response
from swapgate.config import Settings

logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS = "Too many requests, please try again later."
API_PREFIX = "/api"
API_SCOPE = "api"

limiter = Limiter(
    key_func=get_remote_address,
    strategy="moving-window",
)


def configure_limiter(settings: Settings) -> Limiter:
    """Apply startup settings to the shared limiter."""
    limiter.enabled = settings.rate_limit_enabled
    return limiter


def client_address(request: Request, trust_proxy: bool) -> str:
    """Client address used as the rate-limit key.

    Behind a trusted proxy this is the left-most X-Forwarded-For entry.
    """
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return get_remote_address(request)


def is_api_path(path: str) -> bool:
    return path == API_PREFIX or path.startswith(API_PREFIX + "/")


class ApiRateLimitMiddleware(BaseHTTPMiddleware):
    """Count every /api request against the client's shared window."""

    def __init__(self, app, limiter: Limiter, limit: str, trust_proxy: bool = True):
        super().__init__(app)
        self.limiter = limiter
        self.item = parse(limit)
        self.trust_proxy = trust_proxy

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self.limiter.enabled or not is_api_path(request.url.path):
            return await call_next(request)

        key = client_address(request, self.trust_proxy)
        strategy = self.limiter.limiter
        allowed = strategy.hit(self.item, key, API_SCOPE)
        reset_at, remaining = strategy.get_window_stats(self.item, key, API_SCOPE)
        headers = {
            "X-RateLimit-Limit": str(self.item.amount),
            "X-RateLimit-Remaining": str(max(remaining, 0)),
            "X-RateLimit-Reset": str(int(reset_at)),
        }

        if not allowed:
            logger.info(f"Rate limit exceeded for {key}: {self.item}")
            response = error_response(429, TOO_MANY_REQUESTS)
            headers["Retry-After"] = str(max(int(reset_at - time.time()), 1))
        else:
            response = await call_next(request)

        response.headers.update(headers)
        return response
