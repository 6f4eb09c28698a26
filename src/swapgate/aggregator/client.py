"""Outbound JSON-over-HTTP helper with a hard deadline.

Every call gets its own httpx client. The deadline covers the whole
exchange (connect, send, read) and is enforced by cancelling the call.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from swapgate.errors import (
    UpstreamStatusError,
    UpstreamTimeoutError,
    UpstreamUnreachableError,
)

logger = logging.getLogger(__name__)


class JSONFetcher:
    """Issues single JSON requests bounded by a timeout."""

    def __init__(
        self,
        timeout_ms: int = 12000,
        headers: Optional[dict] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize fetcher.

        Args:
            timeout_ms: Total deadline per call in milliseconds
            headers: Headers sent with every call
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.timeout_ms = timeout_ms
        self.headers = headers or {}
        self.transport = transport

    async def fetch_json(
        self,
        url: str,
        method: str = "GET",
        params: Optional[dict] = None,
        json: Optional[Any] = None,
    ) -> Any:
        """Fetch a URL and decode its JSON body.

        The body is decoded whatever the status; an undecodable body reads
        as ``{}``. A non-2xx status raises with the upstream ``error`` field
        as message when there is one.

        Raises:
            UpstreamTimeoutError: deadline elapsed, call cancelled
            UpstreamStatusError: non-2xx response
            UpstreamUnreachableError: connection or protocol failure
        """
        try:
            response = await asyncio.wait_for(
                self._send(url, method, params, json),
                timeout=self.timeout_ms / 1000,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Upstream timeout after {self.timeout_ms}ms: {method} {url}")
            raise UpstreamTimeoutError(url, self.timeout_ms) from e
        except httpx.TimeoutException as e:
            logger.warning(f"Upstream timeout after {self.timeout_ms}ms: {method} {url}")
            raise UpstreamTimeoutError(url, self.timeout_ms) from e
        except httpx.HTTPError as e:
            logger.warning(f"Upstream unreachable: {method} {url} - {e}")
            raise UpstreamUnreachableError(str(e) or type(e).__name__) from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.is_success:
            upstream_message = data.get("error") if isinstance(data, dict) else None
            logger.warning(f"Upstream error: {response.status_code} - {method} {url}")
            raise UpstreamStatusError(
                response.status_code,
                str(upstream_message) if upstream_message else None,
            )

        return data

    async def _send(
        self,
        url: str,
        method: str,
        params: Optional[dict],
        json: Optional[Any],
    ) -> httpx.Response:
        timeout = self.timeout_ms / 1000
        async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
            return await client.request(
                method,
                url,
                headers=self.headers,
                params=params,
                json=json,
            )
