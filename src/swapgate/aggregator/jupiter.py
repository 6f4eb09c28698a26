"""Jupiter DEX aggregator client for Solana.

Proxies the three Jupiter calls the API exposes: token list, quote and
swap-transaction build.
API docs: https://station.jup.ag/docs/apis/swap-api
"""

import logging
from typing import Any, Optional

import httpx

from swapgate.aggregator.client import JSONFetcher
from swapgate.contracts.quotes import QuoteRequest
from swapgate.contracts.swaps import SwapRequest
from swapgate.contracts.tokens import project_tokens
from swapgate.errors import UpstreamError

logger = logging.getLogger(__name__)

# Jupiter API endpoints
JUPITER_API_BASE = "https://quote-api.jup.ag"
JUPITER_TOKENS_URL = "https://token.jup.ag/all"


class JupiterClient:
    """Thin async client for the Jupiter swap API.

    Nothing is cached; every method performs exactly one outbound call.
    """

    def __init__(
        self,
        base_url: str = JUPITER_API_BASE,
        tokens_url: str = JUPITER_TOKENS_URL,
        timeout_ms: int = 12000,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize Jupiter client.

        Args:
            base_url: Swap API base, without the /v6 suffix
            tokens_url: Full token list URL
            timeout_ms: Deadline per upstream call
            api_key: Optional API key for higher rate limits
            transport: Custom httpx transport for tests
        """
        self.base_url = base_url.rstrip("/")
        self.tokens_url = tokens_url
        self.api_key = api_key
        self._fetcher = JSONFetcher(
            timeout_ms=timeout_ms,
            headers=self._get_headers(),
            transport=transport,
        )

    def _get_headers(self) -> dict:
        """Get API headers."""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    async def list_tokens(self) -> list[dict]:
        """Fetch the token list and keep only the fields clients use."""
        data = await self._fetcher.fetch_json(self.tokens_url)
        if not isinstance(data, list):
            raise UpstreamError("Unexpected token list payload")

        tokens = project_tokens(data)
        logger.debug(f"Fetched {len(tokens)} tokens from Jupiter")
        return tokens

    async def get_quote(self, request: QuoteRequest) -> Any:
        """Get a swap quote; the payload is returned untouched."""
        logger.debug(
            f"Jupiter quote: {request.amount} {request.input_mint} -> {request.output_mint} "
            f"({request.slippage_bps} bps)"
        )
        return await self._fetcher.fetch_json(
            f"{self.base_url}/v6/quote",
            params=request.to_query_params(),
        )

    async def build_swap(self, request: SwapRequest) -> Optional[str]:
        """Build a swap transaction for the user's wallet to sign.

        Returns:
            Base64 serialized transaction, or None if Jupiter omitted it
        """
        data = await self._fetcher.fetch_json(
            f"{self.base_url}/v6/swap",
            method="POST",
            json=request.to_upstream_body(),
        )
        if not isinstance(data, dict):
            return None
        return data.get("swapTransaction")


def create_jupiter_client(settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> JupiterClient:
    """Create a Jupiter client from application settings."""
    return JupiterClient(
        base_url=settings.jupiter_base,
        tokens_url=settings.tokens_url,
        timeout_ms=settings.fetch_timeout_ms,
        api_key=settings.jupiter_api_key,
        transport=transport,
    )
