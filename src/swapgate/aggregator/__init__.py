"""Upstream aggregator access.

- JSONFetcher: one deadline-bound JSON call per request, no retries
- JupiterClient: token list, quote and swap build on top of it
"""

from swapgate.aggregator.client import JSONFetcher
from swapgate.aggregator.jupiter import JupiterClient, create_jupiter_client

__all__ = [
    "JSONFetcher",
    "JupiterClient",
    "create_jupiter_client",
]
