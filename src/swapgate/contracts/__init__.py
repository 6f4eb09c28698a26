"""Request contracts and response projections for the proxy API."""

from swapgate.contracts.base import format_validation_error, parse_contract
from swapgate.contracts.quotes import QuoteRequest, parse_quote_request
from swapgate.contracts.swaps import SwapRequest, parse_swap_request
from swapgate.contracts.tokens import TokenDescriptor, project_tokens

__all__ = [
    "QuoteRequest",
    "SwapRequest",
    "TokenDescriptor",
    "format_validation_error",
    "parse_contract",
    "parse_quote_request",
    "parse_swap_request",
    "project_tokens",
]
