"""Swap transaction request contract.

The quote object is whatever a prior /api/quote call returned; it is never
inspected here, only forwarded so Jupiter can build the transaction for
client-side signing.
"""

from typing import Any

from pydantic import Field

from swapgate.contracts.base import JSONInt, StrictContract, parse_contract


class SwapRequest(StrictContract):
    """Request for a serialized swap transaction."""

    user_public_key: str = Field(
        ..., alias="userPublicKey", min_length=32, description="Signer wallet public key"
    )
    quote_response: dict[str, Any] = Field(
        ..., alias="quoteResponse", description="Quote returned by /api/quote, unmodified"
    )
    wrap_and_unwrap_sol: bool = Field(default=True, alias="wrapAndUnwrapSol")
    use_shared_accounts: bool = Field(default=True, alias="useSharedAccounts")
    dynamic_compute_unit_limit: bool = Field(default=True, alias="dynamicComputeUnitLimit")
    prioritization_fee_lamports: JSONInt = Field(
        default=0, alias="prioritizationFeeLamports", ge=0, description="Priority fee in lamports"
    )

    def to_upstream_body(self) -> dict[str, Any]:
        """Build the upstream /swap JSON body."""
        return {
            "quoteResponse": self.quote_response,
            "userPublicKey": self.user_public_key,
            "wrapAndUnwrapSol": self.wrap_and_unwrap_sol,
            "dynamicComputeUnitLimit": self.dynamic_compute_unit_limit,
            "prioritizationFeeLamports": self.prioritization_fee_lamports,
            "useSharedAccounts": self.use_shared_accounts,
        }


def parse_swap_request(payload: Any) -> SwapRequest:
    return parse_contract(SwapRequest, payload)
