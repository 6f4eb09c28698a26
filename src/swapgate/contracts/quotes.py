"""Quote request contract."""

from typing import Any

from pydantic import Field

from swapgate.contracts.base import JSONInt, StrictContract, parse_contract


class QuoteRequest(StrictContract):
    """Request for a Jupiter swap quote."""

    input_mint: str = Field(..., alias="inputMint", min_length=8, description="Input token mint")
    output_mint: str = Field(..., alias="outputMint", min_length=8, description="Output token mint")
    amount: str = Field(
        ...,
        pattern=r"^[0-9]+$",
        description="Integer amount in the input token's smallest units",
    )
    slippage_bps: JSONInt = Field(
        default=50, alias="slippageBps", ge=1, le=1000, description="Slippage tolerance in bps"
    )
    only_direct_routes: bool = Field(
        default=False, alias="onlyDirectRoutes", description="Restrict to single-hop routes"
    )

    def to_query_params(self) -> dict[str, str]:
        """Build the upstream /quote query string."""
        return {
            "inputMint": self.input_mint,
            "outputMint": self.output_mint,
            "amount": self.amount,
            "slippageBps": str(self.slippage_bps),
            "onlyDirectRoutes": "true" if self.only_direct_routes else "false",
        }


def parse_quote_request(payload: Any) -> QuoteRequest:
    return parse_contract(QuoteRequest, payload)
