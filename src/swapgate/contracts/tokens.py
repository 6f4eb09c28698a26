"""Token list projection.

Jupiter's token records carry dozens of fields; clients only need five.
Missing fields come through as None instead of failing the whole list.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class TokenDescriptor:
    """Minimal token info returned by /api/tokens."""

    address: Optional[str]
    symbol: Optional[str]
    name: Optional[str]
    decimals: Optional[int]
    tags: list = field(default_factory=list)

    @classmethod
    def from_record(cls, record: Any) -> "TokenDescriptor":
        """Project one upstream token record."""
        if not isinstance(record, dict):
            record = {}
        return cls(
            address=record.get("address"),
            symbol=record.get("symbol"),
            name=record.get("name"),
            decimals=record.get("decimals"),
            tags=record.get("tags") or [],
        )

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "symbol": self.symbol,
            "name": self.name,
            "decimals": self.decimals,
            "tags": self.tags,
        }


def project_tokens(records: list) -> list[dict]:
    """Project a full upstream token list down to TokenDescriptor dicts."""
    return [TokenDescriptor.from_record(r).to_dict() for r in records]
