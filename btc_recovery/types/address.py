"""Address-related type definitions for the Bitcoin recovery client."""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..types.common import Address as AddressStr, Satoshi, TxId
from ..types.transaction import OutPoint

__all__ = [
    "AddressInfo",
    "UnspentOutput",
]


@dataclass(frozen=True)
class AddressInfo:
    """
    Address summary as reported by the explorer.

    Fetched fresh on every call; the explorer payload is kept in ``raw``
    for callers that need fields beyond the flattened summary.
    """

    address: AddressStr
    transaction_count: int
    total_balance: Satoshi
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_used(self) -> bool:
        """Check if the address has any history."""
        return self.transaction_count > 0


@dataclass(frozen=True)
class UnspentOutput:
    """Unspent transaction output."""

    txid: TxId
    vout: int
    amount: Satoshi

    # Explorer-native record, with ``amount`` filled in
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def outpoint(self) -> OutPoint:
        """Get output reference."""
        return OutPoint(self.txid, self.vout)

    def __str__(self) -> str:
        """String representation."""
        return f"{self.outpoint}:{self.amount}"
