"""Transaction-related type definitions for the Bitcoin recovery client."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..types.common import HexStr, Satoshi, TxId

__all__ = [
    "TransactionInfo",
    "OutPoint",
    "TransactionInput",
    "TransactionOutput",
    "ParsedTransaction",
    "DecodedTransaction",
]


@dataclass(frozen=True)
class TransactionInfo:
    """Caller-supplied candidate recovery transaction."""

    transaction_hex: HexStr


@dataclass(frozen=True)
class OutPoint:
    """Transaction output reference."""
    txid: TxId
    vout: int

    @property
    def bytes(self) -> bytes:
        """Get outpoint as bytes (txid + vout)."""
        txid_bytes = bytes.fromhex(self.txid)[::-1]  # Little-endian
        vout_bytes = self.vout.to_bytes(4, "little")
        return txid_bytes + vout_bytes

    def __str__(self) -> str:
        """String representation as txid:vout."""
        return f"{self.txid}:{self.vout}"


@dataclass(frozen=True)
class TransactionInput:
    """Transaction input."""

    outpoint: OutPoint
    script_sig: bytes = b""
    sequence: int = 0xFFFFFFFF
    witness: Tuple[bytes, ...] = ()

    @property
    def is_final(self) -> bool:
        """Check if input is final."""
        return self.sequence == 0xFFFFFFFF


@dataclass(frozen=True)
class TransactionOutput:
    """Transaction output."""

    value: Satoshi
    script_pubkey: bytes


@dataclass(frozen=True)
class ParsedTransaction:
    """Locally deserialized transaction."""

    version: int
    inputs: List[TransactionInput]
    outputs: List[TransactionOutput]
    locktime: int
    has_witness: bool = False

    # Serialization without marker, flag and witness data (txid preimage)
    stripped: bytes = field(default=b"", repr=False)

    @property
    def total_output_value(self) -> Satoshi:
        """Calculate total output value."""
        return Satoshi(sum(out.value for out in self.outputs))


@dataclass(frozen=True)
class DecodedTransaction:
    """
    Explorer's parsed view of a transaction.

    Only used to cross-check identity; never an authoritative source
    for amounts.
    """

    txid: TxId
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)
