"""Type definitions for the Bitcoin recovery client."""

# Common types
from ..types.common import (
    HexStr,
    Satoshi,
    TxId,
    Address as AddressStr,
)

# Transaction types
from ..types.transaction import (
    TransactionInfo,
    OutPoint,
    TransactionInput,
    TransactionOutput,
    ParsedTransaction,
    DecodedTransaction,
)

# Address types
from ..types.address import (
    AddressInfo,
    UnspentOutput,
)

# Fee types
from ..types.fee import (
    FeeSource,
    FeeEstimate,
)

__all__ = [
    # Common
    "HexStr",
    "Satoshi",
    "TxId",
    "AddressStr",

    # Transaction
    "TransactionInfo",
    "OutPoint",
    "TransactionInput",
    "TransactionOutput",
    "ParsedTransaction",
    "DecodedTransaction",

    # Address
    "AddressInfo",
    "UnspentOutput",

    # Fee
    "FeeSource",
    "FeeEstimate",
]
