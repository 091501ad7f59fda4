"""API response type definitions for the block explorer and fee feed."""

from typing import Any, TypedDict

__all__ = [
    "AddressTotal",
    "AddressSummary",
    "AddressResponse",
    "UnspentRecord",
    "UnspentResponse",
    "DecodedTxDetail",
    "DecodeTxResponse",
    "FeeRecommendation",
]


class AddressTotal(TypedDict):
    """Lifetime totals for an address."""
    transaction_count: int
    balance_int: int


class AddressSummary(TypedDict):
    """Address summary block."""
    address: str
    total: AddressTotal


class AddressResponse(TypedDict):
    """GET /address/{address}"""
    success: bool
    address: AddressSummary


class UnspentRecord(TypedDict):
    """Single unspent output as listed by the explorer."""
    txid: str
    n: int
    value_int: int
    script_pub_key: dict[str, Any]
    confirmations: int


class UnspentResponse(TypedDict):
    """GET /address/{address}/unspent"""
    success: bool
    unspent: list[UnspentRecord]


class DecodedTxDetail(TypedDict):
    """Decoded transaction detail."""
    TxId: str
    Version: int
    LockTime: int
    Vin: list[dict[str, Any]]
    Vout: list[dict[str, Any]]


class DecodeTxResponse(TypedDict):
    """POST /decodetx"""
    success: bool
    transaction: DecodedTxDetail


class FeeRecommendation(TypedDict):
    """Fee recommendation feed."""
    fastestFee: int
    halfHourFee: int
    hourFee: int
