"""Common type definitions for the Bitcoin recovery client."""

from typing import NewType

__all__ = [
    "HexStr",
    "Satoshi",
    "TxId",
    "Address",
]

# Basic types
HexStr = NewType("HexStr", str)
"""Hexadecimal string representation."""

Satoshi = NewType("Satoshi", int)
"""Satoshi amount (smallest unit)."""

# Identifiers
TxId = NewType("TxId", str)
"""Transaction ID (hash, display byte order)."""

Address = NewType("Address", str)
"""Bitcoin address string."""
