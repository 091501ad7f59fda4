"""Transaction format strategies."""

from ..formats.base import TransactionFormat
from ..formats.bitcoin import BitcoinTransactionFormat

__all__ = [
    "TransactionFormat",
    "BitcoinTransactionFormat",
]
