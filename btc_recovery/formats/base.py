"""Base transaction format interface."""

from abc import ABC, abstractmethod

from ..types.common import TxId
from ..types.transaction import ParsedTransaction

__all__ = ["TransactionFormat"]


class TransactionFormat(ABC):
    """
    Abstract binary transaction format.

    A format knows how to deserialize a coin's raw transaction bytes and
    how that coin derives the canonical transaction identifier from them.
    The recovery verifier receives one explicitly instead of relying on
    ambient coin state.
    """

    name: str = "abstract"

    @abstractmethod
    def deserialize(self, raw: bytes) -> ParsedTransaction:
        """
        Deserialize raw transaction bytes.

        Args:
            raw: Serialized transaction

        Returns:
            Parsed transaction

        Raises:
            SerializationError: If the bytes are not a well-formed transaction
        """
        raise NotImplementedError

    @abstractmethod
    def compute_txid(self, raw: bytes) -> TxId:
        """
        Compute the canonical transaction identifier.

        Args:
            raw: Serialized transaction

        Returns:
            Transaction ID as lowercase hex in display order

        Raises:
            SerializationError: If the bytes are not a well-formed transaction
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        """String representation of format."""
        return f"{self.__class__.__name__}(name={self.name})"
