"""Recovery transaction verification for the Bitcoin recovery client."""

import hmac
import logging
from typing import Optional

from ..exceptions import RecoveryIntegrityError, SerializationError
from ..formats.base import TransactionFormat
from ..formats.bitcoin import BitcoinTransactionFormat
from ..modules.explorer import ExplorerClient
from ..types.transaction import DecodedTransaction, TransactionInfo
from ..utils.encoding import hex_to_bytes
from ..utils.validation import validate_transaction_hex

__all__ = ["RecoveryVerifier"]

logger = logging.getLogger(__name__)


class RecoveryVerifier:
    """
    Identity check for candidate recovery transactions.

    The explorer's decode of the raw hex is only returned when the txid it
    reports matches the txid computed locally from the same bytes. Any
    disagreement, or bytes that do not parse locally, is a terminal
    RecoveryIntegrityError and no transaction detail is returned.
    """

    def __init__(
        self,
        explorer: ExplorerClient,
        tx_format: Optional[TransactionFormat] = None,
    ) -> None:
        """
        Initialize verifier.

        Args:
            explorer: Explorer client used for the remote decode
            tx_format: Transaction format for local txid computation
                (default: Bitcoin)
        """
        self._explorer = explorer
        self.tx_format = tx_format or BitcoinTransactionFormat()
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def verify(self, tx_info: TransactionInfo) -> DecodedTransaction:
        """
        Verify a candidate recovery transaction.

        Args:
            tx_info: Candidate transaction hex

        Returns:
            Explorer's decoded transaction, only if its txid matches the
            locally computed one

        Raises:
            ValidationError: If the hex is malformed
            RecoveryIntegrityError: If the txids differ or the transaction
                cannot be parsed locally
            ProviderError: If the explorer decode fails
        """
        transaction_hex = validate_transaction_hex(tx_info.transaction_hex)

        decoded = await self._explorer.decode_transaction(transaction_hex)
        reported_txid = decoded.txid.lower()

        try:
            computed_txid = self.tx_format.compute_txid(hex_to_bytes(transaction_hex))
        except SerializationError as e:
            self._logger.error(
                f"Recovery transaction does not parse as {self.tx_format.name}: {e} "
                f"(explorer reported txid {reported_txid})"
            )
            raise RecoveryIntegrityError(
                f"recovery transaction could not be parsed locally: {e}",
                reported_txid=reported_txid,
            ) from e

        if not hmac.compare_digest(reported_txid.encode(), computed_txid.lower().encode()):
            self._logger.error(f"Explorer reported txid: {reported_txid}")
            self._logger.error(f"Locally computed txid: {computed_txid}")
            raise RecoveryIntegrityError(
                reported_txid=reported_txid,
                computed_txid=computed_txid,
            )

        self._logger.info(f"Verified recovery transaction {computed_txid}")
        return decoded
