"""Block explorer module for the Bitcoin recovery client."""

import logging
from typing import Any, List

from ..api_types import AddressResponse, DecodeTxResponse, UnspentResponse
from ..providers.base import BaseProvider
from ..types.address import AddressInfo, UnspentOutput
from ..types.common import Address as AddressStr, Satoshi, TxId
from ..types.transaction import DecodedTransaction
from ..utils.validation import (
    require_int,
    require_list,
    require_mapping,
    require_str,
    validate_address,
    validate_transaction_hex,
)

__all__ = ["ExplorerClient"]

logger = logging.getLogger(__name__)


class ExplorerClient:
    """
    Typed adapter over the block explorer REST API.

    Fetches address summaries, unspent outputs and remote transaction
    decodes, validating every payload at the boundary. Nothing is cached:
    each call goes to the explorer.
    """

    def __init__(self, provider: BaseProvider) -> None:
        """
        Initialize explorer client.

        Args:
            provider: Provider bound to the explorer API root
        """
        self._provider = provider
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def explorer_url(self, path: str) -> str:
        """Full explorer URL for a path such as ``/address/{address}``."""
        return self._provider.url_for(path)

    async def get_address_info(self, address: str) -> AddressInfo:
        """
        Get address transaction count and balance.

        Args:
            address: Bitcoin address

        Returns:
            AddressInfo flattened from the explorer summary

        Raises:
            ValidationError: If address is malformed
            ResponseShapeError: If the summary lacks an integer
                ``address.total.transaction_count`` or ``balance_int``
        """
        address = validate_address(address)

        data: AddressResponse = await self._provider.request(f"/address/{address}")

        payload = require_mapping(data, "response")
        summary = require_mapping(payload.get("address"), "address")
        total = require_mapping(summary.get("total"), "address.total")

        tx_count = require_int(total, "transaction_count", "address.total", minimum=0)
        balance = require_int(total, "balance_int", "address.total")

        self._logger.debug(f"Address {address}: {tx_count} txs, balance {balance}")

        return AddressInfo(
            address=AddressStr(address),
            transaction_count=tx_count,
            total_balance=Satoshi(balance),
            raw=dict(payload),
        )

    async def get_unspent_outputs(self, address: str) -> List[UnspentOutput]:
        """
        Get unspent outputs for address.

        Explorer order is preserved; nothing is sorted, filtered or
        deduplicated. Each raw record gets an ``amount`` key copied from
        ``value_int``.

        Args:
            address: Bitcoin address

        Returns:
            Unspent outputs in explorer order

        Raises:
            ValidationError: If address is malformed
            ResponseShapeError: If the listing or any record is malformed
        """
        address = validate_address(address)

        data: UnspentResponse = await self._provider.request(
            f"/address/{address}/unspent"
        )

        payload = require_mapping(data, "response")
        records = require_list(payload, "unspent", "response")

        unspents = [self._normalize_unspent(record, i) for i, record in enumerate(records)]

        self._logger.debug(f"Address {address}: {len(unspents)} unspent outputs")
        return unspents

    async def decode_transaction(self, transaction_hex: str) -> DecodedTransaction:
        """
        Decode a raw transaction on the explorer.

        The result is for cross-checking only and must not be trusted
        for amounts.

        Args:
            transaction_hex: Raw transaction hex

        Returns:
            Explorer's decoded transaction with its reported txid

        Raises:
            ValidationError: If the hex is malformed
            ResponseShapeError: If the response lacks ``transaction.TxId``
        """
        transaction_hex = validate_transaction_hex(transaction_hex)

        data: DecodeTxResponse = await self._provider.post(
            "/decodetx", {"hex": transaction_hex}
        )

        payload = require_mapping(data, "response")
        detail = require_mapping(payload.get("transaction"), "transaction")
        txid = require_str(detail, "TxId", "transaction")

        return DecodedTransaction(txid=TxId(txid), raw=dict(detail))

    @staticmethod
    def _normalize_unspent(record: Any, index: int) -> UnspentOutput:
        """Validate one explorer unspent record and set its ``amount``."""
        name = f"unspent[{index}]"
        record = require_mapping(record, name)

        value = require_int(record, "value_int", name, minimum=0)
        txid = require_str(record, "txid", name)
        vout = require_int(record, "n", name, minimum=0)

        record["amount"] = value

        return UnspentOutput(
            txid=TxId(txid),
            vout=vout,
            amount=Satoshi(value),
            raw=record,
        )
