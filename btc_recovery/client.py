"""Main Bitcoin recovery client."""

import logging
from typing import Any, Optional

from .config import Config
from .constants import Environment, FEE_RECOMMENDATION_URL
from .formats import BitcoinTransactionFormat, TransactionFormat
from .modules import ExplorerClient, FeeEstimator, RecoveryVerifier
from .providers import BaseProvider, HTTPProvider
from .types.address import AddressInfo, UnspentOutput
from .types.fee import FeeEstimate
from .types.transaction import DecodedTransaction, TransactionInfo

__all__ = ["RecoveryClient"]

logger = logging.getLogger(__name__)


class RecoveryClient:
    """
    Main client for Bitcoin fund recovery.

    Bundles the explorer client, fee estimator and recovery verifier over
    a single provider and manages its connection. All calls are made one
    at a time and nothing is cached between them.
    """

    chain = "btc"
    family = "btc"
    full_name = "Bitcoin"

    def __init__(
        self,
        provider: Optional[BaseProvider] = None,
        tx_format: Optional[TransactionFormat] = None,
        fee_source_url: str = FEE_RECOMMENDATION_URL,
    ) -> None:
        """
        Initialize recovery client.

        Args:
            provider: Provider instance (default: HTTPProvider for ``test``)
            tx_format: Transaction format used by the verifier
            fee_source_url: Default fee recommendation endpoint
        """
        self._provider = provider or HTTPProvider()
        self._tx_format = tx_format or BitcoinTransactionFormat()

        self._explorer = ExplorerClient(self._provider)
        self._fees = FeeEstimator(self._provider, source_url=fee_source_url)
        self._verifier = RecoveryVerifier(self._explorer, self._tx_format)

        logger.info(
            f"Initialized recovery client for {self.full_name} "
            f"with {self._provider.__class__.__name__} at {self._provider.endpoint}"
        )

    # Coin capabilities
    def supports_block_target(self) -> bool:
        return True

    def supports_p2sh_p2wsh(self) -> bool:
        return True

    def supports_p2wsh(self) -> bool:
        return True

    # Module properties
    @property
    def explorer(self) -> ExplorerClient:
        """Get explorer client."""
        return self._explorer

    @property
    def fees(self) -> FeeEstimator:
        """Get fee estimator."""
        return self._fees

    @property
    def verifier(self) -> RecoveryVerifier:
        """Get recovery verifier."""
        return self._verifier

    @property
    def provider(self) -> BaseProvider:
        """Get current provider."""
        return self._provider

    # Shortcuts
    async def get_recommended_fee(self, source_url: Optional[str] = None) -> FeeEstimate:
        return await self._fees.get_recommended_fee(source_url)

    async def get_recovery_fee_per_byte(self) -> int:
        return await self._fees.get_recovery_fee_per_byte()

    async def get_address_info(self, address: str) -> AddressInfo:
        return await self._explorer.get_address_info(address)

    async def get_unspent_outputs(self, address: str) -> list[UnspentOutput]:
        return await self._explorer.get_unspent_outputs(address)

    async def verify_recovery_transaction(self, tx_info: TransactionInfo) -> DecodedTransaction:
        """
        Verify a candidate recovery transaction.

        See RecoveryVerifier.verify.
        """
        return await self._verifier.verify(tx_info)

    async def connect(self) -> None:
        """Connect to provider."""
        await self._provider.connect()

    async def disconnect(self) -> None:
        """Disconnect from provider."""
        await self._provider.disconnect()

    @property
    def is_connected(self) -> bool:
        """Check if client is connected."""
        return self._provider.is_connected

    # Context manager support
    async def __aenter__(self) -> "RecoveryClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.disconnect()

    # Factory methods
    @classmethod
    def from_config(cls, config: Config, **kwargs: Any) -> "RecoveryClient":
        """
        Create client from a resolved service config.

        The config's environment selects the explorer, its timeout bounds
        every request and ``disable_proxy`` stops proxy settings being
        read from the process environment.

        Args:
            config: Resolved configuration
            **kwargs: Additional HTTPProvider arguments

        Returns:
            Configured recovery client
        """
        environment = Environment(config.env)
        provider = HTTPProvider(
            environment=environment,
            custom_network=config.custom_bitcoin_network,
            timeout_ms=config.timeout,
            trust_env=not config.disable_proxy,
            **kwargs,
        )
        return cls(provider=provider)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<RecoveryClient "
            f"chain={self.chain} "
            f"provider={self.provider.__class__.__name__} "
            f"connected={self.provider.is_connected}>"
        )
