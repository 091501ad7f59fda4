"""
Bitcoin Recovery Client

Explorer, fee and verification helpers for recovering funds from a
Bitcoin wallet when the normal signing infrastructure is unavailable.
"""

from typing import Any, Optional

from .client import RecoveryClient
from .config import Config, load_config, resolve
from .constants import Environment, Network
from .exceptions import (
    RecoveryError,
    ProviderError,
    NetworkError,
    APIError,
    ResponseShapeError,
    ValidationError,
    SerializationError,
    RecoveryIntegrityError,
)
from .formats import BitcoinTransactionFormat, TransactionFormat
from .modules import ExplorerClient, FeeEstimator, RecoveryVerifier
from .providers import HTTPProvider
from .types import (
    AddressInfo,
    DecodedTransaction,
    FeeEstimate,
    FeeSource,
    TransactionInfo,
    UnspentOutput,
)

__version__ = "1.0.0"

__all__ = [
    # Main client
    "RecoveryClient",
    "connect",

    # Modules
    "ExplorerClient",
    "FeeEstimator",
    "RecoveryVerifier",

    # Configuration
    "Config",
    "load_config",
    "resolve",
    "Environment",
    "Network",

    # Providers and formats
    "HTTPProvider",
    "TransactionFormat",
    "BitcoinTransactionFormat",

    # Exceptions
    "RecoveryError",
    "ProviderError",
    "NetworkError",
    "APIError",
    "ResponseShapeError",
    "ValidationError",
    "SerializationError",
    "RecoveryIntegrityError",

    # Types
    "AddressInfo",
    "DecodedTransaction",
    "FeeEstimate",
    "FeeSource",
    "TransactionInfo",
    "UnspentOutput",
]


def connect(
    config: Optional[Config] = None,
    **kwargs: Any
) -> RecoveryClient:
    """
    Create a recovery client.

    Args:
        config: Resolved configuration (default: arguments-free
            ``load_config()``, i.e. environment then defaults)
        **kwargs: Additional provider arguments

    Returns:
        Recovery client, not yet connected

    Example:
        >>> client = btc_recovery.connect()
        >>> async with client:
        ...     fee = await client.get_recommended_fee()
    """
    return RecoveryClient.from_config(config or load_config(), **kwargs)
