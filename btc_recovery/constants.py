"""Constants for the Bitcoin recovery client."""

from enum import Enum
from typing import Optional, Union

__all__ = [
    "Network",
    "Environment",
    "EXPLORER_ENDPOINTS",
    "FEE_RECOMMENDATION_URL",
    "FALLBACK_FEE_RATE",
    "DEFAULT_TIMEOUT_MS",
    "USER_AGENT",
    "explorer_endpoint",
]


class Network(str, Enum):
    """Bitcoin networks."""

    MAINNET = "bitcoin"
    TESTNET = "testnet"


class Environment(str, Enum):
    """Deployment environments."""

    PROD = "prod"
    TEST = "test"
    DEV = "dev"
    LATEST = "latest"
    STAGING = "staging"
    LOCAL = "local"
    CUSTOM = "custom"


# Explorer API roots per network
_SMARTBIT_API = {
    Network.MAINNET: "https://api.smartbit.com.au/v1",
    Network.TESTNET: "https://testnet-api.smartbit.com.au/v1",
}

EXPLORER_ENDPOINTS: dict[Environment, str] = {
    Environment.PROD: _SMARTBIT_API[Network.MAINNET],
    Environment.TEST: _SMARTBIT_API[Network.TESTNET],
    Environment.DEV: _SMARTBIT_API[Network.TESTNET],
    Environment.LATEST: _SMARTBIT_API[Network.TESTNET],
    Environment.STAGING: _SMARTBIT_API[Network.MAINNET],
    Environment.LOCAL: _SMARTBIT_API[Network.TESTNET],
}

FEE_RECOMMENDATION_URL = "https://bitcoinfees.earn.com/api/v1/fees/recommended"

# sat/byte, used when the live feed is unusable
FALLBACK_FEE_RATE = 100

DEFAULT_TIMEOUT_MS = 305 * 1000

USER_AGENT = "btc-recovery/1.0.0"


def explorer_endpoint(
    environment: Union[Environment, str],
    custom_network: Optional[Union[Network, str]] = None,
) -> str:
    """
    Resolve the explorer API root for a deployment environment.

    Args:
        environment: Environment name or enum member
        custom_network: Network override, only consulted for ``custom``

    Returns:
        Explorer API root URL (without the ``/blockchain`` suffix)

    Raises:
        ValueError: If the environment or network is unknown
    """
    environment = Environment(environment)

    if environment == Environment.CUSTOM:
        network = Network(custom_network) if custom_network else Network.MAINNET
        return _SMARTBIT_API[network]

    return EXPLORER_ENDPOINTS[environment]
