"""Bitcoin recovery client modules."""

from ..modules.explorer import ExplorerClient
from ..modules.fee import FeeEstimator
from ..modules.verifier import RecoveryVerifier

__all__ = [
    "ExplorerClient",
    "FeeEstimator",
    "RecoveryVerifier",
]
