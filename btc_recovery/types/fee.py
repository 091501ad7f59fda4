"""Fee-related type definitions for the Bitcoin recovery client."""

from dataclasses import dataclass
from enum import Enum

__all__ = ["FeeSource", "FeeEstimate"]


class FeeSource(str, Enum):
    """Where a fee rate came from."""

    LIVE = "live"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class FeeEstimate:
    """Recommended fee rate in satoshis per byte."""

    satoshis_per_byte: int
    source: FeeSource

    def __post_init__(self) -> None:
        if self.satoshis_per_byte <= 0:
            raise ValueError(f"Fee rate must be positive: {self.satoshis_per_byte}")

    @property
    def is_fallback(self) -> bool:
        """Check if the rate is the fallback value."""
        return self.source == FeeSource.FALLBACK
