"""Fee estimation module for the Bitcoin recovery client."""

import json
import logging
from typing import Any, Optional

from ..api_types import FeeRecommendation
from ..constants import FALLBACK_FEE_RATE, FEE_RECOMMENDATION_URL
from ..providers.base import BaseProvider
from ..types.fee import FeeEstimate, FeeSource
from ..utils.validation import is_strict_int

__all__ = ["FeeEstimator", "parse_hour_fee"]

logger = logging.getLogger(__name__)

HOUR_FEE_FIELD = "hourFee"


def parse_hour_fee(payload: Any) -> Optional[int]:
    """
    Extract a usable hourly fee rate from a recommendation payload.

    Args:
        payload: Decoded JSON body

    Returns:
        Positive integer rate in sat/byte, or None if the payload does
        not carry one
    """
    if not isinstance(payload, dict):
        return None

    value = payload.get(HOUR_FEE_FIELD)

    # JSON has one number type: 37.0 is an integer rate
    if isinstance(value, float) and value.is_integer():
        value = int(value)

    if not is_strict_int(value) or value <= 0:
        return None

    return value


class FeeEstimator:
    """
    Fee rate recommendations for recovery transactions.

    A malformed or unusable recommendation degrades to a fixed fallback
    rate. Transport failures are not absorbed and propagate to the caller.
    """

    def __init__(
        self,
        provider: BaseProvider,
        source_url: str = FEE_RECOMMENDATION_URL,
        fallback_rate: int = FALLBACK_FEE_RATE,
    ) -> None:
        """
        Initialize fee estimator.

        Args:
            provider: Provider used for the outbound request
            source_url: Default recommendation endpoint
            fallback_rate: Rate returned when the feed is unusable
        """
        if fallback_rate <= 0:
            raise ValueError(f"Fallback fee rate must be positive: {fallback_rate}")

        self._provider = provider
        self.source_url = source_url
        self.fallback_rate = fallback_rate
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def get_recommended_fee(self, source_url: Optional[str] = None) -> FeeEstimate:
        """
        Get the recommended fee rate.

        Args:
            source_url: Recommendation endpoint (defaults to the configured one)

        Returns:
            Live hourly rate, or the fallback rate if the payload is unusable

        Raises:
            NetworkError: If the feed cannot be reached
            TimeoutError: If the request times out
            APIError: If the feed answers with an HTTP error status
        """
        url = source_url or self.source_url

        text = await self._provider.request(url, raw_response=True)

        payload: Optional[FeeRecommendation]
        try:
            payload = json.loads(text)
        except (TypeError, ValueError):
            payload = None

        rate = parse_hour_fee(payload)
        if rate is None:
            self._logger.warning(
                f"No usable {HOUR_FEE_FIELD} from {url}, "
                f"falling back to {self.fallback_rate} sat/byte"
            )
            return FeeEstimate(self.fallback_rate, FeeSource.FALLBACK)

        self._logger.debug(f"Recommended fee from {url}: {rate} sat/byte")
        return FeeEstimate(rate, FeeSource.LIVE)

    async def get_recovery_fee_per_byte(self) -> int:
        """
        Get the recommended fee rate as a plain number.

        Returns:
            Fee rate in sat/byte
        """
        estimate = await self.get_recommended_fee()
        return estimate.satoshis_per_byte
