"""Bitcoin recovery client exceptions hierarchy."""

from typing import Any, Optional

__all__ = [
    "RecoveryError",
    "ProviderError",
    "NetworkError",
    "TimeoutError",
    "RateLimitError",
    "APIError",
    "ResponseShapeError",
    "ValidationError",
    "SerializationError",
    "RecoveryIntegrityError",
]


class RecoveryError(Exception):
    """Base exception for all recovery client errors."""

    retryable = False

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ProviderError(RecoveryError):
    """Raised when provider encounters an error."""
    pass


class NetworkError(ProviderError):
    """Raised when network communication fails."""

    retryable = True


class TimeoutError(NetworkError):
    """Raised when operation times out."""
    pass


class RateLimitError(NetworkError):
    """Raised when rate limit is exceeded."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class APIError(ProviderError):
    """Raised when API returns an error response."""
    pass


class ResponseShapeError(ProviderError):
    """Raised when an explorer payload does not have the expected shape."""
    pass


class ValidationError(RecoveryError):
    """Raised when validation fails."""
    pass


class SerializationError(RecoveryError):
    """Raised when serialization/deserialization fails."""
    pass


class RecoveryIntegrityError(RecoveryError):
    """
    Raised when a recovery transaction fails identity verification.

    Never retryable: the explorer-reported txid and the locally computed
    txid disagree, or the transaction could not be parsed locally.
    """

    def __init__(
        self,
        message: str = "inconsistent recovery transaction id",
        reported_txid: Optional[str] = None,
        computed_txid: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            data={"reported_txid": reported_txid, "computed_txid": computed_txid},
        )
        self.reported_txid = reported_txid
        self.computed_txid = computed_txid
