"""Base provider interface for the Bitcoin recovery client."""

from abc import ABC, abstractmethod
from typing import Any, Optional, TypeVar, Generic, Union
import logging

__all__ = ["BaseProvider", "T"]

T = TypeVar("T")
logger = logging.getLogger(__name__)


class BaseProvider(ABC, Generic[T]):
    """
    Abstract base provider for explorer and fee-feed connections.

    This class defines the interface that all providers must implement.
    Providers issue exactly one outbound call per request and never retry;
    retry policy belongs to the caller.
    """

    def __init__(self, endpoint: str) -> None:
        """
        Initialize provider with its API root.

        Args:
            endpoint: Base URL that relative request paths are joined to
        """
        self.endpoint = endpoint
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    async def request(
        self,
        method: str,
        params: Optional[dict[str, Any]] = None,
        raw_response: bool = False,
        **kwargs: Any
    ) -> T:
        """
        Make a GET request to the provider.

        Args:
            method: Endpoint path, or an absolute URL
            params: Optional query parameters
            raw_response: Return the body text without parsing
            **kwargs: Additional provider-specific arguments

        Returns:
            Response data from the provider

        Raises:
            ProviderError: If the request fails
        """
        raise NotImplementedError

    @abstractmethod
    async def post(
        self,
        method: str,
        data: Union[str, bytes, dict[str, Any]],
        **kwargs: Any
    ) -> T:
        """
        Make a POST request to the provider.

        Args:
            method: Endpoint path, or an absolute URL
            data: Request body

        Returns:
            Response data from the provider

        Raises:
            ProviderError: If the request fails
        """
        raise NotImplementedError

    @abstractmethod
    async def connect(self) -> None:
        """
        Connect to the provider.

        Raises:
            ProviderError: If connection fails
        """
        raise NotImplementedError

    @abstractmethod
    async def disconnect(self) -> None:
        """
        Disconnect from the provider.
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """
        Check if provider is connected.

        Returns:
            True if connected, False otherwise
        """
        raise NotImplementedError

    def url_for(self, method: str) -> str:
        """Build the full URL for an endpoint path or pass an absolute URL through."""
        if method.startswith(("http://", "https://")):
            return method
        if not method.startswith("/"):
            method = f"/{method}"
        return f"{self.endpoint}{method}"

    async def __aenter__(self) -> "BaseProvider[T]":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.disconnect()

    def __repr__(self) -> str:
        """String representation of provider."""
        return f"{self.__class__.__name__}(endpoint={self.endpoint})"
