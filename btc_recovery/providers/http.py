"""HTTP provider implementation for the block explorer and fee feed."""

import asyncio
import json
import logging
from typing import Any, Optional, Tuple, Union

import aiohttp
from aiohttp import ClientTimeout, ClientSession

from ..constants import (
    DEFAULT_TIMEOUT_MS,
    USER_AGENT,
    Environment,
    Network,
    explorer_endpoint,
)
from ..exceptions import (
    NetworkError,
    ProviderError,
    APIError,
    RateLimitError,
    ResponseShapeError,
    TimeoutError,
)
from ..providers.base import BaseProvider

__all__ = ["HTTPProvider"]

logger = logging.getLogger(__name__)


class HTTPProvider(BaseProvider[Any]):
    """
    HTTP provider for the explorer REST API.

    Handles all HTTP communication with the explorer. Every request is
    attempted exactly once; transport failures surface as NetworkError or
    TimeoutError for the caller to act on.
    """

    def __init__(
        self,
        environment: Union[Environment, str] = Environment.TEST,
        endpoint: Optional[str] = None,
        custom_network: Optional[Union[Network, str]] = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        session: Optional[ClientSession] = None,
        proxy: Optional[str] = None,
        trust_env: bool = True,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        """
        Initialize HTTP provider.

        Args:
            environment: Deployment environment selecting the explorer
            endpoint: Custom API root (overrides the environment table)
            custom_network: Network for the ``custom`` environment
            timeout_ms: Total timeout for each request in milliseconds
            session: Existing aiohttp session to use
            proxy: Proxy URL for requests
            trust_env: Honour proxy settings from the environment
            headers: Additional headers for requests
        """
        super().__init__(
            self._normalize_endpoint(
                endpoint or explorer_endpoint(environment, custom_network)
            )
        )

        self.environment = Environment(environment)
        self.timeout = ClientTimeout(total=timeout_ms / 1000)
        self.proxy = proxy
        self.trust_env = trust_env

        # Setup headers
        self.headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
            **(headers or {}),
        }

        # Session management
        self._session = session
        self._owns_session = session is None
        self._connected = False

    def _normalize_endpoint(self, endpoint: str) -> str:
        """Normalize API endpoint URL."""
        endpoint = endpoint.rstrip("/")
        if not endpoint.endswith("/blockchain"):
            endpoint += "/blockchain"
        return endpoint

    async def connect(self) -> None:
        """Initialize HTTP session."""
        if self._session is not None and self._session.closed:
            if not self._owns_session:
                raise ProviderError("Supplied aiohttp session is closed")
            self._session = None

        if self._session is None:
            connector = aiohttp.TCPConnector(
                ssl=True,
                limit=100,
                limit_per_host=10,
            )
            self._session = ClientSession(
                connector=connector,
                timeout=self.timeout,
                headers=self.headers,
                trust_env=self.trust_env,
            )

        self._connected = True
        self._logger.info(f"Connected to {self.endpoint}")

    async def disconnect(self) -> None:
        """Close HTTP session."""
        if self._session and self._owns_session:
            await self._session.close()
            self._session = None

        self._connected = False
        self._logger.info("Disconnected from provider")

    @property
    def is_connected(self) -> bool:
        """Check if provider is connected."""
        return (
            self._connected
            and self._session is not None
            and not self._session.closed
        )

    async def request(
        self,
        method: str,
        params: Optional[dict[str, Any]] = None,
        raw_response: bool = False,
        **kwargs: Any
    ) -> Any:
        """
        Make GET request to API.

        Args:
            method: API endpoint path, or an absolute URL
            params: Query parameters
            raw_response: Return raw response without parsing
            **kwargs: Additional request arguments

        Returns:
            Parsed JSON response or raw text

        Raises:
            NetworkError: If the connection fails or the server errors
            TimeoutError: If request times out
            RateLimitError: If rate limited
            APIError: If the API rejects the request
            ResponseShapeError: If a JSON response cannot be parsed
            ProviderError: If a supplied session has been closed
        """
        if not self.is_connected:
            await self.connect()

        url = self.url_for(method)
        content_type, text = await self._make_request(
            "GET", url, params=params, **kwargs
        )

        if raw_response:
            return text

        return self._parse_response(content_type, text)

    async def post(
        self,
        method: str,
        data: Union[str, bytes, dict[str, Any]],
        **kwargs: Any
    ) -> Any:
        """
        Make POST request to API.

        Dict bodies are sent as JSON.

        Args:
            method: API endpoint path, or an absolute URL
            data: Request body data
            **kwargs: Additional request arguments

        Returns:
            Parsed JSON response or raw text

        Raises:
            ProviderError: If request fails
        """
        if not self.is_connected:
            await self.connect()

        url = self.url_for(method)

        # Prepare data based on content type
        if isinstance(data, dict):
            data = json.dumps(data)
            headers = {"Content-Type": "application/json"}
        else:
            headers = {"Content-Type": "text/plain"}

        content_type, text = await self._make_request(
            "POST", url, data=data, headers=headers, **kwargs
        )
        return self._parse_response(content_type, text)

    async def _make_request(
        self,
        http_method: str,
        url: str,
        **kwargs: Any
    ) -> Tuple[str, str]:
        """Make actual HTTP request, returning (content type, body text)."""
        kwargs.setdefault("timeout", self.timeout)

        try:
            self._logger.debug(f"Request: {http_method} {url}")

            async with self._session.request(
                http_method,
                url,
                proxy=self.proxy,
                **kwargs
            ) as response:
                self._logger.debug(f"Response: {response.status}")

                if response.status == 429:
                    retry_after = response.headers.get("Retry-After")
                    raise RateLimitError(
                        "Rate limit exceeded",
                        retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None
                    )

                if response.status >= 500:
                    text = await response.text()
                    raise NetworkError(f"Server error {response.status}: {text}", code=response.status)

                if response.status >= 400:
                    text = await response.text()
                    raise APIError(f"Client error {response.status}: {text}", code=response.status)

                text = await response.text()
                return response.headers.get("Content-Type", ""), text

        except asyncio.TimeoutError as e:
            raise TimeoutError(f"Request timed out: {http_method} {url}") from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"Network error: {e}") from e

    def _parse_response(self, content_type: str, text: str) -> Any:
        """Parse response based on content type."""
        if "application/json" in content_type:
            try:
                return json.loads(text)
            except json.JSONDecodeError as e:
                raise ResponseShapeError(f"Invalid JSON response: {e}") from e

        # Plain text responses
        return text.strip()
