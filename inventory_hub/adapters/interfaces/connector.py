from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from enum import Enum
from urllib.parse import urlparse

from inventory_hub.core.logging import get_logger

logger = get_logger(__name__)


class HttpMethod(str, Enum):
    """Enum defining the HTTP methods the partner protocols use."""
    GET = "GET"
    POST = "POST"


class RequestConfig:
    """Timeout and retry policy for calls to partner warehouse APIs."""

    def __init__(
        self,
        max_retries: int = 2,
        timeout: float = 10.0,
        backoff_factor: float = 0.3,
        retry_status_codes: Optional[List[int]] = None,
        retry_on_timeout: bool = True
    ):
        """
        Args:
            max_retries: Extra attempts after the first call; 0 sends once
            timeout: Per-attempt timeout in seconds
            backoff_factor: Multiplier of the exponential wait between attempts
            retry_status_codes: Remote statuses worth another attempt
            retry_on_timeout: Whether a timed-out attempt is retried
        """
        self.max_retries = max_retries
        self.timeout = timeout
        self.backoff_factor = backoff_factor
        self.retry_status_codes = retry_status_codes or [429, 502, 503, 504]
        self.retry_on_timeout = retry_on_timeout


class APIConnector(ABC):
    """
    Abstract base interface for partner API connectors.

    Connectors own transport concerns (timeouts, retries, status handling) so
    that adapters only deal with payload shapes.
    """

    @abstractmethod
    async def request(
        self,
        method: HttpMethod,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        config: Optional[RequestConfig] = None
    ) -> Any:
        """
        Makes an HTTP request with retry logic and returns the decoded JSON body.

        Args:
            method: HTTP method to use
            url: URL to make the request to
            params: Optional query parameters
            config: Optional per-call request configuration

        Returns:
            Any: Decoded JSON response body

        Raises:
            IntegrationException: On non-2xx responses, network errors,
                timeouts or undecodable bodies once retries are exhausted
        """

    async def aclose(self) -> None:
        """Release transport resources."""

    def validate_url(self, url: str) -> bool:
        """True if ``url`` has both a scheme and a host."""
        try:
            parsed = urlparse(url)
        except ValueError as e:
            logger.warning(f"Unparseable partner URL {url!r}: {str(e)}")
            return False
        return bool(parsed.scheme and parsed.netloc)

    def build_url(self, base_url: str, path: str, *segments: str) -> str:
        """
        Builds a complete URL from components.

        Args:
            base_url: The base URL of the partner API
            path: The endpoint path
            *segments: Extra path segments appended with ``/``

        Returns:
            str: The complete URL
        """
        url = base_url.rstrip('/')
        url += f"/{path.strip('/')}" if path.strip('/') else ""
        for segment in segments:
            url += f"/{str(segment).strip('/')}"
        return url
