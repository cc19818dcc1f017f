import time
from typing import Any, Dict, Optional

import httpx
from fastapi import status
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from inventory_hub.adapters.interfaces.connector import APIConnector, HttpMethod, RequestConfig
from inventory_hub.core.exceptions import IntegrationException
from inventory_hub.core.logging import get_logger

logger = get_logger(__name__)

CODE_TIMEOUT = "integration_timeout"
CODE_CONNECTION = "integration_connection_error"
CODE_HTTP_STATUS = "integration_http_error"
CODE_BAD_PAYLOAD = "integration_invalid_payload"


class HttpxConnector(APIConnector):
    """
    Partner API connector built on ``httpx.AsyncClient``.

    Transport failures, timeouts and retryable status codes are retried with
    exponential backoff; every failure surfaces as ``IntegrationException``.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        config: Optional[RequestConfig] = None
    ):
        """
        Initialize the connector.

        Args:
            client: Optional pre-built client (tests inject a MockTransport one)
            config: Default request configuration
        """
        self.config = config or RequestConfig()
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout)
        return self._client

    async def request(
        self,
        method: HttpMethod,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        config: Optional[RequestConfig] = None
    ) -> Any:
        config = config or self.config

        retrying = AsyncRetrying(
            stop=stop_after_attempt(config.max_retries + 1),
            wait=wait_exponential(multiplier=config.backoff_factor, max=5),
            retry=retry_if_exception(lambda e: self._is_retryable(e, config)),
            reraise=True,
        )

        async for attempt in retrying:
            with attempt:
                attempt_number = attempt.retry_state.attempt_number
                if attempt_number > 1:
                    logger.info(f"Retrying {method.value} {url} (attempt {attempt_number})")
                return await self._send(method, url, params, config)

    async def _send(
        self,
        method: HttpMethod,
        url: str,
        params: Optional[Dict[str, Any]],
        config: RequestConfig
    ) -> Any:
        start_time = time.time()
        try:
            response = await self.client.request(
                method.value,
                url,
                params=params,
                timeout=config.timeout
            )
        except httpx.TimeoutException as e:
            raise IntegrationException(
                detail=f"Timeout calling {method.value} {url}",
                code=CODE_TIMEOUT,
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                context={"url": url},
                original_exception=e
            )
        except httpx.HTTPError as e:
            raise IntegrationException(
                detail=f"Connection error calling {method.value} {url}",
                code=CODE_CONNECTION,
                context={"url": url},
                original_exception=e
            )

        logger.debug(
            f"Partner API request completed in {time.time() - start_time:.2f}s",
            extra={"url": url, "method": method.value, "status_code": response.status_code}
        )

        if not response.is_success:
            raise IntegrationException(
                detail=f"{method.value} {url} returned HTTP {response.status_code}",
                code=CODE_HTTP_STATUS,
                context={"url": url, "remote_status_code": response.status_code}
            )

        try:
            return response.json()
        except ValueError as e:
            raise IntegrationException(
                detail=f"{method.value} {url} returned a non-JSON body",
                code=CODE_BAD_PAYLOAD,
                context={"url": url},
                original_exception=e
            )

    @staticmethod
    def _is_retryable(error: BaseException, config: RequestConfig) -> bool:
        if not isinstance(error, IntegrationException):
            return False
        if error.code == CODE_TIMEOUT:
            return config.retry_on_timeout
        if error.code == CODE_CONNECTION:
            return True
        if error.code == CODE_HTTP_STATUS:
            return error.context.get("remote_status_code") in config.retry_status_codes
        return False

    async def aclose(self) -> None:
        """Close the underlying client if this connector created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
