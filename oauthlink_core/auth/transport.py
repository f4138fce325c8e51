"""
Shared HTTP transport for provider calls.

One pooled httpx client is reused by every provider. Each request is bounded by
the same fixed deadline and is never retried here.
"""

import asyncio
from typing import Any

import httpx

from oauthlink_core import get_logger
from oauthlink_core.config import DEFAULT_TIMEOUT_SECONDS

from .errors import TransportError, TransportTimeout

logger = get_logger(__name__)


class HttpTransport:
    """Pooled async HTTP client with a fixed per-request timeout."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize transport.

        Args:
            timeout: Deadline in seconds applied to every request.
            client: Pre-built client (tests inject one backed by httpx.MockTransport).
        """
        self.timeout = timeout
        self._http_client = client

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def request(
        self,
        method: str,
        url: str,
        *,
        provider: str,
        step: str,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        Send one request under the fixed deadline.

        Args:
            method: HTTP method.
            url: Absolute URL.
            provider: Provider identifier, attached to raised errors.
            step: Exchange step ("token" or "profile"), attached to raised errors.
            params: Query parameters.
            data: Form fields (sent as application/x-www-form-urlencoded).
            headers: Extra request headers.

        Returns:
            The response, whatever its status code.

        Raises:
            TransportTimeout: The deadline elapsed.
            TransportError: Connection-level failure.
        """
        client = self._get_http_client()
        try:
            async with asyncio.timeout(self.timeout):
                return await client.request(
                    method,
                    url,
                    params=params,
                    data=data,
                    headers=headers,
                    timeout=self.timeout,
                )
        except (httpx.TimeoutException, TimeoutError) as e:
            logger.warning("[Transport] {} {} request timed out after {}s", provider, step, self.timeout)
            raise TransportTimeout(self.timeout, provider=provider, step=step) from e
        except httpx.HTTPError as e:
            logger.warning("[Transport] {} {} request failed: {}", provider, step, type(e).__name__)
            raise TransportError(
                f"{step} request failed: {type(e).__name__}", provider=provider, step=step
            ) from e

    async def post_form(
        self,
        url: str,
        data: dict[str, Any],
        *,
        provider: str,
        step: str,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self.request(
            "POST", url, provider=provider, step=step, data=data, headers=headers
        )

    async def get(
        self,
        url: str,
        *,
        provider: str,
        step: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self.request(
            "GET", url, provider=provider, step=step, params=params, headers=headers
        )

    async def aclose(self) -> None:
        """Close the pooled client, if one was created."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
