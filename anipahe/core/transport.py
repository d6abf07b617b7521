"""
HTTP Transport - Request layer used by the resolution pipeline.

The pipeline only depends on the ``Transport`` protocol: an awaitable
``get`` returning the raw response body. ``AiohttpTransport`` is the
default implementation backed by a shared aiohttp session.
"""

import asyncio
import logging
from typing import Any, Mapping, Optional, Protocol

import aiohttp

from anipahe.core.config import AnimePaheConfig
from anipahe.core.exceptions import NetworkError


logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything that can fetch a URL and return its body as text."""

    async def get(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> str:
        ...


class AiohttpTransport:
    """
    Transport backed by an aiohttp client session.

    The session is created lazily on first use and closed by ``close()``
    or when leaving the async context manager. HTTP error statuses raise
    ``NetworkError``; connection failures and timeouts are retried up to
    ``max_retries`` times before raising ``NetworkError``.
    """

    def __init__(self, config: Optional[AnimePaheConfig] = None):
        """
        Initialize the transport.

        Args:
            config: Configuration providing timeout and retry settings
        """
        self.config = config or AnimePaheConfig()
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session with proper configuration."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=10,
                limit_per_host=5,
                ttl_dns_cache=300,
                use_dns_cache=True
            )

            timeout = aiohttp.ClientTimeout(total=self.config.timeout)

            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
            )

        return self._session

    async def get(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Get text content from URL.

        Args:
            url: URL to request
            params: Query string parameters
            headers: Request headers

        Returns:
            Raw response body

        Raises:
            NetworkError: On HTTP error status or after exhausting retries
        """
        last_exception: Optional[BaseException] = None
        attempts = self.config.max_retries + 1

        for attempt in range(attempts):
            try:
                logger.debug(f"Making GET request to {url} params={params} (attempt {attempt + 1})")

                async with self.session.get(url, params=params, headers=headers) as response:
                    if response.status >= 400:
                        error_text = await response.text()
                        raise NetworkError(
                            f"HTTP {response.status} error for {url}",
                            url=url,
                            status_code=response.status,
                            details=error_text
                        )

                    return await response.text()

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                logger.warning(f"Request failed (attempt {attempt + 1}): {e}")

                if attempt < attempts - 1:
                    await asyncio.sleep(self.config.retry_delay * (attempt + 1))

        raise NetworkError(
            f"Request failed after {attempts} attempts: {last_exception}",
            url=url,
            details=str(last_exception)
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("HTTP session closed")
        self._session = None

    async def __aenter__(self) -> "AiohttpTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


__all__ = ["Transport", "AiohttpTransport"]
