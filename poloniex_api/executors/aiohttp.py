"""HTTP executor implementation using aiohttp.

This module provides asynchronous HTTP request handling using the aiohttp
library as an alternative to the default httpx executor.
"""

import asyncio
from typing import override

import aiohttp

from poloniex_api.errors import (
    BaseError,
    HttpConnectionError,
    TransportError,
    TransportTimeoutError,
)
from poloniex_api.executors.interface import HttpExecutor, HttpResponse, RequestConfig
from poloniex_api.helpers import deserialize_response


class AiohttpHttpExecutor(HttpExecutor):
    """HTTP executor implementation using aiohttp.

    Manages an aiohttp ClientSession, created lazily on the first request.
    """

    def __init__(self) -> None:
        """Initialize an AiohttpHttpExecutor."""
        self._session: aiohttp.ClientSession | None = None

    @override
    async def send(self, config: RequestConfig) -> HttpResponse:
        """Send a request with aiohttp.

        Args:
            config: The request to send.

        Returns:
            HttpResponse containing the status code, headers and decoded body.

        Raises:
            TransportTimeoutError: If the request times out.
            HttpConnectionError: If the connection fails or is dropped.
            TransportError: If any other transport-level error occurs.

        """
        url = config.url
        timeout = aiohttp.ClientTimeout(total=config.timeout)
        try:
            if self._session is None:
                self._session = aiohttp.ClientSession()

            async with self._session.request(
                config.method,
                url,
                headers=dict(config.headers),
                data=config.body.encode() if config.body is not None else None,
                timeout=timeout,
            ) as response:
                content = await response.read()
                status = response.status
                headers = {k: v for k, v in response.headers.items()}
        except BaseError:
            raise
        except asyncio.TimeoutError as e:
            raise TransportTimeoutError(
                f"{config.method} request to {url} timed out",
                timeout_seconds=config.timeout,
            ) from e
        except aiohttp.ClientConnectionError as e:
            raise HttpConnectionError(
                f"Failed to connect to {url}: {e}", url=url
            ) from e
        except Exception as e:
            raise TransportError(f"{config.method} request to {url} failed: {e}") from e
        return HttpResponse(
            status=status,
            data=deserialize_response(content, url, status),
            headers=headers,
        )

    @override
    async def close(self) -> None:
        """Close the executor and its underlying aiohttp session."""
        if self._session is not None:
            await self._session.close()
            self._session = None
