"""HTTP executor implementation using httpx.

This module provides asynchronous HTTP request handling using the httpx
library. It is the default executor of the Poloniex API client.
"""

import logging
from typing import override

import httpx

from poloniex_api.errors import (
    BaseError,
    HttpConnectionError,
    TransportError,
    TransportTimeoutError,
)
from poloniex_api.executors.interface import HttpExecutor, HttpResponse, RequestConfig
from poloniex_api.helpers import deserialize_response

log = logging.getLogger(__name__)


class HttpxHttpExecutor(HttpExecutor):
    """HTTP executor implementation using httpx.

    Sends requests through a shared ``httpx.AsyncClient``, created lazily on
    the first request.
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        """Initialize the HTTPX HTTP executor.

        Args:
            client: Optional preconfigured AsyncClient (proxies, transports,
                connection limits). A new one is created when omitted. A
                caller-supplied client is left open by ``close``.

        """
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """The underlying AsyncClient."""
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    @override
    async def send(self, config: RequestConfig) -> HttpResponse:
        """Send a request with httpx.

        Args:
            config: The request to send.

        Returns:
            HttpResponse containing the status code, headers and decoded body.

        Raises:
            TransportTimeoutError: If the request times out.
            HttpConnectionError: If there is a connection or network error.
            TransportError: If any other transport-level error occurs.

        """
        url = config.url
        try:
            response = await self.client.request(
                config.method,
                url,
                headers=dict(config.headers),
                content=config.body.encode() if config.body is not None else None,
                timeout=config.timeout,
            )
        except BaseError:
            raise
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(
                f"{config.method} request to {url} timed out",
                timeout_seconds=config.timeout,
            ) from e
        except httpx.NetworkError as e:
            raise HttpConnectionError(
                f"Network error during {config.method} request to {url}", url=url
            ) from e
        except Exception as e:
            raise TransportError(f"{config.method} request to {url} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            data=deserialize_response(response.content, url, response.status_code),
            headers=dict(response.headers),
        )

    @override
    async def close(self) -> None:
        """Close the underlying AsyncClient if this executor created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
