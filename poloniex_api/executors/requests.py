import asyncio
from typing import override

import requests

from poloniex_api.errors import (
    BaseError,
    HttpConnectionError,
    TransportError,
    TransportTimeoutError,
)
from poloniex_api.executors.interface import HttpExecutor, HttpResponse, RequestConfig
from poloniex_api.helpers import deserialize_response


class RequestsHttpExecutor(HttpExecutor):
    """HTTP executor implementation using a blocking requests Session.

    Each request runs in a worker thread through ``asyncio.to_thread``. A
    caller-supplied session is left open by ``close``.
    """

    def __init__(self, session: requests.Session | None = None):
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def _request(self, config: RequestConfig) -> requests.Response:
        return self.session.request(
            config.method,
            config.url,
            headers=dict(config.headers),
            data=config.body.encode() if config.body is not None else None,
            timeout=config.timeout,
        )

    @override
    async def send(self, config: RequestConfig) -> HttpResponse:
        url = config.url
        try:
            response = await asyncio.to_thread(self._request, config)
        except BaseError:
            raise
        except requests.Timeout as e:
            raise TransportTimeoutError(
                f"{config.method} request to {url} timed out",
                timeout_seconds=config.timeout,
            ) from e
        except requests.ConnectionError as e:
            raise HttpConnectionError(f"Failed to connect to {url}", url=url) from e
        except Exception as e:
            raise TransportError(f"{config.method} request to {url} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            data=deserialize_response(response.content, url, response.status_code),
            headers=dict(response.headers),
        )

    @override
    async def close(self) -> None:
        if self._owns_session:
            self.session.close()
