"""Abstract interfaces for HTTP executors.

This module defines the request/response containers and the abstract base
class that all HTTP executor implementations must follow, enabling pluggable
transport layers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from poloniex_api.types import Json


@dataclass(frozen=True)
class RequestConfig:
    """Everything an executor needs to send one request.

    Built fresh for every call and never mutated afterwards.
    """

    method: str
    base_url: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    query: str | None = None
    body: str | None = None
    timeout: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def url(self) -> str:
        """The absolute URL including the query string, if any."""
        url = f"{self.base_url.rstrip('/')}{self.path}"
        if self.query:
            url = f"{url}?{self.query}"
        return url


class HttpResponse:
    """Container for HTTP response data.

    Encapsulates the status code, headers and decoded body of an HTTP response.
    ``data`` is the decoded JSON value, or the raw text of an error response
    that was not JSON.
    """

    status: int
    data: Json | str | None
    headers: dict[str, str]

    __slots__ = ("status", "data", "headers")

    def __init__(
        self,
        *,
        status: int,
        data: Json | str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize an HTTP response object.

        Args:
            status: The HTTP status code of the response.
            data: The decoded response body.
            headers: Optional HTTP response headers as key-value pairs.

        """
        self.status = status
        self.data = data
        self.headers = dict(headers) if headers is not None else {}

    @property
    def ok(self) -> bool:
        """True for 2XX responses."""
        return 200 <= self.status < 300

    def __repr__(self) -> str:
        return f"HttpResponse(status={self.status}, data={self.data!r})"


class HttpExecutor(ABC):
    """Abstract base class for HTTP request executors.

    Executors perform network I/O only: they return an ``HttpResponse`` for any
    status code and raise ``TransportError`` subclasses for failures to
    exchange data. Interpreting the status is the caller's job.
    """

    @abstractmethod
    async def send(self, config: RequestConfig) -> HttpResponse:
        """Send a request described by ``config``.

        Args:
            config: Method, URL parts, headers, body and timeout.

        Returns:
            An HttpResponse object containing the status, headers and data.

        """
        ...

    async def close(self) -> None:
        """Release any pooled connections held by the executor."""
        return None
