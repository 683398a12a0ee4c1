"""Tests for the concrete HTTP executors."""

import httpx
import pytest
import requests

from poloniex_api.api import PoloniexApiClient
from poloniex_api.errors import (
    DeserializationError,
    HttpConnectionError,
    TransportError,
    TransportTimeoutError,
)
from poloniex_api.executors import (
    AiohttpHttpExecutor,
    HttpxHttpExecutor,
    RequestConfig,
    RequestsHttpExecutor,
)
from poloniex_api.executors.defaults import DEFAULT_HTTP_EXECUTOR
from poloniex_api.signing import sign_message


def httpx_executor(handler) -> HttpxHttpExecutor:
    return HttpxHttpExecutor(
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )


def test_default_executor_is_httpx():
    assert DEFAULT_HTTP_EXECUTOR is HttpxHttpExecutor


def test_request_config_url():
    config = RequestConfig(
        method="GET",
        base_url="https://poloniex.com/",
        path="/public",
        query="command=returnTicker",
    )
    assert config.url == "https://poloniex.com/public?command=returnTicker"
    assert RequestConfig("POST", "https://poloniex.com", "/tradingApi").url == (
        "https://poloniex.com/tradingApi"
    )


@pytest.mark.asyncio
async def test_httpx_public_request_on_the_wire():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"BTC_ETH": {"last": "0.0744"}})

    client = PoloniexApiClient(executor=httpx_executor(handler))
    response = await client.return_ticker()

    assert response.status == 200
    assert response.data == {"BTC_ETH": {"last": "0.0744"}}
    assert response.headers["content-type"] == "application/json"

    (request,) = seen
    assert request.method == "GET"
    assert str(request.url) == "https://poloniex.com/public?command=returnTicker"
    assert "Key" not in request.headers
    assert request.headers["User-Agent"].startswith("Poloniex API Client")


@pytest.mark.asyncio
async def test_httpx_private_request_on_the_wire():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"BTC": "0.5"})

    client = PoloniexApiClient(("PUB", "SECRET"), executor=httpx_executor(handler))
    await client.send_private({"command": "returnBalances", "nonce": 99})

    (request,) = seen
    assert request.method == "POST"
    assert str(request.url) == "https://poloniex.com/tradingApi"
    assert request.content == b"command=returnBalances&nonce=99"
    assert request.headers["Key"] == "PUB"
    assert request.headers["Sign"] == sign_message(
        {"command": "returnBalances", "nonce": 99}, "SECRET"
    )
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"


@pytest.mark.asyncio
async def test_httpx_error_status_is_returned_not_raised():
    executor = httpx_executor(lambda request: httpx.Response(502, text="Bad Gateway"))

    response = await executor.send(
        RequestConfig("GET", "https://poloniex.com", "/public", query="command=x")
    )

    assert response.status == 502
    assert response.data == "Bad Gateway"
    assert not response.ok


@pytest.mark.asyncio
async def test_httpx_invalid_json_success_raises():
    executor = httpx_executor(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(DeserializationError):
        await executor.send(RequestConfig("GET", "https://poloniex.com", "/public"))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exception, error_type",
    [
        (httpx.ConnectError("refused"), HttpConnectionError),
        (httpx.ReadError("reset"), HttpConnectionError),
        (httpx.ReadTimeout("slow"), TransportTimeoutError),
        (httpx.ConnectTimeout("slow"), TransportTimeoutError),
        (httpx.UnsupportedProtocol("ftp"), TransportError),
    ],
)
async def test_httpx_failures_map_to_transport_errors(exception, error_type):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exception

    executor = httpx_executor(handler)

    with pytest.raises(error_type) as exc_info:
        await executor.send(
            RequestConfig("GET", "https://poloniex.com", "/public", timeout=5.0)
        )

    assert exc_info.value.__cause__ is exception


@pytest.mark.asyncio
async def test_httpx_close_releases_client_it_created():
    executor = HttpxHttpExecutor()
    inner = executor.client

    await executor.close()

    assert inner.is_closed
    assert executor._client is None


@pytest.mark.asyncio
async def test_httpx_close_leaves_caller_client_open():
    executor = httpx_executor(lambda request: httpx.Response(200, json={}))
    inner = executor.client

    await executor.close()

    assert not inner.is_closed
    assert executor.client is inner
    await inner.aclose()


@pytest.mark.asyncio
async def test_client_closes_executor_it_created():
    client = PoloniexApiClient()
    executor = client._http_executor
    assert isinstance(executor, HttpxHttpExecutor)
    inner = executor.client

    async with client:
        pass

    assert inner.is_closed


class FakeRequestsSession:
    def __init__(self, response=None, exception=None):
        self.response = response
        self.exception = exception
        self.calls: list[tuple] = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.exception is not None:
            raise self.exception
        return self.response

    def close(self):
        self.closed = True


def requests_response(status: int, content: bytes) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = content
    response.headers["Content-Type"] = "application/json"
    return response


@pytest.mark.asyncio
async def test_requests_executor_sends_body_and_headers():
    session = FakeRequestsSession(response=requests_response(200, b'{"ok": 1}'))
    executor = RequestsHttpExecutor(session=session)  # type: ignore

    response = await executor.send(
        RequestConfig(
            "POST",
            "https://poloniex.com",
            "/tradingApi",
            headers={"Key": "PUB"},
            body="command=returnBalances&nonce=1",
            timeout=5.0,
        )
    )

    assert response.data == {"ok": 1}
    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert url == "https://poloniex.com/tradingApi"
    assert kwargs["data"] == b"command=returnBalances&nonce=1"
    assert kwargs["headers"] == {"Key": "PUB"}
    assert kwargs["timeout"] == 5.0

    await executor.close()
    assert not session.closed


@pytest.mark.asyncio
async def test_requests_executor_closes_session_it_created():
    executor = RequestsHttpExecutor()
    closed = []
    executor.session.close = lambda: closed.append(True)  # type: ignore

    await executor.close()

    assert closed == [True]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exception, error_type",
    [
        (requests.ConnectTimeout(), TransportTimeoutError),
        (requests.ReadTimeout(), TransportTimeoutError),
        (requests.ConnectionError(), HttpConnectionError),
        (requests.TooManyRedirects(), TransportError),
    ],
)
async def test_requests_failures_map_to_transport_errors(exception, error_type):
    executor = RequestsHttpExecutor(session=FakeRequestsSession(exception=exception))  # type: ignore

    with pytest.raises(error_type):
        await executor.send(RequestConfig("GET", "https://poloniex.com", "/public"))


@pytest.mark.asyncio
async def test_aiohttp_close_without_session_is_noop():
    executor = AiohttpHttpExecutor()
    await executor.close()
    assert executor._session is None
