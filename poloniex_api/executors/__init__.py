from poloniex_api.executors.aiohttp import AiohttpHttpExecutor
from poloniex_api.executors.defaults import DEFAULT_HTTP_EXECUTOR
from poloniex_api.executors.httpx import HttpxHttpExecutor
from poloniex_api.executors.interface import HttpExecutor, HttpResponse, RequestConfig
from poloniex_api.executors.requests import RequestsHttpExecutor

__all__ = [
    "HttpExecutor",
    "HttpResponse",
    "RequestConfig",
    "HttpxHttpExecutor",
    "AiohttpHttpExecutor",
    "RequestsHttpExecutor",
    "DEFAULT_HTTP_EXECUTOR",
]
