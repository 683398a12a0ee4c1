"""Default executor configuration.

This module defines the default HTTP executor implementation used by the
Poloniex API client when no custom executor is provided.
"""

from typing import Type

from poloniex_api.executors.httpx import HttpxHttpExecutor
from poloniex_api.executors.interface import HttpExecutor

DEFAULT_HTTP_EXECUTOR: Type[HttpExecutor] = HttpxHttpExecutor
