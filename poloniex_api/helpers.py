"""Helper utilities for the Poloniex API client.

This module contains constants, client identification, response decoding,
error-diagnostic extraction, nonce generation and display helpers.
"""

import logging
import threading
from dataclasses import asdict, is_dataclass
from functools import lru_cache
from time import time_ns
from typing import Any

import orjson
from prettyprinter import cpprint

from poloniex_api.errors import DeserializationError
from poloniex_api.types import Json, Nonce

log = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_API_URL: str = "https://poloniex.com"
DEFAULT_TIMEOUT: float = 5.0

PUBLIC_PATH: str = "/public"
PRIVATE_PATH: str = "/tradingApi"


# ============================================================================
# CLIENT IDENTIFICATION
# ============================================================================


@lru_cache(maxsize=1)
def get_user_agent() -> str:
    """Get the User-Agent string identifying this client."""
    import poloniex_api

    return f"Poloniex API Client (poloniex-api python package {poloniex_api.__version__})"


# ============================================================================
# DESERIALIZATION
# ============================================================================


def deserialize_response(response_body: bytes, url: str, status: int) -> Json | str:
    """Decode a response body.

    Successful responses must be JSON. Error responses are often HTML or plain
    text from a proxy, so for those the raw text is kept instead.

    Args:
        response_body: Response bytes to decode
        url: URL that was requested (for error messages)
        status: HTTP status of the response

    Returns:
        The decoded JSON value, or the body text for undecodable error responses

    Raises:
        DeserializationError: If a 2XX response body is not valid JSON

    """
    try:
        return orjson.loads(response_body)  # type: ignore
    except orjson.JSONDecodeError as e:
        if 200 <= status < 300:
            raise DeserializationError(
                f"Failed to parse JSON response from {url}: {e}"
            ) from e
        return response_body.decode("utf-8", errors="replace")


def extract_error_reason(response: Any) -> Any:
    """Pick the most specific diagnostic a failed response offers.

    Precedence: the ``error`` field of the response data, then the data
    itself, then the response object.
    """
    data = getattr(response, "data", None)
    if isinstance(data, dict) and data.get("error"):
        return data["error"]
    if data:
        return data
    return response


# ============================================================================
# NONCE GENERATION
# ============================================================================


class NonceGenerator:
    """Strictly increasing nonces seeded from wall-clock time.

    Values are microseconds since the epoch. When the clock stalls or steps
    backwards the previous value is incremented instead, so every call
    returns a value greater than all earlier ones.
    """

    def __init__(self) -> None:
        self._last: Nonce = 0
        self._lock = threading.Lock()

    def __call__(self) -> Nonce:
        with self._lock:
            candidate = time_ns() // 1_000
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate

    @property
    def last(self) -> Nonce:
        """The most recently issued nonce, 0 before the first call."""
        return self._last


# ============================================================================
# DISPLAY UTILITIES
# ============================================================================


def print_data(response: Any) -> None:
    """Pretty-print response data, handling dataclasses specially.

    ``HttpResponse`` objects print their decoded data; dataclass instances are
    converted to dictionaries first.

    Args:
        response: Data to print

    """
    data = getattr(response, "data", response)
    if is_dataclass(data) and not isinstance(data, type):
        cpprint(asdict(data))
    else:
        cpprint(data)
