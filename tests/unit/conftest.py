import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Generator

import orjson
import pytest

from poloniex_api.api import PoloniexApiClient
from poloniex_api.types import ApiCredentials
from tests.mock_executors import MockHttpExecutor, MockOutputNotExhausted

DATA_DIR = Path(__file__).parent.joinpath("data")

PUBLIC_KEY = "PUB"
PRIVATE_KEY = "SECRET"

log = logging.getLogger(__name__)


@pytest.fixture
def mock_http_client() -> Generator[
    tuple[PoloniexApiClient, MockHttpExecutor], None, None
]:
    mock_http = MockHttpExecutor()
    client = PoloniexApiClient(
        ApiCredentials(public_key=PUBLIC_KEY, private_key=PRIVATE_KEY),
        # this doesn't matter as it will not be used with the mock in place
        api_url="https://poloniex.gaierror.xyz",
        # replace real network requests with our mock
        executor=mock_http,
    )

    yield (client, mock_http)

    if len(mock_http.staged_outputs) > 0:
        raise MockOutputNotExhausted(mock_http.staged_outputs)


@pytest.fixture
def mock_public_client() -> Generator[
    tuple[PoloniexApiClient, MockHttpExecutor], None, None
]:
    mock_http = MockHttpExecutor()
    client = PoloniexApiClient(
        api_url="https://poloniex.gaierror.xyz", executor=mock_http
    )

    yield (client, mock_http)

    if len(mock_http.staged_outputs) > 0:
        raise MockOutputNotExhausted(mock_http.staged_outputs)


@lru_cache(maxsize=1)
def data_files() -> list[Path]:
    return list(DATA_DIR.iterdir())


def json_data_files(name: str) -> list[Path]:
    return list(
        sorted(
            path
            for path in data_files()
            if path.match(f"{name}.*json", case_sensitive=True)
        )
    )


def load_json(name: str, case: int | None = None) -> Any:
    case_part = f"{case}." if case else ""
    path = DATA_DIR / f"{name}.{case_part}json"
    with open(path, "rb") as fh:
        return orjson.loads(fh.read())


def load_json_all_cases(name: str) -> list[tuple[Any, Path]]:
    """Load all json payloads for a given base name (case0, case1, ...)."""
    results = []
    for path in json_data_files(name):
        with open(path, "rb") as fh:
            payload = orjson.loads(fh.read())
            results.append((payload, path))
    return results
