"""Environment configuration setup utilities.

This module provides functions for loading client settings from environment
variables, optionally populated from a .env file.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from poloniex_api.errors import ValidationError
from poloniex_api.helpers import DEFAULT_API_URL, DEFAULT_TIMEOUT
from poloniex_api.types import ApiCredentials

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientSettings:
    """Settings needed to construct a client."""

    api_url: str
    timeout: float
    credentials: ApiCredentials | None


def setup_environment(env_file: str | Path = ".env") -> ClientSettings:
    """Load client settings from the environment.

    Loads variables from ``env_file`` if it exists, otherwise relies on the
    process environment. Variables already set in the environment take
    precedence over the file.

    Variables:
        POLONIEX_API_URL: Base URL (default: https://poloniex.com)
        POLONIEX_TIMEOUT: Request timeout in seconds (default: 5)
        POLONIEX_API_KEY: Public API key
        POLONIEX_API_SECRET: Private API key

    Returns:
        ClientSettings with credentials set only when both keys are present

    Raises:
        ValidationError: If only one of the keys is set or the timeout is not a number

    """
    env_file_path = Path(env_file)
    if env_file_path.exists():
        log.info("Loading environment variables from %s", env_file_path)
        load_dotenv(env_file_path)
    else:
        log.info("%s not found. Using process environment variables.", env_file_path)

    api_url = os.environ.get("POLONIEX_API_URL", DEFAULT_API_URL)

    raw_timeout = os.environ.get("POLONIEX_TIMEOUT")
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError as e:
        raise ValidationError(f"Invalid POLONIEX_TIMEOUT: {e}") from e
    if timeout <= 0:
        raise ValidationError(f"Invalid POLONIEX_TIMEOUT: {raw_timeout}")

    public_key = os.environ.get("POLONIEX_API_KEY") or None
    private_key = os.environ.get("POLONIEX_API_SECRET") or None
    if (public_key is None) != (private_key is None):
        raise ValidationError(
            "POLONIEX_API_KEY and POLONIEX_API_SECRET must be set together"
        )

    credentials = None
    if public_key is not None and private_key is not None:
        credentials = ApiCredentials(public_key=public_key, private_key=private_key)
    else:
        log.info("No API keys configured, only public endpoints are available")

    return ClientSettings(api_url=api_url, timeout=timeout, credentials=credentials)
