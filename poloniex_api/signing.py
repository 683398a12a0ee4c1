"""Request serialization and signing.

Private requests are authenticated by an HMAC-SHA512 digest of the exact
urlencoded body, keyed with the account's API secret. The server recomputes
the digest over the body it receives, so the body sent must be byte-for-byte
the string that was signed.
"""

import hmac
from decimal import Decimal
from hashlib import sha512
from typing import Mapping
from urllib.parse import quote, urlencode

from poloniex_api.errors import SerializationError
from poloniex_api.types import ParamValue, full_precision_string


def encode_value(value: ParamValue) -> str:
    """Encode a single parameter value the way the exchange expects it.

    Booleans become ``1``/``0`` and decimals are written in plain notation.
    """
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (Decimal, float)):
        return full_precision_string(value)
    if isinstance(value, (int, str)):
        return str(value)
    raise SerializationError(f"Cannot encode parameter value {value!r}")


def serialize_params(params: Mapping[str, ParamValue | None]) -> str:
    """Serialize parameters to an ``application/x-www-form-urlencoded`` string.

    Keys keep their insertion order, ``None`` values are dropped and reserved
    characters are percent-encoded (a space becomes ``%20``).

    Args:
        params: Ordered parameter mapping, normally starting with ``command``.

    Returns:
        The canonical query string / request body.

    Raises:
        SerializationError: If a value has an unsupported type.

    """
    pairs = [
        (key, encode_value(value)) for key, value in params.items() if value is not None
    ]
    return urlencode(pairs, quote_via=quote)


def sign_message(params: Mapping[str, ParamValue | None], private_key: str) -> str:
    """Sign request parameters the way Poloniex verifies them.

    Exposed so callers can inspect or reproduce the signing scheme.

    Args:
        params: The exact parameters that will be sent, including ``command``
            and ``nonce``.
        private_key: The API secret.

    Returns:
        str: 128 lowercase hex characters (HMAC-SHA512).

    """
    message = serialize_params(params)
    return hmac.new(private_key.encode(), message.encode(), sha512).hexdigest()
