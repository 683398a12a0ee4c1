"""Exception hierarchy for the Poloniex API client.

This module defines the public exception hierarchy for the entire package. All
exceptions raised by this library inherit from BaseError.

Exception Hierarchy
-------------------
BaseError
├── ExchangeError - API server returned an error response
├── TransportError - Network/protocol-level errors during transmission
└── ValidationError - Client-side input validation failures
"""

from typing import Any


class BaseError(Exception):
    """Base exception for all Poloniex API client errors.

    All exceptions raised by this library inherit from this class, allowing users
    to catch all client-related errors with a single except clause.

    This exception should not be raised directly. Use one of the specific subclasses
    instead (ExchangeError, TransportError, ValidationError).
    """

    pass


# ============================================================================
# EXCHANGE ERROR
# ============================================================================


class ExchangeError(BaseError):
    """Exception raised when the API server returns an error response.

    This exception is raised when a request successfully reaches the API server
    and the server returns a valid response, but that response indicates an error
    condition (e.g., invalid nonce, invalid currency pair, rate limit exceeded).

    The ``message`` attribute holds the most specific diagnostic the response
    offered, and ``payload`` holds the object it was taken from: the server's
    ``error`` field, the decoded response data, or the response itself.
    """

    message: str
    payload: Any

    def __init__(self, message: str, payload: Any = None):
        """Initialize an ExchangeError.

        Args:
            message: The diagnostic extracted from the response.
            payload: The raw object the diagnostic was extracted from.

        """
        self.message = message
        self.payload = payload if payload is not None else message
        super().__init__(message)


class ErrorResponse(ExchangeError):
    """Raised when a 2XX response body carries an ``error`` field."""

    pass


class BadHttpStatus(ExchangeError):
    """Raised when response status from exchange is not 2XX."""

    status_code: int

    def __init__(self, status_code: int, message: str, payload: Any = None):
        """Initialize a BadHttpStatus error.

        Args:
            status_code: The HTTP status code returned by the server.
            message: Description of the HTTP error.
            payload: The raw object the description was extracted from.

        """
        self.status_code = status_code
        super().__init__(message, payload)


## 5xx status errors


class InternalServerError(BadHttpStatus):
    """Raised when the server returns a 500 Internal Server Error."""

    pass


class BadGateway(BadHttpStatus):
    """Raised when the server returns a 502 Bad Gateway error."""

    pass


class ServiceUnavailable(BadHttpStatus):
    """Raised when the server returns a 503 Service Unavailable error."""

    pass


class GatewayTimeout(BadHttpStatus):
    """Raised when the server returns a 504 Gateway Timeout error."""

    pass


## 4xx status errors


class BadRequest(BadHttpStatus):
    """Raised when the server returns a 400 Bad Request error."""

    pass


class Unauthorized(BadHttpStatus):
    """Raised when the server returns a 401 Unauthorized error."""

    pass


class Forbidden(BadHttpStatus):
    """Raised when the server returns a 403 Forbidden error."""

    pass


class NotFound(BadHttpStatus):
    """Raised when the server returns a 404 Not Found error."""

    pass


class UnprocessableEntity(BadHttpStatus):
    """Raised when the server returns a 422 error.

    Poloniex answers most rejected trading commands (bad nonce, insufficient
    balance, unknown order) with this status.
    """

    pass


class RateLimited(BadHttpStatus):
    """Raised when the server returns a 429 Rate Limited error."""

    pass


# ============================================================================
# TRANSPORT ERROR
# ============================================================================


class TransportError(BaseError):
    """Exception raised for errors in the process of transporting data to/from the API server.

    This exception is raised when there's a problem in the process of transporting
    data to or from the API server, either in the local networking stack before data
    is sent, during transmission over the network, or when receiving and processing
    data.

    TransportError indicates that:
    - The error occurred in the process of transporting data
    - Valid application-level data was not successfully exchanged

    Common causes include DNS resolution failures, TLS errors, connection
    timeouts, dropped connections and undecodable response bodies.
    """

    pass


class HttpConnectionError(TransportError):
    """Raised when a connection cannot be established or is lost."""

    def __init__(self, message: str, url: str | None = None):
        """Initialize an HttpConnectionError.

        Args:
            message: Description of the connection error.
            url: The URL that failed to connect, if available.

        """
        self.message = message
        self.url = url
        if url:
            super().__init__(f"{message} (url: {url})")
        else:
            super().__init__(message)


class TransportTimeoutError(TransportError):
    """Raised when a request or connection times out."""

    def __init__(self, message: str, timeout_seconds: float | None = None):
        """Initialize a TransportTimeoutError.

        Args:
            message: Description of the timeout error.
            timeout_seconds: The timeout duration in seconds, if available.

        """
        self.message = message
        self.timeout_seconds = timeout_seconds
        if timeout_seconds:
            super().__init__(f"{message} (timeout: {timeout_seconds}s)")
        else:
            super().__init__(message)


class DeserializationError(TransportError):
    """Raised when response data cannot be deserialized/decoded."""

    def __init__(self, message: str):
        """Initialize a DeserializationError.

        Args:
            message: Description of the deserialization error.

        """
        self.message = message
        super().__init__(message)


class SerializationError(TransportError):
    """Raised when request data cannot be serialized/encoded."""

    def __init__(self, message: str):
        """Initialize a SerializationError.

        Args:
            message: Description of the serialization error.

        """
        self.message = message
        super().__init__(message)


# ============================================================================
# VALIDATION ERROR
# ============================================================================


class ValidationError(BaseError):
    """Exception raised for client-side input validation failures.

    This exception is raised when input parameters fail validation checks before
    any request is sent to the API server.

    ValidationError indicates that:
    - No network request was attempted
    - The error is due to invalid input from the caller
    - The error can be fixed by correcting the input parameters
    """

    pass


class UnauthenticatedError(ValidationError):
    """Raised when a private command is attempted without API keys."""

    def __init__(
        self, message: str = "api keys are required to access private endpoints"
    ):
        """Initialize an UnauthenticatedError.

        Args:
            message: Description of the missing credentials.

        """
        self.message = message
        super().__init__(message)
