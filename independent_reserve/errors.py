"""Exception hierarchy for the Independent Reserve SDK.

This module defines the public exception hierarchy for the entire SDK. All exceptions
raised by this library inherit from BaseError.

Exception Hierarchy
-------------------
BaseError
├── ExchangeError - API server returned an error response
│   └── BadHttpStatus
│       ├── IndependentReserveError - 4xx response, carries the API's own message
│       └── ServerError - 5xx or otherwise unexpected status
├── TransportError - Network/protocol-level errors during transmission
└── ValidationError - Client-side input validation failures
"""


class BaseError(Exception):
    """Base exception for all Independent Reserve SDK errors.

    All exceptions raised by this library inherit from this class, allowing users
    to catch all SDK-related errors with a single except clause.

    This exception should not be raised directly. Use one of the specific subclasses
    instead (ExchangeError, TransportError, ValidationError).
    """

    pass


# ============================================================================
# EXCHANGE ERROR
# ============================================================================


class ExchangeError(BaseError):
    """Exception raised when the API server returns an error response.

    ExchangeError indicates that:
    - The network connection succeeded
    - The request was properly formatted and transmitted
    - A server processed the request and returned an error response
    """

    pass


class BadHttpStatus(ExchangeError):
    """Raised when response status from exchange is not 2XX."""

    status_code: int
    message: str

    def __init__(self, status_code: int, message: str):
        """Initialize a BadHttpStatus error.

        Args:
            status_code: The HTTP status code returned by the server.
            message: Description of the HTTP error.

        """
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class IndependentReserveError(BadHttpStatus):
    """Raised when the exchange rejects a request with a 4xx status.

    ``message`` is the exchange's own ``Message`` field when the response body
    carries one, otherwise a raw dump of the response.
    """

    pass


class ServerError(BadHttpStatus):
    """Raised for 5xx responses and any other non-2xx, non-4xx status."""

    pass


# ============================================================================
# TRANSPORT ERROR
# ============================================================================


class TransportError(BaseError):
    """Exception raised for errors in the process of transporting data to/from the API server.

    TransportError indicates that:
    - The error occurred in the process of transporting data
    - Valid application-level data was not successfully exchanged
    - The error could be transient and may succeed on retry

    Common causes include DNS resolution failures, TLS errors, connection
    timeouts, dropped connections and malformed response bodies.
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
        self.message = message
        super().__init__(message)


class SerializationError(TransportError):
    """Raised when request data cannot be serialized/encoded."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ============================================================================
# VALIDATION ERROR
# ============================================================================


class ValidationError(BaseError):
    """Exception raised for client-side input validation failures.

    ValidationError indicates that:
    - No network request was attempted
    - The error is due to invalid input from the caller
    - The error can be fixed by correcting the input parameters
    """

    pass


class UnsupportedMethodError(ValidationError):
    """Raised when a method name is in neither the public nor the private registry."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"The method [{method}] does not exist in the API")


class InvalidVisibilityError(ValidationError):
    """Raised when a call is dispatched with a visibility other than Public or Private."""

    def __init__(self, visibility: object):
        self.visibility = visibility
        super().__init__(f"Invalid visibility argument: [{visibility}]")


class UnknownCurrencyError(ValidationError):
    """Raised when a currency code is missing from a volume lookup table."""

    def __init__(self, table: str, currency: str):
        self.table = table
        self.currency = currency
        super().__init__(f"{table} not available for the given currency [{currency}]")


class MissingCredentialsError(ValidationError):
    """Raised when required authentication credentials are missing."""

    def __init__(self, credential_type: str = "API key"):
        """Initialize a MissingCredentialsError.

        Args:
            credential_type: The type of credential that is missing (default: "API key").

        """
        self.credential_type = credential_type
        super().__init__(f"{credential_type} is not set")
