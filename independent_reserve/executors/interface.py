"""Abstract interface for HTTP executors.

This module defines the abstract base class that all HTTP executor
implementations must follow, enabling pluggable transport layers.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping


class HttpResponse:
    """Container for HTTP response data.

    Encapsulates the status code, raw body, headers and reason phrase from an
    HTTP response. Decoding the body is left to the caller so that error
    responses which are not JSON can still be reported verbatim.
    """

    status: int
    content: bytes
    headers: dict[str, str] | None
    reason: str | None

    __slots__ = ("status", "content", "headers", "reason")

    def __init__(
        self,
        *,
        status: int,
        content: bytes = b"",
        headers: dict[str, str] | None = None,
        reason: str | None = None,
    ) -> None:
        """Initialize an HTTP response object.

        Args:
            status: The HTTP status code of the response.
            content: The raw response body.
            headers: Optional HTTP response headers as key-value pairs.
            reason: Optional reason phrase of the status line.

        """
        self.status = status
        self.content = content
        self.headers = headers
        self.reason = reason

    def __repr__(self) -> str:
        return f"HttpResponse(status={self.status}, content={self.content[:200]!r})"


class HttpExecutor(ABC):
    """Abstract base class for HTTP request executors.

    An executor owns the connection to ``api_url`` and turns a verb, a path
    and either query parameters or a JSON body into an ``HttpResponse``.
    Network failures are raised as ``TransportError`` subclasses; non-2xx
    statuses are returned, not raised.
    """

    api_url: str

    @abstractmethod
    def __init__(self, api_url: str):
        """Initialize the HTTP executor.

        Args:
            api_url: The base API URL for making requests.

        """
        ...

    @abstractmethod
    def send(
        self,
        method: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        json: Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        """Send an HTTP request.

        Args:
            method: The HTTP method ('GET' or 'POST').
            path: The URL path for the request, appended to api_url.
            query: Optional query string parameters, in order.
            json: Optional JSON body, serialized with its key order preserved.

        Returns:
            An HttpResponse object containing the status, body, and headers.

        """
        ...

    def close(self) -> None:
        """Release the executor's connections. Nothing to release by default."""
