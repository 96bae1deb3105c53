"""HTTP executor implementation using httpx.

This module provides HTTP request handling using the httpx library and is
the default transport of the Independent Reserve SDK.
"""

from typing import Any, Mapping, override

import httpx

from independent_reserve.errors import (
    BaseError,
    HttpConnectionError,
    TransportError,
    TransportTimeoutError,
)
from independent_reserve.executors.interface import HttpExecutor, HttpResponse
from independent_reserve.helpers import (
    CLIENT_HEADER,
    DEFAULT_API_URL,
    get_client_identifier,
    serialize_request,
)

DEFAULT_TIMEOUT_SECONDS: float = 30.0


class HttpxHttpExecutor(HttpExecutor):
    """HTTP executor implementation using httpx.

    Provides synchronous HTTP request execution over a shared httpx.Client,
    which is safe to use from several threads at once.
    """

    @override
    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ):
        """Initialize the HTTPX HTTP executor.

        Args:
            api_url: The base URL for the API. Defaults to DEFAULT_API_URL.
            timeout: Request timeout in seconds, None to wait indefinitely.
            client: Optional preconfigured httpx.Client (e.g. with a mock
                transport). ``timeout`` is ignored when a client is given.

        """
        self.api_url = api_url
        self.timeout = timeout
        self.client = client if client is not None else httpx.Client(timeout=timeout)

    @override
    def send(
        self,
        method: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        json: Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        """Send a request to the API.

        Returns:
            HttpResponse containing the status code and raw response body.

        Raises:
            TransportTimeoutError: If the request times out.
            HttpConnectionError: If there is a connection or network error.
            TransportError: If any other transport-level error occurs.

        """
        url = f"{self.api_url}{path}"
        headers = {
            "Accept": "application/json",
            CLIENT_HEADER: get_client_identifier(),
        }
        content = serialize_request(dict(json)) if json is not None else None
        if content is not None:
            headers["Content-Type"] = "application/json"

        try:
            response = self.client.request(
                method,
                url,
                params=dict(query) if query else None,
                headers=headers,
                content=content,
            )
        except BaseError:
            raise
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(
                f"{method} request to {url} timed out", timeout_seconds=self.timeout
            ) from e
        except httpx.ConnectError as e:
            raise HttpConnectionError(f"Failed to connect to {url}", url=url) from e
        except httpx.NetworkError as e:
            raise HttpConnectionError(
                f"Network error during {method} request to {url}", url=url
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} request to {url} failed: {e}") from e

        return HttpResponse(
            status=response.status_code,
            content=response.content,
            headers=dict(response.headers),
            reason=response.reason_phrase,
        )

    @override
    def close(self) -> None:
        """Close the underlying httpx client."""
        self.client.close()

    def __del__(self) -> None:
        """Cleanup the httpx client when the executor is destroyed."""
        self.client.close()
