from typing import Any, Mapping, override

import requests

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


class RequestsHttpExecutor(HttpExecutor):
    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float | None = 30.0,
        session: requests.Session | None = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    @override
    def send(
        self,
        method: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        json: Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        url = f"{self.api_url}{path}"
        headers = {
            "Accept": "application/json",
            CLIENT_HEADER: get_client_identifier(),
        }
        request_body = serialize_request(dict(json)) if json is not None else None
        if request_body is not None:
            headers["Content-Type"] = "application/json"

        try:
            response = self.session.request(
                method,
                url,
                params=dict(query) if query else None,
                headers=headers,
                data=request_body,
                timeout=self.timeout,
            )
        except BaseError:
            raise
        except requests.Timeout as e:
            raise TransportTimeoutError(
                f"{method} request to {url} timed out", timeout_seconds=self.timeout
            ) from e
        except requests.ConnectionError as e:
            raise HttpConnectionError(f"Failed to connect to {url}", url=url) from e
        except requests.RequestException as e:
            raise TransportError(f"{method} request to {url} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            content=response.content,
            headers=dict(response.headers),
            reason=response.reason,
        )

    @override
    def close(self) -> None:
        self.session.close()
