"""Helper utilities for the Independent Reserve Python SDK.

This module contains utility functions for serialization, deserialization,
client identification and display formatting.
"""

import logging
from dataclasses import asdict, is_dataclass
from decimal import Decimal
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import orjson
from prettyprinter import cpprint

from independent_reserve.errors import DeserializationError, SerializationError
from independent_reserve.types import Json, JsonObject

if TYPE_CHECKING:
    from independent_reserve.executors.interface import HttpResponse

log = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_API_URL: str = "https://api.independentreserve.com"

CLIENT_HEADER: str = "Independent-Reserve-Client"


# ============================================================================
# CLIENT IDENTIFICATION
# ============================================================================


@lru_cache(maxsize=1)
def get_client_identifier() -> str:
    """Get the SDK identification string sent with every request."""
    import independent_reserve

    return f"IndependentReservePythonSDK/{independent_reserve.__version__}"


# ============================================================================
# SERIALIZATION / DESERIALIZATION
# ============================================================================


def decimal_as_str(obj: object) -> str:
    """Serialize Decimal objects to JSON strings.

    Converts Decimal to string to preserve precision in JSON serialization.
    """
    if isinstance(obj, Decimal):
        return format(obj, "f")

    raise TypeError


def serialize_request(request: JsonObject | None) -> bytes | None:
    """Serialize a request body to JSON bytes, keeping key order.

    Raises:
        SerializationError: If serialization fails

    """
    if request is None:
        return None
    try:
        return orjson.dumps(request, default=decimal_as_str)
    except (TypeError, orjson.JSONEncodeError) as e:
        # the request holds credentials, keep it out of the message
        raise SerializationError(
            f"Failed to serialize request with keys {list(request)}"
        ) from e


def deserialize_response(response_body: bytes, url: str) -> Json:
    """Deserialize a JSON response body.

    Args:
        response_body: Response bytes to deserialize
        url: URL that was requested (for error messages)

    Returns:
        Deserialized JSON object or array

    Raises:
        DeserializationError: If deserialization fails

    """
    try:
        return orjson.loads(response_body)  # type: ignore
    except orjson.JSONDecodeError as e:
        raise DeserializationError(
            f"Failed to parse JSON response from {url}: {e}"
        ) from e


def error_message(response: "HttpResponse") -> str:
    """Extract the exchange's ``Message`` from an error response.

    Falls back to a raw dump of the response when the body is not JSON or
    carries no ``Message``.
    """
    try:
        body = orjson.loads(response.content)
    except orjson.JSONDecodeError:
        body = None

    if isinstance(body, dict) and body.get("Message") is not None:
        return str(body["Message"])
    return dump_response(response)


def dump_response(response: "HttpResponse") -> str:
    """Render a response as status line, headers and body."""
    status_line = f"HTTP {response.status}"
    if response.reason:
        status_line += f" {response.reason}"
    lines = [status_line]
    lines.extend(f"{name}: {value}" for name, value in (response.headers or {}).items())
    return "\r\n".join(lines) + "\r\n\r\n" + response.content.decode("utf-8", "replace")


# ============================================================================
# DISPLAY UTILITIES
# ============================================================================


def print_data(response: Any) -> None:
    """Pretty-print response data, handling dataclasses specially.

    Args:
        response: Data to print

    """
    if is_dataclass(response) and not isinstance(response, type):
        cpprint(asdict(response))
    else:
        cpprint(response)
