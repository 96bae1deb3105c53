"""Request signing for private Independent Reserve endpoints.

Every private call carries an ``apiKey``, a ``nonce`` and a ``signature``.
The signature is an HMAC-SHA256 over a comma separated canonical message::

    {url},apiKey={key},nonce={nonce},{name}={value},...

keyed with the API secret and hex encoded in upper case.
"""

import hmac
import logging
from decimal import Decimal
from hashlib import sha256
from time import time_ns
from typing import Callable

from independent_reserve.errors import ValidationError
from independent_reserve.types import (
    Credentials,
    Nonce,
    Params,
    ParamScalar,
    ParamValue,
    SignedEnvelope,
)

log = logging.getLogger(__name__)

NONCE_WIDTH = 19

RESERVED_PARAMS = frozenset({"apiKey", "nonce", "signature"})

Clock = Callable[[], int]


def make_nonce(clock: Clock = time_ns) -> Nonce:
    """Return a 19 digit nonce from the wall clock.

    ``clock`` returns the current time with sub-second precision as an integer,
    i.e. the timestamp with its decimal separator stripped.

    Raises:
        ValidationError: If the clock reading is wider than 19 digits

    """
    digits = str(clock())
    if len(digits) > NONCE_WIDTH:
        raise ValidationError(
            f"Clock value {digits} does not fit in a {NONCE_WIDTH} digit nonce"
        )
    return digits.rjust(NONCE_WIDTH, "0")


def plain_decimal(value: float) -> Decimal:
    """Return the shortest Decimal that round-trips ``value``."""
    return Decimal(repr(value))


def to_wire_value(value: ParamValue) -> ParamValue:
    """Replace floats with Decimals, which sign and serialize as the same text."""
    if isinstance(value, float):
        return plain_decimal(value)
    if isinstance(value, (list, tuple)):
        return [to_wire_value(item) for item in value]  # type: ignore
    return value


def _format_scalar(name: str, value: ParamScalar) -> str:
    if isinstance(value, bool):
        return "1" if value else ""
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, float):
        return format(plain_decimal(value), "f")
    if isinstance(value, (str, int)):
        return str(value)
    raise ValidationError from TypeError(
        f"Unexpected type for parameter {name} {type(value)}"
    )


def format_param_value(name: str, value: ParamValue) -> str:
    """Format a parameter value the way it appears in the canonical message.

    Only the first element of a list is signed; the signing scheme does not
    define a representation for several values.
    """
    if isinstance(value, (list, tuple)):
        if not value:
            raise ValidationError(f"Parameter {name} is an empty list")
        return _format_scalar(name, value[0])
    return _format_scalar(name, value)


def to_unsigned_message(url: str, params: Params) -> str:
    """Build the canonical message for ``url`` and ``params`` in insertion order."""
    parts = [url]
    for name, value in params.items():
        parts.append(f"{name}={format_param_value(name, value)}")
    return ",".join(parts)


class Signer:
    """Produces the signed envelope required by private calls.

    Holds nothing but the credentials and a clock, so one instance can be
    shared across threads. Nonces come straight from the clock; two calls in
    the same clock tick produce the same nonce.
    """

    def __init__(self, credentials: Credentials, clock: Clock = time_ns):
        self._credentials = credentials
        self._clock = clock

    @property
    def api_key(self) -> str:
        return self._credentials.api_key

    def sign(self, url: str, params: Params) -> SignedEnvelope:
        """Sign a request to ``url`` with the caller's ``params``.

        Args:
            url: Full request URL (base URI plus path)
            params: The caller's request parameters, in wire order

        Returns:
            SignedEnvelope: apiKey, nonce and signature for the request body

        Raises:
            ValidationError: If a parameter collides with an envelope field or
                has a value that cannot be signed

        """
        reserved = RESERVED_PARAMS.intersection(params)
        if reserved:
            raise ValidationError(
                f"Parameters {sorted(reserved)} are reserved for request signing"
            )

        nonce = make_nonce(self._clock)
        message = to_unsigned_message(
            url, {"apiKey": self.api_key, "nonce": nonce, **params}
        )
        signature = (
            hmac.new(
                self._credentials.api_secret.encode("utf-8"),
                message.encode("utf-8"),
                sha256,
            )
            .hexdigest()
            .upper()
        )
        return SignedEnvelope(api_key=self.api_key, nonce=nonce, signature=signature)
