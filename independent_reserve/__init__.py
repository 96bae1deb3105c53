"""Python SDK for the Independent Reserve exchange REST API."""

from importlib.metadata import PackageNotFoundError, version

from independent_reserve.api import IndependentReserveClient
from independent_reserve.auth import Signer, make_nonce, to_unsigned_message
from independent_reserve.currencies import VolumeTables, load_volume_tables
from independent_reserve.errors import (
    BaseError,
    ExchangeError,
    IndependentReserveError,
    MissingCredentialsError,
    TransportError,
    UnknownCurrencyError,
    UnsupportedMethodError,
    ValidationError,
)
from independent_reserve.helpers import print_data
from independent_reserve.types import (
    AccountStatus,
    Credentials,
    MarketOrderType,
    OrderType,
    SignedEnvelope,
    Visibility,
)

try:
    __version__ = version("independent-reserve")
except PackageNotFoundError:
    __version__ = "unknown"


def get_version() -> str:
    return __version__


__all__ = [
    "IndependentReserveClient",
    "Signer",
    "make_nonce",
    "to_unsigned_message",
    "VolumeTables",
    "load_volume_tables",
    "BaseError",
    "ExchangeError",
    "IndependentReserveError",
    "MissingCredentialsError",
    "TransportError",
    "UnknownCurrencyError",
    "UnsupportedMethodError",
    "ValidationError",
    "print_data",
    "AccountStatus",
    "Credentials",
    "MarketOrderType",
    "OrderType",
    "SignedEnvelope",
    "Visibility",
    "get_version",
]
