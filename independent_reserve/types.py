"""Type definitions for the Independent Reserve Python SDK.

This module contains type aliases, enums, and dataclasses used throughout
the SDK, organized into logical sections for clarity.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Mapping, TypeAlias

# ============================================================================
# TYPE ALIASES
# ============================================================================

Nonce: TypeAlias = str

# JSON type hierarchy
JsonObject: TypeAlias = dict[str, "JsonValue"]
JsonArray: TypeAlias = list["JsonValue"]
JsonValue: TypeAlias = None | bool | int | float | str | JsonObject | JsonArray
# Responses are call-dependent: lists of codes, objects, paged results
Json: TypeAlias = JsonObject | JsonArray

# Request parameter values. Lists sign only their first element.
ParamScalar: TypeAlias = None | bool | int | float | str | Decimal
ParamValue: TypeAlias = ParamScalar | list[ParamScalar] | tuple[ParamScalar, ...]
Params: TypeAlias = Mapping[str, ParamValue]

NumericInput: TypeAlias = Decimal | str | float | int


# ============================================================================
# ENUMS
# ============================================================================


class Visibility(Enum):
    PUBLIC = "Public"
    PRIVATE = "Private"


class AccountStatus(Enum):
    ACTIVE = "Active"


class OrderType(Enum):
    LIMIT_BID = "LimitBid"
    LIMIT_OFFER = "LimitOffer"
    MARKET_BID = "MarketBid"
    MARKET_OFFER = "MarketOffer"


class MarketOrderType(Enum):
    MARKET_BID = "MarketBid"
    MARKET_OFFER = "MarketOffer"


# ============================================================================
# AUTHENTICATION
# ============================================================================


@dataclass(frozen=True)
class Credentials:
    """API key and shared secret used to sign private requests."""

    api_key: str
    api_secret: str

    def __repr__(self) -> str:
        return f"Credentials(api_key={self.api_key!r}, api_secret='***')"


@dataclass(frozen=True)
class SignedEnvelope:
    """Authentication fields that lead the body of every private request."""

    api_key: str
    nonce: Nonce
    signature: str

    def as_dict(self) -> JsonObject:
        """Return the envelope in wire order: apiKey, nonce, signature."""
        return {
            "apiKey": self.api_key,
            "nonce": self.nonce,
            "signature": self.signature,
        }


def enum_value(value: Enum | str) -> str:
    """Return the wire value of an enum member, or the string unchanged."""
    if isinstance(value, Enum):
        return value.value
    return value
