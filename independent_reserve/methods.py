"""Registry of the API methods and their visibility.

A method is either public (GET, query string parameters) or private (signed
POST, JSON body). Visibility is only ever decided by these tables.
"""

import re

from independent_reserve.errors import UnsupportedMethodError
from independent_reserve.types import Visibility

PUBLIC_METHODS: frozenset[str] = frozenset(
    {
        "GetValidPrimaryCurrencyCodes",
        "GetValidSecondaryCurrencyCodes",
        "GetValidLimitOrderTypes",
        "GetValidMarketOrderTypes",
        "GetValidOrderTypes",
        "GetValidTransactionTypes",
        "GetMarketSummary",
        "GetOrderBook",
        "GetAllOrders",
        "GetTradeHistorySummary",
        "GetRecentTrades",
        "GetFxRates",
    }
)

PRIVATE_METHODS: frozenset[str] = frozenset(
    {
        "GetOpenOrders",
        "GetClosedOrders",
        "GetClosedFilledOrders",
        "GetOrderDetails",
        "GetAccounts",
        "GetTransactions",
        "GetDigitalCurrencyDepositAddress",
        "GetDigitalCurrencyDepositAddresses",
        "GetTrades",
        "GetBrokerageFees",
        "PlaceLimitOrder",
        "PlaceMarketOrder",
        "CancelOrder",
        "SynchDigitalCurrencyDepositAddressWithBlockchain",
        "RequestFiatWithdrawal",
        "WithdrawDigitalCurrency",
    }
)

_SNAKE_CASE = re.compile(r"^[a-z0-9]+(_[a-z0-9]+)+$")


def normalize_method_name(method: str) -> str:
    """Return the API spelling of ``method``.

    ``getMarketSummary`` becomes ``GetMarketSummary`` (first letter upper
    cased) and ``get_market_summary`` becomes ``GetMarketSummary``.
    """
    if _SNAKE_CASE.match(method):
        return "".join(part.capitalize() for part in method.split("_"))
    return method[:1].upper() + method[1:]


def resolve_visibility(method: str) -> Visibility:
    """Look up the visibility of ``method``.

    Raises:
        UnsupportedMethodError: If the method is in neither registry

    """
    name = normalize_method_name(method)
    if name in PUBLIC_METHODS:
        return Visibility.PUBLIC
    if name in PRIVATE_METHODS:
        return Visibility.PRIVATE
    raise UnsupportedMethodError(method)
