"""HTTP API client for the Independent Reserve exchange.

This module provides the IndependentReserveClient class, which dispatches
public market-data calls and signed private trading calls to the Independent
Reserve REST API.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from time import time_ns
from types import NoneType
from typing import Any, Mapping, cast

from independent_reserve.auth import Clock, Signer, to_wire_value
from independent_reserve.currencies import (
    VolumeTables,
    load_volume_tables,
)
from independent_reserve.errors import (
    DeserializationError,
    IndependentReserveError,
    InvalidVisibilityError,
    MissingCredentialsError,
    ServerError,
    ValidationError,
)
from independent_reserve.executors import DEFAULT_HTTP_EXECUTOR, HttpExecutor
from independent_reserve.executors.interface import HttpResponse
from independent_reserve.helpers import (
    DEFAULT_API_URL,
    deserialize_response,
    dump_response,
    error_message,
)
from independent_reserve.methods import normalize_method_name, resolve_visibility
from independent_reserve.types import (
    Credentials,
    Json,
    MarketOrderType,
    NumericInput,
    OrderType,
    Params,
    ParamValue,
    Visibility,
    enum_value,
)

log = logging.getLogger(__name__)


def raise_response_errors(response: HttpResponse, path: str) -> None:
    """Check HTTP response status and raise appropriate errors.

    Args:
        response: The HTTP response to validate
        path: The requested path (for logging)

    Raises:
        IndependentReserveError: For 4xx status codes, carrying the exchange's
            ``Message`` or a raw dump of the response
        ServerError: For 5xx and any other unexpected status

    """
    status = response.status

    if 200 <= status < 300:
        return

    if 400 <= status < 500:
        message = error_message(response)
        log.warning("Request to %s rejected with %d: %s", path, status, message)
        raise IndependentReserveError(status, message)

    raise ServerError(status, dump_response(response))


def _compact(params: Mapping[str, ParamValue]) -> dict[str, ParamValue]:
    """Drop parameters left unset so they are neither sent nor signed."""
    return {name: value for name, value in params.items() if value is not None}


def _timestamp(value: datetime | str | None) -> str | None:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.isoformat(timespec="seconds") + "Z"
    return value


class IndependentReserveClient:
    """Independent Reserve API client.

    Public methods work without credentials. Private methods need both an API
    key and an API secret; every private request is signed with a fresh nonce.

    Examples:
        .. code-block:: python

            from independent_reserve import IndependentReserveClient

            client = IndependentReserveClient()
            summary = client.get_market_summary("Xbt", "Aud")
            print(summary["LastPrice"])

            trader = IndependentReserveClient(api_key="key", api_secret="secret")
            for account in trader.get_accounts():
                print(account["CurrencyCode"], account["AvailableBalance"])
    """

    _credentials: Credentials | None = None
    _signer: Signer | None = None
    _valid_market_order_types: frozenset[str] | None = None

    _http_executor: HttpExecutor

    def __init__(
        self,
        api_key: str | None = None,
        api_secret: str | None = None,
        api_url: str = DEFAULT_API_URL,
        executor: HttpExecutor | None = None,
        volume_tables: VolumeTables | None = None,
        clock: Clock = time_ns,
    ):
        """Initialize the Independent Reserve API client.

        Args:
            api_key: Your API key (optional, required for private methods)
            api_secret: Your API secret (optional, required for private methods)
            api_url: Base URL for the API (default: production URL). Also the
                prefix of the URL that private requests are signed against.
            executor: Custom HTTP executor (optional, uses default if not provided)
            volume_tables: Minimum volume and volume decimal tables (optional,
                uses the bundled tables if not provided)
            clock: Source of nanosecond timestamps for nonces

        Raises:
            ValidationError: If only one of api_key and api_secret is given, or
                either has an invalid type

        """
        for name, value in (("api_key", api_key), ("api_secret", api_secret)):
            if not isinstance(cast(Any, value), (str, NoneType)):
                raise ValidationError from TypeError(
                    f"Unexpected type for {name} {type(value)}"
                )

        if (api_key is None) != (api_secret is None):
            raise ValidationError("api_key and api_secret must be provided together")

        if api_key is not None and api_secret is not None:
            self._credentials = Credentials(api_key=api_key, api_secret=api_secret)
            self._signer = Signer(self._credentials, clock=clock)

        self._api_url = api_url
        self._http_executor = (
            executor if executor is not None else DEFAULT_HTTP_EXECUTOR(api_url=api_url)
        )
        self._volume_tables = volume_tables if volume_tables is not None else VolumeTables()

    @classmethod
    def from_environment(
        cls, executor: HttpExecutor | None = None
    ) -> "IndependentReserveClient":
        """Build a client from environment variables (and a .env file if present).

        See ``independent_reserve.env_setup.setup_environment`` for the
        variables read.
        """
        from independent_reserve.env_setup import setup_environment

        env = setup_environment()
        volume_tables = (
            load_volume_tables(env.volume_tables_file)
            if env.volume_tables_file is not None
            else None
        )
        return cls(
            api_key=env.api_key,
            api_secret=env.api_secret,
            api_url=env.api_url,
            executor=executor,
            volume_tables=volume_tables,
        )

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def has_credentials(self) -> bool:
        return self._credentials is not None

    @property
    def credentials(self) -> Credentials:
        """Get the configured credentials.

        Raises:
            MissingCredentialsError: If the client was built without credentials

        """
        if self._credentials is None:
            raise MissingCredentialsError("API key and secret")
        return self._credentials

    @property
    def volume_tables(self) -> VolumeTables:
        return self._volume_tables

    def close(self) -> None:
        """Close the HTTP executor and its connections."""
        self._http_executor.close()

    def __enter__(self) -> "IndependentReserveClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    """ Dispatch """

    def call(self, method: str, params: Params | None = None) -> Json:
        """Call any API method by name.

        The visibility, and therefore the verb and parameter placement, is
        looked up in the method registry. ``getMarketSummary``,
        ``GetMarketSummary`` and ``get_market_summary`` are equivalent.

        Args:
            method: The API method name
            params: Request parameters, in wire order

        Returns:
            Json: The decoded response body

        Raises:
            UnsupportedMethodError: If the method is in neither registry
            MissingCredentialsError: If the method is private and no
                credentials are configured
            IndependentReserveError: If the exchange rejects the request

        """
        visibility = resolve_visibility(method)
        return self.__perform_request(visibility, normalize_method_name(method), params)

    def call_api(
        self,
        visibility: Visibility | str,
        method: str,
        params: Params | None = None,
    ) -> Json:
        """Call an API method with an explicit visibility.

        Raises:
            InvalidVisibilityError: If visibility is not Public or Private
            ValidationError: If the method is not registered with that visibility

        """
        try:
            visibility = Visibility(enum_value(visibility))
        except ValueError:
            raise InvalidVisibilityError(visibility) from None

        registered = resolve_visibility(method)
        if registered is not visibility:
            raise ValidationError(
                f"The method [{method}] is {registered.value}, not {visibility.value}"
            )
        return self.__perform_request(visibility, normalize_method_name(method), params)

    def __perform_request(
        self,
        visibility: Visibility,
        method: str,
        params: Params | None = None,
    ) -> Json:
        """Build, send and decode one API request.

        Public requests are GETs with the parameters in the query string.
        Private requests are POSTs whose JSON body is the signed envelope
        followed by the parameters.
        """
        path = f"/{visibility.value}/{method}"
        params = dict(params or {})

        if visibility is Visibility.PUBLIC:
            log.debug("GET %s", path)
            response = self._http_executor.send("GET", path, query=params or None)
        else:
            if self._signer is None:
                raise MissingCredentialsError("API key and secret")
            params = {name: to_wire_value(value) for name, value in params.items()}
            envelope = self._signer.sign(f"{self._api_url}{path}", params)
            log.debug("POST %s (nonce %s)", path, envelope.nonce)
            response = self._http_executor.send(
                "POST", path, json={**envelope.as_dict(), **params}
            )

        raise_response_errors(response, path)
        return deserialize_response(response.content, f"{self._api_url}{path}")

    """ Volume tables """

    def get_min_volume_for(self, currency: str) -> Decimal:
        """Return the minimum order volume for ``currency``.

        Raises:
            UnknownCurrencyError: If the currency is not in the table

        """
        return self._volume_tables.min_volume_for(currency)

    def get_volume_decimals_for(self, currency: str) -> int:
        """Return the number of volume decimals accepted for ``currency``.

        Raises:
            UnknownCurrencyError: If the currency is not in the table

        """
        return self._volume_tables.volume_decimals_for(currency)

    """ Public API endpoints, can be called without credentials """

    def get_valid_primary_currency_codes(self) -> Json:
        """Get the digital currencies traded on the exchange.

        Endpoint:
            GET /Public/GetValidPrimaryCurrencyCodes

        """
        return self.__perform_request(Visibility.PUBLIC, "GetValidPrimaryCurrencyCodes")

    def get_valid_secondary_currency_codes(self) -> Json:
        """Get the fiat currencies digital currencies are traded against.

        Endpoint:
            GET /Public/GetValidSecondaryCurrencyCodes

        """
        return self.__perform_request(Visibility.PUBLIC, "GetValidSecondaryCurrencyCodes")

    def get_valid_limit_order_types(self) -> Json:
        """Endpoint: GET /Public/GetValidLimitOrderTypes"""
        return self.__perform_request(Visibility.PUBLIC, "GetValidLimitOrderTypes")

    def get_valid_market_order_types(self) -> Json:
        """Endpoint: GET /Public/GetValidMarketOrderTypes"""
        return self.__perform_request(Visibility.PUBLIC, "GetValidMarketOrderTypes")

    def get_valid_order_types(self) -> Json:
        """Endpoint: GET /Public/GetValidOrderTypes"""
        return self.__perform_request(Visibility.PUBLIC, "GetValidOrderTypes")

    def get_valid_transaction_types(self) -> Json:
        """Endpoint: GET /Public/GetValidTransactionTypes"""
        return self.__perform_request(Visibility.PUBLIC, "GetValidTransactionTypes")

    def get_market_summary(
        self, primary_currency_code: str, secondary_currency_code: str
    ) -> Json:
        """Get a current snapshot of the market for a currency pair.

        Args:
            primary_currency_code: The digital currency (e.g. "Xbt"). Must be one
                of get_valid_primary_currency_codes().
            secondary_currency_code: The fiat currency (e.g. "Aud"). Must be one
                of get_valid_secondary_currency_codes().

        Returns:
            Json: Market summary including last, best bid and best offer prices

        Endpoint:
            GET /Public/GetMarketSummary

        """
        return self.__perform_request(
            Visibility.PUBLIC,
            "GetMarketSummary",
            {
                "primaryCurrencyCode": primary_currency_code,
                "secondaryCurrencyCode": secondary_currency_code,
            },
        )

    def get_order_book(
        self, primary_currency_code: str, secondary_currency_code: str
    ) -> Json:
        """Get the aggregated order book for a currency pair.

        Args:
            primary_currency_code: The digital currency (e.g. "Xbt")
            secondary_currency_code: The fiat currency (e.g. "Aud")

        Returns:
            Json: BuyOrders and SellOrders price levels

        Endpoint:
            GET /Public/GetOrderBook

        """
        return self.__perform_request(
            Visibility.PUBLIC,
            "GetOrderBook",
            {
                "primaryCurrencyCode": primary_currency_code,
                "secondaryCurrencyCode": secondary_currency_code,
            },
        )

    def get_all_orders(
        self, primary_currency_code: str, secondary_currency_code: str
    ) -> Json:
        """Get every order in the book for a currency pair, not aggregated.

        Endpoint:
            GET /Public/GetAllOrders

        """
        return self.__perform_request(
            Visibility.PUBLIC,
            "GetAllOrders",
            {
                "primaryCurrencyCode": primary_currency_code,
                "secondaryCurrencyCode": secondary_currency_code,
            },
        )

    def get_trade_history_summary(
        self,
        primary_currency_code: str,
        secondary_currency_code: str,
        number_of_hours_in_the_past_to_retrieve: int,
    ) -> Json:
        """Get hourly trade summaries for the given number of past hours.

        Endpoint:
            GET /Public/GetTradeHistorySummary

        """
        return self.__perform_request(
            Visibility.PUBLIC,
            "GetTradeHistorySummary",
            {
                "primaryCurrencyCode": primary_currency_code,
                "secondaryCurrencyCode": secondary_currency_code,
                "numberOfHoursInThePastToRetrieve": number_of_hours_in_the_past_to_retrieve,
            },
        )

    def get_recent_trades(
        self,
        primary_currency_code: str,
        secondary_currency_code: str,
        number_of_recent_trades_to_retrieve: int,
    ) -> Json:
        """Get the most recent trades for a currency pair.

        Endpoint:
            GET /Public/GetRecentTrades

        """
        return self.__perform_request(
            Visibility.PUBLIC,
            "GetRecentTrades",
            {
                "primaryCurrencyCode": primary_currency_code,
                "secondaryCurrencyCode": secondary_currency_code,
                "numberOfRecentTradesToRetrieve": number_of_recent_trades_to_retrieve,
            },
        )

    def get_fx_rates(self) -> Json:
        """Endpoint: GET /Public/GetFxRates"""
        return self.__perform_request(Visibility.PUBLIC, "GetFxRates")

    ### ===================================================== Private API =====================================================

    ### ------------------------------------------------ Private API - Orders ------------------------------------------------

    def get_open_orders(
        self,
        primary_currency_code: str | None = None,
        secondary_currency_code: str | None = None,
        page_index: int = 1,
        page_size: int = 25,
    ) -> Json:
        """Get a page of your currently open orders.

        Args:
            primary_currency_code: Only orders for this digital currency (optional)
            secondary_currency_code: Only orders for this fiat currency (optional)
            page_index: 1-based page to return
            page_size: Number of orders per page

        Endpoint:
            POST /Private/GetOpenOrders

        """
        return self.__perform_request(
            Visibility.PRIVATE,
            "GetOpenOrders",
            self.__order_page_params(
                primary_currency_code, secondary_currency_code, page_index, page_size
            ),
        )

    def get_closed_orders(
        self,
        primary_currency_code: str | None = None,
        secondary_currency_code: str | None = None,
        page_index: int = 1,
        page_size: int = 25,
    ) -> Json:
        """Get a page of your closed orders, filled or not.

        Endpoint:
            POST /Private/GetClosedOrders

        """
        return self.__perform_request(
            Visibility.PRIVATE,
            "GetClosedOrders",
            self.__order_page_params(
                primary_currency_code, secondary_currency_code, page_index, page_size
            ),
        )

    def get_closed_filled_orders(
        self,
        primary_currency_code: str | None = None,
        secondary_currency_code: str | None = None,
        page_index: int = 1,
        page_size: int = 25,
    ) -> Json:
        """Get a page of your closed orders that were at least partly filled.

        Endpoint:
            POST /Private/GetClosedFilledOrders

        """
        return self.__perform_request(
            Visibility.PRIVATE,
            "GetClosedFilledOrders",
            self.__order_page_params(
                primary_currency_code, secondary_currency_code, page_index, page_size
            ),
        )

    def get_order_details(self, order_guid: str) -> Json:
        """Get details about a single order.

        Args:
            order_guid: The guid of the order

        Endpoint:
            POST /Private/GetOrderDetails

        """
        return self.__perform_request(
            Visibility.PRIVATE, "GetOrderDetails", {"orderGuid": order_guid}
        )

    def place_limit_order(
        self,
        primary_currency_code: str,
        secondary_currency_code: str,
        order_type: OrderType | str,
        price: NumericInput,
        volume: NumericInput,
    ) -> Json:
        """Place a limit bid (buy) or limit offer (sell) order.

        Args:
            primary_currency_code: The digital currency to trade
            secondary_currency_code: The fiat currency to trade against
            order_type: OrderType.LIMIT_BID or OrderType.LIMIT_OFFER
            price: Price in secondary currency
            volume: Volume in primary currency

        Returns:
            Json: The created order, including its OrderGuid

        Endpoint:
            POST /Private/PlaceLimitOrder

        """
        return self.__perform_request(
            Visibility.PRIVATE,
            "PlaceLimitOrder",
            {
                "primaryCurrencyCode": primary_currency_code,
                "secondaryCurrencyCode": secondary_currency_code,
                "orderType": enum_value(order_type),
                "price": price,
                "volume": volume,
            },
        )

    def place_market_order(
        self,
        primary_currency_code: str,
        secondary_currency_code: str,
        order_type: MarketOrderType | str,
        volume: NumericInput,
    ) -> Json:
        """Place a market bid (buy) or market offer (sell) order.

        The order type is checked against get_valid_market_order_types(),
        which is fetched on first use and cached on the client.

        Args:
            primary_currency_code: The digital currency to trade
            secondary_currency_code: The fiat currency to trade against
            order_type: MarketOrderType.MARKET_BID or MarketOrderType.MARKET_OFFER
            volume: Volume to buy or sell in primary currency

        Returns:
            Json: The created order, including its OrderGuid

        Raises:
            ValidationError: If the order type is not a valid market order type

        Endpoint:
            POST /Private/PlaceMarketOrder

        """
        order_type = enum_value(order_type)
        if order_type not in self.__market_order_types():
            raise ValidationError(f"Order Type [{order_type}] not supported")

        return self.__perform_request(
            Visibility.PRIVATE,
            "PlaceMarketOrder",
            {
                "primaryCurrencyCode": primary_currency_code,
                "secondaryCurrencyCode": secondary_currency_code,
                "orderType": order_type,
                "volume": volume,
            },
        )

    def cancel_order(self, order_guid: str) -> Json:
        """Cancel a previously placed order.

        Endpoint:
            POST /Private/CancelOrder

        """
        return self.__perform_request(
            Visibility.PRIVATE, "CancelOrder", {"orderGuid": order_guid}
        )

    def get_trades(self, page_index: int = 1, page_size: int = 25) -> Json:
        """Get a page of your executed trades.

        Endpoint:
            POST /Private/GetTrades

        """
        return self.__perform_request(
            Visibility.PRIVATE,
            "GetTrades",
            {"pageIndex": page_index, "pageSize": page_size},
        )

    def get_brokerage_fees(self) -> Json:
        """Endpoint: POST /Private/GetBrokerageFees"""
        return self.__perform_request(Visibility.PRIVATE, "GetBrokerageFees")

    ### ------------------------------------------------ Private API - Accounts ------------------------------------------------

    def get_accounts(self) -> Json:
        """Get your accounts, one per currency, with their balances.

        Endpoint:
            POST /Private/GetAccounts

        """
        return self.__perform_request(Visibility.PRIVATE, "GetAccounts")

    def get_transactions(
        self,
        account_guid: str,
        from_timestamp_utc: datetime | str | None = None,
        to_timestamp_utc: datetime | str | None = None,
        tx_types: list[str] | None = None,
        page_index: int = 1,
        page_size: int = 25,
    ) -> Json:
        """Get a page of transactions for one of your accounts.

        Args:
            account_guid: The guid of the account
            from_timestamp_utc: Only transactions at or after this time (optional)
            to_timestamp_utc: Only transactions before this time (optional)
            tx_types: Transaction types to include, see
                get_valid_transaction_types() (optional). Only the first type
                takes part in the request signature.
            page_index: 1-based page to return
            page_size: Number of transactions per page

        Endpoint:
            POST /Private/GetTransactions

        """
        return self.__perform_request(
            Visibility.PRIVATE,
            "GetTransactions",
            _compact(
                {
                    "accountGuid": account_guid,
                    "fromTimestampUtc": _timestamp(from_timestamp_utc),
                    "toTimestampUtc": _timestamp(to_timestamp_utc),
                    "txTypes": tx_types or None,
                    "pageIndex": page_index,
                    "pageSize": page_size,
                }
            ),
        )

    def get_digital_currency_deposit_address(self, primary_currency_code: str) -> Json:
        """Endpoint: POST /Private/GetDigitalCurrencyDepositAddress"""
        return self.__perform_request(
            Visibility.PRIVATE,
            "GetDigitalCurrencyDepositAddress",
            {"primaryCurrencyCode": primary_currency_code},
        )

    def get_digital_currency_deposit_addresses(
        self, primary_currency_code: str, page_index: int = 1, page_size: int = 25
    ) -> Json:
        """Endpoint: POST /Private/GetDigitalCurrencyDepositAddresses"""
        return self.__perform_request(
            Visibility.PRIVATE,
            "GetDigitalCurrencyDepositAddresses",
            {
                "primaryCurrencyCode": primary_currency_code,
                "pageIndex": page_index,
                "pageSize": page_size,
            },
        )

    def synch_digital_currency_deposit_address_with_blockchain(
        self, deposit_address: str, primary_currency_code: str
    ) -> Json:
        """Ask the exchange to check the blockchain for new deposits to an address.

        Endpoint:
            POST /Private/SynchDigitalCurrencyDepositAddressWithBlockchain

        """
        return self.__perform_request(
            Visibility.PRIVATE,
            "SynchDigitalCurrencyDepositAddressWithBlockchain",
            {
                "depositAddress": deposit_address,
                "primaryCurrencyCode": primary_currency_code,
            },
        )

    ### ------------------------------------------------ Private API - Withdrawals ------------------------------------------------

    def request_fiat_withdrawal(
        self,
        secondary_currency_code: str,
        withdrawal_amount: NumericInput,
        withdrawal_bank_account_name: str,
        comment: str | None = None,
    ) -> Json:
        """Request a fiat withdrawal to one of your pre-registered bank accounts.

        Endpoint:
            POST /Private/RequestFiatWithdrawal

        """
        return self.__perform_request(
            Visibility.PRIVATE,
            "RequestFiatWithdrawal",
            _compact(
                {
                    "secondaryCurrencyCode": secondary_currency_code,
                    "withdrawalAmount": withdrawal_amount,
                    "withdrawalBankAccountName": withdrawal_bank_account_name,
                    "comment": comment,
                }
            ),
        )

    def withdraw_digital_currency(
        self,
        amount: NumericInput,
        withdrawal_address: str,
        primary_currency_code: str,
        comment: str | None = None,
        destination_tag: str | None = None,
    ) -> Json:
        """Withdraw digital currency to an external address.

        Args:
            amount: Amount to withdraw, in primary currency
            withdrawal_address: Destination address
            primary_currency_code: The digital currency to withdraw
            comment: Free text comment (optional)
            destination_tag: Destination tag or memo for currencies that need one (optional)

        Endpoint:
            POST /Private/WithdrawDigitalCurrency

        """
        return self.__perform_request(
            Visibility.PRIVATE,
            "WithdrawDigitalCurrency",
            _compact(
                {
                    "amount": amount,
                    "withdrawalAddress": withdrawal_address,
                    "comment": comment,
                    "primaryCurrencyCode": primary_currency_code,
                    "destinationTag": destination_tag,
                }
            ),
        )

    """ Private helpers """

    def __order_page_params(
        self,
        primary_currency_code: str | None,
        secondary_currency_code: str | None,
        page_index: int,
        page_size: int,
    ) -> dict[str, ParamValue]:
        return _compact(
            {
                "primaryCurrencyCode": primary_currency_code,
                "secondaryCurrencyCode": secondary_currency_code,
                "pageIndex": page_index,
                "pageSize": page_size,
            }
        )

    def __market_order_types(self) -> frozenset[str]:
        if self._valid_market_order_types is None:
            response = self.get_valid_market_order_types()
            if not isinstance(response, list):
                raise DeserializationError(
                    f"Unexpected market order types response {response=}"
                )
            self._valid_market_order_types = frozenset(str(t) for t in response)
        return self._valid_market_order_types
