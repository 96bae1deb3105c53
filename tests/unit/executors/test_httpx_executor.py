"""Wire-level tests for the httpx executor using httpx.MockTransport."""

import httpx
import orjson
import pytest

from independent_reserve import IndependentReserveClient
from independent_reserve.errors import (
    HttpConnectionError,
    IndependentReserveError,
    TransportTimeoutError,
)
from independent_reserve.executors import HttpxHttpExecutor
from independent_reserve.helpers import CLIENT_HEADER
from tests.unit.conftest import API_URL, stepping_clock


def make_client(handler, **kwargs) -> tuple[IndependentReserveClient, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    executor = HttpxHttpExecutor(
        api_url=API_URL, client=httpx.Client(transport=httpx.MockTransport(record))
    )
    return IndependentReserveClient(api_url=API_URL, executor=executor, **kwargs), requests


def test_public_request_on_the_wire():
    client, requests = make_client(
        lambda request: httpx.Response(200, json={"LastPrice": 57588.12})
    )

    result = client.get_market_summary("Xbt", "Usd")

    assert result == {"LastPrice": 57588.12}
    (request,) = requests
    assert request.method == "GET"
    assert str(request.url) == (
        f"{API_URL}/Public/GetMarketSummary"
        "?primaryCurrencyCode=Xbt&secondaryCurrencyCode=Usd"
    )
    assert request.content == b""
    assert request.headers[CLIENT_HEADER].startswith("IndependentReservePythonSDK/")


def test_public_request_without_params_has_no_query():
    client, requests = make_client(lambda request: httpx.Response(200, json=[]))

    client.get_fx_rates()

    assert str(requests[0].url) == f"{API_URL}/Public/GetFxRates"


def test_private_request_on_the_wire():
    client, requests = make_client(
        lambda request: httpx.Response(200, json={"Status": "Cancelled"}),
        api_key="key",
        api_secret="secret",
        clock=stepping_clock(),
    )

    client.cancel_order("c7347e4c-b865-4c94-8f74-d934d4b0b177")

    (request,) = requests
    assert request.method == "POST"
    assert str(request.url) == f"{API_URL}/Private/CancelOrder"
    assert request.headers["Content-Type"] == "application/json"
    body = orjson.loads(request.content)
    assert list(body) == ["apiKey", "nonce", "signature", "orderGuid"]
    assert body["apiKey"] == "key"
    assert len(body["nonce"]) == 19
    # raw bytes keep the same order
    assert request.content.startswith(b'{"apiKey":"key","nonce":"')


def test_client_error_message_over_the_wire():
    client, _ = make_client(
        lambda request: httpx.Response(400, json={"Message": "Insufficient funds"}),
        api_key="key",
        api_secret="secret",
    )

    with pytest.raises(IndependentReserveError) as exc_info:
        client.place_limit_order("Xbt", "Aud", "LimitBid", 100000, 10)

    assert exc_info.value.message == "Insufficient funds"


def test_client_error_raw_dump_over_the_wire():
    client, _ = make_client(lambda request: httpx.Response(404, text="Not here"))

    with pytest.raises(IndependentReserveError) as exc_info:
        client.get_fx_rates()

    assert exc_info.value.message.startswith("HTTP 404 Not Found")
    assert exc_info.value.message.endswith("Not here")


def test_connect_error_is_wrapped():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = make_client(refuse)

    with pytest.raises(HttpConnectionError) as exc_info:
        client.get_fx_rates()

    assert exc_info.value.url == f"{API_URL}/Public/GetFxRates"


def test_timeout_is_wrapped():
    def stall(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    client, _ = make_client(stall)

    with pytest.raises(TransportTimeoutError):
        client.get_fx_rates()


def test_client_context_manager_closes_executor():
    client, _ = make_client(lambda request: httpx.Response(200, json=[]))
    executor = client._http_executor

    with client:
        client.get_fx_rates()

    assert executor.client.is_closed


def test_default_executor_is_closed_by_client():
    client = IndependentReserveClient(api_url=API_URL)

    client.close()

    assert client._http_executor.client.is_closed
