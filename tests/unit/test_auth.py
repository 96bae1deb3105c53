"""Tests for nonce generation, canonical messages and request signatures."""

import hmac
from decimal import Decimal
from hashlib import sha256

import pytest

from independent_reserve.auth import (
    NONCE_WIDTH,
    Signer,
    format_param_value,
    make_nonce,
    to_unsigned_message,
    to_wire_value,
)
from independent_reserve.errors import ValidationError
from independent_reserve.helpers import serialize_request
from independent_reserve.types import Credentials
from tests.unit.conftest import FIRST_NONCE, stepping_clock

URL = "https://api.independentreserve.com/Private/GetOpenOrders"


def expected_signature(secret: str, message: str) -> str:
    return hmac.new(secret.encode(), message.encode(), sha256).hexdigest().upper()


def test_nonce_is_nineteen_digits():
    nonce = make_nonce()

    assert len(nonce) == NONCE_WIDTH == 19
    assert nonce.isdigit()


def test_nonce_is_left_padded():
    assert make_nonce(lambda: 1234) == "0000000000000001234"


def test_nonce_rejects_clock_wider_than_nineteen_digits():
    with pytest.raises(ValidationError):
        make_nonce(lambda: 12345678901234567890)


def test_nonce_strictly_increases_across_calls():
    clock = stepping_clock()

    nonces = [make_nonce(clock) for _ in range(5)]

    assert nonces[0] == str(FIRST_NONCE)
    assert all(int(a) < int(b) for a, b in zip(nonces, nonces[1:]))


def test_unsigned_message_keeps_insertion_order():
    message = to_unsigned_message(
        URL, {"apiKey": "key", "nonce": "1", "pageIndex": 1, "pageSize": 25}
    )

    assert message == f"{URL},apiKey=key,nonce=1,pageIndex=1,pageSize=25"


def test_unsigned_message_is_order_sensitive():
    forward = to_unsigned_message(URL, {"pageIndex": 1, "pageSize": 25})
    backward = to_unsigned_message(URL, {"pageSize": 25, "pageIndex": 1})

    assert forward != backward


def test_unsigned_message_without_params_is_url():
    assert to_unsigned_message(URL, {}) == URL


def test_list_values_sign_only_first_element():
    message = to_unsigned_message(URL, {"txTypes": ["Brokerage", "Trade"]})

    assert message == f"{URL},txTypes=Brokerage"


@pytest.mark.parametrize(
    "value, formatted",
    [
        ("Xbt", "Xbt"),
        (25, "25"),
        (0.5, "0.5"),
        (0.00005, "0.00005"),
        (1e-08, "0.00000001"),
        (1e16, "10000000000000000"),
        ([0.00005], "0.00005"),
        (Decimal("1E-8"), "0.00000001"),
        (True, "1"),
        (False, ""),
        (None, ""),
        (("Deposit",), "Deposit"),
    ],
)
def test_format_param_value(value, formatted):
    assert format_param_value("name", value) == formatted


def test_format_param_value_rejects_mappings():
    with pytest.raises(ValidationError):
        format_param_value("name", {"nested": 1})  # type: ignore


def test_format_param_value_rejects_empty_list():
    with pytest.raises(ValidationError) as exc_info:
        format_param_value("txTypes", [])

    assert "txTypes" in str(exc_info.value)


def test_sign_produces_uppercase_hmac_over_canonical_message():
    signer = Signer(Credentials("key", "secret"), clock=lambda: FIRST_NONCE)

    envelope = signer.sign(URL, {"primaryCurrencyCode": "Xbt", "pageIndex": 1})

    message = (
        f"{URL},apiKey=key,nonce={FIRST_NONCE},primaryCurrencyCode=Xbt,pageIndex=1"
    )
    assert envelope.api_key == "key"
    assert envelope.nonce == str(FIRST_NONCE)
    assert envelope.signature == expected_signature("secret", message)
    assert envelope.signature == envelope.signature.upper()
    assert len(envelope.signature) == 64


def test_sign_is_deterministic_for_fixed_nonce():
    params = {"orderGuid": "c7347e4c-b865-4c94-8f74-d934d4b0b177"}
    first = Signer(Credentials("key", "secret"), clock=lambda: FIRST_NONCE)
    second = Signer(Credentials("key", "secret"), clock=lambda: FIRST_NONCE)

    assert first.sign(URL, params) == second.sign(URL, params)


def test_sign_changes_with_any_parameter_value():
    signer = Signer(Credentials("key", "secret"), clock=lambda: FIRST_NONCE)
    base = {"primaryCurrencyCode": "Xbt", "secondaryCurrencyCode": "Aud"}

    reference = signer.sign(URL, base).signature

    for name in base:
        changed = dict(base, **{name: "Eth"})
        assert signer.sign(URL, changed).signature != reference


def test_sign_changes_with_url_and_secret():
    params = {"pageIndex": 1}
    signer = Signer(Credentials("key", "secret"), clock=lambda: FIRST_NONCE)
    other_secret = Signer(Credentials("key", "other"), clock=lambda: FIRST_NONCE)

    reference = signer.sign(URL, params).signature

    assert signer.sign(URL.replace("Open", "Closed"), params).signature != reference
    assert other_secret.sign(URL, params).signature != reference


def test_sign_uses_fresh_nonce_per_call():
    signer = Signer(Credentials("key", "secret"), clock=stepping_clock())

    first = signer.sign(URL, {})
    second = signer.sign(URL, {})

    assert int(second.nonce) > int(first.nonce)
    assert first.signature != second.signature


@pytest.mark.parametrize("reserved", ["apiKey", "nonce", "signature"])
def test_sign_rejects_reserved_parameter_names(reserved):
    signer = Signer(Credentials("key", "secret"))

    with pytest.raises(ValidationError) as exc_info:
        signer.sign(URL, {reserved: "x"})

    assert reserved in str(exc_info.value)


def test_envelope_dict_is_in_wire_order():
    signer = Signer(Credentials("key", "secret"), clock=lambda: FIRST_NONCE)

    envelope = signer.sign(URL, {})

    assert list(envelope.as_dict()) == ["apiKey", "nonce", "signature"]


def test_credentials_repr_hides_secret():
    assert "hunter2" not in repr(Credentials("key", "hunter2"))


@pytest.mark.parametrize("value", [0.00005, 1e-08, 0.5, 57588.12, 1e16])
def test_signed_float_text_matches_request_body(value):
    wire = to_wire_value(value)

    signed = format_param_value("volume", wire)

    assert signed.encode() in serialize_request({"volume": wire})
