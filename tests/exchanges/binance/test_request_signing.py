from decimal import Decimal

import pytest

from exchanges.base_client import ExchangeCredentials
from exchanges.binance.request import (
    API_KEY_HEADER,
    BinanceRequest,
    MissingCredentialsError,
    build_query_string,
    sign_query,
)

# Example key pair and request from the Binance Spot API documentation.
DOC_SECRET = "NhqPtmdSJYdKjVHjA7PZj4Mge3R5YNiP1e3UZjInClVN65XAbvqqM6A7H5fATj0j"
DOC_QUERY = (
    "symbol=LTCBTC&side=BUY&type=LIMIT&timeInForce=GTC&quantity=1&price=0.1"
    "&recvWindow=5000&timestamp=1499827319559"
)
DOC_SIGNATURE = "c8db56825ae71d6d79447849e617115f4a920fa2acdcab2b053c4b2838bd6b71"


@pytest.fixture
def credentials():
    return ExchangeCredentials(api_key="api-key", api_secret=DOC_SECRET)


def test_query_string_skips_undefined_values_and_keeps_order():
    query = build_query_string({"symbol": "BTCUSDT", "fromId": None, "limit": 500, "startTime": None})
    assert query == "symbol=BTCUSDT&limit=500"


def test_query_string_empty_params():
    assert build_query_string({}) == ""
    assert build_query_string({"symbol": None}) == ""


def test_query_string_serializes_lists_as_compact_json():
    query = build_query_string({"symbols": ["BTCUSDT", "ETHUSDT"]})
    assert query == "symbols=%5B%22BTCUSDT%22%2C%22ETHUSDT%22%5D"


def test_query_string_formats_numbers_without_exponent():
    query = build_query_string(
        {"quantity": 0.00001, "price": Decimal("0.10"), "limit": 5, "flag": True}
    )
    assert query == "quantity=0.00001&price=0.10&limit=5&flag=true"


def test_signature_matches_documented_example():
    assert sign_query(DOC_QUERY, DOC_SECRET) == DOC_SIGNATURE


def test_signature_is_deterministic():
    first = sign_query("symbol=BTCUSDT&timestamp=1", "secret")
    second = sign_query("symbol=BTCUSDT&timestamp=1", "secret")
    assert first == second
    assert len(first) == 64
    assert sign_query("symbol=BTCUSDT&timestamp=2", "secret") != first


def test_signed_request_appends_signature_last(credentials):
    params = {
        "symbol": "LTCBTC",
        "side": "BUY",
        "type": "LIMIT",
        "timeInForce": "GTC",
        "quantity": 1,
        "price": 0.1,
        "recvWindow": 5000,
        "timestamp": 1499827319559,
    }
    prepared = BinanceRequest("POST", "/api/v3/order", signed=True).prepare(params, credentials)

    assert prepared.query == f"{DOC_QUERY}&signature={DOC_SIGNATURE}"
    assert prepared.headers == {API_KEY_HEADER: "api-key"}
    assert prepared.target == f"/api/v3/order?{DOC_QUERY}&signature={DOC_SIGNATURE}"


def test_signed_request_fills_missing_timestamp(mocker, credentials):
    mocker.patch("exchanges.binance.request.current_timestamp", return_value=1700000000000)
    prepared = BinanceRequest("GET", "/api/v3/account", signed=True).prepare(
        {"recvWindow": None, "timestamp": None}, credentials
    )
    expected = sign_query("timestamp=1700000000000", DOC_SECRET)
    assert prepared.query == f"timestamp=1700000000000&signature={expected}"


def test_signed_request_requires_credentials():
    with pytest.raises(MissingCredentialsError):
        BinanceRequest("GET", "/api/v3/account", signed=True).prepare({"timestamp": 1})


def test_api_key_request_is_not_signed(credentials):
    request = BinanceRequest("PUT", "/api/v3/userDataStream", requires_api_key=True)
    prepared = request.prepare({"listenKey": "abc"}, credentials)
    assert prepared.query == "listenKey=abc"
    assert prepared.headers == {API_KEY_HEADER: "api-key"}

    with pytest.raises(MissingCredentialsError):
        request.prepare({"listenKey": "abc"})


def test_public_request_without_params_has_bare_target():
    prepared = BinanceRequest("GET", "/api/v3/ping").prepare({})
    assert prepared.query == ""
    assert prepared.headers == {}
    assert prepared.target == "/api/v3/ping"
