import pytest

from exchanges.binance.validation import (
    OrderParameters,
    OrderValidationError,
    require_exactly_one,
    resolve_response_type,
    validate_order,
    validate_order_book_limit,
)


def _order(order_type, **overrides):
    return OrderParameters(symbol="BTCUSDT", side="BUY", type=order_type, **overrides)


@pytest.mark.parametrize(
    "order_type, fields",
    [
        ("LIMIT", {"time_in_force": "GTC", "quantity": "1", "price": "100"}),
        ("MARKET", {"quantity": "1"}),
        ("MARKET", {"quote_order_qty": "50"}),
        ("STOP_LOSS", {"quantity": "1", "stop_price": "90"}),
        ("STOP_LOSS_LIMIT", {"time_in_force": "GTC", "quantity": "1", "price": "89", "stop_price": "90"}),
        ("TAKE_PROFIT", {"quantity": "1", "stop_price": "110"}),
        ("TAKE_PROFIT_LIMIT", {"time_in_force": "GTC", "quantity": "1", "price": "111", "stop_price": "110"}),
        ("LIMIT_MAKER", {"quantity": "1", "price": "100"}),
    ],
)
def test_complete_orders_pass(order_type, fields):
    validate_order(_order(order_type, **fields))


@pytest.mark.parametrize(
    "order_type, fields, missing",
    [
        ("LIMIT", {"quantity": "1", "price": "100"}, "timeInForce"),
        ("LIMIT", {"time_in_force": "GTC", "price": "100"}, "quantity"),
        ("LIMIT", {"time_in_force": "GTC", "quantity": "1"}, "price"),
        ("STOP_LOSS", {"quantity": "1"}, "stopPrice"),
        ("STOP_LOSS_LIMIT", {"time_in_force": "GTC", "quantity": "1", "stop_price": "90"}, "price"),
        ("TAKE_PROFIT", {"stop_price": "110"}, "quantity"),
        ("TAKE_PROFIT_LIMIT", {"quantity": "1", "price": "111", "stop_price": "110"}, "timeInForce"),
        ("LIMIT_MAKER", {"quantity": "1"}, "price"),
    ],
)
def test_missing_required_field_is_reported(order_type, fields, missing):
    with pytest.raises(OrderValidationError) as excinfo:
        validate_order(_order(order_type, **fields))
    assert f"'{missing}'" in str(excinfo.value)


@pytest.mark.parametrize("fields", [{}, {"quantity": "1", "quote_order_qty": "50"}])
def test_market_order_needs_exactly_one_quantity(fields):
    with pytest.raises(OrderValidationError) as excinfo:
        validate_order(_order("MARKET", **fields))
    assert "quoteOrderQty" in str(excinfo.value)


def test_unknown_side_and_type_collect_all_violations():
    with pytest.raises(OrderValidationError) as excinfo:
        validate_order(OrderParameters(symbol="BTCUSDT", side="HOLD", type="ICEBERG"))
    assert len(excinfo.value.violations) == 2


def test_order_parameters_to_query_uses_wire_names():
    query = _order("LIMIT", time_in_force="GTC", quantity="1", price="100", timestamp=5).to_query()
    assert list(query)[:6] == ["symbol", "side", "type", "timeInForce", "quantity", "quoteOrderQty"]
    assert query["timeInForce"] == "GTC"
    assert query["quoteOrderQty"] is None
    assert query["timestamp"] == 5


def test_require_exactly_one():
    require_exactly_one(orderId=1, origClientOrderId=None)
    require_exactly_one(orderId=None, origClientOrderId="abc")
    with pytest.raises(OrderValidationError, match="'orderId' or 'origClientOrderId'"):
        require_exactly_one(orderId=None, origClientOrderId=None)
    with pytest.raises(OrderValidationError):
        require_exactly_one(orderId=1, origClientOrderId="abc")


def test_order_book_limit():
    validate_order_book_limit(5000)
    with pytest.raises(OrderValidationError):
        validate_order_book_limit(7)


@pytest.mark.parametrize(
    "order_type, requested, expected",
    [
        ("MARKET", None, "FULL"),
        ("LIMIT", None, "FULL"),
        ("STOP_LOSS", None, "ACK"),
        ("LIMIT_MAKER", None, "ACK"),
        ("LIMIT", "RESULT", "RESULT"),
        ("TAKE_PROFIT", "FULL", "FULL"),
    ],
)
def test_resolve_response_type(order_type, requested, expected):
    assert resolve_response_type(order_type, requested) == expected
