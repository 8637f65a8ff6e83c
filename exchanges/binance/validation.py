"""
Client-side parameter completeness checks executed before an order is sent.

These are shallow checks only: the exchange remains the authority on whether
an order is acceptable (filters, balances, precision).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from exchanges.binance.schemas import (
    ORDER_BOOK_LIMITS,
    ORDER_RESPONSE_TYPES,
    ORDER_SIDES,
    ORDER_TYPES,
    OrderResponseType,
    OrderSide,
    OrderType,
    TimeInForce,
)


class OrderValidationError(ValueError):
    """Raised when order parameters fail pre-flight validation."""

    def __init__(self, violations: Sequence[str]) -> None:
        super().__init__("; ".join(violations))
        self.violations = list(violations)


# Parameters each order type needs on top of symbol/side/type.
REQUIRED_ORDER_FIELDS: Dict[str, tuple[str, ...]] = {
    "LIMIT": ("time_in_force", "quantity", "price"),
    "STOP_LOSS": ("quantity", "stop_price"),
    "STOP_LOSS_LIMIT": ("time_in_force", "quantity", "price", "stop_price"),
    "TAKE_PROFIT": ("quantity", "stop_price"),
    "TAKE_PROFIT_LIMIT": ("time_in_force", "quantity", "price", "stop_price"),
    "LIMIT_MAKER": ("quantity", "price"),
}

# Wire names, used in messages so users see what Binance calls each field.
_WIRE_NAMES = {
    "time_in_force": "timeInForce",
    "quantity": "quantity",
    "quote_order_qty": "quoteOrderQty",
    "price": "price",
    "stop_price": "stopPrice",
}


@dataclass(slots=True)
class OrderParameters:
    """Parameters accepted by the new-order and test-order endpoints."""

    symbol: str
    side: OrderSide
    type: OrderType
    time_in_force: Optional[TimeInForce] = None
    quantity: Any = None
    quote_order_qty: Any = None
    price: Any = None
    new_client_order_id: Optional[str] = None
    stop_price: Any = None
    iceberg_qty: Any = None
    new_order_resp_type: Optional[OrderResponseType] = None
    recv_window: Optional[int] = None
    timestamp: Optional[int] = None

    def to_query(self) -> Dict[str, Any]:
        """Wire parameters in the order Binance documents them."""
        return {
            "symbol": self.symbol,
            "side": self.side,
            "type": self.type,
            "timeInForce": self.time_in_force,
            "quantity": self.quantity,
            "quoteOrderQty": self.quote_order_qty,
            "price": self.price,
            "newClientOrderId": self.new_client_order_id,
            "stopPrice": self.stop_price,
            "icebergQty": self.iceberg_qty,
            "newOrderRespType": self.new_order_resp_type,
            "recvWindow": self.recv_window,
            "timestamp": self.timestamp,
        }


def validate_order(params: OrderParameters) -> None:
    """Raise OrderValidationError when required parameters for the order type are missing."""
    violations: List[str] = []

    if not params.symbol:
        violations.append("'symbol' is required.")
    if params.side not in ORDER_SIDES:
        violations.append(f"Unsupported side '{params.side}'. Allowed: {list(ORDER_SIDES)}.")
    if params.type not in ORDER_TYPES:
        violations.append(f"Unsupported order type '{params.type}'. Allowed: {list(ORDER_TYPES)}.")
    if params.new_order_resp_type is not None and params.new_order_resp_type not in ORDER_RESPONSE_TYPES:
        violations.append(
            f"Unsupported response type '{params.new_order_resp_type}'. Allowed: {list(ORDER_RESPONSE_TYPES)}."
        )

    if params.type == "MARKET":
        # quantity is in the base asset; quoteOrderQty is the quote amount to spend or receive.
        if (params.quantity is None) == (params.quote_order_qty is None):
            violations.append("Either 'quantity' or 'quoteOrderQty' must be given.")
    elif params.type in REQUIRED_ORDER_FIELDS:
        missing = [
            _WIRE_NAMES[name]
            for name in REQUIRED_ORDER_FIELDS[params.type]
            if getattr(params, name) is None
        ]
        if missing:
            violations.append(f"{params.type} orders require: {', '.join(repr(name) for name in missing)}.")

    if violations:
        raise OrderValidationError(violations)


def require_exactly_one(**named: Any) -> None:
    """
    Ensure exactly one of the given identifiers is set.

    >>> require_exactly_one(orderId=12, origClientOrderId=None)
    """
    provided = [name for name, value in named.items() if value is not None]
    if len(provided) != 1:
        names = " or ".join(repr(name) for name in named)
        raise OrderValidationError([f"Either {names} must be given."])


def validate_order_book_limit(limit: int) -> None:
    if limit not in ORDER_BOOK_LIMITS:
        raise OrderValidationError([f"Invalid order book limit {limit}. Allowed: {list(ORDER_BOOK_LIMITS)}."])


def resolve_response_type(order_type: str, requested: Optional[str] = None) -> str:
    """MARKET and LIMIT orders default to FULL responses; every other type to ACK."""
    if requested is not None:
        return requested
    return "FULL" if order_type in ("MARKET", "LIMIT") else "ACK"
