"""
Symbol and exchange filters reported by ``/api/v3/exchangeInfo``.

Filters are discriminated by their ``filterType`` field. Unknown types are
kept as `UnknownFilter` so new server-side filters never break decoding.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Union


@dataclass(slots=True)
class PriceFilter:
    """Price rules for a symbol; each bound is disabled when it equals zero."""

    min_price: str
    max_price: str
    tick_size: str
    filter_type: str = "PRICE_FILTER"

    @classmethod
    def from_payload(cls, payload: dict) -> "PriceFilter":
        return cls(
            min_price=payload["minPrice"],
            max_price=payload["maxPrice"],
            tick_size=payload["tickSize"],
        )


@dataclass(slots=True)
class PercentPriceFilter:
    """Valid price range relative to the average price over `avg_price_mins`."""

    multiplier_up: str
    multiplier_down: str
    avg_price_mins: int
    filter_type: str = "PERCENT_PRICE"

    @classmethod
    def from_payload(cls, payload: dict) -> "PercentPriceFilter":
        return cls(
            multiplier_up=payload["multiplierUp"],
            multiplier_down=payload["multiplierDown"],
            avg_price_mins=int(payload["avgPriceMins"]),
        )


@dataclass(slots=True)
class LotSizeFilter:
    min_qty: str
    max_qty: str
    step_size: str
    filter_type: str = "LOT_SIZE"

    @classmethod
    def from_payload(cls, payload: dict) -> "LotSizeFilter":
        return cls(
            min_qty=payload["minQty"],
            max_qty=payload["maxQty"],
            step_size=payload["stepSize"],
        )


@dataclass(slots=True)
class MarketLotSizeFilter:
    min_qty: str
    max_qty: str
    step_size: str
    filter_type: str = "MARKET_LOT_SIZE"

    @classmethod
    def from_payload(cls, payload: dict) -> "MarketLotSizeFilter":
        return cls(
            min_qty=payload["minQty"],
            max_qty=payload["maxQty"],
            step_size=payload["stepSize"],
        )


@dataclass(slots=True)
class MinNotionalFilter:
    """
    Minimum price * quantity for an order. MARKET orders are checked against
    the average price when `apply_to_market` is set.
    """

    min_notional: str
    apply_to_market: bool
    avg_price_mins: int
    filter_type: str = "MIN_NOTIONAL"

    @classmethod
    def from_payload(cls, payload: dict) -> "MinNotionalFilter":
        return cls(
            min_notional=payload["minNotional"],
            apply_to_market=bool(payload.get("applyToMarket", False)),
            avg_price_mins=int(payload.get("avgPriceMins", 0)),
        )


@dataclass(slots=True)
class IcebergPartsFilter:
    limit: int
    filter_type: str = "ICEBERG_PARTS"

    @classmethod
    def from_payload(cls, payload: dict) -> "IcebergPartsFilter":
        return cls(limit=int(payload["limit"]))


@dataclass(slots=True)
class MaxNumOrdersFilter:
    max_num_orders: int
    filter_type: str = "MAX_NUM_ORDERS"

    @classmethod
    def from_payload(cls, payload: dict) -> "MaxNumOrdersFilter":
        return cls(max_num_orders=int(payload["maxNumOrders"]))


@dataclass(slots=True)
class MaxNumAlgoOrdersFilter:
    """Limit on open STOP_LOSS*/TAKE_PROFIT* orders for a symbol."""

    max_num_algo_orders: int
    filter_type: str = "MAX_NUM_ALGO_ORDERS"

    @classmethod
    def from_payload(cls, payload: dict) -> "MaxNumAlgoOrdersFilter":
        return cls(max_num_algo_orders=int(payload["maxNumAlgoOrders"]))


@dataclass(slots=True)
class MaxNumIcebergOrdersFilter:
    max_num_iceberg_orders: int
    filter_type: str = "MAX_NUM_ICEBERG_ORDERS"

    @classmethod
    def from_payload(cls, payload: dict) -> "MaxNumIcebergOrdersFilter":
        return cls(max_num_iceberg_orders=int(payload["maxNumIcebergOrders"]))


@dataclass(slots=True)
class MaxPositionFilter:
    max_position: str
    filter_type: str = "MAX_POSITION"

    @classmethod
    def from_payload(cls, payload: dict) -> "MaxPositionFilter":
        return cls(max_position=payload["maxPosition"])


@dataclass(slots=True)
class ExchangeMaxNumOrdersFilter:
    max_num_orders: int
    filter_type: str = "EXCHANGE_MAX_NUM_ORDERS"

    @classmethod
    def from_payload(cls, payload: dict) -> "ExchangeMaxNumOrdersFilter":
        return cls(max_num_orders=int(payload["maxNumOrders"]))


@dataclass(slots=True)
class ExchangeMaxNumAlgoOrdersFilter:
    max_num_algo_orders: int
    filter_type: str = "EXCHANGE_MAX_ALGO_ORDERS"

    @classmethod
    def from_payload(cls, payload: dict) -> "ExchangeMaxNumAlgoOrdersFilter":
        return cls(max_num_algo_orders=int(payload["maxNumAlgoOrders"]))


@dataclass(slots=True)
class UnknownFilter:
    filter_type: str
    raw: Dict[str, Any] = field(default_factory=dict)


SymbolFilter = Union[
    PriceFilter,
    PercentPriceFilter,
    LotSizeFilter,
    MinNotionalFilter,
    IcebergPartsFilter,
    MarketLotSizeFilter,
    MaxNumOrdersFilter,
    MaxNumAlgoOrdersFilter,
    MaxNumIcebergOrdersFilter,
    MaxPositionFilter,
    UnknownFilter,
]
ExchangeFilter = Union[ExchangeMaxNumOrdersFilter, ExchangeMaxNumAlgoOrdersFilter, UnknownFilter]

_FILTER_PARSERS: Dict[str, Callable[[dict], Any]] = {
    "PRICE_FILTER": PriceFilter.from_payload,
    "PERCENT_PRICE": PercentPriceFilter.from_payload,
    "LOT_SIZE": LotSizeFilter.from_payload,
    "MIN_NOTIONAL": MinNotionalFilter.from_payload,
    "ICEBERG_PARTS": IcebergPartsFilter.from_payload,
    "MARKET_LOT_SIZE": MarketLotSizeFilter.from_payload,
    "MAX_NUM_ORDERS": MaxNumOrdersFilter.from_payload,
    "MAX_NUM_ALGO_ORDERS": MaxNumAlgoOrdersFilter.from_payload,
    "MAX_NUM_ICEBERG_ORDERS": MaxNumIcebergOrdersFilter.from_payload,
    "MAX_POSITION": MaxPositionFilter.from_payload,
    "EXCHANGE_MAX_NUM_ORDERS": ExchangeMaxNumOrdersFilter.from_payload,
    "EXCHANGE_MAX_ALGO_ORDERS": ExchangeMaxNumAlgoOrdersFilter.from_payload,
}


def parse_filter(payload: dict) -> Any:
    """Decode a single filter object according to its ``filterType``."""
    filter_type = str(payload.get("filterType", ""))
    parser = _FILTER_PARSERS.get(filter_type)
    if parser is None:
        return UnknownFilter(filter_type=filter_type, raw=dict(payload))
    return parser(payload)
