"""
Dataclasses mirroring the JSON payloads of the Binance Spot REST API.

Numeric values that Binance sends as strings (prices, quantities) stay strings
so no precision is lost; callers convert with `Decimal` when they need to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Sequence

from exchanges.binance.filters import parse_filter


OrderStatus = Literal[
    "NEW",
    "PARTIALLY_FILLED",
    "FILLED",
    "CANCELED",
    "PENDING_CANCEL",
    "REJECTED",
    "EXPIRED",
]
OrderType = Literal[
    "LIMIT",
    "MARKET",
    "STOP_LOSS",
    "STOP_LOSS_LIMIT",
    "TAKE_PROFIT",
    "TAKE_PROFIT_LIMIT",
    "LIMIT_MAKER",
]
OrderResponseType = Literal["ACK", "RESULT", "FULL"]
OrderSide = Literal["BUY", "SELL"]
OrderBookLimit = Literal[5, 10, 20, 50, 100, 500, 1000, 5000]
TimeInForce = Literal["GTC", "IOC", "FOK"]
KLineInterval = Literal[
    "1m", "3m", "5m", "15m", "30m",
    "1h", "2h", "4h", "6h", "8h", "12h",
    "1d", "3d", "1w", "1M",
]
RateLimitType = Literal["REQUEST_WEIGHT", "ORDERS", "RAW_REQUESTS"]
RateLimitInterval = Literal["SECOND", "MINUTE", "DAY"]
SymbolStatus = Literal[
    "PRE_TRADING",
    "TRADING",
    "POST_TRADING",
    "END_OF_DAY",
    "HALT",
    "AUCTION_MATCH",
    "BREAK",
]
SymbolPermission = Literal["SPOT", "MARGIN"]
OCOStatus = Literal["RESPONSE", "EXEC_STARTED", "ALL_DONE"]
OCOOrderStatus = Literal["EXECUTING", "ALL_DONE", "REJECT"]

ORDER_TYPES: tuple[str, ...] = OrderType.__args__  # type: ignore[attr-defined]
ORDER_SIDES: tuple[str, ...] = OrderSide.__args__  # type: ignore[attr-defined]
ORDER_RESPONSE_TYPES: tuple[str, ...] = OrderResponseType.__args__  # type: ignore[attr-defined]
ORDER_BOOK_LIMITS: tuple[int, ...] = OrderBookLimit.__args__  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# General
# ---------------------------------------------------------------------------
@dataclass(slots=True)
class ServerTime:
    server_time: int

    @classmethod
    def from_payload(cls, payload: dict) -> "ServerTime":
        return cls(server_time=int(payload["serverTime"]))


@dataclass(slots=True)
class RateLimit:
    rate_limit_type: RateLimitType
    interval: RateLimitInterval
    interval_num: int
    limit: int

    @classmethod
    def from_payload(cls, payload: dict) -> "RateLimit":
        return cls(
            rate_limit_type=payload["rateLimitType"],
            interval=payload["interval"],
            interval_num=int(payload["intervalNum"]),
            limit=int(payload["limit"]),
        )


@dataclass(slots=True)
class SymbolInfo:
    """Trading rules for a single symbol (e.g. BTCUSDT: base BTC, quote USDT)."""

    symbol: str
    status: SymbolStatus
    base_asset: str
    base_asset_precision: int
    quote_asset: str
    quote_asset_precision: int
    order_types: List[OrderType] = field(default_factory=list)
    iceberg_allowed: bool = False
    oco_allowed: bool = False
    quote_order_qty_market_allowed: bool = False
    is_spot_trading_allowed: bool = False
    is_margin_trading_allowed: bool = False
    quote_precision: Optional[int] = None
    base_commission_precision: Optional[int] = None
    quote_commission_precision: Optional[int] = None
    filters: List[Any] = field(default_factory=list)
    permissions: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict) -> "SymbolInfo":
        return cls(
            symbol=payload["symbol"],
            status=payload["status"],
            base_asset=payload["baseAsset"],
            base_asset_precision=int(payload["baseAssetPrecision"]),
            quote_asset=payload["quoteAsset"],
            quote_asset_precision=int(payload["quoteAssetPrecision"]),
            order_types=list(payload.get("orderTypes", [])),
            iceberg_allowed=bool(payload.get("icebergAllowed", False)),
            oco_allowed=bool(payload.get("ocoAllowed", False)),
            quote_order_qty_market_allowed=bool(payload.get("quoteOrderQtyMarketAllowed", False)),
            is_spot_trading_allowed=bool(payload.get("isSpotTradingAllowed", False)),
            is_margin_trading_allowed=bool(payload.get("isMarginTradingAllowed", False)),
            quote_precision=_optional_int(payload.get("quotePrecision")),
            base_commission_precision=_optional_int(payload.get("baseCommissionPrecision")),
            quote_commission_precision=_optional_int(payload.get("quoteCommissionPrecision")),
            filters=[parse_filter(item) for item in payload.get("filters", [])],
            permissions=list(payload.get("permissions", [])),
        )

    def get_filter(self, filter_type: str) -> Any:
        """Return the first filter of `filter_type`, or None."""
        for item in self.filters:
            if item.filter_type == filter_type:
                return item
        return None


@dataclass(slots=True)
class ExchangeInfo:
    timezone: str
    server_time: int
    rate_limits: List[RateLimit] = field(default_factory=list)
    exchange_filters: List[Any] = field(default_factory=list)
    symbols: List[SymbolInfo] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict) -> "ExchangeInfo":
        return cls(
            timezone=payload["timezone"],
            server_time=int(payload["serverTime"]),
            rate_limits=[RateLimit.from_payload(item) for item in payload.get("rateLimits", [])],
            exchange_filters=[parse_filter(item) for item in payload.get("exchangeFilters", [])],
            symbols=[SymbolInfo.from_payload(item) for item in payload.get("symbols", [])],
        )

    def get_symbol(self, symbol: str) -> Optional[SymbolInfo]:
        wanted = symbol.upper()
        return next((info for info in self.symbols if info.symbol == wanted), None)


# ---------------------------------------------------------------------------
# Market data
# ---------------------------------------------------------------------------
@dataclass(slots=True)
class PriceLevel:
    price: str
    quantity: str

    @classmethod
    def from_payload(cls, payload: Sequence[Any]) -> "PriceLevel":
        return cls(price=payload[0], quantity=payload[1])


@dataclass(slots=True)
class OrderBook:
    last_update_id: int
    bids: List[PriceLevel] = field(default_factory=list)
    asks: List[PriceLevel] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict) -> "OrderBook":
        return cls(
            last_update_id=int(payload["lastUpdateId"]),
            bids=[PriceLevel.from_payload(level) for level in payload.get("bids", [])],
            asks=[PriceLevel.from_payload(level) for level in payload.get("asks", [])],
        )


@dataclass(slots=True)
class Trade:
    id: int
    price: str
    qty: str
    quote_qty: str
    time: int
    is_buyer_maker: bool
    is_best_match: bool

    @classmethod
    def from_payload(cls, payload: dict) -> "Trade":
        return cls(
            id=int(payload["id"]),
            price=payload["price"],
            qty=payload["qty"],
            quote_qty=payload["quoteQty"],
            time=int(payload["time"]),
            is_buyer_maker=bool(payload["isBuyerMaker"]),
            is_best_match=bool(payload["isBestMatch"]),
        )


@dataclass(slots=True)
class AggregateTrade:
    """Trades filled at the same time, price and taker order, aggregated."""

    aggregate_trade_id: int
    price: str
    quantity: str
    first_trade_id: int
    last_trade_id: int
    timestamp: int
    is_buyer_maker: bool
    is_best_match: bool

    @classmethod
    def from_payload(cls, payload: dict) -> "AggregateTrade":
        return cls(
            aggregate_trade_id=int(payload["a"]),
            price=payload["p"],
            quantity=payload["q"],
            first_trade_id=int(payload["f"]),
            last_trade_id=int(payload["l"]),
            timestamp=int(payload["T"]),
            is_buyer_maker=bool(payload["m"]),
            is_best_match=bool(payload["M"]),
        )


@dataclass(slots=True)
class Kline:
    """Candlestick bar, uniquely identified by its open time."""

    open_time: int
    open: str
    high: str
    low: str
    close: str
    volume: str
    close_time: int
    quote_asset_volume: str
    number_of_trades: int
    taker_buy_base_volume: str
    taker_buy_quote_volume: str

    @classmethod
    def from_payload(cls, payload: Sequence[Any]) -> "Kline":
        if len(payload) < 11:
            raise ValueError(f"Kline row has {len(payload)} fields, expected at least 11")
        return cls(
            open_time=int(payload[0]),
            open=payload[1],
            high=payload[2],
            low=payload[3],
            close=payload[4],
            volume=payload[5],
            close_time=int(payload[6]),
            quote_asset_volume=payload[7],
            number_of_trades=int(payload[8]),
            taker_buy_base_volume=payload[9],
            taker_buy_quote_volume=payload[10],
        )


@dataclass(slots=True)
class AveragePrice:
    mins: int
    price: str

    @classmethod
    def from_payload(cls, payload: dict) -> "AveragePrice":
        return cls(mins=int(payload["mins"]), price=payload["price"])


@dataclass(slots=True)
class Ticker24h:
    """24 hour rolling window price change statistics."""

    symbol: str
    price_change: str
    price_change_percent: str
    weighted_avg_price: str
    prev_close_price: str
    last_price: str
    last_qty: str
    bid_price: str
    bid_qty: str
    ask_price: str
    ask_qty: str
    open_price: str
    high_price: str
    low_price: str
    volume: str
    quote_volume: str
    open_time: int
    close_time: int
    first_id: int
    last_id: int
    count: int

    @classmethod
    def from_payload(cls, payload: dict) -> "Ticker24h":
        return cls(
            symbol=payload["symbol"],
            price_change=payload["priceChange"],
            price_change_percent=payload["priceChangePercent"],
            weighted_avg_price=payload["weightedAvgPrice"],
            prev_close_price=payload["prevClosePrice"],
            last_price=payload["lastPrice"],
            last_qty=payload["lastQty"],
            bid_price=payload["bidPrice"],
            bid_qty=payload["bidQty"],
            ask_price=payload["askPrice"],
            ask_qty=payload["askQty"],
            open_price=payload["openPrice"],
            high_price=payload["highPrice"],
            low_price=payload["lowPrice"],
            volume=payload["volume"],
            quote_volume=payload["quoteVolume"],
            open_time=int(payload["openTime"]),
            close_time=int(payload["closeTime"]),
            first_id=int(payload["firstId"]),
            last_id=int(payload["lastId"]),
            count=int(payload["count"]),
        )


@dataclass(slots=True)
class PriceTicker:
    symbol: str
    price: str

    @classmethod
    def from_payload(cls, payload: dict) -> "PriceTicker":
        return cls(symbol=payload["symbol"], price=payload["price"])


@dataclass(slots=True)
class BookTicker:
    symbol: str
    bid_price: str
    bid_qty: str
    ask_price: str
    ask_qty: str

    @classmethod
    def from_payload(cls, payload: dict) -> "BookTicker":
        return cls(
            symbol=payload["symbol"],
            bid_price=payload["bidPrice"],
            bid_qty=payload["bidQty"],
            ask_price=payload["askPrice"],
            ask_qty=payload["askQty"],
        )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@dataclass(slots=True)
class OrderFill:
    price: str
    qty: str
    commission: str
    commission_asset: str
    trade_id: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "OrderFill":
        return cls(
            price=payload["price"],
            qty=payload["qty"],
            commission=payload["commission"],
            commission_asset=payload["commissionAsset"],
            trade_id=_optional_int(payload.get("tradeId")),
        )


@dataclass(slots=True)
class NewOrderAck:
    symbol: str
    order_id: int
    order_list_id: int
    client_order_id: str
    transact_time: int

    @classmethod
    def from_payload(cls, payload: dict) -> "NewOrderAck":
        return cls(**_ack_fields(payload))


@dataclass(slots=True)
class NewOrderResult(NewOrderAck):
    price: Optional[str] = None
    orig_qty: Optional[str] = None
    executed_qty: Optional[str] = None
    cummulative_quote_qty: Optional[str] = None
    status: Optional[OrderStatus] = None
    time_in_force: Optional[TimeInForce] = None
    type: Optional[OrderType] = None
    side: Optional[OrderSide] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "NewOrderResult":
        return cls(**_ack_fields(payload), **_result_fields(payload))


@dataclass(slots=True)
class NewOrderFull(NewOrderResult):
    fills: List[OrderFill] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict) -> "NewOrderFull":
        return cls(
            **_ack_fields(payload),
            **_result_fields(payload),
            fills=[OrderFill.from_payload(item) for item in payload.get("fills", [])],
        )


@dataclass(slots=True)
class Order:
    """
    Order state as returned by query, cancel and open-order endpoints.

    For some historical orders `cummulative_quote_qty` is negative, meaning the
    data is not available at this time.
    """

    symbol: str
    order_id: int
    client_order_id: str
    status: OrderStatus
    type: OrderType
    side: OrderSide
    order_list_id: int = -1
    orig_client_order_id: Optional[str] = None
    price: Optional[str] = None
    orig_qty: Optional[str] = None
    executed_qty: Optional[str] = None
    cummulative_quote_qty: Optional[str] = None
    time_in_force: Optional[TimeInForce] = None
    stop_price: Optional[str] = None
    iceberg_qty: Optional[str] = None
    time: Optional[int] = None
    update_time: Optional[int] = None
    transact_time: Optional[int] = None
    is_working: Optional[bool] = None
    orig_quote_order_qty: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "Order":
        return cls(
            symbol=payload["symbol"],
            order_id=int(payload["orderId"]),
            client_order_id=payload["clientOrderId"],
            status=payload["status"],
            type=payload["type"],
            side=payload["side"],
            order_list_id=int(payload.get("orderListId", -1)),
            orig_client_order_id=payload.get("origClientOrderId"),
            price=payload.get("price"),
            orig_qty=payload.get("origQty"),
            executed_qty=payload.get("executedQty"),
            cummulative_quote_qty=payload.get("cummulativeQuoteQty"),
            time_in_force=payload.get("timeInForce"),
            stop_price=payload.get("stopPrice"),
            iceberg_qty=payload.get("icebergQty"),
            time=_optional_int(payload.get("time")),
            update_time=_optional_int(payload.get("updateTime")),
            transact_time=_optional_int(payload.get("transactTime")),
            is_working=payload.get("isWorking"),
            orig_quote_order_qty=payload.get("origQuoteOrderQty"),
        )


@dataclass(slots=True)
class OrderListSummary:
    symbol: str
    order_id: int
    client_order_id: str

    @classmethod
    def from_payload(cls, payload: dict) -> "OrderListSummary":
        return cls(
            symbol=payload["symbol"],
            order_id=int(payload["orderId"]),
            client_order_id=payload["clientOrderId"],
        )


@dataclass(slots=True)
class OrderList:
    """An OCO order list; `order_reports` is empty for ACK responses and queries."""

    order_list_id: int
    contingency_type: str
    list_status_type: OCOStatus
    list_order_status: OCOOrderStatus
    list_client_order_id: str
    transaction_time: int
    symbol: str
    orders: List[OrderListSummary] = field(default_factory=list)
    order_reports: List[Order] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict) -> "OrderList":
        return cls(
            order_list_id=int(payload["orderListId"]),
            contingency_type=payload.get("contingencyType", "OCO"),
            list_status_type=payload["listStatusType"],
            list_order_status=payload["listOrderStatus"],
            list_client_order_id=payload["listClientOrderId"],
            transaction_time=int(payload["transactionTime"]),
            symbol=payload["symbol"],
            orders=[OrderListSummary.from_payload(item) for item in payload.get("orders", [])],
            order_reports=[Order.from_payload(item) for item in payload.get("orderReports", [])],
        )


def parse_order_or_order_list(payload: dict) -> Order | OrderList:
    """Cancel-all returns plain orders mixed with OCO order lists."""
    if "contingencyType" in payload or "listStatusType" in payload:
        return OrderList.from_payload(payload)
    return Order.from_payload(payload)


# ---------------------------------------------------------------------------
# Account
# ---------------------------------------------------------------------------
@dataclass(slots=True)
class Balance:
    asset: str
    free: str
    locked: str

    @classmethod
    def from_payload(cls, payload: dict) -> "Balance":
        return cls(asset=payload["asset"], free=payload["free"], locked=payload["locked"])


@dataclass(slots=True)
class AccountInformation:
    maker_commission: int
    taker_commission: int
    buyer_commission: int
    seller_commission: int
    can_trade: bool
    can_withdraw: bool
    can_deposit: bool
    update_time: int
    account_type: str
    balances: List[Balance] = field(default_factory=list)
    permissions: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict) -> "AccountInformation":
        return cls(
            maker_commission=int(payload["makerCommission"]),
            taker_commission=int(payload["takerCommission"]),
            buyer_commission=int(payload["buyerCommission"]),
            seller_commission=int(payload["sellerCommission"]),
            can_trade=bool(payload["canTrade"]),
            can_withdraw=bool(payload["canWithdraw"]),
            can_deposit=bool(payload["canDeposit"]),
            update_time=int(payload["updateTime"]),
            account_type=payload["accountType"],
            balances=[Balance.from_payload(item) for item in payload.get("balances", [])],
            permissions=list(payload.get("permissions", [])),
        )

    def balance_of(self, asset: str) -> Optional[Balance]:
        wanted = asset.upper()
        return next((balance for balance in self.balances if balance.asset == wanted), None)


@dataclass(slots=True)
class AccountTrade:
    symbol: str
    id: int
    order_id: int
    order_list_id: int
    price: str
    qty: str
    quote_qty: str
    commission: str
    commission_asset: str
    time: int
    is_buyer: bool
    is_maker: bool
    is_best_match: bool

    @classmethod
    def from_payload(cls, payload: dict) -> "AccountTrade":
        return cls(
            symbol=payload["symbol"],
            id=int(payload["id"]),
            order_id=int(payload["orderId"]),
            order_list_id=int(payload.get("orderListId", -1)),
            price=payload["price"],
            qty=payload["qty"],
            quote_qty=payload["quoteQty"],
            commission=payload["commission"],
            commission_asset=payload["commissionAsset"],
            time=int(payload["time"]),
            is_buyer=bool(payload["isBuyer"]),
            is_maker=bool(payload["isMaker"]),
            is_best_match=bool(payload["isBestMatch"]),
        )


@dataclass(slots=True)
class OrderCountUsage:
    rate_limit_type: RateLimitType
    interval: RateLimitInterval
    interval_num: int
    limit: int
    count: int

    @classmethod
    def from_payload(cls, payload: dict) -> "OrderCountUsage":
        return cls(
            rate_limit_type=payload["rateLimitType"],
            interval=payload["interval"],
            interval_num=int(payload["intervalNum"]),
            limit=int(payload["limit"]),
            count=int(payload["count"]),
        )


@dataclass(slots=True)
class ListenKey:
    listen_key: str

    @classmethod
    def from_payload(cls, payload: dict) -> "ListenKey":
        return cls(listen_key=payload["listenKey"])


def _ack_fields(payload: dict) -> Dict[str, Any]:
    return {
        "symbol": payload["symbol"],
        "order_id": int(payload["orderId"]),
        "order_list_id": int(payload.get("orderListId", -1)),
        "client_order_id": payload["clientOrderId"],
        "transact_time": int(payload["transactTime"]),
    }


def _result_fields(payload: dict) -> Dict[str, Any]:
    return {
        "price": payload.get("price"),
        "orig_qty": payload.get("origQty"),
        "executed_qty": payload.get("executedQty"),
        "cummulative_quote_qty": payload.get("cummulativeQuoteQty"),
        "status": payload.get("status"),
        "time_in_force": payload.get("timeInForce"),
        "type": payload.get("type"),
        "side": payload.get("side"),
    }


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)
