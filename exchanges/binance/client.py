"""
Binance Spot REST client.

Every endpoint method performs a single request and returns either
`ResponseSuccess` carrying a typed payload or `ResponseError`; transport,
HTTP and pre-flight validation failures never raise. The client defaults to
the Spot testnet (``https://testnet.binance.vision``) so real funds are only
touched when ``testnet=False`` is passed explicitly.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

import httpx

from exchanges.base_client import ExchangeClient, ExchangeCredentials
from exchanges.binance.config import MAINNET_URL, TESTNET_URL, BinanceConfig
from exchanges.binance.request import BinanceRequest, MissingCredentialsError
from exchanges.binance.responses import Response, ResponseError, ResponseSuccess
from exchanges.binance.schemas import (
    AccountInformation,
    AccountTrade,
    AggregateTrade,
    AveragePrice,
    BookTicker,
    ExchangeInfo,
    KLineInterval,
    Kline,
    ListenKey,
    NewOrderAck,
    NewOrderFull,
    NewOrderResult,
    Order,
    OrderBook,
    OrderBookLimit,
    OrderCountUsage,
    OrderList,
    OrderResponseType,
    OrderSide,
    OrderType,
    PriceTicker,
    ServerTime,
    Ticker24h,
    TimeInForce,
    Trade,
    parse_order_or_order_list,
)
from exchanges.binance.validation import (
    OrderParameters,
    OrderValidationError,
    require_exactly_one,
    resolve_response_type,
    validate_order,
    validate_order_book_limit,
)

logger = logging.getLogger(__name__)

# General
PING = BinanceRequest("GET", "/api/v3/ping")
SERVER_TIME = BinanceRequest("GET", "/api/v3/time")
EXCHANGE_INFO = BinanceRequest("GET", "/api/v3/exchangeInfo")
# Market data
ORDER_BOOK = BinanceRequest("GET", "/api/v3/depth")
RECENT_TRADES = BinanceRequest("GET", "/api/v3/trades")
HISTORICAL_TRADES = BinanceRequest("GET", "/api/v3/historicalTrades", requires_api_key=True)
AGGREGATE_TRADES = BinanceRequest("GET", "/api/v3/aggTrades")
KLINES = BinanceRequest("GET", "/api/v3/klines")
AVERAGE_PRICE = BinanceRequest("GET", "/api/v3/avgPrice")
TICKER_24H = BinanceRequest("GET", "/api/v3/ticker/24hr")
TICKER_PRICE = BinanceRequest("GET", "/api/v3/ticker/price")
BOOK_TICKER = BinanceRequest("GET", "/api/v3/ticker/bookTicker")
# Trading
NEW_ORDER = BinanceRequest("POST", "/api/v3/order", signed=True)
TEST_ORDER = BinanceRequest("POST", "/api/v3/order/test", signed=True)
QUERY_ORDER = BinanceRequest("GET", "/api/v3/order", signed=True)
CANCEL_ORDER = BinanceRequest("DELETE", "/api/v3/order", signed=True)
CANCEL_OPEN_ORDERS = BinanceRequest("DELETE", "/api/v3/openOrders", signed=True)
OPEN_ORDERS = BinanceRequest("GET", "/api/v3/openOrders", signed=True)
ALL_ORDERS = BinanceRequest("GET", "/api/v3/allOrders", signed=True)
NEW_OCO = BinanceRequest("POST", "/api/v3/order/oco", signed=True)
CANCEL_ORDER_LIST = BinanceRequest("DELETE", "/api/v3/orderList", signed=True)
QUERY_ORDER_LIST = BinanceRequest("GET", "/api/v3/orderList", signed=True)
ALL_ORDER_LISTS = BinanceRequest("GET", "/api/v3/allOrderList", signed=True)
OPEN_ORDER_LISTS = BinanceRequest("GET", "/api/v3/openOrderList", signed=True)
# Account
ACCOUNT = BinanceRequest("GET", "/api/v3/account", signed=True)
MY_TRADES = BinanceRequest("GET", "/api/v3/myTrades", signed=True)
ORDER_COUNT_USAGE = BinanceRequest("GET", "/api/v3/rateLimit/order", signed=True)
# User data stream
START_USER_STREAM = BinanceRequest("POST", "/api/v3/userDataStream", requires_api_key=True)
KEEPALIVE_USER_STREAM = BinanceRequest("PUT", "/api/v3/userDataStream", requires_api_key=True)
CLOSE_USER_STREAM = BinanceRequest("DELETE", "/api/v3/userDataStream", requires_api_key=True)

AGGREGATE_TRADES_MAX_WINDOW_MS = 60 * 60 * 1000

_NEW_ORDER_PARSERS: Dict[str, Callable[[dict], Any]] = {
    "ACK": NewOrderAck.from_payload,
    "RESULT": NewOrderResult.from_payload,
    "FULL": NewOrderFull.from_payload,
}


class BinanceSpotClient(ExchangeClient):
    """Typed client for the Binance Spot REST API."""

    name = "binance-spot"

    def __init__(
        self,
        credentials: ExchangeCredentials | None = None,
        *,
        testnet: bool = True,
        base_url: str | None = None,
        timeout: float = 10.0,
        recv_window: int | None = None,
    ) -> None:
        self._base_url = (base_url or (TESTNET_URL if testnet else MAINNET_URL)).rstrip("/")
        self._client = httpx.Client(base_url=self._base_url, timeout=timeout)
        self._credentials = credentials
        self._recv_window = recv_window
        self._closed = False
        logger.info("Binance Spot client using %s (authenticated=%s)", self._base_url, credentials is not None)

    @classmethod
    def from_config(cls, config: BinanceConfig) -> "BinanceSpotClient":
        return cls(
            config.credentials(),
            base_url=config.resolved_base_url,
            timeout=config.timeout,
            recv_window=config.recv_window,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def authenticate(self, credentials: ExchangeCredentials) -> None:
        self._credentials = credentials

    def close(self) -> None:
        self._client.close()
        self._closed = True
        self._credentials = None
        logger.info("Binance Spot client for %s closed", self._base_url)

    def __enter__(self) -> "BinanceSpotClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ---------------------------------------------------------------------
    # General endpoints
    # ---------------------------------------------------------------------
    def ping(self) -> Response[Dict[str, Any]]:
        """Test connectivity to the REST API. Weight 1."""
        return self._call(PING)

    def get_server_time(self) -> Response[ServerTime]:
        return self._call(SERVER_TIME, parse=ServerTime.from_payload)

    def get_exchange_info(self, symbols: Sequence[str] | None = None) -> Response[ExchangeInfo]:
        """Current trading rules and symbol information, optionally limited to `symbols`."""
        params = {"symbols": list(symbols) if symbols else None}
        return self._call(EXCHANGE_INFO, params, parse=ExchangeInfo.from_payload)

    # ---------------------------------------------------------------------
    # Market data endpoints
    # ---------------------------------------------------------------------
    def get_order_book(self, symbol: str, limit: OrderBookLimit = 100) -> Response[OrderBook]:
        """
        Order book depth. Valid limits: 5, 10, 20, 50, 100, 500, 1000, 5000;
        weight grows with the limit (1 up to 100, 50 for 5000).
        """
        try:
            validate_order_book_limit(limit)
        except OrderValidationError as exc:
            return self._reject(ORDER_BOOK, exc)
        return self._call(ORDER_BOOK, {"symbol": symbol, "limit": limit}, parse=OrderBook.from_payload)

    def get_recent_trades(self, symbol: str, limit: int = 500) -> Response[List[Trade]]:
        return self._call(
            RECENT_TRADES,
            {"symbol": symbol, "limit": limit},
            parse=_list_of(Trade.from_payload),
        )

    def get_historical_trades(
        self,
        symbol: str,
        limit: int = 500,
        from_id: int | None = None,
    ) -> Response[List[Trade]]:
        """Older trades starting at `from_id`; the most recent ones when omitted."""
        return self._call(
            HISTORICAL_TRADES,
            {"symbol": symbol, "limit": limit, "fromId": from_id},
            parse=_list_of(Trade.from_payload),
        )

    def get_aggregate_trades(
        self,
        symbol: str,
        limit: int = 500,
        from_id: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
    ) -> Response[List[AggregateTrade]]:
        """
        Compressed trades. When both `start_time` and `end_time` are sent they
        must be less than one hour apart; with neither of `from_id`,
        `start_time` or `end_time` the most recent trades are returned.
        """
        if start_time is not None and end_time is not None and end_time - start_time >= AGGREGATE_TRADES_MAX_WINDOW_MS:
            return self._reject(
                AGGREGATE_TRADES,
                OrderValidationError(["'startTime' and 'endTime' must be less than one hour apart."]),
            )
        return self._call(
            AGGREGATE_TRADES,
            {
                "symbol": symbol,
                "limit": limit,
                "fromId": from_id,
                "startTime": start_time,
                "endTime": end_time,
            },
            parse=_list_of(AggregateTrade.from_payload),
        )

    def get_klines(
        self,
        symbol: str,
        interval: KLineInterval,
        limit: int = 500,
        start_time: int | None = None,
        end_time: int | None = None,
    ) -> Response[List[Kline]]:
        return self._call(
            KLINES,
            {
                "symbol": symbol,
                "interval": interval,
                "limit": limit,
                "startTime": start_time,
                "endTime": end_time,
            },
            parse=_list_of(Kline.from_payload),
        )

    def get_average_price(self, symbol: str) -> Response[AveragePrice]:
        return self._call(AVERAGE_PRICE, {"symbol": symbol}, parse=AveragePrice.from_payload)

    def get_24h_ticker(self, symbol: str | None = None) -> Response[Ticker24h | List[Ticker24h]]:
        """24h rolling statistics; every symbol (weight 40) when `symbol` is omitted."""
        return self._call(TICKER_24H, {"symbol": symbol}, parse=_one_or_many(symbol, Ticker24h.from_payload))

    def get_ticker_price(self, symbol: str | None = None) -> Response[PriceTicker | List[PriceTicker]]:
        return self._call(TICKER_PRICE, {"symbol": symbol}, parse=_one_or_many(symbol, PriceTicker.from_payload))

    def get_book_ticker(self, symbol: str | None = None) -> Response[BookTicker | List[BookTicker]]:
        """Best bid/ask price and quantity for one symbol, or all of them."""
        return self._call(BOOK_TICKER, {"symbol": symbol}, parse=_one_or_many(symbol, BookTicker.from_payload))

    # ---------------------------------------------------------------------
    # Trading endpoints
    # ---------------------------------------------------------------------
    def create_order(
        self,
        symbol: str,
        side: OrderSide,
        order_type: OrderType,
        *,
        time_in_force: TimeInForce | None = None,
        quantity: Any = None,
        quote_order_qty: Any = None,
        price: Any = None,
        new_client_order_id: str | None = None,
        stop_price: Any = None,
        iceberg_qty: Any = None,
        new_order_resp_type: OrderResponseType | None = None,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[NewOrderAck | NewOrderResult | NewOrderFull]:
        """
        Place a new order.

        The payload type follows ``newOrderRespType``; when it is omitted MARKET
        and LIMIT orders answer with FULL, every other type with ACK.
        """
        order = OrderParameters(
            symbol=symbol,
            side=side,
            type=order_type,
            time_in_force=time_in_force,
            quantity=quantity,
            quote_order_qty=quote_order_qty,
            price=price,
            new_client_order_id=new_client_order_id,
            stop_price=stop_price,
            iceberg_qty=iceberg_qty,
            new_order_resp_type=new_order_resp_type,
            recv_window=self._effective_recv_window(recv_window),
            timestamp=timestamp,
        )
        try:
            validate_order(order)
        except OrderValidationError as exc:
            return self._reject(NEW_ORDER, exc)
        parser = _NEW_ORDER_PARSERS[resolve_response_type(order_type, new_order_resp_type)]
        return self._call(NEW_ORDER, order.to_query(), parse=parser)

    def test_order(
        self,
        symbol: str,
        side: OrderSide,
        order_type: OrderType,
        *,
        time_in_force: TimeInForce | None = None,
        quantity: Any = None,
        quote_order_qty: Any = None,
        price: Any = None,
        new_client_order_id: str | None = None,
        stop_price: Any = None,
        iceberg_qty: Any = None,
        new_order_resp_type: OrderResponseType | None = None,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[Dict[str, Any]]:
        """Validate an order and its signature without sending it to the matching engine."""
        order = OrderParameters(
            symbol=symbol,
            side=side,
            type=order_type,
            time_in_force=time_in_force,
            quantity=quantity,
            quote_order_qty=quote_order_qty,
            price=price,
            new_client_order_id=new_client_order_id,
            stop_price=stop_price,
            iceberg_qty=iceberg_qty,
            new_order_resp_type=new_order_resp_type,
            recv_window=self._effective_recv_window(recv_window),
            timestamp=timestamp,
        )
        try:
            validate_order(order)
        except OrderValidationError as exc:
            return self._reject(TEST_ORDER, exc)
        return self._call(TEST_ORDER, order.to_query())

    def get_order(
        self,
        symbol: str,
        order_id: int | None = None,
        orig_client_order_id: str | None = None,
        *,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[Order]:
        """Check an order's status; exactly one of `order_id` / `orig_client_order_id`."""
        try:
            require_exactly_one(orderId=order_id, origClientOrderId=orig_client_order_id)
        except OrderValidationError as exc:
            return self._reject(QUERY_ORDER, exc)
        params = {
            "symbol": symbol,
            "orderId": order_id,
            "origClientOrderId": orig_client_order_id,
        }
        return self._call(QUERY_ORDER, self._signed(params, recv_window, timestamp), parse=Order.from_payload)

    def cancel_order(
        self,
        symbol: str,
        order_id: int | None = None,
        orig_client_order_id: str | None = None,
        new_client_order_id: str | None = None,
        *,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[Order]:
        try:
            require_exactly_one(orderId=order_id, origClientOrderId=orig_client_order_id)
        except OrderValidationError as exc:
            return self._reject(CANCEL_ORDER, exc)
        params = {
            "symbol": symbol,
            "orderId": order_id,
            "origClientOrderId": orig_client_order_id,
            "newClientOrderId": new_client_order_id,
        }
        return self._call(CANCEL_ORDER, self._signed(params, recv_window, timestamp), parse=Order.from_payload)

    def cancel_all_orders(
        self,
        symbol: str,
        *,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[List[Order | OrderList]]:
        """Cancel every active order on a symbol, OCO order lists included."""
        return self._call(
            CANCEL_OPEN_ORDERS,
            self._signed({"symbol": symbol}, recv_window, timestamp),
            parse=_list_of(parse_order_or_order_list),
        )

    def get_open_orders(
        self,
        symbol: str | None = None,
        *,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[List[Order]]:
        """Open orders on `symbol`; every symbol (weight 40) when omitted."""
        return self._call(
            OPEN_ORDERS,
            self._signed({"symbol": symbol}, recv_window, timestamp),
            parse=_list_of(Order.from_payload),
        )

    def get_all_orders(
        self,
        symbol: str,
        limit: int = 500,
        order_id: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        *,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[List[Order]]:
        """All account orders (active, canceled or filled); from `order_id` onward when set."""
        params = {
            "symbol": symbol,
            "orderId": order_id,
            "startTime": start_time,
            "endTime": end_time,
            "limit": limit,
        }
        return self._call(
            ALL_ORDERS,
            self._signed(params, recv_window, timestamp),
            parse=_list_of(Order.from_payload),
        )

    def create_oco_order(
        self,
        symbol: str,
        side: OrderSide,
        quantity: Any,
        price: Any,
        stop_price: Any,
        *,
        list_client_order_id: str | None = None,
        limit_client_order_id: str | None = None,
        limit_iceberg_qty: Any = None,
        stop_client_order_id: str | None = None,
        stop_limit_price: Any = None,
        stop_iceberg_qty: Any = None,
        stop_limit_time_in_force: TimeInForce | None = None,
        new_order_resp_type: OrderResponseType | None = None,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[OrderList]:
        """
        Place a One-Cancels-the-Other pair: a LIMIT_MAKER leg at `price` and a
        STOP_LOSS(_LIMIT) leg triggered at `stop_price`.

        Price ordering must be SELL: limit > last > stop, BUY: limit < last <
        stop. Both legs share `quantity`, and the pair counts as two orders
        against the order rate limit.
        """
        violations = [
            f"'{name}' is required for OCO orders."
            for name, value in (("quantity", quantity), ("price", price), ("stopPrice", stop_price))
            if value is None
        ]
        if stop_limit_price is not None and stop_limit_time_in_force is None:
            violations.append("'stopLimitTimeInForce' is required when 'stopLimitPrice' is given.")
        if violations:
            return self._reject(NEW_OCO, OrderValidationError(violations))
        params = {
            "symbol": symbol,
            "listClientOrderId": list_client_order_id,
            "side": side,
            "quantity": quantity,
            "limitClientOrderId": limit_client_order_id,
            "price": price,
            "limitIcebergQty": limit_iceberg_qty,
            "stopClientOrderId": stop_client_order_id,
            "stopPrice": stop_price,
            "stopLimitPrice": stop_limit_price,
            "stopIcebergQty": stop_iceberg_qty,
            "stopLimitTimeInForce": stop_limit_time_in_force,
            "newOrderRespType": new_order_resp_type,
        }
        return self._call(NEW_OCO, self._signed(params, recv_window, timestamp), parse=OrderList.from_payload)

    def cancel_oco_order(
        self,
        symbol: str,
        order_list_id: int | None = None,
        list_client_order_id: str | None = None,
        new_client_order_id: str | None = None,
        *,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[OrderList]:
        """Cancel an entire order list."""
        try:
            require_exactly_one(orderListId=order_list_id, listClientOrderId=list_client_order_id)
        except OrderValidationError as exc:
            return self._reject(CANCEL_ORDER_LIST, exc)
        params = {
            "symbol": symbol,
            "orderListId": order_list_id,
            "listClientOrderId": list_client_order_id,
            "newClientOrderId": new_client_order_id,
        }
        return self._call(
            CANCEL_ORDER_LIST,
            self._signed(params, recv_window, timestamp),
            parse=OrderList.from_payload,
        )

    def get_oco_order(
        self,
        order_list_id: int | None = None,
        list_client_order_id: str | None = None,
        *,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[OrderList]:
        try:
            require_exactly_one(orderListId=order_list_id, listClientOrderId=list_client_order_id)
        except OrderValidationError as exc:
            return self._reject(QUERY_ORDER_LIST, exc)
        params = {"orderListId": order_list_id, "listClientOrderId": list_client_order_id}
        return self._call(
            QUERY_ORDER_LIST,
            self._signed(params, recv_window, timestamp),
            parse=OrderList.from_payload,
        )

    def get_all_oco_orders(
        self,
        from_id: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
        *,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[List[OrderList]]:
        """Order lists from `from_id`, or within a time window; the two are exclusive."""
        if from_id is not None and (start_time is not None or end_time is not None):
            return self._reject(
                ALL_ORDER_LISTS,
                OrderValidationError(["'fromId' cannot be combined with 'startTime' or 'endTime'."]),
            )
        params = {"fromId": from_id, "startTime": start_time, "endTime": end_time, "limit": limit}
        return self._call(
            ALL_ORDER_LISTS,
            self._signed(params, recv_window, timestamp),
            parse=_list_of(OrderList.from_payload),
        )

    def get_open_oco_orders(
        self,
        *,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[List[OrderList]]:
        return self._call(
            OPEN_ORDER_LISTS,
            self._signed({}, recv_window, timestamp),
            parse=_list_of(OrderList.from_payload),
        )

    # ---------------------------------------------------------------------
    # Account endpoints
    # ---------------------------------------------------------------------
    def get_account_information(
        self,
        *,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[AccountInformation]:
        return self._call(
            ACCOUNT,
            self._signed({}, recv_window, timestamp),
            parse=AccountInformation.from_payload,
        )

    def get_account_trades(
        self,
        symbol: str,
        *,
        order_id: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        from_id: int | None = None,
        limit: int = 500,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[List[AccountTrade]]:
        """Trades of the account on `symbol`."""
        params = {
            "symbol": symbol,
            "orderId": order_id,
            "startTime": start_time,
            "endTime": end_time,
            "fromId": from_id,
            "limit": limit,
        }
        return self._call(
            MY_TRADES,
            self._signed(params, recv_window, timestamp),
            parse=_list_of(AccountTrade.from_payload),
        )

    def get_order_count_usage(
        self,
        *,
        recv_window: int | None = None,
        timestamp: int | None = None,
    ) -> Response[List[OrderCountUsage]]:
        """Current order count usage for every rate limit interval."""
        return self._call(
            ORDER_COUNT_USAGE,
            self._signed({}, recv_window, timestamp),
            parse=_list_of(OrderCountUsage.from_payload),
        )

    # ---------------------------------------------------------------------
    # User data stream endpoints
    # ---------------------------------------------------------------------
    def start_user_data_stream(self) -> Response[ListenKey]:
        """Open a user data stream; it closes after 60 minutes without a keepalive."""
        return self._call(START_USER_STREAM, parse=ListenKey.from_payload)

    def keepalive_user_data_stream(self, listen_key: str) -> Response[Dict[str, Any]]:
        """Extend the stream by 60 minutes; sending one every 30 minutes is recommended."""
        if not listen_key:
            return self._reject(KEEPALIVE_USER_STREAM, OrderValidationError(["'listenKey' is required."]))
        return self._call(KEEPALIVE_USER_STREAM, {"listenKey": listen_key})

    def close_user_data_stream(self, listen_key: str) -> Response[Dict[str, Any]]:
        if not listen_key:
            return self._reject(CLOSE_USER_STREAM, OrderValidationError(["'listenKey' is required."]))
        return self._call(CLOSE_USER_STREAM, {"listenKey": listen_key})

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _effective_recv_window(self, recv_window: int | None) -> int | None:
        return recv_window if recv_window is not None else self._recv_window

    def _signed(self, params: Dict[str, Any], recv_window: int | None, timestamp: int | None) -> Dict[str, Any]:
        return {
            **params,
            "recvWindow": self._effective_recv_window(recv_window),
            "timestamp": timestamp,
        }

    def _reject(self, request: BinanceRequest, exc: OrderValidationError) -> ResponseError:
        logger.info("Rejected %s %s before sending: %s", request.method, request.path, exc)
        return ResponseError(str(exc))

    def _call(
        self,
        request: BinanceRequest,
        params: Optional[Dict[str, Any]] = None,
        parse: Optional[Callable[[Any], Any]] = None,
    ) -> Response[Any]:
        if self._closed:
            return ResponseError("Client is closed; create a new BinanceSpotClient")
        try:
            prepared = request.prepare(params, self._credentials)
        except MissingCredentialsError as exc:
            logger.warning("%s", exc)
            return ResponseError(str(exc))

        logger.debug("Binance request %s %s", prepared.method, prepared.path)
        try:
            response = self._client.request(
                prepared.method,
                prepared.target,
                headers=prepared.headers,
            )
        except httpx.HTTPError as exc:
            logger.warning("Binance %s %s failed: %s", prepared.method, prepared.path, exc)
            return ResponseError(f"Request failed: {exc}")

        if response.is_error:
            error = ResponseError.from_payload(_response_body(response), http_status=response.status_code)
            logger.warning(
                "Binance %s %s returned HTTP %s (code=%s): %s",
                prepared.method,
                prepared.path,
                response.status_code,
                error.code,
                error.message,
            )
            return error

        try:
            payload = response.json()
        except ValueError:
            return ResponseError(
                "Binance returned a body that is not JSON",
                http_status=response.status_code,
                payload={"body": response.text},
            )
        if parse is None:
            return ResponseSuccess(payload)
        try:
            return ResponseSuccess(parse(payload))
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Unexpected payload from %s %s: %r", prepared.method, prepared.path, exc)
            return ResponseError(
                f"Unexpected response payload: {exc!r}",
                http_status=response.status_code,
                payload=payload if isinstance(payload, dict) else {"data": payload},
            )


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _list_of(parser: Callable[[Any], Any]) -> Callable[[Any], list]:
    def parse(payload: Any) -> list:
        if not isinstance(payload, list):
            raise TypeError(f"expected a list, got {type(payload).__name__}")
        return [parser(item) for item in payload]

    return parse


def _one_or_many(symbol: str | None, parser: Callable[[Any], Any]) -> Callable[[Any], Any]:
    # Ticker endpoints return one object for a symbol, an array without one.
    return parser if symbol is not None else _list_of(parser)
