import pytest

from exchanges.binance.filters import LotSizeFilter, PriceFilter, UnknownFilter, parse_filter
from exchanges.binance.schemas import (
    AccountInformation,
    ExchangeInfo,
    Kline,
    NewOrderFull,
    Order,
    OrderBook,
    OrderList,
    parse_order_or_order_list,
)

SYMBOL_PAYLOAD = {
    "symbol": "ETHBTC",
    "status": "TRADING",
    "baseAsset": "ETH",
    "baseAssetPrecision": 8,
    "quoteAsset": "BTC",
    "quotePrecision": 8,
    "quoteAssetPrecision": 8,
    "orderTypes": ["LIMIT", "MARKET"],
    "icebergAllowed": True,
    "ocoAllowed": True,
    "isSpotTradingAllowed": True,
    "isMarginTradingAllowed": False,
    "filters": [
        {"filterType": "PRICE_FILTER", "minPrice": "0.00000100", "maxPrice": "100000.00000000", "tickSize": "0.00000100"},
        {"filterType": "LOT_SIZE", "minQty": "0.00100000", "maxQty": "100000.00000000", "stepSize": "0.00100000"},
        {"filterType": "TRAILING_DELTA", "minTrailingAboveDelta": 10},
    ],
    "permissions": ["SPOT"],
}

OCO_ORDER_LIST = {
    "orderListId": 0,
    "contingencyType": "OCO",
    "listStatusType": "EXEC_STARTED",
    "listOrderStatus": "EXECUTING",
    "listClientOrderId": "JYVpp3F0f5CAG15DhtrqLp",
    "transactionTime": 1563417480525,
    "symbol": "LTCBTC",
    "orders": [
        {"symbol": "LTCBTC", "orderId": 2, "clientOrderId": "Kk7sqHb9J6mJWTMDVW7Vos"},
        {"symbol": "LTCBTC", "orderId": 3, "clientOrderId": "xTXKaGYd4bluPVp78IVRvl"},
    ],
    "orderReports": [
        {
            "symbol": "LTCBTC",
            "orderId": 2,
            "orderListId": 0,
            "clientOrderId": "Kk7sqHb9J6mJWTMDVW7Vos",
            "transactTime": 1563417480525,
            "price": "0.000000",
            "origQty": "0.624363",
            "executedQty": "0.000000",
            "cummulativeQuoteQty": "0.000000",
            "status": "NEW",
            "timeInForce": "GTC",
            "type": "STOP_LOSS",
            "side": "BUY",
            "stopPrice": "0.960664",
        }
    ],
}


def test_exchange_info_decodes_symbols_and_filters():
    info = ExchangeInfo.from_payload(
        {
            "timezone": "UTC",
            "serverTime": 1565246363776,
            "rateLimits": [
                {"rateLimitType": "REQUEST_WEIGHT", "interval": "MINUTE", "intervalNum": 1, "limit": 1200}
            ],
            "exchangeFilters": [{"filterType": "EXCHANGE_MAX_NUM_ORDERS", "maxNumOrders": 1000}],
            "symbols": [SYMBOL_PAYLOAD],
        }
    )

    assert info.rate_limits[0].limit == 1200
    assert info.exchange_filters[0].max_num_orders == 1000
    symbol = info.get_symbol("ethbtc")
    assert symbol is not None
    assert symbol.oco_allowed is True
    assert isinstance(symbol.get_filter("PRICE_FILTER"), PriceFilter)
    assert symbol.get_filter("LOT_SIZE").step_size == "0.00100000"
    assert isinstance(symbol.filters[2], UnknownFilter)
    assert symbol.filters[2].raw["minTrailingAboveDelta"] == 10
    assert info.get_symbol("BNBBTC") is None


def test_parse_filter_dispatches_on_type():
    lot = parse_filter({"filterType": "LOT_SIZE", "minQty": "1", "maxQty": "10", "stepSize": "1"})
    assert lot == LotSizeFilter(min_qty="1", max_qty="10", step_size="1")


def test_kline_from_array():
    kline = Kline.from_payload(
        [1499040000000, "0.01634790", "0.80000000", "0.01575800", "0.01577100",
         "148976.11427815", 1499644799999, "2434.19055334", 308, "1756.87402397",
         "28.46694368", "0"]
    )
    assert kline.open_time == 1499040000000
    assert kline.close == "0.01577100"
    assert kline.number_of_trades == 308
    assert kline.taker_buy_quote_volume == "28.46694368"


def test_kline_rejects_short_rows():
    with pytest.raises(ValueError):
        Kline.from_payload([1499040000000, "0.1"])


def test_order_book_levels():
    book = OrderBook.from_payload(
        {"lastUpdateId": 1027024, "bids": [["4.00000000", "431.00000000"]], "asks": [["4.00000200", "12.00000000"]]}
    )
    assert book.bids[0].price == "4.00000000"
    assert book.asks[0].quantity == "12.00000000"


def test_new_order_full_keeps_fills():
    order = NewOrderFull.from_payload(
        {
            "symbol": "BTCUSDT",
            "orderId": 28,
            "orderListId": -1,
            "clientOrderId": "6gCrw2kRUAF9CvJDGP16IP",
            "transactTime": 1507725176595,
            "price": "0.00000000",
            "origQty": "10.00000000",
            "executedQty": "10.00000000",
            "cummulativeQuoteQty": "10.00000000",
            "status": "FILLED",
            "timeInForce": "GTC",
            "type": "MARKET",
            "side": "SELL",
            "fills": [
                {"price": "4000.00000000", "qty": "1.00000000", "commission": "4.00000000",
                 "commissionAsset": "USDT", "tradeId": 56},
            ],
        }
    )
    assert order.order_id == 28
    assert order.status == "FILLED"
    assert order.fills[0].trade_id == 56


def test_order_list_and_cancel_all_discrimination():
    order_list = parse_order_or_order_list(OCO_ORDER_LIST)
    assert isinstance(order_list, OrderList)
    assert [summary.order_id for summary in order_list.orders] == [2, 3]
    assert order_list.order_reports[0].stop_price == "0.960664"

    plain = parse_order_or_order_list(
        {
            "symbol": "BTCUSDT",
            "origClientOrderId": "E6APeyTJvkMvLMYMqu1KQ4",
            "orderId": 11,
            "orderListId": -1,
            "clientOrderId": "pXLV6Hz6mprAcVYpVMTGgx",
            "price": "0.089853",
            "origQty": "0.178622",
            "executedQty": "0.000000",
            "cummulativeQuoteQty": "0.000000",
            "status": "CANCELED",
            "timeInForce": "GTC",
            "type": "LIMIT",
            "side": "BUY",
        }
    )
    assert isinstance(plain, Order)
    assert plain.orig_client_order_id == "E6APeyTJvkMvLMYMqu1KQ4"
    assert plain.time is None


def test_account_information_balance_lookup():
    account = AccountInformation.from_payload(
        {
            "makerCommission": 15,
            "takerCommission": 15,
            "buyerCommission": 0,
            "sellerCommission": 0,
            "canTrade": True,
            "canWithdraw": True,
            "canDeposit": True,
            "updateTime": 123456789,
            "accountType": "SPOT",
            "balances": [
                {"asset": "BTC", "free": "4723846.89208129", "locked": "0.00000000"},
                {"asset": "LTC", "free": "4763368.68006011", "locked": "0.00000000"},
            ],
            "permissions": ["SPOT"],
        }
    )
    assert account.balance_of("ltc").free == "4763368.68006011"
    assert account.balance_of("ETH") is None
