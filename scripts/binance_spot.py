"""
Command-line helper for the Binance Spot REST API.

Usage examples:
    python scripts/binance_spot.py ping
    python scripts/binance_spot.py ticker --symbol BTCUSDT
    python scripts/binance_spot.py place \
        --symbol BTCUSDT --side BUY --type LIMIT --time-in-force GTC \
        --quantity 0.001 --price 24000
    python scripts/binance_spot.py cancel --symbol BTCUSDT --order-id 123456
    python scripts/binance_spot.py listen-key keepalive --listen-key <key>

Environment variables (or the matching names in config.py):
    BINANCE_API_KEY
    BINANCE_API_SECRET
    BINANCE_TESTNET (optional, defaults to "1" for the Spot testnet)
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

# Ensure repository root is importable when executed as a script.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from exchanges.binance import BinanceConfig, BinanceSpotClient, ResponseError  # noqa: E402
from exchanges.binance.schemas import ORDER_SIDES, ORDER_TYPES  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Binance Spot REST helper")
    parser.add_argument(
        "--mainnet",
        action="store_true",
        help="Use api.binance.com instead of the testnet (overrides BINANCE_BASE_URL)",
    )
    parser.add_argument("--log-level", default="WARNING", help="Python logging level (default WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("ping", help="Test connectivity")
    subparsers.add_parser("time", help="Print the server time")

    ticker_parser = subparsers.add_parser("ticker", help="Latest price for one or all symbols")
    ticker_parser.add_argument("--symbol", help="Symbol, e.g. BTCUSDT (all symbols when omitted)")

    depth_parser = subparsers.add_parser("depth", help="Order book depth")
    depth_parser.add_argument("--symbol", required=True)
    depth_parser.add_argument("--limit", type=int, default=100)

    klines_parser = subparsers.add_parser("klines", help="Candlestick bars")
    klines_parser.add_argument("--symbol", required=True)
    klines_parser.add_argument("--interval", default="1h")
    klines_parser.add_argument("--limit", type=int, default=50)

    for command, help_text in (("place", "Submit an order"), ("test-order", "Validate an order without placing it")):
        order_parser = subparsers.add_parser(command, help=help_text)
        order_parser.add_argument("--symbol", required=True)
        order_parser.add_argument("--side", required=True, choices=list(ORDER_SIDES))
        order_parser.add_argument("--type", required=True, choices=list(ORDER_TYPES), dest="order_type")
        order_parser.add_argument("--time-in-force", choices=["GTC", "IOC", "FOK"])
        order_parser.add_argument("--quantity", help="Base asset quantity")
        order_parser.add_argument("--quote-qty", help="Quote asset amount (MARKET orders)")
        order_parser.add_argument("--price", help="Limit price")
        order_parser.add_argument("--stop-price", help="Trigger price for stop/take-profit orders")
        order_parser.add_argument("--client-order-id", help="Optional client order id")
        order_parser.add_argument("--resp-type", choices=["ACK", "RESULT", "FULL"])

    cancel_parser = subparsers.add_parser("cancel", help="Cancel an order")
    cancel_parser.add_argument("--symbol", required=True)
    cancel_group = cancel_parser.add_mutually_exclusive_group(required=True)
    cancel_group.add_argument("--order-id", type=int)
    cancel_group.add_argument("--client-order-id")

    open_parser = subparsers.add_parser("open-orders", help="List open orders")
    open_parser.add_argument("--symbol")

    subparsers.add_parser("account", help="Account information and balances")

    stream_parser = subparsers.add_parser("listen-key", help="Manage the user data stream listen key")
    stream_parser.add_argument("action", choices=["start", "keepalive", "close"])
    stream_parser.add_argument("--listen-key")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = BinanceConfig.from_env()
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    if args.mainnet:
        config.testnet = False
        config.base_url = None

    client = BinanceSpotClient.from_config(config)
    try:
        result = _dispatch(client, args)
    finally:
        client.close()

    if isinstance(result, ResponseError):
        code = f" (code {result.code})" if result.code is not None else ""
        print(f"Error{code}: {result.message}", file=sys.stderr)
        sys.exit(1)
    print(json.dumps(_to_jsonable(result.data), indent=2))


def _dispatch(client: BinanceSpotClient, args: argparse.Namespace) -> Any:
    command = args.command
    if command == "ping":
        return client.ping()
    if command == "time":
        return client.get_server_time()
    if command == "ticker":
        return client.get_ticker_price(args.symbol)
    if command == "depth":
        return client.get_order_book(args.symbol, limit=args.limit)
    if command == "klines":
        return client.get_klines(args.symbol, args.interval, limit=args.limit)
    if command in ("place", "test-order"):
        submit = client.create_order if command == "place" else client.test_order
        return submit(
            args.symbol,
            args.side,
            args.order_type,
            time_in_force=args.time_in_force,
            quantity=args.quantity,
            quote_order_qty=args.quote_qty,
            price=args.price,
            stop_price=args.stop_price,
            new_client_order_id=args.client_order_id,
            new_order_resp_type=args.resp_type,
        )
    if command == "cancel":
        return client.cancel_order(
            args.symbol,
            order_id=args.order_id,
            orig_client_order_id=args.client_order_id,
        )
    if command == "open-orders":
        return client.get_open_orders(args.symbol)
    if command == "account":
        return client.get_account_information()
    # listen-key
    if args.action == "start":
        return client.start_user_data_stream()
    if args.action == "keepalive":
        return client.keepalive_user_data_stream(args.listen_key or "")
    return client.close_user_data_stream(args.listen_key or "")


def _to_jsonable(data: Any) -> Any:
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return dataclasses.asdict(data)
    if isinstance(data, list):
        return [_to_jsonable(item) for item in data]
    return data


if __name__ == "__main__":
    main()
