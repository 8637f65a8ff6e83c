import importlib.util
import json
from pathlib import Path

import pytest

from exchanges.binance.responses import ResponseError, ResponseSuccess
from exchanges.binance.schemas import PriceTicker

SCRIPT_PATH = Path(__file__).resolve().parents[3] / "scripts" / "binance_spot.py"


@pytest.fixture
def cli(monkeypatch):
    for name in ("BINANCE_API_KEY", "BINANCE_API_SECRET", "BINANCE_TESTNET", "BINANCE_BASE_URL", "BINANCE_RECV_WINDOW"):
        monkeypatch.delenv(name, raising=False)
    found = importlib.util.spec_from_file_location("binance_spot_cli", SCRIPT_PATH)
    module = importlib.util.module_from_spec(found)
    found.loader.exec_module(module)
    return module


@pytest.fixture
def fake_client(cli, mocker):
    client_cls = mocker.patch.object(cli, "BinanceSpotClient")
    return client_cls.from_config.return_value


def test_ticker_prints_json(cli, fake_client, capsys):
    fake_client.get_ticker_price.return_value = ResponseSuccess(PriceTicker(symbol="BTCUSDT", price="100.5"))

    cli.main(["ticker", "--symbol", "BTCUSDT"])

    fake_client.get_ticker_price.assert_called_once_with("BTCUSDT")
    assert json.loads(capsys.readouterr().out) == {"symbol": "BTCUSDT", "price": "100.5"}
    fake_client.close.assert_called_once()


def test_place_forwards_order_arguments(cli, fake_client):
    fake_client.create_order.return_value = ResponseSuccess({})

    cli.main(
        [
            "place", "--symbol", "BTCUSDT", "--side", "BUY", "--type", "LIMIT",
            "--time-in-force", "GTC", "--quantity", "0.001", "--price", "24000",
        ]
    )

    fake_client.create_order.assert_called_once_with(
        "BTCUSDT",
        "BUY",
        "LIMIT",
        time_in_force="GTC",
        quantity="0.001",
        quote_order_qty=None,
        price="24000",
        stop_price=None,
        new_client_order_id=None,
        new_order_resp_type=None,
    )


def test_error_response_exits_with_status_one(cli, fake_client, capsys):
    fake_client.cancel_order.return_value = ResponseError("Unknown order sent.", code=-2011)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["cancel", "--symbol", "BTCUSDT", "--order-id", "7"])

    assert excinfo.value.code == 1
    assert "Unknown order sent." in capsys.readouterr().err
    fake_client.cancel_order.assert_called_once_with("BTCUSDT", order_id=7, orig_client_order_id=None)


def test_mainnet_flag_switches_base_url(cli, mocker):
    client_cls = mocker.patch.object(cli, "BinanceSpotClient")
    client_cls.from_config.return_value.ping.return_value = ResponseSuccess({})

    cli.main(["--mainnet", "ping"])

    config = client_cls.from_config.call_args.args[0]
    assert config.testnet is False
    assert config.resolved_base_url == "https://api.binance.com"


def test_mainnet_flag_overrides_custom_base_url(cli, mocker, monkeypatch):
    monkeypatch.setenv("BINANCE_BASE_URL", "https://testnet.binance.vision")
    client_cls = mocker.patch.object(cli, "BinanceSpotClient")
    client_cls.from_config.return_value.ping.return_value = ResponseSuccess({})

    cli.main(["--mainnet", "ping"])

    config = client_cls.from_config.call_args.args[0]
    assert config.base_url is None
    assert config.resolved_base_url == "https://api.binance.com"


def test_listen_key_keepalive(cli, fake_client):
    fake_client.keepalive_user_data_stream.return_value = ResponseSuccess({})

    cli.main(["listen-key", "keepalive", "--listen-key", "abc"])

    fake_client.keepalive_user_data_stream.assert_called_once_with("abc")
