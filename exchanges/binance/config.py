"""
Connection settings for the Binance Spot client.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Optional

from exchanges.base_client import ExchangeCredentials

MAINNET_URL = "https://api.binance.com"
TESTNET_URL = "https://testnet.binance.vision"

_FALSEY = {"0", "false", "no", "off"}


@dataclass(slots=True)
class BinanceConfig:
    """Configuration required to connect to the Binance Spot REST API."""

    api_key: str | None = None
    api_secret: str | None = None
    testnet: bool = True
    base_url: str | None = None
    timeout: float = 10.0
    recv_window: int | None = None

    @property
    def resolved_base_url(self) -> str:
        if self.base_url:
            return self.base_url.rstrip("/")
        return TESTNET_URL if self.testnet else MAINNET_URL

    def credentials(self) -> Optional[ExchangeCredentials]:
        if not self.api_key:
            return None
        return ExchangeCredentials(api_key=self.api_key, api_secret=self.api_secret or "")

    @staticmethod
    def from_env() -> "BinanceConfig":
        # Environment variables win over values from the local config module.
        try:
            import config as config_module  # type: ignore
        except ModuleNotFoundError:
            config_module = None  # type: ignore

        def lookup(name: str, default: Any = None) -> Any:
            value = os.getenv(name)
            if value is not None and value != "":
                return value
            if config_module is not None:
                configured = getattr(config_module, name, None)
                if configured is not None and configured != "":
                    return configured
            return default

        testnet_raw = lookup("BINANCE_TESTNET", True)
        testnet = testnet_raw if isinstance(testnet_raw, bool) else str(testnet_raw).strip().lower() not in _FALSEY

        timeout_raw = lookup("BINANCE_TIMEOUT", 10.0)
        try:
            timeout = float(timeout_raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"BINANCE_TIMEOUT must be a number, got {timeout_raw!r}") from exc

        recv_window_raw = lookup("BINANCE_RECV_WINDOW")
        recv_window: int | None = None
        if recv_window_raw is not None:
            try:
                recv_window = int(recv_window_raw)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"BINANCE_RECV_WINDOW must be an integer, got {recv_window_raw!r}") from exc
            if not 0 < recv_window <= 60000:
                raise ValueError("BINANCE_RECV_WINDOW must be between 1 and 60000 milliseconds")

        return BinanceConfig(
            api_key=lookup("BINANCE_API_KEY"),
            api_secret=lookup("BINANCE_API_SECRET"),
            testnet=testnet,
            base_url=lookup("BINANCE_BASE_URL"),
            timeout=timeout,
            recv_window=recv_window,
        )
