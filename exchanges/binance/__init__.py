"""
Binance exchange adapters.

`BinanceSpotClient` covers the Spot REST API (market data, trading, account
and user data stream endpoints).
"""

from .client import BinanceSpotClient  # noqa: F401
from .config import BinanceConfig  # noqa: F401
from .responses import (  # noqa: F401
    BinanceClientError,
    Response,
    ResponseError,
    ResponseStatus,
    ResponseSuccess,
)
