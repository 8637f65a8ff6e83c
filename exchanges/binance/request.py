"""
Request building and HMAC signing for the Binance REST API.

A `BinanceRequest` describes one endpoint (method, path, whether it is
signed). `prepare()` turns call parameters into the exact query string sent on
the wire so the signature always covers what the server receives.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple
from urllib.parse import urlencode

from exchanges.base_client import ExchangeCredentials

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

API_KEY_HEADER = "X-MBX-APIKEY"


class MissingCredentialsError(RuntimeError):
    """Raised when a signed endpoint is prepared without credentials."""


def current_timestamp() -> int:
    """Milliseconds since the epoch, as Binance expects for `timestamp`."""
    return int(time.time() * 1000)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return json.dumps(list(value), separators=(",", ":"))
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, float):
        # repr keeps the shortest round-trip digits; "f" avoids 1e-05 style output.
        return format(Decimal(repr(value)), "f")
    return str(value)


def query_pairs(params: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Ordered (key, value) pairs with `None` values dropped."""
    return [(key, _format_value(value)) for key, value in params.items() if value is not None]


def build_query_string(params: Mapping[str, Any]) -> str:
    """
    Serialize parameters in insertion order, skipping undefined (`None`) values.

    >>> build_query_string({"symbol": "BTCUSDT", "fromId": None, "limit": 5})
    'symbol=BTCUSDT&limit=5'
    """
    return urlencode(query_pairs(params))


def sign_query(query: str, secret: str) -> str:
    """Hex-encoded HMAC-SHA256 of the serialized query using the API secret."""
    mac = hmac.new(
        secret.encode("utf-8"),
        query.encode("utf-8"),
        hashlib.sha256,
    )
    return mac.hexdigest()


@dataclass(slots=True)
class PreparedRequest:
    """Fully serialized request ready for the transport."""

    method: HttpMethod
    path: str
    query: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def target(self) -> str:
        return f"{self.path}?{self.query}" if self.query else self.path


@dataclass(frozen=True, slots=True)
class BinanceRequest:
    """Static description of a REST endpoint."""

    method: HttpMethod
    path: str
    signed: bool = False
    # User data stream endpoints need the API key header but no signature.
    requires_api_key: bool = False

    def prepare(
        self,
        params: Optional[Mapping[str, Any]] = None,
        credentials: Optional[ExchangeCredentials] = None,
    ) -> PreparedRequest:
        values: Dict[str, Any] = dict(params or {})
        headers: Dict[str, str] = {}
        if credentials is not None:
            headers[API_KEY_HEADER] = credentials.api_key
        elif self.signed or self.requires_api_key:
            raise MissingCredentialsError(f"{self.method} {self.path} requires API credentials")

        if not self.signed:
            return PreparedRequest(self.method, self.path, build_query_string(values), headers)

        if values.get("timestamp") is None:
            values["timestamp"] = current_timestamp()
        query = build_query_string(values)
        signature = sign_query(query, credentials.api_secret)
        query = f"{query}&signature={signature}" if query else f"signature={signature}"
        return PreparedRequest(self.method, self.path, query, headers)
