"""
Abstract client definitions for centralized exchange integrations.

Concrete adapters (e.g. Binance Spot) should satisfy `ExchangeClient` and keep
each call a single request/response round trip.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(slots=True)
class ExchangeCredentials:
    """Typed container for exchange authentication data."""

    api_key: str
    api_secret: str

    def __repr__(self) -> str:
        return f"ExchangeCredentials(api_key={self.api_key[:4]}***, api_secret=***)"


@runtime_checkable
class ExchangeClient(Protocol):
    """Protocol describing the surface area shared by exchange integrations."""

    name: str

    def authenticate(self, credentials: ExchangeCredentials) -> None:
        """Load credentials into the client."""

    def ping(self) -> Any:
        """Test connectivity to the REST API."""

    def close(self) -> None:
        """Release network resources (HTTP sessions, etc.)."""
