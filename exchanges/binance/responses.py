"""
Two-variant result wrapper returned by every Binance client call.

Endpoint methods never raise for remote, transport or validation failures;
they return `ResponseError` instead. Callers that prefer exceptions can call
`unwrap()` on either variant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class ResponseStatus(str, Enum):
    ERROR = "error"
    SUCCESS = "success"


class BinanceClientError(RuntimeError):
    """Raised when an error response is unwrapped."""

    def __init__(self, message: str, code: Optional[int] = None, payload: Optional[dict] = None) -> None:
        super().__init__(message)
        self.code = code
        self.payload = payload or {}


@dataclass(slots=True)
class ResponseSuccess(Generic[T]):
    """Successful call carrying the decoded payload."""

    data: T

    @property
    def status(self) -> ResponseStatus:
        return ResponseStatus.SUCCESS

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.data


@dataclass(slots=True)
class ResponseError:
    """Failed call; `message` is the remote error text when there is one."""

    message: str
    code: Optional[int] = None
    http_status: Optional[int] = None
    payload: dict = field(default_factory=dict)

    @property
    def status(self) -> ResponseStatus:
        return ResponseStatus.ERROR

    @property
    def ok(self) -> bool:
        return False

    @property
    def data(self) -> str:
        return self.message

    def unwrap(self) -> Any:
        raise BinanceClientError(self.message, code=self.code, payload=self.payload)

    @classmethod
    def from_payload(cls, body: Any, http_status: Optional[int] = None) -> "ResponseError":
        """
        Build an error from a remote body.

        Binance reports failures as ``{"code": -1121, "msg": "Invalid symbol."}``;
        anything else is kept verbatim as the message.
        """
        if isinstance(body, dict):
            message = body.get("msg") or body.get("message") or f"HTTP {http_status}"
            code = body.get("code")
            return cls(
                message=str(message),
                code=code if isinstance(code, int) else None,
                http_status=http_status,
                payload=body,
            )
        text = str(body).strip() if body is not None else ""
        return cls(message=text or f"HTTP {http_status}", http_status=http_status)


Response = Union[ResponseSuccess[T], ResponseError]
