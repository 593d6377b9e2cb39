"""
Exception hierarchy for the account service client.

Every failure surfaced by this package derives from `AccountClientError` so
that workers can catch the whole family in one place. Transport failures carry
a `TransportErrorKind` assigned by the transport layer; the endpoint resolver
retries on that tag alone and never inspects messages or nested causes.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class AccountClientError(Exception):
    """Base class for all account client failures."""


class ConfigurationError(AccountClientError):
    """Raised when the account service URL is not configured."""


class DecodingError(AccountClientError):
    """Raised when a response body or `result` payload has the wrong shape."""


class TransportErrorKind(str, Enum):
    """Stable classification of a failed round trip.

    Attributes:
        CONNECTION_RESET: The peer reset the connection.
        CONNECTION_REFUSED: Nothing is listening at the account service URL.
        CONNECT: Any other failure to establish a connection (DNS, TLS, ...).
        TIMEOUT: The request exceeded the configured HTTP timeout.
        PROTOCOL: The server violated HTTP (e.g. closed without a response).
        HTTP_STATUS: The server answered with a non-2xx status.
        OTHER: Any remaining `httpx` failure.
    """

    CONNECTION_RESET = "connection_reset"
    CONNECTION_REFUSED = "connection_refused"
    CONNECT = "connect"
    TIMEOUT = "timeout"
    PROTOCOL = "protocol"
    HTTP_STATUS = "http_status"
    OTHER = "other"


TRANSIENT_KINDS = frozenset(
    {TransportErrorKind.CONNECTION_RESET, TransportErrorKind.CONNECTION_REFUSED}
)


class TransportError(AccountClientError):
    """A network or HTTP-level failure talking to the account service."""

    def __init__(
        self,
        kind: TransportErrorKind,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.url = url
        self.status_code = status_code

    @property
    def is_transient(self) -> bool:
        return self.kind in TRANSIENT_KINDS

    def __str__(self) -> str:
        base = super().__str__()
        return f"[{self.kind.value}] {base}"


class TransientNetworkError(TransportError):
    """Connection reset or refused; retried only by the endpoint resolver."""


__all__ = [
    "AccountClientError",
    "ConfigurationError",
    "DecodingError",
    "TransportErrorKind",
    "TRANSIENT_KINDS",
    "TransportError",
    "TransientNetworkError",
]
