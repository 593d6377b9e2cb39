"""
Single-request HTTP transport for the account service RPC endpoint.

Every call is one POST of a JSON envelope to the configured URL. Failures
raised by `httpx` are translated here, and only here, into `TransportError`
instances tagged with a `TransportErrorKind`, so that callers can decide on
retries without looking at exception messages or nested causes.
"""
from __future__ import annotations

import errno
import logging
import sys
from typing import Any, Dict, Optional, Sequence

import httpx

if sys.version_info < (3, 11):
    from exceptiongroup import BaseExceptionGroup

from .envelope import decode_body, encode_request, extract_result
from .errors import (
    TransientNetworkError,
    TransportError,
    TransportErrorKind,
    TRANSIENT_KINDS,
)

LOGGER = logging.getLogger(__name__)
JSON_HEADERS = {"Content-Type": "application/json"}


def _iter_chain(exc: BaseException):
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _group_kind(group: BaseExceptionGroup) -> Optional[TransportErrorKind]:
    # One member per resolved address; transient only if every attempt was.
    kinds = {_socket_kind(member) for member in group.exceptions}
    if not kinds or None in kinds:
        return None
    if TransportErrorKind.CONNECTION_REFUSED in kinds:
        return TransportErrorKind.CONNECTION_REFUSED
    return TransportErrorKind.CONNECTION_RESET


def _socket_kind(exc: BaseException) -> Optional[TransportErrorKind]:
    for link in _iter_chain(exc):
        if isinstance(link, BaseExceptionGroup):
            return _group_kind(link)
        if isinstance(link, ConnectionResetError):
            return TransportErrorKind.CONNECTION_RESET
        if isinstance(link, ConnectionRefusedError):
            return TransportErrorKind.CONNECTION_REFUSED
        if isinstance(link, OSError):
            if link.errno == errno.ECONNRESET:
                return TransportErrorKind.CONNECTION_RESET
            if link.errno == errno.ECONNREFUSED:
                return TransportErrorKind.CONNECTION_REFUSED
    return None


def classify_error(exc: httpx.HTTPError) -> TransportErrorKind:
    """Map an `httpx` failure onto a stable `TransportErrorKind`."""
    if isinstance(exc, httpx.HTTPStatusError):
        return TransportErrorKind.HTTP_STATUS
    socket_kind = _socket_kind(exc)
    if socket_kind is not None:
        return socket_kind
    if isinstance(exc, httpx.TimeoutException):
        return TransportErrorKind.TIMEOUT
    if isinstance(exc, httpx.ConnectError):
        return TransportErrorKind.CONNECT
    if isinstance(exc, httpx.ProtocolError):
        return TransportErrorKind.PROTOCOL
    return TransportErrorKind.OTHER


def to_transport_error(exc: httpx.HTTPError, url: str) -> TransportError:
    kind = classify_error(exc)
    status_code = None
    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
    error_cls = TransientNetworkError if kind in TRANSIENT_KINDS else TransportError
    return error_cls(kind, str(exc) or type(exc).__name__, url=url, status_code=status_code)


class RpcTransport:
    """Posts RPC envelopes to one account service URL.

    Attributes:
        url: The account service RPC endpoint.
    """

    def __init__(self, url: str, http_client: httpx.AsyncClient) -> None:
        self.url = url
        self._client = http_client

    @staticmethod
    def _headers(token: Optional[str]) -> Dict[str, str]:
        headers = dict(JSON_HEADERS)
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def call(
        self,
        method: str,
        params: Sequence[Any],
        *,
        bearer: Optional[str] = None,
    ) -> Any:
        """Post a request and return the decoded ``result`` (``None`` if absent).

        Non-2xx responses raise `TransportError` with kind ``HTTP_STATUS``.
        """
        body = encode_request(method, params)
        LOGGER.debug("Account RPC %s -> %s", method, self.url)
        try:
            response = await self._client.post(self.url, json=body, headers=self._headers(bearer))
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise to_transport_error(exc, self.url) from exc
        return extract_result(decode_body(response.content))

    async def notify(self, method: str, params: Sequence[Any]) -> None:
        """Post a request, read the response body and discard it."""
        body = encode_request(method, params)
        LOGGER.debug("Account RPC notify %s -> %s", method, self.url)
        try:
            response = await self._client.post(self.url, json=body, headers=self._headers(None))
        except httpx.HTTPError as exc:
            raise to_transport_error(exc, self.url) from exc
        LOGGER.debug(
            "Account RPC %s acknowledged with HTTP %s (%d bytes ignored)",
            method,
            response.status_code,
            len(response.content),
        )

    async def send(self, method: str, params: Sequence[Any]) -> None:
        """Post a request without reading the response body at all."""
        body = encode_request(method, params)
        LOGGER.debug("Account RPC send %s -> %s", method, self.url)
        try:
            async with self._client.stream(
                "POST", self.url, json=body, headers=self._headers(None)
            ):
                pass
        except httpx.HTTPError as exc:
            raise to_transport_error(exc, self.url) from exc


__all__ = ["RpcTransport", "classify_error", "to_transport_error", "JSON_HEADERS"]
