"""Test doubles shared by the account client tests."""

from __future__ import annotations

import errno
import json
from typing import Any, Callable, List

import httpx

ACCOUNTS_URL = "http://accounts.test/"


class RecordingHandler:
    """Wraps a response factory and keeps every request it receives."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self._respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    def bodies(self) -> List[Any]:
        return [json.loads(request.content) for request in self.requests]


class FakeClock:
    """Deterministic clock: sleeping advances time instantly."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def rpc_response(result: Any = None, *, include_result: bool = True, status_code: int = 200):
    body = {"result": result} if include_result else {}
    return httpx.Response(status_code, json=body)


def raise_reset(request: httpx.Request, message: str = "Connection reset by peer"):
    raise httpx.ReadError(message, request=request) from ConnectionResetError(
        errno.ECONNRESET, message
    )


def raise_refused(request: httpx.Request, message: str = "Connection refused"):
    raise httpx.ConnectError(message, request=request) from ConnectionRefusedError(
        errno.ECONNREFUSED, message
    )
