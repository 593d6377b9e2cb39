"""Pytest configuration for shared fixtures."""

from __future__ import annotations

from typing import Optional

import httpx
import pytest

from account_client import AccountClient, Version
from helpers import ACCOUNTS_URL, FakeClock, RecordingHandler


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def version() -> Version:
    return Version(major=0, minor=6, patch=12)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_client():
    """Builds an `AccountClient` whose HTTP traffic goes to a recording handler."""

    def _factory(respond, url: Optional[str] = ACCOUNTS_URL):
        handler = respond if isinstance(respond, RecordingHandler) else RecordingHandler(respond)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return AccountClient(url, http_client=http_client), handler

    return _factory
