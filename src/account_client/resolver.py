"""
Transactor endpoint resolution with retry.

`EndpointResolver` wraps `AccountClient.select_workspace` in a loop that rides
out short account service outages. Only connection-reset and
connection-refused failures are retried; everything else (HTTP errors,
malformed responses, configuration problems) surfaces on the first attempt.
The timeout is checked between attempts only, so a single slow request may
overrun it.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional, Protocol

from .client import AccountClient
from .config import AccountSettings, DEFAULT_RETRY_INTERVAL_SECONDS
from .contracts import EndpointKind
from .errors import TransportError

LOGGER = logging.getLogger(__name__)
RETRY_INTERVAL_SECONDS = DEFAULT_RETRY_INTERVAL_SECONDS
RETRY_FOREVER = -1


class Clock(Protocol):
    def monotonic(self) -> float: ...

    async def sleep(self, seconds: float) -> None: ...


class BackoffPolicy(Protocol):
    def next_delay(self, attempt: int) -> float: ...


class SystemClock:
    """Wall-clock implementation backed by `time.monotonic` and `asyncio.sleep`."""

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class FixedBackoff:
    """Waits the same interval before every retry."""

    def __init__(self, interval: float = RETRY_INTERVAL_SECONDS) -> None:
        if interval < 0:
            raise ValueError("backoff interval must be non-negative")
        self.interval = interval

    def next_delay(self, attempt: int) -> float:
        return self.interval


class EndpointResolver:
    """
    Resolves the transactor endpoint for a token, retrying transient failures.

    Attributes:
        client: The account client used for each `selectWorkspace` attempt.
    """

    def __init__(
        self,
        client: AccountClient,
        *,
        clock: Optional[Clock] = None,
        backoff: Optional[BackoffPolicy] = None,
        timeout: float = RETRY_FOREVER,
    ) -> None:
        self.client = client
        self.timeout = timeout
        self._clock = clock or SystemClock()
        self._backoff = backoff or FixedBackoff()

    @classmethod
    def from_settings(
        cls,
        client: AccountClient,
        settings: AccountSettings,
        *,
        clock: Optional[Clock] = None,
    ) -> "EndpointResolver":
        return cls(
            client,
            clock=clock,
            backoff=FixedBackoff(settings.retry_interval),
            timeout=settings.resolve_timeout,
        )

    async def resolve(
        self,
        token: str,
        kind: EndpointKind | str = EndpointKind.INTERNAL,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Returns the transactor endpoint, retrying while the service is unreachable.

        Args:
            token: Bearer token identifying the workspace.
            kind: ``internal`` or ``external`` endpoint.
            timeout: Budget in seconds; zero or negative retries forever.
                Defaults to the resolver's own `timeout`.

        Raises:
            TransientNetworkError: The budget ran out while the service was
                still refusing or resetting connections (the last error).
            AccountClientError: Any non-transient failure, immediately.
        """
        kind = EndpointKind(kind)
        if timeout is None:
            timeout = self.timeout
        started = self._clock.monotonic()
        attempt = 0
        while True:
            attempt += 1
            try:
                endpoint = await self.client.select_workspace(token, kind)
            except TransportError as exc:
                if not exc.is_transient:
                    raise
                elapsed = self._clock.monotonic() - started
                if timeout > 0 and elapsed >= timeout:
                    LOGGER.warning(
                        "Giving up on transactor endpoint after %d attempt(s) in %.1fs: %s",
                        attempt,
                        elapsed,
                        exc,
                    )
                    raise
                delay = self._backoff.next_delay(attempt)
                LOGGER.warning(
                    "Account service unreachable (%s) on attempt %d; retrying in %.1fs",
                    exc.kind.value,
                    attempt,
                    delay,
                )
                await self._clock.sleep(delay)
                continue
            if attempt > 1:
                LOGGER.info("Resolved transactor endpoint after %d attempts", attempt)
            return endpoint


async def get_transactor_endpoint(
    client: AccountClient,
    token: str,
    kind: EndpointKind | str = EndpointKind.INTERNAL,
    timeout: float = RETRY_FOREVER,
) -> str:
    """Resolves a transactor endpoint with the default clock and 1 s backoff."""
    return await EndpointResolver(client).resolve(token, kind, timeout)


__all__ = [
    "Clock",
    "BackoffPolicy",
    "SystemClock",
    "FixedBackoff",
    "EndpointResolver",
    "get_transactor_endpoint",
    "RETRY_INTERVAL_SECONDS",
    "RETRY_FOREVER",
]
