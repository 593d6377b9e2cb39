"""Lifecycle reporting for a single workspace create or upgrade job."""
from __future__ import annotations

import math
from typing import Optional

from .client import AccountClient
from .contracts import LifecycleEvent, OperationFilter, Version

_STARTED = {
    OperationFilter.CREATE: LifecycleEvent.CREATE_STARTED,
    OperationFilter.UPGRADE: LifecycleEvent.UPGRADE_STARTED,
}
_DONE = {
    OperationFilter.CREATE: LifecycleEvent.CREATE_DONE,
    OperationFilter.UPGRADE: LifecycleEvent.UPGRADE_DONE,
}


def _job_operation(operation: OperationFilter | str) -> OperationFilter:
    operation = OperationFilter(operation)
    if operation is OperationFilter.ALL:
        raise ValueError("a lifecycle job is either 'create' or 'upgrade', not 'all'")
    return operation


class LifecycleReporter:
    """
    Sends lifecycle events for one workspace to the account service.

    Every method is a single `update_workspace_info` call: no retries, and
    the acknowledgement is not checked. Transport errors still propagate so
    the caller decides whether a lost report matters.
    """

    def __init__(
        self,
        client: AccountClient,
        token: str,
        workspace_id: str,
        version: Version,
    ) -> None:
        self.client = client
        self.workspace_id = workspace_id
        self.version = version
        self._token = token

    async def report(
        self,
        event: LifecycleEvent | str,
        progress: float = 0,
        message: Optional[str] = None,
    ) -> None:
        await self.client.update_workspace_info(
            self._token, self.workspace_id, event, self.version, progress, message
        )

    async def ping(self, progress: float = 0, message: Optional[str] = None) -> None:
        await self.report(LifecycleEvent.PING, progress, message)

    async def started(self, operation: OperationFilter | str) -> None:
        await self.report(_STARTED[_job_operation(operation)], 0)

    async def progress(self, value: float, message: Optional[str] = None) -> None:
        """Report a completion percentage, clamped to 0..100; NaN is sent as 0."""
        value = 0 if math.isnan(value) else min(max(value, 0), 100)
        await self.report(LifecycleEvent.PROGRESS, value, message)

    async def done(self, operation: OperationFilter | str, message: Optional[str] = None) -> None:
        await self.report(_DONE[_job_operation(operation)], 100, message)


__all__ = ["LifecycleReporter"]
