"""
This module provides `AccountClient`, the worker-side client for the account
(workspace-coordination) service.

Each operation is a single JSON-RPC style POST against the configured account
service URL: listing the caller's workspaces, selecting a transactor endpoint,
claiming a pending workspace, reporting lifecycle events and announcing the
worker with a handshake. The client holds no state between calls besides its
HTTP connection pool; tokens are supplied per call and never cached.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional

import httpx

from .config import AccountSettings, DEFAULT_REQUEST_TIMEOUT_SECONDS
from .contracts import (
    EndpointKind,
    LifecycleEvent,
    OperationFilter,
    Version,
    WorkspaceDescriptor,
)
from .envelope import decode_login_info, decode_pending_workspace, decode_workspace_list
from .errors import ConfigurationError
from .transport import RpcTransport

LOGGER = logging.getLogger(__name__)


class AccountClient:
    """
    Issues one-shot RPC calls to the account service.

    The client may be used as an async context manager, which closes the
    underlying HTTP client on exit. An `httpx.AsyncClient` passed in by the
    caller is never closed by this class.
    """

    def __init__(
        self,
        accounts_url: Optional[str],
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initializes the `AccountClient`.

        Args:
            accounts_url: The account service RPC endpoint. ``None`` is accepted
                here and reported as a `ConfigurationError` by every call.
            timeout: The timeout in seconds for a single request.
            http_client: Optional preconfigured client (used by tests and by
                callers that share a connection pool).
        """
        self._accounts_url = accounts_url.strip() if accounts_url else None
        self._timeout = timeout if timeout > 0 else DEFAULT_REQUEST_TIMEOUT_SECONDS
        self._client = http_client
        self._owns_client = http_client is None

    @classmethod
    def from_settings(cls, settings: Optional[AccountSettings] = None) -> "AccountClient":
        """Creates a client from `AccountSettings` (read from the environment if omitted)."""
        settings = settings or AccountSettings()
        return cls(settings.url, timeout=settings.request_timeout)

    @property
    def accounts_url(self) -> Optional[str]:
        return self._accounts_url

    async def __aenter__(self) -> "AccountClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _transport(self) -> RpcTransport:
        if not self._accounts_url:
            raise ConfigurationError("No account endpoint specified")
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return RpcTransport(self._accounts_url, self._client)

    async def list_workspaces(self, token: str) -> List[WorkspaceDescriptor]:
        """Returns the workspaces visible to `token`; empty when the service sends none."""
        transport = self._transport()
        result = await transport.call("listWorkspaces", [token])
        return decode_workspace_list(result)

    async def select_workspace(
        self,
        token: str,
        kind: EndpointKind | str = EndpointKind.INTERNAL,
    ) -> str:
        """
        Asks the account service which transactor serves the token's workspace.

        The token travels as a bearer header; the region parameter is always
        empty at this layer.

        Returns:
            The transactor endpoint URL for the requested `kind`.
        """
        kind = EndpointKind(kind)
        transport = self._transport()
        result = await transport.call("selectWorkspace", ["", kind], bearer=token)
        return decode_login_info(result).endpoint

    async def get_pending_workspace(
        self,
        token: str,
        region: str,
        version: Version,
        operation: OperationFilter | str,
    ) -> Optional[WorkspaceDescriptor]:
        """
        Claims the next pending workspace matching `operation` in `region`.

        Returns:
            The claimed workspace, or ``None`` when nothing is pending.
        """
        operation = OperationFilter(operation)
        transport = self._transport()
        result = await transport.call(
            "getPendingWorkspace", [token, region, version, operation]
        )
        workspace = decode_pending_workspace(result)
        if workspace is not None:
            LOGGER.info(
                "Claimed pending workspace %s (operation=%s region=%s)",
                workspace.workspace,
                operation.value,
                region or "<default>",
            )
        return workspace

    async def update_workspace_info(
        self,
        token: str,
        workspace_id: str,
        event: LifecycleEvent | str,
        version: Version,
        progress: float,
        message: Optional[str] = None,
    ) -> None:
        """
        Reports a lifecycle event for `workspace_id`.

        The response is read and discarded; neither its status nor its body
        is validated. A non-finite `progress` cannot be sent as JSON and is
        rejected with `ValueError` before any request is made.
        """
        event = LifecycleEvent(event)
        if not math.isfinite(progress):
            raise ValueError(f"progress must be a finite number, got {progress!r}")
        transport = self._transport()
        await transport.notify(
            "updateWorkspaceInfo",
            [token, workspace_id, event, version, progress, message],
        )

    async def worker_handshake(
        self,
        token: str,
        region: str,
        version: Version,
        operation: OperationFilter | str,
    ) -> None:
        """Announces this worker to the account service without reading the reply."""
        operation = OperationFilter(operation)
        transport = self._transport()
        await transport.send("workerHandshake", [token, region, version, operation])
        LOGGER.info(
            "Worker handshake sent (region=%s version=%s operation=%s)",
            region or "<default>",
            version,
            operation.value,
        )


__all__ = ["AccountClient"]
