"""
Pydantic data models serving as the shared contract between workers and the
account (workspace-coordination) service.

The account service owns these records; the client only validates what it
needs to act on (an identifier, the endpoints, the region) and keeps every
other field it receives untouched so that nothing is lost when a descriptor is
handed back to the caller or forwarded to another service.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

_VERSION_PATTERN = re.compile(r"^\s*v?(\d+)\.(\d+)\.(\d+)\s*$")


class LifecycleEvent(str, Enum):
    """Events a worker reports while it processes a workspace."""

    PING = "ping"
    CREATE_STARTED = "create-started"
    UPGRADE_STARTED = "upgrade-started"
    PROGRESS = "progress"
    CREATE_DONE = "create-done"
    UPGRADE_DONE = "upgrade-done"


class OperationFilter(str, Enum):
    """Kind of pending work a worker claims or announces it can handle."""

    CREATE = "create"
    UPGRADE = "upgrade"
    ALL = "all"


class EndpointKind(str, Enum):
    """Which transactor endpoint to select for a workspace."""

    INTERNAL = "internal"
    EXTERNAL = "external"


class Version(BaseModel):
    """Structured version identifier passed through to the account service.

    Only `major`, `minor` and `patch` are known here; any additional fields are
    kept and sent back verbatim.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    major: int = Field(..., ge=0)
    minor: int = Field(..., ge=0)
    patch: int = Field(..., ge=0)

    @classmethod
    def parse(cls, value: str) -> "Version":
        """Build a version from a dotted string such as ``"0.6.12"``."""
        match = _VERSION_PATTERN.match(value)
        if not match:
            raise ValueError(f"invalid version string: {value!r}")
        major, minor, patch = (int(part) for part in match.groups())
        return cls(major=major, minor=minor, patch=patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class WorkspaceDescriptor(BaseModel):
    """
    Workspace record as returned by the account service.

    Field names follow Python conventions; the wire names are kept as aliases
    and both spellings are accepted on input.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    workspace: str = Field(..., description="Workspace identifier.")
    workspace_name: Optional[str] = Field(default=None, alias="workspaceName")
    workspace_url: Optional[str] = Field(default=None, alias="workspaceUrl")
    region: str = Field(default="", description="Region the workspace is assigned to.")
    internal_endpoint: Optional[str] = Field(
        default=None,
        alias="internalEndpoint",
        description="Transactor URL reachable from inside the cluster.",
    )
    external_endpoint: Optional[str] = Field(
        default=None,
        alias="externalEndpoint",
        description="Transactor URL reachable by end users.",
    )
    version: Optional[Dict[str, Any]] = None
    mode: Optional[str] = None
    progress: Optional[float] = None

    @field_validator("workspace")
    @classmethod
    def _require_non_empty(cls, value: str, info: ValidationInfo) -> str:
        if not value.strip():
            raise ValueError(f"{info.field_name} must be a non-empty string")
        return value

    @field_validator("region", mode="before")
    @classmethod
    def _null_region(cls, value: Any) -> Any:
        return "" if value is None else value

    def endpoint_for(self, kind: EndpointKind | str = EndpointKind.INTERNAL) -> Optional[str]:
        """Return the internal or external transactor endpoint."""
        kind = EndpointKind(kind)
        if kind is EndpointKind.EXTERNAL:
            return self.external_endpoint
        return self.internal_endpoint

    def to_payload(self) -> Dict[str, Any]:
        """Dump back to wire form, limited to the fields that were supplied."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class WorkspaceLoginInfo(BaseModel):
    """Result of ``selectWorkspace``: where the transactor can be reached."""

    model_config = ConfigDict(extra="allow")

    endpoint: str = Field(..., min_length=1)


__all__ = [
    "LifecycleEvent",
    "OperationFilter",
    "EndpointKind",
    "Version",
    "WorkspaceDescriptor",
    "WorkspaceLoginInfo",
]
