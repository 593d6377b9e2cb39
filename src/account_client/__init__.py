"""
Worker-side client for the account (workspace-coordination) service.

The package resolves the transactor endpoint that serves a workspace, claims
pending create/upgrade work, reports lifecycle progress and announces workers
with a handshake. All network calls go through `AccountClient`; endpoint
resolution with retry lives in `EndpointResolver`.
"""
from .authorization import (
    AuthorizerAlreadyRegisteredError,
    AuthorizerProvider,
    AuthorizerRegistry,
    Decision,
    DefaultAuthorizer,
)
from .client import AccountClient
from .config import AccountSettings, LoggingSettings
from .contracts import (
    EndpointKind,
    LifecycleEvent,
    OperationFilter,
    Version,
    WorkspaceDescriptor,
    WorkspaceLoginInfo,
)
from .errors import (
    AccountClientError,
    ConfigurationError,
    DecodingError,
    TransientNetworkError,
    TransportError,
    TransportErrorKind,
)
from .lifecycle import LifecycleReporter
from .logging_utils import configure_logging
from .resolver import (
    EndpointResolver,
    FixedBackoff,
    SystemClock,
    get_transactor_endpoint,
)

__all__ = [
    "AccountClient",
    "AccountSettings",
    "LoggingSettings",
    "EndpointResolver",
    "FixedBackoff",
    "SystemClock",
    "get_transactor_endpoint",
    "LifecycleReporter",
    "EndpointKind",
    "LifecycleEvent",
    "OperationFilter",
    "Version",
    "WorkspaceDescriptor",
    "WorkspaceLoginInfo",
    "AccountClientError",
    "ConfigurationError",
    "DecodingError",
    "TransportError",
    "TransientNetworkError",
    "TransportErrorKind",
    "AuthorizerRegistry",
    "AuthorizerProvider",
    "AuthorizerAlreadyRegisteredError",
    "Decision",
    "DefaultAuthorizer",
    "configure_logging",
]

__version__ = "0.1.0"
