"""
Authorizer providers keyed by resource type.

Workers that expose resources look up an authorizer per resource type. A
resource type may register a service authorizer, a custom authorizer, or
both; when no service authorizer is registered a permissive
`DefaultAuthorizer` is provided instead.

Example::

    registry = AuthorizerRegistry()

    @registry.register("Workspace")
    class WorkspaceAuthorizer:
        def __init__(self, resource_type: str) -> None:
            self.resource_type = resource_type

        def authorize(self, context):
            return Decision(allowed=context.get("role") == "owner")

    registry.get("Workspace").authorize({"role": "owner"})
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Protocol

from pydantic import BaseModel, Field

LOGGER = logging.getLogger(__name__)


class Decision(BaseModel):
    """Outcome of an authorization check."""

    allowed: bool = True
    reason: Optional[str] = None
    filter: Dict[str, Any] = Field(
        default_factory=dict,
        description="Extra constraints the caller must apply to the query.",
    )


class Authorizer(Protocol):
    def authorize(self, context: Mapping[str, Any]) -> Decision: ...


AuthorizerFactory = Callable[[str], Authorizer]


class DefaultAuthorizer:
    """Permits everything with an empty filter."""

    def __init__(self, resource_type: str) -> None:
        self.resource_type = resource_type

    def authorize(self, context: Mapping[str, Any]) -> Decision:
        return Decision()


def authorizer_token(resource_type: str) -> str:
    return f"{resource_type}Authorizer"


def custom_authorizer_token(resource_type: str) -> str:
    return f"{resource_type}CustomAuthorizer"


class AuthorizerAlreadyRegisteredError(ValueError):
    """Raised when a token is registered twice."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Authorizer {token!r} is already registered")


@dataclass(frozen=True)
class AuthorizerProvider:
    """A token plus the factory that builds the authorizer bound to it."""

    token: str
    resource_type: str
    factory: AuthorizerFactory

    def create(self) -> Authorizer:
        return self.factory(self.resource_type)


class AuthorizerRegistry:
    """Maps resource types to authorizer factories."""

    def __init__(self) -> None:
        self._factories: Dict[str, AuthorizerFactory] = {}

    def register(
        self,
        resource_type: str,
        factory: Optional[AuthorizerFactory] = None,
        *,
        custom: bool = False,
    ):
        """Register `factory` for `resource_type`; without a factory, acts as a class decorator."""
        token = custom_authorizer_token(resource_type) if custom else authorizer_token(resource_type)

        def _register(target: AuthorizerFactory) -> AuthorizerFactory:
            if token in self._factories:
                raise AuthorizerAlreadyRegisteredError(token)
            self._factories[token] = target
            LOGGER.debug("Registered authorizer %s", token)
            return target

        if factory is not None:
            return _register(factory)
        return _register

    def get(self, resource_type: str) -> Authorizer:
        return self._service_provider(resource_type).create()

    def get_custom(self, resource_type: str) -> Optional[Authorizer]:
        provider = self._custom_provider(resource_type)
        return provider.create() if provider is not None else None

    def build_providers(self, resource_types: Iterable[str]) -> List[AuthorizerProvider]:
        """Providers for each resource type: the custom one first (if any), then the service one."""
        providers: List[AuthorizerProvider] = []
        for resource_type in resource_types:
            custom = self._custom_provider(resource_type)
            if custom is not None:
                providers.append(custom)
            providers.append(self._service_provider(resource_type))
        return providers

    def _service_provider(self, resource_type: str) -> AuthorizerProvider:
        token = authorizer_token(resource_type)
        factory = self._factories.get(token, DefaultAuthorizer)
        return AuthorizerProvider(token=token, resource_type=resource_type, factory=factory)

    def _custom_provider(self, resource_type: str) -> Optional[AuthorizerProvider]:
        token = custom_authorizer_token(resource_type)
        factory = self._factories.get(token)
        if factory is None:
            return None
        return AuthorizerProvider(token=token, resource_type=resource_type, factory=factory)


__all__ = [
    "Decision",
    "Authorizer",
    "AuthorizerFactory",
    "DefaultAuthorizer",
    "AuthorizerProvider",
    "AuthorizerRegistry",
    "AuthorizerAlreadyRegisteredError",
    "authorizer_token",
    "custom_authorizer_token",
]
