"""
Encoding and decoding of the account service RPC envelope.

Requests are ``{"method": <name>, "params": [...]}``; responses are JSON
objects whose ``result`` field carries the method-specific payload. An absent
``result`` is never an error at this layer. Each method has its own decoder
that decides whether "absent" means an empty default (list and claim calls)
or a malformed response (endpoint selection).
"""
from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ValidationError

from .contracts import WorkspaceDescriptor, WorkspaceLoginInfo
from .errors import DecodingError


def _encode_param(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Enum):
        return value.value
    return value


def encode_request(method: str, params: Sequence[Any]) -> Dict[str, Any]:
    """Build the request body for a single RPC call.

    Positions are significant, so ``None`` parameters are kept as JSON ``null``.
    """
    if not method:
        raise ValueError("method must be a non-empty string")
    return {"method": method, "params": [_encode_param(value) for value in params]}


def decode_body(content: bytes) -> Dict[str, Any]:
    """Parse a raw response body into the envelope mapping."""
    if not content or not content.strip():
        raise DecodingError("empty response body")
    try:
        payload = json.loads(content)
    except ValueError as exc:
        raise DecodingError(f"response body is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise DecodingError(
            f"expected a JSON object envelope, got {type(payload).__name__}"
        )
    return payload


def extract_result(payload: Dict[str, Any]) -> Any:
    """Return the ``result`` field, or ``None`` when it is absent."""
    return payload.get("result")


def decode_workspace_list(result: Any) -> List[WorkspaceDescriptor]:
    if result is None:
        return []
    if not isinstance(result, list):
        raise DecodingError(
            f"listWorkspaces: expected a list result, got {type(result).__name__}"
        )
    try:
        return [WorkspaceDescriptor.model_validate(item) for item in result]
    except ValidationError as exc:
        raise DecodingError(f"listWorkspaces: invalid workspace record: {exc}") from exc


def decode_pending_workspace(result: Any) -> Optional[WorkspaceDescriptor]:
    if result is None:
        return None
    if not isinstance(result, dict):
        raise DecodingError(
            f"getPendingWorkspace: expected an object result, got {type(result).__name__}"
        )
    try:
        return WorkspaceDescriptor.model_validate(result)
    except ValidationError as exc:
        raise DecodingError(f"getPendingWorkspace: invalid workspace record: {exc}") from exc


def decode_login_info(result: Any) -> WorkspaceLoginInfo:
    """Decode a ``selectWorkspace`` result; a missing endpoint is malformed."""
    if not isinstance(result, dict):
        raise DecodingError(
            f"selectWorkspace: expected an object result, got {type(result).__name__}"
        )
    try:
        return WorkspaceLoginInfo.model_validate(result)
    except ValidationError as exc:
        raise DecodingError(f"selectWorkspace: no usable endpoint in result: {exc}") from exc


__all__ = [
    "encode_request",
    "decode_body",
    "extract_result",
    "decode_workspace_list",
    "decode_pending_workspace",
    "decode_login_info",
]
