"""Tests for the account service data contracts."""
import pytest
from pydantic import ValidationError

from account_client.contracts import (
    EndpointKind,
    LifecycleEvent,
    OperationFilter,
    Version,
    WorkspaceDescriptor,
)


class TestEnums:
    """Tests for the wire enums."""

    def test_lifecycle_event_values(self):
        assert [event.value for event in LifecycleEvent] == [
            "ping",
            "create-started",
            "upgrade-started",
            "progress",
            "create-done",
            "upgrade-done",
        ]

    def test_operation_filter_from_string(self):
        assert OperationFilter("all") is OperationFilter.ALL

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            EndpointKind("public")


class TestVersion:
    """Tests for Version."""

    def test_parse_and_format(self):
        version = Version.parse("v0.6.12")
        assert (version.major, version.minor, version.patch) == (0, 6, 12)
        assert str(version) == "0.6.12"

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            Version.parse("latest")

    def test_extra_fields_pass_through(self):
        """Unknown version fields should be sent back unchanged."""
        version = Version(major=1, minor=0, patch=0, build="abc")
        assert version.model_dump(mode="json") == {
            "major": 1,
            "minor": 0,
            "patch": 0,
            "build": "abc",
        }

    def test_negative_component_rejected(self):
        with pytest.raises(ValidationError):
            Version(major=-1, minor=0, patch=0)


class TestWorkspaceDescriptor:
    """Tests for WorkspaceDescriptor."""

    def test_wire_aliases(self):
        descriptor = WorkspaceDescriptor.model_validate(
            {
                "workspace": "alpha",
                "workspaceName": "Alpha",
                "internalEndpoint": "ws://transactor-int:3333",
                "externalEndpoint": "wss://alpha.example.com",
                "region": None,
            }
        )
        assert descriptor.workspace_name == "Alpha"
        assert descriptor.region == ""
        assert descriptor.endpoint_for("internal") == "ws://transactor-int:3333"
        assert descriptor.endpoint_for(EndpointKind.EXTERNAL) == "wss://alpha.example.com"

    def test_to_payload_keeps_supplied_fields(self):
        payload = {"workspace": "alpha", "workspaceUrl": "alpha-url", "region": "eu"}
        assert WorkspaceDescriptor.model_validate(payload).to_payload() == payload

    def test_unknown_fields_preserved(self):
        descriptor = WorkspaceDescriptor.model_validate({"workspace": "alpha", "createdOn": 17})
        assert descriptor.model_extra == {"createdOn": 17}

    def test_requires_identifier(self):
        with pytest.raises(ValidationError):
            WorkspaceDescriptor.model_validate({"workspace": "  "})
        with pytest.raises(ValidationError):
            WorkspaceDescriptor.model_validate({"region": "eu"})
