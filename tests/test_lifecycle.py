from __future__ import annotations

import pytest

from account_client import LifecycleReporter
from account_client.errors import TransientNetworkError
from helpers import raise_reset, rpc_response


def _events(handler):
    return [(body["params"][2], body["params"][4], body["params"][5]) for body in handler.bodies()]


@pytest.mark.anyio
async def test_create_job_reports_full_lifecycle(make_client, version):
    client, handler = make_client(lambda request: rpc_response())
    reporter = LifecycleReporter(client, "tok", "ws-1", version)

    await reporter.started("create")
    await reporter.progress(42, "halfway")
    await reporter.ping()
    await reporter.done("create", "ready")

    assert _events(handler) == [
        ("create-started", 0, None),
        ("progress", 42, "halfway"),
        ("ping", 0, None),
        ("create-done", 100, "ready"),
    ]
    assert {tuple(body["params"][:2]) for body in handler.bodies()} == {("tok", "ws-1")}


@pytest.mark.anyio
async def test_upgrade_events_and_progress_clamp(make_client, version):
    client, handler = make_client(lambda request: rpc_response())
    reporter = LifecycleReporter(client, "tok", "ws-1", version)

    await reporter.started("upgrade")
    await reporter.progress(140)
    await reporter.progress(-3)
    await reporter.done("upgrade")

    assert _events(handler) == [
        ("upgrade-started", 0, None),
        ("progress", 100, None),
        ("progress", 0, None),
        ("upgrade-done", 100, None),
    ]


@pytest.mark.anyio
async def test_all_is_not_a_job_operation(make_client, version):
    client, handler = make_client(lambda request: rpc_response())
    reporter = LifecycleReporter(client, "tok", "ws-1", version)

    with pytest.raises(ValueError):
        await reporter.started("all")
    assert handler.requests == []


@pytest.mark.anyio
async def test_transport_errors_are_not_retried(make_client, version):
    client, handler = make_client(raise_reset)
    reporter = LifecycleReporter(client, "tok", "ws-1", version)

    with pytest.raises(TransientNetworkError):
        await reporter.progress(10)
    assert len(handler.requests) == 1


@pytest.mark.anyio
async def test_nan_progress_is_sent_as_zero(make_client, version):
    client, handler = make_client(lambda request: rpc_response())
    reporter = LifecycleReporter(client, "tok", "ws-1", version)

    await reporter.progress(float("nan"), "unknown")

    assert _events(handler) == [("progress", 0, "unknown")]
