"""Integration tests for the periodic refresh scheduler"""

import asyncio

import pytest

from lifedash.services.dashboard import Dashboard
from lifedash.services.scheduler import RefreshScheduler

pytestmark = pytest.mark.integration


async def test_runs_immediately_then_on_interval(config):
    calls = []
    handle = RefreshScheduler(config).start(lambda: calls.append(1), interval_seconds=0.01)

    await asyncio.sleep(0.055)
    handle.cancel()
    await handle.wait_closed()

    assert calls[0] == 1
    assert len(calls) >= 3
    assert handle.active is False


async def test_cancel_stops_further_runs(config):
    calls = []
    handle = RefreshScheduler(config).start(lambda: calls.append(1), interval_seconds=0.01)

    await asyncio.sleep(0)
    handle.cancel()
    await handle.wait_closed()
    seen = len(calls)
    await asyncio.sleep(0.03)

    assert len(calls) == seen


async def test_failing_run_does_not_stop_schedule(config):
    """Test an exception in one run is logged and the next run still happens"""
    calls = []

    def flaky():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("first run fails")

    handle = RefreshScheduler(config).start(flaky, interval_seconds=0.01)
    await asyncio.sleep(0.035)
    handle.cancel()
    await handle.wait_closed()

    assert len(calls) >= 2


async def test_awaits_coroutine_callbacks(config):
    done = asyncio.Event()

    async def refresh():
        done.set()

    handle = RefreshScheduler(config).start(refresh, interval_seconds=60)
    await asyncio.wait_for(done.wait(), timeout=1)
    handle.cancel()
    await handle.wait_closed()

    assert done.is_set()


async def test_refreshes_dashboard(memory_store, config, now):
    dashboard = Dashboard(memory_store, config)
    refreshed = asyncio.Event()

    def refresh():
        dashboard.refresh(now)
        refreshed.set()

    handle = RefreshScheduler(config).start(refresh, interval_seconds=60)
    await asyncio.wait_for(refreshed.wait(), timeout=5)
    handle.cancel()
    await handle.wait_closed()

    assert len(dashboard.history()) == 1
    assert dashboard.latest_analysis() is not None


@pytest.mark.parametrize("interval", [0, -5])
async def test_rejects_non_positive_interval(config, interval):
    with pytest.raises(ValueError):
        RefreshScheduler(config).start(lambda: None, interval_seconds=interval)


def test_start_requires_running_loop(config):
    with pytest.raises(RuntimeError):
        RefreshScheduler(config).start(lambda: None, interval_seconds=1)
