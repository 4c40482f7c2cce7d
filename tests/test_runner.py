"""
Task runner tests: validation, progress relay, outcomes, cancellation.
"""

import asyncio
import threading
import time

import pytest

from aistudio.engine import TaskRunner, WebSearchError
from aistudio.models import FeatureType, TaskEventType, TaskStatus
from aistudio.observability.metrics import MetricsRegistry


def progress_values(events):
    return [e.progress for e in events if e.type == TaskEventType.PROGRESS]


def statuses(events):
    return [e.status for e in events if e.type == TaskEventType.STATUS]


async def stepped_work(input, report):
    for fraction in (0.25, 0.5, 0.75):
        report(fraction, f"step {fraction}")
        await asyncio.sleep(0)
    return {"echo": input}


def reject_everything(input):
    raise WebSearchError(WebSearchError.Kind.INVALID_QUERY)


@pytest.mark.asyncio
async def test_validation_failure_is_immediate_and_silent(runner, events):
    """Rejected input yields a failed task with no work scheduled and no events."""
    called = []

    async def work(input, report):
        called.append(input)

    handle = runner.run(
        FeatureType.WEB_SEARCH,
        "   ",
        work,
        WebSearchError,
        validate=reject_everything,
        listener=events.append,
    )

    assert handle.status == TaskStatus.FAILED
    assert handle.done()
    assert handle.error.kind == "invalid_query"
    assert handle.task.started_at is None

    task = await handle.wait(timeout=1)
    await asyncio.sleep(0.01)

    assert task is handle.task
    assert called == []
    assert events == []
    assert runner.metrics.get_counter("tasks.rejected.web_search") == 1
    assert runner.metrics.get_counter("tasks.started.web_search") == 0


@pytest.mark.asyncio
async def test_success_pins_progress_and_records_result(runner, events):
    handle = runner.run(
        FeatureType.WEB_SEARCH, "cats", stepped_work, WebSearchError, listener=events.append
    )
    assert handle.status == TaskStatus.RUNNING

    task = await handle.wait(timeout=1)

    assert task.status == TaskStatus.SUCCEEDED
    assert task.progress == 1.0
    assert task.status_message == "Complete"
    assert task.result == {"echo": "cats"}
    assert task.error is None
    assert task.completed_at >= task.started_at

    values = progress_values(events)
    assert values == [0.25, 0.5, 0.75]
    assert values == sorted(values)
    assert statuses(events) == [TaskStatus.RUNNING, TaskStatus.SUCCEEDED]
    assert events[-1].progress == 1.0


@pytest.mark.asyncio
async def test_sync_work_runs_on_pool_and_relays_in_order(runner, events):
    """Blocking work runs off the loop; its reports arrive in emission order."""
    loop_thread = threading.current_thread().name

    def blocking_work(input, report):
        for i in range(1, 5):
            report(i / 5, f"chunk {i}")
            time.sleep(0.001)
        return threading.current_thread().name

    handle = runner.run(
        FeatureType.WEB_SEARCH, "cats", blocking_work, WebSearchError, listener=events.append
    )
    task = await handle.wait(timeout=2)

    assert task.status == TaskStatus.SUCCEEDED
    assert task.result != loop_thread
    assert task.result.startswith("aistudio-test")
    assert progress_values(events) == [0.2, 0.4, 0.6, 0.8]


@pytest.mark.asyncio
async def test_progress_is_clamped(runner, events):
    async def wild_work(input, report):
        report(-0.5, "under")
        report(1.7, "over")
        return None

    handle = runner.run(
        FeatureType.WEB_SEARCH, "cats", wild_work, WebSearchError, listener=events.append
    )
    await handle.wait(timeout=1)

    assert progress_values(events) == [0.0, 1.0]


@pytest.mark.asyncio
async def test_typed_failure_is_recorded(runner, events):
    async def offline(input, report):
        report(0.1, "connecting")
        raise WebSearchError(WebSearchError.Kind.NETWORK_ERROR)

    handle = runner.run(
        FeatureType.WEB_SEARCH, "cats", offline, WebSearchError, listener=events.append
    )
    task = await handle.wait(timeout=1)

    assert task.status == TaskStatus.FAILED
    assert task.error.kind == "network_error"
    assert task.error.code == "WEB_SEARCH.NETWORK_ERROR"
    assert task.error.message.startswith("Network connection error")
    assert task.result is None
    assert events[-1].status == TaskStatus.FAILED
    assert events[-1].error_code == "WEB_SEARCH.NETWORK_ERROR"


@pytest.mark.asyncio
async def test_unexpected_exception_maps_to_fallback_kind(runner):
    async def broken(input, report):
        raise RuntimeError("boom")

    handle = runner.run(FeatureType.WEB_SEARCH, "cats", broken, WebSearchError)
    task = await handle.wait(timeout=1)

    assert task.status == TaskStatus.FAILED
    assert task.error.kind == WebSearchError.fallback_kind.value


@pytest.mark.asyncio
async def test_backend_timeout_without_runner_timeout_is_unexpected(runner):
    assert runner.timeout_seconds is None

    async def slow_backend(input, report):
        raise asyncio.TimeoutError("read timed out")

    task = await runner.run(FeatureType.WEB_SEARCH, "cats", slow_backend, WebSearchError).wait(
        timeout=1
    )

    assert task.status == TaskStatus.FAILED
    assert task.error.kind == WebSearchError.Kind.REQUEST_FAILED.value


@pytest.mark.asyncio
async def test_cancel_stops_progress_relay(runner, events):
    """No progress is delivered once cancellation is acknowledged."""
    first_report = asyncio.Event()

    async def slow_work(input, report):
        for i in range(100):
            report(i / 100, "working")
            first_report.set()
            await asyncio.sleep(0.01)
        return "finished"

    handle = runner.run(
        FeatureType.WEB_SEARCH, "cats", slow_work, WebSearchError, listener=events.append
    )
    await asyncio.wait_for(first_report.wait(), timeout=1)

    assert handle.cancel() is True
    seen_at_cancel = len(events)
    await asyncio.sleep(0.05)

    assert handle.status == TaskStatus.CANCELED
    assert handle.result is None
    assert len(events) == seen_at_cancel
    assert events[-1].type == TaskEventType.STATUS
    assert events[-1].status == TaskStatus.CANCELED
    assert (await handle.wait(timeout=1)).status == TaskStatus.CANCELED
    assert handle.cancel() is False


@pytest.mark.asyncio
async def test_cancel_reaches_blocking_work(runner, events):
    """Synchronous work sees the cancellation flag at its next checkpoint."""
    started = threading.Event()
    stopped = threading.Event()

    def blocking_work(input, report):
        started.set()
        try:
            while not report.canceled:
                report(0.5, "spinning")
                time.sleep(0.002)
            report.raise_if_canceled()
        finally:
            stopped.set()

    handle = runner.run(
        FeatureType.WEB_SEARCH, "cats", blocking_work, WebSearchError, listener=events.append
    )
    assert await asyncio.to_thread(started.wait, 1)

    handle.cancel()
    seen_at_cancel = len(events)

    assert await asyncio.to_thread(stopped.wait, 1)
    await asyncio.sleep(0.02)

    assert handle.status == TaskStatus.CANCELED
    assert len(events) == seen_at_cancel


@pytest.mark.asyncio
async def test_result_arriving_after_cancel_is_discarded(runner):
    release = threading.Event()

    def stubborn_work(input, report):
        release.wait(1)
        return "too late"

    handle = runner.run(FeatureType.WEB_SEARCH, "cats", stubborn_work, WebSearchError)
    await asyncio.sleep(0)
    handle.cancel()
    release.set()
    await asyncio.sleep(0.05)

    assert handle.status == TaskStatus.CANCELED
    assert handle.result is None


@pytest.mark.asyncio
async def test_timeout_fails_with_timeout_kind(events):
    runner = TaskRunner(timeout_seconds=0.05, metrics_registry=MetricsRegistry())

    async def endless(input, report):
        await asyncio.sleep(10)

    handle = runner.run(
        FeatureType.WEB_SEARCH, "cats", endless, WebSearchError, listener=events.append
    )
    task = await handle.wait(timeout=1)

    assert task.status == TaskStatus.FAILED
    assert task.error.kind == "timed_out"
    assert statuses(events) == [TaskStatus.RUNNING, TaskStatus.FAILED]


@pytest.mark.asyncio
async def test_broken_listener_does_not_break_task(runner):
    def listener(event):
        raise ValueError("listener bug")

    handle = runner.run(FeatureType.WEB_SEARCH, "cats", stepped_work, WebSearchError, listener=listener)
    task = await handle.wait(timeout=1)

    assert task.status == TaskStatus.SUCCEEDED


@pytest.mark.asyncio
async def test_metrics_track_outcomes(runner):
    ok = runner.run(FeatureType.WEB_SEARCH, "cats", stepped_work, WebSearchError)
    await ok.wait(timeout=1)

    snapshot = runner.metrics.snapshot()
    assert snapshot["counters"]["tasks.started.web_search"] == 1
    assert snapshot["counters"]["tasks.succeeded.web_search"] == 1
    assert snapshot["gauges"]["tasks.running"] == 0
    assert snapshot["histograms"]["tasks.duration_seconds.web_search"]["count"] == 1
    duration = snapshot["histograms"]["tasks.duration_seconds.web_search"]
    assert duration["last"] == duration["max"] == duration["min"]

    second = runner.run(FeatureType.YOUTUBE, "x", stepped_work, WebSearchError)
    assert second.status == TaskStatus.RUNNING
    await second.wait(timeout=1)
    assert runner.metrics.counters_by_suffix("tasks.started") == {"web_search": 1, "youtube": 1}
    assert set(runner.metrics.snapshot("tasks.succeeded")["counters"]) == {
        "tasks.succeeded.web_search",
        "tasks.succeeded.youtube",
    }
