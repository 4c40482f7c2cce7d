"""Task runner - executes feature work off the notification context."""

import asyncio
import inspect
import logging
import threading
from concurrent.futures import Executor
from typing import Any, Callable, Optional

from aistudio.engine.errors import FeatureError, InvalidStateTransition, TaskCanceled
from aistudio.models import FeatureType, Task, TaskEvent, TaskEventType, TaskListener, TaskStatus
from aistudio.observability.metrics import MetricsRegistry, metrics
from aistudio.utils.time import utc_now

logger = logging.getLogger(__name__)

COMPLETE_MESSAGE = "Complete"
CANCELED_MESSAGE = "Canceled"

WorkFn = Callable[[Any, "ProgressReporter"], Any]
ValidateFn = Callable[[Any], None]


class ProgressReporter:
    """
    Handed to work as its second argument.

    Calling it reports ``(progress, message)``. It is safe to call from any
    thread: reports made off the event loop are marshalled back onto it in
    emission order. Once the task is canceled, reports are dropped.
    """

    def __init__(
        self,
        task_id: str,
        emit: Callable[[float, str], None],
        cancel_event: threading.Event,
    ):
        self.task_id = task_id
        self._emit = emit
        self._cancel_event = cancel_event

    def __call__(self, progress: float, message: str = "") -> None:
        if self._cancel_event.is_set():
            return
        self._emit(progress, message)

    @property
    def canceled(self) -> bool:
        return self._cancel_event.is_set()

    def raise_if_canceled(self) -> None:
        """Checkpoint for synchronous work."""
        if self._cancel_event.is_set():
            raise TaskCanceled(self.task_id)


class _Execution:
    """Bookkeeping for one task while the runner drives it."""

    def __init__(
        self,
        task: Task,
        error_cls: type[FeatureError],
        loop: asyncio.AbstractEventLoop,
        listener: Optional[TaskListener],
    ):
        self.task = task
        self.error_cls = error_cls
        self.loop = loop
        self.loop_thread_id = threading.get_ident()
        self.listener = listener
        self.cancel_event = threading.Event()
        self.done: asyncio.Future = loop.create_future()
        self.driver: Optional[asyncio.Task] = None


class TaskHandle:
    """Caller's view of a task started by :class:`TaskRunner`."""

    def __init__(self, execution: _Execution, runner: "TaskRunner"):
        self._execution = execution
        self._runner = runner

    @property
    def task(self) -> Task:
        return self._execution.task

    @property
    def task_id(self):
        return self._execution.task.task_id

    @property
    def status(self) -> TaskStatus:
        return self._execution.task.status

    @property
    def progress(self) -> float:
        return self._execution.task.progress

    @property
    def result(self) -> Any:
        return self._execution.task.result

    @property
    def error(self):
        return self._execution.task.error

    def done(self) -> bool:
        return self._execution.task.is_terminal()

    def cancel(self) -> bool:
        """Cancel the task if it is still running. Must be called on the event loop."""
        return self._runner.cancel(self._execution)

    async def wait(self, timeout: Optional[float] = None) -> Task:
        """Wait until the task reaches a terminal state and return it."""
        await asyncio.wait_for(asyncio.shield(self._execution.done), timeout=timeout)
        return self._execution.task


class TaskRunner:
    """
    Runs feature work and keeps its :class:`Task` up to date.

    All task mutations and listener calls happen on the event loop that
    called :meth:`run`. Coroutine work runs as a task on that loop; plain
    callables run on ``executor``.
    """

    def __init__(
        self,
        executor: Optional[Executor] = None,
        timeout_seconds: Optional[float] = None,
        metrics_registry: Optional[MetricsRegistry] = None,
    ):
        self.executor = executor
        self.timeout_seconds = timeout_seconds
        self.metrics = metrics_registry or metrics

    # =========================================================================
    # Public operations
    # =========================================================================

    def run(
        self,
        feature: FeatureType,
        input: Any,
        work: WorkFn,
        error_cls: type[FeatureError],
        validate: Optional[ValidateFn] = None,
        listener: Optional[TaskListener] = None,
    ) -> TaskHandle:
        """
        Start a task and return immediately.

        If ``validate`` raises a :class:`FeatureError` the returned task is
        already failed; no work is scheduled and no events are emitted.
        """
        loop = asyncio.get_running_loop()
        task = Task(feature=feature, input=input)
        execution = _Execution(task, error_cls, loop, listener)
        handle = TaskHandle(execution, self)

        if validate is not None:
            try:
                validate(input)
            except FeatureError as e:
                logger.info(f"Rejected {feature.value} task {task.task_id}: {e.code}")
                self.metrics.inc_counter(f"tasks.rejected.{feature.value}")
                self._finish(execution, TaskStatus.FAILED, error=e, notify=False)
                return handle

        self._transition(execution, TaskStatus.RUNNING)
        task.started_at = task.updated_at
        self.metrics.inc_counter(f"tasks.started.{feature.value}")
        self.metrics.add_gauge("tasks.running", 1)
        logger.info(f"Started {feature.value} task {task.task_id}")
        self._notify(execution, TaskEventType.STATUS)

        reporter = ProgressReporter(
            str(task.task_id),
            lambda progress, message: self._emit_progress(execution, progress, message),
            execution.cancel_event,
        )
        execution.driver = loop.create_task(self._drive(execution, work, reporter))
        return handle

    def cancel(self, execution: _Execution) -> bool:
        """Move a running task to canceled and stop relaying its progress."""
        task = execution.task
        if task.status != TaskStatus.RUNNING:
            return False

        execution.cancel_event.set()
        task.status_message = CANCELED_MESSAGE
        self._finish(execution, TaskStatus.CANCELED)
        if execution.driver is not None and not execution.driver.done():
            execution.driver.cancel()
        logger.info(f"Canceled {task.feature.value} task {task.task_id}")
        return True

    def shutdown(self) -> None:
        """Release the worker pool."""
        if self.executor is not None:
            self.executor.shutdown(wait=False, cancel_futures=True)

    # =========================================================================
    # Driving work
    # =========================================================================

    async def _drive(self, execution: _Execution, work: WorkFn, reporter: ProgressReporter) -> None:
        task = execution.task
        error_cls = execution.error_cls

        if inspect.iscoroutinefunction(work):
            pending = work(task.input, reporter)
        else:
            pending = execution.loop.run_in_executor(self.executor, work, task.input, reporter)

        try:
            if self.timeout_seconds is not None:
                result = await asyncio.wait_for(pending, timeout=self.timeout_seconds)
            else:
                result = await pending
        except asyncio.CancelledError:
            execution.cancel_event.set()
            if not task.is_terminal():
                task.status_message = CANCELED_MESSAGE
                self._finish(execution, TaskStatus.CANCELED)
            raise
        except TaskCanceled:
            if not task.is_terminal():
                task.status_message = CANCELED_MESSAGE
                self._finish(execution, TaskStatus.CANCELED)
        except asyncio.TimeoutError as e:
            if self.timeout_seconds is None:
                # Raised by the work itself, not by wait_for.
                self._complete_unexpected(execution, e)
                return
            execution.cancel_event.set()
            logger.warning(
                f"{task.feature.value} task {task.task_id} timed out "
                f"after {self.timeout_seconds}s"
            )
            self._complete_failed(execution, error_cls(error_cls.timeout_kind))
        except FeatureError as e:
            self._complete_failed(execution, e)
        except Exception as e:
            self._complete_unexpected(execution, e)
        else:
            self._complete_succeeded(execution, result)

    def _complete_succeeded(self, execution: _Execution, result: Any) -> None:
        task = execution.task
        if task.is_terminal():
            logger.debug(f"Discarding result of {task.status.value} task {task.task_id}")
            return
        task.progress = 1.0
        task.status_message = COMPLETE_MESSAGE
        task.result = result
        self._finish(execution, TaskStatus.SUCCEEDED)

    def _complete_unexpected(self, execution: _Execution, exc: Exception) -> None:
        task = execution.task
        logger.error(
            f"Unexpected error in {task.feature.value} task {task.task_id}: {exc}",
            exc_info=exc,
        )
        self._complete_failed(execution, execution.error_cls(execution.error_cls.fallback_kind))

    def _complete_failed(self, execution: _Execution, error: FeatureError) -> None:
        task = execution.task
        if task.is_terminal():
            logger.debug(f"Discarding {error.code} of {task.status.value} task {task.task_id}")
            return
        logger.info(f"{task.feature.value} task {task.task_id} failed: {error.code}")
        task.status_message = error.message
        self._finish(execution, TaskStatus.FAILED, error=error)

    # =========================================================================
    # State and notification (event loop only)
    # =========================================================================

    def _transition(self, execution: _Execution, new_status: TaskStatus) -> None:
        task = execution.task
        if not task.can_transition_to(new_status):
            raise InvalidStateTransition(task.status.value, new_status.value)
        task.status = new_status
        task.updated_at = utc_now()

    def _finish(
        self,
        execution: _Execution,
        status: TaskStatus,
        error: Optional[FeatureError] = None,
        notify: bool = True,
    ) -> None:
        task = execution.task
        was_running = task.status == TaskStatus.RUNNING
        self._transition(execution, status)
        task.completed_at = task.updated_at
        if error is not None:
            task.error = error.to_task_error()

        feature = task.feature.value
        self.metrics.inc_counter(f"tasks.{status.value}.{feature}")
        if was_running:
            self.metrics.add_gauge("tasks.running", -1)
            duration = task.duration_seconds()
            if duration is not None:
                self.metrics.observe(f"tasks.duration_seconds.{feature}", duration)

        if notify:
            self._notify(execution, TaskEventType.STATUS)
        if not execution.done.done():
            execution.done.set_result(task)

    def _emit_progress(self, execution: _Execution, progress: float, message: str) -> None:
        if threading.get_ident() == execution.loop_thread_id:
            self._relay_progress(execution, progress, message)
        else:
            execution.loop.call_soon_threadsafe(self._relay_progress, execution, progress, message)

    def _relay_progress(self, execution: _Execution, progress: float, message: str) -> None:
        task = execution.task
        if task.status != TaskStatus.RUNNING or execution.cancel_event.is_set():
            return
        task.progress = min(1.0, max(0.0, float(progress)))
        if message:
            task.status_message = message
        task.updated_at = utc_now()
        self._notify(execution, TaskEventType.PROGRESS)

    def _notify(self, execution: _Execution, event_type: TaskEventType) -> None:
        if execution.listener is None:
            return
        task = execution.task
        event = TaskEvent(
            type=event_type,
            task_id=task.task_id,
            feature=task.feature,
            status=task.status,
            progress=task.progress,
            message=task.status_message,
            error_code=task.error.code if task.error else None,
        )
        try:
            execution.listener(event)
        except Exception as e:
            logger.error(f"Task listener failed for task {task.task_id}: {e}", exc_info=True)
