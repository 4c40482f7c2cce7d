"""Feature facade - adapts one studio tool onto the task runner."""

import logging
from typing import Any, Callable, ClassVar, Optional

from pydantic import BaseModel

from aistudio.config import Settings, StartPolicy, settings
from aistudio.engine.errors import FeatureError, TaskAlreadyRunning
from aistudio.engine.runner import ProgressReporter, TaskHandle, TaskRunner, WorkFn
from aistudio.models import FeatureType, Task, TaskEvent, TaskListener

logger = logging.getLogger(__name__)


class FeatureFacade:
    """
    Base class for the five studio tools.

    Subclasses set ``feature``, ``error_cls`` and ``input_model``, implement
    :meth:`validate`, and provide the simulated backend as :meth:`simulate`.
    A real backend is any ``(input, report) -> output`` callable (sync or
    async) passed as ``work``; nothing else about the facade changes.
    """

    feature: ClassVar[FeatureType]
    error_cls: ClassVar[type[FeatureError]]
    input_model: ClassVar[type[BaseModel]]

    def __init__(
        self,
        runner: TaskRunner,
        work: Optional[WorkFn] = None,
        start_policy: Optional[StartPolicy] = None,
        config: Optional[Settings] = None,
    ):
        self.runner = runner
        self.settings = config or settings
        self.start_policy = start_policy or self.settings.start_policy
        self._work: WorkFn = work or self.simulate
        self._current: Optional[TaskHandle] = None
        self._listeners: list[TaskListener] = []

        if work is None and self.settings.is_simulated(self.feature.value):
            logger.info(f"No API key configured for {self.feature.value}; running in simulated mode")

    @property
    def simulated(self) -> bool:
        """True while the canned backend is in use."""
        return self._work == self.simulate

    @property
    def current(self) -> Optional[Task]:
        """The most recently started task, if any."""
        return self._current.task if self._current else None

    @property
    def current_handle(self) -> Optional[TaskHandle]:
        return self._current

    def subscribe(self, listener: TaskListener) -> Callable[[], None]:
        """Receive events for every task this facade starts. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def coerce_input(self, input: Any) -> BaseModel:
        """Accept either the input model or a mapping of its fields."""
        if isinstance(input, self.input_model):
            return input
        return self.input_model.model_validate(input)

    def validate(self, input: Any) -> None:
        """Raise ``error_cls`` if ``input`` fails the feature precondition."""
        raise NotImplementedError

    def start(self, input: Any) -> TaskHandle:
        """
        Start a new task for ``input`` and return its handle immediately.

        With the ``supersede`` policy a still-running task is canceled first;
        with ``reject`` a :class:`TaskAlreadyRunning` is raised instead.
        """
        input = self.coerce_input(input)
        previous = self._current
        if previous is not None and not previous.done():
            if self.start_policy == StartPolicy.REJECT:
                raise TaskAlreadyRunning(self.feature.value, str(previous.task_id))
            logger.info(f"Superseding running {self.feature.value} task {previous.task_id}")
            previous.cancel()

        handle = self.runner.run(
            self.feature,
            input,
            self._work,
            self.error_cls,
            validate=self.validate,
            listener=self._dispatch,
        )
        self._current = handle
        return handle

    def cancel(self) -> bool:
        """Cancel the current task. Returns False if nothing was running."""
        if self._current is None:
            return False
        return self._current.cancel()

    async def simulate(self, input: Any, report: ProgressReporter) -> Any:
        """Canned backend used in demo mode."""
        raise NotImplementedError

    def _dispatch(self, event: TaskEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
