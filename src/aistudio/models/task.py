"""Task model - one invocation of a long-running feature operation."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from aistudio.models.enums import FeatureType, TaskStatus
from aistudio.utils.time import utc_now


class TaskError(BaseModel):
    """Typed failure recorded on a failed task."""

    kind: str
    code: str
    message: str


class Task(BaseModel):
    """Live state of a single task, owned by the facade that created it."""

    # Identity
    task_id: UUID = Field(default_factory=uuid4)
    feature: FeatureType

    # Validated feature input
    input: Any = None

    # Status
    status: TaskStatus = TaskStatus.IDLE
    progress: float = 0.0
    status_message: str = ""

    # Outcome (populated when terminal)
    result: Any = None
    error: Optional[TaskError] = None

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def is_terminal(self) -> bool:
        """Check if task is in a terminal state."""
        return self.status.is_terminal()

    def can_transition_to(self, new_status: TaskStatus) -> bool:
        """Check if transition to new status is valid per state machine."""
        valid_transitions: dict[TaskStatus, set[TaskStatus]] = {
            TaskStatus.IDLE: {
                TaskStatus.RUNNING,
                TaskStatus.FAILED,  # Rejected by validation before any work
            },
            TaskStatus.RUNNING: {
                TaskStatus.SUCCEEDED,
                TaskStatus.FAILED,
                TaskStatus.CANCELED,
            },
            TaskStatus.SUCCEEDED: set(),
            TaskStatus.FAILED: set(),
            TaskStatus.CANCELED: set(),
        }
        return new_status in valid_transitions.get(self.status, set())

    def duration_seconds(self) -> Optional[float]:
        """Wall time between start and completion, if both happened."""
        if self.started_at is None or self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()
