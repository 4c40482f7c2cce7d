"""Progress and lifecycle events relayed to task listeners."""

from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from aistudio.models.enums import FeatureType, TaskEventType, TaskStatus
from aistudio.utils.time import utc_now


class TaskEvent(BaseModel):
    """A progress report or status transition for one task."""

    type: TaskEventType
    task_id: UUID
    feature: FeatureType
    status: TaskStatus
    progress: float
    message: str = ""
    error_code: Optional[str] = None
    emitted_at: datetime = Field(default_factory=utc_now)


TaskListener = Callable[[TaskEvent], None]
