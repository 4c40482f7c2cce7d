"""API request/response schemas."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from aistudio.models import Task, TaskError


# ============================================================================
# Health, config and usage
# ============================================================================


class HealthResponse(BaseModel):
    status: str
    version: str


class FeatureConfig(BaseModel):
    simulated: bool = Field(..., description="Canned backend in use")
    api_key_configured: bool = Field(..., description="A non-demo API key is set")


class ConfigResponse(BaseModel):
    environment: str
    start_policy: str
    task_timeout_seconds: Optional[float] = None
    features: dict[str, FeatureConfig]


class UsageResponse(BaseModel):
    counts: dict[str, int]
    total_usage: int


# ============================================================================
# Tasks
# ============================================================================


class TaskResponse(BaseModel):
    """Presentable task state. The input is not echoed back."""

    task_id: UUID
    feature: str
    status: str
    progress: float
    status_message: str
    result: Optional[Any] = None
    error: Optional[TaskError] = None
    created_at: datetime
    updated_at: datetime
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        result = task.result
        if isinstance(result, BaseModel):
            result = result.model_dump(mode="json")
        return cls(
            task_id=task.task_id,
            feature=task.feature.value,
            status=task.status.value,
            progress=task.progress,
            status_message=task.status_message,
            result=result,
            error=task.error,
            created_at=task.created_at,
            updated_at=task.updated_at,
            started_at=task.started_at,
            completed_at=task.completed_at,
        )


class CancelTaskResponse(BaseModel):
    ok: bool
    status: str
