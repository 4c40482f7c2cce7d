"""REST API router."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from aistudio import __version__
from aistudio.api.deps import get_facade, get_studio
from aistudio.api.schemas import (
    CancelTaskResponse,
    ConfigResponse,
    FeatureConfig,
    HealthResponse,
    TaskResponse,
    UsageResponse,
)
from aistudio.engine import FeatureFacade, TaskAlreadyRunning, TaskNotFound, YouTubeError
from aistudio.models import TaskStatus, VideoInfo
from aistudio.studio import Studio

router = APIRouter(prefix="/v1")


# ============================================================================
# Health, config and usage
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@router.get("/config", response_model=ConfigResponse)
async def get_config(studio: Studio = Depends(get_studio)):
    """Feature modes and task execution settings."""
    return ConfigResponse(
        environment=studio.settings.env.value,
        start_policy=studio.settings.start_policy.value,
        task_timeout_seconds=studio.settings.task_timeout_seconds,
        features={
            name: FeatureConfig(**flags) for name, flags in studio.describe().items()
        },
    )


@router.get("/usage", response_model=UsageResponse)
async def get_usage(studio: Studio = Depends(get_studio)):
    """How many tasks each tool has started."""
    usage = studio.usage()
    return UsageResponse(
        counts={feature.value: count for feature, count in usage.counts.items()},
        total_usage=usage.total_usage,
    )


@router.get("/metrics")
async def get_metrics(
    prefix: str = Query(""),
    studio: Studio = Depends(get_studio),
) -> dict[str, Any]:
    """Raw counters, gauges and histograms, optionally filtered by name prefix."""
    return studio.runner.metrics.snapshot(prefix)


# ============================================================================
# YouTube metadata
# ============================================================================


@router.get("/features/youtube/info", response_model=VideoInfo)
async def get_video_info(
    url: str = Query(..., min_length=1),
    studio: Studio = Depends(get_studio),
):
    """Look up a video's title, duration and thumbnail without downloading it."""
    try:
        return await studio.youtube.get_video_info(url)
    except YouTubeError as e:
        raise HTTPException(status_code=422, detail={"code": e.code, "message": e.message})


# ============================================================================
# Tasks
# ============================================================================


@router.post("/features/{feature}/tasks", response_model=TaskResponse, status_code=202)
async def start_task(
    body: dict[str, Any] = Body(...),
    facade: FeatureFacade = Depends(get_facade),
):
    """
    Start a task for a feature.

    The body is the feature's input model (images base64-encoded). Input
    that fails the feature precondition is reported as 422 with the error
    code; the failed task still becomes the facade's current task.
    """
    try:
        input = facade.coerce_input(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))

    try:
        handle = facade.start(input)
    except TaskAlreadyRunning as e:
        raise HTTPException(status_code=409, detail={"code": e.code, "message": e.message})

    task = handle.task
    if task.status == TaskStatus.FAILED and task.started_at is None:
        raise HTTPException(
            status_code=422,
            detail={
                "code": task.error.code,
                "message": task.error.message,
                "task_id": str(task.task_id),
            },
        )
    return TaskResponse.from_task(task)


@router.get("/features/{feature}/tasks/current", response_model=TaskResponse)
async def get_current_task(facade: FeatureFacade = Depends(get_facade)):
    """Current (most recently started) task for a feature."""
    task = facade.current
    if task is None:
        raise _task_not_found(facade)
    return TaskResponse.from_task(task)


@router.post("/features/{feature}/tasks/current/cancel", response_model=CancelTaskResponse)
async def cancel_current_task(facade: FeatureFacade = Depends(get_facade)):
    """Cancel the feature's running task."""
    task = facade.current
    if task is None:
        raise _task_not_found(facade)
    ok = facade.cancel()
    return CancelTaskResponse(ok=ok, status=task.status.value)


def _task_not_found(facade: FeatureFacade) -> HTTPException:
    e = TaskNotFound(facade.feature.value)
    return HTTPException(status_code=404, detail={"code": e.code, "message": e.message})
