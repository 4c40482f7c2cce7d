"""AI Studio engine - task runner, facades and state machine."""

from aistudio.engine.errors import (
    AIStudioError,
    FaceAgingError,
    FeatureError,
    HairRemovalError,
    InvalidStateTransition,
    ScriptToMovieError,
    TaskAlreadyRunning,
    TaskCanceled,
    TaskNotFound,
    UnknownFeature,
    WebSearchError,
    YouTubeError,
)
from aistudio.engine.facade import FeatureFacade
from aistudio.engine.runner import ProgressReporter, TaskHandle, TaskRunner

__all__ = [
    "AIStudioError",
    "FaceAgingError",
    "FeatureError",
    "FeatureFacade",
    "HairRemovalError",
    "InvalidStateTransition",
    "ProgressReporter",
    "ScriptToMovieError",
    "TaskAlreadyRunning",
    "TaskCanceled",
    "TaskHandle",
    "TaskNotFound",
    "TaskRunner",
    "UnknownFeature",
    "WebSearchError",
    "YouTubeError",
]
