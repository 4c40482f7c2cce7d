"""AI Studio data models."""

from aistudio.models.enums import (
    FeatureType,
    MovieStyle,
    ProcessingQuality,
    TaskEventType,
    TaskStatus,
    VideoQuality,
)
from aistudio.models.media import (
    FaceAgingInput,
    HairRemovalInput,
    ImageInput,
    ImageResult,
    MovieResult,
    ScriptToMovieInput,
    SearchInput,
    SearchResponse,
    SearchResult,
    VideoDownload,
    VideoInfo,
    YouTubeDownloadInput,
)
from aistudio.models.progress import TaskEvent, TaskListener
from aistudio.models.task import Task, TaskError
from aistudio.models.usage import UsageStats

__all__ = [
    "FaceAgingInput",
    "FeatureType",
    "HairRemovalInput",
    "ImageInput",
    "ImageResult",
    "MovieResult",
    "MovieStyle",
    "ProcessingQuality",
    "ScriptToMovieInput",
    "SearchInput",
    "SearchResponse",
    "SearchResult",
    "Task",
    "TaskError",
    "TaskEvent",
    "TaskEventType",
    "TaskListener",
    "TaskStatus",
    "UsageStats",
    "VideoDownload",
    "VideoInfo",
    "VideoQuality",
    "YouTubeDownloadInput",
]
