"""AI Studio engine and feature errors."""

from enum import Enum
from typing import ClassVar, Optional

from aistudio.models.task import TaskError


class AIStudioError(Exception):
    """Base error for AI Studio operations."""

    def __init__(self, message: str, code: str = "AISTUDIO_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class TaskNotFound(AIStudioError):
    """Facade has no task to act on."""

    def __init__(self, feature: str):
        super().__init__(f"No task found for feature: {feature}", "TASK_NOT_FOUND")
        self.feature = feature


class InvalidStateTransition(AIStudioError):
    """Invalid task state transition."""

    def __init__(self, current_status: str, requested_status: str):
        super().__init__(
            f"Invalid transition from {current_status} to {requested_status}",
            "INVALID_STATE_TRANSITION",
        )
        self.current_status = current_status
        self.requested_status = requested_status


class TaskAlreadyRunning(AIStudioError):
    """A facade configured to reject overlapping starts was started twice."""

    def __init__(self, feature: str, task_id: str):
        super().__init__(
            f"Task {task_id} is still running for feature {feature}",
            "TASK_ALREADY_RUNNING",
        )
        self.feature = feature
        self.task_id = task_id


class UnknownFeature(AIStudioError):
    """No facade is registered under this name."""

    def __init__(self, feature: str):
        super().__init__(f"Unknown feature: {feature}", "UNKNOWN_FEATURE")
        self.feature = feature


class TaskCanceled(AIStudioError):
    """Raised inside work that noticed its task was canceled."""

    def __init__(self, task_id: str = ""):
        super().__init__(f"Task {task_id} was canceled", "TASK_CANCELED")
        self.task_id = task_id


# ============================================================================
# Feature errors
# ============================================================================


class FeatureError(AIStudioError):
    """
    Typed failure of a feature operation.

    Subclasses declare a closed ``Kind`` enum and one human-readable message
    per kind. The message is derived from the kind alone, plus an optional
    detail such as the service error text or the violated input range.

    ``fallback_kind`` is used when work raises something unexpected;
    ``timeout_kind`` when the runner gives up waiting.
    """

    feature: ClassVar[str] = "feature"
    Kind: ClassVar[type[Enum]]
    messages: ClassVar[dict]
    fallback_kind: ClassVar[Enum]
    timeout_kind: ClassVar[Enum]

    def __init__(self, kind: Enum, detail: Optional[str] = None):
        if not isinstance(kind, self.Kind):
            raise TypeError(f"{type(self).__name__} does not accept kind {kind!r}")
        message = self.messages[kind]
        if detail:
            message = f"{message} {detail}"
        super().__init__(message, f"{self.feature}.{kind.value}".upper())
        self.kind = kind
        self.detail = detail

    def to_task_error(self) -> TaskError:
        return TaskError(kind=self.kind.value, code=self.code, message=self.message)


class FaceAgingError(FeatureError):
    """Face aging failures."""

    class Kind(str, Enum):
        INVALID_IMAGE = "invalid_image"
        PROCESSING_FAILED = "processing_failed"
        API_ERROR = "api_error"
        NETWORK_ERROR = "network_error"
        TIMED_OUT = "timed_out"

    feature = "face_aging"
    messages = {
        Kind.INVALID_IMAGE: "The image is invalid or corrupted.",
        Kind.PROCESSING_FAILED: "Failed to process the image.",
        Kind.API_ERROR: "The AI service returned an error.",
        Kind.NETWORK_ERROR: "Network connection error. Please check your internet connection.",
        Kind.TIMED_OUT: "The face aging request took too long and was stopped.",
    }
    fallback_kind = Kind.PROCESSING_FAILED
    timeout_kind = Kind.TIMED_OUT


class HairRemovalError(FeatureError):
    """Hair removal failures."""

    class Kind(str, Enum):
        INVALID_IMAGE = "invalid_image"
        PROCESSING_FAILED = "processing_failed"
        API_ERROR = "api_error"
        NETWORK_ERROR = "network_error"
        TIMED_OUT = "timed_out"

    feature = "hair_removal"
    messages = {
        Kind.INVALID_IMAGE: "The image is invalid or corrupted.",
        Kind.PROCESSING_FAILED: "Failed to process the image.",
        Kind.API_ERROR: "The AI service returned an error.",
        Kind.NETWORK_ERROR: "Network connection error. Please check your internet connection.",
        Kind.TIMED_OUT: "The hair removal request took too long and was stopped.",
    }
    fallback_kind = Kind.PROCESSING_FAILED
    timeout_kind = Kind.TIMED_OUT


class YouTubeError(FeatureError):
    """YouTube download failures."""

    class Kind(str, Enum):
        INVALID_URL = "invalid_url"
        DOWNLOAD_FAILED = "download_failed"
        FILE_WRITE_FAILED = "file_write_failed"
        NETWORK_ERROR = "network_error"
        INVALID_RESPONSE = "invalid_response"
        NO_VIDEO_INFO = "no_video_info"
        TIMED_OUT = "timed_out"

    feature = "youtube"
    messages = {
        Kind.INVALID_URL: "The YouTube URL is invalid.",
        Kind.DOWNLOAD_FAILED: "Failed to download the video.",
        Kind.FILE_WRITE_FAILED: "Failed to save the video file.",
        Kind.NETWORK_ERROR: "Network connection error. Please check your internet connection.",
        Kind.INVALID_RESPONSE: "Received an invalid response from the server.",
        Kind.NO_VIDEO_INFO: "Could not retrieve video information.",
        Kind.TIMED_OUT: "The download took too long and was stopped.",
    }
    fallback_kind = Kind.DOWNLOAD_FAILED
    timeout_kind = Kind.TIMED_OUT


class WebSearchError(FeatureError):
    """Web search failures."""

    class Kind(str, Enum):
        INVALID_QUERY = "invalid_query"
        REQUEST_FAILED = "request_failed"
        NETWORK_ERROR = "network_error"
        PARSE_ERROR = "parse_error"
        TIMED_OUT = "timed_out"

    feature = "web_search"
    messages = {
        Kind.INVALID_QUERY: "The search query is invalid.",
        Kind.REQUEST_FAILED: "Failed to complete the search request.",
        Kind.NETWORK_ERROR: "Network connection error. Please check your internet connection.",
        Kind.PARSE_ERROR: "Failed to parse the search results.",
        Kind.TIMED_OUT: "The search took too long and was stopped.",
    }
    fallback_kind = Kind.REQUEST_FAILED
    timeout_kind = Kind.TIMED_OUT


class ScriptToMovieError(FeatureError):
    """Script to movie failures."""

    class Kind(str, Enum):
        INVALID_SCRIPT = "invalid_script"
        PROCESSING_FAILED = "processing_failed"
        FILE_WRITE_FAILED = "file_write_failed"
        NETWORK_ERROR = "network_error"
        TIMED_OUT = "timed_out"

    feature = "script_to_movie"
    messages = {
        Kind.INVALID_SCRIPT: "The script is invalid or too short.",
        Kind.PROCESSING_FAILED: "Failed to process the script into a movie.",
        Kind.FILE_WRITE_FAILED: "Failed to save the generated movie file.",
        Kind.NETWORK_ERROR: "Network connection error. Please check your internet connection.",
        Kind.TIMED_OUT: "Movie generation took too long and was stopped.",
    }
    fallback_kind = Kind.PROCESSING_FAILED
    timeout_kind = Kind.TIMED_OUT
