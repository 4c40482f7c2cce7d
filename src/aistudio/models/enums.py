"""AI Studio enumerations."""

from enum import Enum


class TaskStatus(str, Enum):
    """Task lifecycle status."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"

    @classmethod
    def terminal_states(cls) -> set["TaskStatus"]:
        """Return terminal states."""
        return {cls.SUCCEEDED, cls.FAILED, cls.CANCELED}

    def is_terminal(self) -> bool:
        """Check if status is terminal."""
        return self in self.terminal_states()


class FeatureType(str, Enum):
    """The five studio tools. Values double as config key prefixes."""

    FACE_AGING = "face_aging"
    YOUTUBE = "youtube"
    WEB_SEARCH = "web_search"
    SCRIPT_TO_MOVIE = "script_to_movie"
    HAIR_REMOVAL = "hair_removal"


class TaskEventType(str, Enum):
    """Kinds of events relayed to task listeners."""

    # Fractional progress with a status label
    PROGRESS = "task.progress"
    # Lifecycle transition (running, succeeded, failed, canceled)
    STATUS = "task.status"


class ProcessingQuality(str, Enum):
    """Processing quality options for image tools."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def description(self) -> str:
        return {
            ProcessingQuality.LOW: "Faster processing, lower quality",
            ProcessingQuality.MEDIUM: "Balanced speed and quality",
            ProcessingQuality.HIGH: "Best quality, slower processing",
        }[self]


class VideoQuality(str, Enum):
    """Download resolutions offered for YouTube videos."""

    P360 = "360p"
    P480 = "480p"
    P720 = "720p"
    P1080 = "1080p"


class MovieStyle(str, Enum):
    """Rendering styles for script-to-movie generation."""

    ANIMATED = "Animated"
    REALISTIC = "Realistic"
    CARTOON = "Cartoon"
    SKETCH = "Sketch"
    THREE_D = "3D"
