"""Time utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return a timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


def format_duration(total_seconds: int) -> str:
    """Render a clip length the way players show it: ``4:20``, ``1:02:03``."""
    if total_seconds < 0:
        raise ValueError(f"duration must be non-negative, got {total_seconds}")
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"
