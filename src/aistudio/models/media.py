"""Feature inputs and results."""

import base64
import binascii
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from aistudio.models.enums import MovieStyle, ProcessingQuality, VideoQuality


# ============================================================================
# Images (face aging, hair removal)
# ============================================================================


class ImageInput(BaseModel):
    """Raw image bytes. Strings are treated as base64 (the JSON wire form)."""

    image: bytes = b""
    quality: ProcessingQuality = ProcessingQuality.MEDIUM

    @field_validator("image", mode="before")
    @classmethod
    def decode_base64_image(cls, v: Any) -> Any:
        # Undecodable text is kept as raw bytes and fails the image check.
        if isinstance(v, str):
            try:
                return base64.b64decode(v, validate=True)
            except (binascii.Error, ValueError):
                return v.encode("utf-8")
        return v

    @field_serializer("image")
    def encode_image(self, v: bytes) -> str:
        return base64.b64encode(v).decode("ascii")


class FaceAgingInput(ImageInput):
    """Portrait plus the age to render it at."""

    target_age: int = 20


class HairRemovalInput(ImageInput):
    """Image plus removal strength."""

    intensity: float = 0.5


class ImageResult(BaseModel):
    """Re-rendered image and the adjustments applied to it."""

    image: bytes
    content_type: str
    quality: ProcessingQuality
    adjustments: dict[str, Any] = Field(default_factory=dict)

    @field_serializer("image")
    def encode_image(self, v: bytes) -> str:
        return base64.b64encode(v).decode("ascii")


# ============================================================================
# YouTube download
# ============================================================================


class YouTubeDownloadInput(BaseModel):
    url: str
    quality: VideoQuality = VideoQuality.P720


class VideoInfo(BaseModel):
    """Metadata shown before and after a download."""

    video_id: str
    title: str
    duration: str
    thumbnail_url: str


class VideoDownload(BaseModel):
    """A downloaded video file and its metadata."""

    file_path: Path
    quality: VideoQuality
    info: VideoInfo


# ============================================================================
# Web search
# ============================================================================


class SearchInput(BaseModel):
    query: str


class SearchResult(BaseModel):
    title: str
    url: str
    description: str


class SearchResponse(BaseModel):
    """Ordered results plus an optional AI summary."""

    results: list[SearchResult] = Field(default_factory=list)
    ai_summary: Optional[str] = None


# ============================================================================
# Script to movie
# ============================================================================


class ScriptToMovieInput(BaseModel):
    script: str
    style: MovieStyle = MovieStyle.ANIMATED


class MovieResult(BaseModel):
    """A generated movie file."""

    file_path: Path
    style: MovieStyle
