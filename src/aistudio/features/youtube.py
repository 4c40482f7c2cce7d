"""YouTube download: fetch video metadata, then download the file."""

import asyncio
import logging
import re
from typing import Optional
from urllib.parse import parse_qs, urlsplit

from aistudio.engine.errors import YouTubeError
from aistudio.engine.facade import FeatureFacade
from aistudio.engine.runner import ProgressReporter
from aistudio.features.storage import write_placeholder_video
from aistudio.models import FeatureType, VideoDownload, VideoInfo, YouTubeDownloadInput
from aistudio.utils.time import format_duration

logger = logging.getLogger(__name__)

VIDEO_HOSTS = ("youtube.com", "youtu.be")
DEFAULT_VIDEO_ID = "dQw4w9WgXcQ"
SIMULATED_DURATION_SECONDS = 260
DOWNLOAD_STEP = 0.05
DOWNLOAD_CAP = 0.95

_PATH_ID = re.compile(r"^/(?:shorts|embed|live)/([^/]+)")
_VIDEO_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")


def is_youtube_url(url: str) -> bool:
    """True if ``url`` names one of the recognised video hosts."""
    url = url.strip()
    if not url or any(c.isspace() for c in url):
        return False
    lowered = url.lower()
    return any(host in lowered for host in VIDEO_HOSTS)


def extract_video_id(url: str) -> Optional[str]:
    """
    Pull the video ID out of ``watch?v=``, ``youtu.be/``, shorts and embed URLs.

    Returns None unless the ID is made of letters, digits, ``_`` and ``-``.
    """
    candidate = _find_video_id(url)
    if candidate and _VIDEO_ID.fullmatch(candidate):
        return candidate
    return None


def _find_video_id(url: str) -> Optional[str]:
    url = url.strip()
    if "://" not in url:
        url = f"https://{url}"
    parts = urlsplit(url)
    host = parts.netloc.lower()

    if host.endswith("youtu.be"):
        video_id = parts.path.lstrip("/").split("/")[0]
        return video_id or None

    if host.endswith("youtube.com"):
        if parts.path == "/watch":
            values = parse_qs(parts.query).get("v")
            return values[0] if values else None
        match = _PATH_ID.match(parts.path)
        if match:
            return match.group(1)
    return None


class YouTubeFacade(FeatureFacade):
    feature = FeatureType.YOUTUBE
    error_cls = YouTubeError
    input_model = YouTubeDownloadInput

    def validate(self, input: YouTubeDownloadInput) -> None:
        if not is_youtube_url(input.url):
            raise YouTubeError(YouTubeError.Kind.INVALID_URL)

    async def get_video_info(self, url: str) -> VideoInfo:
        """Look up title, duration and thumbnail for ``url``."""
        if not is_youtube_url(url):
            raise YouTubeError(YouTubeError.Kind.INVALID_URL)
        await asyncio.sleep(self.settings.simulated_delay(self.settings.simulated_video_info_delay_seconds))
        video_id = extract_video_id(url) or DEFAULT_VIDEO_ID
        return VideoInfo(
            video_id=video_id,
            title=f"Sample YouTube Video - {video_id}",
            duration=format_duration(SIMULATED_DURATION_SECONDS),
            thumbnail_url=f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg",
        )

    async def simulate(self, input: YouTubeDownloadInput, report: ProgressReporter) -> VideoDownload:
        report(0.0, "Fetching video information")
        info = await self.get_video_info(input.url)

        tick = self.settings.simulated_download_tick_seconds
        ticks = max(2, round(self.settings.simulated_download_seconds / tick))
        progress = 0.0
        for _ in range(ticks):
            await asyncio.sleep(self.settings.simulated_delay(tick))
            progress += DOWNLOAD_STEP
            report(min(progress, DOWNLOAD_CAP), f"Downloading {input.quality.value}")

        try:
            path = await write_placeholder_video(self.settings.output_dir, f"youtube_{info.video_id}")
        except OSError as e:
            logger.error(f"Could not write downloaded video: {e}")
            raise YouTubeError(YouTubeError.Kind.FILE_WRITE_FAILED) from e
        return VideoDownload(file_path=path, quality=input.quality, info=info)
