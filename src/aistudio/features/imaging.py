"""Shared behaviour for the image tools."""

import asyncio
from typing import Any, ClassVar, Optional

from aistudio.engine.facade import FeatureFacade
from aistudio.engine.runner import ProgressReporter
from aistudio.models import ImageInput, ImageResult

# (offset, signature, content type)
_SIGNATURES: list[tuple[int, bytes, str]] = [
    (0, b"\xff\xd8\xff", "image/jpeg"),
    (0, b"\x89PNG\r\n\x1a\n", "image/png"),
    (0, b"GIF87a", "image/gif"),
    (0, b"GIF89a", "image/gif"),
    (8, b"WEBP", "image/webp"),
    (4, b"ftypheic", "image/heic"),
    (4, b"ftypheix", "image/heic"),
    (4, b"ftypmif1", "image/heif"),
]


def sniff_image_type(data: bytes) -> Optional[str]:
    """Return the content type of ``data`` from its magic bytes, or None."""
    for offset, signature, content_type in _SIGNATURES:
        if data[offset:offset + len(signature)] == signature:
            if content_type == "image/webp" and not data.startswith(b"RIFF"):
                continue
            return content_type
    return None


class ImageFacade(FeatureFacade):
    """Validation and simulated round trip common to face aging and hair removal."""

    upload_message: ClassVar[str] = "Uploading image"
    render_message: ClassVar[str] = "Rendering image"

    def validate(self, input: ImageInput) -> None:
        if not input.image or sniff_image_type(input.image) is None:
            raise self.error_cls(self.error_cls.Kind.INVALID_IMAGE)

    def adjustments(self, input: Any) -> dict[str, Any]:
        """Describe how the simulated backend re-rendered the image."""
        return {}

    async def simulate(self, input: ImageInput, report: ProgressReporter) -> ImageResult:
        report(0.1, self.upload_message)
        await asyncio.sleep(self.settings.simulated_delay(self.settings.simulated_image_delay_seconds))
        report(0.9, f"{self.render_message} ({input.quality.description.lower()})")
        return ImageResult(
            image=input.image,
            content_type=sniff_image_type(input.image),
            quality=input.quality,
            adjustments=self.adjustments(input),
        )
