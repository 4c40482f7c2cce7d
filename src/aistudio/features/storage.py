"""Placeholder video files for the simulated video tools."""

import asyncio
import logging
from pathlib import Path
from uuid import uuid4

logger = logging.getLogger(__name__)

# A lone ISO base media 'ftyp' box: enough for the file to be recognised as MP4.
PLACEHOLDER_MP4 = (
    b"\x00\x00\x00\x18ftypmp42"
    b"\x00\x00\x00\x00"
    b"mp42isom"
)


def _write(output_dir: Path, path: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    if path.resolve().parent != output_dir.resolve():
        raise PermissionError(f"Refusing to write {path} outside {output_dir}")
    path.write_bytes(PLACEHOLDER_MP4)


async def write_placeholder_video(output_dir: Path, stem: str) -> Path:
    """
    Write a placeholder ``.mp4`` directly inside ``output_dir`` and return its path.

    Raises OSError if the directory or file cannot be written, or if ``stem``
    would place the file anywhere else.
    """
    output_dir = Path(output_dir)
    path = output_dir / f"{stem}_{uuid4().hex[:12]}.mp4"
    await asyncio.get_running_loop().run_in_executor(None, _write, output_dir, path)
    logger.debug(f"Wrote placeholder video {path}")
    return path
