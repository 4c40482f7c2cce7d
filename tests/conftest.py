"""
Pytest fixtures for AI Studio tests.
"""

import os
from concurrent.futures import ThreadPoolExecutor

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure test config is set before importing aistudio modules.
os.environ.setdefault("AISTUDIO_ENV", "development")
os.environ.setdefault("AISTUDIO_LOG_LEVEL", "DEBUG")

from aistudio.config import Settings
from aistudio.engine import TaskRunner
from aistudio.observability.metrics import MetricsRegistry
from aistudio.studio import Studio

pytest_plugins = ("pytest_asyncio",)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 16
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 16

LONG_SCRIPT = (
    "INT. KITCHEN - NIGHT. A cat sits on the counter, staring at the fridge. "
    "It knocks a glass to the floor and waits. Footsteps. The light flicks on. "
    "A sleepy owner appears, sighs, and opens the fridge. The cat wins again. "
    "FADE OUT."
)


@pytest.fixture
def config(tmp_path) -> Settings:
    """Settings with near-zero simulated delays and a throwaway output dir."""
    return Settings(
        output_dir=tmp_path / "output",
        simulated_image_delay_seconds=0.01,
        simulated_search_delay_seconds=0.01,
        simulated_video_info_delay_seconds=0.01,
        simulated_download_seconds=0.04,
        simulated_download_tick_seconds=0.004,
        simulated_movie_seconds=0.05,
        simulated_movie_tick_seconds=0.005,
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    return MetricsRegistry()


@pytest.fixture
def runner(metrics_registry):
    """Task runner with a small worker pool for synchronous work."""
    runner = TaskRunner(
        executor=ThreadPoolExecutor(max_workers=2, thread_name_prefix="aistudio-test"),
        metrics_registry=metrics_registry,
    )
    yield runner
    runner.shutdown()


@pytest.fixture
async def studio(config, runner):
    """Studio torn down on the test's event loop so running tasks can be canceled."""
    studio = Studio(config, runner=runner)
    yield studio
    studio.close()


@pytest.fixture
def events():
    """Collects every event delivered to a listener."""
    return []


@pytest.fixture
async def client(studio):
    """Async test client wired to the test studio."""
    from aistudio.main import app

    app.state.studio = studio
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.state.studio = None
