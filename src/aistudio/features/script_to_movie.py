"""Script to movie: render a written script as a video."""

import asyncio
import logging
import random
from typing import Optional

from aistudio.engine.errors import ScriptToMovieError
from aistudio.engine.facade import FeatureFacade
from aistudio.engine.runner import ProgressReporter
from aistudio.features.storage import write_placeholder_video
from aistudio.models import FeatureType, MovieResult, ScriptToMovieInput

logger = logging.getLogger(__name__)

MIN_SCRIPT_LENGTH = 50
PROGRESS_CAP = 0.98

STAGES = [
    "Analyzing script",
    "Generating storyboard",
    "Creating character models",
    "Rendering scenes",
    "Adding special effects",
    "Generating audio",
    "Finalizing video",
]


def stage_for(progress: float) -> str:
    """Status label for a fraction of the generation."""
    index = min(int(progress * len(STAGES)), len(STAGES) - 1)
    return STAGES[index]


class ScriptToMovieFacade(FeatureFacade):
    feature = FeatureType.SCRIPT_TO_MOVIE
    error_cls = ScriptToMovieError
    input_model = ScriptToMovieInput

    def __init__(self, *args, rng: Optional[random.Random] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.rng = rng or random.Random()

    def validate(self, input: ScriptToMovieInput) -> None:
        if len(input.script.strip()) < MIN_SCRIPT_LENGTH:
            raise ScriptToMovieError(ScriptToMovieError.Kind.INVALID_SCRIPT)

    async def simulate(self, input: ScriptToMovieInput, report: ProgressReporter) -> MovieResult:
        tick = self.settings.simulated_movie_tick_seconds
        ticks = max(2, round(self.settings.simulated_movie_seconds / tick))
        progress = 0.0
        for _ in range(ticks):
            await asyncio.sleep(self.settings.simulated_delay(tick))
            progress = min(progress + self.rng.uniform(0.02, 0.06), PROGRESS_CAP)
            report(progress, stage_for(progress))

        try:
            path = await write_placeholder_video(self.settings.output_dir, "generated_movie")
        except OSError as e:
            logger.error(f"Could not write generated movie: {e}")
            raise ScriptToMovieError(ScriptToMovieError.Kind.FILE_WRITE_FAILED) from e
        return MovieResult(file_path=path, style=input.style)
