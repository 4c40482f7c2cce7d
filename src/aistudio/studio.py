"""Studio - one facade per tool sharing a single task runner."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Union

from aistudio.config import Settings, settings
from aistudio.engine import FeatureFacade, TaskRunner, UnknownFeature
from aistudio.features import (
    FaceAgingFacade,
    HairRemovalFacade,
    ScriptToMovieFacade,
    WebSearchFacade,
    YouTubeFacade,
)
from aistudio.models import FeatureType, UsageStats
from aistudio.observability.metrics import MetricsRegistry

logger = logging.getLogger(__name__)


class Studio:
    """Process-wide container for the studio tools."""

    def __init__(
        self,
        config: Optional[Settings] = None,
        runner: Optional[TaskRunner] = None,
        metrics_registry: Optional[MetricsRegistry] = None,
    ):
        self.settings = config or settings
        self.runner = runner or TaskRunner(
            executor=ThreadPoolExecutor(
                max_workers=self.settings.worker_pool_size,
                thread_name_prefix="aistudio-work",
            ),
            timeout_seconds=self.settings.task_timeout_seconds,
            metrics_registry=metrics_registry or MetricsRegistry(),
        )

        self.face_aging = FaceAgingFacade(self.runner, config=self.settings)
        self.youtube = YouTubeFacade(self.runner, config=self.settings)
        self.web_search = WebSearchFacade(self.runner, config=self.settings)
        self.script_to_movie = ScriptToMovieFacade(self.runner, config=self.settings)
        self.hair_removal = HairRemovalFacade(self.runner, config=self.settings)

        self.facades: dict[FeatureType, FeatureFacade] = {
            facade.feature: facade
            for facade in (
                self.face_aging,
                self.youtube,
                self.web_search,
                self.script_to_movie,
                self.hair_removal,
            )
        }

    def facade(self, feature: Union[str, FeatureType]) -> FeatureFacade:
        """Look up a facade by feature name."""
        try:
            return self.facades[FeatureType(feature)]
        except ValueError:
            raise UnknownFeature(str(feature))

    def usage(self) -> UsageStats:
        """Started-task counts per feature, read from the runner's metrics."""
        stats = UsageStats()
        for name, count in self.runner.metrics.counters_by_suffix("tasks.started").items():
            stats.counts[FeatureType(name)] = count
        return stats

    def describe(self) -> dict[str, dict[str, bool]]:
        """Which features run their simulated backend."""
        return {
            feature.value: {
                "simulated": facade.simulated,
                "api_key_configured": not self.settings.is_simulated(feature.value),
            }
            for feature, facade in self.facades.items()
        }

    def close(self) -> None:
        """Cancel running tasks and release the worker pool."""
        for facade in self.facades.values():
            if facade.cancel():
                logger.info(f"Canceled running {facade.feature.value} task on shutdown")
        self.runner.shutdown()
