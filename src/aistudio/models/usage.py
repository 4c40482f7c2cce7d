"""Usage statistics per feature."""

from pydantic import BaseModel, Field

from aistudio.models.enums import FeatureType


class UsageStats(BaseModel):
    """How many times each tool has been started."""

    counts: dict[FeatureType, int] = Field(
        default_factory=lambda: {feature: 0 for feature in FeatureType}
    )

    @property
    def total_usage(self) -> int:
        return sum(self.counts.values())
