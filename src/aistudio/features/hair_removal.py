"""Hair removal: smooth hair out of an image."""

from typing import Any

from aistudio.engine.errors import HairRemovalError
from aistudio.features.imaging import ImageFacade
from aistudio.models import FeatureType, HairRemovalInput

MIN_INTENSITY = 0.1
MAX_INTENSITY = 1.0


class HairRemovalFacade(ImageFacade):
    feature = FeatureType.HAIR_REMOVAL
    error_cls = HairRemovalError
    input_model = HairRemovalInput

    render_message = "Removing hair"

    def validate(self, input: HairRemovalInput) -> None:
        super().validate(input)
        if not MIN_INTENSITY <= input.intensity <= MAX_INTENSITY:
            raise HairRemovalError(
                HairRemovalError.Kind.INVALID_IMAGE,
                f"Intensity must be between {MIN_INTENSITY} and {MAX_INTENSITY}.",
            )

    def adjustments(self, input: HairRemovalInput) -> dict[str, Any]:
        return {
            "intensity": input.intensity,
            "smoothing": round(0.7 + input.intensity * 0.3, 3),
            "sharpness": round(input.intensity * 0.5, 3),
        }
