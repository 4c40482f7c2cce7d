"""Face aging: render a portrait at a target age."""

from typing import Any

from aistudio.engine.errors import FaceAgingError
from aistudio.features.imaging import ImageFacade
from aistudio.models import FaceAgingInput, FeatureType

MIN_TARGET_AGE = 5
MAX_TARGET_AGE = 70


class FaceAgingFacade(ImageFacade):
    feature = FeatureType.FACE_AGING
    error_cls = FaceAgingError
    input_model = FaceAgingInput

    render_message = "Aging face"

    def validate(self, input: FaceAgingInput) -> None:
        super().validate(input)
        if not MIN_TARGET_AGE <= input.target_age <= MAX_TARGET_AGE:
            raise FaceAgingError(
                FaceAgingError.Kind.INVALID_IMAGE,
                f"Target age must be between {MIN_TARGET_AGE} and {MAX_TARGET_AGE}.",
            )

    def adjustments(self, input: FaceAgingInput) -> dict[str, Any]:
        if input.target_age < 30:
            look = "younger"
        elif input.target_age < 50:
            look = "middle_aged"
        else:
            look = "older"
        return {"target_age": input.target_age, "look": look}
