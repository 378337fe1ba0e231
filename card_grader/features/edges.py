"""Edge sharpness score from gradient energy over the whole grid."""

from ..core.constants import GRADIENT_SCALE, SCORE_MAX
from ..core.types import NormalizedImage
from .tensor_ops import clamp_score, gradient_magnitude, mean, to_grayscale


def edges_score(image: NormalizedImage) -> float:
    magnitude = gradient_magnitude(to_grayscale(image.pixels))
    return clamp_score(min(SCORE_MAX, mean(magnitude) * GRADIENT_SCALE))
