"""Corner wear score from gradient energy in the four corner windows."""

from typing import List

from ..core.constants import CORNER_OFFSETS, CORNER_SIZE, GRADIENT_SCALE, SCORE_MAX
from ..core.types import NormalizedImage
from .tensor_ops import clamp_score, gradient_magnitude, mean, to_grayscale


def corner_region_scores(image: NormalizedImage) -> List[float]:
    """Scores for the top-left, top-right, bottom-left and bottom-right windows."""
    magnitude = gradient_magnitude(to_grayscale(image.pixels))

    scores = []
    for row, col in CORNER_OFFSETS:
        region = magnitude[row:row + CORNER_SIZE, col:col + CORNER_SIZE]
        scores.append(clamp_score(min(SCORE_MAX, mean(region) * GRADIENT_SCALE)))
    return scores


def corners_score(image: NormalizedImage) -> float:
    scores = corner_region_scores(image)
    return clamp_score(sum(scores) / len(scores))
