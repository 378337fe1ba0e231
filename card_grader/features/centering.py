"""Centering score from the intensity-weighted centroid."""

import math

from ..core.constants import CENTER_TOLERANCE_PX, IDEAL_CENTER, SCORE_MAX
from ..core.types import NormalizedImage
from .tensor_ops import clamp_score, moments


def centroid_distance(image: NormalizedImage) -> float:
    """Distance in pixels between the grid's centroid and the ideal centre."""
    center_row, center_col = moments(image.pixels)
    return math.hypot(center_row - IDEAL_CENTER[0], center_col - IDEAL_CENTER[1])


def centering_score(image: NormalizedImage) -> float:
    """Linear falloff from 10 at the ideal centre, one point per 22.4 px of drift."""
    distance = centroid_distance(image)
    return clamp_score(SCORE_MAX - distance / CENTER_TOLERANCE_PX)
