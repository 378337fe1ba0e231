"""Surface texture score from the variance of the Laplacian response.

High-frequency variance approximates scratch and print-texture density. A
low value means a smooth surface, either pristine or blurred.
"""

from ..core.constants import LAPLACIAN_SCALE, SCORE_MAX
from ..core.types import NormalizedImage
from .tensor_ops import clamp_score, laplacian, to_grayscale, variance


def surface_score(image: NormalizedImage) -> float:
    response = laplacian(to_grayscale(image.pixels))
    return clamp_score(min(SCORE_MAX, variance(response) * LAPLACIAN_SCALE))
