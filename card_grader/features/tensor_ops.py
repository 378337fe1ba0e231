"""
Numeric kernels shared by the feature extractors.

All operations are plain numpy on float64 arrays. ``convolve2d`` is a
cross-correlation (the kernel is not flipped), the same convention the deep
learning ``conv2d`` operators follow.
"""

import math
from typing import Sequence, Tuple, Union

import numpy as np

from ..core.constants import LAPLACIAN, SCORE_MAX, SCORE_MIN, SOBEL_H, SOBEL_V
from ..utils.error_handler import FeatureComputationError

Kernel = Union[np.ndarray, Sequence[Sequence[float]]]

PADDING_MODES = ("same", "valid")
FILL_MODES = ("edge", "constant")


def convolve2d(grid: np.ndarray, kernel: Kernel, padding: str = "same",
               fill: str = "constant") -> np.ndarray:
    """Slide ``kernel`` over a 2-D grid.

    Args:
        grid: 2-D array
        kernel: 2-D kernel with odd side lengths
        padding: "same" keeps the input's spatial size, "valid" only keeps
            positions where the kernel fits entirely
        fill: border fill for "same" padding, "constant" pads with zeros
            and "edge" replicates the outermost pixels

    Returns:
        Response array (float64)
    """
    grid = np.asarray(grid, dtype=np.float64)
    kernel = np.asarray(kernel, dtype=np.float64)

    if grid.ndim != 2 or kernel.ndim != 2:
        raise FeatureComputationError(
            "convolve2d expects a 2-D grid and a 2-D kernel",
            details={"grid_ndim": grid.ndim, "kernel_ndim": kernel.ndim},
        )
    kh, kw = kernel.shape
    if kh % 2 == 0 or kw % 2 == 0:
        raise FeatureComputationError(
            "Kernel side lengths must be odd", details={"kernel_shape": kernel.shape}
        )
    if padding not in PADDING_MODES:
        raise FeatureComputationError(
            f"Unknown padding mode: {padding}", details={"allowed": PADDING_MODES}
        )
    if fill not in FILL_MODES:
        raise FeatureComputationError(
            f"Unknown fill mode: {fill}", details={"allowed": FILL_MODES}
        )

    if padding == "same":
        pad = ((kh // 2, kh // 2), (kw // 2, kw // 2))
        source = np.pad(grid, pad, mode=fill)
        out_h, out_w = grid.shape
    else:
        source = grid
        out_h, out_w = grid.shape[0] - kh + 1, grid.shape[1] - kw + 1
        if out_h <= 0 or out_w <= 0:
            return np.zeros((max(out_h, 0), max(out_w, 0)))

    response = np.zeros((out_h, out_w), dtype=np.float64)
    for i in range(kh):
        for j in range(kw):
            weight = kernel[i, j]
            if weight:
                response += weight * source[i:i + out_h, j:j + out_w]
    return response


def mean(values: np.ndarray) -> float:
    return float(np.mean(values))


def variance(values: np.ndarray) -> float:
    """Population variance, as ``moments`` in tensor libraries report it."""
    return float(np.var(values))


def moments(grid: np.ndarray) -> Tuple[float, float]:
    """Intensity-weighted centroid ``(row, col)`` of a 2-D or 3-D grid.

    Channels are summed into one weight per pixel. A grid with no intensity
    has no centroid and yields ``(nan, nan)``.
    """
    grid = np.asarray(grid, dtype=np.float64)
    weights = grid.sum(axis=2) if grid.ndim == 3 else grid
    total = weights.sum()
    if total == 0:
        return math.nan, math.nan

    rows = np.arange(weights.shape[0], dtype=np.float64)
    cols = np.arange(weights.shape[1], dtype=np.float64)
    center_row = float((weights.sum(axis=1) * rows).sum() / total)
    center_col = float((weights.sum(axis=0) * cols).sum() / total)
    return center_row, center_col


def to_grayscale(grid: np.ndarray) -> np.ndarray:
    """Average the channel axis."""
    grid = np.asarray(grid, dtype=np.float64)
    if grid.ndim == 2:
        return grid
    return grid.mean(axis=-1)


def gradient_magnitude(gray: np.ndarray) -> np.ndarray:
    """Per-pixel ``sqrt(h^2 + v^2)`` of the horizontal and vertical Sobel responses.

    Borders are zero padded, so even a constant grid responds along its edges.
    """
    horizontal = convolve2d(gray, SOBEL_H, padding="same", fill="constant")
    vertical = convolve2d(gray, SOBEL_V, padding="same", fill="constant")
    return np.sqrt(horizontal ** 2 + vertical ** 2)


def laplacian(gray: np.ndarray) -> np.ndarray:
    return convolve2d(gray, LAPLACIAN, padding="same", fill="constant")


def clamp_score(value: float, low: float = SCORE_MIN, high: float = SCORE_MAX) -> float:
    """Clamp a raw score into ``[low, high]``; NaN becomes ``low``."""
    value = float(value)
    if math.isnan(value):
        return low
    return min(high, max(low, value))
