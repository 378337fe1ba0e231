"""
Input validation helpers for the card grader.

These guard the pipeline boundary: a missing image or a grid of the wrong
shape is rejected before any feature statistics are computed.
"""

from pathlib import Path
from typing import Any, Optional, Tuple, Union

import numpy as np

from .error_handler import FeatureComputationError, InputValidationError


def is_empty_payload(payload: Any) -> bool:
    """Return True for None and empty strings/bytes."""
    if payload is None:
        return True
    if isinstance(payload, np.ndarray):
        # Zero-area arrays are a decode failure, not a missing image
        return False
    if isinstance(payload, str):
        return not payload.strip()
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return len(payload) == 0
    return False


def validate_image_payload(payload: Any, side: str = "front") -> Any:
    """
    Validate that an image payload is present and of a supported type.

    Args:
        payload: Encoded bytes, data URI, file path or decoded array
        side: Which card side the payload belongs to

    Returns:
        The payload unchanged

    Raises:
        InputValidationError: If the payload is empty or of an unsupported type
    """
    if is_empty_payload(payload):
        raise InputValidationError(
            f"{side} image is required",
            details={"side": side}
        )

    if not isinstance(payload, (bytes, bytearray, memoryview, str, Path, np.ndarray)):
        raise InputValidationError(
            f"Unsupported {side} image payload type: {type(payload).__name__}",
            details={"side": side, "payload_type": type(payload).__name__}
        )

    return payload


def validate_numeric_range(
    value: Union[int, float],
    min_value: Optional[Union[int, float]] = None,
    max_value: Optional[Union[int, float]] = None,
    field_name: str = "value"
) -> Union[int, float]:
    """
    Validate a numeric value is within specified range.

    Raises:
        InputValidationError: If value is outside the allowed range
    """
    if min_value is not None and value < min_value:
        raise InputValidationError(
            f"{field_name} {value} is below minimum {min_value}",
            details={
                "field_name": field_name,
                "value": value,
                "min_value": min_value,
                "max_value": max_value
            }
        )

    if max_value is not None and value > max_value:
        raise InputValidationError(
            f"{field_name} {value} is above maximum {max_value}",
            details={
                "field_name": field_name,
                "value": value,
                "min_value": min_value,
                "max_value": max_value
            }
        )

    return value


def validate_grid_shape(grid: np.ndarray, expected: Tuple[int, ...]) -> np.ndarray:
    """Ensure a pixel grid has exactly the expected shape."""
    if not isinstance(grid, np.ndarray):
        raise FeatureComputationError(
            "Pixel grid must be a numpy array",
            details={"grid_type": type(grid).__name__}
        )
    if grid.shape != tuple(expected):
        raise FeatureComputationError(
            f"Pixel grid has shape {grid.shape}, expected {tuple(expected)}",
            details={"shape": grid.shape, "expected": tuple(expected)}
        )
    return grid
