"""Core constants and data types."""

from .types import (
    CardCategory,
    CardDetails,
    GradeResult,
    ImageSide,
    NormalizedImage,
    ProgressEvent,
    ProgressStep,
)

__all__ = [
    "CardCategory",
    "CardDetails",
    "GradeResult",
    "ImageSide",
    "NormalizedImage",
    "ProgressEvent",
    "ProgressStep",
]
