"""Card Grader - Grade trading and sports card condition from photos and extract listing details."""

__version__ = "1.0.0"
__author__ = "Card Grader Team"
__description__ = "Deterministic card condition scoring from image statistics with OCR-based metadata extraction"

from .capture.normalize import image_normalizer, normalize_image
from .core.types import CardCategory, CardDetails, GradeResult, ImageSide, NormalizedImage
from .features.score import aggregate_grade
from .ocr.extract import merge_card_details, text_extractor
from .pipeline.orchestrator import CardGrader, analyze, analyze_async
from .pipeline.progress import ProgressTracker
from .utils.config import settings
from .utils.error_handler import CardGraderError, DecodeError, InputValidationError
from .utils.log import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__description__",
    # Core components
    "configure_logging",
    "get_logger",
    "settings",
    "analyze",
    "analyze_async",
    "CardGrader",
    "ProgressTracker",
    "image_normalizer",
    "normalize_image",
    "text_extractor",
    "merge_card_details",
    "aggregate_grade",
    "GradeResult",
    "CardDetails",
    "CardCategory",
    "ImageSide",
    "NormalizedImage",
    # Errors
    "CardGraderError",
    "DecodeError",
    "InputValidationError",
]
