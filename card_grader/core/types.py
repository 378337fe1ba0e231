from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

import numpy as np

from .constants import IMAGE_SHAPE, UNKNOWN
from ..utils.error_handler import FeatureComputationError
from ..utils.validation import validate_grid_shape


class ImageSide(str, Enum):
    FRONT = "front"
    BACK = "back"


class CardCategory(str, Enum):
    TRADING = "trading"
    SPORTS = "sports"
    UNSET = "unset"


class NormalizedImage:
    """224x224x3 float grid in [0, 1], scoped to a single analysis.

    Use as a context manager so the pixel buffer is dropped once every
    extractor has read it.
    """

    def __init__(self, pixels: np.ndarray, side: ImageSide = ImageSide.FRONT,
                 source_size: Optional[tuple] = None):
        validate_grid_shape(pixels, IMAGE_SHAPE)
        pixels = np.array(pixels, dtype=np.float64)
        pixels.setflags(write=False)
        self._pixels: Optional[np.ndarray] = pixels
        self.side = side
        self.source_size = source_size

    @property
    def pixels(self) -> np.ndarray:
        if self._pixels is None:
            raise FeatureComputationError(
                "Normalized image has already been released",
                details={"side": self.side.value},
            )
        return self._pixels

    @property
    def released(self) -> bool:
        return self._pixels is None

    def release(self) -> None:
        self._pixels = None

    def __enter__(self) -> "NormalizedImage":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


@dataclass
class CardDetails:
    name: str = UNKNOWN
    set: str = UNKNOWN
    number: str = UNKNOWN
    type: str = UNKNOWN
    rarity: str = UNKNOWN
    confirmed: bool = False
    category: CardCategory = CardCategory.UNSET

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value
        return data


@dataclass(frozen=True)
class GradeResult:
    centering: float
    corners: float
    edges: float
    surface: float
    grade: float
    card_details: CardDetails = field(default_factory=CardDetails)

    @property
    def scores(self) -> Dict[str, float]:
        return {
            "centering": self.centering,
            "corners": self.corners,
            "edges": self.edges,
            "surface": self.surface,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.scores,
            "grade": self.grade,
            "card_details": self.card_details.to_dict(),
        }


@dataclass(frozen=True)
class ProgressEvent:
    step: str
    details: str


@dataclass
class ProgressStep:
    step: str
    details: str
    completed: bool = False
