"""
Aggregation of the four feature scores into one grade.
"""

from typing import Optional

from ..core.constants import SCORE_MAX, SCORE_MIN
from ..core.types import CardDetails, GradeResult
from ..utils.validation import validate_numeric_range


def aggregate_grade(centering: float, corners: float, edges: float, surface: float,
                    card_details: Optional[CardDetails] = None) -> GradeResult:
    """Combine feature scores into a GradeResult.

    The grade is the unweighted mean of the full-precision scores, rounded to
    one decimal. Each component is rounded independently for display.

    Args:
        centering, corners, edges, surface: Feature scores in [0, 10]
        card_details: Metadata to attach to the result

    Returns:
        Immutable GradeResult
    """
    components = {
        "centering": centering,
        "corners": corners,
        "edges": edges,
        "surface": surface,
    }
    for name, value in components.items():
        validate_numeric_range(value, SCORE_MIN, SCORE_MAX, field_name=name)

    grade = sum(components.values()) / len(components)

    return GradeResult(
        centering=round(centering, 1),
        corners=round(corners, 1),
        edges=round(edges, 1),
        surface=round(surface, 1),
        grade=round(grade, 1),
        card_details=card_details if card_details is not None else CardDetails(),
    )


def default_grade(card_details: Optional[CardDetails] = None) -> GradeResult:
    """All-zero result used when numeric scoring is skipped."""
    return aggregate_grade(0.0, 0.0, 0.0, 0.0, card_details)
