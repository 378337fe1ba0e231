"""
Feature extractors for card condition grading.
"""

from .centering import centering_score
from .corners import corners_score
from .edges import edges_score
from .score import aggregate_grade, default_grade
from .surface import surface_score

FEATURE_EXTRACTORS = {
    "centering": centering_score,
    "corners": corners_score,
    "edges": edges_score,
    "surface": surface_score,
}

__all__ = [
    "FEATURE_EXTRACTORS",
    "centering_score",
    "corners_score",
    "edges_score",
    "surface_score",
    "aggregate_grade",
    "default_grade",
]
