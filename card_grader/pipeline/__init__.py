"""Grading pipeline orchestration."""

from .orchestrator import CardGrader, analyze, analyze_async, default_grader
from .progress import ProgressSink, ProgressTracker

__all__ = [
    "CardGrader",
    "ProgressSink",
    "ProgressTracker",
    "analyze",
    "analyze_async",
    "default_grader",
]
