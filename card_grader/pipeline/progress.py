"""Progress reporting for the grading pipeline."""

from typing import Callable, Dict, List, Optional

from ..core.constants import STAGE_START_DETAILS
from ..core.types import ProgressEvent, ProgressStep
from ..utils.error_handler import PipelineError

ProgressSink = Callable[[str, str], None]


class ProgressTracker:
    """Single source of truth for step state.

    Steps are keyed by name and kept in first-emission order. Updating a
    step replaces its details in place; the sink is called on every change.
    """

    def __init__(self, sink: Optional[ProgressSink] = None):
        self.sink = sink
        self._steps: Dict[str, ProgressStep] = {}
        self._events: List[ProgressEvent] = []

    @property
    def steps(self) -> List[ProgressStep]:
        return [ProgressStep(s.step, s.details, s.completed) for s in self._steps.values()]

    @property
    def events(self) -> List[ProgressEvent]:
        return list(self._events)

    def get(self, step: str) -> Optional[ProgressStep]:
        return self._steps.get(step)

    def start(self, step: str, details: Optional[str] = None) -> None:
        """Announce a step. Re-announcing an open step updates its details."""
        current = self._steps.get(step)
        if current is not None and current.completed:
            raise PipelineError(f"Step already completed: {step}", details={"step": step})

        details = details or STAGE_START_DETAILS.get(step, f"{step}...")
        if current is None:
            self._steps[step] = ProgressStep(step, details)
        else:
            current.details = details
        self._emit(step, details)

    def complete(self, step: str, details: str) -> None:
        """Mark a step completed; a step completes at most once."""
        current = self._steps.get(step)
        if current is None:
            current = self._steps[step] = ProgressStep(step, details)
        elif current.completed:
            raise PipelineError(f"Step already completed: {step}", details={"step": step})

        current.details = details
        current.completed = True
        self._emit(step, details)

    def _emit(self, step: str, details: str) -> None:
        self._events.append(ProgressEvent(step, details))
        if self.sink is not None:
            self.sink(step, details)
