"""
Card analysis pipeline.

Sequences text extraction, normalization, the four feature extractors and
aggregation, reporting progress as each stage starts and completes.
"""

import asyncio
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from ..capture.normalize import ImageNormalizer, ImagePayload, image_normalizer
from ..core.constants import (
    IMAGE_SIZE,
    STAGE_CENTERING,
    STAGE_CORNERS,
    STAGE_EDGES,
    STAGE_IMAGE,
    STAGE_SURFACE,
    STAGE_TEXT,
)
from ..core.types import CardDetails, GradeResult, ImageSide, NormalizedImage
from ..features import centering_score, corners_score, edges_score, surface_score
from ..features.score import aggregate_grade, default_grade
from ..ocr.engine import OCREngine, TesseractEngine, recognize_text
from ..ocr.extract import TextExtractor, merge_card_details, text_extractor
from ..utils.log import LoggerMixin
from ..utils.validation import is_empty_payload, validate_image_payload
from .progress import ProgressSink, ProgressTracker

# (result field, stage name, extractor, label)
FEATURE_STAGES: Tuple[Tuple[str, str, Callable[[NormalizedImage], float], str], ...] = (
    ("centering", STAGE_CENTERING, centering_score, "Centering"),
    ("corners", STAGE_CORNERS, corners_score, "Corners"),
    ("edges", STAGE_EDGES, edges_score, "Edges"),
    ("surface", STAGE_SURFACE, surface_score, "Surface"),
)


class CardGrader(LoggerMixin):
    """Grades card condition and extracts listing metadata."""

    def __init__(self, normalizer: Optional[ImageNormalizer] = None,
                 ocr_engine: Optional[OCREngine] = None,
                 extractor: Optional[TextExtractor] = None):
        self.normalizer = normalizer or image_normalizer
        self.ocr_engine = ocr_engine or TesseractEngine()
        self.extractor = extractor or text_extractor

    def analyze(self, front_image: ImagePayload, back_image: Optional[ImagePayload] = None,
                progress_sink: Optional[ProgressSink] = None,
                tracker: Optional[ProgressTracker] = None) -> GradeResult:
        """
        Run the full analysis sequentially.

        Args:
            front_image: Encoded front image (bytes, data URI, path or array)
            back_image: Encoded back image; when empty only front text is read
                and every score is 0
            progress_sink: Optional ``(step, details)`` callback
            tracker: Optional tracker to record into (a new one by default)

        Returns:
            GradeResult with merged CardDetails

        Raises:
            InputValidationError: If the front image is missing
            DecodeError: If either image cannot be decoded
        """
        tracker = tracker or ProgressTracker(progress_sink)
        has_back = not is_empty_payload(back_image)
        context = self.log_start("Card analysis", has_back=has_back)

        try:
            validate_image_payload(front_image, ImageSide.FRONT.value)

            tracker.start(STAGE_TEXT)
            front, back = self._decode_pair(front_image, back_image if has_back else None)
            front_text = recognize_text(self.ocr_engine, front, ImageSide.FRONT.value)
            back_text = recognize_text(self.ocr_engine, back, ImageSide.BACK.value) if back is not None else None
            details = self._extract_details(front_text, back_text)
            tracker.complete(STAGE_TEXT, self._text_summary(details))

            if back is None:
                result = default_grade(details)
                self.log_success(context, grade=result.grade, scored=False)
                return result

            scores: Dict[str, float] = {}
            with self._normalize(front, tracker) as grid:
                for field, stage, extractor, label in FEATURE_STAGES:
                    tracker.start(stage)
                    scores[field] = extractor(grid)
                    tracker.complete(stage, f"{label} score: {scores[field]:.1f}/10")

            result = aggregate_grade(card_details=details, **scores)
            self.log_success(context, grade=result.grade, scored=True)
            return result

        except Exception as e:
            self.log_error(context, e, steps=[s.step for s in tracker.steps])
            raise

    async def analyze_async(self, front_image: ImagePayload,
                            back_image: Optional[ImagePayload] = None,
                            progress_sink: Optional[ProgressSink] = None,
                            tracker: Optional[ProgressTracker] = None) -> GradeResult:
        """Same contract as ``analyze``; OCR and extractors run in worker threads."""
        tracker = tracker or ProgressTracker(progress_sink)
        has_back = not is_empty_payload(back_image)
        context = self.log_start("Card analysis", has_back=has_back, concurrent=True)

        try:
            validate_image_payload(front_image, ImageSide.FRONT.value)

            tracker.start(STAGE_TEXT)
            front, back = await asyncio.to_thread(
                self._decode_pair, front_image, back_image if has_back else None
            )
            ocr_jobs = [asyncio.to_thread(recognize_text, self.ocr_engine, front, ImageSide.FRONT.value)]
            if back is not None:
                ocr_jobs.append(asyncio.to_thread(recognize_text, self.ocr_engine, back, ImageSide.BACK.value))
            texts = await asyncio.gather(*ocr_jobs)
            details = self._extract_details(texts[0], texts[1] if back is not None else None)
            tracker.complete(STAGE_TEXT, self._text_summary(details))

            if back is None:
                result = default_grade(details)
                self.log_success(context, grade=result.grade, scored=False)
                return result

            async def run_stage(field: str, stage: str, extractor, label: str) -> Tuple[str, float]:
                score = await asyncio.to_thread(extractor, grid)
                tracker.complete(stage, f"{label} score: {score:.1f}/10")
                return field, score

            with self._normalize(front, tracker) as grid:
                jobs = []
                for field, stage, extractor, label in FEATURE_STAGES:
                    tracker.start(stage)
                    jobs.append(run_stage(field, stage, extractor, label))
                # Every worker finishes with the grid before it is released
                outcomes = await asyncio.gather(*jobs, return_exceptions=True)
                errors = [o for o in outcomes if isinstance(o, BaseException)]
                if errors:
                    raise errors[0]
                scores = dict(outcomes)

            result = aggregate_grade(card_details=details, **scores)
            self.log_success(context, grade=result.grade, scored=True)
            return result

        except Exception as e:
            self.log_error(context, e, steps=[s.step for s in tracker.steps])
            raise

    def extract_details(self, image: ImagePayload, side: ImageSide = ImageSide.FRONT) -> CardDetails:
        """Read metadata from a single image without grading."""
        decoded = self.normalizer.decode(image, side)
        return self.extractor.extract(recognize_text(self.ocr_engine, decoded, ImageSide(side).value))

    def _decode_pair(self, front_image: ImagePayload,
                     back_image: Optional[ImagePayload]) -> Tuple[np.ndarray, Optional[np.ndarray]]:
        front = self.normalizer.decode(front_image, ImageSide.FRONT)
        back = self.normalizer.decode(back_image, ImageSide.BACK) if back_image is not None else None
        return front, back

    def _extract_details(self, front_text: str, back_text: Optional[str]) -> CardDetails:
        front_details = self.extractor.extract(front_text)
        back_details = self.extractor.extract(back_text) if back_text is not None else None
        return merge_card_details(front_details, back_details)

    def _normalize(self, front: np.ndarray, tracker: ProgressTracker) -> NormalizedImage:
        tracker.start(STAGE_IMAGE)
        grid = self.normalizer.normalize_decoded(front, ImageSide.FRONT)
        width, height = grid.source_size
        tracker.complete(
            STAGE_IMAGE, f"Normalized {width}x{height} image to {IMAGE_SIZE}x{IMAGE_SIZE}"
        )
        return grid

    @staticmethod
    def _text_summary(details: CardDetails) -> str:
        return (
            f"Name: {details.name} | Number: {details.number} | "
            f"Set: {details.set} | Category: {details.category.value}"
        )


# Global singleton
default_grader = CardGrader()


def analyze(front_image: ImagePayload, back_image: Optional[ImagePayload] = None,
            progress_sink: Optional[ProgressSink] = None) -> GradeResult:
    """Analyze a card with the default grader."""
    return default_grader.analyze(front_image, back_image, progress_sink)


async def analyze_async(front_image: ImagePayload, back_image: Optional[ImagePayload] = None,
                        progress_sink: Optional[ProgressSink] = None) -> GradeResult:
    return await default_grader.analyze_async(front_image, back_image, progress_sink)
