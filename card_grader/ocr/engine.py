"""OCR engines that turn a decoded image into raw text."""

from typing import Optional, Protocol

import cv2
import numpy as np
import pytesseract

from ..utils.config import resolve_tesseract_path, settings
from ..utils.error_handler import CardGraderError, ErrorContext, OCRError, safe_execute
from ..utils.log import LoggerMixin, get_logger

logger = get_logger(__name__)


class OCREngine(Protocol):
    """Anything that maps an RGB image to newline separated text."""

    def recognize(self, image: np.ndarray) -> str:
        ...


class TesseractEngine(LoggerMixin):
    """Full-card text recognition with Tesseract."""

    def __init__(self, language: Optional[str] = None, psm: Optional[int] = None,
                 timeout: Optional[int] = None):
        self.language = language or settings.OCR_LANGUAGE
        self.psm = psm if psm is not None else settings.OCR_PSM
        self.timeout = timeout if timeout is not None else settings.OCR_TIMEOUT_S
        self.tesseract_path: Optional[str] = None

    def _ensure_binary(self) -> str:
        if self.tesseract_path is None:
            self.tesseract_path = resolve_tesseract_path()
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_path
            self.logger.info(
                "Tesseract engine initialized",
                tesseract_path=self.tesseract_path,
                language=self.language,
                psm=self.psm,
            )
        return self.tesseract_path

    def recognize(self, image: np.ndarray) -> str:
        """
        Recognize text on a full card image.

        Raises:
            OCRError: If Tesseract is missing or fails on the image
        """
        try:
            self._ensure_binary()
            prepared = self._preprocess(image)
            return pytesseract.image_to_string(
                prepared,
                lang=self.language,
                config=f"--psm {self.psm}",
                timeout=self.timeout,
            )
        except CardGraderError as e:
            raise OCRError(e.message, details=e.details) from e
        except (pytesseract.TesseractError, RuntimeError, OSError, cv2.error) as e:
            raise OCRError("Tesseract recognition failed", details={"error": str(e)}) from e

    def _preprocess(self, image: np.ndarray) -> np.ndarray:
        """Grayscale conversion; Tesseract binarizes internally."""
        if image.ndim == 3:
            return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)
        return image


def recognize_text(engine: OCREngine, image: np.ndarray, side: str = "front") -> str:
    """Run an engine and absorb any failure into empty text."""
    text = safe_execute(
        engine.recognize,
        image,
        context=ErrorContext(
            operation="text recognition",
            module=__name__,
            function="recognize_text",
            input_data={"side": side, "engine": type(engine).__name__},
        ),
        logger=logger,
        default_return="",
    )
    return text if isinstance(text, str) else ""
