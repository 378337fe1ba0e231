"""Configuration and settings management."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator
from pathlib import Path
import shutil

from .error_handler import ConfigurationError


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # OCR settings
    TESSERACT_PATH: Optional[str] = None
    OCR_LANGUAGE: str = "eng"
    OCR_PSM: int = 6
    OCR_TIMEOUT_S: int = 0

    @field_validator('TESSERACT_PATH', mode='before')
    @classmethod
    def validate_tesseract_path(cls, v):
        """Convert empty/whitespace strings to None."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        """Convert empty/whitespace strings to default."""
        if isinstance(v, str) and not v.strip():
            return "INFO"
        return v

    @field_validator('OCR_LANGUAGE', mode='before')
    @classmethod
    def validate_ocr_language(cls, v):
        """Convert empty/whitespace strings to default."""
        if isinstance(v, str) and not v.strip():
            return "eng"
        return v

    @field_validator('OCR_PSM')
    @classmethod
    def validate_ocr_psm(cls, v):
        """Tesseract page segmentation modes run 0-13."""
        if not 0 <= v <= 13:
            raise ValueError(f"OCR_PSM must be between 0 and 13, got {v}")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }


# Global settings instance
settings = Settings()


def resolve_tesseract_path() -> str:
    """Get Tesseract path, with fallback to common locations."""
    if settings.TESSERACT_PATH and Path(settings.TESSERACT_PATH).exists():
        return settings.TESSERACT_PATH

    tesseract_path = shutil.which("tesseract")
    if tesseract_path:
        return tesseract_path

    common_paths = [
        "/opt/homebrew/bin/tesseract",  # Apple Silicon Homebrew
        "/usr/local/bin/tesseract",     # Intel Homebrew
        "/usr/bin/tesseract",           # System package
    ]

    for path in common_paths:
        if Path(path).exists():
            return path

    raise ConfigurationError(
        "Tesseract not found. Install it or set TESSERACT_PATH",
        details={"configured_path": settings.TESSERACT_PATH}
    )
