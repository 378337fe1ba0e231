"""
Centralized error handling for the card grader.

Validation and decode failures abort an analysis and reach the caller as a
typed ``CardGraderError``. OCR failures are absorbed through ``safe_execute``
and degrade to empty text.
"""

from typing import Any, Callable, Dict, Optional
from dataclasses import dataclass


class CardGraderError(Exception):
    """Base exception class for all card grader errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(CardGraderError):
    """Raised when there are configuration or environment variable issues."""
    pass


class InputValidationError(CardGraderError):
    """Raised when a required image is missing, empty or of an unsupported type."""
    pass


class DecodeError(CardGraderError):
    """Raised when an image cannot be decoded or has zero-area dimensions."""

    def __init__(self, message: str, side: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        if side is not None:
            details.setdefault("side", side)
        super().__init__(message, details)
        self.side = side


class OCRError(CardGraderError):
    """Raised by OCR engines; absorbed before it reaches the text extractor."""
    pass


class FeatureComputationError(CardGraderError):
    """Raised when a feature extractor receives an unusable grid."""
    pass


class PipelineError(CardGraderError):
    """Raised when pipeline stages are driven out of order."""
    pass


@dataclass
class ErrorContext:
    """Context information for error reporting."""
    operation: str
    module: str
    function: str
    input_data: Optional[Dict[str, Any]] = None
    timestamp: Optional[str] = None


def handle_error(
    error: Exception,
    context: ErrorContext,
    logger,
    reraise: bool = True,
    default_return: Any = None
) -> Any:
    """
    Centralized error handling with logging and optional recovery.

    Args:
        error: The exception that occurred
        context: Context information about where the error occurred
        logger: structlog logger used for error reporting
        reraise: Whether to re-raise the exception after logging
        default_return: Value to return if not re-raising

    Returns:
        The default_return value if not re-raising

    Raises:
        The original exception if reraise is True
    """
    error_msg = f"Error in {context.module}.{context.function} during {context.operation}"

    if isinstance(error, CardGraderError):
        error_msg += f": {error.message}"
        if error.details:
            error_msg += f" | Details: {error.details}"
    else:
        error_msg += f": {str(error)}"

    logger.error(
        error_msg,
        error_type=type(error).__name__,
        operation=context.operation,
        error_module=context.module,
        error_function=context.function,
        input_data=context.input_data,
        timestamp=context.timestamp,
    )

    if reraise:
        raise error

    return default_return


def safe_execute(
    func: Callable[..., Any],
    *args,
    context: ErrorContext,
    logger,
    default_return: Any = None,
    **kwargs
) -> Any:
    """
    Safely execute a function with error handling and logging.

    Args:
        func: Function to execute
        context: Error context information
        logger: Logger instance
        default_return: Value to return on error
        *args, **kwargs: Arguments to pass to the function

    Returns:
        Function result or default_return on error
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        return handle_error(e, context, logger, reraise=False, default_return=default_return)
