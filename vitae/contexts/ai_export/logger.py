"""
AI export context logger.

Provides logging interface for the AI export context with automatic [ai] prefix.
All ai_export modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[ai]"


def setup_ai_export_logger(log_dir: Path, operation: str = "export") -> Path:
    """
    Setup logger for AI export context.

    Args:
        log_dir: Directory for this session
        operation: "export" or "validate"

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="ai_export",
        log_dir=log_dir,
        extra_provenance={"Operation": operation},
    )


def _log_info(message: str) -> None:
    """Log info message with [ai] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [ai] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [ai] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [ai] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_validation_result(source: str, validation) -> None:
    """Log outcome of validating an AI-modified export (AiExportValidation)."""
    if validation.valid:
        _log_success(f"{source}: structure intact")
        return
    _log_error(f"{source}: {len(validation.errors)} structural errors")
    for error in validation.errors:
        _log_error(f"  {error}")
