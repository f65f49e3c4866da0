"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import List

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, operation: str = "template") -> Path:
    """
    Setup logger for templating context.

    Args:
        log_dir: Directory for this templating session
        operation: Operation name for provenance ("import", "export", ...)

    Returns:
        Path to log file

    Example:
        from vitae.contexts.templating.logger import setup_templating_logger, _log_info

        log_file = setup_templating_logger(log_dir, operation="import")
        _log_info("Starting import...")
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Operation": operation},
    )


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [template] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_import_result(template_name: str, warnings: List[str], matched_counts: dict) -> None:
    """Log outcome of a template import, one warning line per unmatched collection."""
    summary = ", ".join(f"{count} {kind}" for kind, count in matched_counts.items())
    _log_success(f"Imported template '{template_name}' ({summary})")
    for warning in warnings:
        _log_warning(warning)


def log_export_result(template_name: str, output_path: Path) -> None:
    """Log successful template export."""
    _log_success(f"Exported template '{template_name}' to {output_path}")
