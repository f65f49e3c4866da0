"""
Records context logger.

Provides logging interface for the records context with automatic [records] prefix.
All records modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[records]"


def setup_records_logger(log_dir: Path, db_path: Path) -> Path:
    """
    Setup logger for records context.

    Args:
        log_dir: Directory for this session
        db_path: Record store in use (logged for provenance)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="records",
        log_dir=log_dir,
        extra_provenance={"Record store": db_path},
    )


def _log_info(message: str) -> None:
    """Log info message with [records] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [records] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [records] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [records] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_document_loaded(source: Path, counts: dict) -> None:
    """Log the outcome of seeding records from a CV document."""
    summary = ", ".join(f"{count} {kind}" for kind, count in counts.items())
    _log_success(f"Loaded {source.name}: {summary}")


def log_backup_written(path: Path, counts: dict) -> None:
    """Log a full CV backup export."""
    summary = ", ".join(f"{count} {kind}" for kind, count in counts.items())
    _log_success(f"Wrote backup {path}: {summary}")
