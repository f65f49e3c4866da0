"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"LaTeX compiler": os.getenv("LATEX_COMPILER", "pdflatex")},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_compilation_start(job_name: str, num_passes: int, working_dir: Path) -> None:
    """Log start of compilation with context."""
    _log_info(f"Starting compilation: {job_name}")
    _log_debug(f"  Working directory: {working_dir}")
    _log_debug(f"  Passes: {num_passes}")


def log_compilation_result(
    job_name: str,
    result,  # CompilationResult
    elapsed_time: float,
    verbose: bool = False,
) -> None:
    """
    Log compilation result with diagnostics.

    Args:
        job_name: Document identifier
        result: CompilationResult from compile_latex()
        elapsed_time: Time taken to compile
        verbose: Show detailed warnings/errors (default: False)
    """
    if result.success:
        _log_success(
            f"{job_name}: compiled to {result.page_count or '?'} pages with "
            f"{len(result.warnings)} warnings ({elapsed_time:.2f}s)"
        )
    else:
        _log_error(f"{job_name}: compilation failed with {len(result.errors)} errors ({elapsed_time:.2f}s)")
        error_limit = 10 if verbose else 5
        for i, err in enumerate(result.errors[:error_limit], 1):
            _log_error(f"  Error {i}: {err}")
        if len(result.errors) > error_limit:
            _log_error(f"  ... and {len(result.errors) - error_limit} more errors")

    # Warnings at debug level (overfull boxes are common and verbose)
    if result.warnings:
        warning_limit = 10 if verbose else 3
        for i, warn in enumerate(result.warnings[:warning_limit], 1):
            _log_debug(f"  Warning {i}: {warn}")
        if len(result.warnings) > warning_limit:
            _log_debug(f"  ... and {len(result.warnings) - warning_limit} more warnings")

    # Raw compiler output bypasses the line format so multi-line text stays readable
    if verbose or not result.success:
        if result.stdout:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nLATEX STDOUT:\n{'=' * 80}\n{result.stdout}\n"
            )
        if result.stderr:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nLATEX STDERR:\n{'=' * 80}\n{result.stderr}\n"
            )


def log_export_result(result) -> None:
    """Log outcome of a PDF export (PdfExportResult)."""
    if result.success:
        target = result.pdf_path or result.file_name
        _log_success(f"Exported {target} ({result.page_count or '?'} pages)")
        for warning in result.warnings:
            _log_debug(f"  {warning}")
    else:
        _log_error(f"PDF export failed for {result.file_name}")


def log_layout_report(report) -> None:
    """
    Log where each CV section landed in the rendered PDF (LayoutReport).

    A CV that spills onto an extra page usually shows up here first, as the
    last sections moving to page 2.
    """
    _log_info(f"Layout: {report.page_count or '?'} pages, {len(report.section_pages)} sections located")
    for title, page in report.section_pages.items():
        _log_debug(f"  {title}: page {page}")
    for warning in report.warnings:
        _log_warning(warning)
