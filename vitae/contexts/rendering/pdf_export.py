"""
PDF export orchestration: projection -> LaTeX -> PDF file.

A failed export produces exactly one failed PdfExportResult and no file on
disk. A successful export is written atomically, so a reader never sees a
partial PDF.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import TemplateError

from vitae.contexts.records.models import CVProjection
from vitae.contexts.rendering.compiler import compile_latex
from vitae.contexts.rendering.latex_generator import generate_latex
from vitae.contexts.rendering.layout_check import check_layout
from vitae.contexts.rendering.layout_config import load_layout
from vitae.contexts.rendering.logger import log_export_result, log_layout_report
from vitae.contexts.rendering.preview import build_preview
from vitae.utils.files import write_bytes_atomic
from vitae.utils.timestamp import today

EXPORT_FAILED = "export failed"

_UNSAFE_FILE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


@dataclass
class PdfExportResult:
    """
    Outcome of a PDF export.

    Attributes:
        success: Whether a PDF was produced
        file_name: "<name-or-CV>-<date>.pdf"
        pdf_bytes: PDF content (None on failure)
        pdf_path: Written file (None on failure or when no output_dir was given)
        page_count: Pages in the PDF
        errors: First entry starts with "export failed" on failure
        warnings: Compiler and layout-check warnings
    """

    success: bool
    file_name: str
    pdf_bytes: Optional[bytes] = field(default=None, repr=False)
    pdf_path: Optional[Path] = None
    page_count: Optional[int] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def pdf_file_name(projection: CVProjection, moment: Optional[datetime] = None) -> str:
    """
    Example:
        >>> pdf_file_name(CVProjection(profile=Profile("Jane Doe")))
        'Jane Doe-2025-11-14.pdf'
        >>> pdf_file_name(CVProjection())
        'CV-2025-11-14.pdf'
    """
    name = projection.profile.full_name.strip() if projection.profile else ""
    name = _UNSAFE_FILE_CHARS.sub("-", name) or "CV"
    return f"{name}-{today(moment)}.pdf"


def _failed(file_name: str, reason: str, errors: List[str], warnings: List[str]) -> PdfExportResult:
    result = PdfExportResult(
        success=False,
        file_name=file_name,
        errors=[f"{EXPORT_FAILED}: {reason}"] + errors,
        warnings=warnings,
    )
    log_export_result(result)
    return result


def export_pdf(
    projection: CVProjection,
    output_dir: Optional[Path] = None,
    layout: Optional[Dict[str, Any]] = None,
    num_passes: int = 2,
    export_date: Optional[datetime] = None,
    keep_artifacts_dir: Optional[Path] = None,
) -> PdfExportResult:
    """
    Render a projection to a PDF.

    Args:
        projection: Resolved CV content
        output_dir: Write the PDF here (None: return bytes only)
        layout: Layout dict (default: load_layout())
        num_passes: Compiler passes
        export_date: Date used in the file name (default: today, UTC)
        keep_artifacts_dir: Keep LaTeX sources and logs here for debugging

    Returns:
        PdfExportResult (never raises for rendering failures)
    """
    file_name = pdf_file_name(projection, export_date)
    layout = layout or load_layout()
    preview = build_preview(projection, section_titles=layout.get("section_titles"))

    try:
        tex_source = generate_latex(preview, layout=layout)
    except TemplateError as e:
        return _failed(file_name, f"could not generate LaTeX ({e})", [], [])

    compiled = compile_latex(
        tex_source,
        job_name="cv",
        num_passes=num_passes,
        keep_artifacts_dir=keep_artifacts_dir,
    )
    if not compiled.success or compiled.pdf_bytes is None:
        reason = compiled.errors[0] if compiled.errors else "LaTeX compilation failed"
        return _failed(file_name, reason, compiled.errors, compiled.warnings)

    report = check_layout(compiled.pdf_bytes, preview.section_titles)
    log_layout_report(report)

    pdf_path = None
    if output_dir is not None:
        try:
            pdf_path = write_bytes_atomic(Path(output_dir) / file_name, compiled.pdf_bytes)
        except OSError as e:
            return _failed(file_name, f"could not write PDF ({e})", [], compiled.warnings)

    result = PdfExportResult(
        success=True,
        file_name=file_name,
        pdf_bytes=compiled.pdf_bytes,
        pdf_path=pdf_path,
        page_count=report.page_count or compiled.page_count,
        warnings=compiled.warnings + report.warnings,
    )
    log_export_result(result)
    return result
