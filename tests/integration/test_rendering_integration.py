"""
Integration tests for rendering context - tests real LaTeX compilation.
"""

import shutil

import pytest

from vitae.contexts.records.models import CVProjection, Profile
from vitae.contexts.rendering.compiler import LATEX_COMPILER, compile_latex
from vitae.contexts.rendering.layout_check import check_layout
from vitae.contexts.rendering.pdf_export import export_pdf
from vitae.contexts.rendering.preview import build_preview
from vitae.contexts.templating import full_projection

LATEX_AVAILABLE = shutil.which(LATEX_COMPILER) is not None
skip_if_no_latex = pytest.mark.skipif(
    not LATEX_AVAILABLE,
    reason=f"{LATEX_COMPILER} not installed - install TeX Live, MiKTeX, or MacTeX"
)


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_latex
def test_export_full_cv(live_records, tmp_path):
    """Test a full CV compiles, is written to disk and keeps its section headings."""
    projection = full_projection(live_records)

    result = export_pdf(projection, output_dir=tmp_path)

    assert result.success, f"Export failed with errors: {result.errors}"
    assert result.pdf_path is not None
    assert result.pdf_path.exists()
    assert result.pdf_path.read_bytes()[:4] == b"%PDF"
    assert result.page_count >= 1

    report = check_layout(result.pdf_bytes, build_preview(projection).section_titles)
    assert "Experience" in report.section_pages
    assert "Skills" in report.section_pages


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_latex
def test_export_escapes_special_characters(tmp_path):
    projection = CVProjection(
        profile=Profile("R&D 100% {Lead}", profile_summary="Cost_centre #4 ~ $5k ^ \\ back"),
    )

    result = export_pdf(projection, output_dir=tmp_path)

    assert result.success, f"Export failed with errors: {result.errors}"


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_latex
def test_compile_with_intentional_error():
    """Test that compilation properly detects and reports errors."""
    broken = "\\documentclass{article}\n\\begin{document}\n\\undefinedcommand\n\\end{document}\n"

    result = compile_latex(broken, num_passes=1)

    assert not result.success
    assert result.pdf_bytes is None
    assert result.errors
