"""Unit tests for PDF export orchestration (compiler stubbed)."""

from datetime import datetime, timezone

import pytest

from vitae.contexts.records.models import CVProjection, Profile, Skill
from vitae.contexts.rendering import pdf_export
from vitae.contexts.rendering.compiler import CompilationResult
from vitae.contexts.rendering.pdf_export import export_pdf, pdf_file_name

EXPORT_DATE = datetime(2025, 11, 14, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def projection():
    return CVProjection(profile=Profile("Jane Doe"), skills=[Skill("Excel")])


@pytest.mark.unit
def test_pdf_file_name():
    assert pdf_file_name(CVProjection(profile=Profile("Jane Doe")), EXPORT_DATE) == "Jane Doe-2025-11-14.pdf"
    assert pdf_file_name(CVProjection(), EXPORT_DATE) == "CV-2025-11-14.pdf"
    assert pdf_file_name(CVProjection(profile=Profile("  ")), EXPORT_DATE) == "CV-2025-11-14.pdf"
    assert pdf_file_name(CVProjection(profile=Profile("A/B")), EXPORT_DATE) == "A-B-2025-11-14.pdf"


@pytest.mark.unit
def test_failed_compilation_writes_nothing(monkeypatch, tmp_path, projection):
    """Test a compiler failure yields one failed result and no file."""
    monkeypatch.setattr(
        pdf_export,
        "compile_latex",
        lambda *args, **kwargs: CompilationResult(success=False, errors=["Emergency stop."]),
    )

    result = export_pdf(projection, output_dir=tmp_path, export_date=EXPORT_DATE)

    assert not result.success
    assert result.errors[0].startswith("export failed")
    assert result.pdf_path is None
    assert list(tmp_path.iterdir()) == []


@pytest.mark.unit
def test_successful_export_writes_file(monkeypatch, tmp_path, projection):
    captured = {}

    def fake_compile(tex_source, **kwargs):
        captured["tex"] = tex_source
        return CompilationResult(success=True, pdf_bytes=b"%PDF-1.4 stub", page_count=1)

    monkeypatch.setattr(pdf_export, "compile_latex", fake_compile)

    result = export_pdf(projection, output_dir=tmp_path, export_date=EXPORT_DATE)

    assert result.success
    assert result.file_name == "Jane Doe-2025-11-14.pdf"
    assert result.pdf_path == tmp_path / "Jane Doe-2025-11-14.pdf"
    assert result.pdf_path.read_bytes() == b"%PDF-1.4 stub"
    assert [p.name for p in tmp_path.iterdir()] == ["Jane Doe-2025-11-14.pdf"]
    assert "\\cvsection{Skills}" in captured["tex"]
    # The stub is not a readable PDF, so the layout check can only warn
    assert any("Layout check skipped" in w for w in result.warnings)


@pytest.mark.unit
def test_export_without_output_dir_returns_bytes(monkeypatch, projection):
    monkeypatch.setattr(
        pdf_export,
        "compile_latex",
        lambda *args, **kwargs: CompilationResult(success=True, pdf_bytes=b"%PDF-1.4 stub"),
    )

    result = export_pdf(projection)

    assert result.success
    assert result.pdf_path is None
    assert result.pdf_bytes == b"%PDF-1.4 stub"
