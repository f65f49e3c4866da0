"""Unit tests for rendering context log helpers."""

import pytest
from loguru import logger

from vitae.contexts.rendering.layout_check import LayoutReport
from vitae.contexts.rendering.logger import log_layout_report, setup_rendering_logger


@pytest.fixture
def messages():
    captured = []
    sink_id = logger.add(lambda message: captured.append(message.record), level="DEBUG")
    yield captured
    logger.remove(sink_id)


@pytest.mark.unit
def test_layout_report_lists_section_pages(messages):
    report = LayoutReport(
        page_count=2,
        section_pages={"Experience": 1, "Skills": 2},
        missing_sections=["Languages"],
        warnings=["Section heading 'Languages' not found in rendered PDF"],
    )

    log_layout_report(report)

    lines = [(r["level"].name, r["message"]) for r in messages]
    assert ("INFO", "[render] Layout: 2 pages, 2 sections located") in lines
    assert ("DEBUG", "[render]   Skills: page 2") in lines
    assert ("WARNING", "[render] Section heading 'Languages' not found in rendered PDF") in lines


@pytest.mark.unit
def test_unreadable_pdf_report(messages):
    log_layout_report(LayoutReport())

    assert messages[0]["message"] == "[render] Layout: ? pages, 0 sections located"


@pytest.mark.unit
def test_session_log_has_provenance(tmp_path):
    log_file = setup_rendering_logger(tmp_path / "render_session")
    logger.remove()

    text = log_file.read_text(encoding="utf-8")
    assert "VITAE: " in text
    assert "LaTeX compiler: " in text
