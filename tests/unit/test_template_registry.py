"""Unit tests for TemplateRegistry class."""

import pytest

from jinja2 import TemplateNotFound

from vitae.contexts.rendering.template_registry import TemplateRegistry, latex_lines


@pytest.mark.unit
def test_template_registry_init():
    """Test TemplateRegistry initialization."""
    registry = TemplateRegistry()
    assert registry.templates_path.exists()
    assert registry._cache == {}


@pytest.mark.unit
def test_template_caching():
    """Test that templates are cached after first load."""
    registry = TemplateRegistry()

    template1 = registry.get_template("cv")
    assert "cv" in registry._cache

    template2 = registry.get_template("cv")
    assert template1 is template2


@pytest.mark.unit
def test_get_template_not_found():
    """Test error handling for missing template."""
    registry = TemplateRegistry()

    with pytest.raises(TemplateNotFound):
        registry.get_template("nonexistent")


@pytest.mark.unit
def test_custom_delimiters_and_filters(tmp_path):
    """Test LaTeX-safe delimiters and the escaping filters."""
    (tmp_path / "snippet.tex.jinja").write_text(
        r"\textbf{<<< name | latex >>>}<%% if lines %%> <<< lines | latex_lines >>><%% endif %%>",
        encoding="utf-8",
    )
    registry = TemplateRegistry(templates_path=tmp_path)

    rendered = registry.get_template("snippet").render(name="R&D", lines="a_b\n\nc")

    assert rendered == "\\textbf{R\\&D} a\\_b\\\\\\relax\n\\mbox{}\\\\\\relax\nc"


@pytest.mark.unit
def test_latex_lines_empty():
    assert latex_lines(None) == ""
    assert latex_lines("") == ""
