"""Unit tests for text normalization, slugs and LaTeX escaping."""

import pytest

from vitae.utils.text_processing import normalize_for_comparison, slugify, to_latex


@pytest.mark.unit
def test_normalize_for_comparison():
    assert normalize_for_comparison("  Senior Developer ") == "senior developer"
    assert normalize_for_comparison(None) == ""
    assert normalize_for_comparison(2020) == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,expected",
    [
        ("Tech Lead CV (2025)", "tech-lead-cv-2025"),
        ("  Data & ML  ", "data-ml"),
        ("!!!", "cv-template"),
        ("", "cv-template"),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected


@pytest.mark.unit
def test_to_latex_special_characters():
    """Test each special character is escaped exactly once."""
    assert to_latex("R&D 100% _fast_ #1 $5") == r"R\&D 100\% \_fast\_ \#1 \$5"
    assert to_latex("{x}") == r"\{x\}"
    assert to_latex("a\\b") == r"a\textbackslash{}b"
    assert to_latex("~^") == r"\textasciitilde{}\textasciicircum{}"
    assert to_latex("") == ""
