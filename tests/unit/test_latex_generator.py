"""Unit tests for CV LaTeX generation and layout config."""

import pytest

from vitae.contexts.records.models import CVProjection, Experience, Profile, Skill
from vitae.contexts.rendering.latex_generator import generate_latex
from vitae.contexts.rendering.layout_config import load_layout


@pytest.mark.unit
def test_default_layout_is_a4():
    layout = load_layout()

    assert layout["page"] == {"width": "210mm", "height": "297mm", "margin": "20mm"}
    assert layout["section_titles"]["summary"] == "Professional Summary"


@pytest.mark.unit
def test_layout_overrides_merge():
    layout = load_layout(overrides={"page": {"margin": "15mm"}})

    assert layout["page"]["margin"] == "15mm"
    assert layout["page"]["width"] == "210mm"


@pytest.mark.unit
def test_generated_document_structure(live_records):
    projection = CVProjection(
        profile=live_records.profile,
        experiences=live_records.experiences,
        education=live_records.education,
        skills=live_records.skills,
    )
    latex = generate_latex(projection)

    assert "\\documentclass[10pt]{article}" in latex
    assert "paperwidth=210mm,paperheight=297mm,margin=20mm" in latex
    assert "\\cvsection{Professional Summary}" in latex
    assert "\\cvsection{Languages}" in latex
    assert "Led the platform team.\\\\\\relax\nShipped v2." in latex
    assert "\\item{} Leadership" in latex
    assert latex.rstrip().endswith("\\end{document}")


@pytest.mark.unit
def test_user_text_is_escaped():
    projection = CVProjection(
        profile=Profile("Ann & Co_1", profile_summary="100% {done}"),
        skills=[Skill("C#", category="R&D")],
    )
    latex = generate_latex(projection)

    assert "Ann \\& Co\\_1" in latex
    assert "100\\% \\{done\\}" in latex
    assert "R\\&D: C\\#" in latex


@pytest.mark.unit
def test_leading_bracket_stays_text():
    """Test text starting with "[" is not taken as an \\item label or a \\\\ length."""
    projection = CVProjection(
        profile=Profile("Jane", core_strengths=["[AWS] Certified architect"]),
        experiences=[Experience("Dev", "Acme", "2020-01", description="Built things\n[2021] Led migration")],
    )
    latex = generate_latex(projection)

    assert "\\item{} [AWS] Certified architect" in latex
    assert "\\item [" not in latex
    assert "Built things\\\\\\relax\n[2021] Led migration" in latex
    assert "\\\\\n[" not in latex


@pytest.mark.unit
def test_empty_sections_are_left_out():
    latex = generate_latex(CVProjection(profile=Profile("Jane")))

    assert "\\cvsection{" not in latex.split("\\begin{document}")[1]
    assert "itemize" not in latex


@pytest.mark.unit
def test_section_titles_follow_layout():
    layout = load_layout(overrides={"section_titles": {"skills": "Toolbox"}})
    latex = generate_latex(CVProjection(skills=[Skill("Go")]), layout=layout)

    assert "\\cvsection{Toolbox}" in latex
