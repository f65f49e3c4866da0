"""Unit tests for the CV preview view model."""

import pytest

from vitae.contexts.records.models import CVProjection, Education, Experience, Profile, Skill
from vitae.contexts.rendering.preview import build_preview, format_date_range, group_skills


@pytest.fixture
def projection(live_records):
    return CVProjection(
        profile=live_records.profile,
        experiences=live_records.experiences,
        education=live_records.education,
        skills=live_records.skills,
    )


@pytest.mark.unit
def test_header_and_contact_line(projection):
    preview = build_preview(projection)

    assert preview.header.name == "Jane Doe"
    assert preview.header.title == "Engineering Manager"
    assert preview.header.contact_line == "London | +44 20 7946 0000 | jane@example.com"


@pytest.mark.unit
def test_contact_line_omitted_when_empty():
    preview = build_preview(CVProjection(profile=Profile("Jane")))
    assert preview.header.contact_line is None
    assert build_preview(CVProjection(profile=Profile("Jane", email="j@x.io"))).header.contact_line == "j@x.io"


@pytest.mark.unit
def test_no_profile_gives_empty_name():
    preview = build_preview(CVProjection(skills=[Skill("Excel")]))
    assert preview.header.name == ""
    assert preview.section_titles == ["Skills"]


@pytest.mark.unit
def test_section_order_and_visibility(projection):
    preview = build_preview(projection)
    assert preview.section_titles == [
        "Professional Summary",
        "Core Strengths",
        "Experience",
        "Education",
        "Skills",
        "Languages",
    ]
    assert build_preview(CVProjection(profile=Profile("Jane"))).sections == []


@pytest.mark.unit
def test_core_strengths_drop_blank_items(projection):
    strengths = build_preview(projection).section("core_strengths")
    assert strengths.lines == ["Leadership", "Python"]
    assert strengths.bulleted is True


@pytest.mark.unit
def test_experience_entries(projection):
    current, previous = build_preview(projection).section("experience").entries

    assert current.heading == "Senior Developer"
    assert current.date_range == "2020-01 - Present"
    assert current.subheading == "Tech Corp | Remote"
    assert current.description == "Led the platform team.\nShipped v2."

    assert previous.date_range == "2017-03 - 2019-12"
    assert previous.subheading == "Start Ltd"
    assert previous.description is None


@pytest.mark.unit
def test_date_range_without_end():
    assert format_date_range("2020-01", None, False, "Present") == "2020-01 - "


@pytest.mark.unit
@pytest.mark.parametrize(
    "degree,field,location,expected",
    [
        ("BSc", "Physics", "Cambridge", "BSc in Physics | Cambridge"),
        ("BSc", None, None, "BSc"),
        (None, "Physics", None, "Physics"),
        (None, None, "Cambridge", None),
    ],
)
def test_education_degree_line(degree, field, location, expected):
    education = Education("MIT", "2012-09", degree=degree, field_of_study=field, location=location, is_ongoing=True)
    entry = build_preview(CVProjection(education=[education])).section("education").entries[0]

    assert entry.subheading == expected
    assert entry.date_range == "2012-09 - Ongoing"


@pytest.mark.unit
def test_skills_grouped_by_category():
    """Test Excel without category and SQL in Tech."""
    preview = build_preview(CVProjection(skills=[Skill("Excel"), Skill("SQL", category="Tech")]))
    assert preview.section("skills").lines == ["Other: Excel", "Tech: SQL"]


@pytest.mark.unit
def test_skill_groups_keep_first_seen_order():
    skills = [
        Skill("Python", category="Languages", proficiency="Expert"),
        Skill("Excel"),
        Skill("Go", category="Languages"),
    ]
    assert group_skills(skills) == [("Languages", ["Python (Expert)", "Go"]), ("Other", ["Excel"])]


@pytest.mark.unit
def test_blank_category_groups_as_other():
    skills = [Skill("Excel", category="  "), Skill("Word"), Skill("SQL", category=" Tech ")]

    assert group_skills(skills) == [("Other", ["Excel", "Word"]), ("Tech", ["SQL"])]


@pytest.mark.unit
def test_languages_section(projection):
    assert build_preview(projection).section("languages").lines == ["English - Native", "German - B2"]


@pytest.mark.unit
def test_caller_order_is_kept():
    experiences = [
        Experience("Old", "X", "2010-01", id="a"),
        Experience("New", "X", "2022-01", id="b"),
    ]
    entries = build_preview(CVProjection(experiences=experiences)).section("experience").entries
    assert [e.heading for e in entries] == ["Old", "New"]


@pytest.mark.unit
def test_section_title_overrides(projection):
    preview = build_preview(projection, section_titles={"experience": "Work History"})
    assert "Work History" in preview.section_titles


@pytest.mark.unit
def test_plaintext_and_markdown(projection):
    preview = build_preview(projection)

    text = preview.to_plaintext()
    assert text.startswith("Jane Doe\nEngineering Manager\n")
    assert "EXPERIENCE" in text
    assert "Senior Developer (2020-01 - Present)" in text
    assert "• Leadership" in text

    markdown = preview.to_markdown()
    assert markdown.startswith("# Jane Doe")
    assert "## Skills" in markdown
    assert "### Senior Developer" in markdown
    assert "- Python" in markdown
