"""Unit tests for template import reconciliation."""

import pytest

from vitae.contexts.records.models import Experience, LiveRecords, Skill, TemplateInput
from vitae.contexts.templating.exporter import build_template_export
from vitae.contexts.templating.reconciler import (
    apply_import_to_template,
    import_into_template,
    reconcile_import,
)


@pytest.mark.unit
@pytest.mark.parametrize("raw", [{}, None, [], "scalar", 42, {"template": "not an object"}])
def test_fallback_name_is_total(raw, live_records):
    """Test that any parseable input yields a named template without raising."""
    result = reconcile_import(raw, live_records)

    assert result.input.name.startswith("Imported Template ")
    assert result.input.include_profile is True
    assert result.input.include_languages is True
    assert result.input.is_default is False
    assert result.warnings == []


@pytest.mark.unit
def test_name_fallbacks(live_records):
    assert reconcile_import({"name": "  CV A  "}, live_records).input.name == "CV A"
    assert reconcile_import({"name": "   "}, live_records, fallback_name="Mine").input.name == "Mine"
    blank_fallback = reconcile_import({}, live_records, fallback_name="  ")
    assert blank_fallback.input.name.startswith("Imported Template ")


@pytest.mark.unit
def test_flags_and_description(live_records):
    result = reconcile_import(
        {"template": {"description": 5, "includeProfile": False, "includeLanguages": "no", "isDefault": True}},
        live_records,
        fallback_description="from fallback",
    )
    assert result.input.description == "from fallback"
    assert result.input.include_profile is False
    assert result.input.include_languages is True
    assert result.input.is_default is True


@pytest.mark.unit
def test_missing_id_is_dropped_with_one_warning(live_records):
    """Test ["e1", "e2"] against a store where only e1 exists."""
    records = LiveRecords(experiences=[live_records.experiences[0]])
    result = reconcile_import({"selectedExperienceIds": ["e1", "e2"]}, records)

    assert result.input.selected_experience_ids == ["e1"]
    assert len(result.warnings) == 1
    assert "e2" in result.warnings[0]
    assert result.meta.had_experience_selection is True
    assert result.meta.matched_experience_count == 1
    assert result.debug["unmatched_experiences"] == ["e2"]


@pytest.mark.unit
def test_content_match_fallback_without_id(live_records):
    document = {
        "experiences": [{"jobTitle": "senior developer", "company": "tech corp", "startDate": "2020-01"}],
        "skills": [{"name": "SQL", "category": "tech"}],
    }
    result = reconcile_import(document, live_records)

    assert result.input.selected_experience_ids == ["e1"]
    assert result.input.selected_skill_ids == ["s3"]
    assert result.warnings == []


@pytest.mark.unit
def test_content_match_fallback_with_foreign_id(live_records):
    """Test snapshots from another account resolve by content, without warnings."""
    document = {
        "template": {"name": "From laptop", "selectedEducationIds": ["other-db-7"]},
        "education": [{"id": "other-db-7", "school": "MIT", "degree": "BSc"}],
    }
    result = reconcile_import(document, live_records)

    assert result.input.selected_education_ids == ["d1"]
    assert result.warnings == []


@pytest.mark.unit
def test_unmatched_snapshots_summarized(live_records):
    document = {
        "skills": [
            {"skillName": "Rust"},
            {"skillName": "Go", "category": "Languages"},
            {"skillName": "Zig"},
            {"skillName": "Nim"},
            {"skillName": "Python", "category": "Languages"},
        ]
    }
    result = reconcile_import(document, live_records)

    assert result.input.selected_skill_ids == ["s1"]
    assert result.warnings == [
        "4 skills from the JSON file could not be matched (Rust, Go (Languages), Zig, and 1 more)."
    ]


@pytest.mark.unit
def test_matched_ids_deduplicated(live_records):
    document = {
        "selectedSkillIds": ["s1", {"id": "s1"}],
        "skills": [{"id": "s1", "skillName": "Python"}],
    }
    assert reconcile_import(document, live_records).input.selected_skill_ids == ["s1"]


@pytest.mark.unit
def test_ai_export_data_wrapper_is_used_for_snapshots(live_records):
    document = {
        "metadata": {"exportedAt": "2025-11-14T10:00:00.000Z"},
        "data": {"experiences": [{"jobTitle": "Developer", "company": "Start Ltd", "startDate": "2017-03"}]},
    }
    result = reconcile_import(document, live_records)

    assert result.input.selected_experience_ids == ["e2"]
    assert result.meta.had_experience_selection is True
    assert result.meta.had_skill_selection is False


@pytest.mark.unit
def test_preserve_on_omission(live_records):
    """Test collections the import does not mention keep their selection."""
    existing = TemplateInput(
        name="Existing",
        description="keep me",
        include_languages=False,
        selected_experience_ids=["e2"],
        selected_skill_ids=["s1", "s2"],
    )
    result = import_into_template({"selectedExperienceIds": ["e1"]}, live_records, existing)

    assert result.input.name == "Existing"
    assert result.input.description == "keep me"
    assert result.input.include_languages is False
    assert result.input.selected_experience_ids == ["e1"]
    assert result.input.selected_skill_ids == ["s1", "s2"]


@pytest.mark.unit
def test_explicit_empty_selection_clears(live_records):
    existing = TemplateInput(name="Existing", selected_skill_ids=["s1"])
    result = reconcile_import({"selectedSkillIds": []}, live_records)

    merged = apply_import_to_template(existing, result)

    assert merged.selected_skill_ids == []


@pytest.mark.unit
def test_apply_without_existing_returns_import(live_records):
    result = reconcile_import({"name": "New", "selectedSkillIds": ["s2"]}, live_records)
    assert apply_import_to_template(None, result) is result.input


@pytest.mark.unit
def test_reimport_of_export_is_idempotent(live_records):
    """Test export then import gives the same selections and no warnings."""
    template = TemplateInput(
        name="Tech Lead",
        include_languages=False,
        selected_experience_ids=["e2", "e1", "missing"],
        selected_education_ids=["d1"],
        selected_skill_ids=["s3"],
    )
    exported = build_template_export(template, live_records)
    result = reconcile_import(exported, live_records)

    assert result.warnings == []
    assert set(result.input.selected_experience_ids) == {"e1", "e2"}
    assert result.input.selected_education_ids == ["d1"]
    assert result.input.selected_skill_ids == ["s3"]
    assert result.input.name == "Tech Lead"
    assert result.input.include_languages is False

    again = reconcile_import(build_template_export(result.input, live_records), live_records)
    assert again.input == result.input


@pytest.mark.unit
def test_export_survives_id_loss(live_records):
    """Test an export re-imported into a rebuilt store recovers by content."""
    template = TemplateInput(name="T", selected_experience_ids=["e1"], selected_skill_ids=["s1"])
    exported = build_template_export(template, live_records)

    rebuilt = LiveRecords(
        experiences=[
            Experience("Senior Developer", "Tech Corp", "2020-01", id="new-e", is_current=True),
        ],
        skills=[Skill("Python", id="new-s", category="Languages", proficiency="Expert")],
    )
    result = reconcile_import(exported, rebuilt)

    assert result.input.selected_experience_ids == ["new-e"]
    assert result.input.selected_skill_ids == ["new-s"]
    assert result.warnings == []
