"""
Template import reconciliation.

Turns an arbitrary JSON document (a template export, a full CV export, an AI
export, or something hand-edited) into a TemplateInput whose selections refer
only to records that exist for the current user. Structurally odd input never
raises: missing or wrong-typed values fall back to defaults, and items that
cannot be resolved are reported as warnings.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from vitae.contexts.records.models import LiveRecords, Template, TemplateInput
from vitae.contexts.templating.logger import _log_debug, log_import_result
from vitae.contexts.templating.matching import (
    EDUCATION,
    EXPERIENCE,
    SKILL,
    RecordKind,
    extract_id_candidates,
    match_collection,
    summarize_unmatched,
)
from vitae.utils.json_tools import as_record, is_record
from vitae.utils.timestamp import now_exact

# (kind, collection name used in meta and TemplateInput attributes)
COLLECTIONS = (
    (EXPERIENCE, "experience"),
    (EDUCATION, "education"),
    (SKILL, "skill"),
)

_LIVE_ATTRIBUTES = {"experience": "experiences", "education": "education", "skill": "skills"}


@dataclass
class ImportMeta:
    """
    Per-collection facts about an import.

    had_*_selection is True when the document addressed the collection at all
    (a selection list or a snapshot array, even an empty one).
    """

    had_experience_selection: bool = False
    had_education_selection: bool = False
    had_skill_selection: bool = False
    matched_experience_count: int = 0
    matched_education_count: int = 0
    matched_skill_count: int = 0

    def addressed(self, collection: str) -> bool:
        """True if the import should replace this collection's selection."""
        return (
            getattr(self, f"had_{collection}_selection")
            or getattr(self, f"matched_{collection}_count") > 0
        )


@dataclass
class TemplateImportResult:
    """
    Reconciled template plus diagnostics.

    Attributes:
        input: Template payload ready for create_template/update_template
        warnings: One line per collection with unmatched items
        meta: Selection and match counts per collection
        debug: Unmatched item descriptions per collection
    """

    input: TemplateInput
    warnings: List[str] = field(default_factory=list)
    meta: ImportMeta = field(default_factory=ImportMeta)
    debug: Dict[str, List[str]] = field(default_factory=dict)


def _snapshot_source(base: Dict[str, Any]) -> Dict[str, Any]:
    """Top-level document, or its "data" object for AI exports."""
    if any(kind.snapshot_key in base for kind, _ in COLLECTIONS):
        return base
    data = base.get("data")
    return data if is_record(data) else base


def _resolve_name(section: Dict[str, Any], fallback_name: Optional[str]) -> str:
    name = section.get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    if isinstance(fallback_name, str) and fallback_name.strip():
        return fallback_name
    return f"Imported Template {now_exact()}"


def _flag(section: Dict[str, Any], key: str, fallback: bool) -> bool:
    value = section.get(key)
    return value if isinstance(value, bool) else fallback


def _match_kind(kind: RecordKind, section: Dict[str, Any], source: Dict[str, Any], records: list):
    selection = section.get(kind.selection_key)
    raw_snapshots = source.get(kind.snapshot_key)
    snapshots = [s for s in raw_snapshots if is_record(s)] if isinstance(raw_snapshots, list) else []

    had_selection = isinstance(selection, list) or isinstance(raw_snapshots, list)
    candidates = extract_id_candidates(selection, snapshots)
    result = match_collection(kind, records, candidates, snapshots, report_unmatched=had_selection)
    return had_selection, result


def reconcile_import(
    raw_json: Any,
    records: LiveRecords,
    fallback_name: Optional[str] = None,
    fallback_description: Optional[str] = None,
    fallback_include_profile: bool = True,
    fallback_include_languages: bool = True,
    fallback_is_default: bool = False,
) -> TemplateImportResult:
    """
    Reconcile an imported JSON document against the user's live records.

    Args:
        raw_json: Decoded JSON value of any shape
        records: Live records to resolve selections against
        fallback_name: Used when the document carries no usable name
        fallback_description: Used when the document carries no description
        fallback_include_profile: Used when includeProfile is not a boolean
        fallback_include_languages: Used when includeLanguages is not a boolean
        fallback_is_default: Used when isDefault is not a boolean

    Returns:
        TemplateImportResult (never raises on parseable input)

    Example:
        >>> result = reconcile_import({"selectedExperienceIds": ["e1", "e2"]}, live)
        >>> result.input.selected_experience_ids
        ['e1']
        >>> result.warnings
        ['Experience "e2" could not be matched to your current data.']
    """
    base = as_record(raw_json)
    section = base["template"] if is_record(base.get("template")) else base
    source = _snapshot_source(base)

    description = section.get("description")
    if not isinstance(description, str):
        description = fallback_description

    meta = ImportMeta()
    warnings: List[str] = []
    debug: Dict[str, List[str]] = {}
    selections: Dict[str, List[str]] = {}

    for kind, collection in COLLECTIONS:
        live = getattr(records, _LIVE_ATTRIBUTES[collection])
        had_selection, result = _match_kind(kind, section, source, live)

        setattr(meta, f"had_{collection}_selection", had_selection)
        setattr(meta, f"matched_{collection}_count", len(result.matched_ids))
        selections[collection] = result.matched_ids
        debug[f"unmatched_{_LIVE_ATTRIBUTES[collection]}"] = result.unmatched

        warning = summarize_unmatched(kind, result.unmatched)
        if warning:
            warnings.append(warning)

        _log_debug(
            f"{kind.plural}: {len(result.matched_ids)} matched, {len(result.unmatched)} unmatched"
            f" (selection declared: {had_selection})"
        )

    template_input = TemplateInput(
        name=_resolve_name(section, fallback_name),
        description=description,
        include_profile=_flag(section, "includeProfile", fallback_include_profile),
        include_languages=_flag(section, "includeLanguages", fallback_include_languages),
        is_default=_flag(section, "isDefault", fallback_is_default),
        selected_experience_ids=selections["experience"],
        selected_education_ids=selections["education"],
        selected_skill_ids=selections["skill"],
    )

    return TemplateImportResult(input=template_input, warnings=warnings, meta=meta, debug=debug)


def apply_import_to_template(
    existing: Optional[TemplateInput], result: TemplateImportResult
) -> TemplateInput:
    """
    Merge an import into an existing template.

    Name, description and flags come from the import (which already fell back
    to the existing values when built by import_into_template). A collection's
    selection is replaced only when the import addressed it or matched at
    least one item; otherwise the existing selection is kept.
    """
    if existing is None:
        return result.input

    merged: Dict[str, List[str]] = {}
    for _, collection in COLLECTIONS:
        key = f"selected_{collection}_ids"
        source = result.input if result.meta.addressed(collection) else existing
        merged[key] = list(getattr(source, key))

    return TemplateInput(
        name=result.input.name,
        description=result.input.description,
        include_profile=result.input.include_profile,
        include_languages=result.input.include_languages,
        is_default=result.input.is_default,
        **merged,
    )


def import_into_template(
    raw_json: Any,
    records: LiveRecords,
    existing: Optional[Union[Template, TemplateInput]] = None,
) -> TemplateImportResult:
    """
    Reconcile an import and merge it into an existing template, if any.

    Returns the reconciliation result with input replaced by the merged
    payload, ready for update_template (or create_template when existing is
    None).
    """
    if existing is None:
        result = reconcile_import(raw_json, records)
    else:
        result = reconcile_import(
            raw_json,
            records,
            fallback_name=existing.name,
            fallback_description=existing.description,
            fallback_include_profile=existing.include_profile,
            fallback_include_languages=existing.include_languages,
            fallback_is_default=existing.is_default,
        )
        result.input = apply_import_to_template(existing, result)

    log_import_result(
        result.input.name,
        result.warnings,
        {
            "experiences": result.meta.matched_experience_count,
            "education": result.meta.matched_education_count,
            "skills": result.meta.matched_skill_count,
        },
    )
    return result
