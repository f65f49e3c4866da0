"""
Snapshot-to-record matching for template import.

An imported template JSON can refer to records in two ways: by identifier
(selectedExperienceIds etc.) and by embedded snapshots (the experiences /
education / skills arrays of an export). Identifiers from another account or
a rebuilt database no longer resolve, so each unresolved snapshot falls back
to content matching against the live records.

One matcher serves all three collections; what differs per collection (which
fields identify a record, how to describe an unmatched item) lives in a
RecordKind descriptor.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from vitae.utils.json_tools import as_record, is_record, optional_str
from vitae.utils.text_processing import normalize_for_comparison

PREVIEW_LIMIT = 3


@dataclass(frozen=True)
class IdentityField:
    """
    One field taking part in content matching.

    Attributes:
        snapshot_keys: JSON keys to read from the snapshot; the first key whose
            value is not None wins (aliases such as jobTitle / title)
        attribute: Attribute name on the live record
        blocks_when_record_empty: If False, a mismatch only blocks when the
            live record also has a value (endDate of an ongoing role)
    """

    snapshot_keys: Tuple[str, ...]
    attribute: str
    blocks_when_record_empty: bool = True

    def snapshot_value(self, snapshot: Dict[str, Any]) -> str:
        for key in self.snapshot_keys:
            value = snapshot.get(key)
            if value is not None:
                return normalize_for_comparison(value)
        return ""

    def record_value(self, record: Any) -> str:
        return normalize_for_comparison(getattr(record, self.attribute, None))


@dataclass(frozen=True)
class RecordKind:
    """
    Per-collection matching descriptor.

    Attributes:
        label: Singular name used in warnings ("education entry")
        plural: Plural name used in warnings ("education entries")
        selection_key: Template key listing selected ids
        snapshot_key: Document key holding embedded snapshots
        primary: Field that must be present and equal
        secondary: Fields that block a match only when present in the snapshot
        describe: Human-readable label for an unmatched snapshot
    """

    label: str
    plural: str
    selection_key: str
    snapshot_key: str
    primary: IdentityField
    secondary: Tuple[IdentityField, ...]
    describe: Callable[[Dict[str, Any]], str]

    def matches(self, snapshot: Dict[str, Any], record: Any) -> bool:
        """Content match: primary field required, secondary fields block only when set."""
        primary = self.primary.snapshot_value(snapshot)
        if not primary or primary != self.primary.record_value(record):
            return False

        for identity in self.secondary:
            wanted = identity.snapshot_value(snapshot)
            if not wanted:
                continue
            actual = identity.record_value(record)
            if not identity.blocks_when_record_empty and not actual:
                continue
            if wanted != actual:
                return False

        return True


def _first_str(snapshot: Dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = optional_str(snapshot.get(key))
        if value is not None:
            return value
    return None


def describe_experience(snapshot: Dict[str, Any]) -> str:
    title = _first_str(snapshot, "jobTitle", "title")
    company = _first_str(snapshot, "company")
    if title and company:
        return f"{title} @ {company}"
    if title:
        return title
    if company:
        return f"Role at {company}"
    return "Experience"


def describe_education(snapshot: Dict[str, Any]) -> str:
    school = _first_str(snapshot, "school")
    degree = _first_str(snapshot, "degree")
    if school and degree:
        return f"{degree} — {school}"
    if school:
        return school
    return "Education"


def describe_skill(snapshot: Dict[str, Any]) -> str:
    name = _first_str(snapshot, "skillName", "name")
    if not name:
        return "Skill"
    category = _first_str(snapshot, "category")
    return f"{name} ({category})" if category else name


EXPERIENCE = RecordKind(
    label="experience",
    plural="experiences",
    selection_key="selectedExperienceIds",
    snapshot_key="experiences",
    primary=IdentityField(("jobTitle", "title"), "job_title"),
    secondary=(
        IdentityField(("company",), "company"),
        IdentityField(("startDate",), "start_date"),
        IdentityField(("endDate",), "end_date", blocks_when_record_empty=False),
    ),
    describe=describe_experience,
)

EDUCATION = RecordKind(
    label="education entry",
    plural="education entries",
    selection_key="selectedEducationIds",
    snapshot_key="education",
    primary=IdentityField(("school",), "school"),
    secondary=(
        IdentityField(("degree",), "degree"),
        IdentityField(("field",), "field_of_study"),
        IdentityField(("startDate",), "start_date"),
    ),
    describe=describe_education,
)

SKILL = RecordKind(
    label="skill",
    plural="skills",
    selection_key="selectedSkillIds",
    snapshot_key="skills",
    primary=IdentityField(("skillName", "name"), "skill_name"),
    secondary=(
        IdentityField(("category",), "category"),
        IdentityField(("proficiency",), "proficiency"),
    ),
    describe=describe_skill,
)


@dataclass
class MatchResult:
    """Outcome of matching one collection."""

    matched_ids: List[str] = field(default_factory=list)
    unmatched: List[str] = field(default_factory=list)


def extract_id_candidates(selection: Any, snapshots: Sequence[Dict[str, Any]]) -> List[str]:
    """
    Gather identifier candidates for one collection.

    Strings and {id} objects from the selection list; if that yields nothing,
    the ids of the embedded snapshots. Duplicates are collapsed.
    """
    ids: Dict[str, None] = {}

    if isinstance(selection, list):
        for item in selection:
            if isinstance(item, str):
                ids.setdefault(item, None)
            elif is_record(item) and isinstance(item.get("id"), str):
                ids.setdefault(item["id"], None)

    if not ids:
        for snapshot in snapshots:
            snapshot_id = optional_str(as_record(snapshot).get("id"))
            if snapshot_id is not None:
                ids.setdefault(snapshot_id, None)

    return list(ids)


def match_collection(
    kind: RecordKind,
    records: Sequence[Any],
    id_candidates: Sequence[str],
    snapshots: Sequence[Any],
    report_unmatched: bool,
) -> MatchResult:
    """
    Resolve identifier candidates and snapshots against live records.

    Args:
        kind: Collection descriptor
        records: Live records (each with an id attribute)
        id_candidates: Identifiers from the template selection
        snapshots: Embedded snapshot objects (non-objects are ignored)
        report_unmatched: Collect descriptions of items that could not be
            resolved (only when the document declared a selection)

    Returns:
        MatchResult with matched ids (first-match order, no duplicates) and
        descriptions of unmatched items
    """
    by_id = {record.id: record for record in records}
    matched: Dict[str, None] = {}
    # Candidate ids accounted for, including foreign ids whose snapshot matched by content
    resolved: set = set()
    unmatched: Dict[str, None] = {}

    for candidate in id_candidates:
        if candidate in by_id:
            matched.setdefault(candidate, None)
            resolved.add(candidate)

    snapshot_records = [s for s in snapshots if is_record(s)]

    for snapshot in snapshot_records:
        snapshot_id = optional_str(snapshot.get("id")) or None

        if snapshot_id and snapshot_id in matched:
            continue

        if snapshot_id and snapshot_id in by_id:
            matched.setdefault(snapshot_id, None)
            resolved.add(snapshot_id)
            continue

        claimed = next(
            (r for r in records if r.id not in matched and kind.matches(snapshot, r)),
            None,
        )
        if claimed is not None:
            matched.setdefault(claimed.id, None)
            if snapshot_id:
                resolved.add(snapshot_id)
            continue

        if report_unmatched and (not id_candidates or (snapshot_id and snapshot_id in id_candidates)):
            unmatched.setdefault(kind.describe(snapshot), None)

    if report_unmatched:
        for candidate in id_candidates:
            if candidate in resolved:
                continue
            snapshot = next((s for s in snapshot_records if s.get("id") == candidate), None)
            unmatched.setdefault(kind.describe(snapshot) if snapshot else candidate, None)

    return MatchResult(
        matched_ids=list(matched),
        unmatched=[description for description in unmatched if description],
    )


def summarize_unmatched(kind: RecordKind, values: Sequence[str]) -> Optional[str]:
    """
    Collapse unmatched item descriptions into one warning line.

    Example:
        >>> summarize_unmatched(SKILL, ["Go"])
        'Skill "Go" could not be matched to your current data.'
        >>> summarize_unmatched(SKILL, ["Go", "Rust"])
        '2 skills from the JSON file could not be matched (Go, Rust).'
    """
    if not values:
        return None

    if len(values) == 1:
        return f'{kind.label.capitalize()} "{values[0]}" could not be matched to your current data.'

    preview = ", ".join(values[:PREVIEW_LIMIT])
    remaining = len(values) - PREVIEW_LIMIT
    suffix = f", and {remaining} more" if remaining > 0 else ""
    return f"{len(values)} {kind.plural} from the JSON file could not be matched ({preview}{suffix})."
