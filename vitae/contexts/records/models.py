"""
CV Record Data Structures

Defines dataclasses for the user-owned CV records (profile, experience,
education, skill), templates that reference them, and the projection tuple
that rendering and export consume.

Python attributes use snake_case; to_dict()/from_dict() translate to the
camelCase keys used by every JSON document VITAE reads or writes. from_dict()
is tolerant: unknown keys are ignored, wrong-typed values fall back to
defaults, and list fields that arrive JSON-encoded are decoded once here so
that nothing downstream has to re-check them.
"""

import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterable, List, Optional, TypeVar

from vitae.utils.json_tools import as_record, coerce_json_list, optional_str

# Attributes managed by storage rather than by the user
STORAGE_FIELDS = ("id", "user_id", "order", "created_at", "updated_at")

_CAMEL_BOUNDARY = re.compile(r"_([a-z])")


def to_camel(name: str) -> str:
    """job_title -> jobTitle"""
    return _CAMEL_BOUNDARY.sub(lambda m: m.group(1).upper(), name)


def _str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _bool(value: Any, default: bool = False) -> bool:
    # Some stores persist flags as 0/1
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    return default


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    return value if isinstance(value, int) else default


def _strings(value: Any) -> List[str]:
    return [item for item in coerce_json_list(value) if isinstance(item, str)]


def _unique_ids(values: Optional[Iterable[Any]]) -> List[str]:
    """Collapse duplicates, keep first-seen order, drop non-strings."""
    seen: Dict[str, None] = {}
    for value in values or []:
        if isinstance(value, str) and value:
            seen.setdefault(value, None)
    return list(seen)


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    return value


class SerializableRecord:
    """Mixin providing camelCase serialization for record dataclasses."""

    # Attribute names whose JSON key is not the plain camelCase form
    _key_overrides: Dict[str, str] = {}

    def to_dict(self, include_storage_fields: bool = True) -> Dict[str, Any]:
        """
        Serialize to a JSON-ready dict with camelCase keys.

        Args:
            include_storage_fields: Keep id/userId/order/timestamps. Exports
                intended for external editing drop them.
        """
        result = {}
        for f in fields(self):
            if not include_storage_fields and f.name in STORAGE_FIELDS:
                continue
            key = self._key_overrides.get(f.name) or to_camel(f.name)
            result[key] = _serialize(getattr(self, f.name))
        return result


@dataclass
class Language(SerializableRecord):
    """Spoken language with a free-text proficiency level."""

    language: str
    proficiency: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Language"]:
        data = as_record(data)
        language = _str(data.get("language")).strip()
        if not language:
            return None
        return cls(language=language, proficiency=_str(data.get("proficiency")))


@dataclass
class RoleCategory(SerializableRecord):
    """Named group of bullet items within an experience (e.g., "Leadership")."""

    category: str
    items: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Optional["RoleCategory"]:
        data = as_record(data)
        name = _str(data.get("category")) or _str(data.get("name"))
        if not name and not data.get("items"):
            return None
        return cls(category=name, items=_strings(data.get("items")))


@dataclass
class EducationSection(SerializableRecord):
    """Named group of items within an education entry (e.g., "Modules")."""

    title: str
    items: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Optional["EducationSection"]:
        data = as_record(data)
        title = _str(data.get("title")) or _str(data.get("name"))
        if not title and not data.get("items"):
            return None
        return cls(title=title, items=_strings(data.get("items")))


def _parse_list(value: Any, parser) -> list:
    parsed = (parser(item) for item in coerce_json_list(value))
    return [item for item in parsed if item is not None]


@dataclass
class Profile(SerializableRecord):
    """
    Personal information, one per user.

    Attributes:
        full_name: Display name (required on write)
        core_strengths: Ordered list of short strength statements
        languages: Ordered list of spoken languages
    """

    full_name: str
    title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    date_of_birth: Optional[str] = None
    nationality: Optional[str] = None
    profile_photo: Optional[str] = None
    profile_summary: Optional[str] = None
    core_strengths: List[str] = field(default_factory=list)
    languages: List[Language] = field(default_factory=list)
    id: Optional[str] = None
    user_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Profile":
        data = as_record(data)
        return cls(
            full_name=_str(data.get("fullName")),
            title=optional_str(data.get("title")),
            email=optional_str(data.get("email")),
            phone=optional_str(data.get("phone")),
            location=optional_str(data.get("location")),
            date_of_birth=optional_str(data.get("dateOfBirth")),
            nationality=optional_str(data.get("nationality")),
            profile_photo=optional_str(data.get("profilePhoto")),
            profile_summary=optional_str(data.get("profileSummary")),
            core_strengths=_strings(data.get("coreStrengths")),
            languages=_parse_list(data.get("languages"), Language.from_dict),
            id=optional_str(data.get("id")),
            user_id=optional_str(data.get("userId")),
        )


@dataclass
class Experience(SerializableRecord):
    """
    Work experience entry.

    Setting is_current forces end_date to None, whatever was supplied.
    """

    job_title: str
    company: str
    start_date: str
    id: str = ""
    location: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    overview: Optional[str] = None
    role_categories: List[RoleCategory] = field(default_factory=list)
    description: Optional[str] = None
    order: int = 0
    user_id: Optional[str] = None

    def __post_init__(self):
        if self.is_current:
            self.end_date = None

    @classmethod
    def from_dict(cls, data: Any) -> "Experience":
        data = as_record(data)
        return cls(
            job_title=_str(data.get("jobTitle")) or _str(data.get("title")),
            company=_str(data.get("company")),
            start_date=_str(data.get("startDate")),
            id=_str(data.get("id")),
            location=optional_str(data.get("location")),
            end_date=optional_str(data.get("endDate")),
            is_current=_bool(data.get("isCurrent")),
            overview=optional_str(data.get("overview")),
            role_categories=_parse_list(data.get("roleCategories"), RoleCategory.from_dict),
            description=optional_str(data.get("description")),
            order=_int(data.get("order")),
            user_id=optional_str(data.get("userId")),
        )


@dataclass
class Education(SerializableRecord):
    """
    Education entry.

    Setting is_ongoing forces end_date to None, whatever was supplied.
    """

    _key_overrides = {"field_of_study": "field"}

    school: str
    start_date: str
    id: str = ""
    degree: Optional[str] = None
    field_of_study: Optional[str] = None
    location: Optional[str] = None
    end_date: Optional[str] = None
    is_ongoing: bool = False
    overview: Optional[str] = None
    education_sections: List[EducationSection] = field(default_factory=list)
    website: Optional[str] = None
    eqf_level: Optional[str] = None
    description: Optional[str] = None
    order: int = 0
    user_id: Optional[str] = None

    def __post_init__(self):
        if self.is_ongoing:
            self.end_date = None

    @classmethod
    def from_dict(cls, data: Any) -> "Education":
        data = as_record(data)
        return cls(
            school=_str(data.get("school")),
            start_date=_str(data.get("startDate")),
            id=_str(data.get("id")),
            degree=optional_str(data.get("degree")),
            field_of_study=optional_str(data.get("field")),
            location=optional_str(data.get("location")),
            end_date=optional_str(data.get("endDate")),
            is_ongoing=_bool(data.get("isOngoing")),
            overview=optional_str(data.get("overview")),
            education_sections=_parse_list(data.get("educationSections"), EducationSection.from_dict),
            website=optional_str(data.get("website")),
            eqf_level=optional_str(data.get("eqfLevel")),
            description=optional_str(data.get("description")),
            order=_int(data.get("order")),
            user_id=optional_str(data.get("userId")),
        )


@dataclass
class Skill(SerializableRecord):
    """Skill with free-text category and proficiency."""

    skill_name: str
    id: str = ""
    category: Optional[str] = None
    proficiency: Optional[str] = None
    order: int = 0
    user_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Skill":
        data = as_record(data)
        return cls(
            skill_name=_str(data.get("skillName")) or _str(data.get("name")),
            id=_str(data.get("id")),
            category=optional_str(data.get("category")),
            proficiency=optional_str(data.get("proficiency")),
            order=_int(data.get("order")),
            user_id=optional_str(data.get("userId")),
        )


@dataclass
class TemplateInput(SerializableRecord):
    """
    Write payload for a template: name, flags and three ID selections.

    Selections are sets in meaning; duplicates are collapsed on construction
    and first-seen order is kept only for stable output.
    """

    name: str
    description: Optional[str] = None
    include_profile: bool = True
    include_languages: bool = True
    is_default: bool = False
    selected_experience_ids: List[str] = field(default_factory=list)
    selected_education_ids: List[str] = field(default_factory=list)
    selected_skill_ids: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.selected_experience_ids = _unique_ids(self.selected_experience_ids)
        self.selected_education_ids = _unique_ids(self.selected_education_ids)
        self.selected_skill_ids = _unique_ids(self.selected_skill_ids)

    @classmethod
    def from_dict(cls, data: Any) -> "TemplateInput":
        data = as_record(data)
        return cls(
            name=_str(data.get("name")),
            description=optional_str(data.get("description")),
            include_profile=_bool(data.get("includeProfile"), default=True),
            include_languages=_bool(data.get("includeLanguages"), default=True),
            is_default=_bool(data.get("isDefault")),
            selected_experience_ids=coerce_json_list(data.get("selectedExperienceIds")),
            selected_education_ids=coerce_json_list(data.get("selectedEducationIds")),
            selected_skill_ids=coerce_json_list(data.get("selectedSkillIds")),
        )


@dataclass
class Template(TemplateInput):
    """Stored template with identity and timestamps."""

    id: str = ""
    user_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_input(self) -> TemplateInput:
        """Strip storage fields, keeping the writable payload."""
        return TemplateInput(
            name=self.name,
            description=self.description,
            include_profile=self.include_profile,
            include_languages=self.include_languages,
            is_default=self.is_default,
            selected_experience_ids=list(self.selected_experience_ids),
            selected_education_ids=list(self.selected_education_ids),
            selected_skill_ids=list(self.selected_skill_ids),
        )


R = TypeVar("R", Experience, Education, Skill)


def sort_by_display_order(records: Iterable[R]) -> List[R]:
    """
    Order records for display: order ascending, then start date descending.

    Both sorts are stable, so remaining ties keep insertion order. Skills have
    no start date and are ordered by display order alone.
    """
    by_start = sorted(records, key=lambda r: getattr(r, "start_date", "") or "", reverse=True)
    return sorted(by_start, key=lambda r: r.order)


@dataclass
class LiveRecords:
    """
    Current records owned by one user, as read from the record store.

    The reconciler and projection resolution work against this snapshot.
    """

    profile: Optional[Profile] = None
    experiences: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)


@dataclass
class CVProjection:
    """
    Resolved (profile, experiences, education, skills) tuple.

    Input to preview/PDF rendering and to the AI export. Item order is the
    caller's order; nothing downstream re-sorts.
    """

    profile: Optional[Profile] = None
    experiences: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.profile is None and not (self.experiences or self.education or self.skills)

    @classmethod
    def from_dict(cls, data: Any) -> "CVProjection":
        """Build from a {profile, experiences, education, skills} document."""
        data = as_record(data)
        profile = data.get("profile")
        return cls(
            profile=Profile.from_dict(profile) if isinstance(profile, dict) else None,
            experiences=[Experience.from_dict(item) for item in coerce_json_list(data.get("experiences")) if isinstance(item, dict)],
            education=[Education.from_dict(item) for item in coerce_json_list(data.get("education")) if isinstance(item, dict)],
            skills=[Skill.from_dict(item) for item in coerce_json_list(data.get("skills")) if isinstance(item, dict)],
        )

    def to_dict(self, include_storage_fields: bool = True) -> Dict[str, Any]:
        return {
            "profile": self.profile.to_dict(include_storage_fields) if self.profile else None,
            "experiences": [e.to_dict(include_storage_fields) for e in self.experiences],
            "education": [e.to_dict(include_storage_fields) for e in self.education],
            "skills": [s.to_dict(include_storage_fields) for s in self.skills],
        }
