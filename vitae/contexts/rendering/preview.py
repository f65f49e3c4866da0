"""
CV preview view model.

build_preview() applies every formatting rule of the rendered CV (header,
contact line, date ranges, skill grouping, section visibility) once, producing
a CVPreview that both the console renderings and the LaTeX template consume.
Keeping the rules here is what guarantees the preview and the PDF agree.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from vitae.contexts.records.models import CVProjection, Education, Experience, Profile, Skill

PRESENT_LABEL = "Present"
ONGOING_LABEL = "Ongoing"
DEFAULT_SKILL_CATEGORY = "Other"
SEPARATOR = " | "
BULLET = "•"

DEFAULT_SECTION_TITLES = {
    "summary": "Professional Summary",
    "core_strengths": "Core Strengths",
    "experience": "Experience",
    "education": "Education",
    "skills": "Skills",
    "languages": "Languages",
}


@dataclass
class PreviewHeader:
    name: str
    title: Optional[str] = None
    contact_line: Optional[str] = None


@dataclass
class PreviewEntry:
    """One experience or education block."""

    heading: str
    date_range: str
    subheading: Optional[str] = None
    description: Optional[str] = None


@dataclass
class PreviewSection:
    """
    A titled section of the CV.

    Entry sections (experience, education) fill entries; the others fill
    lines. bulleted marks lines rendered as a bullet list.
    """

    key: str
    title: str
    entries: List[PreviewEntry] = field(default_factory=list)
    lines: List[str] = field(default_factory=list)
    bulleted: bool = False


@dataclass
class CVPreview:
    header: PreviewHeader
    sections: List[PreviewSection] = field(default_factory=list)

    def section(self, key: str) -> Optional[PreviewSection]:
        return next((s for s in self.sections if s.key == key), None)

    @property
    def section_titles(self) -> List[str]:
        return [s.title for s in self.sections]

    def to_plaintext(self) -> str:
        """Console rendering: uppercase headings, bullets, one entry block per item."""
        out = [self.header.name]
        if self.header.title:
            out.append(self.header.title)
        if self.header.contact_line:
            out.append(self.header.contact_line)

        for section in self.sections:
            out.extend(["", section.title.upper()])
            for entry in section.entries:
                out.append(f"{entry.heading} ({entry.date_range})")
                if entry.subheading:
                    out.append(entry.subheading)
                if entry.description:
                    out.append(entry.description)
            prefix = f"{BULLET} " if section.bulleted else ""
            out.extend(f"{prefix}{line}" for line in section.lines)

        return "\n".join(out).strip("\n") + "\n"

    def to_markdown(self) -> str:
        out = [f"# {self.header.name}" if self.header.name else "# CV"]
        if self.header.title:
            out.extend(["", f"**{self.header.title}**"])
        if self.header.contact_line:
            out.extend(["", self.header.contact_line])

        for section in self.sections:
            out.extend(["", f"## {section.title}", ""])
            for entry in section.entries:
                out.append(f"### {entry.heading}")
                out.append(f"*{entry.date_range}*")
                if entry.subheading:
                    out.append(f"{entry.subheading}")
                if entry.description:
                    out.extend(["", entry.description])
                out.append("")
            prefix = "- " if section.bulleted else ""
            # Two trailing spaces force a markdown line break between plain lines
            suffix = "" if section.bulleted else "  "
            out.extend(f"{prefix}{line}{suffix}" for line in section.lines)

        return "\n".join(out).rstrip() + "\n"


def format_date_range(start_date: str, end_date: Optional[str], ongoing: bool, ongoing_label: str) -> str:
    """
    Example:
        >>> format_date_range("2020-01", None, True, PRESENT_LABEL)
        '2020-01 - Present'
        >>> format_date_range("2018-05", "2019-12", False, PRESENT_LABEL)
        '2018-05 - 2019-12'
    """
    if ongoing:
        return f"{start_date} - {ongoing_label}"
    return f"{start_date} - {end_date or ''}"


def format_contact_line(profile: Profile) -> Optional[str]:
    parts = [p for p in (profile.location, profile.phone, profile.email) if p]
    return SEPARATOR.join(parts) if parts else None


def _has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def _experience_entry(experience: Experience) -> PreviewEntry:
    subheading = experience.company
    if experience.location:
        subheading += f"{SEPARATOR}{experience.location}"
    return PreviewEntry(
        heading=experience.job_title,
        date_range=format_date_range(
            experience.start_date, experience.end_date, experience.is_current, PRESENT_LABEL
        ),
        subheading=subheading,
        description=experience.description if _has_text(experience.description) else None,
    )


def _education_entry(education: Education) -> PreviewEntry:
    # Degree line is omitted entirely when neither degree nor field is known
    subheading = None
    if education.degree and education.field_of_study:
        subheading = f"{education.degree} in {education.field_of_study}"
    elif education.degree or education.field_of_study:
        subheading = education.degree or education.field_of_study
    if subheading and education.location:
        subheading += f"{SEPARATOR}{education.location}"

    return PreviewEntry(
        heading=education.school,
        date_range=format_date_range(
            education.start_date, education.end_date, education.is_ongoing, ONGOING_LABEL
        ),
        subheading=subheading,
        description=education.description if _has_text(education.description) else None,
    )


def format_skill(skill: Skill) -> str:
    return f"{skill.skill_name} ({skill.proficiency})" if skill.proficiency else skill.skill_name


def group_skills(skills: Sequence[Skill]) -> List[Tuple[str, List[str]]]:
    """
    Group skills by category in first-seen order ("Other" when absent).

    Example:
        >>> group_skills([Skill("Excel"), Skill("SQL", category="Tech")])
        [('Other', ['Excel']), ('Tech', ['SQL'])]
    """
    groups: Dict[str, List[str]] = {}
    for skill in skills:
        category = (skill.category or "").strip() or DEFAULT_SKILL_CATEGORY
        groups.setdefault(category, []).append(format_skill(skill))
    return list(groups.items())


def build_preview(
    projection: CVProjection,
    section_titles: Optional[Dict[str, str]] = None,
) -> CVPreview:
    """
    Apply the CV formatting rules to a projection.

    Sections appear only when they have content. Item order is the
    projection's order.

    Args:
        projection: Resolved CV content
        section_titles: Overrides for section headings, keyed like
            DEFAULT_SECTION_TITLES
    """
    titles = {**DEFAULT_SECTION_TITLES, **(section_titles or {})}
    profile = projection.profile

    if profile is None:
        header = PreviewHeader(name="")
    else:
        header = PreviewHeader(
            name=profile.full_name,
            title=profile.title or None,
            contact_line=format_contact_line(profile),
        )

    sections: List[PreviewSection] = []

    if profile is not None and _has_text(profile.profile_summary):
        sections.append(
            PreviewSection("summary", titles["summary"], lines=[profile.profile_summary])
        )

    strengths = [s.strip() for s in (profile.core_strengths if profile else []) if s.strip()]
    if strengths:
        sections.append(
            PreviewSection("core_strengths", titles["core_strengths"], lines=strengths, bulleted=True)
        )

    if projection.experiences:
        sections.append(
            PreviewSection(
                "experience",
                titles["experience"],
                entries=[_experience_entry(e) for e in projection.experiences],
            )
        )

    if projection.education:
        sections.append(
            PreviewSection(
                "education",
                titles["education"],
                entries=[_education_entry(e) for e in projection.education],
            )
        )

    if projection.skills:
        lines = [f"{category}: {', '.join(names)}" for category, names in group_skills(projection.skills)]
        sections.append(PreviewSection("skills", titles["skills"], lines=lines))

    languages = profile.languages if profile else []
    if languages:
        lines = [
            f"{lang.language} - {lang.proficiency}" if lang.proficiency else lang.language
            for lang in languages
        ]
        sections.append(PreviewSection("languages", titles["languages"], lines=lines))

    return CVPreview(header=header, sections=sections)
