"""
AI-friendly CV export.

Wraps a CV projection with instructions telling a language model which
values it may rewrite and which structure it must leave alone. The data
payload carries content only: ids, ownership and display order are dropped.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Union

from vitae.contexts.ai_export.logger import _log_debug
from vitae.contexts.records.models import CVProjection
from vitae.utils.timestamp import now_exact, today

EXPORT_VERSION = "1.0"

INSTRUCTIONS = (
    "This CV data is formatted for AI modification. Follow the modification guidelines below. "
    "IMPORTANT: Only modify the content values. Do NOT change the structure, field names, or data types. "
    "Do NOT add or remove any fields. Do NOT modify the format of dates (YYYY-MM format) or boolean values."
)

MODIFICATION_GUIDELINES = {
    "profile": (
        "Modify only the text content of: fullName, title, email, phone, location, dateOfBirth, nationality, "
        "profileSummary, coreStrengths (array items), and languages (language names and proficiency levels). "
        "Keep all field names and structure intact. Do not change profilePhoto URL format."
    ),
    "experiences": (
        "For each experience, modify only: jobTitle, company, location, overview, and roleCategories items. "
        "Keep dates in YYYY-MM format unchanged. Keep isCurrent as boolean (true/false). "
        "For roleCategories, only modify the item text within each category, not the category names or structure."
    ),
    "education": (
        "For each education entry, modify only: school, degree, field, location, overview, and educationSections items. "
        "Keep dates in YYYY-MM format unchanged. Keep isOngoing as boolean (true/false). "
        "For educationSections, only modify the item text within each section, not the section names or structure. "
        "Keep website URL and eqfLevel format unchanged."
    ),
    "skills": (
        "For each skill, modify only: skillName, category, and proficiency. "
        "Keep the array structure and all field names intact."
    ),
}


def format_for_ai(
    cv_data: Union[CVProjection, Dict[str, Any]],
    exported_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build the {metadata, modificationGuidelines, data} export document.

    Args:
        cv_data: Projection, or a {profile, experiences, education, skills} dict
        exported_at: Export timestamp (default: now, UTC)
    """
    projection = cv_data if isinstance(cv_data, CVProjection) else CVProjection.from_dict(cv_data)

    document = {
        "metadata": {
            "exportedAt": now_exact(exported_at),
            "version": EXPORT_VERSION,
            "instructions": INSTRUCTIONS,
        },
        "modificationGuidelines": dict(MODIFICATION_GUIDELINES),
        "data": projection.to_dict(include_storage_fields=False),
    }

    _log_debug(
        f"Formatted AI export: {len(projection.experiences)} experiences, "
        f"{len(projection.education)} education, {len(projection.skills)} skills"
    )
    return document


def ai_export_file_name(moment: Optional[datetime] = None) -> str:
    return f"cv-ai-export-{today(moment)}.json"
