"""
Template JSON export.

The export is self-describing: alongside the template's name, flags and ID
selections it embeds snapshots of every referenced record, so a later import
can recover the selection by content even when the ids no longer exist.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from vitae.contexts.records.models import LiveRecords, TemplateInput
from vitae.contexts.templating.projection import resolve_projection
from vitae.utils.text_processing import slugify
from vitae.utils.timestamp import now_exact, today


def build_template_export(
    template: TemplateInput,
    records: LiveRecords,
    exported_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build the {template, profile, experiences, education, skills, exportedAt} document.

    The template section lists only ids that still resolve, in the same order
    as the embedded snapshots, so re-importing against the same records is
    warning-free and reproduces the selection exactly.
    """
    projection = resolve_projection(template, records)
    payload = projection.to_dict()

    return {
        "template": {
            "name": template.name,
            "description": template.description,
            "includeProfile": template.include_profile,
            "includeLanguages": template.include_languages,
            "isDefault": template.is_default,
            "selectedExperienceIds": [e.id for e in projection.experiences],
            "selectedEducationIds": [e.id for e in projection.education],
            "selectedSkillIds": [s.id for s in projection.skills],
        },
        "profile": payload["profile"],
        "experiences": payload["experiences"],
        "education": payload["education"],
        "skills": payload["skills"],
        "exportedAt": now_exact(exported_at),
    }


def template_export_file_name(template_name: str, moment: Optional[datetime] = None) -> str:
    """
    Example:
        >>> template_export_file_name("Tech Lead CV")
        'tech-lead-cv-2025-11-14.json'
    """
    return f"{slugify(template_name)}-{today(moment)}.json"
