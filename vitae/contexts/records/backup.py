"""
Full CV backup export.

Writes every live record, ids included, as one JSON document that
RecordStore.load_document() (and `cv_records.py load`) reads back. Template
import accepts the same document, matching its arrays as snapshots.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from vitae.contexts.records.models import LiveRecords
from vitae.utils.timestamp import now_exact, today

TECHNICAL_GUIDE = """
CV DATA EXPORT - Technical Guide
=================================

This JSON file contains your complete CV data and can be used to:
- Back up your CV information
- Seed another record store (cv_records.py load <file>)
- Import into CV templates (cv_template.py import <file>)
- Share with AI assistants for optimization

STRUCTURE:
----------
- profile: Personal information (single object, can be null)
- experiences: Work history (array of experience objects)
- education: Academic background (array of education objects)
- skills: Skill set (array of skill objects)

REQUIRED FIELDS:
----------------
- profile: fullName
- experiences: jobTitle, company, startDate (YYYY-MM)
- education: school, startDate (YYYY-MM)
- skills: skillName
Entries missing a required field are skipped on load.

IMPORTANT NOTES:
----------------
- Ids are kept on load when they are free in the target store, so template
  exports that reference them keep resolving
- userId is replaced by the loading user
- isCurrent / isOngoing true clears endDate
- Array fields (roleCategories, educationSections, coreStrengths, languages)
  may be given as arrays or as JSON-encoded strings
"""


def build_cv_export(records: LiveRecords, exported_at: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Build the {_technicalGuide, exportDate, profile, experiences, education, skills} backup.

    Records keep their storage fields (id, userId, order) and their display
    order.
    """
    return {
        "_technicalGuide": TECHNICAL_GUIDE,
        "exportDate": now_exact(exported_at),
        "profile": records.profile.to_dict() if records.profile else None,
        "experiences": [e.to_dict() for e in records.experiences],
        "education": [e.to_dict() for e in records.education],
        "skills": [s.to_dict() for s in records.skills],
    }


def cv_export_file_name(moment: Optional[datetime] = None) -> str:
    """
    Example:
        >>> cv_export_file_name()
        'cv-export-2025-11-14.json'
    """
    return f"cv-export-{today(moment)}.json"
