"""
Records Context

Responsibilities:
- Defines the CV record data structures (profile, experience, education, skill)
- Defines templates as named ID selections over those records
- Persists records and templates per user in SQLite
- Seeds records from CV JSON documents and writes full CV backups

Owns: Record schema, ownership, display ordering, write-time invariants
Never: Resolves templates into content or renders anything
"""

from vitae.contexts.records.backup import build_cv_export, cv_export_file_name
from vitae.contexts.records.models import (
    CVProjection,
    Education,
    Experience,
    LiveRecords,
    Profile,
    Skill,
    Template,
    TemplateInput,
    sort_by_display_order,
)
from vitae.contexts.records.store import RecordStore

__all__ = [
    # Data structure classes
    "Profile",
    "Experience",
    "Education",
    "Skill",
    "Template",
    "TemplateInput",
    "LiveRecords",
    "CVProjection",
    "sort_by_display_order",
    # Persistence
    "RecordStore",
    # Backup export
    "build_cv_export",
    "cv_export_file_name",
]
