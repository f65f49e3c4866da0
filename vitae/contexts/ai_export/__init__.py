"""
AI Export Context

Responsibilities:
- Formats a CV projection as an annotated export for machine editing
- Validates the structure of an edited export before it is re-imported

Owns: AI export document shape, modification guidelines, structural checks
Never: Writes records (edited exports go back in through template import)
"""

from vitae.contexts.ai_export.formatter import ai_export_file_name, format_for_ai
from vitae.contexts.ai_export.validator import (
    AiExportValidation,
    validate_ai_export_text,
    validate_ai_modified_export,
)

__all__ = [
    "format_for_ai",
    "ai_export_file_name",
    "validate_ai_modified_export",
    "validate_ai_export_text",
    "AiExportValidation",
]
