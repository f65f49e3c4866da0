"""
Structural validation of AI-modified CV exports.

Checks are shallow and exhaustive: every violation is reported (with the
0-based index of the offending item) rather than stopping at the first one,
so the user can fix a returned document in one pass.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, List

from vitae.utils.json_tools import decode_json, is_record

YEAR_MONTH = re.compile(r"\d{4}-\d{2}", re.ASCII)

_NOT_JSON = object()


@dataclass
class AiExportValidation:
    valid: bool
    errors: List[str] = field(default_factory=list)


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _check_year_month(value: Any) -> bool:
    """Falsy values pass (the field is optional); anything else must be YYYY-MM."""
    if not value:
        return True
    return isinstance(value, str) and YEAR_MONTH.fullmatch(value) is not None


def _check_optional_list(value: Any) -> bool:
    return value is None or isinstance(value, list)


def _check_items(
    items: Any,
    collection: str,
    item_label: str,
    check_item: Callable[[str, dict, List[str]], None],
    errors: List[str],
) -> None:
    if not isinstance(items, list):
        errors.append(f"{collection} must be an array")
        return

    for i, item in enumerate(items):
        prefix = f"{item_label} {i}"
        if not is_record(item):
            errors.append(f"{prefix}: must be an object")
            continue
        check_item(prefix, item, errors)


def _check_experience(prefix: str, exp: dict, errors: List[str]) -> None:
    if not _is_string(exp.get("jobTitle")):
        errors.append(f"{prefix}: jobTitle must be a string")
    if not _is_string(exp.get("company")):
        errors.append(f"{prefix}: company must be a string")
    if not _is_bool(exp.get("isCurrent")):
        errors.append(f"{prefix}: isCurrent must be a boolean")
    if not _check_year_month(exp.get("startDate")):
        errors.append(f"{prefix}: startDate must be in YYYY-MM format")
    if not _check_optional_list(exp.get("roleCategories")):
        errors.append(f"{prefix}: roleCategories must be an array")


def _check_education(prefix: str, edu: dict, errors: List[str]) -> None:
    if not _is_string(edu.get("school")):
        errors.append(f"{prefix}: school must be a string")
    if not _is_bool(edu.get("isOngoing")):
        errors.append(f"{prefix}: isOngoing must be a boolean")
    if not _check_year_month(edu.get("startDate")):
        errors.append(f"{prefix}: startDate must be in YYYY-MM format")
    if not _check_optional_list(edu.get("educationSections")):
        errors.append(f"{prefix}: educationSections must be an array")


def _check_skill(prefix: str, skill: dict, errors: List[str]) -> None:
    if not _is_string(skill.get("skillName")):
        errors.append(f"{prefix}: skillName must be a string")


def validate_ai_modified_export(document: Any) -> AiExportValidation:
    """
    Validate the structure of an AI-modified export.

    Args:
        document: Decoded JSON value (any shape)

    Returns:
        AiExportValidation with every violation found

    Example:
        >>> result = validate_ai_modified_export({"metadata": {}, "data": {}})
        >>> result.errors[0]
        'Missing or invalid metadata'
    """
    errors: List[str] = []
    document = document if is_record(document) else {}

    metadata = document.get("metadata")
    if not is_record(metadata) or not metadata.get("exportedAt"):
        errors.append("Missing or invalid metadata")

    data = document.get("data")
    if not is_record(data):
        errors.append("Missing data object")
        return AiExportValidation(valid=False, errors=errors)

    profile = data.get("profile")
    if profile is not None:
        if not is_record(profile):
            errors.append("Profile must be an object")
        else:
            if not _is_string(profile.get("fullName")):
                errors.append("Profile fullName must be a string")
            if not _check_optional_list(profile.get("coreStrengths")):
                errors.append("Profile coreStrengths must be an array")

    _check_items(data.get("experiences"), "Experiences", "Experience", _check_experience, errors)
    _check_items(data.get("education"), "Education", "Education", _check_education, errors)
    _check_items(data.get("skills"), "Skills", "Skill", _check_skill, errors)

    return AiExportValidation(valid=not errors, errors=errors)


def validate_ai_export_text(text: str) -> AiExportValidation:
    """Decode then validate; undecodable text is a single error."""
    document = decode_json(text, default=_NOT_JSON)
    if document is _NOT_JSON:
        return AiExportValidation(valid=False, errors=["File is not valid JSON"])
    return validate_ai_modified_export(document)
