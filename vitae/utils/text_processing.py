"""
Text processing utilities for matching, file naming and display.
"""

import re
from typing import Any

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def normalize_for_comparison(value: Any) -> str:
    """
    Normalize a field value for content matching: trim and lowercase.

    Non-string values normalize to the empty string, which callers treat as
    "field absent".

    Example:
        >>> normalize_for_comparison("  Senior Developer ")
        'senior developer'
        >>> normalize_for_comparison(42)
        ''
    """
    return value.strip().lower() if isinstance(value, str) else ""


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())


def slugify(text: str, fallback: str = "cv-template") -> str:
    """
    Turn a display name into a file-name-safe slug.

    Example:
        >>> slugify("Tech Lead CV (2025)")
        'tech-lead-cv-2025'
        >>> slugify("!!!")
        'cv-template'
    """
    slug = _SLUG_SEPARATORS.sub("-", (text or "").lower()).strip("-")
    return slug or fallback


def set_max_consecutive_blank_lines(content: str, max_consecutive: int = 1) -> str:
    """
    Normalize consecutive blank lines to a maximum number.

    Args:
        content: The text content to normalize
        max_consecutive: Maximum number of consecutive blank lines to allow.
                        Use 0 to remove all blank lines, 1 for standard
                        normalization (default: 1)

    Example:
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=1)
        'text\\n\\nmore'
    """
    if max_consecutive == 0:
        pattern = r"\n\s*\n(\s*\n)*"
    else:
        # Only runs of 2+ blank lines
        pattern = r"\n\s*\n(\s*\n)+"

    replacement = "\n" * (max_consecutive + 1)
    return re.sub(pattern, replacement, content)


def to_latex(plaintext_str: str) -> str:
    """
    Convert plaintext to LaTeX by escaping special characters.

    Conversions:
    - \\ → \\textbackslash{} (first, to avoid double-escaping)
    - % $ & _ # { } → backslash-escaped
    - ~ → \\textasciitilde{}
    - ^ → \\textasciicircum{}

    Example:
        >>> to_latex("AI & Machine Learning")
        'AI \\\\& Machine Learning'
    """
    if not plaintext_str:
        return ""

    result = str(plaintext_str)

    # Order matters - backslash must be first
    result = result.replace("\\", "\x00")
    result = result.replace("{", r"\{")
    result = result.replace("}", r"\}")
    result = result.replace("\x00", r"\textbackslash{}")
    result = result.replace("%", r"\%")
    result = result.replace("$", r"\$")
    result = result.replace("&", r"\&")
    result = result.replace("_", r"\_")
    result = result.replace("#", r"\#")
    result = result.replace("~", r"\textasciitilde{}")
    result = result.replace("^", r"\textasciicircum{}")

    return result
