"""
PDF processing utilities for inspecting rendered CVs.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_lines: Text lines of every page, top to bottom.
    cluster_by_y_tolerance: Y-coordinate clustering for line detection.
    find_section_header: Find header text in a list of lines.
"""

import io
from pathlib import Path
from typing import Dict, List, Optional, Union

import pdfplumber
from PyPDF2 import PdfReader

from vitae.utils.text_processing import normalize_for_matching

PdfSource = Union[bytes, Path]


def _as_stream(pdf: PdfSource):
    return io.BytesIO(pdf) if isinstance(pdf, (bytes, bytearray)) else str(pdf)


def page_count(pdf: PdfSource) -> Optional[int]:
    """Get page count from PDF bytes or path, or None if unreadable."""
    try:
        reader = PdfReader(_as_stream(pdf))
        return len(reader.pages)
    except Exception:
        return None


def cluster_by_y_tolerance(chars: List, tolerance: float = 3.0) -> List[List]:
    """
    Group characters into lines by Y-coordinate proximity.

    Handles baseline shifts between bold/regular text that would otherwise split lines.
    """
    if not chars:
        return []

    sorted_chars = sorted(chars, key=lambda c: c["top"])

    lines = []
    current_line = [sorted_chars[0]]
    current_y = sorted_chars[0]["top"]

    for char in sorted_chars[1:]:
        if abs(char["top"] - current_y) <= tolerance:
            current_line.append(char)
        else:
            lines.append(current_line)
            current_line = [char]
            current_y = char["top"]

    if current_line:
        lines.append(current_line)

    return lines


def extract_lines(pdf: PdfSource, y_tolerance: float = 3.0, max_pages: int = 50) -> Dict[int, List[str]]:
    """
    Extract text lines from every page.

    Returns:
        Dict mapping page number (1-indexed) to its text lines, top to bottom
    """
    pages: Dict[int, List[str]] = {}

    with pdfplumber.open(_as_stream(pdf)) as document:
        for page_num, page in enumerate(document.pages[:max_pages], start=1):
            lines = []
            for char_objs in cluster_by_y_tolerance(page.chars, tolerance=y_tolerance):
                char_objs.sort(key=lambda c: c["x0"])
                lines.append("".join(c["text"] for c in char_objs))
            pages[page_num] = lines

    return pages


def find_section_header(section_name: str, lines: List[str]) -> Optional[int]:
    """Find index of section header in lines using normalized exact match, or None."""
    section_norm = normalize_for_matching(section_name)

    for i, text in enumerate(lines):
        # Exact match prevents "Skills" matching "Core Skills Summary"
        if section_norm == normalize_for_matching(text):
            return i

    return None
