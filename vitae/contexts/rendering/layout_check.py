"""
Post-compilation layout check for rendered CVs.

Confirms that every section heading of the preview made it into the PDF and
records where each one landed. Findings are warnings; a CV that compiled is
never rejected here.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from vitae.utils.pdf_processing import extract_lines, find_section_header, page_count


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    SECTION_NOT_FOUND = "Section heading '{section}' not found in rendered PDF"
    UNREADABLE_PDF = "Layout check skipped: could not read PDF ({error})"


@dataclass
class LayoutReport:
    """
    Attributes:
        page_count: Pages in the PDF (None if unreadable)
        section_pages: Heading -> 1-indexed page it was found on
        missing_sections: Headings not found on any page
        warnings: Human-readable findings
    """

    page_count: Optional[int] = None
    section_pages: Dict[str, int] = field(default_factory=dict)
    missing_sections: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def check_layout(pdf_bytes: bytes, section_titles: Sequence[str]) -> LayoutReport:
    """
    Locate each section heading in the rendered PDF.

    Args:
        pdf_bytes: Compiled PDF
        section_titles: Headings expected in the document, in order

    Returns:
        LayoutReport (never raises)
    """
    report = LayoutReport(page_count=page_count(pdf_bytes))

    try:
        pages = extract_lines(pdf_bytes)
    except Exception as e:
        report.warnings.append(IssueTemplates.UNREADABLE_PDF.format(error=e))
        return report

    for title in section_titles:
        page_num = next(
            (num for num, lines in pages.items() if find_section_header(title, lines) is not None),
            None,
        )
        if page_num is None:
            report.missing_sections.append(title)
            report.warnings.append(IssueTemplates.SECTION_NOT_FOUND.format(section=title))
        else:
            report.section_pages[title] = page_num

    return report
