"""
LaTeX Generator

Renders a CV projection to LaTeX source through the preview view model, so
the printable document follows exactly the formatting rules of the preview.
"""

from typing import Any, Dict, Optional, Union

from vitae.contexts.records.models import CVProjection
from vitae.contexts.rendering.layout_config import load_layout
from vitae.contexts.rendering.logger import _log_debug
from vitae.contexts.rendering.preview import CVPreview, build_preview
from vitae.contexts.rendering.template_registry import TemplateRegistry
from vitae.utils.text_processing import set_max_consecutive_blank_lines

CV_TEMPLATE = "cv"


def generate_latex(
    content: Union[CVProjection, CVPreview],
    layout: Optional[Dict[str, Any]] = None,
    template_registry: Optional[TemplateRegistry] = None,
) -> str:
    """
    Generate LaTeX source for a CV.

    Args:
        content: Projection to render (or an already-built preview)
        layout: Layout dict as returned by load_layout() (default: load it)
        template_registry: Registry to load the CV template from

    Returns:
        Complete LaTeX document
    """
    layout = layout or load_layout()
    registry = template_registry or TemplateRegistry()

    if isinstance(content, CVPreview):
        preview = content
    else:
        preview = build_preview(content, section_titles=layout.get("section_titles"))

    template = registry.get_template(CV_TEMPLATE)
    latex = template.render(preview=preview, layout=layout)
    latex = set_max_consecutive_blank_lines(latex, max_consecutive=1)

    _log_debug(f"Generated LaTeX ({len(preview.sections)} sections, {len(latex)} chars)")
    return latex
