"""
Rendering Context

Responsibilities:
- Builds the CV preview view model from a projection
- Generates LaTeX from the preview through Jinja2 templates
- Compiles LaTeX to PDF and checks the rendered layout
- Writes exported PDFs atomically

Owns: Formatting rules, page layout configuration, LaTeX compilation
Never: Decides which records a CV contains
"""

from vitae.contexts.rendering.compiler import CompilationResult, compile_latex
from vitae.contexts.rendering.latex_generator import generate_latex
from vitae.contexts.rendering.layout_config import load_layout
from vitae.contexts.rendering.pdf_export import PdfExportResult, export_pdf, pdf_file_name
from vitae.contexts.rendering.preview import CVPreview, build_preview

__all__ = [
    # Preview
    "build_preview",
    "CVPreview",
    # LaTeX pipeline
    "generate_latex",
    "compile_latex",
    "CompilationResult",
    "load_layout",
    # Export
    "export_pdf",
    "pdf_file_name",
    "PdfExportResult",
]
