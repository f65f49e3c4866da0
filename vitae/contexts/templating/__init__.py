"""
Templating Context

Responsibilities:
- Resolves templates into CV projections
- Exports templates as self-describing JSON
- Reconciles imported template JSON against live records

Owns: Template projection, template JSON import/export, snapshot matching
Never: Writes to the record store (callers persist the reconciled input)
"""

from vitae.contexts.templating.exporter import build_template_export, template_export_file_name
from vitae.contexts.templating.projection import full_projection, resolve_projection
from vitae.contexts.templating.reconciler import (
    ImportMeta,
    TemplateImportResult,
    apply_import_to_template,
    import_into_template,
    reconcile_import,
)

__all__ = [
    # Import reconciliation
    "reconcile_import",
    "apply_import_to_template",
    "import_into_template",
    "TemplateImportResult",
    "ImportMeta",
    # Projection and export
    "resolve_projection",
    "full_projection",
    "build_template_export",
    "template_export_file_name",
]
