"""
VITAE - Versioned Import, Templating And Export of CVs

A CV-management toolkit: structured CV records, composable templates that
select subsets of those records, and the pipelines that move templates in and
out of the system.

Architecture:
- Records Context: Profile, experience, education, skill and template storage
- Templating Context: Template projection, JSON export and import reconciliation
- Rendering Context: Preview view model and LaTeX/PDF generation
- AI Export Context: Schema-annotated export and validation of edited exports
"""

__version__ = "0.1.0"
