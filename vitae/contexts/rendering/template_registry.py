from pathlib import Path
from typing import Dict, Optional

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound

from vitae.utils.text_processing import to_latex

TEMPLATES_PATH = Path(__file__).parent / "template"


def latex_lines(text: Optional[str]) -> str:
    """
    Escape multi-line text, keeping its line breaks as LaTeX line breaks.

    Empty lines become \\mbox{} so that "\\\\" never ends an empty line. Each
    break is followed by \\relax so a line starting with "[" or "*" is not read
    as an argument of "\\\\".
    """
    if not text:
        return ""
    lines = [to_latex(line) or r"\mbox{}" for line in text.splitlines()]
    return "\\\\\\relax\n".join(lines)


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for LaTeX generation.

    Templates are stored as {templates_path}/{name}.tex.jinja and use custom
    delimiters to avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>

    Two filters are available in templates: "latex" (escape special
    characters) and "latex_lines" (escape and keep line breaks).
    """

    def __init__(self, templates_path: Optional[Path] = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding *.tex.jinja files. Defaults to
                           the template/ directory of the rendering context.
        """
        self.templates_path = templates_path or TEMPLATES_PATH
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Custom delimiters to avoid LaTeX brace conflicts
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            # Whitespace is significant in LaTeX (blank line = paragraph break)
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["latex"] = to_latex
        self.env.filters["latex_lines"] = latex_lines

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            name: Template name without extension (e.g., 'cv')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        template_file = f"{name}.tex.jinja"

        try:
            template = self.env.get_template(template_file)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template '{name}' not found at {self.templates_path / template_file}"
            ) from e

        self._cache[name] = template
        return template
