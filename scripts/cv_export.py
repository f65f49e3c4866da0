#!/usr/bin/env python3
"""
CV Export CLI

Renders CVs to PDF, writes AI-friendly exports and checks AI-edited exports
before they are imported again.

Commands:
    pdf         - Render a template (or every record) to PDF
    ai          - Write an AI-friendly JSON export
    validate-ai - Check the structure of an AI-edited export

Examples:\n

    cv_export.py pdf 3f0c... --output-dir exports/

    cv_export.py ai 3f0c...

    cv_export.py validate-ai cv-ai-export-2025-11-14.json
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.ai_export import ai_export_file_name, format_for_ai, validate_ai_export_text
from vitae.contexts.ai_export.logger import log_validation_result, setup_ai_export_logger
from vitae.contexts.records.models import CVProjection
from vitae.contexts.records.store import RecordStore
from vitae.contexts.rendering import export_pdf
from vitae.contexts.rendering.compiler import KEEP_LATEX_ARTIFACTS, LATEX_COMPILER
from vitae.contexts.rendering.logger import setup_rendering_logger
from vitae.contexts.templating import full_projection, resolve_projection
from vitae.utils.exceptions import RecordNotFoundError
from vitae.utils.json_tools import write_json_document
from vitae.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))

app = typer.Typer(
    help="Render CVs to PDF and exchange AI-friendly JSON exports",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_projection(template_id: Optional[str]) -> CVProjection:
    try:
        with RecordStore.from_env() as store:
            records = store.live_records()
            if template_id is None:
                return full_projection(records)
            return resolve_projection(store.get_template(template_id), records)
    except (FileNotFoundError, RecordNotFoundError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("pdf")
def pdf_command(
    template_id: Annotated[
        Optional[str],
        typer.Argument(help="Template id (omit to render every record)"),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for the PDF (default: RESULTS_PATH)"),
    ] = None,
    num_passes: Annotated[
        int,
        typer.Option(
            "--passes",
            "-p",
            help="Number of compiler passes (default: 2 for cross-references)",
            min=1,
            max=5,
        ),
    ] = 2,
    keep_artifacts: Annotated[
        bool,
        typer.Option(
            "--keep-artifacts",
            "-k",
            help="Keep LaTeX sources and logs in the log directory",
        ),
    ] = KEEP_LATEX_ARTIFACTS,
):
    """
    Render a CV to PDF.

    Examples:\n

        $ cv_export.py pdf                           # Every record

        $ cv_export.py pdf 3f0c... -o exports/       # One template
    """
    log_dir = LOGS_PATH / f"render_{now()}"
    setup_rendering_logger(log_dir)

    projection = _load_projection(template_id)
    if projection.is_empty:
        typer.secho("Nothing to render: the CV is empty.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    typer.secho(f"\nRendering with {LATEX_COMPILER}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Passes: {num_passes}")
    typer.echo("")

    result = export_pdf(
        projection,
        output_dir=output_dir or RESULTS_PATH,
        num_passes=num_passes,
        keep_artifacts_dir=log_dir / "latex" if keep_artifacts else None,
    )

    typer.echo("")
    if result.success:
        typer.secho("✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  PDF: {result.pdf_path}")
        typer.echo(f"  Pages: {result.page_count}")
        typer.echo(f"  Warnings: {len(result.warnings)}")
    else:
        typer.secho("✗ Export failed", fg=typer.colors.RED, bold=True)
        for error in result.errors[:10]:
            typer.secho(f"  - {error}", fg=typer.colors.RED)
        if len(result.errors) > 10:
            typer.echo(f"  ... and {len(result.errors) - 10} more")

    typer.echo(f"  Log: {log_dir / 'render.log'}")
    typer.echo("")
    raise typer.Exit(code=0 if result.success else 1)


@app.command("ai")
def ai_command(
    template_id: Annotated[
        Optional[str],
        typer.Argument(help="Template id (omit to export every record)"),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for the JSON file (default: RESULTS_PATH)"),
    ] = None,
):
    """Write an AI-friendly export with modification guidelines."""
    setup_ai_export_logger(LOGS_PATH / f"ai_{now()}", operation="export")

    projection = _load_projection(template_id)
    output_path = (output_dir or RESULTS_PATH) / ai_export_file_name()
    write_json_document(format_for_ai(projection), output_path)

    typer.secho("✓ AI export written", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  File: {output_path}")


@app.command("validate-ai")
def validate_ai_command(
    document_path: Annotated[Path, typer.Argument(help="AI-edited export to check")],
):
    """
    Check that an AI-edited export kept its structure.

    Every problem is listed. A valid file can be imported with
    cv_template.py import.
    """
    setup_ai_export_logger(LOGS_PATH / f"ai_{now()}", operation="validate")

    try:
        text = document_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        typer.secho(f"Error: could not read {document_path}: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    validation = validate_ai_export_text(text)
    log_validation_result(document_path.name, validation)

    if validation.valid:
        typer.secho("✓ Structure intact", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(f"✗ {len(validation.errors)} problems found", fg=typer.colors.RED, bold=True)
        for error in validation.errors:
            typer.secho(f"  - {error}", fg=typer.colors.RED)

    raise typer.Exit(code=0 if validation.valid else 1)


if __name__ == "__main__":
    app()
