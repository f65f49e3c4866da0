#!/usr/bin/env python3
"""
CV Template CLI

Composes templates over the record store and moves them in and out as JSON.

Commands:
    create  - Create a template from record ids
    list    - List templates, newest first
    export  - Write a template as self-describing JSON
    import  - Import template JSON (as a new template or into an existing one)
    preview - Print the CV a template renders to
    delete  - Delete a template

Examples:\n

    cv_template.py create "Tech Lead" --all

    cv_template.py export 3f0c... --output-dir exports/

    cv_template.py import exports/tech-lead-2025-11-14.json

    cv_template.py import edited.json --into 3f0c...

    cv_template.py preview 3f0c... --markdown
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.records.models import TemplateInput
from vitae.contexts.records.store import RecordStore
from vitae.contexts.rendering.layout_config import load_layout
from vitae.contexts.rendering.preview import build_preview
from vitae.contexts.templating import (
    build_template_export,
    full_projection,
    import_into_template,
    resolve_projection,
    template_export_file_name,
)
from vitae.contexts.templating.logger import log_export_result, setup_templating_logger
from vitae.utils.exceptions import MalformedDocumentError, RecordNotFoundError
from vitae.utils.json_tools import load_json_document, write_json_document
from vitae.utils.timestamp import format_timestamp, now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))

app = typer.Typer(
    help="Compose CV templates and import/export them as JSON",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _open_store() -> RecordStore:
    try:
        return RecordStore.from_env()
    except FileNotFoundError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command("create")
def create_command(
    name: Annotated[str, typer.Argument(help="Template name")],
    experience_ids: Annotated[
        Optional[List[str]],
        typer.Option("--experience", "-e", help="Experience id to include (repeatable)"),
    ] = None,
    education_ids: Annotated[
        Optional[List[str]],
        typer.Option("--education", "-d", help="Education id to include (repeatable)"),
    ] = None,
    skill_ids: Annotated[
        Optional[List[str]],
        typer.Option("--skill", "-s", help="Skill id to include (repeatable)"),
    ] = None,
    select_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Select every current record"),
    ] = False,
    description: Annotated[
        Optional[str],
        typer.Option("--description", help="Template description"),
    ] = None,
    no_profile: Annotated[
        bool,
        typer.Option("--no-profile", help="Leave the profile out"),
    ] = False,
    no_languages: Annotated[
        bool,
        typer.Option("--no-languages", help="Leave spoken languages out"),
    ] = False,
    default: Annotated[
        bool,
        typer.Option("--default", help="Mark as the default template"),
    ] = False,
):
    """
    Create a template from record ids.

    Examples:\n

        $ cv_template.py create "Tech Lead" --all

        $ cv_template.py create "Short" -e 1b2c... -s 9a8b... --no-languages
    """
    with _open_store() as store:
        if select_all:
            records = store.live_records()
            experience_ids = [e.id for e in records.experiences]
            education_ids = [e.id for e in records.education]
            skill_ids = [s.id for s in records.skills]

        try:
            template = store.create_template(
                TemplateInput(
                    name=name,
                    description=description,
                    include_profile=not no_profile,
                    include_languages=not no_languages,
                    is_default=default,
                    selected_experience_ids=experience_ids or [],
                    selected_education_ids=education_ids or [],
                    selected_skill_ids=skill_ids or [],
                )
            )
        except ValueError as e:
            _fail(str(e))

    typer.secho(f"✓ Created template '{template.name}'", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Id: {template.id}")


@app.command("list")
def list_command():
    """List templates, newest first."""
    with _open_store() as store:
        templates = store.list_templates()

    if not templates:
        typer.echo("No templates.")
        return

    for template in templates:
        marker = " (default)" if template.is_default else ""
        typer.secho(f"{template.name}{marker}", bold=True)
        typer.echo(f"  Id: {template.id}")
        typer.echo(
            f"  Experiences: {len(template.selected_experience_ids)}, "
            f"education: {len(template.selected_education_ids)}, "
            f"skills: {len(template.selected_skill_ids)}"
        )
        typer.echo(f"  Created: {format_timestamp(template.created_at, relative=True)}")


@app.command("export")
def export_command(
    template_id: Annotated[str, typer.Argument(help="Template id")],
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for the JSON file (default: RESULTS_PATH)"),
    ] = None,
):
    """Write a template and snapshots of its records as JSON."""
    setup_templating_logger(LOGS_PATH / f"template_{now()}", operation="export")

    with _open_store() as store:
        try:
            template = store.get_template(template_id)
        except RecordNotFoundError as e:
            _fail(str(e))
        document = build_template_export(template, store.live_records())

    output_path = (output_dir or RESULTS_PATH) / template_export_file_name(template.name)
    write_json_document(document, output_path)
    log_export_result(template.name, output_path)

    typer.secho(f"✓ Exported '{template.name}'", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  File: {output_path}")


@app.command("import")
def import_command(
    document_path: Annotated[Path, typer.Argument(help="Template JSON to import")],
    into: Annotated[
        Optional[str],
        typer.Option("--into", help="Merge into this existing template instead of creating one"),
    ] = None,
):
    """
    Import template JSON, matching its records against the current data.

    Items that cannot be matched are reported as warnings and left out. With
    --into, collections the file does not mention keep their current selection.

    Examples:\n

        $ cv_template.py import exports/tech-lead-2025-11-14.json

        $ cv_template.py import edited.json --into 3f0c...
    """
    setup_templating_logger(LOGS_PATH / f"template_{now()}", operation="import")

    try:
        document = load_json_document(document_path)
    except MalformedDocumentError as e:
        _fail(str(e))

    with _open_store() as store:
        existing = None
        if into:
            try:
                existing = store.get_template(into)
            except RecordNotFoundError as e:
                _fail(str(e))

        result = import_into_template(document, store.live_records(), existing)

        if existing is None:
            template = store.create_template(result.input)
            verb = "Imported"
        else:
            template = store.update_template(existing.id, result.input)
            verb = "Updated"

    typer.secho(f"✓ {verb} template '{template.name}'", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Id: {template.id}")
    for warning in result.warnings:
        typer.secho(f"  ! {warning}", fg=typer.colors.YELLOW)


@app.command("preview")
def preview_command(
    template_id: Annotated[
        Optional[str],
        typer.Argument(help="Template id (omit to preview every record)"),
    ] = None,
    markdown: Annotated[
        bool,
        typer.Option("--markdown", "-m", help="Print Markdown instead of plain text"),
    ] = False,
):
    """Print the CV a template renders to."""
    with _open_store() as store:
        records = store.live_records()
        if template_id is None:
            projection = full_projection(records)
        else:
            try:
                projection = resolve_projection(store.get_template(template_id), records)
            except RecordNotFoundError as e:
                _fail(str(e))

    if projection.is_empty:
        typer.secho("Nothing to preview: add records first.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    preview = build_preview(projection, section_titles=load_layout().get("section_titles"))
    typer.echo(preview.to_markdown() if markdown else preview.to_plaintext())


@app.command("delete")
def delete_command(
    template_id: Annotated[str, typer.Argument(help="Template id")],
):
    """Delete a template (records are not touched)."""
    with _open_store() as store:
        try:
            store.delete_template(template_id)
        except RecordNotFoundError as e:
            _fail(str(e))

    typer.secho(f"✓ Deleted template {template_id}", fg=typer.colors.GREEN, bold=True)


if __name__ == "__main__":
    app()
