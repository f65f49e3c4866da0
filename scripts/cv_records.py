#!/usr/bin/env python3
"""
CV Record Store CLI

Creates the record database, seeds it from CV JSON documents and lists what it
holds for the configured user (VITAE_DB_PATH / VITAE_USER_ID).

Commands:
    init   - Create the database (existing data is kept)
    load   - Seed records from a CV JSON document
    export - Write every record (ids included) as a CV backup
    list   - List records of one kind, in display order

Examples:\n

    cv_records.py init

    cv_records.py load exports/my-cv.json

    cv_records.py export --output-dir backups/

    cv_records.py list experience
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.records.backup import build_cv_export, cv_export_file_name
from vitae.contexts.records.logger import log_backup_written, log_document_loaded, setup_records_logger
from vitae.contexts.records.store import VITAE_DB_PATH, RecordStore
from vitae.utils.exceptions import MalformedDocumentError
from vitae.utils.json_tools import load_json_document, write_json_document
from vitae.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))

KINDS = ("profile", "experience", "education", "skill")

app = typer.Typer(
    help="Create, seed and inspect the CV record store",
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


@app.command("init")
def init_command():
    """Create the record database (never deletes existing data)."""
    with RecordStore.from_env(create=True) as store:
        typer.secho(f"✓ Record store ready: {VITAE_DB_PATH}", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  User: {store.user_id}")


@app.command("load")
def load_command(
    document_path: Annotated[
        Path,
        typer.Argument(help="CV JSON document (CV export, template export or AI export)"),
    ],
):
    """
    Seed records from a CV JSON document.

    Record ids are kept when free so that template exports referring to them
    still resolve.

    Examples:\n

        $ cv_records.py load exports/my-cv.json
    """
    setup_records_logger(LOGS_PATH / f"records_{now()}", VITAE_DB_PATH)

    try:
        document = load_json_document(document_path)
    except MalformedDocumentError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    with RecordStore.from_env(create=True) as store:
        counts = store.load_document(document)

    log_document_loaded(document_path, counts)
    typer.secho(f"\n✓ Loaded {document_path.name}", fg=typer.colors.GREEN, bold=True)
    for kind, count in counts.items():
        typer.echo(f"  {kind}: {count}")
    typer.echo("")


@app.command("export")
def export_command(
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for the JSON file (default: RESULTS_PATH)"),
    ] = None,
):
    """
    Write every record as a CV backup (cv-export-<date>.json).

    The file keeps record ids and can be loaded back with cv_records.py load.
    """
    setup_records_logger(LOGS_PATH / f"records_{now()}", VITAE_DB_PATH)

    with _open_store() as store:
        records = store.live_records()

    document = build_cv_export(records)
    output_path = write_json_document(document, (output_dir or RESULTS_PATH) / cv_export_file_name())

    counts = {
        "profile": int(records.profile is not None),
        "experiences": len(records.experiences),
        "education": len(records.education),
        "skills": len(records.skills),
    }
    log_backup_written(output_path, counts)

    typer.secho("✓ CV exported", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  File: {output_path}")
    for kind, count in counts.items():
        typer.echo(f"  {kind}: {count}")


@app.command("list")
def list_command(
    kind: Annotated[
        str,
        typer.Argument(help=f"Record kind: {', '.join(KINDS)}"),
    ] = "experience",
):
    """List records of one kind in display order."""
    if kind not in KINDS:
        typer.secho(f"Error: unknown kind '{kind}' (expected one of {', '.join(KINDS)})", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    with _open_store() as store:
        if kind == "profile":
            profile = store.get_profile()
            if profile is None:
                typer.echo("No profile.")
            else:
                typer.secho(profile.full_name, bold=True)
                for value in (profile.title, profile.email, profile.phone, profile.location):
                    if value:
                        typer.echo(f"  {value}")
            return

        records = store.list_records(kind)

    if not records:
        typer.echo(f"No {kind} records.")
        return

    for record in records:
        if kind == "experience":
            label = f"{record.job_title} @ {record.company} ({record.start_date})"
        elif kind == "education":
            label = f"{record.school} ({record.start_date})"
        else:
            label = f"{record.skill_name} [{record.category or 'Other'}]"
        typer.echo(f"  {record.id}  {label}")


if __name__ == "__main__":
    app()
