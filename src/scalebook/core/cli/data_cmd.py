"""scalebook export / import / reset — whole-document data management."""

from __future__ import annotations

from pathlib import Path

import click

from scalebook.core.cli.common import get_tracker, report_errors
from scalebook.core.exceptions import DataSaveError, InvalidDataError


@click.command("export")
@click.argument("output", type=click.Path(dir_okay=False, writable=True), required=False)
@click.pass_context
def export_cmd(ctx: click.Context, output: str | None) -> None:
    """Write all data as JSON to OUTPUT (or stdout)."""
    with report_errors():
        payload = get_tracker(ctx).store.export_data()

    if output is None:
        click.echo(payload)
        return
    with report_errors():
        try:
            Path(output).expanduser().write_text(payload + "\n", encoding="utf-8")
        except OSError as e:
            raise DataSaveError(f"Cannot write {output}: {e}") from e
    click.echo(f"Exported to {output}", err=True)


@click.command("import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Don't ask before replacing existing data.")
@click.pass_context
def import_cmd(ctx: click.Context, source: str, yes: bool) -> None:
    """Replace all data with the JSON document in SOURCE."""
    tracker = get_tracker(ctx)
    with report_errors():
        try:
            text = Path(source).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise InvalidDataError("Invalid data format") from e
        if not yes and tracker.document.records:
            click.confirm("This replaces all existing records. Continue?", abort=True)
        document = tracker.store.import_data(text)
    click.echo(f"Imported {len(document.records)} records.")


@click.command("reset")
@click.option("--yes", is_flag=True, help="Don't ask for confirmation.")
@click.pass_context
def reset_cmd(ctx: click.Context, yes: bool) -> None:
    """Delete all records, the goal and settings."""
    if not yes:
        click.confirm("Delete ALL weight data?", abort=True)
    with report_errors():
        get_tracker(ctx).store.clear_all()
    click.echo("All data deleted.")
