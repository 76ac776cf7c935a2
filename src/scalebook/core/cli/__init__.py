"""Scalebook CLI — entry point for the record, view, goal, settings and data commands."""

from __future__ import annotations

import click

from scalebook import __version__
from scalebook.core.cli.common import build_context, report_errors


@click.group()
@click.version_option(version=__version__, package_name="scalebook")
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Where weight data is stored.")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), default=None, help="YAML or JSON config file.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, data_dir: str | None, config_file: str | None, verbose: bool) -> None:
    """Scalebook — track your weight, body composition and goals."""
    with report_errors():
        ctx.obj = build_context(data_dir=data_dir, config_file=config_file, verbose=verbose)


from .data_cmd import export_cmd, import_cmd, reset_cmd
from .goal_cmd import goal
from .record_cmd import add, delete, edit, history
from .settings_cmd import settings
from .view_cmd import chart, dashboard, stats

main.add_command(add)
main.add_command(edit)
main.add_command(delete)
main.add_command(history)
main.add_command(dashboard)
main.add_command(stats)
main.add_command(chart)
main.add_command(goal)
main.add_command(settings)
main.add_command(export_cmd)
main.add_command(import_cmd)
main.add_command(reset_cmd)
