"""scalebook settings — height, theme and notification preferences."""

from __future__ import annotations

import click

from scalebook.core.cli.common import get_tracker, report_errors
from scalebook.tracker import SettingsForm, Theme


@click.group()
def settings() -> None:
    """View or change preferences."""


@settings.command("show")
@click.pass_context
def show_settings(ctx: click.Context) -> None:
    """Print current settings."""
    with report_errors():
        current = get_tracker(ctx).document.settings
    click.echo(f"height: {current.height:g} cm")
    click.echo(f"theme: {current.theme.value}")
    click.echo(f"notifications: {'on' if current.notifications else 'off'}")


@settings.command("set")
@click.option("--height", type=float, default=None, help="Height in cm (used for BMI).")
@click.option("--theme", type=click.Choice([t.value for t in Theme]), default=None)
@click.option("--notifications/--no-notifications", default=None)
@click.pass_context
def set_settings(ctx: click.Context, height: float | None, theme: str | None, notifications: bool | None) -> None:
    """Change one or more settings."""
    with report_errors():
        form = SettingsForm.parse(height=height, theme=theme, notifications=notifications)
        if not form.changes():
            raise click.UsageError("Nothing to change. Pass --height, --theme or --notifications.")
        updated = get_tracker(ctx).update_settings(form)
    click.echo(f"Saved settings: height {updated.height:g} cm, theme {updated.theme.value}")
