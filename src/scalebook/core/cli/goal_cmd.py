"""scalebook goal — set, show and clear the weight target."""

from __future__ import annotations

import click

from scalebook.core.cli.common import console, fmt_kg, get_tracker, report_errors
from scalebook.tracker import WeightGoalForm


@click.group()
def goal() -> None:
    """Manage your target weight."""


@goal.command("set")
@click.argument("target", type=float)
@click.option("--start", type=float, default=None, help="Starting weight. Defaults to your latest record.")
@click.pass_context
def set_goal(ctx: click.Context, target: float, start: float | None) -> None:
    """Set a new target weight, replacing any current goal."""
    with report_errors():
        form = WeightGoalForm.parse(target_weight=target, start_weight=start)
        new_goal = get_tracker(ctx).set_goal(form)
    click.echo(f"Goal set: {new_goal.start_weight:.1f} kg -> {new_goal.target_weight:.1f} kg")


@goal.command("show")
@click.pass_context
def show_goal(ctx: click.Context) -> None:
    """Show progress toward the current goal."""
    with report_errors():
        status = get_tracker(ctx).goal_status()

    if status is None:
        click.echo("No goal set.")
        return

    g = status.goal
    out = console()
    out.print(f"Target: {fmt_kg(g.target_weight)} kg (started at {fmt_kg(g.start_weight)} kg on {g.start_date.isoformat()})")
    out.print(f"Progress: {status.progress:.1f}%")
    out.print(f"Remaining: {status.remaining:.1f} kg")
    if g.is_achieved and g.achieved_at is not None:
        out.print(f"[green]Achieved on {g.achieved_at.date().isoformat()}[/green]")


@goal.command("clear")
@click.pass_context
def clear_goal(ctx: click.Context) -> None:
    """Remove the current goal."""
    with report_errors():
        get_tracker(ctx).remove_goal()
    click.echo("Goal cleared.")
