"""scalebook dashboard / stats / chart — read-only views."""

from __future__ import annotations

import click
from rich.panel import Panel

from scalebook.core.cli.common import (
    PERIOD_CHOICES,
    TREND_ARROWS,
    console,
    fmt_kg,
    get_tracker,
    report_errors,
    stats_table,
)

_period_option = click.option(
    "--period",
    type=click.Choice(list(PERIOD_CHOICES)),
    default="month",
    show_default=True,
    help="Look-back window.",
)


@click.command()
@_period_option
@click.pass_context
def dashboard(ctx: click.Context, period: str) -> None:
    """Overview: latest weight, BMI, goal progress, trend and statistics."""
    with report_errors():
        view = get_tracker(ctx).dashboard(PERIOD_CHOICES[period])

    out = console()
    if view.latest is None:
        out.print(Panel("No weight recorded yet. Try 'scalebook add 70.5'.", title="Dashboard"))
    else:
        lines = [
            f"Current weight: [bold]{fmt_kg(view.latest.weight)} kg[/bold] ({view.latest.date.isoformat()})",
            f"BMI: {fmt_kg(view.latest.bmi)}" + (f" ({view.bmi_category})" if view.bmi_category else ""),
            f"Trend: {TREND_ARROWS[view.trend.value]}",
        ]
        if view.goal is not None:
            goal = view.goal.goal
            state = "achieved" if goal.is_achieved else f"{view.goal.remaining:.1f} kg to go"
            lines.append(
                f"Goal: {fmt_kg(goal.target_weight)} kg, {view.goal.progress:.0f}% ({state})"
            )
        else:
            lines.append("Goal: not set")
        out.print(Panel("\n".join(lines), title="Dashboard"))
    out.print(stats_table(view.stats))


@click.command()
@_period_option
@click.pass_context
def stats(ctx: click.Context, period: str) -> None:
    """Statistics for a look-back window."""
    with report_errors():
        result = get_tracker(ctx).stats(PERIOD_CHOICES[period])
    console().print(stats_table(result))


@click.command()
@click.argument("output", type=click.Path(dir_okay=False))
@_period_option
@click.pass_context
def chart(ctx: click.Context, output: str, period: str) -> None:
    """Save a weight trend chart as an image (PNG)."""
    from scalebook.tracker.chart import render_chart

    tracker = get_tracker(ctx)
    with report_errors():
        try:
            path = render_chart(tracker.document.records, PERIOD_CHOICES[period], output)
        except ImportError as e:
            raise click.ClickException(str(e)) from e
    click.echo(f"Chart saved to {path}")
