"""scalebook add / edit / delete / history — weight record commands."""

from __future__ import annotations

import click

from scalebook.core.cli.common import console, get_tracker, records_table, report_errors
from scalebook.tracker import WeightRecordForm
from scalebook.tracker.calculations import SORT_FIELDS, SORT_ORDERS

_DATE = click.DateTime(formats=["%Y-%m-%d"])


@click.command()
@click.argument("weight", type=float)
@click.option("--date", "day", type=_DATE, default=None, help="Day of the weigh-in (YYYY-MM-DD). Defaults to today.")
@click.option("--body-fat", type=float, default=None, help="Body fat percentage.")
@click.option("--muscle", type=float, default=None, help="Muscle mass in kg.")
@click.pass_context
def add(ctx: click.Context, weight: float, day, body_fat: float | None, muscle: float | None) -> None:
    """Record a weigh-in."""
    raw = {"weight": weight, "body_fat_percentage": body_fat, "muscle_mass": muscle}
    if day is not None:
        raw["date"] = day.date()

    with report_errors():
        form = WeightRecordForm.parse(**raw)
        record = get_tracker(ctx).add_record(form)

    click.echo(f"Saved {record.weight:.1f} kg on {record.date.isoformat()} (BMI {record.bmi:.1f}) [{record.id}]")


@click.command()
@click.argument("record_id")
@click.option("--weight", default=None, help="New weight in kg.")
@click.option("--date", "day", default=None, help="New day (YYYY-MM-DD).")
@click.option("--body-fat", default=None, help="New body fat percentage; pass '' to clear.")
@click.option("--muscle", default=None, help="New muscle mass in kg; pass '' to clear.")
@click.pass_context
def edit(ctx: click.Context, record_id: str, weight, day, body_fat, muscle) -> None:
    """Change an existing record.  Unspecified fields keep their values."""
    tracker = get_tracker(ctx)
    with report_errors():
        existing = tracker.get_record(record_id)
        raw = {
            "weight": existing.weight if weight is None else weight,
            "date": existing.date if day is None else day,
            "body_fat_percentage": existing.body_fat_percentage if body_fat is None else body_fat,
            "muscle_mass": existing.muscle_mass if muscle is None else muscle,
        }
        record = tracker.update_record(record_id, WeightRecordForm.parse(**raw))

    click.echo(f"Updated {record.id}: {record.weight:.1f} kg on {record.date.isoformat()} (BMI {record.bmi:.1f})")


@click.command()
@click.argument("record_id")
@click.option("--yes", is_flag=True, help="Don't ask for confirmation.")
@click.pass_context
def delete(ctx: click.Context, record_id: str, yes: bool) -> None:
    """Delete a record."""
    tracker = get_tracker(ctx)
    with report_errors():
        record = tracker.get_record(record_id)
        if not yes:
            click.confirm(f"Delete {record.weight:.1f} kg on {record.date.isoformat()}?", abort=True)
        tracker.remove_record(record_id)
    click.echo(f"Deleted {record_id}")


@click.command()
@click.option("--from", "start", type=_DATE, default=None, help="First day to include (YYYY-MM-DD).")
@click.option("--to", "end", type=_DATE, default=None, help="Last day to include (YYYY-MM-DD).")
@click.option("--sort", "sort_by", type=click.Choice(SORT_FIELDS), default="date", show_default=True)
@click.option("--order", type=click.Choice(SORT_ORDERS), default="desc", show_default=True)
@click.pass_context
def history(ctx: click.Context, start, end, sort_by: str, order: str) -> None:
    """List recorded weigh-ins."""
    with report_errors():
        records = get_tracker(ctx).history(
            start=start.date() if start else None,
            end=end.date() if end else None,
            sort_by=sort_by,
            order=order,
        )

    if not records:
        click.echo("No weight records.")
        return
    console().print(records_table(records))
