"""Shared setup and rendering for CLI commands."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from scalebook.core.config import Config
from scalebook.core.exceptions import ScalebookError
from scalebook.core.storage import LocalStorage
from scalebook.core.utils.logging import setup_logging
from scalebook.tracker import TimePeriod, WeightRecord, WeightStats, WeightStore, WeightTracker
from scalebook.tracker.calculations import format_date

SCALEBOOK_DIR = Path.home() / ".scalebook"
CONFIG_PATH = SCALEBOOK_DIR / "config.yaml"

PERIOD_CHOICES = {
    "week": TimePeriod.WEEK,
    "month": TimePeriod.MONTH,
    "half_year": TimePeriod.HALF_YEAR,
    "year": TimePeriod.YEAR,
}

TREND_ARROWS = {"increasing": "↑ increasing", "decreasing": "↓ decreasing", "stable": "→ stable"}


@dataclass
class AppContext:
    """Per-invocation state hung off ``click.Context.obj``."""

    config: Config
    _tracker: WeightTracker | None = field(default=None, repr=False)

    @property
    def tracker(self) -> WeightTracker:
        if self._tracker is None:
            self._tracker = create_tracker(self.config)
        return self._tracker


def build_context(data_dir: str | None = None, config_file: str | None = None, verbose: bool = False) -> AppContext:
    if config_file is None and CONFIG_PATH.exists():
        config_file = str(CONFIG_PATH)
    config = Config(config_file=config_file, data_dir=data_dir)
    if data_dir:
        # an explicit --data-dir beats the config file
        config.set("paths.data_dir", os.path.expanduser(data_dir))

    settings = config.validated()
    level = "DEBUG" if verbose else settings.logging.level
    setup_logging(level=level, log_file=settings.logging.file)
    return AppContext(config=config)


def create_tracker(config: Config) -> WeightTracker:
    """Wire LocalStorage → WeightStore → WeightTracker from config."""
    settings = config.validated()
    backend = LocalStorage(base_path=str(settings.paths.data_dir / "storage"))
    store = WeightStore(backend, key=settings.storage.key, default_height=settings.defaults.height)
    return WeightTracker(store)


def get_tracker(ctx: click.Context) -> WeightTracker:
    return ctx.find_object(AppContext).tracker


@contextmanager
def report_errors() -> Iterator[None]:
    """Turn library errors into a clean ``Error: ...`` and exit code 1."""
    try:
        yield
    except ScalebookError as e:
        raise click.ClickException(str(e)) from e


def console() -> Console:
    return Console(highlight=False)


def fmt_kg(value: float | None) -> str:
    return "-" if value is None else f"{value:.1f}"


def records_table(records: list[WeightRecord], title: str = "Weight history") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Weight (kg)", justify="right")
    table.add_column("Body fat (%)", justify="right")
    table.add_column("Muscle (kg)", justify="right")
    table.add_column("BMI", justify="right")
    for r in records:
        table.add_row(
            r.id,
            format_date(r.date),
            fmt_kg(r.weight),
            fmt_kg(r.body_fat_percentage),
            fmt_kg(r.muscle_mass),
            fmt_kg(r.bmi),
        )
    return table


def stats_table(stats: WeightStats) -> Table:
    table = Table(title=f"Record statistics: {stats.period.label}", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Range", f"{format_date(stats.start_date)} - {format_date(stats.end_date)}")
    table.add_row("Total records", str(stats.total_records))
    table.add_row("Average (kg)", fmt_kg(stats.average_weight))
    table.add_row("Max (kg)", fmt_kg(stats.max_weight))
    table.add_row("Min (kg)", fmt_kg(stats.min_weight))
    table.add_row("Change (kg)", f"{stats.weight_change:+.1f}")
    table.add_row("Change (%)", f"{stats.weight_change_percentage:+.1f}")
    return table
