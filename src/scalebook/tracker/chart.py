"""Weight trend chart rendered to an image file.

Requires matplotlib (``pip install scalebook[chart]``).
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from pathlib import Path

from scalebook.core.exceptions import DataSaveError, ValidationError
from scalebook.core.types import PathLike

from .calculations import chart_points
from .models import TimePeriod, WeightRecord


def _require_matplotlib():
    """Lazy import with clear error message."""
    try:
        import matplotlib

        matplotlib.use("Agg")
        from matplotlib.figure import Figure

        return Figure
    except ImportError:
        raise ImportError("matplotlib is required for charts. Install with: pip install scalebook[chart]") from None


def _gap(value: float | None) -> float:
    # NaN leaves a gap in the line instead of dropping the point
    return float("nan") if value is None else value


def render_chart(
    records: Iterable[WeightRecord],
    period: TimePeriod,
    path: PathLike,
    today: date | None = None,
) -> Path:
    """Plot weight (plus body fat, muscle mass and BMI when present) for ``period``.

    Body fat and BMI share a secondary axis on the right.

    Returns:
        The path the image was written to.

    Raises:
        ValidationError: If no records fall inside the period.
        DataSaveError: If the image cannot be written.
    """
    period = TimePeriod(period)
    points = chart_points(records, period, today)
    if not points:
        raise ValidationError("No data in the selected period")

    Figure = _require_matplotlib()
    fig = Figure(figsize=(10, 6))
    ax = fig.add_subplot(111)
    right = ax.twinx()

    dates = [p.date for p in points]
    ax.plot(dates, [p.weight for p in points], color="#3B82F6", marker="o", linewidth=2, label="Weight (kg)")

    if any(p.muscle_mass for p in points):
        muscle = [_gap(p.muscle_mass) for p in points]
        ax.plot(dates, muscle, color="#10B981", marker="o", linewidth=2, label="Muscle mass (kg)")

    if any(p.body_fat_percentage for p in points):
        fat = [_gap(p.body_fat_percentage) for p in points]
        right.plot(dates, fat, color="#F97316", marker="o", linewidth=2, label="Body fat (%)")

    right.plot(dates, [p.bmi for p in points], color="#8B5CF6", marker="o", linewidth=2, label="BMI")

    weights = [p.weight for p in points]
    ax.set_ylim(min(weights) - 1, max(weights) + 1)
    ax.set_xlabel("Date")
    ax.set_ylabel("kg")
    right.set_ylabel("% / BMI")
    ax.set_title(f"Weight trend: {period.label} ({len(points)} records)", fontweight="bold")
    ax.grid(True, alpha=0.3)

    handles, labels = ax.get_legend_handles_labels()
    right_handles, right_labels = right.get_legend_handles_labels()
    ax.legend(handles + right_handles, labels + right_labels, loc="upper left")
    fig.autofmt_xdate()
    fig.tight_layout()

    out = Path(path).expanduser()
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out, dpi=150, bbox_inches="tight")
    except OSError as e:
        raise DataSaveError(f"Cannot write chart to {out}: {e}") from e
    return out
