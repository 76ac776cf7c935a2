"""Derived metrics for weight records: BMI, period statistics, goal progress, trend.

Pure functions, no I/O.  Anything that depends on "today" takes an optional
``today`` argument so results are reproducible.
"""

from __future__ import annotations

import calendar
import math
import uuid
from collections.abc import Iterable
from datetime import date, timedelta

from .models import ChartPoint, TimePeriod, Trend, WeightGoal, WeightRecord, WeightStats, parse_day

TREND_WINDOW = 5
TREND_THRESHOLD_KG = 0.5

SORT_FIELDS = ("date", "weight", "bmi")
SORT_ORDERS = ("asc", "desc")


def round_half_up(value: float, digits: int = 1) -> float:
    """Round like a calculator: halves go up (toward +inf), not to even."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def calculate_bmi(weight: float, height: float) -> float:
    """BMI from weight (kg) and height (cm), one decimal.  0 for non-positive input."""
    if height <= 0 or weight <= 0:
        return 0
    height_m = height / 100
    return round_half_up(weight / (height_m * height_m))


def get_bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal weight"
    if bmi < 30:
        return "Obese (class 1)"
    if bmi < 35:
        return "Obese (class 2)"
    return "Obese (class 3)"


def _subtract_months(day: date, months: int) -> date:
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def get_date_range(period: TimePeriod, today: date | None = None) -> tuple[date, date]:
    """Return ``(start, end)`` for a look-back period ending today (both inclusive)."""
    end = today or date.today()
    period = TimePeriod(period)
    if period == TimePeriod.WEEK:
        start = end - timedelta(days=7)
    elif period == TimePeriod.MONTH:
        start = _subtract_months(end, 1)
    elif period == TimePeriod.HALF_YEAR:
        start = _subtract_months(end, 6)
    else:
        start = _subtract_months(end, 12)
    return start, end


def filter_records_by_date_range(
    records: Iterable[WeightRecord],
    start: date | None = None,
    end: date | None = None,
) -> list[WeightRecord]:
    """Keep records with ``start <= date <= end``.  ``None`` means unbounded."""
    return [r for r in records if (start is None or r.date >= start) and (end is None or r.date <= end)]


def filter_records_by_period(
    records: Iterable[WeightRecord],
    period: TimePeriod,
    today: date | None = None,
) -> list[WeightRecord]:
    start, end = get_date_range(period, today)
    return filter_records_by_date_range(records, start, end)


def sort_records(records: Iterable[WeightRecord], by: str = "date", order: str = "desc") -> list[WeightRecord]:
    """Sort records by ``date``, ``weight`` or ``bmi``.

    Raises:
        ValueError: On an unknown field or order.
    """
    if by not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field {by!r}; expected one of {SORT_FIELDS}")
    if order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order {order!r}; expected one of {SORT_ORDERS}")
    return sorted(records, key=lambda r: getattr(r, by), reverse=order == "desc")


def calculate_stats(
    records: Iterable[WeightRecord],
    period: TimePeriod,
    today: date | None = None,
) -> WeightStats:
    """Statistics for the records inside ``period``.

    Change is newest minus oldest (by date) within the window; the
    percentage is relative to the oldest weight.
    """
    period = TimePeriod(period)
    start, end = get_date_range(period, today)
    filtered = filter_records_by_date_range(records, start, end)

    if not filtered:
        return WeightStats(
            period=period,
            average_weight=0,
            weight_change=0,
            weight_change_percentage=0,
            max_weight=0,
            min_weight=0,
            total_records=0,
            start_date=start,
            end_date=end,
        )

    weights = [r.weight for r in filtered]
    ordered = sorted(filtered, key=lambda r: r.date)
    oldest = ordered[0].weight
    newest = ordered[-1].weight
    change = round_half_up(newest - oldest)
    change_pct = round_half_up(change / oldest * 100) if oldest > 0 else 0

    return WeightStats(
        period=period,
        average_weight=round_half_up(sum(weights) / len(weights)),
        weight_change=change,
        weight_change_percentage=change_pct,
        max_weight=max(weights),
        min_weight=min(weights),
        total_records=len(filtered),
        start_date=start,
        end_date=end,
    )


def calculate_goal_progress(current_weight: float, target_weight: float, start_weight: float) -> float:
    """Percent of the start→target distance already covered, clamped to [0, 100]."""
    if start_weight == target_weight:
        return 100
    progress = (current_weight - start_weight) / (target_weight - start_weight) * 100
    return min(max(progress, 0), 100)


def calculate_remaining_weight(current_weight: float, target_weight: float) -> float:
    """Distance to target in kg, always non-negative."""
    return round_half_up(abs(target_weight - current_weight))


def is_goal_reached(current_weight: float, goal: WeightGoal) -> bool:
    """True once the current weight has reached or passed the target."""
    if goal.is_loss_goal:
        return current_weight <= goal.target_weight
    return current_weight >= goal.target_weight


def calculate_weight_trend(records: Iterable[WeightRecord]) -> Trend:
    """Compare first and last weight of the latest five records (by date)."""
    ordered = sorted(records, key=lambda r: r.date)
    if len(ordered) < 2:
        return Trend.STABLE

    recent = ordered[-TREND_WINDOW:]
    difference = recent[-1].weight - recent[0].weight
    if abs(difference) < TREND_THRESHOLD_KG:
        return Trend.STABLE
    return Trend.INCREASING if difference > 0 else Trend.DECREASING


def chart_points(
    records: Iterable[WeightRecord],
    period: TimePeriod,
    today: date | None = None,
) -> list[ChartPoint]:
    """Records inside ``period`` as plot samples, oldest first."""
    filtered = sorted(filter_records_by_period(records, period, today), key=lambda r: r.date)
    return [
        ChartPoint(
            date=r.date,
            weight=r.weight,
            bmi=r.bmi,
            body_fat_percentage=r.body_fat_percentage,
            muscle_mass=r.muscle_mass,
        )
        for r in filtered
    ]


def format_date(value: str | date, fmt: str = "%Y/%m/%d") -> str:
    return parse_day(value).strftime(fmt)


def today_string(today: date | None = None) -> str:
    """Today as ``YYYY-MM-DD``."""
    return (today or date.today()).isoformat()


def generate_id() -> str:
    return uuid.uuid4().hex[:12]
