"""WeightTracker — user-level operations on top of a WeightStore.

Turns validated forms into persisted records and goals (ids, timestamps,
BMI), tracks goal achievement, and assembles the read-only views the
front end renders.  Every operation re-reads the document from the store
after writing, so what callers see is always what was persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from loguru import logger

from scalebook.core.exceptions import RecordNotFoundError, ValidationError

from .calculations import (
    calculate_bmi,
    calculate_goal_progress,
    calculate_remaining_weight,
    calculate_stats,
    calculate_weight_trend,
    filter_records_by_date_range,
    generate_id,
    get_bmi_category,
    is_goal_reached,
    sort_records,
)
from .forms import SettingsForm, WeightGoalForm, WeightRecordForm
from .models import Settings, TimePeriod, Trend, WeightDocument, WeightGoal, WeightRecord, WeightStats, utcnow
from .store import WeightStore


@dataclass
class GoalStatus:
    goal: WeightGoal
    progress: float
    remaining: float


@dataclass
class Dashboard:
    """Everything the overview screen shows."""

    latest: WeightRecord | None
    bmi_category: str | None
    goal: GoalStatus | None
    stats: WeightStats
    trend: Trend
    settings: Settings


class WeightTracker:
    """Record, goal and settings operations over an injected store."""

    def __init__(self, store: WeightStore):
        self.store = store

    @property
    def document(self) -> WeightDocument:
        return self.store.load()

    # ── records ──────────────────────────────────────────────────────

    def _build_record(self, record_id: str, form: WeightRecordForm, height: float, created_at=None) -> WeightRecord:
        now = utcnow()
        return WeightRecord(
            id=record_id,
            date=form.date,
            weight=form.weight,
            body_fat_percentage=form.body_fat_percentage,
            muscle_mass=form.muscle_mass,
            bmi=calculate_bmi(form.weight, height),
            created_at=created_at or now,
            updated_at=now,
        )

    def add_record(self, form: WeightRecordForm) -> WeightRecord:
        document = self.store.load()
        record = self._build_record(generate_id(), form, document.settings.height)
        self.store.save_record(record)
        logger.info(f"Recorded {record.weight} kg on {record.date.isoformat()}")
        self._check_goal_achievement()
        return record

    def update_record(self, record_id: str, form: WeightRecordForm) -> WeightRecord:
        """Rewrite an existing record, keeping its creation time.

        Raises:
            RecordNotFoundError: If no record has ``record_id``.
        """
        document = self.store.load()
        existing = document.find_record(record_id)
        if existing is None:
            raise RecordNotFoundError(f"No weight record with id '{record_id}'")
        record = self._build_record(record_id, form, document.settings.height, created_at=existing.created_at)
        self.store.save_record(record)
        self._check_goal_achievement()
        return record

    def remove_record(self, record_id: str) -> None:
        if not self.store.delete_record(record_id):
            raise RecordNotFoundError(f"No weight record with id '{record_id}'")
        logger.info(f"Deleted weight record {record_id}")

    def get_record(self, record_id: str) -> WeightRecord:
        record = self.store.load().find_record(record_id)
        if record is None:
            raise RecordNotFoundError(f"No weight record with id '{record_id}'")
        return record

    def latest_record(self) -> WeightRecord | None:
        records = self.store.load().records
        return records[0] if records else None

    def history(
        self,
        start: date | None = None,
        end: date | None = None,
        sort_by: str = "date",
        order: str = "desc",
    ) -> list[WeightRecord]:
        """Records in ``[start, end]`` sorted by ``date``, ``weight`` or ``bmi``."""
        if start and end and start > end:
            raise ValidationError(f"Start date {start.isoformat()} is after end date {end.isoformat()}")
        records = filter_records_by_date_range(self.store.load().records, start, end)
        try:
            return sort_records(records, by=sort_by, order=order)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    # ── goal ─────────────────────────────────────────────────────────

    def set_goal(self, form: WeightGoalForm) -> WeightGoal:
        """Start a new goal, replacing any existing one.

        Raises:
            ValidationError: If no starting weight is given and nothing is recorded yet.
        """
        start_weight = form.start_weight
        if start_weight is None:
            latest = self.latest_record()
            if latest is None:
                raise ValidationError("Enter a starting weight or record a weight first")
            start_weight = latest.weight

        now = utcnow()
        goal = WeightGoal(
            id=generate_id(),
            target_weight=form.target_weight,
            start_weight=start_weight,
            start_date=date.today(),
            created_at=now,
            updated_at=now,
        )
        self.store.save_goal(goal)
        logger.info(f"New goal: {goal.start_weight} kg -> {goal.target_weight} kg")
        return goal

    def remove_goal(self) -> None:
        self.store.delete_goal()

    def goal_status(self) -> GoalStatus | None:
        document = self.store.load()
        goal = document.goal
        if goal is None:
            return None
        current = document.records[0].weight if document.records else goal.start_weight
        return GoalStatus(
            goal=goal,
            progress=calculate_goal_progress(current, goal.target_weight, goal.start_weight),
            remaining=calculate_remaining_weight(current, goal.target_weight),
        )

    def _check_goal_achievement(self) -> None:
        document = self.store.load()
        goal = document.goal
        if goal is None or goal.is_achieved or not document.records:
            return
        if is_goal_reached(document.records[0].weight, goal):
            now = utcnow()
            goal.is_achieved = True
            goal.achieved_at = now
            goal.updated_at = now
            self.store.save_goal(goal)
            logger.info(f"Goal of {goal.target_weight} kg achieved")

    # ── settings ─────────────────────────────────────────────────────

    def update_settings(self, form: SettingsForm) -> Settings:
        return self.store.update_settings(**form.changes())

    # ── views ────────────────────────────────────────────────────────

    def stats(self, period: TimePeriod = TimePeriod.MONTH, today: date | None = None) -> WeightStats:
        return calculate_stats(self.store.load().records, period, today)

    def dashboard(self, period: TimePeriod = TimePeriod.MONTH, today: date | None = None) -> Dashboard:
        document = self.store.load()
        latest = document.records[0] if document.records else None
        return Dashboard(
            latest=latest,
            bmi_category=get_bmi_category(latest.bmi) if latest and latest.bmi > 0 else None,
            goal=self.goal_status(),
            stats=calculate_stats(document.records, period, today),
            trend=calculate_weight_trend(document.records),
            settings=document.settings,
        )
