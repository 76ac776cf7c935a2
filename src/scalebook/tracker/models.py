"""
Weight tracking data models.

Plain dataclasses for records, goals, settings and the persisted document,
plus the (de)serializers for the JSON shape kept in storage. The JSON uses
camelCase keys so documents exported by earlier browser builds import
unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Any

from scalebook.core.exceptions import InvalidDataError
from scalebook.core.types import JSONDict

SCHEMA_VERSION = "1.0.0"


class TimePeriod(StrEnum):
    """Look-back windows for statistics and charts."""

    WEEK = "week"
    MONTH = "month"
    HALF_YEAR = "halfYear"
    YEAR = "year"

    @property
    def label(self) -> str:
        return _PERIOD_LABELS[self]


_PERIOD_LABELS = {
    TimePeriod.WEEK: "Last 7 days",
    TimePeriod.MONTH: "Last month",
    TimePeriod.HALF_YEAR: "Last 6 months",
    TimePeriod.YEAR: "Last year",
}


class Trend(StrEnum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"


# ── timestamp helpers ────────────────────────────────────────────────


def utcnow() -> datetime:
    return datetime.now(UTC)


def format_timestamp(dt: datetime) -> str:
    """ISO 8601 with millisecond precision and a ``Z`` suffix for UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def parse_day(value: str | date) -> date:
    """Parse ``YYYY-MM-DD``; full timestamps are truncated to their date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) > 10 and text[10] in "T ":
        return parse_timestamp(text).date()
    return date.fromisoformat(text)


def _require_object(value: Any, name: str) -> JSONDict:
    if not isinstance(value, dict):
        raise InvalidDataError(f"Malformed weight data: {name} must be an object, got {type(value).__name__}")
    return value


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


# ── records ──────────────────────────────────────────────────────────


@dataclass
class WeightRecord:
    """A single weigh-in.

    ``bmi`` is derived from ``weight`` and the height setting whenever the
    record is written; callers never supply it directly.
    """

    id: str
    date: date
    weight: float
    bmi: float
    created_at: datetime
    updated_at: datetime
    body_fat_percentage: float | None = None
    muscle_mass: float | None = None

    def to_dict(self) -> JSONDict:
        data: JSONDict = {
            "id": self.id,
            "date": self.date.isoformat(),
            "weight": self.weight,
        }
        if self.body_fat_percentage is not None:
            data["bodyFatPercentage"] = self.body_fat_percentage
        if self.muscle_mass is not None:
            data["muscleMass"] = self.muscle_mass
        data["bmi"] = self.bmi
        data["createdAt"] = format_timestamp(self.created_at)
        data["updatedAt"] = format_timestamp(self.updated_at)
        return data

    @classmethod
    def from_dict(cls, data: JSONDict) -> WeightRecord:
        created = parse_timestamp(data["createdAt"]) if data.get("createdAt") else utcnow()
        return cls(
            id=str(data["id"]),
            date=parse_day(data["date"]),
            weight=float(data["weight"]),
            bmi=float(data.get("bmi", 0)),
            created_at=created,
            updated_at=parse_timestamp(data["updatedAt"]) if data.get("updatedAt") else created,
            body_fat_percentage=_optional_float(data.get("bodyFatPercentage")),
            muscle_mass=_optional_float(data.get("muscleMass")),
        )


@dataclass
class WeightGoal:
    """The single active weight target.

    ``start_weight`` is a snapshot taken when the goal is created.  It is
    serialized as ``currentWeight`` to stay compatible with existing exports.
    """

    id: str
    target_weight: float
    start_weight: float
    start_date: date
    created_at: datetime
    updated_at: datetime
    is_achieved: bool = False
    achieved_at: datetime | None = None

    @property
    def is_loss_goal(self) -> bool:
        return self.target_weight <= self.start_weight

    def to_dict(self) -> JSONDict:
        data: JSONDict = {
            "id": self.id,
            "targetWeight": self.target_weight,
            "currentWeight": self.start_weight,
            "startDate": self.start_date.isoformat(),
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
            "isAchieved": self.is_achieved,
        }
        if self.achieved_at is not None:
            data["achievedAt"] = format_timestamp(self.achieved_at)
        return data

    @classmethod
    def from_dict(cls, data: JSONDict) -> WeightGoal:
        created = parse_timestamp(data["createdAt"]) if data.get("createdAt") else utcnow()
        return cls(
            id=str(data["id"]),
            target_weight=float(data["targetWeight"]),
            start_weight=float(data["currentWeight"]),
            start_date=parse_day(data.get("startDate") or created.date()),
            created_at=created,
            updated_at=parse_timestamp(data["updatedAt"]) if data.get("updatedAt") else created,
            is_achieved=bool(data.get("isAchieved", False)),
            achieved_at=parse_timestamp(data["achievedAt"]) if data.get("achievedAt") else None,
        )


@dataclass
class Settings:
    """User preferences. ``height`` (cm) is only used for BMI."""

    height: float = 170.0
    theme: Theme = Theme.LIGHT
    notifications: bool = False

    def to_dict(self) -> JSONDict:
        return {
            "theme": self.theme.value,
            "notifications": self.notifications,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: JSONDict) -> Settings:
        defaults = cls()
        return cls(
            height=float(data.get("height", defaults.height)),
            theme=Theme(data.get("theme", defaults.theme)),
            notifications=bool(data.get("notifications", defaults.notifications)),
        )


@dataclass
class WeightDocument:
    """Everything the application persists, stored as one JSON object."""

    records: list[WeightRecord] = field(default_factory=list)
    goal: WeightGoal | None = None
    settings: Settings = field(default_factory=Settings)
    version: str = SCHEMA_VERSION

    @classmethod
    def default(cls, height: float | None = None) -> WeightDocument:
        settings = Settings() if height is None else Settings(height=height)
        return cls(settings=settings)

    def find_record(self, record_id: str) -> WeightRecord | None:
        return next((r for r in self.records if r.id == record_id), None)

    def to_dict(self) -> JSONDict:
        return {
            "weightRecords": [r.to_dict() for r in self.records],
            "weightGoal": self.goal.to_dict() if self.goal else None,
            "settings": self.settings.to_dict(),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Any) -> WeightDocument:
        """Build a document from parsed JSON.

        Raises:
            InvalidDataError: If the payload does not have the document shape.
        """
        if not isinstance(data, dict):
            raise InvalidDataError("Weight data must be a JSON object")

        raw_records = data.get("weightRecords") or []
        if not isinstance(raw_records, list):
            raise InvalidDataError("Malformed weight data: weightRecords must be a list")
        goal_data = data.get("weightGoal")
        settings_data = data.get("settings") or {}
        _require_object(goal_data or {}, "weightGoal")
        _require_object(settings_data, "settings")

        try:
            records = [WeightRecord.from_dict(_require_object(r, "weight record")) for r in raw_records]
            goal = WeightGoal.from_dict(goal_data) if goal_data else None
            settings = Settings.from_dict(settings_data)
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidDataError(f"Malformed weight data: {e}") from e
        return cls(records=records, goal=goal, settings=settings, version=str(data.get("version", "")))


# ── derived views ────────────────────────────────────────────────────


@dataclass
class WeightStats:
    """Summary statistics for one look-back period."""

    period: TimePeriod
    average_weight: float
    weight_change: float
    weight_change_percentage: float
    max_weight: float
    min_weight: float
    total_records: int
    start_date: date
    end_date: date


@dataclass
class ChartPoint:
    """One plotted sample."""

    date: date
    weight: float
    bmi: float
    body_fat_percentage: float | None = None
    muscle_mass: float | None = None
