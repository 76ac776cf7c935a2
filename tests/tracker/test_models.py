"""Tests for tracker.models — dataclasses and the JSON document shape."""

from datetime import UTC, date, datetime

import pytest

from scalebook.core.exceptions import InvalidDataError
from scalebook.tracker.models import (
    SCHEMA_VERSION,
    Settings,
    Theme,
    TimePeriod,
    WeightDocument,
    WeightGoal,
    WeightRecord,
    format_timestamp,
    parse_day,
    parse_timestamp,
)

RECORD_JSON = {
    "id": "test-1",
    "date": "2025-01-01",
    "weight": 70.5,
    "bodyFatPercentage": 15.8,
    "muscleMass": 58.2,
    "bmi": 24.4,
    "createdAt": "2025-01-01T10:00:00.000Z",
    "updatedAt": "2025-01-02T08:30:00.000Z",
}


class TestTimestamps:
    def test_format_uses_z_suffix(self):
        assert format_timestamp(datetime(2025, 1, 1, 10, 0, tzinfo=UTC)) == "2025-01-01T10:00:00.000Z"

    def test_naive_is_treated_as_utc(self):
        assert format_timestamp(datetime(2025, 1, 1, 10, 0)) == "2025-01-01T10:00:00.000Z"

    def test_parse_roundtrip(self):
        dt = parse_timestamp("2025-01-01T10:00:00.000Z")
        assert dt == datetime(2025, 1, 1, 10, 0, tzinfo=UTC)

    def test_parse_day(self):
        assert parse_day("2025-02-03") == date(2025, 2, 3)
        assert parse_day(date(2025, 2, 3)) == date(2025, 2, 3)
        assert parse_day(datetime(2025, 2, 3, 12, 0)) == date(2025, 2, 3)


class TestWeightRecord:
    def test_from_dict(self):
        rec = WeightRecord.from_dict(RECORD_JSON)
        assert rec.id == "test-1"
        assert rec.date == date(2025, 1, 1)
        assert rec.weight == 70.5
        assert rec.body_fat_percentage == 15.8
        assert rec.muscle_mass == 58.2
        assert rec.updated_at.day == 2

    def test_to_dict_matches_wire_shape(self):
        assert WeightRecord.from_dict(RECORD_JSON).to_dict() == RECORD_JSON

    def test_optional_fields_omitted(self):
        data = {k: v for k, v in RECORD_JSON.items() if k not in ("bodyFatPercentage", "muscleMass")}
        rec = WeightRecord.from_dict(data)
        assert rec.body_fat_percentage is None
        out = rec.to_dict()
        assert "bodyFatPercentage" not in out
        assert "muscleMass" not in out


class TestWeightGoal:
    def test_roundtrip_uses_current_weight_key(self):
        data = {
            "id": "g1",
            "targetWeight": 65.0,
            "currentWeight": 72.0,
            "startDate": "2025-01-01",
            "createdAt": "2025-01-01T00:00:00.000Z",
            "updatedAt": "2025-01-01T00:00:00.000Z",
            "isAchieved": False,
        }
        goal = WeightGoal.from_dict(data)
        assert goal.start_weight == 72.0
        assert goal.is_loss_goal
        assert goal.achieved_at is None
        assert goal.to_dict() == data

    def test_achieved_at_serialized(self):
        now = datetime(2025, 2, 1, tzinfo=UTC)
        goal = WeightGoal("g", 80, 75, date(2025, 1, 1), now, now, is_achieved=True, achieved_at=now)
        assert not goal.is_loss_goal
        assert goal.to_dict()["achievedAt"] == "2025-02-01T00:00:00.000Z"


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.height == 170.0
        assert s.theme == Theme.LIGHT
        assert s.notifications is False

    def test_partial_dict(self):
        s = Settings.from_dict({"height": 182})
        assert s.height == 182.0
        assert s.theme == Theme.LIGHT


class TestWeightDocument:
    def test_default(self):
        doc = WeightDocument.default()
        assert doc.records == []
        assert doc.goal is None
        assert doc.settings == Settings()
        assert doc.version == SCHEMA_VERSION

    def test_default_height(self):
        assert WeightDocument.default(height=160).settings.height == 160

    def test_to_dict_shape(self):
        data = WeightDocument.default().to_dict()
        assert data == {
            "weightRecords": [],
            "weightGoal": None,
            "settings": {"theme": "light", "notifications": False, "height": 170.0},
            "version": "1.0.0",
        }

    def test_from_dict(self):
        doc = WeightDocument.from_dict(
            {"weightRecords": [RECORD_JSON], "weightGoal": None, "settings": {"theme": "dark"}, "version": "1.0.0"}
        )
        assert len(doc.records) == 1
        assert doc.settings.theme == Theme.DARK
        assert doc.find_record("test-1") is doc.records[0]
        assert doc.find_record("missing") is None

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            "text",
            {"weightRecords": [{"id": "x"}]},
            {"weightRecords": [dict(RECORD_JSON, date="not-a-date")]},
            {"weightRecords": [], "settings": {"theme": "neon"}},
            {"weightRecords": [], "weightGoal": {"id": "g"}},
        ],
    )
    def test_malformed(self, payload):
        with pytest.raises(InvalidDataError):
            WeightDocument.from_dict(payload)


def test_period_labels():
    assert TimePeriod.HALF_YEAR.value == "halfYear"
    assert TimePeriod.WEEK.label == "Last 7 days"
