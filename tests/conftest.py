"""Shared test fixtures for scalebook."""

import os
import tempfile
from datetime import UTC, date, datetime

import pytest

from scalebook.core.storage import MemoryStorage
from scalebook.tracker import WeightRecord, WeightStore, WeightTracker
from scalebook.tracker.calculations import calculate_bmi


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {"data_dir": os.path.join(tmp_dir, "data")},
        "storage": {"key": "test-weights"},
        "defaults": {"height": 180},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def backend():
    return MemoryStorage()


@pytest.fixture
def store(backend):
    return WeightStore(backend)


@pytest.fixture
def tracker(store):
    return WeightTracker(store)


@pytest.fixture
def make_record():
    """Factory for WeightRecords with BMI derived at 170 cm."""

    def _make(record_id: str, day: date, weight: float, **kwargs) -> WeightRecord:
        stamp = datetime(2025, 1, 1, 10, 0, tzinfo=UTC)
        return WeightRecord(
            id=record_id,
            date=day,
            weight=weight,
            bmi=calculate_bmi(weight, 170),
            created_at=kwargs.pop("created_at", stamp),
            updated_at=kwargs.pop("updated_at", stamp),
            **kwargs,
        )

    return _make
