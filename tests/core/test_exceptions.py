"""Tests for scalebook.core.exceptions."""

from scalebook.core.exceptions import (
    ConfigurationError,
    DataSaveError,
    InvalidDataError,
    RecordNotFoundError,
    ScalebookError,
    ValidationError,
)
from scalebook.core.storage import StorageError, StorageKeyError


def test_hierarchy():
    """All exceptions should inherit from ScalebookError."""
    for exc_cls in [
        ConfigurationError,
        ValidationError,
        DataSaveError,
        InvalidDataError,
        RecordNotFoundError,
        StorageError,
        StorageKeyError,
    ]:
        assert issubclass(exc_cls, ScalebookError)


def test_validation_error_is_value_error():
    assert issubclass(ValidationError, ValueError)


def test_not_found_errors_are_key_errors():
    assert issubclass(RecordNotFoundError, KeyError)
    assert issubclass(StorageKeyError, KeyError)


def test_key_error_messages_are_not_quoted():
    assert str(RecordNotFoundError("No weight record with id 'x'")) == "No weight record with id 'x'"
    assert str(StorageKeyError("Key not found: k")) == "Key not found: k"


def test_catch_base():
    """Catching ScalebookError should catch all subtypes."""
    try:
        raise DataSaveError("disk full")
    except ScalebookError as e:
        assert "disk full" in str(e)
