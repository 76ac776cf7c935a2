"""
Scalebook exception hierarchy.

All scalebook exceptions inherit from ScalebookError, so the CLI can catch
library-level errors in one place while still distinguishing failure modes.
"""


class ScalebookError(Exception):
    """Base exception class for all scalebook errors."""


class ConfigurationError(ScalebookError):
    """Raised for configuration errors (missing keys, invalid values)."""


class ValidationError(ScalebookError, ValueError):
    """Raised when user input fails validation, before any data is written."""


class DataSaveError(ScalebookError):
    """Raised when the weight document cannot be written to storage."""


class InvalidDataError(ScalebookError):
    """Raised when imported data is not a valid weight document."""


class RecordNotFoundError(ScalebookError, KeyError):
    """Raised when a weight record id does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep messages readable
        return str(self.args[0]) if self.args else ""
