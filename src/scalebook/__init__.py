"""scalebook — personal weight tracking with local JSON storage."""

__version__ = "0.1.0"
