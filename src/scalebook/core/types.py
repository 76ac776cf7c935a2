"""Shared type aliases used across scalebook."""

from pathlib import Path
from typing import Any

# Config value types
ConfigDict = dict[str, Any]

# Path types
PathLike = str | Path

# Raw JSON object as read from / written to storage
JSONDict = dict[str, Any]
