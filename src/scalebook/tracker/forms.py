"""Typed user input, validated before anything is written.

Each form is a pydantic model.  ``Form.parse(**raw)`` converts pydantic's
errors into :class:`~scalebook.core.exceptions.ValidationError` so callers
only deal with one exception type.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from scalebook.core.exceptions import ValidationError

from .models import Theme

MAX_WEIGHT_KG = 300


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _format_errors(err: PydanticValidationError) -> str:
    parts = []
    for item in err.errors():
        loc = ".".join(str(p) for p in item["loc"]) or "input"
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)


class _Form(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    @classmethod
    def parse(cls, **data: Any) -> Self:
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(_format_errors(e)) from e


class WeightRecordForm(_Form):
    """A weigh-in as entered by the user.  BMI is never part of the input."""

    weight: float = Field(gt=0, le=MAX_WEIGHT_KG)
    date: dt.date = Field(default_factory=dt.date.today)
    body_fat_percentage: float | None = Field(default=None, ge=0, le=100)
    muscle_mass: float | None = Field(default=None, gt=0, le=MAX_WEIGHT_KG)

    @field_validator("weight", "body_fat_percentage", "muscle_mass", "date", mode="before")
    @classmethod
    def _blank(cls, v: Any) -> Any:
        return _blank_to_none(v)


class WeightGoalForm(_Form):
    """A new target.  ``start_weight`` defaults to the latest recorded weight."""

    target_weight: float = Field(gt=0, le=MAX_WEIGHT_KG)
    start_weight: float | None = Field(default=None, gt=0, le=MAX_WEIGHT_KG)

    @field_validator("target_weight", "start_weight", mode="before")
    @classmethod
    def _blank(cls, v: Any) -> Any:
        return _blank_to_none(v)


class SettingsForm(_Form):
    """Partial settings update; unset fields are left alone."""

    height: float | None = Field(default=None, ge=50, le=300)
    theme: Theme | None = None
    notifications: bool | None = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
