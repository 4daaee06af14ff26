"""
Value types for the content generation rules.

- CostLevel:        closed set of price bands, each with a canonical token ($ .. $$$$).
- TimeSlot:         named windows of the day used to classify activity start times.
- RulesConfig:      business limits an engine instance is built with.
- ActivityTiming:   start time + duration pair consumed by the progression check.
- ValidationResult: outcome of every validator (violations block, warnings advise).
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "CostLevel",
    "TimeSlot",
    "TIME_SLOT_WINDOWS",
    "RulesConfig",
    "ActivityTiming",
    "ValidationResult",
    "InvalidTripDuration",
    "cost_token",
    "format_number",
]

MIN_TRIP_DAYS = 1
MAX_TRIP_DAYS = 365


class CostLevel(Enum):
    BUDGET = "budget"
    MODERATE = "moderate"
    EXPENSIVE = "expensive"
    LUXURY = "luxury"

    @property
    def token(self) -> str:
        return cost_token(self)

    @classmethod
    def from_token(cls, token: str) -> Optional["CostLevel"]:
        """Exact (case- and whitespace-sensitive) lookup of a canonical token."""
        return _LEVELS_BY_TOKEN.get(token)


_COST_TOKENS: Dict[CostLevel, str] = {
    CostLevel.BUDGET: "$",
    CostLevel.MODERATE: "$$",
    CostLevel.EXPENSIVE: "$$$",
    CostLevel.LUXURY: "$$$$",
}
_LEVELS_BY_TOKEN: Dict[str, CostLevel] = {tok: lvl for lvl, tok in _COST_TOKENS.items()}


def cost_token(level: CostLevel) -> str:
    return _COST_TOKENS[level]


class TimeSlot(Enum):
    EARLY_MORNING = "early_morning"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


# Half-open [start, end) windows in minutes since midnight; NIGHT wraps past 24:00.
TIME_SLOT_WINDOWS: Dict[TimeSlot, Tuple[Tuple[int, int], ...]] = {
    TimeSlot.EARLY_MORNING: ((300, 480),),
    TimeSlot.MORNING: ((480, 720),),
    TimeSlot.AFTERNOON: ((720, 1020),),
    TimeSlot.EVENING: ((1020, 1260),),
    TimeSlot.NIGHT: ((1260, 1440), (0, 300)),
}


class RulesConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    min_activities_per_day: int = 3
    max_activities_per_day: int = 5
    min_activity_duration_minutes: int = 15
    max_activity_duration_minutes: int = 480
    allowed_cost_levels: List[CostLevel] = Field(default_factory=lambda: list(CostLevel))
    # Carried for compatibility with stored configs; no validator reads it yet.
    strict_time_validation: bool = True

    @field_validator("allowed_cost_levels", mode="before")
    @classmethod
    def accept_cost_tokens(cls, v):
        # "$$" and "moderate" both resolve to CostLevel.MODERATE
        if isinstance(v, (list, tuple)):
            return [(CostLevel.from_token(x) or x) if isinstance(x, str) else x for x in v]
        return v

    def cost_tokens(self) -> List[str]:
        return [cost_token(lvl) for lvl in self.allowed_cost_levels]


class ActivityTiming(BaseModel):
    time: str
    duration_minutes: int


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    violations: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    @classmethod
    def from_findings(cls, violations: Iterable[str], warnings: Iterable[str] = ()) -> "ValidationResult":
        v = tuple(violations)
        return cls(is_valid=not v, violations=v, warnings=tuple(warnings))

    @classmethod
    def combine(cls, *results: "ValidationResult") -> "ValidationResult":
        violations: List[str] = []
        warnings: List[str] = []
        for r in results:
            violations.extend(r.violations)
            warnings.extend(r.warnings)
        return cls.from_findings(violations, warnings)


def format_number(value) -> str:
    """Render a number the way it is echoed back to users (7.0 -> 7, nan -> NaN)."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


class InvalidTripDuration(ValueError):
    def __init__(self, duration) -> None:
        self.duration = duration
        super().__init__(
            f"Invalid trip duration: {format_number(duration)}. "
            f"Must be between {MIN_TRIP_DAYS} and {MAX_TRIP_DAYS} days."
        )
