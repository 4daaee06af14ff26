"""
Content generation rules for itinerary prompts.

The engine renders a deterministic rules document that is pasted verbatim into the
itinerary prompt, and exposes the validators used to spot-check what the model sends
back. Every operation is pure given the engine's configuration.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from .models import (
    MAX_TRIP_DAYS,
    MIN_TRIP_DAYS,
    TIME_SLOT_WINDOWS,
    CostLevel,
    InvalidTripDuration,
    RulesConfig,
    TimeSlot,
    ValidationResult,
    cost_token,
    format_number,
)

log = logging.getLogger("rules")

__all__ = [
    "RulesEngine",
    "is_valid_trip_duration",
    "parse_budget_level",
    "parse_time",
    "get_time_slot",
    "budget_guidance",
    "RULES_HEADER",
    "ACTIVITY_TYPE_BALANCE",
    "LONG_ACTIVITY_WARNING_MINUTES",
]

RULES_HEADER = "=== CONTENT GENERATION RULES ==="
ACTIVITY_TYPE_BALANCE = "40% cultural, 30% food/dining, 20% outdoor, 10% relaxation"
LONG_ACTIVITY_WARNING_MINUTES = 240
MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"([0-9]{1,2}):([0-9]{2})")

_BUDGET_SYNONYMS = {
    "budget": CostLevel.BUDGET,
    "low": CostLevel.BUDGET,
    "cheap": CostLevel.BUDGET,
    "moderate": CostLevel.MODERATE,
    "medium": CostLevel.MODERATE,
    "mid": CostLevel.MODERATE,
    "expensive": CostLevel.EXPENSIVE,
    "high": CostLevel.EXPENSIVE,
    "luxury": CostLevel.LUXURY,
    "premium": CostLevel.LUXURY,
    "deluxe": CostLevel.LUXURY,
}

_BUDGET_GUIDANCE = {
    CostLevel.BUDGET: "Focus on free/cheap activities, local food, public transport",
    CostLevel.MODERATE: "Mix of paid attractions and free activities, local restaurants",
    CostLevel.EXPENSIVE: "Premium attractions, guided tours, nice restaurants",
    CostLevel.LUXURY: "Exclusive experiences, fine dining, private tours",
}

_PRICE_BANDS = (
    '"$" = Budget (<$20)',
    '"$$" = Moderate ($20-$50)',
    '"$$$" = Expensive ($50-$100)',
    '"$$$$" = Luxury (>$100)',
)

_TIME_SLOT_LINES = (
    "Early Morning (05:00-08:00): Exercise, sunrise activities",
    "Morning (08:00-12:00): Museums, tours, sightseeing",
    "Afternoon (12:00-17:00): Lunch, outdoor activities",
    "Evening (17:00-21:00): Dinner, entertainment",
    "Night (21:00-24:00): Bars, nightlife",
)


def _item(text: str) -> str:
    return f"   - {text}"


def is_valid_trip_duration(duration: Any) -> bool:
    """True for whole numbers of days in [1, 365]; floats count only when integral and finite."""
    if isinstance(duration, bool):
        return False
    if isinstance(duration, float):
        if not math.isfinite(duration) or not duration.is_integer():
            return False
    elif not isinstance(duration, int):
        return False
    return MIN_TRIP_DAYS <= duration <= MAX_TRIP_DAYS


def parse_budget_level(budget: Optional[str] = None) -> Optional[CostLevel]:
    """Map a free-form budget word (budget, mid, premium, ...) to a CostLevel."""
    if not budget:
        return None
    return _BUDGET_SYNONYMS.get(budget.strip().lower())


def budget_guidance(level: CostLevel) -> str:
    return _BUDGET_GUIDANCE[level]


def parse_time(time_string: Any) -> Optional[Tuple[int, int]]:
    """
    Split an ``H:MM`` / ``HH:MM`` string into (hours, minutes).
    Only the shape is checked here; callers decide whether 24:30 is acceptable.
    """
    if not isinstance(time_string, str):
        return None
    m = _TIME_RE.fullmatch(time_string)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2))


def get_time_slot(time_string: Any) -> Optional[TimeSlot]:
    parsed = parse_time(time_string)
    if parsed is None:
        return None
    hours, minutes = parsed
    if hours > 23 or minutes > 59:
        return None
    total = hours * 60 + minutes
    for slot, windows in TIME_SLOT_WINDOWS.items():
        if any(start <= total < end for start, end in windows):
            return slot
    return None


def _end_of_day_minutes(hours: int, minutes: int, duration: Any) -> Optional[int]:
    """
    Minute of day at which an activity ends, wrapping at midnight.
    None when no end time can be placed on the clock: a missing or fractional
    duration, or one negative enough to end before 00:00 of the same day.
    """
    if isinstance(duration, bool) or not isinstance(duration, (int, float)):
        return None
    if isinstance(duration, float) and not duration.is_integer():
        return None
    total = hours * 60 + minutes + int(duration)
    if total < 0:
        return None
    return (total // 60 % 24) * 60 + total % 60


def _timing_of(activity: Any) -> Tuple[Any, Any]:
    if isinstance(activity, Mapping):
        return activity.get("time"), activity.get("duration_minutes")
    return getattr(activity, "time", None), getattr(activity, "duration_minutes", None)


class RulesEngine:
    """
    Renders and enforces the itinerary content rules.

    The configuration is copied on construction and never changes afterwards.
    Inconsistent limits (e.g. a minimum above its maximum) are accepted as given;
    call ``validate_config()`` to inspect them.
    """

    def __init__(self, config: RulesConfig | Mapping[str, Any] | None = None, **overrides: Any) -> None:
        if isinstance(config, RulesConfig):
            base = config.model_dump()
        else:
            base = dict(config or {})
        base.update(overrides)
        self._config = RulesConfig(**base)

        check = self.validate_config()
        if not check.is_valid:
            log.warning("rules config is inconsistent: %s", "; ".join(check.violations))

    # ---------- configuration ----------

    def get_config(self) -> RulesConfig:
        return self._config.model_copy(deep=True)

    def validate_config(self) -> ValidationResult:
        c = self._config
        violations: List[str] = []
        warnings: List[str] = []

        if c.min_activities_per_day < 0:
            violations.append(f"min_activities_per_day must not be negative (got {c.min_activities_per_day})")
        if c.min_activities_per_day > c.max_activities_per_day:
            violations.append(
                f"min_activities_per_day ({c.min_activities_per_day}) is greater than "
                f"max_activities_per_day ({c.max_activities_per_day})"
            )
        if c.min_activity_duration_minutes < 0:
            violations.append(
                f"min_activity_duration_minutes must not be negative (got {c.min_activity_duration_minutes})"
            )
        if c.min_activity_duration_minutes > c.max_activity_duration_minutes:
            violations.append(
                f"min_activity_duration_minutes ({c.min_activity_duration_minutes}) is greater than "
                f"max_activity_duration_minutes ({c.max_activity_duration_minutes})"
            )
        if not c.allowed_cost_levels:
            violations.append("allowed_cost_levels must not be empty")
        elif len(set(c.allowed_cost_levels)) != len(c.allowed_cost_levels):
            warnings.append("allowed_cost_levels contains duplicates")

        return ValidationResult.from_findings(violations, warnings)

    # ---------- parsing helpers ----------

    def is_valid_trip_duration(self, duration: Any) -> bool:
        return is_valid_trip_duration(duration)

    def parse_budget_level(self, budget: Optional[str] = None) -> Optional[CostLevel]:
        return parse_budget_level(budget)

    def get_time_slot(self, time_string: Any) -> Optional[TimeSlot]:
        return get_time_slot(time_string)

    def calculate_total_activities(self, trip_duration: int) -> str:
        low = trip_duration * self._config.min_activities_per_day
        high = trip_duration * self._config.max_activities_per_day
        return f"{format_number(low)}-{format_number(high)}"

    # ---------- rules document ----------

    def generate_rules_content(self, trip_duration: Any, budget: Optional[str] = None) -> str:
        """
        Build the rules block for an itinerary prompt.

        Raises InvalidTripDuration unless ``trip_duration`` is a whole number in [1, 365].
        The output depends only on the config and the arguments.
        """
        if not is_valid_trip_duration(trip_duration):
            raise InvalidTripDuration(trip_duration)

        days = int(trip_duration)
        level = parse_budget_level(budget)
        c = self._config

        rules: List[str] = [RULES_HEADER + "\n"]

        rules.append("1. ACTIVITY REQUIREMENTS:")
        rules.append(_item(f"Each day MUST have {c.min_activities_per_day}-{c.max_activities_per_day} activities"))
        rules.append(
            _item(f"Activity duration: {c.min_activity_duration_minutes}-{c.max_activity_duration_minutes} minutes")
        )
        rules.append(_item("Activities must follow logical time progression"))
        rules.append(_item("No overlapping activity times") + "\n")

        rules.append("2. COST ESTIMATE RULES:")
        rules.append(_item(f"Use ONLY these cost levels: {', '.join(c.cost_tokens())}"))
        if level is not None:
            rules.append(_item(f"Preferred budget level: {cost_token(level)}"))
            rules.append(_item(budget_guidance(level)))
        rules.extend(_item(band) for band in _PRICE_BANDS)
        rules[-1] += "\n"

        rules.append("3. TIME SLOT RULES:")
        rules.extend(_item(line) for line in _TIME_SLOT_LINES)
        rules[-1] += "\n"

        rules.append("4. TRIP-SPECIFIC RULES:")
        rules.append(_item(f"Total duration: {days} days"))
        rules.append(_item(f"Total activities: {self.calculate_total_activities(days)}"))
        rules.append(_item(f"Balance activity types: {ACTIVITY_TYPE_BALANCE}"))

        content = "\n".join(rules)
        log.debug("rendered rules for %d days (budget=%s, %d chars)", days, level and level.token, len(content))
        return content

    # ---------- validators ----------

    def validate_activity_count(self, count: int) -> ValidationResult:
        c = self._config
        violations: List[str] = []
        warnings: List[str] = []

        if count < c.min_activities_per_day:
            violations.append(f"Too few activities: {format_number(count)}. Minimum is {c.min_activities_per_day}")
        if count > c.max_activities_per_day:
            violations.append(f"Too many activities: {format_number(count)}. Maximum is {c.max_activities_per_day}")
        if count == c.min_activities_per_day:
            warnings.append("Consider adding more activities for better experience")

        return ValidationResult.from_findings(violations, warnings)

    def validate_activity_duration(self, minutes: int) -> ValidationResult:
        c = self._config
        violations: List[str] = []
        warnings: List[str] = []

        if minutes < c.min_activity_duration_minutes:
            violations.append(
                f"Duration too short: {format_number(minutes)}min. "
                f"Minimum is {c.min_activity_duration_minutes}min"
            )
        if minutes > c.max_activity_duration_minutes:
            violations.append(
                f"Duration too long: {format_number(minutes)}min. "
                f"Maximum is {c.max_activity_duration_minutes}min"
            )
        # Advisory only, independent of the hard limits above.
        if minutes > LONG_ACTIVITY_WARNING_MINUTES:
            warnings.append("Consider splitting long activities into multiple parts")

        return ValidationResult.from_findings(violations, warnings)

    def validate_cost_estimate(self, token: str) -> ValidationResult:
        allowed = self._config.cost_tokens()
        violations: List[str] = []
        if token not in allowed:
            violations.append(f'Invalid cost estimate: "{token}". Must be one of: {", ".join(allowed)}')
        return ValidationResult.from_findings(violations)

    def validate_time_progression(self, activities: Iterable[Any]) -> ValidationResult:
        """
        Check adjacent activities, in the order given, for overlaps.

        Activities may be ActivityTiming models, mappings or any object exposing
        ``time`` and ``duration_minutes``. End times are computed modulo 24h and
        compared by minute of day only, so an activity running past midnight is
        never reported as overlapping the next one. Ending exactly when the next
        activity starts is allowed. A pair whose end time cannot be placed on the
        clock (missing duration, or one ending before midnight of the previous day)
        is not compared.
        """
        items = list(activities)
        violations: List[str] = []

        for current, nxt in zip(items, items[1:]):
            cur_time, cur_duration = _timing_of(current)
            next_time, _ = _timing_of(nxt)

            start = parse_time(cur_time)
            if start is None:
                violations.append(f"Invalid time format: {cur_time}")
                continue

            next_start = parse_time(next_time)
            if next_start is None:
                continue

            end = _end_of_day_minutes(start[0], start[1], cur_duration)
            if end is not None and end > next_start[0] * 60 + next_start[1]:
                violations.append(
                    f"Activity overlap detected: Activity at {cur_time} "
                    f"(duration: {format_number(cur_duration)}min) overlaps with activity at {next_time}"
                )

        return ValidationResult.from_findings(violations)
