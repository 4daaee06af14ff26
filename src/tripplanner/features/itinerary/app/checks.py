from __future__ import annotations

from typing import List

from pydantic import BaseModel

from tripplanner.features.itinerary.domain.models import DayDetail, GeneratedItinerary, ItineraryActivity
from tripplanner.features.rules.domain.engine import RulesEngine
from tripplanner.features.rules.domain.models import ValidationResult


class DayReport(BaseModel):
    day_number: int
    result: ValidationResult


class ItineraryReport(BaseModel):
    is_valid: bool
    days: List[DayReport]

    @property
    def violation_count(self) -> int:
        return sum(len(d.result.violations) for d in self.days)


def _prefixed(activity: ItineraryActivity, result: ValidationResult) -> ValidationResult:
    prefix = f"{activity.time} {activity.title}: "
    return ValidationResult.from_findings(
        [prefix + v for v in result.violations],
        [prefix + w for w in result.warnings],
    )


def check_day(day: DayDetail, engine: RulesEngine) -> DayReport:
    """
    Run every rule that applies to a single day. Activities are checked in the
    order the model listed them.
    """
    results = [engine.validate_activity_count(len(day.activities))]
    for activity in day.activities:
        results.append(_prefixed(activity, engine.validate_activity_duration(activity.duration_minutes)))
        results.append(_prefixed(activity, engine.validate_cost_estimate(activity.cost_estimate)))
    results.append(engine.validate_time_progression(day.activities))
    return DayReport(day_number=day.day_number, result=ValidationResult.combine(*results))


def check_itinerary(itinerary: GeneratedItinerary, engine: RulesEngine) -> ItineraryReport:
    days = [check_day(day, engine) for day in itinerary.days]
    return ItineraryReport(is_valid=all(d.result.is_valid for d in days), days=days)
