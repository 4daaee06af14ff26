"""
Shapes of the itinerary JSON document the model is asked to return, plus the
trip facts used to request it.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

__all__ = [
    "ItineraryActivity",
    "DayDetail",
    "TripRecommendations",
    "GeneratedItinerary",
    "TripContext",
    "calculate_duration_days",
]


class ItineraryActivity(BaseModel):
    time: str
    title: str
    description: str
    location: str
    duration_minutes: int
    cost_estimate: str
    tips: str


class DayDetail(BaseModel):
    day_number: int
    date: str
    title: str
    activities: List[ItineraryActivity]


class TripRecommendations(BaseModel):
    transportation: str
    accommodation: str
    budget: str
    best_time: str


class GeneratedItinerary(BaseModel):
    summary: str
    days: List[DayDetail] = Field(min_length=1)
    recommendations: TripRecommendations


def calculate_duration_days(start_date: date, end_date: date) -> int:
    """Inclusive day count; the order of the two dates does not matter."""
    return abs((end_date - start_date).days) + 1


class TripContext(BaseModel):
    destination: str = Field(min_length=1, max_length=200)
    start_date: date
    end_date: date
    description: Optional[str] = Field(default=None, max_length=2000)

    @property
    def duration_days(self) -> int:
        return calculate_duration_days(self.start_date, self.end_date)
