from pydantic import BaseModel
from typing import List, Optional, Union

from tripplanner.features.rules.domain.models import ActivityTiming

class RulesContentPayload(BaseModel):
    trip_duration: Union[int, float]
    budget: Optional[str] = None

class RulesContentResponse(BaseModel):
    trip_duration: int
    budget_level: Optional[str] = None
    content: str

class TimeProgressionPayload(BaseModel):
    activities: List[ActivityTiming]

class TimeSlotPayload(BaseModel):
    time: str

class RulesConfigResponse(BaseModel):
    min_activities_per_day: int
    max_activities_per_day: int
    min_activity_duration_minutes: int
    max_activity_duration_minutes: int
    allowed_cost_levels: List[str]
    strict_time_validation: bool
