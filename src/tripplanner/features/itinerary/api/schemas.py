from pydantic import BaseModel
from typing import Optional

from tripplanner.features.itinerary.domain.models import GeneratedItinerary, TripContext

class CheckPayload(BaseModel):
    itinerary: GeneratedItinerary

class GeneratePayload(BaseModel):
    trip: TripContext
    budget: Optional[str] = None
    model: Optional[str] = None
