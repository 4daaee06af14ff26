from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException

from tripplanner.features.itinerary.app.checks import ItineraryReport, check_itinerary
from tripplanner.features.itinerary.app.use_cases import GenerationResult, generate_itinerary
from tripplanner.features.rules.app.factory import get_rules_engine
from tripplanner.features.rules.domain.engine import RulesEngine
from tripplanner.features.rules.domain.models import InvalidTripDuration
from .schemas import CheckPayload, GeneratePayload

router = APIRouter(prefix="/itineraries", tags=["itineraries"])

@router.post("/check", response_model=ItineraryReport)
def check(payload: CheckPayload, engine: RulesEngine = Depends(get_rules_engine)):
    return check_itinerary(payload.itinerary, engine)

@router.post("/generate", response_model=GenerationResult)
async def generate(payload: GeneratePayload, engine: RulesEngine = Depends(get_rules_engine)):
    try:
        return await generate_itinerary(payload.trip, budget=payload.budget, engine=engine, model=payload.model)
    except InvalidTripDuration as e:
        raise HTTPException(status_code=400, detail=str(e))
