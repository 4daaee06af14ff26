from __future__ import annotations
import logging
from fastapi import APIRouter, Depends, HTTPException

from tripplanner.features.rules.app.factory import get_rules_engine
from tripplanner.features.rules.domain.engine import RulesEngine
from tripplanner.features.rules.domain.models import InvalidTripDuration, ValidationResult
from .schemas import (
    RulesConfigResponse,
    RulesContentPayload,
    RulesContentResponse,
    TimeProgressionPayload,
    TimeSlotPayload,
)

log = logging.getLogger("rules")

router = APIRouter(prefix="/rules", tags=["rules"])

@router.get("/config", response_model=RulesConfigResponse)
def read_config(engine: RulesEngine = Depends(get_rules_engine)):
    cfg = engine.get_config()
    data = cfg.model_dump(exclude={"allowed_cost_levels"})
    return RulesConfigResponse(allowed_cost_levels=cfg.cost_tokens(), **data)

@router.post("/content", response_model=RulesContentResponse)
def render_rules(payload: RulesContentPayload, engine: RulesEngine = Depends(get_rules_engine)):
    try:
        content = engine.generate_rules_content(payload.trip_duration, payload.budget)
    except InvalidTripDuration as e:
        log.info("rejected rules request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    level = engine.parse_budget_level(payload.budget)
    return RulesContentResponse(
        trip_duration=int(payload.trip_duration),
        budget_level=level.token if level else None,
        content=content,
    )

@router.post("/time-progression", response_model=ValidationResult)
def check_time_progression(payload: TimeProgressionPayload, engine: RulesEngine = Depends(get_rules_engine)):
    return engine.validate_time_progression(payload.activities)

@router.post("/time-slot")
def classify_time(payload: TimeSlotPayload, engine: RulesEngine = Depends(get_rules_engine)):
    slot = engine.get_time_slot(payload.time)
    return {"time": payload.time, "slot": slot.value if slot else None}
