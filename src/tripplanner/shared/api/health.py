from __future__ import annotations
import time
from fastapi import APIRouter, Depends

from tripplanner.features.rules.app.factory import get_rules_engine
from tripplanner.features.rules.domain.engine import RulesEngine

router = APIRouter(tags=["health"])

@router.get("/health")
def health(engine: RulesEngine = Depends(get_rules_engine)):
    rules = engine.validate_config()
    return {"ok": True, "ts": time.time(), "rules_config_valid": rules.is_valid, "rules_config_issues": rules.violations}
