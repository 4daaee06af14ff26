from __future__ import annotations

from functools import lru_cache

from tripplanner.shared.config.settings import Settings, settings
from tripplanner.features.rules.domain.engine import RulesEngine
from tripplanner.features.rules.domain.models import RulesConfig


def rules_config_from_settings(s: Settings) -> RulesConfig:
    return RulesConfig(
        min_activities_per_day=s.RULES_MIN_ACTIVITIES_PER_DAY,
        max_activities_per_day=s.RULES_MAX_ACTIVITIES_PER_DAY,
        min_activity_duration_minutes=s.RULES_MIN_ACTIVITY_DURATION_MINUTES,
        max_activity_duration_minutes=s.RULES_MAX_ACTIVITY_DURATION_MINUTES,
        allowed_cost_levels=s.allowed_cost_tokens(),
        strict_time_validation=s.RULES_STRICT_TIME_VALIDATION,
    )


@lru_cache(maxsize=1)
def get_rules_engine() -> RulesEngine:
    """Process-wide engine built from settings. Used as a FastAPI dependency."""
    return RulesEngine(rules_config_from_settings(settings))
