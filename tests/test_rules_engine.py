import math

import pytest
from pydantic import ValidationError

from tripplanner.features.rules.domain.engine import RulesEngine, is_valid_trip_duration, parse_budget_level
from tripplanner.features.rules.domain.models import CostLevel, RulesConfig, cost_token


@pytest.fixture
def engine():
    return RulesEngine()


# ---------- configuration ----------

def test_default_config(engine):
    cfg = engine.get_config()
    assert cfg.min_activities_per_day == 3
    assert cfg.max_activities_per_day == 5
    assert cfg.min_activity_duration_minutes == 15
    assert cfg.max_activity_duration_minutes == 480
    assert cfg.allowed_cost_levels == [CostLevel.BUDGET, CostLevel.MODERATE, CostLevel.EXPENSIVE, CostLevel.LUXURY]
    assert cfg.strict_time_validation is True


def test_partial_config_keeps_defaults():
    cfg = RulesEngine(min_activities_per_day=2).get_config()
    assert cfg.min_activities_per_day == 2
    assert cfg.max_activities_per_day == 5
    assert cfg.max_activity_duration_minutes == 480


def test_config_from_mapping_and_model():
    from_map = RulesEngine({"max_activities_per_day": 7}).get_config()
    from_model = RulesEngine(RulesConfig(max_activities_per_day=7)).get_config()
    assert from_map == from_model
    assert from_map.max_activities_per_day == 7


def test_keyword_overrides_win_over_config():
    cfg = RulesEngine({"min_activities_per_day": 1}, min_activities_per_day=4).get_config()
    assert cfg.min_activities_per_day == 4


@pytest.mark.parametrize("config", [{"min_activity_per_day": 1}, {"minActivitiesPerDay": 1}])
def test_unknown_config_keys_are_rejected(config):
    with pytest.raises(ValidationError):
        RulesEngine(config)
    with pytest.raises(ValidationError):
        RulesEngine(**config)


def test_cost_levels_accept_tokens():
    cfg = RulesEngine(allowed_cost_levels=["$", "$$"]).get_config()
    assert cfg.allowed_cost_levels == [CostLevel.BUDGET, CostLevel.MODERATE]


def test_get_config_returns_independent_copies(engine):
    first = engine.get_config()
    second = engine.get_config()
    assert first == second
    assert first is not second

    first.min_activities_per_day = 99
    first.allowed_cost_levels.clear()

    assert second.min_activities_per_day == 3
    assert engine.get_config().min_activities_per_day == 3
    assert len(engine.get_config().allowed_cost_levels) == 4


def test_engine_does_not_share_caller_config():
    cfg = RulesConfig()
    eng = RulesEngine(cfg)
    cfg.allowed_cost_levels.pop()
    assert len(eng.get_config().allowed_cost_levels) == 4


def test_inconsistent_config_is_accepted_silently():
    eng = RulesEngine(min_activities_per_day=6, max_activities_per_day=2)
    assert eng.get_config().min_activities_per_day == 6
    # both checks fire independently when the limits are inverted
    result = eng.validate_activity_count(4)
    assert result.violations == (
        "Too few activities: 4. Minimum is 6",
        "Too many activities: 4. Maximum is 2",
    )


def test_validate_config_defaults_clean(engine):
    result = engine.validate_config()
    assert result.is_valid
    assert result.violations == ()


def test_validate_config_reports_problems():
    eng = RulesEngine(
        min_activities_per_day=6,
        max_activities_per_day=2,
        min_activity_duration_minutes=500,
        allowed_cost_levels=[],
    )
    result = eng.validate_config()
    assert not result.is_valid
    assert len(result.violations) == 3
    assert any("min_activities_per_day (6)" in v for v in result.violations)
    assert any("min_activity_duration_minutes (500)" in v for v in result.violations)
    assert "allowed_cost_levels must not be empty" in result.violations


def test_validate_config_warns_on_duplicate_levels():
    result = RulesEngine(allowed_cost_levels=["$", "$"]).validate_config()
    assert result.is_valid
    assert result.warnings == ("allowed_cost_levels contains duplicates",)


def test_results_are_immutable(engine):
    result = engine.validate_activity_count(2)
    with pytest.raises(AttributeError):
        result.violations.append("extra")
    with pytest.raises(ValidationError):
        result.is_valid = True
    assert result.violations == ("Too few activities: 2. Minimum is 3",)


# ---------- cost levels ----------

@pytest.mark.parametrize(
    "level,token",
    [
        (CostLevel.BUDGET, "$"),
        (CostLevel.MODERATE, "$$"),
        (CostLevel.EXPENSIVE, "$$$"),
        (CostLevel.LUXURY, "$$$$"),
    ],
)
def test_cost_token_mapping(level, token):
    assert cost_token(level) == token
    assert level.token == token
    assert CostLevel.from_token(token) is level


def test_cost_level_order_is_fixed():
    assert [lvl.token for lvl in CostLevel] == ["$", "$$", "$$$", "$$$$"]


def test_unknown_token_has_no_level():
    assert CostLevel.from_token("$$$$$") is None
    assert CostLevel.from_token(" $") is None


# ---------- trip duration ----------

@pytest.mark.parametrize("days", [1, 2, 7, 30, 180, 364, 365, 7.0])
def test_valid_trip_durations(days):
    assert is_valid_trip_duration(days)


@pytest.mark.parametrize(
    "days",
    [0, -1, 366, 1000, 0.5, 7.5, math.nan, math.inf, -math.inf, True, "7", None],
)
def test_invalid_trip_durations(days):
    assert not is_valid_trip_duration(days)


def test_engine_delegates_trip_duration_check(engine):
    assert engine.is_valid_trip_duration(365)
    assert not engine.is_valid_trip_duration(366)


# ---------- budget parsing ----------

@pytest.mark.parametrize(
    "raw,expected",
    [
        ("budget", CostLevel.BUDGET),
        ("BuDgEt", CostLevel.BUDGET),
        ("  budget  ", CostLevel.BUDGET),
        ("\tlow\n", CostLevel.BUDGET),
        ("cheap", CostLevel.BUDGET),
        ("moderate", CostLevel.MODERATE),
        ("medium", CostLevel.MODERATE),
        ("MID", CostLevel.MODERATE),
        ("expensive", CostLevel.EXPENSIVE),
        ("high", CostLevel.EXPENSIVE),
        ("luxury", CostLevel.LUXURY),
        ("Premium", CostLevel.LUXURY),
        ("deluxe", CostLevel.LUXURY),
    ],
)
def test_parse_budget_synonyms(raw, expected):
    assert parse_budget_level(raw) is expected


@pytest.mark.parametrize("raw", [None, "", "   ", "lux", "budgets", "cheap-ish", "123", "$$", "very high"])
def test_parse_budget_rejects_everything_else(raw):
    assert parse_budget_level(raw) is None


# ---------- activity count ----------

def test_activity_count_in_range(engine):
    for n in (4, 5):
        result = engine.validate_activity_count(n)
        assert result.is_valid
        assert result.violations == ()
        assert result.warnings == ()


def test_activity_count_at_minimum_warns(engine):
    result = engine.validate_activity_count(3)
    assert result.is_valid
    assert result.warnings == ("Consider adding more activities for better experience",)


@pytest.mark.parametrize(
    "count,message",
    [
        (2, "Too few activities: 2. Minimum is 3"),
        (0, "Too few activities: 0. Minimum is 3"),
        (-1, "Too few activities: -1. Minimum is 3"),
        (6, "Too many activities: 6. Maximum is 5"),
    ],
)
def test_activity_count_violations(engine, count, message):
    result = engine.validate_activity_count(count)
    assert not result.is_valid
    assert result.violations == (message,)


# ---------- activity duration ----------

@pytest.mark.parametrize("minutes", [15, 60, 240, 480])
def test_duration_within_limits(engine, minutes):
    assert engine.validate_activity_duration(minutes).is_valid


def test_duration_exactly_four_hours_has_no_warning(engine):
    assert engine.validate_activity_duration(240).warnings == ()


def test_duration_too_short(engine):
    result = engine.validate_activity_duration(10)
    assert not result.is_valid
    assert result.violations == ("Duration too short: 10min. Minimum is 15min",)


def test_duration_zero(engine):
    assert engine.validate_activity_duration(0).violations == ("Duration too short: 0min. Minimum is 15min",)


def test_long_duration_warns_but_passes(engine):
    result = engine.validate_activity_duration(300)
    assert result.is_valid
    assert result.warnings == ("Consider splitting long activities into multiple parts",)


def test_too_long_duration_has_violation_and_warning(engine):
    result = engine.validate_activity_duration(500)
    assert not result.is_valid
    assert result.violations == ("Duration too long: 500min. Maximum is 480min",)
    assert result.warnings == ("Consider splitting long activities into multiple parts",)


# ---------- cost estimate ----------

@pytest.mark.parametrize("token", ["$", "$$", "$$$", "$$$$"])
def test_cost_estimate_accepts_tokens(engine, token):
    assert engine.validate_cost_estimate(token).is_valid


@pytest.mark.parametrize("token", ["", "$$$$$", "moderate", " $", "€"])
def test_cost_estimate_rejects_other_strings(engine, token):
    result = engine.validate_cost_estimate(token)
    assert not result.is_valid
    assert result.violations == (f'Invalid cost estimate: "{token}". Must be one of: $, $$, $$$, $$$$',)


def test_cost_estimate_honours_configured_levels():
    eng = RulesEngine(allowed_cost_levels=[CostLevel.BUDGET, CostLevel.MODERATE])
    assert eng.validate_cost_estimate("$$").is_valid
    result = eng.validate_cost_estimate("$$$")
    assert result.violations == ('Invalid cost estimate: "$$$". Must be one of: $, $$',)


# ---------- total activities ----------

@pytest.mark.parametrize("days,expected", [(1, "3-5"), (7, "21-35"), (30, "90-150"), (365, "1095-1825")])
def test_total_activities(engine, days, expected):
    assert engine.calculate_total_activities(days) == expected


def test_total_activities_is_not_range_checked(engine):
    assert engine.calculate_total_activities(1000) == "3000-5000"
    assert engine.calculate_total_activities(0) == "0-0"


def test_total_activities_uses_config():
    eng = RulesEngine(min_activities_per_day=2, max_activities_per_day=4)
    assert eng.calculate_total_activities(10) == "20-40"
