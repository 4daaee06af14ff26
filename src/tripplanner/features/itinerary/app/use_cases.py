from __future__ import annotations

import json
import logging
import time
from typing import Any, Literal, Optional, Union

import httpx
from pydantic import BaseModel, ValidationError

from tripplanner.shared.config.settings import settings
from tripplanner.shared.llm.openai_client import complete_chat
from tripplanner.features.itinerary.app.checks import ItineraryReport, check_itinerary
from tripplanner.features.itinerary.domain.models import GeneratedItinerary, TripContext
from tripplanner.features.itinerary.domain.prompts import ITINERARY_SYSTEM_PROMPT, build_itinerary_prompt
from tripplanner.features.rules.app.factory import get_rules_engine
from tripplanner.features.rules.domain.engine import RulesEngine

log = logging.getLogger("itinerary")

ErrorCode = Literal["TIMEOUT", "RATE_LIMIT", "INVALID_MODEL", "API_ERROR", "INVALID_RESPONSE", "PARSING_ERROR"]


class GenerationSuccess(BaseModel):
    success: Literal[True] = True
    content: GeneratedItinerary
    report: ItineraryReport
    tokens_used: int
    cost_usd: float = 0.0
    generation_time_ms: int
    model: str


class GenerationError(BaseModel):
    success: Literal[False] = False
    error: str
    code: ErrorCode
    details: Optional[Any] = None


GenerationResult = Union[GenerationSuccess, GenerationError]


def _mk_msgs(system_text: str, user_text: str):
    return [
        {"role": "system", "content": system_text},
        {"role": "user", "content": user_text},
    ]


def parse_itinerary(text: str) -> Union[GeneratedItinerary, GenerationError]:
    """
    Decode the model's JSON answer into a GeneratedItinerary.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return GenerationError(
            error="Failed to parse AI response as JSON",
            code="PARSING_ERROR",
            details={"response": text, "error": str(e)},
        )
    try:
        return GeneratedItinerary.model_validate(data)
    except ValidationError as e:
        return GenerationError(
            error="AI response does not match expected structure",
            code="PARSING_ERROR",
            details={"response": text, "errors": e.errors(include_url=False)},
        )


async def generate_itinerary(
    trip: TripContext,
    *,
    budget: Optional[str] = None,
    engine: Optional[RulesEngine] = None,
    model: Optional[str] = None,
) -> GenerationResult:
    """
    Ask the model for an itinerary constrained by the content rules and spot-check the answer.

    InvalidTripDuration is raised before anything is sent when the trip is longer
    than the rules allow. Every other failure is returned as a GenerationError.
    """
    engine = engine or get_rules_engine()
    rules = engine.generate_rules_content(trip.duration_days, budget)
    prompt = build_itinerary_prompt(trip, rules)

    started = time.monotonic()
    try:
        completion = await complete_chat(
            _mk_msgs(ITINERARY_SYSTEM_PROMPT, prompt),
            model=model,
            response_format={"type": "json_object"},
        )
    except httpx.TimeoutException:
        log.warning("itinerary generation timed out for %s", trip.destination)
        return GenerationError(error="AI generation request timed out", code="TIMEOUT")
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        if status == 429:
            retry_after = e.response.headers.get("retry-after")
            return GenerationError(
                error="AI provider rate limit exceeded",
                code="RATE_LIMIT",
                details={"retry_after": retry_after},
            )
        if status == 400 and "model" in e.response.text.lower():
            requested = model or settings.CHAT_MODEL
            return GenerationError(
                error=f'Model "{requested}" is not available',
                code="INVALID_MODEL",
                details={"requested_model": requested},
            )
        return GenerationError(error=f"AI API error: HTTP {status}", code="API_ERROR", details={"status": status})
    except httpx.HTTPError as e:
        log.exception("itinerary generation failed for %s", trip.destination)
        return GenerationError(error=f"AI API error: {e}", code="API_ERROR")
    except Exception as e:
        # undecodable body or anything else the client could not turn into a completion
        log.exception("itinerary generation failed for %s", trip.destination)
        return GenerationError(error=f"AI API error: {e}", code="API_ERROR")

    elapsed_ms = int((time.monotonic() - started) * 1000)

    if not completion.content:
        return GenerationError(error="Empty response from AI service", code="INVALID_RESPONSE")

    parsed = parse_itinerary(completion.content)
    if isinstance(parsed, GenerationError):
        log.warning("unparseable itinerary from %s: %s", completion.model, parsed.error)
        return parsed

    report = check_itinerary(parsed, engine)
    log.info(
        "itinerary for %s: %d days, %d rule violations, %d tokens, $%.4f, %d ms",
        trip.destination,
        len(parsed.days),
        report.violation_count,
        completion.tokens_used,
        completion.cost_usd,
        elapsed_ms,
    )
    return GenerationSuccess(
        content=parsed,
        report=report,
        tokens_used=completion.tokens_used,
        cost_usd=completion.cost_usd,
        generation_time_ms=elapsed_ms,
        model=completion.model,
    )
