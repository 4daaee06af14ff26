from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx
from pydantic import BaseModel

from tripplanner.shared.config.settings import settings
from tripplanner.shared.concurrency import LLM_REQUEST_SEMAPHORE

log = logging.getLogger("llm")


# USD per 1M tokens (prompt, completion); unknown models use the fallback
MODEL_PRICING: Dict[str, Tuple[float, float]] = {
    "openai/gpt-3.5-turbo": (0.5, 1.5),
    "openai/gpt-4o-mini": (0.15, 0.6),
    "openai/gpt-4-turbo": (10.0, 30.0),
    "openai/gpt-4o": (5.0, 15.0),
    "anthropic/claude-3-sonnet": (3.0, 15.0),
    "anthropic/claude-3-opus": (15.0, 75.0),
    "google/gemini-pro": (0.5, 1.5),
}
FALLBACK_PRICING: Tuple[float, float] = (1.0, 3.0)


class ChatCompletion(BaseModel):
    content: Optional[str] = None
    tokens_used: int = 0
    prompt_tokens: int = 0
    completion_tokens: int = 0
    model: str

    @property
    def cost_usd(self) -> float:
        return estimate_cost(self.model, self.prompt_tokens, self.completion_tokens)


def estimate_cost(model: str, prompt_tokens: int, completion_tokens: int) -> float:
    prompt_price, completion_price = MODEL_PRICING.get(model, FALLBACK_PRICING)
    return prompt_tokens / 1_000_000 * prompt_price + completion_tokens / 1_000_000 * completion_price


def _chat_url() -> str:
    return f"{settings.LLM_BASE_URL.rstrip('/')}/chat/completions"


def _headers() -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {settings.LLM_API_KEY}",
        "Content-Type": "application/json",
        "HTTP-Referer": settings.SITE_URL,
        "X-Title": settings.SITE_NAME,
    }


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _count(usage: Dict[str, Any], key: str) -> int:
    value = usage.get(key)
    return value if isinstance(value, int) and not isinstance(value, bool) else 0


def _parse_completion(data: Any, requested_model: str) -> ChatCompletion:
    # Anything off-shape in the body degrades to "no content" instead of raising.
    data = _as_dict(data)
    choices = data.get("choices")
    first = choices[0] if isinstance(choices, list) and choices else None
    content = _as_dict(_as_dict(first).get("message")).get("content")
    usage = _as_dict(data.get("usage"))
    model = data.get("model")
    return ChatCompletion(
        content=content if isinstance(content, str) else None,
        tokens_used=_count(usage, "total_tokens"),
        prompt_tokens=_count(usage, "prompt_tokens"),
        completion_tokens=_count(usage, "completion_tokens"),
        model=model if isinstance(model, str) and model else requested_model,
    )


async def complete_chat(
    messages: List[Dict[str, str]],
    *,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    request_timeout: Optional[int] = None,
    response_format: Optional[Dict[str, Any]] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ChatCompletion:
    """
    Single (non-streaming) chat completion against an OpenAI-compatible endpoint.

    Transport and HTTP status errors propagate as httpx exceptions; callers map them.
    A 2xx body that is not JSON raises ValueError. A JSON body of the wrong shape
    yields a completion with ``content=None``.
    A caller-owned ``client`` is used as is and not closed.
    """
    used_model = model or settings.CHAT_MODEL
    payload: Dict[str, Any] = {
        "model": used_model,
        "messages": messages,
        "temperature": temperature if temperature is not None else settings.TEMPERATURE,
        "max_tokens": max_tokens if max_tokens is not None else settings.MAX_TOKENS,
    }
    if response_format:
        payload["response_format"] = response_format
    timeout = httpx.Timeout(request_timeout or settings.LLM_REQUEST_TIMEOUT)

    async with LLM_REQUEST_SEMAPHORE:
        if client is not None:
            resp = await client.post(_chat_url(), headers=_headers(), json=payload, timeout=timeout)
        else:
            async with httpx.AsyncClient(timeout=timeout) as owned:
                resp = await owned.post(_chat_url(), headers=_headers(), json=payload)
        if resp.is_error:
            log.warning("chat completion failed: %s %s", resp.status_code, resp.text[:200])
        resp.raise_for_status()
        return _parse_completion(resp.json(), used_model)
