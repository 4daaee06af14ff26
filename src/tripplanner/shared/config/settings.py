from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # General
    LOG_LEVEL: str = Field(default="INFO", description="Application log level")
    BIND: str = Field(default="0.0.0.0:8076", description="API bind address")

    # CORS
    CORS_ALLOW_ORIGINS: str = Field(default="*", description="Comma-separated list of allowed origins")
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="Allow credentials in CORS")
    CORS_ALLOW_METHODS: str = Field(default="*", description="Allowed CORS methods")
    CORS_ALLOW_HEADERS: str = Field(default="*", description="Allowed CORS headers")

    # LLM (any OpenAI-compatible chat completions endpoint, OpenRouter by default)
    LLM_API_KEY: str = Field(
        default="",
        description="API key for the chat completions endpoint",
        validation_alias=AliasChoices("LLM_API_KEY", "OPENROUTER_API_KEY"),
    )
    LLM_BASE_URL: str = Field(default="https://openrouter.ai/api/v1", description="Chat completions base URL")
    CHAT_MODEL: str = Field(default="openai/gpt-4o-mini", description="Chat model ID")
    MAX_TOKENS: int = Field(default=4000, description="Maximum token count")
    TEMPERATURE: float = Field(default=0.7, description="Temperature")
    LLM_MAX_CONCURRENCY: int = Field(default=10, description="Maximum concurrency for LLM requests")
    LLM_REQUEST_TIMEOUT: int = Field(default=55, description="LLM HTTP timeout (seconds)")
    SITE_URL: str = Field(default="https://vibetravels.com", description="Sent as HTTP-Referer for attribution")
    SITE_NAME: str = Field(default="VibeTravels", description="Sent as X-Title for attribution")

    # Content generation rules
    RULES_MIN_ACTIVITIES_PER_DAY: int = Field(default=3)
    RULES_MAX_ACTIVITIES_PER_DAY: int = Field(default=5)
    RULES_MIN_ACTIVITY_DURATION_MINUTES: int = Field(default=15)
    RULES_MAX_ACTIVITY_DURATION_MINUTES: int = Field(default=480)
    RULES_ALLOWED_COST_LEVELS: str = Field(
        default="$,$$,$$$,$$$$",
        description="Comma-separated cost tokens, in the order they are listed to the model",
    )
    RULES_STRICT_TIME_VALIDATION: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def allowed_cost_tokens(self) -> List[str]:
        return [t.strip() for t in (self.RULES_ALLOWED_COST_LEVELS or "").split(",") if t.strip()]


settings = Settings()
