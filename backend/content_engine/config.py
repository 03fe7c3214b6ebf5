"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - API keys default to None; handlers that need them raise ConfigurationError

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every non-secret setting
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # OpenAI
    openai_api_key: str | None = None
    openai_model_id: str = "gpt-4.1-mini"
    openai_base_url: str | None = None
    openai_timeout_seconds: float = 60.0
    openai_max_retries: int = 2
    openai_base_delay_ms: int = 500
    openai_max_delay_ms: int = 8_000

    # Tavily
    tavily_api_key: str | None = None
    tavily_api_url: str = "https://api.tavily.com/search"
    tavily_timeout_seconds: float = 20.0

    # Source import
    fetch_timeout_seconds: float = 15.0
    fetch_max_chars: int = 200_000

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("openai_api_key", "tavily_api_key", mode="before")
    @classmethod
    def blank_key_is_missing(cls, v):
        """Empty strings count as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
