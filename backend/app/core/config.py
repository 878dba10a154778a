"""
Core configuration and settings for AI Legal Buddy.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "AI Legal Buddy"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True

    # Groq (OpenAI-compatible endpoint, primary provider)
    groq_api_key: str | None = None
    groq_api_url: str = "https://api.groq.com/openai/v1"
    groq_model: str = "llama-3.3-70b-versatile"

    # OpenRouter (secondary provider)
    openrouter_api_key: str | None = None
    openrouter_model: str = "meta-llama/llama-3.3-70b-instruct"

    # Custom OpenAI-compatible endpoint (Ollama, vLLM, ...)
    custom_ai_api_url: str | None = None
    custom_ai_api_key: str | None = None
    custom_ai_model: str = "llama3.2"

    # Failover
    ai_default_cooldown_seconds: float = 300.0
    ai_quota_cooldown_seconds: float = 3600.0
    ai_transient_cooldown_seconds: float = 60.0
    ai_request_timeout_seconds: float = 30.0
    ai_max_prompt_chars: int = Field(default=12000, gt=0)

    # Legal consultation
    default_category: str = "GENERAL"

    @field_validator("groq_api_key", "openrouter_api_key", "custom_ai_api_key", "custom_ai_api_url", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat empty env values as unset so the provider stays disabled."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
