"""Runtime configuration.

Provider credentials come from the environment (or a local `.env`). A provider
whose credentials are blank is skipped without a network call.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Job providers
    RAPIDAPI_KEY: str = ""
    ADZUNA_APP_ID: str = ""
    ADZUNA_API_KEY: str = ""
    ADZUNA_COUNTRY: str = "us"

    # HTTP
    REQUEST_TIMEOUT: float = 20.0
    USER_AGENT: str = "JobAggregator/0.1 (+https://github.com/job-aggregator)"

    # LLM (any OpenAI-compatible endpoint)
    LLM_API_KEY: str = ""
    LLM_BASE_URL: str = "https://api.groq.com/openai/v1"
    LLM_MODEL: str = "openai/gpt-oss-120b"


def get_settings() -> Settings:
    """Build settings from the current environment.

    Not cached: credential presence is read on every search call.
    """
    return Settings()
