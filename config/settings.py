"""Application settings and configuration management."""
from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    WEBHOOK_API_KEY: Optional[str] = None
    WEBHOOK_URL: str = "http://localhost:8000/webhook/code-update"
    WEBHOOK_ENABLED: bool = True
    DEBOUNCE_MS: int = Field(default=2000, ge=0)
    STATUS_RESET_MS: int = Field(default=1000, ge=0)

    ELEVEN_LABS_API_KEY: Optional[str] = None
    ELEVEN_LABS_BASE_URL: str = "https://api.elevenlabs.io"
    DEFAULT_AGENT_ID: Optional[str] = None
    UPSTREAM_TIMEOUT_S: float = Field(default=30.0, gt=0)

    LLM_CONFIG_PATH: str = "app_config.json"
    RAW_PREVIEW_CHARS: int = Field(default=1000, ge=1)

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True)


settings = Settings()
