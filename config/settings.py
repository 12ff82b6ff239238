"""Application settings and configuration management."""
from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

QUIET_WINDOW_SECONDS = 60
STALL_THRESHOLD_SECONDS = 30
MAX_SESSION_SECONDS = 2700


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    DB_PATH: str = Field(default="data/interview.db")
    CHECKPOINT_DIR: str = Field(default="data/checkpoints")

    PERSONA_DEFAULT: str = "Friendly Expert"

    QUIET_WINDOW_SECONDS: int = Field(default=QUIET_WINDOW_SECONDS, ge=1)
    STALL_THRESHOLD_SECONDS: int = Field(default=STALL_THRESHOLD_SECONDS, ge=1)
    MAX_SESSION_SECONDS: int = Field(default=MAX_SESSION_SECONDS, ge=60)
    RECENT_PHRASE_WINDOW: int = Field(default=4, ge=1)

    LOW_CONTENT_TOKENS: int = 12
    MAX_HINT_LEVEL: int = 3

    AVATAR_IDS: List[str] = Field(default_factory=list)
    LEARN_INTERVIEWER_AVATAR_IDS: List[str] = Field(default_factory=list)
    LEARN_CANDIDATE_AVATAR_IDS: List[str] = Field(default_factory=list)

    APP_CONFIG_PATH: str = "app_config.json"

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True, extra="ignore")


settings = Settings()
