"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from plantsight.utils.proximity import TieBreak


class Settings(BaseSettings):
    plantsight_env: str = "development"
    plantsight_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Engine defaults
    proximity_threshold_m: float = Field(default=1.0, gt=0)
    default_cable_thickness_mm: float = Field(default=6.0, gt=0)
    array_tie_break: TieBreak = "nearest"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
