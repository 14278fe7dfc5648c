"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Depends

from plantsight.config import Settings, settings
from plantsight.engine.config import EngineConfig


def get_settings() -> Settings:
    return settings


def get_engine_config(app_settings: Settings = Depends(get_settings)) -> EngineConfig:
    return EngineConfig.from_settings(app_settings)
