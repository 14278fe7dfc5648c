"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from plantsight.models.summary import PlantSummary, Topology


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0
    layers: dict[str, int] = Field(default_factory=dict)


class SummaryResponse(BaseModel):
    summary: PlantSummary
    processing_time_ms: float = 0.0
    transforms_completed: int = 0
    transforms_skipped: int = 0
    transforms_failed: int = 0
    errors: dict[str, str] = Field(default_factory=dict)


class TopologyResponse(BaseModel):
    topology: Topology
    calibrated: bool = False
    processing_time_ms: float = 0.0
