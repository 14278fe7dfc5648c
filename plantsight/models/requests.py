"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from plantsight.models.snapshot import PlantSnapshot
from plantsight.utils.proximity import TieBreak


class SummaryOptions(BaseModel):
    proximity_threshold_m: float | None = Field(
        default=None, gt=0, description="Override the connection distance (meters)"
    )
    default_cable_thickness_mm: float | None = Field(
        default=None, gt=0, description="Override the thickness for cables drawn without one"
    )
    array_tie_break: TieBreak | None = Field(default=None, description="PV array resolution policy")


class SummaryRequest(BaseModel):
    snapshot: PlantSnapshot = Field(..., description="Floor-plan geometry snapshot")
    options: SummaryOptions = Field(default_factory=SummaryOptions)
