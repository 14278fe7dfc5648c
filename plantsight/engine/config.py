"""Engine configuration — tunable matching and aggregation constants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from plantsight.utils.proximity import TIE_BREAK_FIRST, TIE_BREAK_NEAREST, TieBreak

if TYPE_CHECKING:
    from plantsight.config import Settings


@dataclass
class EngineConfig:
    """Controls proximity matching and aggregation defaults."""

    # Max real-world distance between a cable end and equipment to count as connected
    proximity_threshold_m: float = 1.0

    # Conductor size assumed for cables drawn without one
    default_cable_thickness_mm: float = 6.0

    # PV array resolution when a string's far end reaches several arrays:
    # "nearest" (smallest center distance) or "first" (input order)
    array_tie_break: TieBreak = TIE_BREAK_NEAREST

    # Rounding applied to lengths/areas/capacities in the summary output
    length_decimals: int = 2

    def __post_init__(self) -> None:
        if self.array_tie_break not in (TIE_BREAK_NEAREST, TIE_BREAK_FIRST):
            raise ValueError(f"array_tie_break must be 'nearest' or 'first', got {self.array_tie_break!r}")
        if self.proximity_threshold_m <= 0:
            raise ValueError(f"proximity_threshold_m must be positive, got {self.proximity_threshold_m}")

    @classmethod
    def from_settings(cls, settings: Settings) -> EngineConfig:
        return cls(
            proximity_threshold_m=settings.proximity_threshold_m,
            default_cable_thickness_mm=settings.default_cable_thickness_mm,
            array_tie_break=settings.array_tie_break,
        )
