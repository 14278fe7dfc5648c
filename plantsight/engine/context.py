"""SummaryContext — the single mutable state object flowing through all transforms.

The snapshot itself is never touched. Per-item results live on the
*Data records built by the loader; cross-item results (hierarchy buckets,
cable groups, totals) live on SummaryContext.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from plantsight.engine.config import EngineConfig
from plantsight.models.snapshot import (
    EquipmentItem,
    PlantSnapshot,
    PVArrayItem,
    RoofMask,
    SupplyLine,
)
from plantsight.utils.geometry import is_calibrated


@dataclass
class RoofData:
    mask: RoofMask
    area_m2: float = 0.0
    array_ids: list[str] = field(default_factory=list)
    panel_count: int = 0
    capacity_kwp: float = 0.0

    @property
    def id(self) -> str:
        return self.mask.id


@dataclass
class CableData:
    line: SupplyLine
    length_m: float = 0.0
    thickness_mm: float = 0.0
    # Equipment this cable was attributed to by the matching layer
    main_board_id: str | None = None
    inverter_id: str | None = None

    @property
    def id(self) -> str:
        return self.line.id

    @property
    def type(self) -> str:
        return self.line.type.value


@dataclass
class ArrayData:
    item: PVArrayItem
    panel_count: int = 0
    capacity_kwp: float = 0.0
    # Footprint in meters and pixels
    width_m: float = 0.0
    height_m: float = 0.0
    radius_px: float = 0.0
    corners: list[tuple[float, float]] = field(default_factory=list)
    roof_id: str | None = None
    # DC cables whose far end landed on this array
    string_ids: list[str] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.item.id


@dataclass
class StringData:
    """One DC cable run as seen from its inverter."""

    cable_id: str
    inverter_id: str
    pv_array_id: str | None = None
    far_end: tuple[float, float] | None = None
    panel_count: int = 0
    capacity_kwp: float = 0.0
    length_m: float = 0.0


@dataclass
class InverterData:
    equipment: EquipmentItem
    main_board_id: str | None = None
    string_ids: list[str] = field(default_factory=list)
    panel_count: int = 0
    dc_capacity_kw: float = 0.0
    ac_capacity_kw: float = 0.0
    dc_ac_ratio: float = 0.0

    @property
    def id(self) -> str:
        return self.equipment.id

    @property
    def dc_ac_ratio_display(self) -> str:
        return f"{self.dc_ac_ratio:.2f}"


@dataclass
class MainBoardData:
    equipment: EquipmentItem
    feeder_ids: list[str] = field(default_factory=list)
    inverter_ids: list[str] = field(default_factory=list)
    panel_count: int = 0
    dc_capacity_kw: float = 0.0
    ac_capacity_kw: float = 0.0

    @property
    def id(self) -> str:
        return self.equipment.id


@dataclass
class CableGroupData:
    type: str
    thickness_mm: float
    cable_ids: list[str] = field(default_factory=list)
    length_m: float = 0.0


@dataclass
class MaterialGroupData:
    key: str
    name: str
    item_ids: list[str] = field(default_factory=list)
    length_m: float = 0.0


@dataclass
class SummaryContext:
    """Shared state flowing through the entire pipeline."""

    snapshot: PlantSnapshot
    config: EngineConfig = field(default_factory=EngineConfig)

    # --- Layer 0: scale + per-item metrics ---
    threshold_px: float = 0.0
    roofs: list[RoofData] = field(default_factory=list)
    cables: list[CableData] = field(default_factory=list)
    arrays: list[ArrayData] = field(default_factory=list)

    # --- Layer 1/2: inferred connectivity ---
    main_boards: list[MainBoardData] = field(default_factory=list)
    inverters: list[InverterData] = field(default_factory=list)
    strings: list[StringData] = field(default_factory=list)
    unassigned_inverters: list[str] = field(default_factory=list)
    unassigned_dc_cables: list[str] = field(default_factory=list)
    unassigned_ac_cables: list[str] = field(default_factory=list)
    unassigned_arrays: list[str] = field(default_factory=list)

    # --- Layer 3: roll-ups ---
    totals: dict[str, float] = field(default_factory=dict)
    cable_groups: dict[str, list[CableGroupData]] = field(default_factory=dict)
    material_groups: dict[str, list[MaterialGroupData]] = field(default_factory=dict)
    simulation_check: dict[str, Any] = field(default_factory=dict)

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    skipped_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ratio(self) -> float | None:
        return self.snapshot.scale.ratio

    @property
    def calibrated(self) -> bool:
        return is_calibrated(self.ratio)

    @property
    def panel_config(self):
        return self.snapshot.panel_config

    def cables_of_type(self, cable_type: str) -> list[CableData]:
        return [c for c in self.cables if c.type == cable_type]

    def get_cable(self, cable_id: str) -> CableData | None:
        for c in self.cables:
            if c.id == cable_id:
                return c
        return None

    def get_array(self, array_id: str) -> ArrayData | None:
        for a in self.arrays:
            if a.id == array_id:
                return a
        return None

    def get_inverter(self, inverter_id: str) -> InverterData | None:
        for inv in self.inverters:
            if inv.id == inverter_id:
                return inv
        return None

    def get_string(self, cable_id: str) -> StringData | None:
        for s in self.strings:
            if s.cable_id == cable_id:
                return s
        return None
