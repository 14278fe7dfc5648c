"""Geometry snapshot — the immutable input of one summary computation."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class Point(BaseModel):
    x: float
    y: float


class ScaleInfo(BaseModel):
    # Meters represented by one canvas pixel; None / 0 = not calibrated
    ratio: float | None = None


class RoofMask(BaseModel):
    id: str
    points: list[Point] = Field(default_factory=list)
    pitch: float = 0.0
    direction: float = 0.0


class PVPanelConfig(BaseModel):
    name: str = ""
    width: float = Field(..., description="Panel width in meters")
    length: float = Field(..., description="Panel length in meters")
    wattage: float = Field(..., description="Nameplate power in W")


class Orientation(str, enum.Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class PVArrayItem(BaseModel):
    id: str
    position: Point
    rows: int = 1
    columns: int = 1
    orientation: Orientation = Orientation.PORTRAIT
    rotation: float = 0.0
    roof_mask_id: str | None = None


class CableType(str, enum.Enum):
    DC = "dc"
    AC = "ac"


class SupplyLine(BaseModel):
    id: str
    name: str | None = None
    type: CableType
    points: list[Point] = Field(default_factory=list)
    thickness: float | None = Field(default=None, description="Conductor size in mm")


class EquipmentType(str, enum.Enum):
    INVERTER = "inverter"
    MAIN_BOARD = "main_board"
    COMBINER = "combiner"
    METER = "meter"
    OTHER = "other"


class EquipmentItem(BaseModel):
    id: str
    type: EquipmentType
    position: Point
    config_id: str | None = None
    name: str | None = None


class InverterConfig(BaseModel):
    id: str
    name: str = ""
    ac_capacity: float = Field(default=0.0, description="Rated AC output in kW")


class PlantSetupConfig(BaseModel):
    inverters: list[InverterConfig] = Field(default_factory=list)

    def ac_capacity(self, config_id: str | None) -> float:
        if not config_id:
            return 0.0
        for inv in self.inverters:
            if inv.id == config_id:
                return inv.ac_capacity or 0.0
        return 0.0


class PlacedMaterial(BaseModel):
    """A walkway or cable tray run placed on the plan (dimensions in meters)."""

    id: str
    config_id: str | None = None
    name: str = ""
    width: float = 0.0
    length: float = 0.0
    position: Point | None = None


class SimulationTargets(BaseModel):
    module_count: int | None = None
    inverter_count: int | None = None


class PlantSnapshot(BaseModel):
    """Everything the editing surface knows about one floor plan."""

    scale: ScaleInfo = Field(default_factory=ScaleInfo)
    roof_masks: list[RoofMask] = Field(default_factory=list)
    pv_arrays: list[PVArrayItem] = Field(default_factory=list)
    lines: list[SupplyLine] = Field(default_factory=list)
    equipment: list[EquipmentItem] = Field(default_factory=list)
    walkways: list[PlacedMaterial] = Field(default_factory=list)
    cable_trays: list[PlacedMaterial] = Field(default_factory=list)
    panel_config: PVPanelConfig | None = None
    plant_setup: PlantSetupConfig | None = None
    simulation: SimulationTargets | None = None
