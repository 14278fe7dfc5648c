"""Plant summary — the structured output of the pipeline."""

from __future__ import annotations

from pydantic import BaseModel, Field


class StringNode(BaseModel):
    cable_id: str
    name: str | None = None
    pv_array_id: str | None = None
    panel_count: int = 0
    capacity_kwp: float = 0.0
    length_m: float = 0.0


class InverterNode(BaseModel):
    id: str
    name: str | None = None
    config_id: str | None = None
    strings: list[StringNode] = Field(default_factory=list)
    panel_count: int = 0
    dc_capacity_kw: float = 0.0
    ac_capacity_kw: float = 0.0
    dc_ac_ratio: str = "0.00"


class MainBoardNode(BaseModel):
    id: str
    name: str | None = None
    feeder_ids: list[str] = Field(default_factory=list)
    inverters: list[InverterNode] = Field(default_factory=list)
    panel_count: int = 0
    dc_capacity_kw: float = 0.0
    ac_capacity_kw: float = 0.0


class Topology(BaseModel):
    """Inferred electrical hierarchy plus whatever could not be placed in it."""

    main_boards: list[MainBoardNode] = Field(default_factory=list)
    unassigned_inverters: list[InverterNode] = Field(default_factory=list)
    unassigned_dc_cables: list[str] = Field(default_factory=list)
    unassigned_ac_cables: list[str] = Field(default_factory=list)
    unassigned_arrays: list[str] = Field(default_factory=list)


class CableGroup(BaseModel):
    thickness_mm: float
    cable_ids: list[str] = Field(default_factory=list)
    count: int = 0
    length_m: float = 0.0


class CableSummary(BaseModel):
    type: str
    total_length_m: float = 0.0
    count: int = 0
    groups: list[CableGroup] = Field(default_factory=list)


class ArraySummary(BaseModel):
    id: str
    panel_count: int = 0
    capacity_kwp: float = 0.0
    width_m: float = 0.0
    height_m: float = 0.0
    roof_id: str | None = None
    corners: list[tuple[float, float]] = Field(default_factory=list)
    string_ids: list[str] = Field(default_factory=list)


class RoofSummary(BaseModel):
    id: str
    area_m2: float = 0.0
    pitch: float = 0.0
    direction: float = 0.0
    array_ids: list[str] = Field(default_factory=list)
    panel_count: int = 0
    capacity_kwp: float = 0.0


class MaterialGroup(BaseModel):
    key: str
    name: str = ""
    item_ids: list[str] = Field(default_factory=list)
    length_m: float = 0.0


class MaterialSummary(BaseModel):
    total_length_m: float = 0.0
    groups: list[MaterialGroup] = Field(default_factory=list)


class SimulationCheck(BaseModel):
    linked: bool = False
    module_target: int | None = None
    inverter_target: int | None = None
    layout_modules: int = 0
    layout_inverters: int = 0
    modules_match: bool = True
    inverters_match: bool = True


class PlantTotals(BaseModel):
    panel_count: int = 0
    capacity_kwp: float = 0.0
    connected_panel_count: int = 0
    connected_capacity_kwp: float = 0.0
    inverter_count: int = 0
    dc_capacity_kw: float = 0.0
    ac_capacity_kw: float = 0.0
    dc_ac_ratio: str = "0.00"
    roof_area_m2: float = 0.0
    dc_cable_length_m: float = 0.0
    ac_cable_length_m: float = 0.0
    walkways_length_m: float = 0.0
    cable_trays_length_m: float = 0.0


class PlantSummary(BaseModel):
    """Complete summary output from the pipeline."""

    # Metadata
    calibrated: bool = False
    scale_ratio: float | None = None
    proximity_threshold_m: float = 1.0

    totals: PlantTotals = Field(default_factory=PlantTotals)
    topology: Topology = Field(default_factory=Topology)

    cables: dict[str, CableSummary] = Field(default_factory=dict)
    arrays: list[ArraySummary] = Field(default_factory=list)
    roofs: list[RoofSummary] = Field(default_factory=list)
    walkways: MaterialSummary = Field(default_factory=MaterialSummary)
    cable_trays: MaterialSummary = Field(default_factory=MaterialSummary)
    simulation: SimulationCheck = Field(default_factory=SimulationCheck)

    # Plain-text rendering of the above
    summary_text: str = ""
