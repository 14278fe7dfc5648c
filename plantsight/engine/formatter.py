"""SummaryContext → PlantSummary model and plain-text summary.

The tree mirrors what the summary panel shows: boards with their inverters,
inverters with their strings, then an unassigned-inverters group.
"""

from __future__ import annotations

from plantsight.engine.context import InverterData, SummaryContext
from plantsight.models.summary import (
    ArraySummary,
    CableGroup,
    CableSummary,
    InverterNode,
    MainBoardNode,
    MaterialGroup,
    MaterialSummary,
    PlantSummary,
    PlantTotals,
    RoofSummary,
    SimulationCheck,
    StringNode,
    Topology,
)

# ── Text layout ──
_INDENT = "  "
_RULE = "=" * 40


def _ratio_display(dc_kw: float, ac_kw: float) -> str:
    return f"{dc_kw / ac_kw:.2f}" if ac_kw > 0 else "0.00"


def _inverter_node(ctx: SummaryContext, inv: InverterData, nd: int) -> InverterNode:
    strings = []
    for cable_id in inv.string_ids:
        s = ctx.get_string(cable_id)
        cable = ctx.get_cable(cable_id)
        if s is None:
            continue
        strings.append(
            StringNode(
                cable_id=s.cable_id,
                name=cable.line.name if cable else None,
                pv_array_id=s.pv_array_id,
                panel_count=s.panel_count,
                capacity_kwp=round(s.capacity_kwp, nd),
                length_m=round(s.length_m, nd),
            )
        )
    return InverterNode(
        id=inv.id,
        name=inv.equipment.name,
        config_id=inv.equipment.config_id,
        strings=strings,
        panel_count=inv.panel_count,
        dc_capacity_kw=round(inv.dc_capacity_kw, nd),
        ac_capacity_kw=round(inv.ac_capacity_kw, nd),
        dc_ac_ratio=inv.dc_ac_ratio_display,
    )


def context_to_topology(ctx: SummaryContext) -> Topology:
    nd = ctx.config.length_decimals
    inverters = {inv.id: inv for inv in ctx.inverters}

    boards = [
        MainBoardNode(
            id=board.id,
            name=board.equipment.name,
            feeder_ids=list(board.feeder_ids),
            inverters=[_inverter_node(ctx, inverters[i], nd) for i in board.inverter_ids],
            panel_count=board.panel_count,
            dc_capacity_kw=round(board.dc_capacity_kw, nd),
            ac_capacity_kw=round(board.ac_capacity_kw, nd),
        )
        for board in ctx.main_boards
    ]
    return Topology(
        main_boards=boards,
        unassigned_inverters=[_inverter_node(ctx, inverters[i], nd) for i in ctx.unassigned_inverters],
        unassigned_dc_cables=list(ctx.unassigned_dc_cables),
        unassigned_ac_cables=list(ctx.unassigned_ac_cables),
        unassigned_arrays=list(ctx.unassigned_arrays),
    )


def _material_summary(ctx: SummaryContext, name: str, nd: int) -> MaterialSummary:
    groups = [
        MaterialGroup(key=g.key, name=g.name, item_ids=list(g.item_ids), length_m=round(g.length_m, nd))
        for g in ctx.material_groups.get(name, [])
    ]
    return MaterialSummary(total_length_m=round(ctx.totals.get(f"{name}_length_m", 0.0), nd), groups=groups)


def context_to_summary(ctx: SummaryContext) -> PlantSummary:
    """Convert SummaryContext to structured PlantSummary."""
    nd = ctx.config.length_decimals
    t = ctx.totals

    cables = {}
    for cable_type in ("dc", "ac"):
        groups = [
            CableGroup(
                thickness_mm=g.thickness_mm,
                cable_ids=list(g.cable_ids),
                count=len(g.cable_ids),
                length_m=round(g.length_m, nd),
            )
            for g in ctx.cable_groups.get(cable_type, [])
        ]
        cables[cable_type] = CableSummary(
            type=cable_type,
            total_length_m=round(t.get(f"{cable_type}_cable_length_m", 0.0), nd),
            count=int(t.get(f"{cable_type}_cable_count", 0)),
            groups=groups,
        )

    arrays = [
        ArraySummary(
            id=arr.id,
            panel_count=arr.panel_count,
            capacity_kwp=round(arr.capacity_kwp, nd),
            width_m=round(arr.width_m, nd),
            height_m=round(arr.height_m, nd),
            roof_id=arr.roof_id,
            corners=arr.corners,
            string_ids=list(arr.string_ids),
        )
        for arr in ctx.arrays
    ]

    roofs = [
        RoofSummary(
            id=roof.id,
            area_m2=round(roof.area_m2, nd),
            pitch=roof.mask.pitch,
            direction=roof.mask.direction,
            array_ids=list(roof.array_ids),
            panel_count=roof.panel_count,
            capacity_kwp=round(roof.capacity_kwp, nd),
        )
        for roof in ctx.roofs
    ]

    dc_kw = t.get("dc_capacity_kw", 0.0)
    ac_kw = t.get("ac_capacity_kw", 0.0)
    totals = PlantTotals(
        panel_count=int(t.get("panel_count", 0)),
        capacity_kwp=round(t.get("capacity_kwp", 0.0), nd),
        connected_panel_count=int(t.get("connected_panel_count", 0)),
        connected_capacity_kwp=round(t.get("connected_capacity_kwp", 0.0), nd),
        inverter_count=len(ctx.inverters),
        dc_capacity_kw=round(dc_kw, nd),
        ac_capacity_kw=round(ac_kw, nd),
        dc_ac_ratio=_ratio_display(dc_kw, ac_kw),
        roof_area_m2=round(t.get("roof_area_m2", 0.0), nd),
        dc_cable_length_m=round(t.get("dc_cable_length_m", 0.0), nd),
        ac_cable_length_m=round(t.get("ac_cable_length_m", 0.0), nd),
        walkways_length_m=round(t.get("walkways_length_m", 0.0), nd),
        cable_trays_length_m=round(t.get("cable_trays_length_m", 0.0), nd),
    )

    summary = PlantSummary(
        calibrated=ctx.calibrated,
        scale_ratio=ctx.ratio,
        proximity_threshold_m=ctx.config.proximity_threshold_m,
        totals=totals,
        topology=context_to_topology(ctx),
        cables=cables,
        arrays=arrays,
        roofs=roofs,
        walkways=_material_summary(ctx, "walkways", nd),
        cable_trays=_material_summary(ctx, "cable_trays", nd),
        simulation=SimulationCheck(**ctx.simulation_check) if ctx.simulation_check else SimulationCheck(),
    )
    summary.summary_text = summary_to_text(summary)
    return summary


def _inverter_lines(inv: InverterNode, depth: int) -> list[str]:
    pad = _INDENT * depth
    label = inv.name or inv.id
    lines = [
        f"{pad}Inverter {label}: {inv.panel_count}p, DC {inv.dc_capacity_kw:g} kW / "
        f"AC {inv.ac_capacity_kw:g} kW, DC/AC {inv.dc_ac_ratio}"
    ]
    for idx, s in enumerate(inv.strings, 1):
        target = s.pv_array_id or "no array"
        lines.append(f"{pad}{_INDENT}String {idx}: {s.panel_count}p, {s.capacity_kwp:g} kWp -> {target}")
    return lines


def summary_to_text(summary: PlantSummary) -> str:
    """Plain-text rendering of a PlantSummary (logs, CLI, diffs)."""
    t = summary.totals
    out = [
        _RULE,
        "PLANT SUMMARY",
        _RULE,
        f"Modules: {t.panel_count} ({t.capacity_kwp:g} kWp)",
        f"Inverters: {t.inverter_count} (AC {t.ac_capacity_kw:g} kW, DC/AC {t.dc_ac_ratio})",
        f"Roof area: {t.roof_area_m2:g} m2",
        f"DC cable: {t.dc_cable_length_m:g} m, AC cable: {t.ac_cable_length_m:g} m",
    ]
    if not summary.calibrated:
        out.append("Scale not set: lengths, areas and connections unavailable")

    topo = summary.topology
    for board in topo.main_boards:
        out.append(f"Main board {board.name or board.id}: {len(board.inverters)} inverter(s)")
        for inv in board.inverters:
            out.extend(_inverter_lines(inv, 1))
    if topo.unassigned_inverters:
        out.append(f"Unassigned inverters: {len(topo.unassigned_inverters)}")
        for inv in topo.unassigned_inverters:
            out.extend(_inverter_lines(inv, 1))
    if topo.unassigned_dc_cables:
        out.append(f"Unassigned DC cables: {', '.join(topo.unassigned_dc_cables)}")
    return "\n".join(out)
