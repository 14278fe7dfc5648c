"""T3.02 — Inverter Loading and DC/AC Ratio. ★★

DC side = sum of string capacities; AC side = rated capacity looked up
through the inverter's plant-setup config. A zero AC rating yields a ratio
of 0 instead of a division error. Boards sum their inverters.
"""

from __future__ import annotations

from plantsight.engine.context import SummaryContext
from plantsight.engine.registry import Layer, transform


@transform(
    id="T3.02",
    layer=Layer.AGGREGATION,
    dependencies=["T2.01"],
    description="Per-inverter DC/AC capacities and ratio, per-board totals",
)
def inverter_ratios(ctx: SummaryContext) -> None:
    setup = ctx.snapshot.plant_setup
    strings_by_inverter: dict[str, list] = {}
    for s in ctx.strings:
        strings_by_inverter.setdefault(s.inverter_id, []).append(s)

    for inv in ctx.inverters:
        own = strings_by_inverter.get(inv.id, [])
        inv.panel_count = sum(s.panel_count for s in own)
        inv.dc_capacity_kw = sum(s.capacity_kwp for s in own)
        inv.ac_capacity_kw = setup.ac_capacity(inv.equipment.config_id) if setup else 0.0
        inv.dc_ac_ratio = inv.dc_capacity_kw / inv.ac_capacity_kw if inv.ac_capacity_kw > 0 else 0.0

    inverters = {inv.id: inv for inv in ctx.inverters}
    for board in ctx.main_boards:
        members = [inverters[i] for i in board.inverter_ids]
        board.panel_count = sum(inv.panel_count for inv in members)
        board.dc_capacity_kw = sum(inv.dc_capacity_kw for inv in members)
        board.ac_capacity_kw = sum(inv.ac_capacity_kw for inv in members)

    ctx.totals["inverter_count"] = len(ctx.inverters)
    ctx.totals["ac_capacity_kw"] = sum(inv.ac_capacity_kw for inv in ctx.inverters)
    ctx.totals["dc_capacity_kw"] = sum(inv.dc_capacity_kw for inv in ctx.inverters)
