"""T3.06 — Simulation Target Check.

Compare the layout against the linked simulation's module and inverter
counts. A missing target always counts as matching.
"""

from __future__ import annotations

from plantsight.engine.context import SummaryContext
from plantsight.engine.registry import Layer, transform


@transform(
    id="T3.06",
    layer=Layer.AGGREGATION,
    dependencies=["T3.01"],
    description="Check layout module/inverter counts against simulation targets",
)
def simulation_match(ctx: SummaryContext) -> None:
    sim = ctx.snapshot.simulation
    module_target = sim.module_count if sim else None
    inverter_target = sim.inverter_count if sim else None

    layout_modules = int(ctx.totals.get("panel_count", 0))
    layout_inverters = len(ctx.inverters)

    ctx.simulation_check = {
        "linked": sim is not None,
        "module_target": module_target,
        "inverter_target": inverter_target,
        "layout_modules": layout_modules,
        "layout_inverters": layout_inverters,
        "modules_match": module_target is None or module_target == layout_modules,
        "inverters_match": inverter_target is None or inverter_target == layout_inverters,
    }
