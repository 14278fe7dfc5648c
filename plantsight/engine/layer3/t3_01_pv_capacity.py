"""T3.01 — PV Capacity.

Plant-wide panel count and nameplate capacity over every placed array,
independent of connectivity, plus the share actually reached by a string.
"""

from __future__ import annotations

from plantsight.engine.context import SummaryContext
from plantsight.engine.registry import Layer, transform


@transform(
    id="T3.01",
    layer=Layer.AGGREGATION,
    dependencies=["T0.04", "T2.01"],
    description="Total panel count and kWp, overall and connected",
)
def pv_capacity(ctx: SummaryContext) -> None:
    ctx.totals["panel_count"] = sum(arr.panel_count for arr in ctx.arrays)
    ctx.totals["capacity_kwp"] = sum(arr.capacity_kwp for arr in ctx.arrays)

    connected = [arr for arr in ctx.arrays if arr.string_ids]
    ctx.totals["connected_panel_count"] = sum(arr.panel_count for arr in connected)
    ctx.totals["connected_capacity_kwp"] = sum(arr.capacity_kwp for arr in connected)
    ctx.totals["array_count"] = len(ctx.arrays)
