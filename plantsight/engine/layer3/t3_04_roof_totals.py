"""T3.04 — Roof Totals.

Total roof area, and per roof the arrays, panels and kWp placed on it.
"""

from __future__ import annotations

from plantsight.engine.context import SummaryContext
from plantsight.engine.registry import Layer, transform


@transform(
    id="T3.04",
    layer=Layer.AGGREGATION,
    dependencies=["T0.02", "T0.04"],
    description="Roof area totals and PV placed per roof",
)
def roof_totals(ctx: SummaryContext) -> None:
    roofs = {roof.id: roof for roof in ctx.roofs}
    for arr in ctx.arrays:
        roof = roofs.get(arr.roof_id) if arr.roof_id else None
        if roof is None:
            continue
        roof.array_ids.append(arr.id)
        roof.panel_count += arr.panel_count
        roof.capacity_kwp += arr.capacity_kwp

    ctx.totals["roof_area_m2"] = sum(roof.area_m2 for roof in ctx.roofs)
    ctx.totals["roof_count"] = len(ctx.roofs)
