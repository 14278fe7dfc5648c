"""T0.02 — Roof Areas.

Shoelace area of every roof mask in m².
"""

from __future__ import annotations

from plantsight.engine.context import SummaryContext
from plantsight.engine.registry import Layer, transform
from plantsight.utils.geometry import polygon_area


@transform(
    id="T0.02",
    layer=Layer.METRICS,
    dependencies=["T0.01"],
    description="Compute roof mask areas in square meters",
)
def roof_areas(ctx: SummaryContext) -> None:
    for roof in ctx.roofs:
        roof.area_m2 = polygon_area(roof.mask.points, ctx.ratio)
