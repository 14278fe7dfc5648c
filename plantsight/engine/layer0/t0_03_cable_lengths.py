"""T0.03 — Cable Lengths.

Routed length of every supply line (all points, not just the ends) and its
effective conductor size.
"""

from __future__ import annotations

from plantsight.engine.context import SummaryContext
from plantsight.engine.registry import Layer, transform
from plantsight.utils.geometry import line_length


@transform(
    id="T0.03",
    layer=Layer.METRICS,
    dependencies=["T0.01"],
    description="Compute cable lengths and effective thickness",
)
def cable_lengths(ctx: SummaryContext) -> None:
    default = ctx.config.default_cable_thickness_mm
    for cable in ctx.cables:
        cable.length_m = line_length(cable.line.points, ctx.ratio)
        # 0 / None both mean "not set" in the editor
        cable.thickness_mm = cable.line.thickness or default
