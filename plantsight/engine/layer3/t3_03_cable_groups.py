"""T3.03 — Cable Schedule.

Cables grouped by type (dc/ac), then by conductor size, ascending. Each
group carries its cable count and summed routed length.
"""

from __future__ import annotations

from plantsight.engine.context import CableGroupData, SummaryContext
from plantsight.engine.registry import Layer, transform


@transform(
    id="T3.03",
    layer=Layer.AGGREGATION,
    dependencies=["T0.03"],
    description="Group cable lengths by type and thickness",
)
def cable_groups(ctx: SummaryContext) -> None:
    for cable_type in ("dc", "ac"):
        groups: dict[float, CableGroupData] = {}
        for cable in ctx.cables_of_type(cable_type):
            group = groups.setdefault(
                cable.thickness_mm,
                CableGroupData(type=cable_type, thickness_mm=cable.thickness_mm),
            )
            group.cable_ids.append(cable.id)
            group.length_m += cable.length_m

        ctx.cable_groups[cable_type] = [groups[t] for t in sorted(groups)]
        ctx.totals[f"{cable_type}_cable_length_m"] = sum(g.length_m for g in groups.values())
        ctx.totals[f"{cable_type}_cable_count"] = sum(len(g.cable_ids) for g in groups.values())
