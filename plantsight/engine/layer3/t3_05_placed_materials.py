"""T3.05 — Walkways and Cable Trays.

Placed runs grouped by their material config (``"default"`` when unset).
A run's length is its longer side, since orientation may swap width and
length.
"""

from __future__ import annotations

from plantsight.engine.context import MaterialGroupData, SummaryContext
from plantsight.engine.registry import Layer, transform


def _group(items) -> list[MaterialGroupData]:
    groups: dict[str, MaterialGroupData] = {}
    for item in items:
        key = item.config_id or "default"
        group = groups.setdefault(key, MaterialGroupData(key=key, name=item.name))
        group.item_ids.append(item.id)
        group.length_m += max(item.width, item.length)
    return list(groups.values())


@transform(
    id="T3.05",
    layer=Layer.AGGREGATION,
    description="Group walkway and cable tray runs by config",
)
def placed_materials(ctx: SummaryContext) -> None:
    for name, items in (("walkways", ctx.snapshot.walkways), ("cable_trays", ctx.snapshot.cable_trays)):
        groups = _group(items)
        ctx.material_groups[name] = groups
        ctx.totals[f"{name}_length_m"] = sum(g.length_m for g in groups)
