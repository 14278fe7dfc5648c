"""T0.04 — PV Array Footprints. ★★

Panel count and nameplate capacity per array, plus its physical footprint:
size in meters, bounding radius in pixels (used to widen the string
matching threshold) and rotated corners for highlighting. Arrays are
placed on a roof by explicit ``roof_mask_id`` or by center containment.
"""

from __future__ import annotations

from plantsight.engine.context import SummaryContext
from plantsight.engine.registry import Layer, transform
from plantsight.utils.geometry import array_corners, point_in_polygon
from plantsight.utils.proximity import array_bounding_radius_px, array_size_px, panel_footprint


@transform(
    id="T0.04",
    layer=Layer.METRICS,
    dependencies=["T0.01"],
    description="Compute PV array panel counts, capacities and footprints",
)
def array_footprints(ctx: SummaryContext) -> None:
    panel = ctx.panel_config
    roof_ids = {roof.id for roof in ctx.roofs}

    for arr in ctx.arrays:
        item = arr.item
        arr.panel_count = max(item.rows, 0) * max(item.columns, 0)
        arr.capacity_kwp = arr.panel_count * panel.wattage / 1000 if panel else 0.0

        if panel is not None:
            panel_w, panel_l = panel_footprint(item.orientation.value, panel)
            arr.width_m = item.columns * panel_w
            arr.height_m = item.rows * panel_l

        width_px, height_px = array_size_px(item, panel, ctx.ratio)
        arr.radius_px = array_bounding_radius_px(item, panel, ctx.ratio)
        if width_px > 0 and height_px > 0:
            arr.corners = array_corners(item.position, width_px, height_px, item.rotation)

        if item.roof_mask_id and item.roof_mask_id in roof_ids:
            arr.roof_id = item.roof_mask_id
        else:
            arr.roof_id = next(
                (roof.id for roof in ctx.roofs if point_in_polygon(item.position, roof.mask.points)),
                None,
            )
