"""T1.03 — String → PV Array. ★★

Resolve the PV array at the far end of each string's cable. The match
radius is the proximity threshold widened by the array's own half-diagonal,
so a cable landing anywhere on a large block still counts.
"""

from __future__ import annotations

import logging

from plantsight.engine.context import SummaryContext
from plantsight.engine.registry import Layer, transform
from plantsight.utils.proximity import far_endpoint, nearest_array

logger = logging.getLogger(__name__)


@transform(
    id="T1.03",
    layer=Layer.MATCHING,
    dependencies=["T0.04", "T1.02"],
    requires_scale=True,
    description="Resolve the PV array served by each DC string",
)
def string_arrays(ctx: SummaryContext) -> None:
    items = [arr.item for arr in ctx.arrays]
    array_data = {arr.id: arr for arr in ctx.arrays}

    for string in ctx.strings:
        cable = ctx.get_cable(string.cable_id)
        inverter = ctx.get_inverter(string.inverter_id)
        if cable is None or inverter is None:
            continue

        end = far_endpoint(cable.line, inverter.equipment.position, ctx.threshold_px)
        if end is None:
            continue
        string.far_end = (end.x, end.y)

        match = nearest_array(
            end,
            items,
            ctx.panel_config,
            ctx.config.proximity_threshold_m,
            ctx.ratio,
            tie_break=ctx.config.array_tie_break,
        )
        if match is None:
            logger.debug("String %s (inverter %s) reaches no PV array", string.cable_id, string.inverter_id)
            continue

        arr = array_data[match.id]
        string.pv_array_id = arr.id
        string.panel_count = arr.panel_count
        string.capacity_kwp = arr.capacity_kwp
        arr.string_ids.append(string.cable_id)
