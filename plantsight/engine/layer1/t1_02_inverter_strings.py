"""T1.02 — Inverter Strings. ★★★ CRITICAL

DC cables with an end near an inverter become that inverter's strings.
Every inverter is considered, whether or not a board claimed it. A DC cable
touching two inverters stays with the first one in snapshot order.
"""

from __future__ import annotations

import logging

from plantsight.engine.context import StringData, SummaryContext
from plantsight.engine.registry import Layer, transform
from plantsight.utils.proximity import match_by_proximity

logger = logging.getLogger(__name__)


@transform(
    id="T1.02",
    layer=Layer.MATCHING,
    dependencies=["T0.03"],
    requires_scale=True,
    description="Match DC cables to inverters as strings",
)
def inverter_strings(ctx: SummaryContext) -> None:
    threshold_m = ctx.config.proximity_threshold_m
    dc_cables = ctx.cables_of_type("dc")
    by_id = {c.id: c for c in dc_cables}

    for inv in ctx.inverters:
        free = [c.line for c in dc_cables if c.inverter_id is None]
        for line in match_by_proximity(inv.equipment.position, free, threshold_m, ctx.ratio):
            cable = by_id[line.id]
            cable.inverter_id = inv.id
            inv.string_ids.append(cable.id)
            ctx.strings.append(
                StringData(cable_id=cable.id, inverter_id=inv.id, length_m=cable.length_m)
            )

        if not inv.string_ids:
            logger.debug("Inverter %s has no DC string in range", inv.id)
