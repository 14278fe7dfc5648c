"""T1.01 — Main Board Feeders. ★★★ CRITICAL

For each main board: AC cables with an end near the board are its feeders;
inverters sitting at either end of a feeder are connected to the board.
An inverter reachable from several boards belongs to the first board in
snapshot order.
"""

from __future__ import annotations

import logging

from plantsight.engine.context import SummaryContext
from plantsight.engine.registry import Layer, transform
from plantsight.utils.proximity import match_by_proximity, points_near_line

logger = logging.getLogger(__name__)


@transform(
    id="T1.01",
    layer=Layer.MATCHING,
    dependencies=["T0.01"],
    requires_scale=True,
    description="Match AC feeders to main boards and inverters to feeders",
)
def board_feeders(ctx: SummaryContext) -> None:
    threshold_m = ctx.config.proximity_threshold_m
    ac_cables = ctx.cables_of_type("ac")
    ac_lines = [c.line for c in ac_cables]
    by_id = {c.id: c for c in ac_cables}
    inverter_items = [inv.equipment for inv in ctx.inverters]
    claimed: set[str] = set()

    for board in ctx.main_boards:
        feeders = match_by_proximity(board.equipment.position, ac_lines, threshold_m, ctx.ratio)
        board.feeder_ids = [line.id for line in feeders]
        for line in feeders:
            if by_id[line.id].main_board_id is None:
                by_id[line.id].main_board_id = board.id

        reached: set[str] = set()
        for line in feeders:
            reached.update(eq.id for eq in points_near_line(line, inverter_items, threshold_m, ctx.ratio))

        # Keep inverter snapshot order, not feeder order
        for inv in ctx.inverters:
            if inv.id not in reached:
                continue
            if inv.id in claimed:
                logger.debug("Inverter %s also reachable from board %s; kept on %s", inv.id, board.id, inv.main_board_id)
                continue
            claimed.add(inv.id)
            inv.main_board_id = board.id
            board.inverter_ids.append(inv.id)

        if not feeders:
            logger.debug("Main board %s has no AC feeder in range", board.id)
