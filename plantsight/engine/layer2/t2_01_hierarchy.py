"""T2.01 — Electrical Hierarchy. ★★★ CRITICAL

Close out the inferred tree MainBoard → Inverter → String → PVArray and
surface everything the matchers could not place as explicit unassigned
buckets. Runs even without a scale: boards and inverters are then listed
with no children and every inverter is unassigned.
"""

from __future__ import annotations

import logging

from plantsight.engine.context import SummaryContext
from plantsight.engine.registry import Layer, transform

logger = logging.getLogger(__name__)


@transform(
    id="T2.01",
    layer=Layer.TOPOLOGY,
    dependencies=["T1.01", "T1.02", "T1.03"],
    description="Assemble the board/inverter/string tree and unassigned buckets",
)
def hierarchy(ctx: SummaryContext) -> None:
    ctx.unassigned_inverters = [inv.id for inv in ctx.inverters if inv.main_board_id is None]
    ctx.unassigned_dc_cables = [c.id for c in ctx.cables_of_type("dc") if c.inverter_id is None]
    ctx.unassigned_ac_cables = [c.id for c in ctx.cables_of_type("ac") if c.main_board_id is None]
    ctx.unassigned_arrays = [arr.id for arr in ctx.arrays if not arr.string_ids]

    # Each inverter appears exactly once: under one board or unassigned
    placed = [i for board in ctx.main_boards for i in board.inverter_ids] + ctx.unassigned_inverters
    if sorted(placed) != sorted(inv.id for inv in ctx.inverters):
        raise ValueError(f"Inverter placement is inconsistent: {placed}")

    logger.info(
        "Topology: %d boards, %d/%d inverters assigned, %d strings (%d unmatched), %d unassigned DC cables",
        len(ctx.main_boards),
        len(ctx.inverters) - len(ctx.unassigned_inverters),
        len(ctx.inverters),
        len(ctx.strings),
        sum(1 for s in ctx.strings if s.pv_array_id is None),
        len(ctx.unassigned_dc_cables),
    )
