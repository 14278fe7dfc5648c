"""Snapshot loader — validates an editor snapshot and seeds a SummaryContext.

Every collection keeps the editor's insertion order; all later stages
iterate these lists, which is what makes the inferred hierarchy stable.
"""

from __future__ import annotations

import logging
from typing import Any

from plantsight.engine.config import EngineConfig
from plantsight.engine.context import (
    ArrayData,
    CableData,
    InverterData,
    MainBoardData,
    RoofData,
    SummaryContext,
)
from plantsight.models.snapshot import EquipmentType, PlantSnapshot

logger = logging.getLogger(__name__)


def load_snapshot(data: PlantSnapshot | dict[str, Any]) -> PlantSnapshot:
    """Validate raw editor state. A model instance is deep-copied so the caller's value stays untouched."""
    if isinstance(data, PlantSnapshot):
        return data.model_copy(deep=True)
    return PlantSnapshot.model_validate(data)


def build_context(
    data: PlantSnapshot | dict[str, Any],
    config: EngineConfig | None = None,
) -> SummaryContext:
    """Parse a snapshot into a SummaryContext with one record per item."""
    snapshot = load_snapshot(data)
    ctx = SummaryContext(snapshot=snapshot, config=config or EngineConfig())

    ctx.roofs = [RoofData(mask=mask) for mask in snapshot.roof_masks]
    ctx.cables = [CableData(line=line) for line in snapshot.lines]
    ctx.arrays = [ArrayData(item=item) for item in snapshot.pv_arrays]

    for eq in snapshot.equipment:
        if eq.type == EquipmentType.MAIN_BOARD:
            ctx.main_boards.append(MainBoardData(equipment=eq))
        elif eq.type == EquipmentType.INVERTER:
            ctx.inverters.append(InverterData(equipment=eq))

    empty = [c.id for c in ctx.cables if not c.line.points]
    if empty:
        logger.debug("Cables without points (never matchable): %s", empty)

    logger.info(
        "Loaded snapshot: %d roofs, %d arrays, %d cables, %d boards, %d inverters, ratio=%s",
        len(ctx.roofs),
        len(ctx.arrays),
        len(ctx.cables),
        len(ctx.main_boards),
        len(ctx.inverters),
        snapshot.scale.ratio,
    )
    return ctx
