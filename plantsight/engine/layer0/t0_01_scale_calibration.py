"""T0.01 — Scale Calibration. ★★★ CRITICAL

Resolve the proximity threshold into canvas pixels. Every matching
transform keys off ``ctx.threshold_px``; an uncalibrated plan leaves it at 0
so nothing can ever match.
"""

from __future__ import annotations

import logging

from plantsight.engine.context import SummaryContext
from plantsight.engine.registry import Layer, transform
from plantsight.utils.geometry import meters_to_pixels

logger = logging.getLogger(__name__)


@transform(
    id="T0.01",
    layer=Layer.METRICS,
    description="Convert the proximity threshold from meters to pixels",
)
def scale_calibration(ctx: SummaryContext) -> None:
    if not ctx.calibrated:
        ctx.threshold_px = 0.0
        logger.info("No scale calibration (ratio=%r): lengths, areas and matches resolve to 0", ctx.ratio)
        return

    ctx.threshold_px = meters_to_pixels(ctx.config.proximity_threshold_m, ctx.ratio)
    logger.debug(
        "Proximity threshold %.2fm = %.1fpx at %.4fm/px",
        ctx.config.proximity_threshold_m,
        ctx.threshold_px,
        ctx.ratio,
    )
