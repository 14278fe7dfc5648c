"""POST /api/summary, /api/topology — full pipeline over a geometry snapshot."""

from __future__ import annotations

import dataclasses
import time

from fastapi import APIRouter, Depends

from plantsight.dependencies import get_engine_config
from plantsight.engine.config import EngineConfig
from plantsight.engine.context import SummaryContext
from plantsight.engine.formatter import context_to_summary, context_to_topology
from plantsight.engine.pipeline import create_pipeline
from plantsight.models.requests import SummaryRequest
from plantsight.models.responses import SummaryResponse, TopologyResponse
from plantsight.snapshot.loader import build_context

router = APIRouter()

# Topology tree plus per-inverter and per-board loading
_TOPOLOGY_TARGETS = {"T2.01", "T3.02"}


def _run(req: SummaryRequest, base: EngineConfig, targets: set[str] | None = None) -> SummaryContext:
    overrides = {k: v for k, v in req.options.model_dump().items() if v is not None}
    config = dataclasses.replace(base, **overrides)

    ctx = build_context(req.snapshot, config)
    return create_pipeline(config).run(ctx, targets)


@router.post("/summary", response_model=SummaryResponse)
async def summary(
    req: SummaryRequest,
    config: EngineConfig = Depends(get_engine_config),
) -> SummaryResponse:
    start = time.perf_counter()
    ctx = _run(req, config)
    result = context_to_summary(ctx)
    elapsed = (time.perf_counter() - start) * 1000

    return SummaryResponse(
        summary=result,
        processing_time_ms=round(elapsed, 1),
        transforms_completed=len(ctx.completed_transforms),
        transforms_skipped=len(ctx.skipped_transforms),
        transforms_failed=len(ctx.errors),
        errors=ctx.errors,
    )


@router.post("/topology", response_model=TopologyResponse)
async def topology(
    req: SummaryRequest,
    config: EngineConfig = Depends(get_engine_config),
) -> TopologyResponse:
    start = time.perf_counter()
    ctx = _run(req, config, _TOPOLOGY_TARGETS)
    elapsed = (time.perf_counter() - start) * 1000

    return TopologyResponse(
        topology=context_to_topology(ctx),
        calibrated=ctx.calibrated,
        processing_time_ms=round(elapsed, 1),
    )
