"""PlantSight topology inference and aggregation engine."""

from plantsight.engine.registry import transform, Layer, get_registry
from plantsight.engine.context import SummaryContext
from plantsight.engine.config import EngineConfig
from plantsight.engine.pipeline import Pipeline, create_pipeline, summarize

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "SummaryContext",
    "EngineConfig",
    "Pipeline",
    "create_pipeline",
    "summarize",
]
