"""Pipeline orchestrator — runs transforms in dependency order with scale gating."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time
from typing import Any

from plantsight.engine.config import EngineConfig
from plantsight.engine.context import SummaryContext
from plantsight.engine.registry import TransformRegistry, get_registry
from plantsight.models.snapshot import PlantSnapshot
from plantsight.models.summary import PlantSummary

logger = logging.getLogger(__name__)

_LAYER_PACKAGES = ["layer0", "layer1", "layer2", "layer3"]


class Pipeline:
    """Orchestrates the transform pipeline.

    A config passed here replaces the context's config on every run.
    """

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config

    def run(self, ctx: SummaryContext, targets: set[str] | None = None) -> SummaryContext:
        """Run the pipeline on the given context.

        ``targets`` limits the run to those transforms and everything they
        depend on; None runs all of them.
        """
        start = time.perf_counter()
        if self.config is not None:
            ctx.config = self.config

        ordered = self.registry.resolve_order(targets)
        skip_ids = self._scale_gate(ctx) & {s.id for s in ordered}

        logger.info(
            "Pipeline: %d transforms queued (%d skipped)",
            len(ordered) - len(skip_ids),
            len(skip_ids),
        )

        for spec in ordered:
            if spec.id in skip_ids:
                ctx.skipped_transforms.add(spec.id)
                continue
            self._run_one(ctx, spec)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms in %.1fms",
            len(ctx.completed_transforms),
            len(ordered),
            total,
        )
        return ctx

    def _run_one(self, ctx: SummaryContext, spec) -> None:
        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
            ctx.completed_transforms.add(spec.id)
            elapsed = (time.perf_counter() - t0) * 1000
            logger.debug("  %s completed in %.1fms", spec.id, elapsed)
        except Exception as e:
            ctx.errors[spec.id] = str(e)
            logger.warning("  %s FAILED: %s", spec.id, e)

    def _scale_gate(self, ctx: SummaryContext) -> set[str]:
        """Transforms to skip when the plan has no usable scale.

        Skipped matchers leave every connection unresolved, which the
        topology layer reports as unassigned.
        """
        if ctx.calibrated:
            return set()
        return {s.id for s in self.registry.all() if s.requires_scale}


def register_transforms() -> None:
    """Import all transform modules so @transform decorators fire."""
    for layer_name in _LAYER_PACKAGES:
        package_name = f"plantsight.engine.{layer_name}"
        try:
            package = importlib.import_module(package_name)
            for _, module_name, _ in pkgutil.iter_modules(package.__path__):
                importlib.import_module(f"{package_name}.{module_name}")
        except ModuleNotFoundError:
            logger.warning("Transform package %s not found", package_name)


def create_pipeline(config: EngineConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    register_transforms()
    return Pipeline(config=config)


def summarize(
    snapshot: PlantSnapshot | dict[str, Any],
    config: EngineConfig | None = None,
) -> PlantSummary:
    """Snapshot in, fully annotated summary out. Pure: the snapshot is not modified."""
    from plantsight.engine.formatter import context_to_summary
    from plantsight.snapshot.loader import build_context

    config = config or EngineConfig()
    ctx = build_context(snapshot, config)
    create_pipeline(config).run(ctx)
    return context_to_summary(ctx)
