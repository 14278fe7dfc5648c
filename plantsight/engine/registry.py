"""Transform registry — every transform is a standalone function registered via decorator.

Usage:
    @transform(id="T0.03", layer=Layer.METRICS, dependencies=["T0.01"])
    def cable_lengths(ctx: SummaryContext) -> None:
        for cable in ctx.cables:
            cable.length_m = line_length(cable.line.points, ctx.ratio)

Adding a new transform = creating one file with the decorator. Nothing else changes.
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from plantsight.engine.context import SummaryContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    METRICS = 0
    MATCHING = 1
    TOPOLOGY = 2
    AGGREGATION = 3


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["SummaryContext"], None]
    dependencies: list[str] = field(default_factory=list)
    # Transform produces nothing useful without a calibrated scale
    requires_scale: bool = False
    description: str = ""


class TransformRegistry:
    """Singleton registry of all transforms."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        specs = [s for s in self._transforms.values() if s.layer == layer]
        return sorted(specs, key=lambda s: s.id)

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: (s.layer, s.id))

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[TransformSpec]:
        """Topological sort respecting dependencies. If requested_ids is None, run all."""
        pool = self._transforms
        if requested_ids is not None:
            # Expand with transitive dependencies
            expanded: set[str] = set()
            stack = list(requested_ids)
            while stack:
                tid = stack.pop()
                if tid in expanded:
                    continue
                expanded.add(tid)
                spec = pool.get(tid)
                if spec:
                    stack.extend(spec.dependencies)
            pool = {k: v for k, v in pool.items() if k in expanded}

        # Kahn's algorithm; the heap keeps ties in ID order so runs are deterministic
        in_degree: dict[str, int] = {tid: 0 for tid in pool}
        dependents: dict[str, list[str]] = {tid: [] for tid in pool}
        for tid, spec in pool.items():
            for dep in spec.dependencies:
                if dep in pool:
                    in_degree[tid] += 1
                    dependents[dep].append(tid)

        ready = [tid for tid, d in in_degree.items() if d == 0]
        heapq.heapify(ready)
        ordered: list[TransformSpec] = []

        while ready:
            tid = heapq.heappop(ready)
            ordered.append(pool[tid])
            for other_id in dependents[tid]:
                in_degree[other_id] -= 1
                if in_degree[other_id] == 0:
                    heapq.heappush(ready, other_id)

        if len(ordered) != len(pool):
            missing = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {sorted(missing)}")

        return ordered

    def layer_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for spec in self.all():
            counts[spec.layer.name] = counts.get(spec.layer.name, 0) + 1
        return counts

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singleton
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    requires_scale: bool = False,
    description: str = "",
):
    """Decorator to register a transform function."""

    def decorator(fn: Callable[["SummaryContext"], None]):
        spec = TransformSpec(
            id=id,
            layer=layer,
            fn=fn,
            dependencies=dependencies or [],
            requires_scale=requires_scale,
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
