"""Endpoint proximity matching. No engine imports.

A cable's electrical terminations are its first and last points; routing
midpoints never take part in matching. A match is strict: distance must be
below the pixel threshold, never equal to it.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any, Literal, TypeVar

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.distance import cdist

from plantsight.utils.geometry import is_calibrated, meters_to_pixels

T = TypeVar("T")

TIE_BREAK_NEAREST = "nearest"
TIE_BREAK_FIRST = "first"
TieBreak = Literal["nearest", "first"]


def cable_endpoints(line: Any) -> tuple[Any, Any] | None:
    """(first, last) point of a polyline; None when it has no points."""
    if not line.points:
        return None
    return line.points[0], line.points[-1]


def _xy(p: Any) -> tuple[float, float]:
    return (p.x, p.y)


def endpoint_distances(reference: Any, lines: Sequence[Any]) -> NDArray[np.float64]:
    """(n, 2) pixel distances from ``reference`` to each line's first and last point.

    Lines without points get ``inf`` for both ends.
    """
    if not lines:
        return np.empty((0, 2))
    ends = np.full((len(lines) * 2, 2), np.nan)
    for i, line in enumerate(lines):
        pair = cable_endpoints(line)
        if pair is not None:
            ends[2 * i] = _xy(pair[0])
            ends[2 * i + 1] = _xy(pair[1])
    dists = cdist(np.array([_xy(reference)]), ends)[0].reshape(-1, 2)
    return np.where(np.isnan(dists), np.inf, dists)


def match_by_proximity(
    reference: Any,
    candidates: Sequence[T],
    threshold_m: float,
    ratio: float | None,
) -> list[T]:
    """Candidate polylines with an endpoint strictly within ``threshold_m`` of ``reference``.

    Input order is preserved. An uncalibrated ratio never matches.
    """
    if not is_calibrated(ratio) or not candidates:
        return []
    threshold_px = meters_to_pixels(threshold_m, ratio)
    dists = endpoint_distances(reference, candidates)
    hits = np.min(dists, axis=1) < threshold_px
    return [c for c, hit in zip(candidates, hits) if hit]


def points_near_line(
    line: Any,
    items: Sequence[T],
    threshold_m: float,
    ratio: float | None,
) -> list[T]:
    """Point items (``.position``) lying strictly within threshold of either cable end."""
    pair = cable_endpoints(line)
    if pair is None or not items or not is_calibrated(ratio):
        return []
    threshold_px = meters_to_pixels(threshold_m, ratio)
    positions = np.array([_xy(item.position) for item in items])
    dists = cdist(positions, np.array([_xy(pair[0]), _xy(pair[1])]))
    hits = np.min(dists, axis=1) < threshold_px
    return [item for item, hit in zip(items, hits) if hit]


def far_endpoint(line: Any, anchor: Any, threshold_px: float) -> Any | None:
    """The cable end that is not attached to ``anchor``.

    The start is the far end when it lies outside the threshold; otherwise
    the last point is.
    """
    pair = cable_endpoints(line)
    if pair is None:
        return None
    start, last = pair
    if math.hypot(start.x - anchor.x, start.y - anchor.y) >= threshold_px:
        return start
    return last


def panel_footprint(orientation: str, panel: Any) -> tuple[float, float]:
    """(width, length) of one panel in meters as laid in the array."""
    if orientation == "landscape":
        return panel.length, panel.width
    return panel.width, panel.length


def array_size_px(array: Any, panel: Any | None, ratio: float | None) -> tuple[float, float]:
    """Total (width, height) of an array block in pixels; (0, 0) when unknown."""
    if panel is None or not is_calibrated(ratio):
        return 0.0, 0.0
    orientation = getattr(array.orientation, "value", array.orientation)
    panel_w, panel_l = panel_footprint(orientation, panel)
    return array.columns * panel_w / ratio, array.rows * panel_l / ratio


def array_bounding_radius_px(array: Any, panel: Any | None, ratio: float | None) -> float:
    """Half-diagonal of the array footprint in pixels."""
    width, height = array_size_px(array, panel, ratio)
    return math.hypot(width / 2, height / 2)


def nearest_array(
    point: Any,
    arrays: Sequence[T],
    panel: Any | None,
    threshold_m: float,
    ratio: float | None,
    tie_break: TieBreak = TIE_BREAK_NEAREST,
) -> T | None:
    """PV array whose footprint-widened threshold contains ``point``.

    ``nearest`` picks the smallest center distance (input order settles exact
    ties); ``first`` picks the first candidate in input order.
    """
    if tie_break not in (TIE_BREAK_NEAREST, TIE_BREAK_FIRST):
        raise ValueError(f"Unknown array tie-break: {tie_break!r}")
    if point is None or not arrays or not is_calibrated(ratio):
        return None
    threshold_px = meters_to_pixels(threshold_m, ratio)

    centers = np.array([_xy(a.position) for a in arrays])
    dists = cdist(np.array([_xy(point)]), centers)[0]
    radii = np.array([array_bounding_radius_px(a, panel, ratio) for a in arrays])
    hits = np.flatnonzero(dists < radii + threshold_px)
    if len(hits) == 0:
        return None
    if tie_break == TIE_BREAK_FIRST:
        return arrays[int(hits[0])]
    # argmin returns the first index among equal minima
    return arrays[int(hits[np.argmin(dists[hits])])]
