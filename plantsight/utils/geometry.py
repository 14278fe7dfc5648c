"""Leaf-node geometry helpers. No engine imports.

All coordinates are canvas pixels. Real-world values come from a single
meters-per-pixel ratio; a missing or zero ratio resolves every derived
metric to 0.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon


def to_array(points: Iterable[Any]) -> NDArray[np.float64]:
    """Nx2 array from Point-like objects (``.x``/``.y``) or (x, y) pairs."""
    rows = [(p.x, p.y) if hasattr(p, "x") else (p[0], p[1]) for p in points]
    if not rows:
        return np.empty((0, 2))
    return np.asarray(rows, dtype=np.float64)


def is_calibrated(ratio: float | None) -> bool:
    return bool(ratio) and math.isfinite(ratio) and ratio > 0


def pixels_to_meters(d: float, ratio: float | None) -> float:
    if not is_calibrated(ratio):
        return 0.0
    return float(d * ratio)


def meters_to_pixels(m: float, ratio: float | None) -> float:
    if not is_calibrated(ratio):
        return 0.0
    return float(m / ratio)


def signed_area(points: NDArray[np.float64]) -> float:
    """Shoelace formula with implicit closing edge. Positive = CCW, Negative = CW."""
    if len(points) < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def polygon_area(points: Iterable[Any], ratio: float | None) -> float:
    """Polygon area in m². Fewer than 3 vertices or no calibration gives 0."""
    if not is_calibrated(ratio):
        return 0.0
    pixel_area = abs(signed_area(to_array(points)))
    return pixel_area * ratio**2


def arc_lengths(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Cumulative arc-length along a point sequence."""
    if len(points) == 0:
        return np.zeros(0)
    diffs = np.diff(points, axis=0)
    segment_lengths = np.sqrt(np.sum(diffs**2, axis=1))
    return np.concatenate([[0.0], np.cumsum(segment_lengths)])


def line_length(points: Iterable[Any], ratio: float | None) -> float:
    """Polyline length in meters (sum of segment lengths)."""
    if not is_calibrated(ratio):
        return 0.0
    arr = to_array(points)
    if len(arr) < 2:
        return 0.0
    return float(arc_lengths(arr)[-1] * ratio)


def point_distance(a: Any, b: Any) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def point_in_polygon(point: Any, polygon: Iterable[Any]) -> bool:
    """Containment test (boundary counts as inside)."""
    ring = to_array(polygon)
    if len(ring) < 3:
        return False
    poly = Polygon(ring)
    if not poly.is_valid:
        poly = poly.buffer(0)
    return bool(poly.covers(ShapelyPoint(point.x, point.y)))


def array_corners(
    center: Any,
    total_width_px: float,
    total_height_px: float,
    rotation_deg: float = 0.0,
) -> list[tuple[float, float]]:
    """Corners of a rectangular footprint rotated about its center.

    Order: top-left, top-right, bottom-right, bottom-left (before rotation).
    """
    hw = total_width_px / 2
    hh = total_height_px / 2
    local = np.array([[-hw, -hh], [hw, -hh], [hw, hh], [-hw, hh]])

    theta = math.radians(rotation_deg)
    rot = np.array([[math.cos(theta), -math.sin(theta)], [math.sin(theta), math.cos(theta)]])
    world = local @ rot.T + np.array([center.x, center.y])
    return [(float(x), float(y)) for x, y in world]
