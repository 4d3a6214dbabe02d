"""Planar geometry helpers: distances, bearings, angle wrapping, segment tests."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

# Denominators below this are treated as parallel / degenerate segments.
PARALLEL_EPSILON = 1e-10


@dataclass(frozen=True)
class Point:
    """A position in the floor plan's local planar unit."""

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between *a* and *b*."""
    return math.hypot(a.x - b.x, a.y - b.y)


def normalize_angle(degrees: float) -> float:
    """Wrap *degrees* into ``[0, 360)``."""
    wrapped = degrees % 360.0
    # -1e-15 % 360 rounds up to exactly 360.0
    if wrapped >= 360.0:
        return 0.0
    return wrapped


def angular_difference(a: float, b: float) -> float:
    """Smallest absolute difference between two headings, in ``[0, 180]``."""
    diff = abs(normalize_angle(a) - normalize_angle(b))
    return min(diff, 360.0 - diff)


def bearing(origin: Point, target: Point) -> float:
    """Heading from *origin* to *target* in degrees, normalised to ``[0, 360)``.

    0° points along +x and angles grow towards +y.
    """
    return normalize_angle(math.degrees(math.atan2(target.y - origin.y, target.x - origin.x)))


def segments_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """Return *True* if segment (p1→p2) intersects segment (p3→p4).

    Parametric cross-product test. Parallel, collinear and zero-length
    segments (``|denominator| < 1e-10``) never intersect.
    """
    denom = (p1.x - p2.x) * (p3.y - p4.y) - (p1.y - p2.y) * (p3.x - p4.x)
    if abs(denom) < PARALLEL_EPSILON:
        return False

    t = ((p1.x - p3.x) * (p3.y - p4.y) - (p1.y - p3.y) * (p3.x - p4.x)) / denom
    u = -((p1.x - p2.x) * (p1.y - p3.y) - (p1.y - p2.y) * (p1.x - p3.x)) / denom
    return 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0


def segments_intersect_many(
    p1: Point,
    p2: Point,
    starts: np.ndarray,
    ends: np.ndarray,
) -> np.ndarray:
    """Vectorised :func:`segments_intersect` of one segment against many.

    Parameters
    ----------
    p1, p2 : Point
        The query segment.
    starts, ends : np.ndarray
        ``(N, 2)`` arrays holding the other segments' endpoints.

    Returns
    -------
    np.ndarray
        Boolean array of shape ``(N,)``.
    """
    if starts.size == 0:
        return np.zeros(0, dtype=bool)

    x3, y3 = starts[:, 0], starts[:, 1]
    x4, y4 = ends[:, 0], ends[:, 1]
    dx12 = p1.x - p2.x
    dy12 = p1.y - p2.y

    denom = dx12 * (y3 - y4) - dy12 * (x3 - x4)
    valid = np.abs(denom) >= PARALLEL_EPSILON
    safe = np.where(valid, denom, 1.0)

    t = ((p1.x - x3) * (y3 - y4) - (p1.y - y3) * (x3 - x4)) / safe
    u = -(dx12 * (p1.y - y3) - dy12 * (p1.x - x3)) / safe
    return valid & (t >= 0.0) & (t <= 1.0) & (u >= 0.0) & (u <= 1.0)
