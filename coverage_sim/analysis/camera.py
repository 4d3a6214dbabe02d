"""Camera field-of-view coverage rasterizer."""

from __future__ import annotations

import numpy as np

from ..core.device import Camera
from ..core.floorplan import ObstructionIndex
from ..core.geometry import Point, angular_difference, bearing, distance
from ..core.grid import RasterGrid

# Edge-of-FOV cells keep at least this fraction of their radial value.
MIN_EDGE_FACTOR = 0.1

# Loose prefilter so numpy/math rounding never drops a boundary cell.
_RANGE_SLACK = 1.0 + 1e-9


def point_coverage(
    camera: Camera,
    point: Point,
    index: ObstructionIndex,
    obstruction_penalty: float = 0.5,
) -> float:
    """Coverage value (0–1) that *camera* provides at *point*.

    Falls linearly from 1 at the lens to 0 at ``range_units``, is multiplied
    by *obstruction_penalty* if any wall blocks the sight line, and fades
    towards the FOV edge down to 10 % of the radial value.
    """
    d = distance(point, camera.position)
    if d > camera.range_units:
        return 0.0

    half_fov = camera.fov_degrees / 2
    diff = angular_difference(camera.direction_degrees, bearing(camera.position, point))
    if diff > half_fov:
        return 0.0

    value = max(0.0, 1.0 - d / camera.range_units)
    if value == 0.0:
        return 0.0

    if index.is_obstructed(camera.position, point):
        value *= obstruction_penalty

    value *= max(MIN_EDGE_FACTOR, 1.0 - (diff / half_fov) * 0.5)
    return max(0.0, min(1.0, value))


def rasterize_camera(
    grid: RasterGrid,
    camera: Camera,
    index: ObstructionIndex,
    obstruction_penalty: float = 0.5,
) -> int:
    """Merge *camera*'s coverage into *grid*; returns the number of cells it reached."""
    dist = grid.distance_grid(camera.position)
    rows, cols = np.nonzero(dist <= camera.range_units * _RANGE_SLACK)

    reached = 0
    for r, c in zip(rows.tolist(), cols.tolist()):
        cell = grid.cells[r][c]
        value = point_coverage(camera, cell.center, index, obstruction_penalty)
        if value > 0:
            cell.merge(value, camera.id)
            reached += 1
    return reached
