"""Wireless signal rasterizer and interference pass."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from ..core.device import AccessPoint
from ..core.floorplan import ObstructionIndex
from ..core.geometry import Point, distance
from ..core.grid import RasterGrid, WirelessCell
from ..propagation.interference import build_channel_map, cell_interference
from ..propagation.pathloss import received_signal_dbm
from ..protocols.base import Band
from ..protocols.wifi import get_band

_RANGE_SLACK = 1.0 + 1e-9


def point_signal(
    ap: AccessPoint,
    band: Band,
    point: Point,
    index: ObstructionIndex,
) -> Optional[float]:
    """Signal (dBm) from *ap* on *band* at *point*, or ``None`` beyond the band's range."""
    band_range = ap.band_ranges.get(band.name)
    if band_range is None:
        return None
    d = distance(point, ap.position)
    if d > band_range:
        return None
    obstructions = index.obstructions_between(ap.position, point)
    return received_signal_dbm(ap.transmit_power_dbm, d, band, obstructions)


def rasterize_access_point(grid: RasterGrid, ap: AccessPoint, index: ObstructionIndex) -> int:
    """Merge every band of *ap* into *grid*; returns the number of cells it reached."""
    dist = grid.distance_grid(ap.position)
    reached = set()

    for band_name in ap.bands():
        band = get_band(band_name)
        rows, cols = np.nonzero(dist <= ap.band_ranges[band_name] * _RANGE_SLACK)
        for r, c in zip(rows.tolist(), cols.tolist()):
            cell = grid.cells[r][c]
            signal = point_signal(ap, band, cell.center, index)
            if signal is None:
                continue
            cell.merge_signal(signal, band.name, ap.id)
            if ap.id in cell.sensor_ids:
                reached.add((r, c))
    return len(reached)


def apply_interference(grid: RasterGrid, access_points: Sequence[AccessPoint]) -> None:
    """Score channel conflicts for every cell reached by at least one AP."""
    lookup = {ap.id: ap for ap in access_points}
    channel_map = build_channel_map(access_points)
    for cell in grid:
        if cell.sensor_ids and isinstance(cell, WirelessCell):
            cell.interference = cell_interference(cell.sensor_ids, lookup, channel_map)
