"""Coverage statistics over a rasterized grid."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Sequence

import numpy as np

from ..core.device import AccessPoint
from ..core.floorplan import Bounds
from ..core.geometry import Point
from ..core.grid import QUALITY_TIERS, SIGNAL_FLOOR_DBM, RasterGrid


@dataclass
class CoverageStatistics:
    total_area: float = 0.0
    covered_area: float = 0.0
    total_cells: int = 0
    covered_cells: int = 0
    coverage_percent: float = 0.0
    redundancy_level: float = 0.0
    """Average number of sensors per covered cell."""
    quality_distribution: Dict[str, int] = field(default_factory=lambda: {q: 0 for q in QUALITY_TIERS})

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class WirelessStatistics(CoverageStatistics):
    average_signal_dbm: float = SIGNAL_FLOOR_DBM
    min_signal_dbm: float = SIGNAL_FLOOR_DBM
    max_signal_dbm: float = SIGNAL_FLOOR_DBM
    interference_level: float = 0.0
    """Mean interference over covered cells."""
    dead_zones: List[Point] = field(default_factory=list)
    channel_utilization: Dict[str, Dict[int, float]] = field(default_factory=dict)
    """``{band: {channel: % of covered cells served on that channel}}``."""


def _base_statistics(grid: RasterGrid, bounds: Bounds, stats: CoverageStatistics) -> np.ndarray:
    """Fill the fields shared by both grid kinds; returns the covered-cell mask."""
    total = grid.size
    covered_mask = np.array([cell.is_covered for cell in grid], dtype=bool).reshape(grid.shape)
    covered = int(covered_mask.sum())
    counts = grid.to_array("sensor_count")

    for cell in grid:
        stats.quality_distribution[cell.quality] += 1

    stats.total_area = bounds.width * bounds.height
    stats.total_cells = total
    stats.covered_cells = covered
    stats.covered_area = covered * (stats.total_area / total) if total else 0.0
    stats.coverage_percent = 100.0 * covered / total if total else 0.0
    stats.redundancy_level = float(counts[covered_mask].mean()) if covered else 0.0
    return covered_mask


def camera_statistics(grid: RasterGrid, bounds: Bounds) -> CoverageStatistics:
    """Coverage percentage, redundancy and quality histogram of a camera grid."""
    stats = CoverageStatistics()
    _base_statistics(grid, bounds, stats)
    return stats


def wireless_statistics(
    grid: RasterGrid,
    bounds: Bounds,
    access_points: Sequence[AccessPoint] = (),
) -> WirelessStatistics:
    """Camera statistics plus signal range, dead zones, interference and channel use."""
    stats = WirelessStatistics()
    covered_mask = _base_statistics(grid, bounds, stats)

    stats.dead_zones = [cell.origin for cell in grid if not cell.is_covered]

    if stats.covered_cells:
        signal = grid.to_array("value")[covered_mask]
        stats.average_signal_dbm = float(signal.mean())
        stats.min_signal_dbm = float(signal.min())
        stats.max_signal_dbm = float(signal.max())
        stats.interference_level = float(grid.to_array("interference")[covered_mask].mean())

    stats.channel_utilization = channel_utilization(grid, access_points, stats.covered_cells)
    return stats


def channel_utilization(
    grid: RasterGrid,
    access_points: Sequence[AccessPoint],
    covered_cells: int,
) -> Dict[str, Dict[int, float]]:
    """Share of covered cells that at least one AP on each channel reaches."""
    lookup = {ap.id: ap for ap in access_points}
    served: Dict[str, Dict[int, int]] = {}
    for ap in access_points:
        for a in ap.channels:
            served.setdefault(a.band, {}).setdefault(a.channel, 0)

    for cell in grid:
        if not cell.is_covered:
            continue
        channels = set()
        for ap_id in cell.sensor_ids:
            ap = lookup.get(ap_id)
            if ap is not None:
                channels.update((a.band, a.channel) for a in ap.channels)
        for band, channel in channels:
            served[band][channel] += 1

    return {
        band: {
            channel: (100.0 * n / covered_cells if covered_cells else 0.0)
            for channel, n in sorted(per_channel.items())
        }
        for band, per_channel in served.items()
    }


def sensor_efficiency(grid: RasterGrid, sensor_id: str) -> float:
    """Mean cell value over the cells *sensor_id* contributes to (0 if none)."""
    values = [cell.value for cell in grid if sensor_id in cell.sensor_ids]
    return float(np.mean(values)) if values else 0.0
