"""Raster grid of coverage cells laid over a floor plan."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Literal, Optional, Set, Tuple, Type

import numpy as np

from .errors import GridTooLargeError, InvalidFloorPlanError
from .floorplan import Bounds
from .geometry import Point

QualityTier = Literal["none", "poor", "fair", "good", "excellent"]

# Worst to best.
QUALITY_TIERS: Tuple[str, ...] = ("none", "poor", "fair", "good", "excellent")

SIGNAL_FLOOR_DBM = -100.0


def camera_quality(value: float, sensor_count: int) -> str:
    """Coverage tier from camera value plus a redundancy bonus capped at +0.2."""
    if value <= 0:
        return "none"
    combined = value + min(max(sensor_count - 1, 0), 2) * 0.1
    if combined >= 0.8:
        return "excellent"
    if combined >= 0.6:
        return "good"
    if combined >= 0.4:
        return "fair"
    return "poor"


def signal_quality(signal_dbm: float) -> str:
    """Signal tier from received power (dBm)."""
    if signal_dbm >= -30:
        return "excellent"
    if signal_dbm >= -50:
        return "good"
    if signal_dbm >= -70:
        return "fair"
    if signal_dbm >= -85:
        return "poor"
    return "none"


@dataclass
class CoverageCell:
    """One grid cell of a camera coverage map.

    ``x``/``y`` are the cell origin; measurements are taken at :attr:`center`.
    """

    x: float
    y: float
    size: float
    value: float = 0.0
    sensor_ids: Set[str] = field(default_factory=set)

    @property
    def center(self) -> Point:
        half = self.size / 2
        return Point(self.x + half, self.y + half)

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    @property
    def quality(self) -> str:
        return camera_quality(self.value, len(self.sensor_ids))

    @property
    def is_covered(self) -> bool:
        return self.quality != "none"

    def merge(self, value: float, sensor_id: str) -> None:
        """Max-combine *value* into the cell; contributors only ever grow."""
        if value > self.value:
            self.value = value
        if value > 0:
            self.sensor_ids.add(sensor_id)

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "value": self.value,
            "sensor_ids": sorted(self.sensor_ids),
            "quality": self.quality,
        }


@dataclass
class WirelessCell(CoverageCell):
    """Grid cell of a wireless map; ``value`` is the best signal in dBm."""

    value: float = SIGNAL_FLOOR_DBM
    band: Optional[str] = None
    interference: float = 0.0

    @property
    def quality(self) -> str:
        return signal_quality(self.value)

    def merge(self, value: float, sensor_id: str) -> None:
        raise TypeError("WirelessCell holds dBm values; use merge_signal(signal_dbm, band, sensor_id)")

    def merge_signal(self, signal_dbm: float, band: str, sensor_id: str) -> None:
        if signal_dbm > SIGNAL_FLOOR_DBM:
            self.sensor_ids.add(sensor_id)
        if signal_dbm > self.value:
            self.value = signal_dbm
            self.band = band

    def to_dict(self) -> dict:
        out = super().to_dict()
        out["band"] = self.band
        out["interference"] = self.interference
        return out


def grid_shape(bounds: Bounds, resolution: float) -> Tuple[int, int]:
    """``(rows, cols)`` for *bounds* at *resolution*; shared by every rasterizer."""
    if not resolution > 0 or not math.isfinite(resolution):
        raise InvalidFloorPlanError(f"Resolution must be a positive number, got {resolution}")
    return math.ceil(bounds.height / resolution), math.ceil(bounds.width / resolution)


class RasterGrid:
    """Fixed-size cells covering ``bounds``.

    Parameters
    ----------
    bounds : Bounds
        Floor plan extent.
    resolution : float
        Cell edge length in plan units.
    cell_type : type
        :class:`CoverageCell` or :class:`WirelessCell`.
    max_cells : int, optional
        Refuse to build grids larger than this.
    """

    def __init__(
        self,
        bounds: Bounds,
        resolution: float,
        cell_type: Type[CoverageCell] = CoverageCell,
        max_cells: Optional[int] = None,
    ) -> None:
        self.bounds = bounds
        self.resolution = resolution
        self.rows, self.cols = grid_shape(bounds, resolution)
        if max_cells is not None and self.rows * self.cols > max_cells:
            raise GridTooLargeError(
                f"{self.cols} x {self.rows} grid ({self.rows * self.cols} cells) exceeds "
                f"the limit of {max_cells}; use a coarser resolution"
            )

        self.cells: List[List[CoverageCell]] = [
            [cell_type(x=c * resolution, y=r * resolution, size=resolution) for c in range(self.cols)]
            for r in range(self.rows)
        ]

        # Cell-centre coordinate arrays
        self.xs: np.ndarray = np.arange(self.cols) * resolution + resolution / 2
        self.ys: np.ndarray = np.arange(self.rows) * resolution + resolution / 2
        self.grid_x: np.ndarray
        self.grid_y: np.ndarray
        self.grid_x, self.grid_y = np.meshgrid(self.xs, self.ys)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def __iter__(self) -> Iterator[CoverageCell]:
        for row in self.cells:
            yield from row

    def distance_grid(self, point: Point) -> np.ndarray:
        """Distances from *point* to every cell centre."""
        return np.hypot(self.grid_x - point.x, self.grid_y - point.y)

    def cell_at(self, point: Point) -> Optional[CoverageCell]:
        """Cell containing *point*, or ``None`` outside the grid."""
        if point.x < 0 or point.y < 0:
            return None
        col = int(point.x // self.resolution)
        row = int(point.y // self.resolution)
        if row >= self.rows or col >= self.cols:
            return None
        return self.cells[row][col]

    def to_array(self, attr: str = "value") -> np.ndarray:
        """Per-cell attribute as a ``(rows, cols)`` float array.

        ``attr`` may be a cell attribute or ``"sensor_count"``.
        """
        if attr == "sensor_count":
            data = [[len(cell.sensor_ids) for cell in row] for row in self.cells]
        else:
            data = [[getattr(cell, attr) for cell in row] for row in self.cells]
        return np.array(data, dtype=np.float64).reshape(self.shape)

    def to_list(self) -> List[List[dict]]:
        return [[cell.to_dict() for cell in row] for row in self.cells]
