"""Matplotlib heatmaps of camera coverage, Wi-Fi signal and interference grids."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from ..core.device import AccessPoint, Camera, Sensor, split_sensors
from ..core.engine import AnalysisResult, WirelessAnalysisResult
from ..core.floorplan import FloorPlan
from ..core.grid import SIGNAL_FLOOR_DBM

# Element kind -> line colour
_ELEMENT_COLORS = {"wall": "black", "door": "saddlebrown", "window": "deepskyblue"}


# ------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------

def _draw_floor_plan(ax: plt.Axes, floor_plan: FloorPlan) -> None:  # type: ignore[name-defined]
    """Draw floor elements; walls are labelled with their material."""
    for element in floor_plan.elements:
        x1, y1 = element.start.as_tuple()
        x2, y2 = element.end.as_tuple()
        color = _ELEMENT_COLORS.get(element.kind, "black")
        ax.plot([x1, x2], [y1, y2], linewidth=3.0, color="white", linestyle="-")
        ax.plot([x1, x2], [y1, y2], linewidth=1.8, color=color, linestyle="-")
        if element.kind != "wall":
            continue
        ax.annotate(
            element.material,
            ((x1 + x2) / 2, (y1 + y2) / 2),
            fontsize=7,
            color="white",
            fontweight="bold",
            ha="center",
            va="bottom",
            bbox=dict(boxstyle="round,pad=0.15", fc="black", alpha=0.6),
        )


def _draw_cameras(ax: plt.Axes, cameras: Sequence[Camera]) -> None:  # type: ignore[name-defined]
    for cam in cameras:
        x, y = cam.position.as_tuple()
        ax.plot(x, y, "o", color="lime", markersize=9, markeredgecolor="black", label=cam.label)
        heading = np.radians(cam.direction_degrees)
        reach = cam.range_units * 0.25
        ax.annotate(
            "",
            xy=(x + reach * np.cos(heading), y + reach * np.sin(heading)),
            xytext=(x, y),
            arrowprops=dict(arrowstyle="->", color="lime", lw=1.5),
        )


def _draw_access_points(ax: plt.Axes, access_points: Sequence[AccessPoint]) -> None:  # type: ignore[name-defined]
    for ap in access_points:
        x, y = ap.position.as_tuple()
        ax.plot(x, y, "s", color="cyan", markersize=11, markeredgecolor="black", label=ap.label)


def _base_heatmap(
    data: np.ndarray,
    resolution: float,
    floor_plan: FloorPlan,
    sensors: Sequence[Sensor],
    title: str,
    cbar_label: str,
    cmap: str = "viridis",
    vmin: Optional[float] = None,
    vmax: Optional[float] = None,
    save_path: Optional[str | Path] = None,
    figsize: tuple[int, int] = (10, 8),
    grid_lines: bool = False,
) -> plt.Figure:  # type: ignore[name-defined]
    fig, ax = plt.subplots(figsize=figsize)
    rows, cols = data.shape
    # Last row/column may overhang the plan edge
    extent = [0, cols * resolution, 0, rows * resolution]
    im = ax.imshow(
        data, origin="lower", extent=extent, cmap=cmap, aspect="equal", vmin=vmin, vmax=vmax
    )
    cbar = fig.colorbar(im, ax=ax)
    cbar.set_label(cbar_label)

    cameras, access_points = split_sensors(sensors)
    _draw_floor_plan(ax, floor_plan)
    _draw_cameras(ax, cameras)
    _draw_access_points(ax, access_points)

    ax.set_xlim(0, floor_plan.bounds.width)
    ax.set_ylim(0, floor_plan.bounds.height)
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_title(title)
    if grid_lines:
        ax.grid(True, alpha=0.3, linestyle="--")
    if cameras or access_points:
        ax.legend(loc="upper right", fontsize=8)
    fig.tight_layout()
    if save_path:
        fig.savefig(str(save_path), dpi=150)
    return fig


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------

def plot_camera_coverage(
    result: AnalysisResult,
    floor_plan: FloorPlan,
    sensors: Sequence[Sensor] = (),
    save_path: Optional[str | Path] = None,
    grid_lines: bool = False,
) -> plt.Figure:  # type: ignore[name-defined]
    """Per-cell camera coverage value (0 to 1)."""
    stats = result.statistics
    return _base_heatmap(
        result.grid.to_array("value"), result.grid.resolution, floor_plan, sensors,
        f"Camera Coverage ({stats.coverage_percent:.1f}% covered)", "Coverage",
        cmap="RdYlGn", vmin=0.0, vmax=1.0, save_path=save_path, grid_lines=grid_lines,
    )


def plot_signal_strength(
    result: WirelessAnalysisResult,
    floor_plan: FloorPlan,
    sensors: Sequence[Sensor] = (),
    save_path: Optional[str | Path] = None,
    grid_lines: bool = False,
) -> plt.Figure:  # type: ignore[name-defined]
    """Best received signal per cell, dBm."""
    if not sensors:
        sensors = result.access_points
    return _base_heatmap(
        result.grid.to_array("value"), result.grid.resolution, floor_plan, sensors,
        f"Wi-Fi Signal (avg {result.statistics.average_signal_dbm:.1f} dBm)", "Signal (dBm)",
        cmap="inferno", vmin=SIGNAL_FLOOR_DBM, vmax=-30.0, save_path=save_path, grid_lines=grid_lines,
    )


def plot_interference(
    result: WirelessAnalysisResult,
    floor_plan: FloorPlan,
    sensors: Sequence[Sensor] = (),
    save_path: Optional[str | Path] = None,
    grid_lines: bool = False,
) -> plt.Figure:  # type: ignore[name-defined]
    """Co-channel interference score per cell (0 to 1)."""
    if not sensors:
        sensors = result.access_points
    return _base_heatmap(
        result.grid.to_array("interference"), result.grid.resolution, floor_plan, sensors,
        "Channel Interference", "Interference",
        cmap="hot", vmin=0.0, vmax=1.0, save_path=save_path, grid_lines=grid_lines,
    )
