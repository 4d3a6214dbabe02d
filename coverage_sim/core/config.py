"""Analysis configuration."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class AnalysisConfig:
    """Tunable parameters of an analysis run.

    Parameters
    ----------
    camera_resolution : float
        Cell size for camera coverage grids (plan units).
    wireless_resolution : float
        Cell size for wireless signal grids (plan units).
    max_cells : int
        Upper bound on grid cells; finer requests are rejected.
    obstruction_penalty : float
        Factor applied to camera coverage when a wall blocks the sight line.
    include_interference : bool
        Run the channel interference pass after wireless rasterization.
    gap_cluster_distance : float
        Clustering radius for uncovered cells (plan units).
    min_gap_cluster_size : int
        Clusters with more cells than this produce a coverage-gap recommendation.
    min_redundancy : float
        Average sensors per covered cell below which redundancy is flagged.
    min_sensor_efficiency : float
        Camera efficiency below which relocation is suggested.
    weak_average_signal_dbm, weak_client_signal_dbm : float
        Signal thresholds for the wireless recommendations.
    max_interference : float
        Average interference above which a channel plan is suggested.
    keep_finished_jobs : int
        Finished submitted jobs kept in the registry; older ones are dropped.
    """

    camera_resolution: float = 0.5
    wireless_resolution: float = 1.0
    max_cells: int = 250_000
    obstruction_penalty: float = 0.5
    include_interference: bool = True
    gap_cluster_distance: float = 5.0
    min_gap_cluster_size: int = 10
    min_redundancy: float = 1.2
    min_sensor_efficiency: float = 0.6
    weak_average_signal_dbm: float = -60.0
    max_interference: float = 0.3
    weak_client_signal_dbm: float = -70.0
    keep_finished_jobs: int = 100

    def __post_init__(self) -> None:
        if self.camera_resolution <= 0 or self.wireless_resolution <= 0:
            raise ValueError("Grid resolutions must be positive")
        if self.max_cells < 1:
            raise ValueError(f"max_cells must be at least 1, got {self.max_cells}")
        if not 0.0 <= self.obstruction_penalty <= 1.0:
            raise ValueError(f"obstruction_penalty must be in [0, 1], got {self.obstruction_penalty}")
        if self.gap_cluster_distance < 0:
            raise ValueError("gap_cluster_distance must be non-negative")
        if self.keep_finished_jobs < 0:
            raise ValueError(f"keep_finished_jobs must be non-negative, got {self.keep_finished_jobs}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnalysisConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
