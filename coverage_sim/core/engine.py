"""Run coverage, wireless and network analyses and track them as jobs."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from .config import AnalysisConfig
from .device import (
    AccessPoint,
    BandwidthRequirement,
    Camera,
    Connection,
    NetworkDevice,
    Sensor,
    WirelessClient,
    split_sensors,
)
from .floorplan import FloorPlan, ObstructionIndex
from .grid import CoverageCell, RasterGrid, WirelessCell
from .jobs import AnalysisJob, JobRegistry
from ..analysis.camera import rasterize_camera
from ..analysis.network import NetworkAnalysis, analyze_network
from ..analysis.recommendations import Recommendation, camera_recommendations, wireless_recommendations
from ..analysis.statistics import CoverageStatistics, WirelessStatistics, camera_statistics, wireless_statistics
from ..analysis.wireless import apply_interference, rasterize_access_point
from ..propagation.interference import optimize_channels

logger = logging.getLogger(__name__)

ResultSink = Callable[[object], None]


@dataclass
class AnalysisResult:
    """Camera coverage result for one floor plan."""

    floor_plan_id: str
    grid: RasterGrid
    statistics: CoverageStatistics
    recommendations: List[Recommendation] = field(default_factory=list)
    job_id: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "floor_plan_id": self.floor_plan_id,
            "job_id": self.job_id,
            "resolution": self.grid.resolution,
            "shape": list(self.grid.shape),
            "grid": self.grid.to_list(),
            "statistics": self.statistics.to_dict(),
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


@dataclass
class WirelessAnalysisResult(AnalysisResult):
    """Wireless signal result; ``statistics`` is a :class:`WirelessStatistics`."""

    access_points: List[AccessPoint] = field(default_factory=list)
    channel_plan: Dict[str, int] = field(default_factory=dict)
    """Suggested channel per AP network, see :func:`optimize_channels`."""

    def to_dict(self) -> dict:
        out = super().to_dict()
        out["access_points"] = [ap.id for ap in self.access_points]
        out["channel_plan"] = dict(self.channel_plan)
        return out


class AnalysisEngine:
    """Synchronous analysis runner.

    Every run builds its own grid and obstruction index, so independent runs
    share no mutable state. Progress is tracked on an :class:`AnalysisJob`.
    Jobs created with :meth:`submit` are held by this engine's
    :class:`JobRegistry`; a direct ``analyze_*`` call without a job is not
    recorded there.

    Parameters
    ----------
    config : AnalysisConfig, optional
        Run parameters (defaults used when omitted).
    result_sink : callable, optional
        Called with each finished result, in addition to it being returned.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None, result_sink: Optional[ResultSink] = None) -> None:
        self.config = config or AnalysisConfig()
        self.jobs = JobRegistry(keep_finished=self.config.keep_finished_jobs)
        self._result_sink = result_sink

    # ------------------------------------------------------------------
    def submit(self, kind: str) -> AnalysisJob:
        """Register a queued job to be passed to one of the ``analyze_*`` methods."""
        return self.jobs.create(kind)

    def _begin(self, kind: str, job: Optional[AnalysisJob]) -> AnalysisJob:
        # Direct calls get a throwaway job; only submitted jobs are registered.
        job = job or AnalysisJob(kind=kind)
        job.start()
        return job

    def _finish(self, job: AnalysisJob, result: object) -> None:
        job.complete(result)
        if self._result_sink is not None:
            self._result_sink(result)

    def _new_grid(self, floor_plan: FloorPlan, resolution: float, cell_type: type) -> RasterGrid:
        floor_plan.validate()
        return RasterGrid(floor_plan.bounds, resolution, cell_type=cell_type, max_cells=self.config.max_cells)

    @staticmethod
    def _sensor_progress(job: AnalysisJob, done: int, total: int) -> None:
        job.advance(10.0 + 80.0 * done / total)

    # ------------------------------------------------------------------
    # Camera coverage
    # ------------------------------------------------------------------

    def analyze_cameras(
        self,
        floor_plan: FloorPlan,
        sensors: Sequence[Sensor],
        job: Optional[AnalysisJob] = None,
    ) -> AnalysisResult:
        """Rasterize camera coverage over *floor_plan*.

        Access points in *sensors* are ignored here; see :meth:`analyze_wireless`.
        """
        job = self._begin("coverage", job)
        try:
            cameras, _ = split_sensors(sensors)
            result = self._run_cameras(floor_plan, cameras, job)
        except Exception as exc:
            job.fail(str(exc))
            logger.error("Coverage analysis %s failed: %s", job.id, exc)
            raise
        self._finish(job, result)
        return result

    def _run_cameras(self, floor_plan: FloorPlan, cameras: List[Camera], job: AnalysisJob) -> AnalysisResult:
        started = time.perf_counter()
        grid = self._new_grid(floor_plan, self.config.camera_resolution, CoverageCell)
        index = ObstructionIndex.from_floor_plan(floor_plan)
        logger.info(
            "Coverage analysis %s: %d camera(s), %dx%d grid, %d wall(s)",
            job.id, len(cameras), grid.cols, grid.rows, len(index),
        )
        job.advance(10.0)

        for i, camera in enumerate(cameras):
            reached = rasterize_camera(grid, camera, index, self.config.obstruction_penalty)
            logger.debug("Camera %s reached %d cell(s)", camera.id, reached)
            self._sensor_progress(job, i + 1, len(cameras))

        stats = camera_statistics(grid, floor_plan.bounds)
        job.advance(95.0)
        recs = camera_recommendations(grid, cameras, stats, self.config)

        logger.info(
            "Coverage analysis %s done in %.2fs: %.1f%% covered, %d recommendation(s)",
            job.id, time.perf_counter() - started, stats.coverage_percent, len(recs),
        )
        return AnalysisResult(
            floor_plan_id=floor_plan.id,
            grid=grid,
            statistics=stats,
            recommendations=recs,
            job_id=job.id,
        )

    # ------------------------------------------------------------------
    # Wireless coverage
    # ------------------------------------------------------------------

    def analyze_wireless(
        self,
        floor_plan: FloorPlan,
        sensors: Sequence[Sensor],
        clients: Sequence[WirelessClient] = (),
        job: Optional[AnalysisJob] = None,
    ) -> WirelessAnalysisResult:
        """Rasterize Wi-Fi signal strength and interference over *floor_plan*.

        Cameras in *sensors* are ignored here; Wi-Fi cameras whose link
        should be checked are passed as *clients*.
        """
        job = self._begin("wireless", job)
        try:
            _, access_points = split_sensors(sensors)
            result = self._run_wireless(floor_plan, access_points, list(clients), job)
        except Exception as exc:
            job.fail(str(exc))
            logger.error("Wireless analysis %s failed: %s", job.id, exc)
            raise
        self._finish(job, result)
        return result

    def _run_wireless(
        self,
        floor_plan: FloorPlan,
        access_points: List[AccessPoint],
        clients: List[WirelessClient],
        job: AnalysisJob,
    ) -> WirelessAnalysisResult:
        started = time.perf_counter()
        grid = self._new_grid(floor_plan, self.config.wireless_resolution, WirelessCell)
        index = ObstructionIndex.from_floor_plan(floor_plan)
        logger.info(
            "Wireless analysis %s: %d access point(s), %dx%d grid, %d wall(s)",
            job.id, len(access_points), grid.cols, grid.rows, len(index),
        )
        job.advance(10.0)

        for i, ap in enumerate(access_points):
            reached = rasterize_access_point(grid, ap, index)
            logger.debug("Access point %s reached %d cell(s)", ap.id, reached)
            self._sensor_progress(job, i + 1, len(access_points))

        if self.config.include_interference:
            apply_interference(grid, access_points)

        stats: WirelessStatistics = wireless_statistics(grid, floor_plan.bounds, access_points)
        job.advance(95.0)
        recs = wireless_recommendations(grid, access_points, clients, stats, self.config)

        logger.info(
            "Wireless analysis %s done in %.2fs: %.1f%% covered, avg %.1f dBm, %d recommendation(s)",
            job.id, time.perf_counter() - started, stats.coverage_percent,
            stats.average_signal_dbm, len(recs),
        )
        return WirelessAnalysisResult(
            floor_plan_id=floor_plan.id,
            grid=grid,
            statistics=stats,
            recommendations=recs,
            job_id=job.id,
            access_points=access_points,
            channel_plan=optimize_channels(access_points),
        )

    # ------------------------------------------------------------------
    # Network & channels
    # ------------------------------------------------------------------

    def analyze_network(
        self,
        devices: Sequence[NetworkDevice],
        connections: Sequence[Connection],
        requirements: Sequence[BandwidthRequirement] = (),
        job: Optional[AnalysisJob] = None,
    ) -> NetworkAnalysis:
        job = self._begin("network", job)
        try:
            result = analyze_network(devices, connections, requirements)
        except Exception as exc:
            job.fail(str(exc))
            logger.error("Network analysis %s failed: %s", job.id, exc)
            raise
        self._finish(job, result)
        return result

    def optimize_channels(self, sensors: Sequence[Sensor]) -> Dict[str, int]:
        """Channel plan for the access points in *sensors*."""
        _, access_points = split_sensors(sensors)
        return optimize_channels(access_points)
