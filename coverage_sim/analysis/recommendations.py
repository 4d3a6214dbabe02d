"""Remediation suggestions derived from a coverage grid and its statistics."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Sequence

from ..core.config import AnalysisConfig
from ..core.device import AccessPoint, Camera, WirelessClient
from ..core.geometry import Point, distance
from ..core.grid import SIGNAL_FLOOR_DBM, RasterGrid
from ..propagation.interference import optimize_channels
from .statistics import CoverageStatistics, WirelessStatistics, sensor_efficiency


@dataclass
class RecommendedAction:
    type: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    estimated_cost: float = 0.0
    estimated_time: float = 0.0
    """Hours."""


@dataclass
class Recommendation:
    id: str
    type: str
    priority: str
    title: str
    description: str
    impact: str
    action: RecommendedAction

    def to_dict(self) -> dict:
        return asdict(self)


# ------------------------------------------------------------------
# Clustering
# ------------------------------------------------------------------

def cluster_points(points: Sequence[Point], max_distance: float) -> List[List[Point]]:
    """Single-pass greedy clustering.

    Each unvisited point seeds a cluster and claims every later unvisited
    point within *max_distance* of the seed. Membership is not transitive,
    so one contiguous region can split into several clusters.
    """
    clusters: List[List[Point]] = []
    visited = [False] * len(points)

    for i, seed in enumerate(points):
        if visited[i]:
            continue
        visited[i] = True
        cluster = [seed]
        for j in range(i + 1, len(points)):
            if not visited[j] and distance(seed, points[j]) <= max_distance:
                cluster.append(points[j])
                visited[j] = True
        clusters.append(cluster)

    return clusters


def cluster_center(cluster: Sequence[Point]) -> Point:
    n = len(cluster)
    return Point(sum(p.x for p in cluster) / n, sum(p.y for p in cluster) / n)


def _gap_clusters(points: Sequence[Point], config: AnalysisConfig) -> List[List[Point]]:
    return [
        cluster
        for cluster in cluster_points(points, config.gap_cluster_distance)
        if len(cluster) > config.min_gap_cluster_size
    ]


def _number(recommendations: List[Recommendation]) -> List[Recommendation]:
    for n, rec in enumerate(recommendations, start=1):
        rec.id = f"rec-{n:03d}"
    return recommendations


def _position(point: Point) -> Dict[str, float]:
    return {"x": point.x, "y": point.y}


# ------------------------------------------------------------------
# Camera coverage
# ------------------------------------------------------------------

def camera_recommendations(
    grid: RasterGrid,
    cameras: Sequence[Camera],
    stats: CoverageStatistics,
    config: AnalysisConfig,
) -> List[Recommendation]:
    """Coverage gaps, low redundancy and inefficient cameras.

    A grid with no covered cell has nothing to compare against and yields
    no recommendations.
    """
    recs: List[Recommendation] = []
    if not stats.covered_cells:
        return recs

    gaps = [cell.origin for cell in grid if not cell.is_covered]
    for cluster in _gap_clusters(gaps, config):
        center = cluster_center(cluster)
        recs.append(Recommendation(
            id="",
            type="coverage_gap",
            priority="high",
            title="Coverage Gap Detected",
            description=(
                f"Significant uncovered area of {len(cluster)} cells detected at "
                f"({center.x:.1f}, {center.y:.1f})"
            ),
            impact="Security vulnerability - blind spot in surveillance coverage",
            action=RecommendedAction(
                type="add_camera",
                parameters={"position": _position(center), "camera_type": "dome",
                            "reason": "Coverage gap mitigation"},
                estimated_cost=500.0,
                estimated_time=4.0,
            ),
        ))

    if stats.redundancy_level < config.min_redundancy:
        recs.append(Recommendation(
            id="",
            type="redundancy",
            priority="medium",
            title="Low Redundancy Level",
            description=(
                f"Current redundancy level is {stats.redundancy_level:.2f}, "
                f"below recommended {config.min_redundancy}"
            ),
            impact="Reduced system reliability - camera failures may create blind spots",
            action=RecommendedAction(
                type="add_camera",
                parameters={"reason": "Improve redundancy", "target_redundancy": 1.5},
                estimated_cost=300.0,
                estimated_time=2.0,
            ),
        ))

    for camera in cameras:
        efficiency = sensor_efficiency(grid, camera.id)
        if efficiency < config.min_sensor_efficiency:
            recs.append(Recommendation(
                id="",
                type="positioning",
                priority="medium",
                title="Camera Position Optimization",
                description=f"Camera {camera.label} has low coverage efficiency ({efficiency * 100:.1f}%)",
                impact="Suboptimal camera placement reduces coverage effectiveness",
                action=RecommendedAction(
                    type="move_camera",
                    parameters={"camera_id": camera.id, "efficiency": efficiency,
                                "reason": "Optimize coverage efficiency"},
                    estimated_cost=100.0,
                    estimated_time=1.0,
                ),
            ))

    return _number(recs)


# ------------------------------------------------------------------
# Wireless coverage
# ------------------------------------------------------------------

def signal_at(grid: RasterGrid, point: Point) -> float:
    """Best signal in the cell containing *point* (floor value outside the grid)."""
    cell = grid.cell_at(point)
    return SIGNAL_FLOOR_DBM if cell is None else cell.value


def wireless_recommendations(
    grid: RasterGrid,
    access_points: Sequence[AccessPoint],
    clients: Sequence[WirelessClient],
    stats: WirelessStatistics,
    config: AnalysisConfig,
) -> List[Recommendation]:
    """Dead zones, weak average signal, high interference and badly served clients."""
    recs: List[Recommendation] = []
    if not stats.covered_cells:
        return recs

    for cluster in _gap_clusters(stats.dead_zones, config):
        center = cluster_center(cluster)
        recs.append(Recommendation(
            id="",
            type="coverage_gap",
            priority="high",
            title="WiFi Dead Zone Detected",
            description=(
                f"Large WiFi dead zone of {len(cluster)} cells found at "
                f"({center.x:.1f}, {center.y:.1f})"
            ),
            impact="WiFi cameras in this area may have connectivity issues",
            action=RecommendedAction(
                type="add_access_point",
                parameters={"position": _position(center), "reason": "Eliminate dead zone"},
                estimated_cost=200.0,
                estimated_time=2.0,
            ),
        ))

    if stats.average_signal_dbm < config.weak_average_signal_dbm:
        recs.append(Recommendation(
            id="",
            type="signal_strength",
            priority="medium",
            title="Weak WiFi Signal Coverage",
            description=f"Average signal strength is {stats.average_signal_dbm:.1f} dBm",
            impact="Poor signal may cause intermittent connectivity issues",
            action=RecommendedAction(
                type="increase_signal_power",
                parameters={"reason": "Improve overall signal strength"},
                estimated_cost=50.0,
                estimated_time=1.0,
            ),
        ))

    if stats.interference_level > config.max_interference:
        recs.append(Recommendation(
            id="",
            type="interference",
            priority="medium",
            title="High WiFi Interference",
            description=f"Interference level is {stats.interference_level * 100:.1f}%",
            impact="High interference may cause reduced throughput and reliability",
            action=RecommendedAction(
                type="optimize_wifi_channel",
                parameters={"reason": "Reduce channel conflicts",
                            "channel_plan": optimize_channels(access_points)},
                estimated_cost=0.0,
                estimated_time=0.5,
            ),
        ))

    for client in clients:
        if not client.wifi_capable:
            continue
        signal = signal_at(grid, client.position)
        if signal < config.weak_client_signal_dbm:
            recs.append(Recommendation(
                id="",
                type="signal_strength",
                priority="high",
                title=f"Weak Signal at {client.label}",
                description=f"Device has signal strength of {signal:.1f} dBm",
                impact="Camera may experience connectivity issues or reduced video quality",
                action=RecommendedAction(
                    type="add_access_point",
                    parameters={"position": _position(client.position), "device_id": client.id,
                                "reason": f"Improve signal for {client.label}"},
                    estimated_cost=200.0,
                    estimated_time=2.0,
                ),
            ))

    return _number(recs)
