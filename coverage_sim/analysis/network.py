"""Network topology analysis over the device connection graph.

Paths are hop-count shortest paths (BFS). Latency, bandwidth and
reliability come from per-cable-type tables; the MTBF figure is a
heuristic placeholder, not a calibrated reliability model.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Sequence

import networkx as nx

from ..core.device import BandwidthRequirement, Connection, NetworkDevice

logger = logging.getLogger(__name__)

# Signal propagation delay, nanoseconds per metre
PROPAGATION_DELAY_NS: Dict[str, float] = {
    "cat5e": 5.0,
    "cat6": 5.0,
    "cat6a": 5.0,
    "fiber": 3.0,
}
DEFAULT_PROPAGATION_DELAY_NS = 10.0

CABLE_RELIABILITY: Dict[str, float] = {
    "fiber": 0.999,
    "cat6a": 0.995,
    "cat6": 0.99,
}
DEFAULT_CABLE_RELIABILITY = 0.98

# Nominal link rate, Mbps
CABLE_BANDWIDTH_MBPS: Dict[str, float] = {
    "cat5e": 1000.0,
    "cat6": 1000.0,
    "cat6a": 10000.0,
    "fiber": 10000.0,
}
DEFAULT_CABLE_BANDWIDTH_MBPS = 100.0

BOTTLENECK_MBPS = 100.0
SEVERE_BOTTLENECK_MBPS = 10.0
CRITICAL_LATENCY_FACTOR = 1.5
HOURS_PER_YEAR = 8760.0


@dataclass(frozen=True)
class NetworkPath:
    from_id: str
    to_id: str
    path: List[str]
    latency: float
    """Nanoseconds."""
    bandwidth: float
    """Mbps."""
    reliability: float


@dataclass
class Bottleneck:
    connection_id: str
    location: str
    bandwidth: float
    severity: float
    impact: str = "Limited bandwidth may affect video quality"
    recommendation: str = "Consider upgrading to higher bandwidth cable"


@dataclass
class CriticalPath:
    devices: List[str]
    latency: float
    impact: str = "High latency may affect real-time monitoring"


@dataclass
class FailurePoint:
    device: str
    probability: float = 0.1
    impact: str = "Device will be isolated if connection fails"
    mitigation: str = "Add redundant connection"


@dataclass
class BandwidthAnalysis:
    total_required: float = 0.0
    total_available: float = 0.0
    utilization: float = 0.0
    bottlenecks: List[Bottleneck] = field(default_factory=list)


@dataclass
class LatencyAnalysis:
    average_latency: float = 0.0
    max_latency: float = 0.0
    critical_paths: List[CriticalPath] = field(default_factory=list)


@dataclass
class ReliabilityAnalysis:
    redundancy: float = 0.0
    failure_points: List[FailurePoint] = field(default_factory=list)
    mtbf: float = HOURS_PER_YEAR
    """Hours."""


@dataclass
class NetworkAnalysis:
    paths: List[NetworkPath] = field(default_factory=list)
    bandwidth: BandwidthAnalysis = field(default_factory=BandwidthAnalysis)
    latency: LatencyAnalysis = field(default_factory=LatencyAnalysis)
    reliability: ReliabilityAnalysis = field(default_factory=ReliabilityAnalysis)

    def to_dict(self) -> dict:
        return asdict(self)


# ------------------------------------------------------------------
# Per-cable tables
# ------------------------------------------------------------------

def connection_bandwidth(connection: Connection) -> float:
    if connection.bandwidth is not None:
        return connection.bandwidth
    return CABLE_BANDWIDTH_MBPS.get(connection.cable_type, DEFAULT_CABLE_BANDWIDTH_MBPS)


def connection_latency(connection: Connection) -> float:
    delay = PROPAGATION_DELAY_NS.get(connection.cable_type, DEFAULT_PROPAGATION_DELAY_NS)
    return (connection.length or 0.0) * delay


def connection_reliability(connection: Connection) -> float:
    return CABLE_RELIABILITY.get(connection.cable_type, DEFAULT_CABLE_RELIABILITY)


# ------------------------------------------------------------------
# Graph & paths
# ------------------------------------------------------------------

def build_graph(devices: Sequence[NetworkDevice], connections: Sequence[Connection]) -> nx.Graph:
    """Undirected device graph; the first connection between a pair becomes its edge."""
    graph = nx.Graph()
    for device in devices:
        graph.add_node(device.id, name=device.name, kind=device.kind)
    for conn in connections:
        if conn.from_id == conn.to_id or graph.has_edge(conn.from_id, conn.to_id):
            continue
        graph.add_edge(conn.from_id, conn.to_id, connection=conn)
    return graph


def shortest_path(graph: nx.Graph, from_id: str, to_id: str) -> List[str]:
    """Fewest-hop path between two devices, or ``[]`` if they are not connected."""
    if from_id not in graph or to_id not in graph:
        return []
    try:
        return list(nx.shortest_path(graph, from_id, to_id))
    except nx.NetworkXNoPath:
        return []


def _edges(graph: nx.Graph, path: Sequence[str]) -> List[Connection]:
    return [graph.edges[a, b]["connection"] for a, b in zip(path, path[1:])]


def path_latency(graph: nx.Graph, path: Sequence[str]) -> float:
    return sum(connection_latency(c) for c in _edges(graph, path))


def path_bandwidth(graph: nx.Graph, path: Sequence[str]) -> float:
    """Narrowest link on *path* (0 for a path without links)."""
    rates = [connection_bandwidth(c) for c in _edges(graph, path)]
    return min(rates) if rates else 0.0


def path_reliability(graph: nx.Graph, path: Sequence[str]) -> float:
    reliability = 1.0
    for conn in _edges(graph, path):
        reliability *= connection_reliability(conn)
    return reliability


def network_paths(graph: nx.Graph, devices: Sequence[NetworkDevice]) -> List[NetworkPath]:
    """Shortest path and link metrics for every connected device pair."""
    paths: List[NetworkPath] = []
    for i, src in enumerate(devices):
        for dst in devices[i + 1:]:
            path = shortest_path(graph, src.id, dst.id)
            if not path:
                continue
            paths.append(NetworkPath(
                from_id=src.id,
                to_id=dst.id,
                path=path,
                latency=path_latency(graph, path),
                bandwidth=path_bandwidth(graph, path),
                reliability=path_reliability(graph, path),
            ))
    return paths


# ------------------------------------------------------------------
# Heuristics
# ------------------------------------------------------------------

def find_bottlenecks(connections: Sequence[Connection]) -> List[Bottleneck]:
    out: List[Bottleneck] = []
    for conn in connections:
        rate = connection_bandwidth(conn)
        if rate < BOTTLENECK_MBPS:
            out.append(Bottleneck(
                connection_id=conn.id,
                location=f"{conn.from_id} -> {conn.to_id}",
                bandwidth=rate,
                severity=0.9 if rate < SEVERE_BOTTLENECK_MBPS else 0.5,
            ))
    return out


def find_critical_paths(paths: Sequence[NetworkPath]) -> List[CriticalPath]:
    """Paths slower than 1.5× the mean path latency."""
    if not paths:
        return []
    mean_latency = sum(p.latency for p in paths) / len(paths)
    return [
        CriticalPath(devices=list(p.path), latency=p.latency)
        for p in paths
        if p.latency > mean_latency * CRITICAL_LATENCY_FACTOR
    ]


def find_failure_points(devices: Sequence[NetworkDevice], connections: Sequence[Connection]) -> List[FailurePoint]:
    """Devices hanging off a single connection."""
    degree: Counter = Counter()
    for conn in connections:
        degree[conn.from_id] += 1
        degree[conn.to_id] += 1
    return [FailurePoint(device=d.id) for d in devices if degree[d.id] == 1]


def network_redundancy(device_count: int, connection_count: int) -> float:
    """Spare links relative to a spanning tree."""
    if device_count <= 1:
        return 0.0
    minimum = device_count - 1
    return max(0, connection_count - minimum) / minimum


def mean_time_between_failures(device_count: int, connection_count: int) -> float:
    """Heuristic MTBF in hours: ``8760 / sqrt(devices + connections)``."""
    components = device_count + connection_count
    if components == 0:
        return HOURS_PER_YEAR
    return HOURS_PER_YEAR / math.sqrt(components)


def analyze_network(
    devices: Sequence[NetworkDevice],
    connections: Sequence[Connection],
    requirements: Sequence[BandwidthRequirement] = (),
    graph: Optional[nx.Graph] = None,
) -> NetworkAnalysis:
    """Bandwidth, latency and reliability analysis of a device graph."""
    graph = graph if graph is not None else build_graph(devices, connections)
    paths = network_paths(graph, devices)

    total_required = sum(r.required_mbps for r in requirements)
    total_available = sum(connection_bandwidth(c) for c in connections)
    bandwidth = BandwidthAnalysis(
        total_required=total_required,
        total_available=total_available,
        utilization=100.0 * total_required / total_available if total_available > 0 else 0.0,
        bottlenecks=find_bottlenecks(connections),
    )

    latencies = [p.latency for p in paths]
    latency = LatencyAnalysis(
        average_latency=sum(latencies) / len(latencies) if latencies else 0.0,
        max_latency=max(latencies) if latencies else 0.0,
        critical_paths=find_critical_paths(paths),
    )

    reliability = ReliabilityAnalysis(
        redundancy=network_redundancy(len(devices), len(connections)),
        failure_points=find_failure_points(devices, connections),
        mtbf=mean_time_between_failures(len(devices), len(connections)),
    )

    logger.info(
        "Network analysis: %d devices, %d connections, %d paths, %d bottleneck(s)",
        len(devices), len(connections), len(paths), len(bandwidth.bottlenecks),
    )
    return NetworkAnalysis(paths=paths, bandwidth=bandwidth, latency=latency, reliability=reliability)
