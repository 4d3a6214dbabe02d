#!/usr/bin/env python3
"""Network topology example: a small surveillance network behind one core switch."""

import json

from coverage_sim.core import AnalysisEngine, BandwidthRequirement, Connection, NetworkDevice


def main() -> None:
    devices = [
        NetworkDevice("core", "Core switch", "switch"),
        NetworkDevice("nvr", "Recorder", "nvr"),
        NetworkDevice("poe-1", "PoE switch 1", "switch"),
        NetworkDevice("poe-2", "PoE switch 2", "switch"),
        NetworkDevice("cam-1", "Lobby camera", "camera"),
        NetworkDevice("cam-2", "Yard camera", "camera"),
        NetworkDevice("cam-3", "Gate camera", "camera"),
    ]
    connections = [
        Connection("c1", "core", "nvr", "cat6a", 5),
        Connection("c2", "core", "poe-1", "fiber", 120),
        Connection("c3", "core", "poe-2", "fiber", 80),
        Connection("c4", "poe-1", "cam-1", "cat6", 40),
        Connection("c5", "poe-1", "cam-2", "cat6", 90),
        Connection("c6", "poe-2", "cam-3", "cat5e", 60, bandwidth=50),
    ]
    requirements = [
        BandwidthRequirement("cam-1", 8, "high"),
        BandwidthRequirement("cam-2", 8),
        BandwidthRequirement("cam-3", 16, "high"),
    ]

    analysis = AnalysisEngine().analyze_network(devices, connections, requirements)
    print(json.dumps(
        {
            "utilization_percent": round(analysis.bandwidth.utilization, 3),
            "bottlenecks": [b.location for b in analysis.bandwidth.bottlenecks],
            "average_latency_ns": round(analysis.latency.average_latency, 1),
            "critical_paths": [c.devices for c in analysis.latency.critical_paths],
            "single_points_of_failure": [f.device for f in analysis.reliability.failure_points],
            "mtbf_hours": round(analysis.reliability.mtbf, 1),
        },
        indent=2,
    ))


if __name__ == "__main__":
    main()
