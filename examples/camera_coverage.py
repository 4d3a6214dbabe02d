#!/usr/bin/env python3
"""Camera coverage example.

Lays out a 30×20 office with a concrete core and a glass meeting room, places
four cameras, runs the coverage analysis and saves a heatmap.
"""

import logging

from coverage_sim.core import AnalysisEngine, Bounds, Camera, FloorElement, FloorPlan, Point
from coverage_sim.visualization import plot_camera_coverage


def wall(x1, y1, x2, y2, material="drywall"):
    return FloorElement("wall", Point(x1, y1), Point(x2, y2), material=material)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # --- Floor plan (30 × 20 units) ---
    plan = FloorPlan(
        Bounds(30, 20),
        (
            wall(12, 8, 18, 8, "concrete"),
            wall(18, 8, 18, 12, "concrete"),
            wall(12, 12, 18, 12, "concrete"),
            wall(12, 8, 12, 12, "concrete"),
            wall(22, 14, 30, 14, "glass"),
            wall(22, 14, 22, 20, "glass"),
            FloorElement("door", Point(22, 16), Point(22, 17)),
        ),
        id="office-1",
    )

    # --- Cameras in the corners, looking inwards ---
    cameras = [
        Camera("cam-nw", Point(0.5, 19.5), direction_degrees=315, fov_degrees=100, range_units=18, name="North-West"),
        Camera("cam-ne", Point(29.5, 19.5), direction_degrees=225, fov_degrees=90, range_units=15, name="North-East"),
        Camera("cam-sw", Point(0.5, 0.5), direction_degrees=45, fov_degrees=100, range_units=18, name="South-West"),
        Camera("cam-se", Point(29.5, 0.5), direction_degrees=135, fov_degrees=90, range_units=15, name="South-East"),
    ]

    # --- Analyse ---
    engine = AnalysisEngine()
    result = engine.analyze_cameras(plan, cameras)

    stats = result.statistics
    print("=" * 50)
    print("Camera Coverage Report")
    print("=" * 50)
    print(f"  {'coverage':>20s}: {stats.coverage_percent:.1f}%")
    print(f"  {'redundancy':>20s}: {stats.redundancy_level:.2f}")
    for tier, count in stats.quality_distribution.items():
        print(f"  {tier:>20s}: {count}")
    print("-" * 50)
    for rec in result.recommendations:
        print(f"  [{rec.id}] {rec.priority:<6s} {rec.title}: {rec.description}")
    print("=" * 50)

    plot_camera_coverage(result, plan, cameras, save_path="camera_coverage.png")
    print("Heatmap saved: camera_coverage.png")


if __name__ == "__main__":
    main()
