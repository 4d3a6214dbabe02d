"""Tests for coverage statistics and the recommendation rules."""

import pytest

from coverage_sim.analysis.recommendations import (
    camera_recommendations,
    cluster_center,
    cluster_points,
    wireless_recommendations,
)
from coverage_sim.analysis.statistics import camera_statistics, sensor_efficiency, wireless_statistics
from coverage_sim.core.config import AnalysisConfig
from coverage_sim.core.device import AccessPoint, Camera, ChannelAssignment, WirelessClient
from coverage_sim.core.floorplan import Bounds
from coverage_sim.core.geometry import Point
from coverage_sim.core.grid import QUALITY_TIERS, SIGNAL_FLOOR_DBM, RasterGrid, WirelessCell

CONFIG = AnalysisConfig()


def covered_except_block(size=20, block=range(8, 12), value=0.9):
    """Camera grid fully covered by one camera except a square hole."""
    bounds = Bounds(size, size)
    grid = RasterGrid(bounds, 1.0)
    for r, row in enumerate(grid.cells):
        for c, cell in enumerate(row):
            if r in block and c in block:
                continue
            cell.merge(value, "cam")
    return grid, bounds


@pytest.fixture
def access_point():
    return AccessPoint(id="ap", position=Point(0, 0), channels=(ChannelAssignment("2.4GHz", 6),))


def wireless_grid(values, ap_id="ap"):
    """2x2 wireless grid with the given row-major signals from one AP."""
    grid = RasterGrid(Bounds(2, 2), 1.0, cell_type=WirelessCell)
    for cell, value in zip(grid, values):
        cell.merge_signal(value, "2.4GHz", ap_id)
    return grid


class TestClustering:
    def test_empty(self):
        assert cluster_points([], 5.0) == []

    def test_single_cluster(self):
        pts = [Point(x, y) for y in range(3) for x in range(3)]
        clusters = cluster_points(pts, 5.0)
        assert len(clusters) == 1
        assert len(clusters[0]) == 9

    def test_not_transitive(self):
        # (8, 0) is reachable from (4, 0) but not from the seed
        clusters = cluster_points([Point(0, 0), Point(4, 0), Point(8, 0)], 5.0)
        assert [len(c) for c in clusters] == [2, 1]

    def test_center(self):
        assert cluster_center([Point(0, 0), Point(2, 4)]) == Point(1, 2)


class TestCameraStatistics:
    def test_counts_and_areas(self):
        grid, bounds = covered_except_block()
        stats = camera_statistics(grid, bounds)
        assert stats.total_cells == 400
        assert stats.covered_cells == 384
        assert stats.total_area == pytest.approx(400.0)
        assert stats.covered_area == pytest.approx(384.0)
        assert stats.coverage_percent == pytest.approx(96.0)
        assert stats.redundancy_level == pytest.approx(1.0)

    def test_quality_distribution_has_all_tiers(self):
        grid, bounds = covered_except_block()
        dist = camera_statistics(grid, bounds).quality_distribution
        assert set(dist) == set(QUALITY_TIERS)
        assert dist["excellent"] == 384
        assert dist["none"] == 16
        assert sum(dist.values()) == 400

    def test_empty_grid(self):
        bounds = Bounds(5, 5)
        stats = camera_statistics(RasterGrid(bounds, 1.0), bounds)
        assert stats.covered_cells == 0
        assert stats.coverage_percent == 0.0
        assert stats.redundancy_level == 0.0

    def test_sensor_efficiency(self):
        grid, _ = covered_except_block(value=0.3)
        assert sensor_efficiency(grid, "cam") == pytest.approx(0.3)
        assert sensor_efficiency(grid, "ghost") == 0.0


class TestCameraRecommendations:
    def test_single_gap_block(self):
        grid, bounds = covered_except_block()
        stats = camera_statistics(grid, bounds)
        recs = camera_recommendations(grid, [], stats, CONFIG)

        gaps = [r for r in recs if r.type == "coverage_gap"]
        assert len(gaps) == 1
        pos = gaps[0].action.parameters["position"]
        assert 8 <= pos["x"] <= 12
        assert 8 <= pos["y"] <= 12
        assert gaps[0].priority == "high"
        assert gaps[0].action.type == "add_camera"
        assert gaps[0].action.estimated_cost == 500.0
        assert gaps[0].action.estimated_time == 4.0

    def test_small_gap_ignored(self):
        grid, bounds = covered_except_block(block=range(8, 11))
        stats = camera_statistics(grid, bounds)
        recs = camera_recommendations(grid, [], stats, CONFIG)
        assert not [r for r in recs if r.type == "coverage_gap"]

    def test_low_redundancy(self):
        grid, bounds = covered_except_block()
        stats = camera_statistics(grid, bounds)
        recs = camera_recommendations(grid, [], stats, CONFIG)
        redundancy = [r for r in recs if r.type == "redundancy"]
        assert len(redundancy) == 1
        assert redundancy[0].action.parameters["target_redundancy"] == 1.5

    def test_inefficient_camera(self):
        grid, bounds = covered_except_block(value=0.3)
        stats = camera_statistics(grid, bounds)
        camera = Camera(id="cam", position=Point(1, 1), name="Lobby")
        recs = camera_recommendations(grid, [camera], stats, CONFIG)
        moves = [r for r in recs if r.type == "positioning"]
        assert len(moves) == 1
        assert moves[0].action.type == "move_camera"
        assert moves[0].action.parameters["camera_id"] == "cam"
        assert "Lobby" in moves[0].description

    def test_ids_in_emission_order(self):
        grid, bounds = covered_except_block()
        stats = camera_statistics(grid, bounds)
        recs = camera_recommendations(grid, [], stats, CONFIG)
        assert [r.id for r in recs] == [f"rec-{i:03d}" for i in range(1, len(recs) + 1)]
        assert [r.type for r in recs] == ["coverage_gap", "redundancy"]

    def test_nothing_covered_gives_nothing(self):
        bounds = Bounds(20, 20)
        grid = RasterGrid(bounds, 1.0)
        stats = camera_statistics(grid, bounds)
        assert camera_recommendations(grid, [], stats, CONFIG) == []

    def test_to_dict(self):
        grid, bounds = covered_except_block()
        stats = camera_statistics(grid, bounds)
        rec = camera_recommendations(grid, [], stats, CONFIG)[0]
        data = rec.to_dict()
        assert data["id"] == "rec-001"
        assert data["action"]["type"] == "add_camera"


class TestWirelessStatistics:
    def test_signal_range_over_covered_cells(self, access_point):
        grid = wireless_grid([-40.0, -60.0, -90.0, SIGNAL_FLOOR_DBM])
        stats = wireless_statistics(grid, Bounds(2, 2), [access_point])
        assert stats.covered_cells == 2
        assert stats.average_signal_dbm == pytest.approx(-50.0)
        assert stats.min_signal_dbm == pytest.approx(-60.0)
        assert stats.max_signal_dbm == pytest.approx(-40.0)
        assert stats.quality_distribution["good"] == 1
        assert stats.quality_distribution["fair"] == 1
        assert stats.quality_distribution["none"] == 2

    def test_dead_zones_are_cell_origins(self, access_point):
        grid = wireless_grid([-40.0, -60.0, -90.0, SIGNAL_FLOOR_DBM])
        stats = wireless_statistics(grid, Bounds(2, 2), [access_point])
        assert stats.dead_zones == [Point(0, 1), Point(1, 1)]

    def test_interference_level_mean_of_covered(self, access_point):
        grid = wireless_grid([-40.0, -60.0, -90.0, SIGNAL_FLOOR_DBM])
        grid.cells[0][0].interference = 0.2
        grid.cells[0][1].interference = 0.4
        grid.cells[1][0].interference = 1.0
        stats = wireless_statistics(grid, Bounds(2, 2), [access_point])
        assert stats.interference_level == pytest.approx(0.3)

    def test_channel_utilization(self, access_point):
        grid = wireless_grid([-40.0, -60.0, -90.0, SIGNAL_FLOOR_DBM])
        stats = wireless_statistics(grid, Bounds(2, 2), [access_point])
        assert stats.channel_utilization == {"2.4GHz": {6: pytest.approx(100.0)}}

    def test_sentinels_when_nothing_covered(self, access_point):
        grid = RasterGrid(Bounds(3, 3), 1.0, cell_type=WirelessCell)
        stats = wireless_statistics(grid, Bounds(3, 3), [access_point])
        assert stats.covered_cells == 0
        assert stats.average_signal_dbm == SIGNAL_FLOOR_DBM
        assert stats.min_signal_dbm == SIGNAL_FLOOR_DBM
        assert stats.max_signal_dbm == SIGNAL_FLOOR_DBM
        assert stats.interference_level == 0.0
        assert len(stats.dead_zones) == 9
        assert stats.channel_utilization == {"2.4GHz": {6: 0.0}}
        assert wireless_recommendations(grid, [access_point], [], stats, CONFIG) == []


class TestWirelessRecommendations:
    def test_healthy_network(self, access_point):
        grid = wireless_grid([-40.0, -60.0, -90.0, SIGNAL_FLOOR_DBM])
        stats = wireless_statistics(grid, Bounds(2, 2), [access_point])
        assert wireless_recommendations(grid, [access_point], [], stats, CONFIG) == []

    def test_weak_average(self, access_point):
        grid = wireless_grid([-75.0, -80.0, -90.0, SIGNAL_FLOOR_DBM])
        stats = wireless_statistics(grid, Bounds(2, 2), [access_point])
        recs = wireless_recommendations(grid, [access_point], [], stats, CONFIG)
        assert [(r.type, r.priority, r.action.type) for r in recs] == [
            ("signal_strength", "medium", "increase_signal_power"),
        ]

    def test_high_interference_suggests_channel_plan(self, access_point):
        grid = wireless_grid([-40.0, -60.0, -90.0, SIGNAL_FLOOR_DBM])
        grid.cells[0][0].interference = 0.5
        grid.cells[0][1].interference = 0.5
        stats = wireless_statistics(grid, Bounds(2, 2), [access_point])
        recs = wireless_recommendations(grid, [access_point], [], stats, CONFIG)
        assert len(recs) == 1
        assert recs[0].type == "interference"
        assert recs[0].action.type == "optimize_wifi_channel"
        assert recs[0].action.parameters["channel_plan"] == {"ap-0": 1}

    def test_weak_client(self, access_point):
        grid = wireless_grid([-40.0, -60.0, -90.0, SIGNAL_FLOOR_DBM])
        stats = wireless_statistics(grid, Bounds(2, 2), [access_point])
        clients = [
            WirelessClient("cam-ok", Point(0.5, 0.5)),
            WirelessClient("cam-weak", Point(1.5, 1.5), name="Garage"),
            WirelessClient("cam-wired", Point(1.5, 1.5), wifi_capable=False),
        ]
        recs = wireless_recommendations(grid, [access_point], clients, stats, CONFIG)
        assert len(recs) == 1
        rec = recs[0]
        assert rec.id == "rec-001"
        assert rec.priority == "high"
        assert rec.action.type == "add_access_point"
        assert rec.action.parameters["device_id"] == "cam-weak"
        assert "Garage" in rec.title

    def test_client_outside_grid_uses_floor(self, access_point):
        grid = wireless_grid([-40.0, -60.0, -90.0, SIGNAL_FLOOR_DBM])
        stats = wireless_statistics(grid, Bounds(2, 2), [access_point])
        recs = wireless_recommendations(grid, [access_point], [WirelessClient("far", Point(50, 50))], stats, CONFIG)
        assert "-100.0 dBm" in recs[0].description

    def test_dead_zone_cluster(self, access_point):
        bounds = Bounds(10, 10)
        grid = RasterGrid(bounds, 1.0, cell_type=WirelessCell)
        for cell in grid:
            if cell.y < 5:
                cell.merge_signal(-45.0, "2.4GHz", "ap")
        stats = wireless_statistics(grid, bounds, [access_point])
        recs = wireless_recommendations(grid, [access_point], [], stats, CONFIG)
        gaps = [r for r in recs if r.type == "coverage_gap"]
        assert gaps
        assert all(r.action.type == "add_access_point" for r in gaps)
        assert all(r.action.parameters["position"]["y"] >= 5 for r in gaps)
