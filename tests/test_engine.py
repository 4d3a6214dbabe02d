"""Tests for the analysis engine, job lifecycle and configuration."""

import pytest

from coverage_sim.core import (
    AccessPoint,
    AnalysisConfig,
    AnalysisEngine,
    AnalysisJob,
    Bounds,
    Camera,
    ChannelAssignment,
    Connection,
    FloorElement,
    FloorPlan,
    GridTooLargeError,
    InvalidFloorPlanError,
    JobRegistry,
    JobStateError,
    JobStatus,
    NetworkDevice,
    Point,
    UnsupportedSensorError,
    WirelessClient,
)


@pytest.fixture
def floor_plan():
    return FloorPlan(
        Bounds(20, 10),
        (
            FloorElement("wall", Point(10, 0), Point(10, 6), material="brick"),
            FloorElement("door", Point(10, 6), Point(10, 8)),
        ),
        id="plan-1",
    )


@pytest.fixture
def cameras():
    return [
        Camera("cam-1", Point(1, 5), direction_degrees=0, fov_degrees=90, range_units=12),
        Camera("cam-2", Point(19, 5), direction_degrees=180, fov_degrees=120, range_units=8),
    ]


@pytest.fixture
def access_points():
    return [
        AccessPoint("ap-1", Point(4, 5), channels=(ChannelAssignment("2.4GHz", 6),)),
        AccessPoint("ap-2", Point(15, 5), channels=(ChannelAssignment("2.4GHz", 6),)),
    ]


def track_progress(job):
    seen = []
    original = job.advance

    def spy(progress):
        original(progress)
        seen.append(job.progress)

    job.advance = spy
    return seen


class TestCameraRuns:
    def test_completes_job(self, floor_plan, cameras):
        engine = AnalysisEngine()
        job = engine.submit("coverage")
        result = engine.analyze_cameras(floor_plan, cameras, job=job)
        assert engine.jobs.get(job.id) is job
        assert result.job_id == job.id
        assert job.status is JobStatus.COMPLETED
        assert job.progress == 100.0
        assert job.result is result
        assert result.floor_plan_id == "plan-1"
        assert result.grid.shape == (20, 40)
        assert result.statistics.covered_cells > 0

    def test_progress_is_monotonic(self, floor_plan, cameras):
        engine = AnalysisEngine()
        job = engine.submit("coverage")
        assert job.status is JobStatus.QUEUED
        seen = track_progress(job)
        engine.analyze_cameras(floor_plan, cameras, job=job)
        assert seen == sorted(seen)
        assert seen[:3] == [10.0, 50.0, 90.0]
        assert seen[-1] == 100.0

    def test_direct_runs_are_not_registered(self, floor_plan, cameras, access_points):
        engine = AnalysisEngine()
        for _ in range(5):
            result = engine.analyze_cameras(floor_plan, cameras)
            assert result.job_id is not None
        engine.analyze_wireless(floor_plan, access_points)
        engine.analyze_network([NetworkDevice("A")], [])
        assert engine.jobs.all() == []

    def test_result_sink(self, floor_plan, cameras):
        delivered = []
        engine = AnalysisEngine(result_sink=delivered.append)
        result = engine.analyze_cameras(floor_plan, cameras)
        assert delivered == [result]

    def test_deterministic(self, floor_plan, cameras):
        engine = AnalysisEngine()
        first = engine.analyze_cameras(floor_plan, cameras).to_dict()
        second = engine.analyze_cameras(floor_plan, cameras).to_dict()
        assert first["grid"] == second["grid"]
        assert first["statistics"] == second["statistics"]
        assert first["recommendations"] == second["recommendations"]

    def test_access_points_ignored(self, floor_plan, cameras, access_points):
        engine = AnalysisEngine()
        with_aps = engine.analyze_cameras(floor_plan, cameras + access_points)
        without = engine.analyze_cameras(floor_plan, cameras)
        assert with_aps.to_dict()["grid"] == without.to_dict()["grid"]

    def test_no_sensors(self, floor_plan):
        result = AnalysisEngine().analyze_cameras(floor_plan, [])
        assert result.statistics.covered_cells == 0
        assert result.statistics.coverage_percent == 0.0
        assert result.recommendations == []

    def test_invalid_bounds_fail_job(self):
        engine = AnalysisEngine()
        job = engine.submit("coverage")
        with pytest.raises(InvalidFloorPlanError):
            engine.analyze_cameras(FloorPlan(Bounds(0, 10)), [], job=job)
        assert job.status is JobStatus.FAILED
        assert "positive" in job.error

    def test_cell_cap(self, floor_plan, cameras):
        engine = AnalysisEngine(AnalysisConfig(max_cells=100))
        job = engine.submit("coverage")
        with pytest.raises(GridTooLargeError):
            engine.analyze_cameras(floor_plan, cameras, job=job)
        assert job.status is JobStatus.FAILED

    def test_unsupported_sensor(self, floor_plan):
        engine = AnalysisEngine()
        job = engine.submit("coverage")
        with pytest.raises(UnsupportedSensorError):
            engine.analyze_cameras(floor_plan, [NetworkDevice("sw")], job=job)
        assert job.status is JobStatus.FAILED

    def test_cancelled_mid_run_stays_cancelled(self, floor_plan, cameras):
        engine = AnalysisEngine()
        job = engine.submit("coverage")
        original = job.advance

        def cancel_on_first_camera(progress):
            original(progress)
            if progress > 10.0:
                engine.jobs.cancel(job.id)

        job.advance = cancel_on_first_camera
        result = engine.analyze_cameras(floor_plan, cameras, job=job)
        assert result is not None
        assert job.status is JobStatus.CANCELLED
        assert job.result is None
        assert engine.jobs.get(job.id) is None

    def test_to_dict(self, floor_plan, cameras):
        data = AnalysisEngine().analyze_cameras(floor_plan, cameras).to_dict()
        assert data["resolution"] == 0.5
        assert data["shape"] == [20, 40]
        assert len(data["grid"]) == 20
        assert {"x", "y", "value", "sensor_ids", "quality"} <= set(data["grid"][0][0])


class TestWirelessRuns:
    def test_completes_with_channel_plan(self, floor_plan, access_points):
        engine = AnalysisEngine()
        job = engine.submit("wireless")
        result = engine.analyze_wireless(floor_plan, access_points, job=job)
        assert job.status is JobStatus.COMPLETED
        assert result.grid.shape == (10, 20)
        assert result.channel_plan == {"ap-1-0": 1, "ap-2-0": 6}
        data = result.to_dict()
        assert data["access_points"] == ["ap-1", "ap-2"]
        assert data["channel_plan"] == {"ap-1-0": 1, "ap-2-0": 6}
        assert "interference" in data["grid"][0][0]

    def test_interference_toggle(self, floor_plan, access_points):
        quiet = AnalysisEngine(AnalysisConfig(include_interference=False))
        result = quiet.analyze_wireless(floor_plan, access_points)
        assert all(cell.interference == 0.0 for cell in result.grid)

    def test_weak_client_recommendation(self, floor_plan, access_points):
        client = WirelessClient("cam-9", Point(19.5, 9.5))
        result = AnalysisEngine().analyze_wireless(floor_plan, access_points, [client])
        assert any(r.action.parameters.get("device_id") == "cam-9" for r in result.recommendations)

    def test_no_access_points(self, floor_plan, cameras):
        result = AnalysisEngine().analyze_wireless(floor_plan, cameras)
        assert result.statistics.covered_cells == 0
        assert result.statistics.average_signal_dbm == -100.0
        assert result.recommendations == []
        assert result.channel_plan == {}


class TestNetworkAndChannels:
    def test_network_job(self):
        engine = AnalysisEngine()
        job = engine.submit("network")
        result = engine.analyze_network(
            [NetworkDevice("A"), NetworkDevice("B")],
            [Connection("ab", "A", "B", "fiber", 10)],
            job=job,
        )
        assert job.status is JobStatus.COMPLETED
        assert result.paths[0].path == ["A", "B"]

    def test_optimize_channels_skips_cameras(self, cameras, access_points):
        plan = AnalysisEngine().optimize_channels(cameras + access_points)
        assert plan == {"ap-1-0": 1, "ap-2-0": 6}


class TestJobs:
    def test_state_machine(self):
        job = AnalysisJob(kind="coverage")
        job.start()
        with pytest.raises(JobStateError):
            job.start()
        job.complete("done")
        assert job.is_finished
        assert job.completed_at is not None
        assert not job.cancel()

    def test_progress_never_decreases(self):
        job = AnalysisJob(kind="coverage")
        job.advance(40)
        job.advance(20)
        job.advance(140)
        assert job.progress == 100.0

    def test_fail_after_cancel_is_ignored(self):
        job = AnalysisJob(kind="coverage")
        job.start()
        assert job.cancel()
        job.fail("boom")
        assert job.status is JobStatus.CANCELLED
        assert job.error is None

    def test_registry(self):
        registry = JobRegistry()
        running = registry.create("coverage")
        done = registry.create("network")
        done.start()
        done.complete()
        assert registry.active() == [running]
        assert registry.clear_finished() == 1
        assert registry.all() == [running]
        assert registry.cancel(running.id)
        assert registry.get(running.id) is None
        assert not registry.cancel("missing")

    def test_registry_keeps_newest_finished(self):
        registry = JobRegistry(keep_finished=2)
        finished = []
        for _ in range(4):
            job = registry.create("network")
            job.start()
            job.complete()
            finished.append(job)
        queued = registry.create("coverage")
        assert registry.all() == finished[2:] + [queued]

    def test_registry_never_drops_active_jobs(self):
        registry = JobRegistry(keep_finished=0)
        running = registry.create("coverage")
        running.start()
        registry.create("wireless")
        assert running in registry.all()

    def test_engine_registry_uses_config(self):
        engine = AnalysisEngine(AnalysisConfig(keep_finished_jobs=3))
        assert engine.jobs.keep_finished == 3

    def test_to_dict(self):
        data = AnalysisJob(kind="wireless").to_dict()
        assert data["status"] == "queued"
        assert data["kind"] == "wireless"
        assert len(data["id"]) == 32


class TestConfig:
    def test_from_dict_ignores_unknown(self):
        config = AnalysisConfig.from_dict({"camera_resolution": 0.25, "colour": "blue"})
        assert config.camera_resolution == 0.25
        assert config.max_cells == 250_000

    @pytest.mark.parametrize("kwargs", [
        {"camera_resolution": 0},
        {"max_cells": 0},
        {"obstruction_penalty": 1.5},
        {"gap_cluster_distance": -1},
        {"keep_finished_jobs": -1},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            AnalysisConfig(**kwargs)
