"""Tests for planar geometry helpers."""

import math

import numpy as np
import pytest

from coverage_sim.core.geometry import (
    Point,
    angular_difference,
    bearing,
    distance,
    normalize_angle,
    segments_intersect,
    segments_intersect_many,
)


class TestDistance:
    def test_pythagorean(self):
        assert distance(Point(0, 0), Point(3, 4)) == pytest.approx(5.0)

    def test_symmetric(self):
        a, b = Point(1.5, -2), Point(-4, 7)
        assert distance(a, b) == distance(b, a)

    def test_zero(self):
        assert distance(Point(2, 2), Point(2, 2)) == 0.0


class TestAngles:
    @pytest.mark.parametrize("raw, wrapped", [(0, 0), (360, 0), (370, 10), (-10, 350), (-720, 0), (359.5, 359.5)])
    def test_normalize(self, raw, wrapped):
        assert normalize_angle(raw) == pytest.approx(wrapped)

    def test_normalize_tiny_negative_stays_in_range(self):
        value = normalize_angle(-1e-15)
        assert 0.0 <= value < 360.0

    def test_angular_difference_wraps(self):
        assert angular_difference(1, 359) == pytest.approx(2.0)
        assert angular_difference(359, 1) == pytest.approx(2.0)

    def test_angular_difference_max_is_180(self):
        assert angular_difference(0, 180) == pytest.approx(180.0)
        assert angular_difference(90, -90) == pytest.approx(180.0)

    def test_bearing_axes(self):
        origin = Point(0, 0)
        assert bearing(origin, Point(1, 0)) == pytest.approx(0.0)
        assert bearing(origin, Point(0, 1)) == pytest.approx(90.0)
        assert bearing(origin, Point(-1, 0)) == pytest.approx(180.0)
        assert bearing(origin, Point(0, -1)) == pytest.approx(270.0)

    def test_bearing_in_range(self):
        rng = np.random.default_rng(7)
        for x, y in rng.uniform(-50, 50, size=(200, 2)):
            b = bearing(Point(0, 0), Point(float(x), float(y)))
            assert 0.0 <= b < 360.0


class TestSegmentsIntersect:
    def test_crossing(self):
        assert segments_intersect(Point(0, 0), Point(10, 10), Point(0, 10), Point(10, 0)) is True

    def test_parallel_no_cross(self):
        assert segments_intersect(Point(0, 0), Point(10, 0), Point(0, 1), Point(10, 1)) is False

    def test_collinear_overlap_is_not_an_intersection(self):
        assert segments_intersect(Point(0, 0), Point(5, 0), Point(2, 0), Point(8, 0)) is False

    def test_t_intersection(self):
        assert segments_intersect(Point(5, 0), Point(5, 10), Point(0, 5), Point(10, 5)) is True

    def test_touching_endpoint_counts(self):
        assert segments_intersect(Point(0, 0), Point(5, 5), Point(5, 5), Point(10, 0)) is True

    def test_disjoint(self):
        assert segments_intersect(Point(0, 0), Point(1, 1), Point(5, 0), Point(6, -3)) is False

    def test_degenerate_segment(self):
        assert segments_intersect(Point(0, 0), Point(10, 0), Point(5, 0), Point(5, 0)) is False


class TestSegmentsIntersectMany:
    def test_matches_scalar_version(self):
        rng = np.random.default_rng(42)
        starts = rng.uniform(0, 20, size=(50, 2))
        ends = rng.uniform(0, 20, size=(50, 2))
        p1, p2 = Point(1.0, 2.0), Point(17.0, 15.0)

        hits = segments_intersect_many(p1, p2, starts, ends)
        expected = [
            segments_intersect(p1, p2, Point(*s), Point(*e))
            for s, e in zip(starts.tolist(), ends.tolist())
        ]
        assert hits.tolist() == expected

    def test_empty(self):
        empty = np.empty((0, 2))
        assert segments_intersect_many(Point(0, 0), Point(1, 1), empty, empty).shape == (0,)
