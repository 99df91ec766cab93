"""Tests for the skeleton sampler."""
import logging
import math

import pytest

from drawer.generation.sampler import SkeletonSample, sample
from drawer.generation.shapes import ControlPoint, ShapeKind, generate

CX, CY = 1000.0, 1000.0


def constant_skeleton(x, y, z):
    return tuple(ControlPoint(x, y, z) for _ in range(12))


@pytest.fixture
def ramp():
    """Points along x only, so the sampled x reveals the segment used."""
    return tuple(ControlPoint(i * 10.0, 0.0, 0.0) for i in range(12))


class TestDeterminism:
    @pytest.mark.parametrize("kind", list(ShapeKind))
    def test_same_inputs_same_output(self, kind):
        skeleton = generate(kind, 180)
        first = sample(0.37, skeleton, 1.1, CX, CY)
        second = sample(0.37, skeleton, 1.1, CX, CY)
        assert first == second

    def test_returns_finite_values(self):
        skeleton = generate(ShapeKind.SPIRAL, 300)
        for step in range(200):
            s = sample(step * 0.013, skeleton, step * 0.05, CX, CY)
            assert all(math.isfinite(v) for v in (s.x, s.y, s.depth, s.lighting))
            assert 0.2 <= s.lighting <= 1.0


class TestRingWalk:
    def test_interpolates_within_segment(self, ramp):
        s = sample(0.125, ramp, 0.0, CX, CY)  # time 1.5 -> between points 1 and 2
        assert s.x == pytest.approx(CX + 12.0)
        assert s.y == pytest.approx(CY)

    def test_next_twelfth_uses_adjacent_segment(self, ramp):
        here = sample(0.125, ramp, 0.0, CX, CY)
        there = sample(0.125 + 1 / 12, ramp, 0.0, CX, CY)
        # Each segment step moves 10 units before damping
        assert there.x - here.x == pytest.approx(10.0 * 0.8)

    def test_last_segment_wraps_to_first_point(self, ramp):
        s = sample(11.5 / 12, ramp, 0.0, CX, CY)
        assert s.x == pytest.approx(CX + (110.0 - 55.0) * 0.8)

    def test_whole_turns_repeat(self, ramp):
        assert sample(1.125, ramp, 0.0, CX, CY).x == pytest.approx(sample(0.125, ramp, 0.0, CX, CY).x)

    def test_negative_time_mirrors_positive(self, ramp):
        assert sample(-0.125, ramp, 0.0, CX, CY) == sample(0.125, ramp, 0.0, CX, CY)


class TestProjection:
    def test_zero_depth_plane(self):
        # The top arm of the cross has x = z = 0, so z' = 0 for any rotation
        skeleton = generate(ShapeKind.CROSS, 200)
        for angle in (0.0, 0.7, 2.0, 5.5):
            s = sample(0.0, skeleton, angle, CX, CY)
            assert s.depth == 0.5
            assert s.lighting == 0.75
            assert s.x == pytest.approx(CX)
            assert s.y == pytest.approx(CY + 160.0)

    def test_perspective_scale(self):
        skeleton = constant_skeleton(50.0, 40.0, 100.0)
        s = sample(0.3, skeleton, 0.0, CX, CY)
        scale = 800 / (800 + 80.0)
        assert s.x == pytest.approx(CX + 40.0 * scale)
        assert s.y == pytest.approx(CY + 32.0 * scale)
        assert s.depth == pytest.approx(380 / 600)
        assert s.lighting == pytest.approx(0.95)

    def test_rotation_about_vertical_axis(self):
        skeleton = constant_skeleton(50.0, 40.0, 100.0)
        s = sample(0.3, skeleton, math.pi / 2, CX, CY)
        # x' = -z, z' = x after a quarter turn; y is untouched before projection
        scale = 800 / (800 + 40.0)
        assert s.x == pytest.approx(CX - 80.0 * scale)
        assert s.y == pytest.approx(CY + 32.0 * scale)
        assert s.depth == pytest.approx(340 / 600)

    def test_lighting_clamped_low(self):
        s = sample(0.0, constant_skeleton(0.0, 0.0, -312.5), 0.0, CX, CY)
        assert s.depth == pytest.approx(50 / 600)
        assert s.lighting == 0.2

    def test_lighting_clamped_high(self):
        s = sample(0.0, constant_skeleton(0.0, 0.0, 250.0), 0.0, CX, CY)
        assert s.depth == pytest.approx(500 / 600)
        assert s.lighting == 1.0

    def test_custom_perspective_and_damping(self):
        skeleton = constant_skeleton(50.0, 40.0, 100.0)
        s = sample(0.3, skeleton, 0.0, CX, CY, perspective=400.0, damping=0.5)
        scale = 400 / (400 + 50.0)
        assert s.x == pytest.approx(CX + 25.0 * scale)
        assert s.y == pytest.approx(CY + 20.0 * scale)
        assert s.depth == pytest.approx(350 / 600)


class TestFaults:
    @pytest.mark.parametrize("skeleton", [None, [], ()])
    def test_empty_skeleton_returns_default(self, skeleton, caplog):
        with caplog.at_level(logging.WARNING, logger="drawer.generation.sampler"):
            for _ in range(3):
                s = sample(0.4, skeleton, 1.0, CX, CY)
                assert s == SkeletonSample(x=0.0, y=0.0, depth=0.5, lighting=1.0)
        assert "empty skeleton" in caplog.text

    def test_missing_point_returns_centre(self, caplog):
        skeleton = list(generate(ShapeKind.WAVE, 100))
        skeleton[0] = None
        with caplog.at_level(logging.WARNING, logger="drawer.generation.sampler"):
            s = sample(0.0, skeleton, 0.0, CX, CY)
        assert s == SkeletonSample(x=CX, y=CY, depth=0.5, lighting=1.0)
        assert "Missing control point" in caplog.text
