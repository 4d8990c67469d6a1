"""
Tests for the in-flight curve force.

Validates:
  - Force direction, scaling and decay
  - Degenerate cases produce no force
  - Tracker lifecycle: start, update, expiry, stop
"""

import numpy as np
import pytest

from snapshoot.curve_force import CurveForce, curve_force_vector
from snapshoot.mock_physics import SimulatedBallBody
from snapshoot.models.shot import ShotAnalysis, ShotType
from snapshoot.utils.config import CurveForceConfig

FORWARD = np.array([0.0, 0.0, -20.0])   # Speed factor 1


def make_analysis(shot_type=ShotType.CURVE, amount=1.0, direction=1):
    return ShotAnalysis(type=shot_type, power=0.5, curve_amount=amount,
                        curve_direction=direction, height_factor=0.5)


class TestCurveForceVector:

    def test_full_strength_at_launch(self):
        """Heading -z, a right curve pushes toward -x at full scale."""
        force = curve_force_vector(FORWARD, make_analysis(), 0.0)
        np.testing.assert_allclose(force, [-10.0, 0.0, 0.0], atol=1e-12)

    def test_direction_mirrors(self):
        right = curve_force_vector(FORWARD, make_analysis(direction=1), 0.0)
        left = curve_force_vector(FORWARD, make_analysis(direction=-1), 0.0)
        np.testing.assert_allclose(left, -right)

    def test_perpendicular_and_horizontal(self):
        v = np.array([3.0, 4.0, -15.0])
        force = curve_force_vector(v, make_analysis(), 0.2)
        assert force[1] == 0.0
        assert np.dot(force, v) == pytest.approx(0.0, abs=1e-9)

    def test_linear_decay(self):
        half = curve_force_vector(FORWARD, make_analysis(), 0.75)
        gone = curve_force_vector(FORWARD, make_analysis(), 1.5)
        later = curve_force_vector(FORWARD, make_analysis(), 1.9)
        assert np.linalg.norm(half) == pytest.approx(5.0)
        assert not gone.any()
        assert not later.any()

    def test_speed_factor_capped(self):
        fast = curve_force_vector(np.array([0.0, 0.0, -60.0]), make_analysis(), 0.0)
        assert np.linalg.norm(fast) == pytest.approx(15.0)

    def test_scales_with_amount(self):
        force = curve_force_vector(FORWARD, make_analysis(amount=0.4), 0.0)
        assert np.linalg.norm(force) == pytest.approx(4.0)

    @pytest.mark.parametrize("velocity,analysis", [
        (FORWARD, make_analysis(ShotType.NORMAL)),
        (FORWARD, make_analysis(direction=0)),
        (np.array([0.0, 0.0, -1.0]), make_analysis()),     # Below min speed
        (np.array([0.0, 10.0, 0.0]), make_analysis()),     # Straight up
    ])
    def test_degenerate_cases_zero(self, velocity, analysis):
        assert not curve_force_vector(velocity, analysis, 0.1).any()

    def test_custom_scale(self):
        config = CurveForceConfig(scale=4.0)
        force = curve_force_vector(FORWARD, make_analysis(), 0.0, config)
        assert np.linalg.norm(force) == pytest.approx(4.0)


class TestCurveForceLifecycle:

    @pytest.fixture
    def ball(self):
        ball = SimulatedBallBody((0.0, 0.15, 0.0))
        ball.velocity = FORWARD.copy()
        return ball

    def test_inactive_until_started(self, ball):
        curve = CurveForce()
        curve.update(1 / 120, ball)
        assert not curve.is_active
        assert not ball.force.any()

    def test_update_applies_force(self, ball):
        curve = CurveForce()
        curve.start(make_analysis())
        curve.update(1 / 120, ball)
        assert curve.is_active
        assert curve.elapsed_time == pytest.approx(1 / 120)
        assert ball.force[0] < 0

    def test_non_curve_start_clears_tracker(self):
        curve = CurveForce()
        curve.start(make_analysis())
        curve.start(make_analysis(ShotType.POWER))
        assert not curve.is_active

    def test_expires_after_lifetime(self, ball):
        curve = CurveForce()
        curve.start(make_analysis())
        for _ in range(241):
            curve.update(1 / 120, ball)
        assert not curve.is_active
        assert curve.elapsed_time == 0.0

    def test_no_force_after_decay_window(self, ball):
        curve = CurveForce()
        curve.start(make_analysis())
        curve.update(1.6, ball)
        assert curve.is_active
        assert not ball.force.any()

    def test_stop_idempotent(self):
        curve = CurveForce()
        curve.start(make_analysis())
        curve.stop()
        curve.stop()
        assert not curve.is_active

    def test_restart_resets_elapsed(self, ball):
        curve = CurveForce()
        curve.start(make_analysis())
        curve.update(0.5, ball)
        curve.start(make_analysis(direction=-1))
        assert curve.elapsed_time == 0.0
