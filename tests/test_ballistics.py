"""
Tests for the ballistic solve and flight prediction.

Validates:
  - Flight time model and its monotonicity in power
  - Closed-form launch velocity reaches the aim point exactly
  - INVALID shots have no velocity; CURVE shots solve against the aim point
  - Integrated flights cross the goal plane where expected
"""

import numpy as np
import pytest

from snapshoot.aim import AimResolver
from snapshoot.ballistics import (
    BallisticSolver,
    debug_velocity,
    flight_time,
    predict_trajectory,
    simulate_flight,
    solve_initial_velocity,
)
from snapshoot.errors import InvalidShotError
from snapshoot.models.shot import ShotAnalysis, ShotParameters, ShotResult, ShotType
from snapshoot.spin import compute_angular_velocity
from snapshoot.utils.config import PipelineConfig, ShotTiming

GRAVITY = -18.81
LAUNCH = np.array([0.0, 0.15, 0.0])


def make_params(shot_type=ShotType.NORMAL, power=0.5, amount=0.0,
                direction=0, target=(0.0, 1.0, -6.0), config=None):
    config = config or PipelineConfig()
    analysis = ShotAnalysis(type=shot_type, power=power, curve_amount=amount,
                            curve_direction=direction, height_factor=0.5)
    target = np.array(target, dtype=float)
    aim = AimResolver(config).aim_target_position(target, analysis)
    return ShotParameters(
        target_position=target,
        direction=np.zeros(3),
        distance=0.0,
        aim_target_position=aim,
        aim_direction=np.zeros(3),
        aim_distance=0.0,
        analysis=analysis,
    )


def make_result(params, config=None):
    config = config or PipelineConfig()
    velocity = BallisticSolver(config).solve(params)
    return ShotResult(
        velocity=velocity,
        angular_velocity=compute_angular_velocity(params, velocity),
        shot_type=params.analysis.type,
        target_position=params.target_position,
        aim_target_position=params.aim_target_position,
        analysis=params.analysis,
        parameters=params,
    )


class TestFlightTime:

    def test_bounds(self):
        timing = ShotTiming(0.3, 0.6)
        assert flight_time(0.0, timing) == pytest.approx(0.6)
        assert flight_time(1.0, timing) == pytest.approx(0.3)
        assert flight_time(0.5, timing) == pytest.approx(0.45)

    def test_strictly_decreasing_in_power(self):
        """More power always means a shorter flight."""
        for timing in (ShotTiming(0.3, 0.6), ShotTiming(0.35, 0.7)):
            times = [flight_time(p, timing) for p in np.linspace(0, 1, 21)]
            assert all(a > b for a, b in zip(times, times[1:]))


class TestSolveInitialVelocity:

    def test_reference_shot(self):
        """Centre shot at power 0.5: t = 0.45s."""
        v = solve_initial_velocity(LAUNCH, np.array([0.0, 1.0, -6.0]), GRAVITY, 0.45)
        assert v[0] == pytest.approx(0.0)
        assert v[2] == pytest.approx(-13.333, abs=1e-3)
        expected_vy = (0.85 - 0.5 * GRAVITY * 0.45 ** 2) / 0.45
        assert v[1] == pytest.approx(expected_vy)
        assert v[1] == pytest.approx(6.121, abs=1e-3)

    @pytest.mark.parametrize("target,t", [
        ((0.0, 1.0, -6.0), 0.45),
        ((1.2, 0.3, -6.0), 0.3),
        ((-2.2, 1.7, -6.0), 0.7),
        ((0.5, -0.8, -6.0), 0.6),
    ])
    def test_reaches_target(self, target, t):
        """launch + v·t + ½·g·t² lands on the target."""
        target = np.array(target)
        v = solve_initial_velocity(LAUNCH, target, GRAVITY, t)
        g = np.array([0.0, GRAVITY, 0.0])
        np.testing.assert_allclose(LAUNCH + v * t + 0.5 * g * t * t, target,
                                   atol=1e-9)

    def test_non_positive_time_rejected(self):
        with pytest.raises(ValueError):
            solve_initial_velocity(LAUNCH, np.array([0.0, 1.0, -6.0]), GRAVITY, 0.0)


class TestBallisticSolver:

    def test_invalid_shot_raises_with_analysis(self):
        params = make_params(ShotType.INVALID)
        with pytest.raises(InvalidShotError) as exc:
            BallisticSolver().solve(params)
        assert exc.value.analysis is params.analysis

    def test_normal_shot_uses_normal_timing(self):
        v = BallisticSolver().solve(make_params(power=0.5))
        assert v[2] == pytest.approx(-6.0 / 0.45)

    def test_curve_shot_targets_aim_point(self):
        """CURVE solves toward the outward aim point over the curve window."""
        params = make_params(ShotType.CURVE, power=0.5, amount=1.0, direction=1)
        v = BallisticSolver().solve(params)
        t = 0.7 - 0.35 * 0.5
        expected = solve_initial_velocity(LAUNCH, params.aim_target_position,
                                          GRAVITY, t)
        np.testing.assert_allclose(v, expected)
        assert v[0] > 0

    def test_higher_power_faster_shot(self):
        slow = BallisticSolver().solve(make_params(power=0.1))
        fast = BallisticSolver().solve(make_params(power=0.9))
        assert np.linalg.norm(fast) > np.linalg.norm(slow)

    def test_debug_output(self):
        assert "INVALID" in debug_velocity(None)
        assert "Speed:" in debug_velocity(np.array([0.0, 6.0, -13.3]))


class TestPredictTrajectory:

    def test_shape_and_start(self):
        points = predict_trajectory(LAUNCH, np.array([0.0, 6.0, -13.0]), GRAVITY)
        assert points.shape == (60, 3)
        np.testing.assert_allclose(points[0], LAUNCH)

    def test_clamped_to_floor(self):
        points = predict_trajectory(LAUNCH, np.array([0.0, 2.0, -10.0]), GRAVITY)
        assert points[:, 1].min() >= 0.15


class TestSimulateFlight:

    def test_straight_shot_crosses_at_target(self):
        """Without curve force the integrated flight matches the solve."""
        params = make_params(power=0.5, target=(0.6, 1.1, -6.0))
        prediction = simulate_flight(make_result(params))
        assert prediction.crossing_point is not None
        np.testing.assert_allclose(prediction.crossing_point,
                                   params.target_position, atol=1e-4)
        assert prediction.flight_time_s == pytest.approx(0.45, abs=1e-4)

    @pytest.mark.parametrize("direction", [1, -1])
    def test_curve_bends_back_toward_target(self, direction):
        """A curve shot crosses closer to its target than to its aim point."""
        params = make_params(ShotType.CURVE, power=0.5, amount=1.0,
                             direction=direction, target=(0.0, 0.8, -6.0))
        prediction = simulate_flight(make_result(params))
        crossing_x = prediction.crossing_point[0]
        aim_x = params.aim_target_position[0]
        assert abs(crossing_x) < abs(aim_x)
        assert abs(crossing_x - aim_x) > 0.2
