"""
Tests for the shot outcome controller.

Validates:
  - Launch applies velocity/spin and moves to IN_FLIGHT
  - Swipes outside IDLE are dropped before any pipeline work
  - INVALID and too-short swipes are rejected without touching the ball
  - Exactly one outcome per shot: first sensor contact or the timeout
  - Reset back to IDLE, and a full flight through the mock physics world
"""

from dataclasses import replace

import numpy as np
import pytest

from snapshoot.controller import ShotOutcomeController
from snapshoot.mock_physics import MockPhysicsWorld, SimulatedBallBody
from snapshoot.models.shot import ShotOutcome, ShotState, ShotType
from snapshoot.models.swipe import SwipeData, SwipePoint
from snapshoot.utils.config import PipelineConfig
from snapshoot.utils.constants import GOAL_SENSOR_ID


def make_swipe(coords, duration):
    n = len(coords)
    return SwipeData.from_points(
        SwipePoint(x, y, i * duration / (n - 1)) for i, (x, y) in enumerate(coords)
    )


def straight_up():
    return make_swipe([(200.0, 600.0 - 274.0 * i / 9) for i in range(10)], 274.0)


def curled():
    coords = [(200.0 + 60.0 * np.sin(np.pi * i / 9), 600.0 - 300.0 * i / 9)
              for i in range(10)]
    return make_swipe(coords, 250.0)


def downward():
    return make_swipe([(200.0, 300.0), (200.0, 600.0)], 200.0)


@pytest.fixture
def config():
    return PipelineConfig()


@pytest.fixture
def ball(config):
    return SimulatedBallBody(config.launch)


@pytest.fixture
def controller(qtbot, ball, config):
    return ShotOutcomeController(ball, config, GOAL_SENSOR_ID)


def record(signal):
    received = []
    signal.connect(lambda *args: received.append(args[0] if len(args) == 1 else args))
    return received


class TestLaunch:

    def test_starts_idle(self, controller):
        assert controller.state == ShotState.IDLE
        assert controller.can_shoot()
        assert controller.current_shot is None

    def test_launch_sets_ball_state(self, controller, ball):
        launched = record(controller.shot_launched)
        result = controller.handle_swipe(straight_up())
        assert result is not None
        assert launched == [result]
        np.testing.assert_array_equal(ball.velocity, result.velocity)
        assert ball.velocity is not result.velocity
        assert controller.state == ShotState.IN_FLIGHT
        assert controller.current_shot is result

    def test_state_sequence(self, controller):
        states = record(controller.state_changed)
        controller.handle_swipe(straight_up())
        assert [new for new, _ in states] == [ShotState.RESOLVING, ShotState.IN_FLIGHT]

    def test_curve_shot_starts_curve_force(self, controller, ball):
        result = controller.handle_swipe(curled())
        assert result.shot_type == ShotType.CURVE
        assert controller.curve_force.is_active
        assert ball.angular_velocity.any()

    def test_straight_shot_leaves_curve_force_idle(self, controller):
        controller.handle_swipe(straight_up())
        assert not controller.curve_force.is_active

    def test_physics_step_drives_curve_force(self, controller, ball):
        controller.handle_swipe(curled())
        controller.physics_step(1 / 120)
        assert controller.curve_force.elapsed_time == pytest.approx(1 / 120)
        assert ball.force.any()


class TestRejection:

    def test_swipe_dropped_while_in_flight(self, controller, ball):
        """A second swipe mid-flight changes nothing."""
        first = controller.handle_swipe(straight_up())
        velocity = ball.velocity.copy()
        assert controller.handle_swipe(curled()) is None
        np.testing.assert_array_equal(ball.velocity, velocity)
        assert controller.current_shot is first
        assert controller.state == ShotState.IN_FLIGHT

    def test_invalid_swipe_rejected(self, controller, ball):
        rejected = record(controller.shot_rejected)
        launched = record(controller.shot_launched)
        assert controller.handle_swipe(downward()) is None
        assert len(rejected) == 1
        assert rejected[0].type == ShotType.INVALID
        assert launched == []
        assert not ball.velocity.any()
        assert controller.state == ShotState.IDLE

    def test_short_swipe_dropped_silently(self, controller):
        rejected = record(controller.shot_rejected)
        states = record(controller.state_changed)
        swipe = SwipeData.from_points([SwipePoint(0.0, 0.0, 0.0)])
        assert controller.handle_swipe(swipe) is None
        assert rejected == []
        assert states == []
        assert controller.state == ShotState.IDLE

    def test_tap_rejected_as_invalid(self, controller, ball):
        """A tap (identical points) normalizes to a null gesture: INVALID."""
        rejected = record(controller.shot_rejected)
        tap = make_swipe([(5.0, 5.0), (5.0, 5.0), (5.0, 5.0)], 80.0)
        assert controller.handle_swipe(tap) is None
        assert len(rejected) == 1
        assert rejected[0].type == ShotType.INVALID
        assert controller.state == ShotState.IDLE
        assert not ball.velocity.any()

    def test_pipeline_failure_restores_idle(self, controller, monkeypatch):
        """An unexpected pipeline error propagates but leaves the controller usable."""
        def broken(swipe, config):
            raise ValueError("Flight time must be positive, got 0.0")

        monkeypatch.setattr("snapshoot.controller.execute_shot", broken)
        with pytest.raises(ValueError):
            controller.handle_swipe(straight_up())
        assert controller.state == ShotState.IDLE

        monkeypatch.undo()
        assert controller.handle_swipe(straight_up()) is not None

    def test_invalid_then_valid(self, controller):
        controller.handle_swipe(downward())
        assert controller.handle_swipe(straight_up()) is not None


class TestOutcome:

    def test_sensor_contact_scores_once(self, controller):
        outcomes = record(controller.shot_resolved)
        controller.handle_swipe(straight_up())
        assert controller.on_sensor_contact(GOAL_SENSOR_ID) is True
        assert controller.on_sensor_contact(GOAL_SENSOR_ID) is False
        controller.on_shot_timeout()
        assert outcomes == [ShotOutcome.SCORED]
        assert controller.state == ShotState.RESOLVED

    def test_other_bodies_ignored(self, controller):
        controller.handle_swipe(straight_up())
        assert controller.on_sensor_contact("post_left") is False
        assert controller.state == ShotState.IN_FLIGHT

    def test_contact_when_idle_ignored(self, controller):
        assert controller.on_sensor_contact(GOAL_SENSOR_ID) is False

    def test_timeout_is_miss(self, qtbot, ball, config):
        controller = ShotOutcomeController(
            ball, replace(config, shot_timeout_s=0.05), GOAL_SENSOR_ID
        )
        with qtbot.waitSignal(controller.shot_resolved, timeout=2000) as blocker:
            controller.handle_swipe(straight_up())
        assert blocker.args == [ShotOutcome.MISS]
        assert controller.on_sensor_contact(GOAL_SENSOR_ID) is False

    def test_resolution_stops_curve_force(self, controller):
        controller.handle_swipe(curled())
        controller.on_shot_timeout()
        assert not controller.curve_force.is_active

    def test_reset_delay_returns_to_idle(self, qtbot, ball, config):
        controller = ShotOutcomeController(
            ball, replace(config, reset_delay_s=0.05), GOAL_SENSOR_ID
        )
        controller.handle_swipe(straight_up())
        controller.on_sensor_contact(GOAL_SENSOR_ID)
        qtbot.waitUntil(lambda: controller.state == ShotState.IDLE, timeout=2000)
        assert controller.current_shot is None
        assert controller.can_shoot()

    def test_reset_to_idle_accepts_next_shot(self, controller):
        controller.handle_swipe(straight_up())
        controller.on_shot_timeout()
        controller.reset_to_idle()
        assert controller.handle_swipe(straight_up()) is not None


class TestFlight:

    def test_straight_shot_scores_in_mock_world(self, qtbot, ball, config):
        """The mock world reports the sensor contact that scores the shot."""
        world = MockPhysicsWorld(ball, config)
        controller = ShotOutcomeController(ball, config, GOAL_SENSOR_ID)
        world.add_pre_step(controller.physics_step)
        world.contact.connect(controller.on_sensor_contact)
        controller.shot_launched.connect(lambda _: ball.wake())
        outcomes = record(controller.shot_resolved)

        controller.handle_swipe(straight_up())
        for _ in range(120):
            world.step(1 / 60)
            if outcomes:
                break

        assert outcomes == [ShotOutcome.SCORED]
