"""
Mock physics world for development and testing.

Stands in for the rigid-body engine so the shot pipeline can run end
to end without one. It holds:
  - a single ball body (gravity + accumulated forces, semi-implicit Euler)
  - a floor with a damped bounce
  - a goal-sensor trigger box just behind the goal line
  - a net plane that stops the ball

The world advances in fixed sub-steps regardless of the frame delta,
and calls pre-step hooks (the controller's physics_step) once per
sub-step, the way the real engine drives the curve force.
"""

import logging
from typing import Callable

import numpy as np
from PyQt6.QtCore import QObject, pyqtSignal

from snapshoot.utils.config import PipelineConfig
from snapshoot.utils.constants import (
    BALL_MASS,
    BALL_RADIUS,
    BALL_RESTITUTION,
    GOAL_SENSOR_HALF_DEPTH,
    GOAL_SENSOR_ID,
    GOAL_SENSOR_OFFSET,
    NET_DEPTH,
    PHYSICS_MAX_SUBSTEPS,
    PHYSICS_TIME_STEP,
)

logger = logging.getLogger(__name__)


class SimulatedBallBody:
    """Ball body implementing the BallBody protocol.

    Asleep at the launch spot until woken; an asleep body ignores
    gravity and does not move.
    """

    def __init__(self, start_position, mass: float = BALL_MASS,
                 radius: float = BALL_RADIUS):
        self.start_position = np.array(start_position, dtype=float)
        self.mass = mass
        self.radius = radius
        self.position = self.start_position.copy()
        self.velocity = np.zeros(3)
        self.angular_velocity = np.zeros(3)
        self.force = np.zeros(3)
        self.awake = False

    def apply_force(self, force: np.ndarray, world_point: np.ndarray) -> None:
        # Applied at the centre of mass: linear only
        self.force += np.asarray(force, dtype=float)

    def wake(self):
        self.awake = True

    def reset(self):
        """Back to the launch spot, at rest and asleep."""
        self.position = self.start_position.copy()
        self.velocity = np.zeros(3)
        self.angular_velocity = np.zeros(3)
        self.force = np.zeros(3)
        self.awake = False


class MockPhysicsWorld(QObject):
    """Fixed-step world containing the ball, floor, goal sensor and net.

    Signals:
        contact(str): Body id of a sensor the ball overlaps, reported once
                      per sub-step while the overlap lasts.
    """

    contact = pyqtSignal(object)  # body id

    def __init__(self, ball: SimulatedBallBody,
                 config: PipelineConfig = PipelineConfig(),
                 time_step: float = PHYSICS_TIME_STEP,
                 max_substeps: int = PHYSICS_MAX_SUBSTEPS,
                 parent=None):
        super().__init__(parent)
        self.ball = ball
        self.gravity = np.array([0.0, config.gravity, 0.0])
        self.time_step = time_step
        self.max_substeps = max_substeps
        self._accumulator = 0.0
        self._pre_step_hooks: list[Callable[[float], None]] = []

        goal = config.goal
        sensor_z = goal.depth - GOAL_SENSOR_OFFSET
        self._sensor_min = np.array(
            [-goal.half_width, 0.0, sensor_z - GOAL_SENSOR_HALF_DEPTH]
        )
        self._sensor_max = np.array(
            [goal.half_width, goal.height, sensor_z + GOAL_SENSOR_HALF_DEPTH]
        )
        self._net_z = goal.depth - NET_DEPTH

    def add_pre_step(self, hook: Callable[[float], None]):
        """Register a callable invoked with the sub-step size before each sub-step."""
        self._pre_step_hooks.append(hook)

    def step(self, frame_delta: float) -> int:
        """Advance by a rendered frame's delta.

        Returns:
            Number of fixed sub-steps taken.
        """
        self._accumulator += frame_delta
        substeps = 0
        while self._accumulator >= self.time_step and substeps < self.max_substeps:
            self._substep(self.time_step)
            self._accumulator -= self.time_step
            substeps += 1
        if substeps == self.max_substeps:
            # Drop the backlog rather than spiral
            self._accumulator = 0.0
        return substeps

    def _substep(self, dt: float):
        ball = self.ball
        if not ball.awake:
            return

        for hook in self._pre_step_hooks:
            hook(dt)

        acceleration = self.gravity + ball.force / ball.mass
        ball.velocity = ball.velocity + acceleration * dt
        ball.position = ball.position + ball.velocity * dt
        ball.force = np.zeros(3)

        if ball.position[1] < ball.radius:
            ball.position[1] = ball.radius
            if ball.velocity[1] < 0:
                ball.velocity[1] = -ball.velocity[1] * BALL_RESTITUTION

        if ball.position[2] < self._net_z:
            ball.position[2] = self._net_z
            ball.velocity = np.zeros(3)

        if self._in_goal_sensor(ball.position):
            self.contact.emit(GOAL_SENSOR_ID)

    def _in_goal_sensor(self, position: np.ndarray) -> bool:
        return bool(np.all(position >= self._sensor_min)
                    and np.all(position <= self._sensor_max))
