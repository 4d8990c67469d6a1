"""
Ballistic solve and flight prediction for SnapShoot.

Two stages:
  1. Shot parameters → launch velocity (BallisticSolver): the closed-form
     initial velocity that reaches the aim point under constant gravity
     in a power-derived flight time.
  2. Launch → flight (predict_trajectory / simulate_flight): previews of
     the resulting path for debug display and verification.

Flight time model:
    t = max_time - (max_time - min_time) * power
Higher power gives a shorter, flatter flight.

Solve (gravity g on the y axis only):
    displacement = v0 * t + 0.5 * g * t²
    v0.x = dx / t,  v0.z = dz / t,  v0.y = (dy - 0.5 * g * t²) / t

Curve shots solve against the outward aim point; simulate_flight adds
the curve force to show the ball bending back toward the real target.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.integrate import solve_ivp

from snapshoot.curve_force import curve_force_vector
from snapshoot.errors import InvalidShotError
from snapshoot.models.shot import ShotParameters, ShotResult, ShotType
from snapshoot.utils.config import PipelineConfig, ShotTiming
from snapshoot.utils.constants import (
    BALL_MASS,
    BALL_RADIUS,
    TRAJECTORY_SAMPLE_COUNT,
    TRAJECTORY_SAMPLE_STEP,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Stage 1: Shot Parameters → Launch Velocity
# =============================================================================

def flight_time(power: float, timing: ShotTiming) -> float:
    """Flight time (s) for a power in [0, 1]; strictly decreasing in power."""
    return timing.max_time - (timing.max_time - timing.min_time) * power


def solve_initial_velocity(launch: np.ndarray, target: np.ndarray,
                           gravity: float, t: float) -> np.ndarray:
    """Initial velocity reaching target from launch in t seconds.

    Exact under constant vertical gravity and no other forces.

    Args:
        launch: Start position (m).
        target: Position to reach (m).
        gravity: Vertical acceleration (m/s², negative = down).
        t: Flight time (s), must be positive.

    Returns:
        Velocity vector (m/s), shape (3,).
    """
    if t <= 0:
        raise ValueError(f"Flight time must be positive, got {t}")
    displacement = np.asarray(target, dtype=float) - np.asarray(launch, dtype=float)
    velocity = displacement / t
    velocity[1] = (displacement[1] - 0.5 * gravity * t * t) / t
    return velocity


class BallisticSolver:
    """Solves launch velocities with injected gravity and launch geometry."""

    def __init__(self, config: PipelineConfig = PipelineConfig()):
        self.config = config

    def solve(self, params: ShotParameters) -> np.ndarray:
        """Launch velocity for a resolved shot.

        CURVE shots aim at aim_target_position, all others at
        target_position.

        Raises:
            InvalidShotError: The shot was classified INVALID.
        """
        analysis = params.analysis
        if analysis.type == ShotType.INVALID:
            raise InvalidShotError("INVALID shot has no launch velocity",
                                   analysis=analysis)

        if analysis.type == ShotType.CURVE:
            target = params.aim_target_position
        else:
            target = params.target_position

        timing = self.config.timing_for(analysis.type)
        t = flight_time(analysis.power, timing)
        launch = self.config.launch
        velocity = solve_initial_velocity(launch, target, self.config.gravity, t)

        logger.debug(
            f"Ballistic solve [{analysis.type.value}]: power={analysis.power:.2f}, "
            f"t={t:.3f}s, target=({target[0]:.2f}, {target[1]:.2f}, {target[2]:.2f}), "
            f"v0=({velocity[0]:.2f}, {velocity[1]:.2f}, {velocity[2]:.2f}) m/s"
        )
        return velocity


def debug_velocity(velocity: Optional[np.ndarray]) -> str:
    """Human-readable dump of a launch velocity (None = no shot)."""
    if velocity is None:
        return "Velocity: INVALID (no shot)"
    return (
        "Initial Velocity:\n"
        f"  Vector: ({velocity[0]:.2f}, {velocity[1]:.2f}, {velocity[2]:.2f})\n"
        f"  Speed: {float(np.linalg.norm(velocity)):.2f} m/s"
    )


# =============================================================================
# Stage 2: Flight Prediction
# =============================================================================

@dataclass(eq=False)
class FlightPrediction:
    """Predicted flight of a launched ball.

    Attributes:
        points: Sampled (x, y, z) positions, shape (n, 3).
        crossing_point: Where the ball crosses the goal plane, or None if
                        it never gets there within the simulated time.
        flight_time_s: Time of the crossing (or of the last sample).
    """
    points: np.ndarray
    crossing_point: Optional[np.ndarray]
    flight_time_s: float


def predict_trajectory(position: np.ndarray, velocity: np.ndarray,
                       gravity: float,
                       sample_step: float = TRAJECTORY_SAMPLE_STEP,
                       sample_count: int = TRAJECTORY_SAMPLE_COUNT,
                       floor: float = BALL_RADIUS) -> np.ndarray:
    """Sample the force-free arc from the current ball state.

    Heights are clamped at `floor` so the preview rests on the pitch.

    Returns:
        Array of shape (sample_count, 3).
    """
    t = np.arange(sample_count, dtype=float)[:, None] * sample_step
    acceleration = np.array([0.0, gravity, 0.0])
    points = (np.asarray(position, dtype=float)
              + np.asarray(velocity, dtype=float) * t
              + 0.5 * acceleration * t * t)
    points[:, 1] = np.maximum(points[:, 1], floor)
    return points


def simulate_flight(result: ShotResult,
                    config: PipelineConfig = PipelineConfig(),
                    mass: float = BALL_MASS,
                    t_max: float = 3.0,
                    dt_max: float = 0.01) -> FlightPrediction:
    """Integrate a launched shot under gravity and the curve force.

    Uses scipy's solve_ivp with a terminal event at the goal plane.

    Args:
        result: Launch state from the pipeline.
        config: Gravity, launch position, goal plane and curve force tuning.
        mass: Ball mass (kg), converts the curve force to acceleration.
        t_max: Maximum simulated time (s).
        dt_max: Maximum solver step (s).

    Returns:
        FlightPrediction.
    """
    plane_z = config.target_bounds().z
    launch = config.launch
    analysis = result.analysis
    force_cfg = config.curve_force
    gravity = config.gravity

    def derivatives(t, state):
        """Equations of motion: gravity plus the curve force while it lasts."""
        velocity = state[3:]
        acceleration = np.array([0.0, gravity, 0.0])
        if t <= force_cfg.lifetime:
            acceleration = acceleration + curve_force_vector(
                velocity, analysis, t, force_cfg
            ) / mass
        return np.concatenate([velocity, acceleration])

    def reach_goal_plane(t, state):
        """Event: ball crosses the goal plane moving toward the goal."""
        return state[2] - plane_z

    reach_goal_plane.terminal = True
    reach_goal_plane.direction = -1

    y0 = np.concatenate([launch, np.asarray(result.velocity, dtype=float)])
    sol = solve_ivp(
        derivatives,
        [0, t_max],
        y0,
        method="RK45",
        max_step=dt_max,
        events=[reach_goal_plane],
        rtol=1e-9,
        atol=1e-11,
    )

    if not sol.success:
        logger.warning(f"Flight integration failed: {sol.message}")
        return FlightPrediction(points=launch[None, :], crossing_point=None,
                                flight_time_s=0.0)

    points = sol.y[:3].T
    crossing = None
    flight = float(sol.t[-1]) if len(sol.t) else 0.0
    if len(sol.t_events[0]) > 0:
        crossing = sol.y_events[0][0][:3].copy()
        flight = float(sol.t_events[0][0])

    return FlightPrediction(points=points, crossing_point=crossing,
                            flight_time_s=flight)
