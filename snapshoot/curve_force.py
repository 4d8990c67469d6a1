"""
In-flight curve force for CURVE shots.

Every physics sub-step while active, a horizontal force perpendicular
to the ball's velocity is applied at the ball's position (no torque).
It scales with current speed and fades linearly over the decay window,
so the trajectory bends continuously instead of receiving one kick.

States:
  Inactive: no tracker.
  Active: a tracker holding the shot analysis and elapsed flight time.
Only one tracker exists at a time; starting any shot replaces it.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from snapshoot.models.body import BallBody
from snapshoot.models.shot import ShotAnalysis, ShotType
from snapshoot.utils.config import CurveForceConfig
from snapshoot.utils.constants import DIRECTION_EPSILON

logger = logging.getLogger(__name__)


def curve_force_vector(velocity: np.ndarray, analysis: ShotAnalysis,
                       elapsed: float,
                       config: CurveForceConfig = CurveForceConfig()) -> np.ndarray:
    """Curve force (N) for the current ball velocity and flight time.

    Degenerate cases (not a curve, no direction, slow ball, vertical
    velocity) return a zero vector.

    Args:
        velocity: Current linear velocity (m/s).
        analysis: Analysis of the shot in flight.
        elapsed: Seconds since launch.
        config: Curve force tuning.

    Returns:
        Force vector, shape (3,), with zero y component.
    """
    zero = np.zeros(3)
    if analysis.type != ShotType.CURVE or analysis.curve_direction == 0:
        return zero

    velocity = np.asarray(velocity, dtype=float)
    speed = float(np.linalg.norm(velocity))
    if speed < config.min_speed:
        return zero

    vx, _, vz = velocity / speed
    # Velocity direction rotated 90° about the vertical axis
    perpendicular = np.array([-vz, 0.0, vx])
    perp_length = float(np.linalg.norm(perpendicular))
    if perp_length < DIRECTION_EPSILON:
        return zero
    perpendicular /= perp_length

    speed_factor = min(speed / config.speed_reference, config.speed_max_factor)
    time_factor = max(0.0, 1.0 - elapsed / config.decay_window)
    strength = analysis.curve_amount * speed_factor * time_factor * config.scale

    return perpendicular * (-analysis.curve_direction) * strength


@dataclass
class _CurveTracker:
    analysis: ShotAnalysis
    elapsed_time: float = 0.0


class CurveForce:
    """Applies the curve force to the ball during a CURVE shot."""

    def __init__(self, config: CurveForceConfig = CurveForceConfig()):
        self.config = config
        self._tracker: Optional[_CurveTracker] = None

    @property
    def is_active(self) -> bool:
        return self._tracker is not None

    @property
    def elapsed_time(self) -> float:
        return self._tracker.elapsed_time if self._tracker else 0.0

    def start(self, analysis: ShotAnalysis):
        """Begin a curve window. Any other shot type cancels a stale one."""
        if analysis.type != ShotType.CURVE:
            self._tracker = None
            return
        self._tracker = _CurveTracker(analysis=analysis)
        logger.debug(
            f"Curve force started: amount={analysis.curve_amount:.2f}, "
            f"direction={analysis.curve_direction}"
        )

    def stop(self):
        """End the curve window. Safe to call when already inactive."""
        if self._tracker is not None:
            logger.debug(
                f"Curve force stopped after {self._tracker.elapsed_time:.2f}s"
            )
        self._tracker = None

    def update(self, delta_time: float, ball: BallBody):
        """Advance one physics sub-step and push the ball sideways.

        Args:
            delta_time: Physics sub-step size (s), not the render delta.
            ball: The ball body to read velocity from and apply force to.
        """
        tracker = self._tracker
        if tracker is None:
            return

        tracker.elapsed_time += delta_time
        if tracker.elapsed_time > self.config.lifetime:
            self.stop()
            return

        force = curve_force_vector(
            ball.velocity, tracker.analysis, tracker.elapsed_time, self.config
        )
        if not force.any():
            return
        ball.apply_force(force, np.array(ball.position, dtype=float))
