"""
Interface to the rigid-body engine's ball.

The shot pipeline never integrates motion itself. It writes the launch
state, reads velocity/position every physics sub-step and applies the
curve force, through this protocol.
"""

from typing import Protocol

import numpy as np


class BallBody(Protocol):
    """What the pipeline needs from the physics engine's ball body.

    Attributes:
        position: Current position (m), shape (3,).
        velocity: Current linear velocity (m/s), shape (3,).
        angular_velocity: Current angular velocity (rad/s), shape (3,).
        mass: Body mass (kg).
    """
    position: np.ndarray
    velocity: np.ndarray
    angular_velocity: np.ndarray
    mass: float

    def apply_force(self, force: np.ndarray, world_point: np.ndarray) -> None:
        """Accumulate a force for the next integration step."""
        ...
