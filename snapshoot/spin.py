"""
Initial spin for launched shots.

Only curve shots spin: sidespin about the vertical axis opposite to the
curve direction, plus a fixed backspin. The lateral motion itself comes
from the curve force module, not from this spin.
"""

import numpy as np

from snapshoot.models.shot import ShotParameters, ShotType
from snapshoot.utils.constants import SPIN_BACKSPIN_RATIO, SPIN_STRENGTH


def compute_angular_velocity(params: ShotParameters, velocity: np.ndarray,
                             spin_strength: float = SPIN_STRENGTH) -> np.ndarray:
    """Angular velocity (rad/s) for the launch.

    Args:
        params: Shot parameters (only the analysis is used).
        velocity: Launch velocity. Unused; kept so callers pass the full
                  launch state.
        spin_strength: Sidespin magnitude at full curve.

    Returns:
        (pitch, yaw, roll) angular velocity, shape (3,).
    """
    analysis = params.analysis
    angular_velocity = np.zeros(3)
    if analysis.type != ShotType.CURVE:
        return angular_velocity

    angular_velocity[0] = spin_strength * SPIN_BACKSPIN_RATIO
    angular_velocity[1] = -analysis.curve_direction * spin_strength * analysis.curve_amount
    return angular_velocity


def debug_angular_velocity(angular_velocity: np.ndarray) -> str:
    w = angular_velocity
    return (
        "Angular Velocity (Spin):\n"
        f"  Vector: ({w[0]:.2f}, {w[1]:.2f}, {w[2]:.2f})\n"
        f"  Magnitude: {float(np.linalg.norm(w)):.2f} rad/s"
    )
