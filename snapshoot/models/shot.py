"""
Data models for shots in SnapShoot.

ShotType / ShotOutcome / ShotState: closed enumerations.
ShotAnalysis: Classification of a normalized swipe.
ShotParameters: 3D target and aim points derived from the analysis.
ShotResult: Launch state handed to the physics engine.
ShotRecord: A resolved shot, kept in the game session history.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

import numpy as np

from snapshoot.models.swipe import NormalizedSwipeData


class ShotType(str, Enum):
    """Shot types a swipe can be classified as."""
    INVALID = "INVALID"    # Wrong direction, no shot
    CHIP = "CHIP"          # Slow straight swipe
    NORMAL = "NORMAL"      # Medium straight swipe
    POWER = "POWER"        # Fast straight swipe
    CURVE = "CURVE"        # Bent swipe, curls in flight


class ShotOutcome(str, Enum):
    SCORED = "SCORED"
    MISS = "MISS"


class ShotState(str, Enum):
    """Shot lifecycle held by the outcome controller."""
    IDLE = "IDLE"
    RESOLVING = "RESOLVING"
    IN_FLIGHT = "IN_FLIGHT"
    RESOLVED = "RESOLVED"


@dataclass(frozen=True)
class ShotAnalysis:
    """Classification of a swipe.

    Attributes:
        type: Shot type.
        power: Swipe speed mapped to 0-1.
        curve_amount: Path bend, 0 = straight, 1 = fully bent.
        curve_direction: -1 (left), 0 (none) or 1 (right).
        height_factor: 0 = along the ground, 1 = top of the target area.
    """
    type: ShotType
    power: float
    curve_amount: float
    curve_direction: int
    height_factor: float

    @property
    def curve_label(self) -> str:
        if self.curve_direction == 1:
            return "Right"
        if self.curve_direction == -1:
            return "Left"
        return "None"


@dataclass(frozen=True, eq=False)
class ShotParameters:
    """3D targeting for one shot (meters, world frame).

    aim_target_position equals target_position except for curve shots,
    which aim outward and are bent back by the in-flight curve force.
    """
    target_position: np.ndarray
    direction: np.ndarray
    distance: float
    aim_target_position: np.ndarray
    aim_direction: np.ndarray
    aim_distance: float
    analysis: ShotAnalysis


@dataclass(frozen=True, eq=False)
class ShotResult:
    """Launch state for the ball body.

    Attributes:
        velocity: Initial linear velocity (m/s).
        angular_velocity: Initial angular velocity (rad/s).
        shot_type: Classified shot type.
        target_position: Where the shot is meant to end up.
        aim_target_position: Where the ballistic solve aimed.
        analysis: Full classification, for HUD/debug display.
        parameters: Intermediate targeting data, for debug display.
        normalized: The normalized swipe, for debug display.
    """
    velocity: np.ndarray
    angular_velocity: np.ndarray
    shot_type: ShotType
    target_position: np.ndarray
    aim_target_position: np.ndarray
    analysis: ShotAnalysis
    parameters: Optional[ShotParameters] = None
    normalized: Optional[NormalizedSwipeData] = None

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))


@dataclass(eq=False)
class ShotRecord:
    """A resolved shot in the session history."""
    result: ShotResult
    outcome: ShotOutcome
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def scored(self) -> bool:
        return self.outcome == ShotOutcome.SCORED
