"""
Aim resolution: swipe analysis → 3D target inside the goal mouth.

X comes from the horizontal swipe distance, Y from the height factor,
Z is the goal plane. Curve shots get a second, outward-shifted aim
point: the ballistic solve targets it and the in-flight curve force
bends the ball back toward the intended target.
"""

import logging

import numpy as np

from snapshoot.models.shot import ShotAnalysis, ShotParameters, ShotType
from snapshoot.models.swipe import NormalizedSwipeData
from snapshoot.utils.config import PipelineConfig

logger = logging.getLogger(__name__)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _direction_and_distance(origin: np.ndarray,
                            target: np.ndarray) -> tuple[np.ndarray, float]:
    offset = target - origin
    distance = float(np.linalg.norm(offset))
    if distance == 0:
        return np.zeros(3), 0.0
    return offset / distance, distance


class AimResolver:
    """Maps a classified swipe to target and aim points.

    Total: every analysis, INVALID included, resolves to parameters.
    Rejecting INVALID shots is the ballistic solver's job.
    """

    def __init__(self, config: PipelineConfig = PipelineConfig()):
        self.config = config
        self._bounds = config.target_bounds()

    def resolve(self, normalized: NormalizedSwipeData,
                analysis: ShotAnalysis) -> ShotParameters:
        """Compute target/aim positions, directions and distances."""
        launch = self.config.launch
        target = self.target_position(normalized, analysis)
        aim_target = self.aim_target_position(target, analysis)

        direction, distance = _direction_and_distance(launch, target)
        aim_direction, aim_distance = _direction_and_distance(launch, aim_target)

        return ShotParameters(
            target_position=target,
            direction=direction,
            distance=distance,
            aim_target_position=aim_target,
            aim_direction=aim_direction,
            aim_distance=aim_distance,
            analysis=analysis,
        )

    def target_position(self, normalized: NormalizedSwipeData,
                        analysis: ShotAnalysis) -> np.ndarray:
        """Intended landing point in the goal plane."""
        b = self._bounds

        # A fixed pixel span reaches the side of the goal, whatever the screen size
        horizontal_ratio = np.clip(
            normalized.horizontal_distance / self.config.pixels_per_half_goal,
            -1.0, 1.0,
        )
        x = _lerp(b.x_min, b.x_max, (horizontal_ratio + 1) * 0.5)

        height = float(np.clip(analysis.height_factor, 0.0, 1.0))
        y = _lerp(b.y_min, b.y_max, height)

        return np.array([x, y, b.z], dtype=float)

    def aim_target_position(self, target: np.ndarray,
                            analysis: ShotAnalysis) -> np.ndarray:
        """Outward-shifted aim point for curve shots, else a copy of target."""
        aim = target.copy()
        if analysis.type != ShotType.CURVE or analysis.curve_direction == 0:
            return aim

        curve_cfg = self.config.curve_aim
        intensity = float(np.clip(analysis.curve_amount, 0.0, 1.0))
        power = float(np.clip(analysis.power, 0.0, 1.0))
        sign = analysis.curve_direction

        offset = curve_cfg.max_offset * intensity * (0.55 + 0.45 * power)
        aim[0] = target[0] + sign * offset

        if abs(aim[0]) <= abs(target[0]):
            aim[0] = target[0] + sign * (offset + curve_cfg.min_nudge)

        max_abs_x = self._bounds.x_max + curve_cfg.margin
        aim[0] = np.clip(aim[0], -max_abs_x, max_abs_x)

        logger.debug(
            f"Curve aim: target x={target[0]:.2f} → aim x={aim[0]:.2f} "
            f"(offset={offset:.2f})"
        )
        return aim


def debug_shot_parameters(params: ShotParameters) -> str:
    """Human-readable dump of shot parameters."""
    def fmt(v):
        return f"({v[0]:.2f}, {v[1]:.2f}, {v[2]:.2f})"

    return (
        "Shot Parameters:\n"
        f"  Target: {fmt(params.target_position)}\n"
        f"  Aim Target: {fmt(params.aim_target_position)}\n"
        f"  Direction: {fmt(params.direction)}\n"
        f"  Aim Direction: {fmt(params.aim_direction)}\n"
        f"  Distance: {params.distance:.2f}m\n"
        f"  Aim Distance: {params.aim_distance:.2f}m"
    )
