"""
Swipe classification: normalized swipe → shot type and parameters.

Decision order (fixed tie-break):
  1. A swipe whose start→end angle lies in [0°, 180°] leads downward or
     sideways-down on screen and is INVALID.
  2. A bent path (mean |y| of the interior samples above the curve
     threshold) is a CURVE, however fast it was.
  3. Otherwise the speed band picks CHIP, NORMAL or POWER.

Power, curve and height are always computed, INVALID included, so the
HUD can show what the player did.
"""

import logging

import numpy as np

from snapshoot.models.shot import ShotAnalysis, ShotType
from snapshoot.models.swipe import NormalizedSwipeData
from snapshoot.utils.config import ClassifierThresholds
from snapshoot.utils.constants import (
    INTERIOR_SAMPLE_SLICE,
    INVALID_ANGLE_RANGE_DEG,
    RAD_TO_DEG,
)

logger = logging.getLogger(__name__)


def analyze_shot(normalized: NormalizedSwipeData,
                 thresholds: ClassifierThresholds = ClassifierThresholds()
                 ) -> ShotAnalysis:
    """Classify a normalized swipe.

    Pure and deterministic: the same input always gives the same analysis.

    Args:
        normalized: Output of normalize_swipe.
        thresholds: Speed bands, curve threshold and screen height.

    Returns:
        ShotAnalysis (never raises).
    """
    angle_deg = normalized.angle * RAD_TO_DEG

    power = _calculate_power(normalized.speed, thresholds)
    avg_deviation, curve_amount, curve_direction = _analyze_curve(
        normalized.points, thresholds
    )
    height_factor = _calculate_height_factor(
        normalized.vertical_distance, thresholds
    )
    shot_type = _determine_shot_type(
        angle_deg, normalized.speed, avg_deviation, thresholds
    )

    analysis = ShotAnalysis(
        type=shot_type,
        power=power,
        curve_amount=curve_amount,
        curve_direction=curve_direction,
        height_factor=height_factor,
    )
    logger.debug(
        f"Classified swipe: angle={angle_deg:.1f}°, "
        f"speed={normalized.speed:.0f}px/s, deviation={avg_deviation:.3f} "
        f"→ {shot_type.value}"
    )
    return analysis


def _calculate_power(speed: float, t: ClassifierThresholds) -> float:
    """Map swipe speed linearly onto 0-1, clamped."""
    span = t.max_speed - t.min_speed
    if span <= 0:
        return 1.0 if speed >= t.max_speed else 0.0
    return float(np.clip((speed - t.min_speed) / span, 0.0, 1.0))


def _analyze_curve(points, t: ClassifierThresholds) -> tuple[float, float, int]:
    """Measure how far the interior samples bend away from the straight line.

    Returns:
        (avg_deviation, curve_amount, curve_direction)
    """
    interior = np.array(points[INTERIOR_SAMPLE_SLICE], dtype=float)
    if interior.size == 0:
        return 0.0, 0.0, 0

    ys = interior[:, 1]
    avg_deviation = float(np.mean(np.abs(ys)))
    avg_y = float(np.mean(ys))

    curve_amount = min(1.0, avg_deviation / t.curve_saturation)

    curve_direction = 0
    if avg_deviation > t.curve_deviation:
        curve_direction = 1 if avg_y > 0 else -1

    return avg_deviation, curve_amount, curve_direction


def _calculate_height_factor(vertical_distance: float,
                             t: ClassifierThresholds) -> float:
    # Screen y grows downward: an upward swipe raises the shot
    height_ratio = -vertical_distance / t.screen_height
    return float(np.clip(height_ratio + t.height_base, 0.0, 1.0))


def _determine_shot_type(angle_deg: float, speed: float,
                         avg_deviation: float,
                         t: ClassifierThresholds) -> ShotType:
    low, high = INVALID_ANGLE_RANGE_DEG
    if low <= angle_deg <= high:
        return ShotType.INVALID

    if avg_deviation > t.curve_deviation:
        return ShotType.CURVE

    if speed <= t.chip_max_speed:
        return ShotType.CHIP
    elif speed <= t.normal_max_speed:
        return ShotType.NORMAL
    else:
        return ShotType.POWER


def debug_shot_analysis(analysis: ShotAnalysis) -> str:
    """Human-readable dump of a shot analysis."""
    return (
        "Shot Analysis:\n"
        f"  Type: {analysis.type.value}\n"
        f"  Power: {analysis.power * 100:.0f}%\n"
        f"  Curve: {analysis.curve_amount * 100:.0f}% ({analysis.curve_label})\n"
        f"  Height Factor: {analysis.height_factor * 100:.0f}%"
    )
