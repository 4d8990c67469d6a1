"""
Swipe normalization.

Moves the gesture start to the origin, then rotates and scales the path
so the start→end segment becomes (0, 0)→(1, 0). What remains in the
y coordinates is the shape of the swipe, independent of its direction
and length, which is what the classifier reads curvature from.
"""

import logging
import math

import numpy as np

from snapshoot.errors import InsufficientInputError
from snapshoot.models.swipe import SwipeData, NormalizedSwipeData
from snapshoot.utils.constants import RAD_TO_DEG

logger = logging.getLogger(__name__)


def normalize_swipe(swipe: SwipeData) -> NormalizedSwipeData:
    """Normalize a released swipe.

    Args:
        swipe: Gesture with at least 2 points.

    Returns:
        NormalizedSwipeData. A zero-length swipe yields all points at
        (0, 0) with zero speed and angle.

    Raises:
        InsufficientInputError: Fewer than 2 points.
    """
    if len(swipe.points) < 2:
        raise InsufficientInputError(
            f"At least 2 points required for normalization, got {len(swipe.points)}"
        )

    raw = np.array([(p.x, p.y) for p in swipe.points], dtype=float)
    translated = raw - raw[0]
    dx, dy = translated[-1]
    distance = math.hypot(dx, dy)

    if distance == 0:
        logger.debug("Zero-length swipe, returning degenerate normalization")
        return NormalizedSwipeData(
            points=tuple((0.0, 0.0) for _ in swipe.points),
            original_distance=0.0,
            duration=swipe.duration,
            speed=0.0,
            angle=0.0,
            horizontal_distance=0.0,
            vertical_distance=0.0,
        )

    angle = math.atan2(dy, dx)

    # Rotate by -angle so start→end lies on +x, then scale end to (1, 0)
    cos_a = math.cos(-angle)
    sin_a = math.sin(-angle)
    rotation = np.array([[cos_a, -sin_a],
                         [sin_a, cos_a]])
    normalized = (translated @ rotation.T) / distance

    speed = distance / swipe.duration * 1000 if swipe.duration > 0 else 0.0

    return NormalizedSwipeData(
        points=tuple((float(x), float(y)) for x, y in normalized),
        original_distance=distance,
        duration=swipe.duration,
        speed=speed,
        angle=angle,
        horizontal_distance=float(dx),
        vertical_distance=float(dy),
    )


def debug_normalized_swipe(normalized: NormalizedSwipeData) -> str:
    """Human-readable dump of a normalized swipe."""
    lines = ["Normalized Swipe Data:"]
    for i, (x, y) in enumerate(normalized.points, start=1):
        lines.append(f"  [{i}] ({x:.3f}, {y:.3f})")
    lines += [
        f"Distance: {normalized.original_distance:.1f}px",
        f"Duration: {normalized.duration:.0f}ms",
        f"Speed: {normalized.speed:.1f}px/s",
        f"Angle: {normalized.angle * RAD_TO_DEG:.1f}°",
        f"Horizontal: {normalized.horizontal_distance:.1f}px",
        f"Vertical: {normalized.vertical_distance:.1f}px",
    ]
    return "\n".join(lines)
