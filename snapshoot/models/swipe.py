"""
Swipe gesture data models for SnapShoot.

SwipePoint: A single sampled pointer position.
SwipeData: A completed gesture, as delivered by the capture device.
NormalizedSwipeData: Rotation/scale invariant form used for classification.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SwipePoint:
    """A sampled pointer position.

    Attributes:
        x: Screen x in pixels (grows right).
        y: Screen y in pixels (grows down).
        timestamp: Monotonic time in milliseconds.
    """
    x: float
    y: float
    timestamp: float


@dataclass(frozen=True)
class SwipeData:
    """A released gesture, sampled down to a small fixed count of points.

    Attributes:
        points: Ordered samples, first = touch down, last = release.
        start_time: Timestamp of the first sample (ms).
        end_time: Timestamp of the last sample (ms).
        duration: end_time - start_time (ms).
    """
    points: tuple[SwipePoint, ...]
    start_time: float
    end_time: float
    duration: float

    @classmethod
    def from_points(cls, points) -> "SwipeData":
        """Build a SwipeData whose timing is taken from its samples."""
        points = tuple(points)
        if not points:
            return cls(points=(), start_time=0.0, end_time=0.0, duration=0.0)
        start = points[0].timestamp
        end = points[-1].timestamp
        return cls(points=points, start_time=start, end_time=end,
                   duration=end - start)


@dataclass(frozen=True)
class NormalizedSwipeData:
    """Gesture path in a frame where start = (0, 0) and end = (1, 0).

    Attributes:
        points: Normalized (x, y) samples. y is the deviation from the
                straight start→end line, in units of the swipe length.
        original_distance: Start→end distance (px).
        duration: Gesture duration (ms).
        speed: original_distance / duration (px/s).
        angle: atan2(dy, dx) of start→end in radians
               (0 = screen right, -pi/2 = screen up).
        horizontal_distance: dx in pixels (positive = right).
        vertical_distance: dy in pixels (negative = up).
    """
    points: tuple[tuple[float, float], ...]
    original_distance: float
    duration: float
    speed: float
    angle: float
    horizontal_distance: float
    vertical_distance: float
