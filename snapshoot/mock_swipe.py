"""
Mock swipe source for development and testing.

Generates statistically realistic swipe gestures without a touch
screen. Supports multiple player presets to simulate different styles.

Use it to run and demo the full shot pipeline headless; the CLI drives
the game with it.
"""

import logging
import math
import random
from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from snapshoot.models.swipe import SwipeData, SwipePoint

logger = logging.getLogger(__name__)


# Player presets: (mean, std_dev) for each gesture property
PRESETS = {
    "straight_shooter": {
        "description": "Clean upward swipes at medium speed",
        "angle": (-90.0, 8.0),      # Degrees, -90 = straight up the screen
        "speed": (1150.0, 150.0),   # px/s
        "bend": (0.0, 0.03),        # Lateral bulge / swipe length
        "length": (280.0, 40.0),    # px
    },
    "curler": {
        "description": "Bent swipes that curl the ball around the keeper",
        "angle": (-90.0, 12.0),
        "speed": (1300.0, 200.0),
        "bend": (0.2, 0.08),
        "length": (300.0, 40.0),
    },
    "chipper": {
        "description": "Slow, lofted swipes",
        "angle": (-90.0, 10.0),
        "speed": (700.0, 100.0),
        "bend": (0.0, 0.03),
        "length": (330.0, 40.0),
    },
    "power_striker": {
        "description": "Fast, flat swipes",
        "angle": (-88.0, 6.0),
        "speed": (1800.0, 150.0),
        "bend": (0.0, 0.02),
        "length": (220.0, 30.0),
    },
    "beginner": {
        "description": "Inconsistent swipes, some in the wrong direction",
        "angle": (-70.0, 50.0),
        "speed": (1000.0, 400.0),
        "bend": (0.0, 0.15),
        "length": (250.0, 90.0),
    },
}

SAMPLE_COUNT = 10
SCREEN_START = (195.0, 700.0)   # Touch-down point near the ball on a phone screen


def generate_swipe(preset: str = "straight_shooter",
                   rng: Optional[random.Random] = None,
                   sample_count: int = SAMPLE_COUNT,
                   start_time: float = 0.0) -> SwipeData:
    """Generate one swipe for a preset.

    The path is a straight start→end segment bulged sideways by a sine
    profile, sampled evenly in time.

    Args:
        preset: Preset name (see PRESETS).
        rng: Random source; module random if None.
        sample_count: Number of points in the swipe.
        start_time: Timestamp of the first point (ms).

    Returns:
        SwipeData with sample_count points.
    """
    rng = rng or random
    p = PRESETS.get(preset, PRESETS["straight_shooter"])

    angle = math.radians(rng.gauss(*p["angle"]))
    speed = max(100.0, rng.gauss(*p["speed"]))
    bend = rng.gauss(*p["bend"])
    length = max(20.0, rng.gauss(*p["length"]))
    duration = length / speed * 1000

    x0, y0 = SCREEN_START
    ux, uy = math.cos(angle), math.sin(angle)
    # Left-hand normal in screen space; positive bend bulges to +y of the path frame
    nx, ny = -uy, ux

    points = []
    for i in range(sample_count):
        s = i / (sample_count - 1)
        offset = bend * length * math.sin(math.pi * s)
        points.append(SwipePoint(
            x=x0 + ux * length * s + nx * offset,
            y=y0 + uy * length * s + ny * offset,
            timestamp=start_time + duration * s,
        ))
    return SwipeData.from_points(points)


class MockSwipeSource(QObject):
    """Simulates a player swiping, for development without a touch screen.

    Emits swipes on a random-interval timer on the caller's thread, the
    same way a real capture device reports a released gesture.

    Signals:
        swipe_released(SwipeData): Emitted when a simulated swipe ends.
    """

    swipe_released = pyqtSignal(object)  # SwipeData

    def __init__(
        self,
        preset: str = "straight_shooter",
        swipe_interval: tuple[float, float] = (1.5, 3.0),
        seed: Optional[int] = None,
        parent=None,
    ):
        """
        Args:
            preset: Player preset name (see PRESETS).
            swipe_interval: (min, max) seconds between simulated swipes.
            seed: Seed for reproducible swipe sequences.
        """
        super().__init__(parent)
        self._preset = preset if preset in PRESETS else "straight_shooter"
        self._swipe_interval = swipe_interval
        self._rng = random.Random(seed)
        self._swipe_count = 0
        self._clock_ms = 0.0

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timer)

    @property
    def preset(self) -> str:
        return self._preset

    def set_preset(self, preset: str):
        """Change the player preset."""
        if preset in PRESETS:
            self._preset = preset
            logger.info(f"Mock preset changed to: {preset}")

    def start(self):
        logger.info(f"Mock swipe source started (preset={self._preset})")
        self._schedule_next()

    def stop(self):
        self._timer.stop()

    def is_running(self) -> bool:
        return self._timer.isActive()

    def trigger_swipe(self) -> SwipeData:
        """Emit a single swipe immediately (for tests / manual play)."""
        swipe = generate_swipe(self._preset, self._rng,
                               start_time=self._clock_ms)
        self._clock_ms = swipe.end_time + 1.0
        self._swipe_count += 1
        logger.debug(
            f"Mock swipe #{self._swipe_count}: {len(swipe.points)} points, "
            f"{swipe.duration:.0f}ms"
        )
        self.swipe_released.emit(swipe)
        return swipe

    def _schedule_next(self):
        delay = self._rng.uniform(*self._swipe_interval)
        self._timer.start(int(delay * 1000))

    def _on_timer(self):
        self.trigger_swipe()
        self._schedule_next()
