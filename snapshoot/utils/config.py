"""
Configuration for SnapShoot.

Two layers:
  - PipelineConfig: immutable tuning values injected into the aim
    resolver, ballistic solver, curve force and controller. Defaults
    come from utils.constants.
  - Config: user settings persisted to ~/.snapshoot/config.json. A few
    keys override PipelineConfig values (see PipelineConfig.from_settings).
"""

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

import numpy as np

from snapshoot.models.shot import ShotType
from snapshoot.utils import constants as C

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalGeometry:
    """Goal mouth dimensions and position (meters)."""
    width: float = C.GOAL_WIDTH
    height: float = C.GOAL_HEIGHT
    depth: float = C.GOAL_DEPTH

    @property
    def half_width(self) -> float:
        return self.width / 2


@dataclass(frozen=True)
class TargetMargins:
    """Margins around the goal mouth that a swipe may target.

    Negative horizontal/top margins keep the target inside the frame.
    """
    horizontal: float = C.TARGET_HORIZONTAL_MARGIN
    top: float = C.TARGET_VERTICAL_MARGIN_TOP
    bottom: float = C.TARGET_VERTICAL_MARGIN_BOTTOM
    depth: Optional[float] = C.TARGET_DEPTH_OVERRIDE


@dataclass(frozen=True)
class CurveAimConfig:
    max_offset: float = C.CURVE_AIM_MAX_OFFSET
    margin: float = C.CURVE_AIM_MARGIN
    min_nudge: float = C.CURVE_AIM_MIN_NUDGE


@dataclass(frozen=True)
class ShotTiming:
    """Flight time window (seconds) for the ballistic solve."""
    min_time: float
    max_time: float

    def __post_init__(self):
        if self.min_time <= 0:
            raise ValueError(f"min_time must be positive, got {self.min_time}")
        if self.min_time > self.max_time:
            raise ValueError(
                f"min_time {self.min_time} exceeds max_time {self.max_time}"
            )


@dataclass(frozen=True)
class ClassifierThresholds:
    min_speed: float = C.POWER_MIN_SPEED
    max_speed: float = C.POWER_MAX_SPEED
    chip_max_speed: float = C.CHIP_MAX_SPEED
    normal_max_speed: float = C.NORMAL_MAX_SPEED
    curve_deviation: float = C.CURVE_DEVIATION_THRESHOLD
    curve_saturation: float = C.CURVE_SATURATION
    height_base: float = C.HEIGHT_BASE
    screen_height: float = C.DEFAULT_SCREEN_HEIGHT


@dataclass(frozen=True)
class CurveForceConfig:
    scale: float = C.CURVE_FORCE_SCALE
    speed_reference: float = C.CURVE_FORCE_SPEED_REFERENCE
    speed_max_factor: float = C.CURVE_FORCE_SPEED_MAX_FACTOR
    decay_window: float = C.CURVE_FORCE_DECAY_WINDOW
    lifetime: float = C.CURVE_FORCE_LIFETIME
    min_speed: float = C.CURVE_FORCE_MIN_SPEED


@dataclass(frozen=True)
class TargetBounds:
    x_min: float
    x_max: float
    y_min: float
    y_max: float
    z: float


@dataclass(frozen=True)
class PipelineConfig:
    """Everything the shot pipeline needs, passed explicitly.

    Attributes:
        gravity: Vertical gravitational acceleration (negative = down).
        launch_position: Ball position at launch (x, y, z).
        goal: Goal geometry.
        margins: Target area margins around the goal mouth.
        curve_aim: Outward aim offset for curve shots.
        normal_timing: Flight time window for CHIP/NORMAL/POWER.
        curve_timing: Flight time window for CURVE.
        classifier: Swipe classification thresholds.
        curve_force: In-flight curve force tuning.
        spin_strength: Sidespin magnitude for curve shots (rad/s).
        pixels_per_half_goal: Horizontal swipe pixels mapped to one goal side.
        shot_timeout_s: Seconds before an unresolved shot is a miss.
        reset_delay_s: Seconds from outcome back to idle.
        max_fails_allowed: Consecutive misses tolerated before game over.
    """
    gravity: float = C.GRAVITY
    launch_position: tuple[float, float, float] = C.BALL_START_POSITION
    goal: GoalGeometry = field(default_factory=GoalGeometry)
    margins: TargetMargins = field(default_factory=TargetMargins)
    curve_aim: CurveAimConfig = field(default_factory=CurveAimConfig)
    normal_timing: ShotTiming = field(
        default_factory=lambda: ShotTiming(*C.SHOT_TIMING["NORMAL"])
    )
    curve_timing: ShotTiming = field(
        default_factory=lambda: ShotTiming(*C.SHOT_TIMING["CURVE"])
    )
    classifier: ClassifierThresholds = field(default_factory=ClassifierThresholds)
    curve_force: CurveForceConfig = field(default_factory=CurveForceConfig)
    spin_strength: float = C.SPIN_STRENGTH
    pixels_per_half_goal: float = C.SWIPE_PIXELS_PER_HALF_GOAL
    shot_timeout_s: float = C.SHOT_TIMEOUT_S
    reset_delay_s: float = C.SHOT_RESET_DELAY_S
    max_fails_allowed: int = C.MAX_FAILS_ALLOWED

    @property
    def launch(self) -> np.ndarray:
        """Launch position as a fresh numpy vector."""
        return np.array(self.launch_position, dtype=float)

    def timing_for(self, shot_type: ShotType) -> ShotTiming:
        """CURVE shots fly a slightly longer window than the straight types."""
        if shot_type == ShotType.CURVE:
            return self.curve_timing
        return self.normal_timing

    def target_bounds(self) -> TargetBounds:
        """Reachable target area derived from goal geometry and margins."""
        g, m = self.goal, self.margins
        return TargetBounds(
            x_min=-g.half_width - m.horizontal,
            x_max=g.half_width + m.horizontal,
            y_min=0.0 - m.bottom,
            y_max=g.height + m.top,
            z=m.depth if m.depth is not None else g.depth,
        )

    @classmethod
    def from_settings(cls, config: "Config") -> "PipelineConfig":
        """Build a PipelineConfig with user overrides from the settings file.

        Unknown or malformed values are ignored with a warning.
        """
        def numeric(key):
            value = config.get(key)
            if value is None:
                return None
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                logger.warning(f"Ignoring non-numeric setting {key}={value!r}")
                return None
            return value

        base = cls()
        overrides = {}
        for key in ("gravity", "shot_timeout_s", "reset_delay_s",
                    "spin_strength", "max_fails_allowed"):
            value = numeric(key)
            if value is not None:
                overrides[key] = value

        screen_height = numeric("screen_height")
        if screen_height is not None:
            overrides["classifier"] = replace(
                base.classifier, screen_height=screen_height
            )
        force_scale = numeric("curve_force_scale")
        if force_scale is not None:
            overrides["curve_force"] = replace(base.curve_force, scale=force_scale)

        if overrides:
            logger.debug(f"Pipeline overrides from settings: {sorted(overrides)}")
        return replace(base, **overrides)


class Config:
    """Manages user settings with JSON file persistence."""

    _APP_DIR = Path.home() / ".snapshoot"
    _CONFIG_FILE = _APP_DIR / "config.json"

    _defaults = {
        "preset": "straight_shooter",
        "debug_output": False,
        "screen_height": C.DEFAULT_SCREEN_HEIGHT,
        "gravity": None,            # None = use the built-in constant
        "shot_timeout_s": None,
        "reset_delay_s": None,
        "spin_strength": None,
        "curve_force_scale": None,
        "max_fails_allowed": None,
    }

    _instance: Optional["Config"] = None
    _settings: dict

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._settings = {}
            cls._instance._load()
        return cls._instance

    def _load(self):
        """Load settings from disk, merging with defaults."""
        if self._CONFIG_FILE.exists():
            try:
                with open(self._CONFIG_FILE) as f:
                    saved = json.load(f)
                # Merge: defaults first, then saved values override
                self._settings = {**self._defaults, **saved}
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Unreadable settings file, using defaults: {e}")
                self._settings = dict(self._defaults)
        else:
            self._settings = dict(self._defaults)

    def save(self):
        """Persist current settings to disk."""
        self._APP_DIR.mkdir(parents=True, exist_ok=True)
        with open(self._CONFIG_FILE, "w") as f:
            json.dump(self._settings, f, indent=2)

    def get(self, key: str, default=None):
        """Get a setting value."""
        return self._settings.get(key, default)

    def set(self, key: str, value):
        """Set a setting value and save."""
        self._settings[key] = value
        self.save()
