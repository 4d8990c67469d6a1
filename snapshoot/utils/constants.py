"""
Physics constants, goal geometry and shot tuning values for SnapShoot.

World coordinates (meters):
    x = lateral (positive = right of the launch spot)
    y = vertical (altitude above the pitch)
    z = depth (the goal sits at negative z, in front of the camera)

Screen coordinates (pixels) grow right and down, so an upward swipe has
a negative vertical distance.
"""

import math

# =============================================================================
# World Physics
# =============================================================================

GRAVITY = -18.81               # m/s², on the y axis (heavier than Earth for snappier arcs)

PHYSICS_TIME_STEP = 1 / 120    # Fixed physics sub-step (s)
PHYSICS_MAX_SUBSTEPS = 5       # Sub-steps per rendered frame (tunneling guard)

# =============================================================================
# Ball
# =============================================================================

BALL_RADIUS = 0.15             # m
BALL_MASS = 1.2                # kg
BALL_START_POSITION = (0.0, 0.15, 0.0)  # Launch spot (resting on the pitch)
BALL_RESTITUTION = 0.5         # Vertical speed kept after a floor bounce

# =============================================================================
# Goal
# =============================================================================

GOAL_WIDTH = 3.0               # m (7.32 for a regulation goal)
GOAL_HEIGHT = 2.0              # m (2.44 for a regulation goal)
GOAL_DEPTH = -6.0              # z of the goal line

# Goal sensor: a thin trigger box just behind the goal line
GOAL_SENSOR_ID = "goal_sensor"
GOAL_SENSOR_OFFSET = 0.5       # m behind the goal line
GOAL_SENSOR_HALF_DEPTH = 0.1   # m
NET_DEPTH = 1.0                # m behind the goal line where the net stops the ball

# Reachable target area around the goal mouth (negative = inside the frame)
TARGET_HORIZONTAL_MARGIN = -0.2
TARGET_VERTICAL_MARGIN_TOP = -0.2
TARGET_VERTICAL_MARGIN_BOTTOM = 1.0
TARGET_DEPTH_OVERRIDE = None   # None = use GOAL_DEPTH

SWIPE_PIXELS_PER_HALF_GOAL = 200.0  # Horizontal swipe px that reach a goal side

# =============================================================================
# Swipe Classification
# =============================================================================

POWER_MIN_SPEED = 500.0        # px/s mapped to power 0
POWER_MAX_SPEED = 2000.0       # px/s mapped to power 1
CHIP_MAX_SPEED = 900.0         # px/s, at or below = CHIP
NORMAL_MAX_SPEED = 1400.0      # px/s, at or below = NORMAL, above = POWER
CURVE_DEVIATION_THRESHOLD = 0.08   # Mean |y| of interior points for a curve
CURVE_SATURATION = 0.3         # Mean |y| giving full curve amount
HEIGHT_BASE = 0.30             # Height factor of a flat swipe
DEFAULT_SCREEN_HEIGHT = 800.0  # px
INTERIOR_SAMPLE_SLICE = slice(1, 4)  # Path samples inspected for curvature

INVALID_ANGLE_RANGE_DEG = (0.0, 180.0)  # Downward-leading swipes

# =============================================================================
# Ballistics
# =============================================================================

# Flight time window (s): t = max - (max - min) * power
SHOT_TIMING = {
    "NORMAL": (0.3, 0.6),      # CHIP, NORMAL and POWER
    "CURVE": (0.35, 0.7),
}

# Curve shots aim outside the intended point and are bent back in flight
CURVE_AIM_MAX_OFFSET = 0.9     # m at full curve and power
CURVE_AIM_MARGIN = 1.0         # m beyond the target bounds the aim may go
CURVE_AIM_MIN_NUDGE = 0.15     # m extra push when the offset did not move outward

# =============================================================================
# Spin & Curve Force
# =============================================================================

SPIN_STRENGTH = 20.0           # rad/s
SPIN_BACKSPIN_RATIO = 0.3      # Backspin as a fraction of SPIN_STRENGTH

CURVE_FORCE_SCALE = 10.0       # N at full curve, speed and time factors
CURVE_FORCE_SPEED_REFERENCE = 20.0  # m/s giving speed factor 1
CURVE_FORCE_SPEED_MAX_FACTOR = 1.5
CURVE_FORCE_DECAY_WINDOW = 1.5     # s until the force fades to zero
CURVE_FORCE_LIFETIME = 2.0     # s before the tracker expires
CURVE_FORCE_MIN_SPEED = 2.0    # m/s below which no force is applied
DIRECTION_EPSILON = 1e-3       # Vector length treated as zero

# =============================================================================
# Shot Lifecycle
# =============================================================================

SHOT_TIMEOUT_S = 2.5           # Miss declared if the sensor is not reached
SHOT_RESET_DELAY_S = 1.0       # Resolved → Idle
MAX_FAILS_ALLOWED = 2          # Consecutive misses tolerated before game over

# =============================================================================
# Debug Trajectory Preview
# =============================================================================

TRAJECTORY_SAMPLE_STEP = 0.05  # s
TRAJECTORY_SAMPLE_COUNT = 60

RAD_TO_DEG = 180.0 / math.pi
