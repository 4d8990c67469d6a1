"""
Shot outcome controller.

Owns the one-shot-at-a-time lifecycle:

    IDLE → RESOLVING → IN_FLIGHT → RESOLVED → (reset delay) → IDLE

  - A swipe is only looked at in IDLE; anything else drops it before any
    pipeline work.
  - INVALID swipes go straight back to IDLE without touching the ball.
  - On launch, the ball's velocity and angular velocity are set directly
    and the curve force starts for CURVE shots.
  - The first goal-sensor contact while IN_FLIGHT scores; the shot timer
    declares a miss if no contact came first. Exactly one outcome per shot.

Collision notifications enter through on_sensor_contact(), a plain
method, so the controller runs without a live physics engine.

Usage:
    controller = ShotOutcomeController(ball, config, GOAL_SENSOR_ID)
    controller.shot_resolved.connect(on_outcome)
    world.add_pre_step(controller.physics_step)
    world.contact.connect(controller.on_sensor_contact)
"""

import logging
from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from snapshoot.curve_force import CurveForce
from snapshoot.errors import InsufficientInputError, InvalidShotError
from snapshoot.models.body import BallBody
from snapshoot.models.shot import ShotOutcome, ShotResult, ShotState
from snapshoot.models.swipe import SwipeData
from snapshoot.pipeline import execute_shot
from snapshoot.utils.config import PipelineConfig

logger = logging.getLogger(__name__)


class ShotOutcomeController(QObject):
    """Turns released swipes into launched shots and shots into outcomes.

    Signals:
        shot_launched(ShotResult): The ball was launched.
        shot_rejected(ShotAnalysis): A swipe was classified INVALID. Too
                                     short gestures are dropped silently.
        shot_resolved(ShotOutcome): SCORED or MISS, once per shot.
        state_changed(ShotState, ShotState): New state, previous state.
    """

    shot_launched = pyqtSignal(object)   # ShotResult
    shot_rejected = pyqtSignal(object)   # ShotAnalysis
    shot_resolved = pyqtSignal(object)   # ShotOutcome
    state_changed = pyqtSignal(object, object)

    def __init__(
        self,
        ball: BallBody,
        config: PipelineConfig = PipelineConfig(),
        goal_sensor_id: str = "goal_sensor",
        curve_force: Optional[CurveForce] = None,
        parent=None,
    ):
        """
        Args:
            ball: The physics engine's ball body.
            config: Pipeline configuration (timeout and reset delay included).
            goal_sensor_id: Body id the physics engine reports for the sensor.
            curve_force: Curve force system, created from config if omitted.
        """
        super().__init__(parent)
        self._ball = ball
        self._config = config
        self._goal_sensor_id = goal_sensor_id
        self._curve_force = curve_force or CurveForce(config.curve_force)

        self._state = ShotState.IDLE
        self._outcome_recorded = False
        self._current_shot: Optional[ShotResult] = None

        self._shot_timer = QTimer(self)
        self._shot_timer.setSingleShot(True)
        self._shot_timer.setInterval(int(config.shot_timeout_s * 1000))
        self._shot_timer.timeout.connect(self.on_shot_timeout)

        self._reset_timer = QTimer(self)
        self._reset_timer.setSingleShot(True)
        self._reset_timer.setInterval(int(config.reset_delay_s * 1000))
        self._reset_timer.timeout.connect(self.reset_to_idle)

    # -- State ----------------------------------------------------------------

    @property
    def state(self) -> ShotState:
        return self._state

    @property
    def curve_force(self) -> CurveForce:
        return self._curve_force

    @property
    def current_shot(self) -> Optional[ShotResult]:
        """The shot in flight (or just resolved), None when idle."""
        return self._current_shot

    def can_shoot(self) -> bool:
        return self._state == ShotState.IDLE

    def _set_state(self, new_state: ShotState):
        if new_state == self._state:
            return
        old_state = self._state
        self._state = new_state
        logger.debug(f"Shot state: {old_state.value} → {new_state.value}")
        self.state_changed.emit(new_state, old_state)

    # -- Inbound events -------------------------------------------------------

    def handle_swipe(self, swipe: SwipeData) -> Optional[ShotResult]:
        """Handle a released gesture.

        Returns:
            The launched ShotResult, or None if the swipe was dropped
            (shot already in progress, too short, or INVALID).
        """
        if self._state != ShotState.IDLE:
            logger.debug(f"Swipe ignored: shot in progress ({self._state.value})")
            return None

        if len(swipe.points) < 2:
            logger.debug("Swipe ignored: fewer than 2 points")
            return None

        self._set_state(ShotState.RESOLVING)
        try:
            result = execute_shot(swipe, self._config)
        except InvalidShotError as e:
            logger.info("Swipe rejected: INVALID direction")
            self._set_state(ShotState.IDLE)
            self.shot_rejected.emit(e.analysis)
            return None
        except InsufficientInputError as e:
            logger.debug(f"Swipe ignored: {e}")
            self._set_state(ShotState.IDLE)
            return None
        except Exception:
            # Never leave the latch in RESOLVING
            logger.exception("Shot pipeline failed, returning to idle")
            self._set_state(ShotState.IDLE)
            raise

        self._launch(result)
        return result

    def physics_step(self, delta_time: float):
        """Call once per physics sub-step with the sub-step size."""
        self._curve_force.update(delta_time, self._ball)

    def on_sensor_contact(self, body_id) -> bool:
        """Collision notification from the physics engine.

        Returns:
            True if this contact scored the shot in flight.
        """
        if body_id != self._goal_sensor_id:
            return False
        if self._state != ShotState.IN_FLIGHT or self._outcome_recorded:
            return False
        self._resolve(ShotOutcome.SCORED)
        return True

    def on_shot_timeout(self):
        """The shot timer ran out: a shot still in flight is a miss."""
        if self._state != ShotState.IN_FLIGHT or self._outcome_recorded:
            return
        self._resolve(ShotOutcome.MISS)

    def reset_to_idle(self):
        """End of the reset delay: accept swipes again."""
        self._shot_timer.stop()
        self._reset_timer.stop()
        self._curve_force.stop()
        self._outcome_recorded = False
        self._current_shot = None
        self._set_state(ShotState.IDLE)

    # -- Transitions ----------------------------------------------------------

    def _launch(self, result: ShotResult):
        self._ball.velocity = result.velocity.copy()
        self._ball.angular_velocity = result.angular_velocity.copy()
        # start() also clears any stale tracker for non-curve shots
        self._curve_force.start(result.analysis)

        self._current_shot = result
        self._outcome_recorded = False
        self._set_state(ShotState.IN_FLIGHT)
        self._shot_timer.start()

        logger.info(
            f"Shot launched: {result.shot_type.value} at "
            f"{result.speed:.1f}m/s toward "
            f"({result.target_position[0]:.2f}, {result.target_position[1]:.2f})"
        )
        self.shot_launched.emit(result)

    def _resolve(self, outcome: ShotOutcome):
        self._outcome_recorded = True
        self._shot_timer.stop()
        self._curve_force.stop()
        self._set_state(ShotState.RESOLVED)

        logger.info(f"Shot resolved: {outcome.value}")
        self.shot_resolved.emit(outcome)
        self._reset_timer.start()
