"""
Shot pipeline: released swipe → launch state.

  1. normalize_swipe          screen path → normalized 2D path
  2. analyze_shot             shot type, power, curve, height
  3. AimResolver.resolve      target and aim points in the goal plane
  4. BallisticSolver.solve    launch velocity
  5. compute_angular_velocity spin (curve shots only)

All synchronous; runs to completion inside the gesture-release handler.
"""

import logging

from snapshoot.aim import AimResolver
from snapshoot.ballistics import BallisticSolver
from snapshoot.classifier import analyze_shot
from snapshoot.gesture import normalize_swipe
from snapshoot.models.shot import ShotResult
from snapshoot.models.swipe import SwipeData
from snapshoot.spin import compute_angular_velocity
from snapshoot.utils.config import PipelineConfig

logger = logging.getLogger(__name__)


def execute_shot(swipe: SwipeData,
                 config: PipelineConfig = PipelineConfig()) -> ShotResult:
    """Run the full pipeline for one swipe.

    Args:
        swipe: Released gesture.
        config: Pipeline configuration.

    Returns:
        ShotResult ready to be applied to the ball body.

    Raises:
        InsufficientInputError: Fewer than 2 points.
        InvalidShotError: The swipe was classified INVALID.
    """
    normalized = normalize_swipe(swipe)
    analysis = analyze_shot(normalized, config.classifier)
    params = AimResolver(config).resolve(normalized, analysis)
    velocity = BallisticSolver(config).solve(params)
    angular_velocity = compute_angular_velocity(
        params, velocity, spin_strength=config.spin_strength
    )

    result = ShotResult(
        velocity=velocity,
        angular_velocity=angular_velocity,
        shot_type=analysis.type,
        target_position=params.target_position,
        aim_target_position=params.aim_target_position,
        analysis=analysis,
        parameters=params,
        normalized=normalized,
    )
    logger.info(
        f"Shot computed: {analysis.type.value} "
        f"power={analysis.power:.2f}, "
        f"curve={analysis.curve_amount:.2f} ({analysis.curve_label}), "
        f"speed={result.speed:.1f}m/s"
    )
    return result
