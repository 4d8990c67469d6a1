"""
SnapShoot entry point.

Runs the shot pipeline headless: a mock swipe source plays the part of
the player, a mock physics world flies the ball, and each shot's
classification, launch and outcome are printed to the console.

Usage:
    python -m snapshoot.main                        # straight_shooter preset
    python -m snapshoot.main --preset curler
    python -m snapshoot.main --preset beginner --shots 10
    python -m snapshoot.main --debug                # per-stage pipeline dumps
"""

import argparse
import logging
import signal
import sys

import numpy as np
from PyQt6.QtCore import QCoreApplication, QTimer

from snapshoot.aim import debug_shot_parameters
from snapshoot.ballistics import debug_velocity, predict_trajectory, simulate_flight
from snapshoot.classifier import debug_shot_analysis
from snapshoot.controller import ShotOutcomeController
from snapshoot.gesture import debug_normalized_swipe
from snapshoot.mock_physics import MockPhysicsWorld, SimulatedBallBody
from snapshoot.mock_swipe import PRESETS, MockSwipeSource
from snapshoot.models.session import GameSession
from snapshoot.models.shot import ShotOutcome, ShotState
from snapshoot.spin import debug_angular_velocity
from snapshoot.utils.config import Config, PipelineConfig
from snapshoot.utils.constants import GOAL_SENSOR_ID

FRAME_INTERVAL_MS = 16


def setup_logging(verbose: bool = False):
    """Configure logging for the application."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def print_debug(result, config: PipelineConfig):
    """Dump every pipeline stage for a launched shot."""
    if result.normalized is not None:
        print(debug_normalized_swipe(result.normalized))
    print(debug_shot_analysis(result.analysis))
    if result.parameters is not None:
        print(debug_shot_parameters(result.parameters))
    print(debug_velocity(result.velocity))
    print(debug_angular_velocity(result.angular_velocity))
    preview = predict_trajectory(config.launch, result.velocity, config.gravity)
    apex = preview[int(np.argmax(preview[:, 1]))]
    print(f"Preview arc (no curve): apex {apex[1]:.2f}m at z={apex[2]:.2f}, "
          f"{len(preview)} samples")
    prediction = simulate_flight(result, config)
    if prediction.crossing_point is not None:
        p = prediction.crossing_point
        print(f"Predicted goal-plane crossing: ({p[0]:.2f}, {p[1]:.2f}) "
              f"after {prediction.flight_time_s:.2f}s")
    else:
        print("Predicted goal-plane crossing: none")


def resolve_preset(cli_preset, settings: Config) -> str:
    """Preset from the command line, else the saved setting, else the default."""
    preset = cli_preset or settings.get("preset")
    if preset not in PRESETS:
        if preset is not None:
            logging.warning(f"Unknown preset {preset!r}, using straight_shooter")
        preset = "straight_shooter"
    return preset


def run_cli(args):
    """Run in CLI mode: play mock swipes and print each shot."""
    app = QCoreApplication(sys.argv)

    settings = Config()
    config = PipelineConfig.from_settings(settings)
    debug = args.debug or bool(settings.get("debug_output"))

    ball = SimulatedBallBody(config.launch)
    world = MockPhysicsWorld(ball, config)
    controller = ShotOutcomeController(ball, config, GOAL_SENSOR_ID)
    source = MockSwipeSource(
        preset=resolve_preset(args.preset, settings),
        swipe_interval=(args.interval_min, args.interval_max),
    )
    session = GameSession(max_fails_allowed=config.max_fails_allowed)

    def shutdown():
        source.stop()
        frame_timer.stop()
        stats = session.get_stats()
        if stats:
            print(f"\nSession: {stats['score']} goals from {stats['num_shots']} "
                  f"shots ({stats['accuracy']:.0%}), "
                  f"avg power {stats['avg_power']:.2f}")
        app.quit()

    def on_launched(result):
        ball.wake()
        print(f"\n{'='*60}")
        print(f"  Shot #{session.num_shots + 1}")
        print(f"{'='*60}")
        print(f"  Type:          {result.shot_type.value}")
        print(f"  Power:         {result.analysis.power:.2f}")
        print(f"  Curve:         {result.analysis.curve_amount:.2f} "
              f"({result.analysis.curve_label})")
        print(f"  Target:        ({result.target_position[0]:.2f}, "
              f"{result.target_position[1]:.2f})")
        print(f"  Launch speed:  {result.speed:.1f} m/s")
        if debug:
            print_debug(result, config)

    def on_rejected(analysis):
        print(f"\n  Swipe rejected: {analysis.type.value} "
              f"(power {analysis.power:.2f})")

    def on_resolved(outcome):
        session.record(controller.current_shot, outcome)
        label = "GOAL!" if outcome == ShotOutcome.SCORED else "Missed"
        print(f"  Outcome:       {label}  "
              f"(score {session.score}, misses in a row {session.consecutive_fails})")
        print(f"{'='*60}")
        if session.is_game_over:
            print("\nGame over")
            shutdown()
        elif args.shots and session.num_shots >= args.shots:
            shutdown()

    def on_state_changed(new_state, old_state):
        if new_state == ShotState.IDLE:
            ball.reset()

    source.swipe_released.connect(controller.handle_swipe)
    controller.shot_launched.connect(on_launched)
    controller.shot_rejected.connect(on_rejected)
    controller.shot_resolved.connect(on_resolved)
    controller.state_changed.connect(on_state_changed)
    world.add_pre_step(controller.physics_step)
    world.contact.connect(controller.on_sensor_contact)

    frame_timer = QTimer()
    frame_timer.timeout.connect(lambda: world.step(FRAME_INTERVAL_MS / 1000))
    frame_timer.start(FRAME_INTERVAL_MS)

    # Handle Ctrl+C gracefully
    def signal_handler(sig, frame):
        print("\n\nShutting down...")
        shutdown()

    signal.signal(signal.SIGINT, signal_handler)

    print(f"\nSnapShoot ready (preset: {source.preset})")
    print("   Waiting for swipes... (Ctrl+C to quit)\n")
    source.start()

    sys.exit(app.exec())


def main():
    parser = argparse.ArgumentParser(
        description="SnapShoot swipe-to-shoot simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--preset", type=str, default=None,
        choices=sorted(PRESETS),
        help="Player preset for the mock swipe source (default: saved setting, else straight_shooter)",
    )
    parser.add_argument(
        "--interval-min", type=float, default=1.5,
        help="Minimum seconds between mock swipes (default: 1.5)",
    )
    parser.add_argument(
        "--interval-max", type=float, default=3.0,
        help="Maximum seconds between mock swipes (default: 3.0)",
    )
    parser.add_argument(
        "--shots", type=int, default=0,
        help="Stop after this many resolved shots (default: play until game over)",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Print every pipeline stage for each shot",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()
    setup_logging(args.verbose)
    run_cli(args)


if __name__ == "__main__":
    main()
