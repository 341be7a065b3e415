"""
Play the bugs game in a window, either with the arrow keys or by watching the bot.
"""

import os
import sys
import argparse
import logging

import arcade

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from game.bugs import KeyState, FixedStepClock, GameSession, new_world, make_controller
from game.bugs.controllers import CONTROLLER_MODES
from game.bugs.log import setup_logger
from game.bugs.render import BugsWindow
from rl.configs.bugs_config import GAME_CONFIG

logger = logging.getLogger("rl.play")


def play(
    mode: str = GAME_CONFIG["mode"],
    width: int = GAME_CONFIG["width"],
    height: int = GAME_CONFIG["height"],
    seed=None,
) -> int:
    """Open a window and run one session; returns the final score"""
    world = new_world(width, height, seed=seed)
    keys = KeyState()

    if mode == "manual":
        controller = make_controller(mode, keys=keys, speed=GAME_CONFIG["player_speed"])
    else:
        controller = make_controller(
            mode, speed=GAME_CONFIG["player_speed"], horizon=GAME_CONFIG["horizon"]
        )

    clock = FixedStepClock(
        rate=GAME_CONFIG["tick_rate"], max_steps=GAME_CONFIG["max_steps_per_frame"]
    )
    session = GameSession(world, controller, clock)

    logger.info("Starting %s session on a %dx%d screen", mode, width, height)
    window = BugsWindow(world, session=session, keys=keys)
    arcade.run()

    return world.score


def main():
    parser = argparse.ArgumentParser(description="Play the bugs avoidance game")
    parser.add_argument(
        "--mode",
        type=str,
        default=GAME_CONFIG["mode"],
        choices=list(CONTROLLER_MODES),
        help=f"Movement source (default: {GAME_CONFIG['mode']})",
    )
    parser.add_argument("--width", type=int, default=GAME_CONFIG["width"])
    parser.add_argument("--height", type=int, default=GAME_CONFIG["height"])
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for spawn positions (default: random)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=GAME_CONFIG["log_level"],
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    args = parser.parse_args()
    setup_logger(args.log_level)

    score = play(mode=args.mode, width=args.width, height=args.height, seed=args.seed)
    print(f"Final score: {score}")


if __name__ == "__main__":
    main()
