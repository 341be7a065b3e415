"""
Evaluation script for bugs game policies (heuristic bot vs random baseline)
"""

import os
import sys
import csv
import argparse
import logging
from typing import Optional, Dict, Any, Callable

import numpy as np

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from game.bugs import BugsEnv, BotController
from game.bugs.bugs_env import intent_to_action
from game.bugs.log import setup_logger
from rl.configs.bugs_config import ENV_CONFIG, REWARD_CONFIG, EVAL_CONFIG, GAME_CONFIG

logger = logging.getLogger("rl.evaluate")


def make_policy(name: str, env: BugsEnv) -> Callable:
    """Return a callable mapping (env, obs) to an action"""
    if name == "bot":
        bot = BotController(speed=env.player_speed, horizon=GAME_CONFIG["horizon"])
        return lambda e, obs: intent_to_action(bot.decide(e.world))
    elif name == "random":
        return lambda e, obs: e.action_space.sample()
    else:
        raise ValueError(f"Unknown policy: {name}")


def evaluate_policy(
    policy: str = "bot",
    n_episodes: int = 10,
    seed: Optional[int] = None,
    log_dir: Optional[str] = None,
    env_config: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Evaluate a policy over several headless episodes

    Args:
        policy: 'bot' or 'random'
        n_episodes: Number of episodes to play
        seed: Base seed, episode i uses seed + i
        log_dir: Directory for the per-episode CSV (skipped if None)
        env_config: Overrides for ENV_CONFIG
    """
    env = BugsEnv(render_mode=None, rewards=REWARD_CONFIG, **dict(ENV_CONFIG, **(env_config or {})))
    act = make_policy(policy, env)
    if seed is not None:
        env.action_space.seed(seed)

    episode_scores = []
    episode_lengths = []
    episode_rewards = []
    episode_truncated = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = truncated = False
        total_reward = 0.0
        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(act(env, obs))
            total_reward += reward

        episode_scores.append(info["score"])
        episode_lengths.append(info["step"])
        episode_rewards.append(total_reward)
        episode_truncated.append(truncated)

        logger.info(
            "[%s] Episode %d/%d: Score = %d, Length = %d",
            policy, episode + 1, n_episodes, info["score"], info["step"],
        )

    env.close()

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        csv_path = os.path.join(log_dir, f"{policy}_eval.csv")
        with open(csv_path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["episode", "score", "length", "reward", "truncated"])
            for i in range(n_episodes):
                writer.writerow([
                    i + 1,
                    episode_scores[i],
                    episode_lengths[i],
                    episode_rewards[i],
                    int(episode_truncated[i]),
                ])
        logger.info("Saved %d episodes to %s", n_episodes, csv_path)

    return {
        "policy": policy,
        "mean_score": float(np.mean(episode_scores)),
        "std_score": float(np.std(episode_scores)),
        "max_score": int(np.max(episode_scores)),
        "mean_length": float(np.mean(episode_lengths)),
        "mean_reward": float(np.mean(episode_rewards)),
        "episode_scores": episode_scores,
        "episode_lengths": episode_lengths,
    }


def print_results(results: Dict[str, Any], n_episodes: int):
    print("\n" + "=" * 50)
    print(f"{results['policy'].upper()} Results ({n_episodes} episodes):")
    print(f"Mean Score: {results['mean_score']:.2f} ± {results['std_score']:.2f}")
    print(f"Max Score: {results['max_score']}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")
    print("=" * 50)


def main():
    parser = argparse.ArgumentParser(description="Evaluate the bugs game bot")
    parser.add_argument(
        "--policy",
        type=str,
        default="bot",
        choices=["bot", "random"],
        help="Policy to evaluate (default: bot)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=EVAL_CONFIG["n_episodes"],
        help=f"Number of evaluation episodes (default: {EVAL_CONFIG['n_episodes']})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=EVAL_CONFIG["seed"],
        help=f"Random seed (default: {EVAL_CONFIG['seed']})",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=EVAL_CONFIG["log_dir"],
        help="Where to write per-episode CSV files",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate the random policy for comparison",
    )
    parser.add_argument("--log-level", type=str, default="WARNING")

    args = parser.parse_args()
    setup_logger(args.log_level)

    results = evaluate_policy(
        policy=args.policy,
        n_episodes=args.n_episodes,
        seed=args.seed,
        log_dir=args.log_dir,
    )
    print_results(results, args.n_episodes)

    if args.compare_random and args.policy != "random":
        random_results = evaluate_policy(
            policy="random",
            n_episodes=args.n_episodes,
            seed=args.seed,
            log_dir=args.log_dir,
        )
        print_results(random_results, args.n_episodes)

        improvement = results["mean_score"] - random_results["mean_score"]
        print(f"\nImprovement over random: {improvement:.2f}")


if __name__ == "__main__":
    main()
