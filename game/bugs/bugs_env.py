"""
BugsEnv - the bugs avoidance game behind a gymnasium API
--------------------------------------------------------
- Same World/tick rules as the interactive game
- Gymnasium API so scripted bots, random baselines and learners share one loop
- MultiDiscrete action space: [move_x(3), move_y(3)], 0 = negative, 1 = stay, 2 = positive
- Vector observation: player + score offset + top-K nearest bugs
- Episode terminates when a bug touches the player

Quick test:
    python -m game.bugs.bugs_env
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .controllers import BotController
from .entities import MovementIntent, PLAYER_SPEED
from .utils import sign, seed_everything
from .world import World, new_world

logger = logging.getLogger(__name__)

DEFAULT_REWARDS = {
    "R_SCORE": 1.0,
    "R_DEATH": 5.0,
    "R_TIME": 0.001,
}


def intent_to_action(intent: MovementIntent) -> np.ndarray:
    """Map a MovementIntent onto the env's MultiDiscrete action"""
    return np.array([int(sign(intent.dx)) + 1, int(sign(intent.dy)) + 1], dtype=np.int64)


def action_to_intent(action, speed: float = PLAYER_SPEED) -> MovementIntent:
    """Map a MultiDiscrete action back onto a MovementIntent"""
    ax, ay = int(action[0]), int(action[1])
    return MovementIntent((ax - 1) * speed, (ay - 1) * speed)


class BugsEnv(gym.Env):
    """Bugs avoidance game environment"""

    metadata = {"render_modes": ["human"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        max_steps: int = 9000,  # 5 minutes at 30 ticks/s
        k_bugs: int = 5,
        player_speed: float = PLAYER_SPEED,
        rewards: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode

        # Arena
        self.width = width
        self.height = height
        self.max_steps = max_steps

        self.k_bugs = k_bugs
        self.player_speed = player_speed
        self.rewards = dict(DEFAULT_REWARDS, **(rewards or {}))

        self.action_space = spaces.MultiDiscrete([3, 3])

        # Player: pos(2); score: rel pos(2); each bug: rel pos(2) vel(2)
        obs_dim = 2 + 2 + self.k_bugs * 4
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self.world: World = None  # type: ignore
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
        self.world = new_world(self.width, self.height, seed=seed)
        self._step_count = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        intent = action_to_intent(action, self.player_speed)
        result = self.world.tick(intent)

        reward = self.rewards["R_SCORE"] * float(result.captured)
        reward -= self.rewards["R_TIME"]
        if result.terminated:
            reward -= self.rewards["R_DEATH"]

        terminated = result.terminated
        self._step_count += 1
        truncated = (not terminated) and self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        w, h = self.width, self.height
        player = self.world.player_pos
        score = self.world.score_pos

        obs_parts = [
            player[0] / w * 2 - 1, player[1] / h * 2 - 1,
            (score[0] - player[0]) / w, (score[1] - player[1]) / h,
        ]

        bugs_sorted = sorted(
            self.world.bugs,
            key=lambda b: (b.pos[0] - player[0]) ** 2 + (b.pos[1] - player[1]) ** 2,
        )
        for i in range(self.k_bugs):
            if i < len(bugs_sorted):
                b = bugs_sorted[i]
                obs_parts += [
                    (b.pos[0] - player[0]) / w,
                    (b.pos[1] - player[1]) / h,
                    b.vel[0] / self.player_speed,
                    b.vel[1] / self.player_speed,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.clip(np.array(obs_parts, dtype=np.float32), -1.0, 1.0)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.world.score,
            "num_bugs": len(self.world.bugs),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .render import BugsWindow
            self._window = BugsWindow(self.world, title="BugsEnv - Arcade")

        self._window.world = self.world
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_bot_episode(render: bool = True, seed: Optional[int] = None, max_steps: int = 9000) -> int:
    """Let the bot play one episode and return its final score"""
    env = BugsEnv(render_mode="human" if render else None, max_steps=max_steps)
    bot = BotController(speed=env.player_speed)
    obs, info = env.reset(seed=seed)

    terminated = truncated = False
    while not (terminated or truncated):
        action = intent_to_action(bot.decide(env.world))
        obs, reward, terminated, truncated, info = env.step(action)
        if render:
            time.sleep(1.0 / env.metadata["render_fps"])

    logger.info("Bot episode finished: score %d after %d steps", info["score"], info["step"])
    env.close()
    return info["score"]


if __name__ == "__main__":
    from .log import setup_logger

    setup_logger("INFO")
    run_bot_episode(render=True)
