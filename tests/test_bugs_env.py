"""Tests for the gymnasium environment wrapper."""

import numpy as np
import pytest

from game.bugs.bugs_env import (
    BugsEnv,
    action_to_intent,
    intent_to_action,
    run_bot_episode,
)
from game.bugs.entities import Bug, MovementIntent, PLAYER_SPEED, point


@pytest.fixture
def env():
    env = BugsEnv(render_mode=None, max_steps=50)
    yield env
    env.close()


class TestSpaces:
    def test_reset_observation_in_space(self, env):
        obs, info = env.reset(seed=0)
        assert env.observation_space.contains(obs)
        assert info == {"score": 0, "num_bugs": 1, "step": 0}

    def test_reset_is_deterministic(self, env):
        obs_a, _ = env.reset(seed=123)
        obs_b, _ = env.reset(seed=123)
        assert np.array_equal(obs_a, obs_b)

    def test_action_intent_conversion(self):
        for dx in (-PLAYER_SPEED, 0.0, PLAYER_SPEED):
            for dy in (-PLAYER_SPEED, 0.0, PLAYER_SPEED):
                intent = MovementIntent(dx, dy)
                action = intent_to_action(intent)
                assert action.shape == (2,)
                assert action_to_intent(action) == intent

    def test_stay_action(self):
        assert action_to_intent([1, 1]) == MovementIntent(0.0, 0.0)
        assert action_to_intent([2, 0]) == MovementIntent(PLAYER_SPEED, -PLAYER_SPEED)


class TestStep:
    def test_collision_terminates(self, env):
        env.reset(seed=0)
        player = env.world.player_pos
        env.world.bugs = [Bug(pos=player.copy(), vel=point(0, 2))]

        obs, reward, terminated, truncated, info = env.step(np.array([1, 1]))
        assert terminated
        assert not truncated
        assert reward == pytest.approx(-env.rewards["R_DEATH"] - env.rewards["R_TIME"])

    def test_capture_rewarded(self, env):
        env.reset(seed=0)
        env.world.bugs = []
        env.world.score_pos = env.world.player_pos.copy()

        obs, reward, terminated, truncated, info = env.step(np.array([1, 1]))
        assert info["score"] == 1
        assert info["num_bugs"] == 1
        assert reward == pytest.approx(env.rewards["R_SCORE"] - env.rewards["R_TIME"])

    def test_truncates_at_max_steps(self):
        env = BugsEnv(max_steps=3)
        env.reset(seed=0)
        env.world.bugs = []
        env.world.score_pos = point(-1000, -1000)

        for _ in range(2):
            _, _, terminated, truncated, _ = env.step(np.array([1, 1]))
            assert not (terminated or truncated)
        _, _, terminated, truncated, info = env.step(np.array([1, 1]))
        assert truncated
        assert not terminated
        assert info["step"] == 3


class TestBotEpisode:
    def test_headless_bot_episode(self):
        score = run_bot_episode(render=False, seed=0, max_steps=200)
        assert isinstance(score, int)
        assert score >= 0
