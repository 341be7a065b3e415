"""Tests for the manual and autonomous controllers."""

import random

import numpy as np
import pytest

from game.bugs.controllers import (
    BotController,
    ManualController,
    make_controller,
)
from game.bugs.entities import KeyState, MovementIntent, PLAYER_SPEED
from game.bugs.world import new_bug, new_world

LEGAL = {-PLAYER_SPEED, 0.0, PLAYER_SPEED}


class TestManualController:
    def test_no_keys_no_movement(self, make_world):
        assert ManualController().decide(make_world()) == MovementIntent(0.0, 0.0)

    def test_axes_are_independent(self, make_world):
        keys = KeyState(up=True, right=True)
        intent = ManualController(keys).decide(make_world())
        assert intent == MovementIntent(PLAYER_SPEED, -PLAYER_SPEED)

    def test_left_and_up_win_when_opposites_held(self, make_world):
        keys = KeyState(up=True, down=True, left=True, right=True)
        intent = ManualController(keys).decide(make_world())
        assert intent == MovementIntent(-PLAYER_SPEED, -PLAYER_SPEED)

    def test_follows_shared_key_state(self, make_world):
        keys = KeyState()
        controller = ManualController(keys)
        keys.down = True
        assert controller.decide(make_world()).dy == PLAYER_SPEED
        keys.clear()
        assert controller.decide(make_world()).dy == 0.0


class TestMakeController:
    def test_modes(self):
        assert isinstance(make_controller("manual"), ManualController)
        assert isinstance(make_controller("autonomous"), BotController)
        assert isinstance(make_controller("bot", horizon=4), BotController)

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            make_controller("qlearning")


class TestPursuit:
    """Without bugs the bot walks toward the target's edge."""

    def test_moves_toward_target(self, make_world):
        world = make_world(player=(100, 100), score=(300, 40))
        assert BotController().decide(world) == MovementIntent(PLAYER_SPEED, -PLAYER_SPEED)

    def test_stops_once_within_reach(self, make_world):
        world = make_world(player=(100, 100), score=(120, 80))
        assert BotController().decide(world) == MovementIntent(0.0, 0.0)

    def test_aligned_axis_needs_no_move(self, make_world):
        world = make_world(player=(100, 100), score=(100, 400))
        assert BotController().decide(world) == MovementIntent(0.0, PLAYER_SPEED)

    def test_pursuit_value_sign(self, make_world):
        world = make_world(player=(100, 100), score=(20, 100))
        desired = BotController().pursuit(world)
        assert desired[0] == pytest.approx(-1.0 / PLAYER_SPEED)
        assert desired[1] == 0.0


class TestAvoidance:
    def test_waiting_unsafe_keeps_pursuit_when_clear(self, make_world):
        # Bug moving right reaches the player's box next tick if the player waits
        world = make_world(player=(100, 100), score=(300, 100), bugs=[((83, 100), (3, 0))])
        bot = BotController()
        flags, _ = bot.safety(world, np.array([PLAYER_SPEED, 0.0]))
        assert not flags.wait

        intent = bot.decide(world)
        assert intent == MovementIntent(PLAYER_SPEED, 0.0)
        assert not world.tick(intent).terminated

    def test_blocked_pursuit_moves_the_safe_way(self, make_world):
        # Target on the left, but the bug comes from the left
        world = make_world(player=(100, 100), score=(20, 100), bugs=[((83, 100), (3, 0))])
        bot = BotController()
        flags, _ = bot.safety(world, np.array([-PLAYER_SPEED, 0.0]))
        assert not flags.left
        assert flags.right
        assert not flags.wait

        intent = bot.decide(world)
        assert intent == MovementIntent(PLAYER_SPEED, 0.0)
        assert not world.tick(intent).terminated

    def test_escapes_bug_from_above(self, make_world):
        world = make_world(player=(100, 100), score=(120, 100), bugs=[((100, 83), (0, 3))])
        intent = BotController().decide(world)
        assert intent == MovementIntent(0.0, PLAYER_SPEED)

    def test_retreats_from_conflict_two_ticks_ahead(self, make_world):
        world = make_world(player=(100, 100), score=(300, 100), bugs=[((127, 100), (-3, 0))])
        bot = BotController()
        flags, _ = bot.safety(world, np.array([PLAYER_SPEED, 0.0]))
        assert flags.wait
        assert not flags.right
        assert bot.decide(world) == MovementIntent(-PLAYER_SPEED, 0.0)

    def test_short_horizon_ignores_distant_conflict(self, make_world):
        world = make_world(player=(100, 100), score=(300, 100), bugs=[((127, 100), (-3, 0))])
        assert BotController(horizon=2).decide(world) == MovementIntent(PLAYER_SPEED, 0.0)

    def test_cornered_falls_back_to_pursuit(self, make_world):
        world = make_world(
            player=(100, 100),
            score=(100, 100),
            bugs=[((83, 100), (3, 0)), ((117, 100), (-3, 0))],
        )
        bot = BotController()
        flags, _ = bot.safety(world, np.zeros(2))
        assert not (flags.left or flags.right or flags.wait)
        assert bot.decide(world) == MovementIntent(0.0, 0.0)

    def test_both_sides_blocked_stands_still(self, make_world):
        # Two bugs rising on either side of the player's path down
        world = make_world(
            player=(100, 100),
            score=(100, 400),
            bugs=[((90, 126), (0, -2)), ((110, 126), (0, -2))],
        )
        bot = BotController()
        flags, _ = bot.safety(world, np.array([0.0, PLAYER_SPEED]))
        assert not flags.left
        assert not flags.right
        assert flags.wait

        intent = bot.decide(world)
        assert intent.dx == 0.0
        assert intent.dy == -PLAYER_SPEED

    def test_wait_unsafe_without_pursuit_escapes_away(self, make_world):
        # Pursuit wants no x movement, but a bug reaches the player from the upper left
        world = make_world(player=(100, 100), score=(100, 300), bugs=[((83, 90), (3, 0))])
        bot = BotController()
        flags, escape = bot.safety(world, np.array([0.0, PLAYER_SPEED]))
        assert flags.left and flags.right and flags.up and flags.down
        assert not flags.wait
        assert escape[0] == 1.0

        intent = bot.decide(world)
        assert intent == MovementIntent(PLAYER_SPEED, PLAYER_SPEED)
        assert not world.tick(intent).terminated

    def test_decide_does_not_mutate_world(self, make_world):
        world = make_world(player=(100, 100), score=(300, 100), bugs=[((83, 100), (3, 0))])
        before = (world.player_pos.copy(), world.bugs[0].pos.copy(), world.bugs[0].vel.copy())
        BotController().decide(world)
        assert np.array_equal(world.player_pos, before[0])
        assert np.array_equal(world.bugs[0].pos, before[1])
        assert np.array_equal(world.bugs[0].vel, before[2])
        assert world.score == 0

    def test_output_is_always_legal(self):
        rng = random.Random(4)
        bot = BotController()
        for seed in range(40):
            world = new_world(seed=seed)
            for _ in range(rng.randint(0, 15)):
                world.bugs.append(new_bug(world.player_pos, world.screen_size, rng))
            for _ in range(60):
                intent = bot.decide(world)
                assert intent.dx in LEGAL
                assert intent.dy in LEGAL
                if world.tick(intent).terminated:
                    break
