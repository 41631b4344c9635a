from __future__ import annotations

import gymnasium as gym
import numpy as np

import swiftris.env  # noqa: F401
from swiftris.env.swiftris_env import SwiftrisEnv
from swiftris.game import Action, GameConfig


def test_reset_returns_observation_in_space():
    env = SwiftrisEnv(config=GameConfig(random_seed=0))
    obs, info = env.reset(seed=3)
    assert obs["board"].shape == (20, 10)
    assert obs["board"].dtype == np.int8
    assert env.observation_space.contains(obs)
    assert info["score"] == 0
    assert info["level"] == 1
    assert info["events"] == ["GameBegun"]
    # Falling piece is overlaid with negative values
    assert (obs["board"] < 0).sum() == 4


def test_hard_drops_terminate_episode():
    env = SwiftrisEnv(config=GameConfig(random_seed=0))
    env.reset(seed=1)
    terminated = False
    seen = []
    for _ in range(100):
        _, reward, terminated, truncated, info = env.step(int(Action.HARD_DROP))
        seen.extend(info["events"])
        assert not truncated
        if terminated:
            break
    assert terminated
    assert "PieceDropped" in seen
    assert seen.count("GameEnded") == 1


def test_truncates_at_step_limit():
    env = SwiftrisEnv(config=GameConfig(random_seed=0), max_episode_steps=3)
    env.reset(seed=0)
    results = [env.step(int(Action.NONE)) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_gravity_applies_every_n_steps():
    env = SwiftrisEnv(config=GameConfig(random_seed=0), gravity_every=2)
    env.reset(seed=0)
    row = env.game.falling_piece.row
    env.step(int(Action.NONE))
    assert env.game.falling_piece.row == row
    env.step(int(Action.NONE))
    assert env.game.falling_piece.row == row + 1


def test_registered_env_and_render():
    env = gym.make("Swiftris-10x20-v0", render_mode="rgb_array")
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (240, 120, 3)
    assert frame.dtype == np.uint8
    env.close()
