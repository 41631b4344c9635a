from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from swiftris.game import Action, GameConfig, LinesCleared, ScoringRules, ShapeKind, SwiftrisGame


_PALETTE = np.array(
    [
        (20, 20, 26),     # empty
        (0, 90, 240),     # blue
        (240, 150, 0),    # orange
        (160, 0, 240),    # purple
        (240, 0, 0),      # red
        (0, 200, 200),    # teal
        (240, 240, 0),    # yellow
    ],
    dtype=np.uint8,
)


class SwiftrisEnv(gym.Env):
    """Drives one engine with discrete actions and periodic gravity.

    Each step applies an :class:`Action`, then a gravity tick every
    ``gravity_every`` steps. Reward is the engine score delta plus a per-line
    bonus.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        render_mode: Optional[str] = None,
        gravity_every: int = 4,
        max_episode_steps: int = 10000,
        line_reward: float = 1.0,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        if gravity_every < 1:
            raise ValueError(f"gravity_every must be >= 1, got {gravity_every}")
        self.game = SwiftrisGame(config, rules)
        self.render_mode = render_mode
        self.gravity_every = int(gravity_every)
        self.max_episode_steps = int(max_episode_steps)
        self.line_reward = float(line_reward)
        self.terminal_penalty = float(terminal_penalty)

        rows, columns = self.game.grid.rows, self.game.grid.columns
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-6, high=6, shape=(rows, columns), dtype=np.int8),
                "next_kind": spaces.Discrete(len(ShapeKind)),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        next_piece = self.game.next_piece
        return {
            "board": self.game.get_state(),
            "next_kind": int(next_piece.kind) if next_piece is not None else 0,
        }

    def _get_info(self, events: Optional[List[str]] = None) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "level": self.game.level,
            "lines_cleared": self.game.lines_cleared,
            "tick_interval_ms": self.game.tick_interval_ms,
            "events": events or [],
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        events = [event.name for event in self.game.drain_events()]
        return self._get_obs(), self._get_info(events)

    def step(self, action: int):
        score_before = self.game.score

        self.game.step(Action(int(action)))
        self._steps += 1
        if self._steps % self.gravity_every == 0:
            self.game.tick()

        events = self.game.drain_events()
        lines = sum(event.count for event in events if isinstance(event, LinesCleared))

        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps

        reward = float(self.game.score - score_before) + self.line_reward * float(lines)
        if terminated:
            reward += self.terminal_penalty

        info = self._get_info([event.name for event in events])
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        cell = 12
        board = np.abs(self.game.get_state())
        img = _PALETTE[board]
        return np.repeat(np.repeat(img, cell, axis=0), cell, axis=1)

    def close(self) -> None:
        pass
