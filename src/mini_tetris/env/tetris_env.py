from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from mini_tetris.game import Action, GameConfig, TetrisGame
from mini_tetris.game.core import ACTIVE_CELL


class TetrisEnv(gym.Env):
    """Single-piece Tetris with one action per step.

    Reward is the number of lines cleared by the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 10_000,
    ) -> None:
        super().__init__()
        # config.random_seed seeds the game; reset(seed=...) reseeds it
        self.game = TetrisGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.game.config.height, self.game.config.width
        self.observation_space = spaces.Box(low=0, high=ACTIVE_CELL, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._last_obs: Optional[np.ndarray] = None

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_locked": self.game.pieces_locked,
            "steps": self.game.step_count,
            "status": self.game.status.name,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.start(seed)
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        outcome = self.game.step(Action(int(action)))
        reward = float(outcome.lines_cleared)
        terminated = bool(self.game.game_over)
        truncated = self.game.step_count >= self.max_episode_steps and not terminated

        obs = self._get_obs()
        info = self._get_info()
        info["moved"] = outcome.moved
        info["locked"] = outcome.locked
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self._last_obs if self._last_obs is not None else self.game.get_state()
        cell = 12
        h, w = grid.shape
        palette = {0: (30, 30, 36), 1: (70, 120, 220), ACTIVE_CELL: (240, 200, 60)}
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = palette[int(grid[y, x])]
        return img

    def close(self) -> None:
        pass
