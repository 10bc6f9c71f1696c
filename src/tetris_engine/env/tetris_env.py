from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_engine.game import COLUMNS, ROWS, SHAPES, Action, GameConfig, TetrisGame
from tetris_engine.game.shapes import color_for


# Index in the Discrete action space -> engine action (None is a no-op)
ENV_ACTIONS: Tuple[Optional[Action], ...] = (
    None,
    Action.MOVE_LEFT,
    Action.MOVE_RIGHT,
    Action.ROTATE,
    Action.SOFT_DROP,
    Action.HARD_DROP,
)


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


class TetrisEnv(gym.Env):
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 20}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 frame_time: float = 50.0,
                 max_episode_steps: int = 10000,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = TetrisGame(config)
        self.render_mode = render_mode
        self.frame_time = float(frame_time)
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)

        n_kinds = len(SHAPES)
        # Observation: locked cells as color ids, falling piece as negative ids
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_kinds, high=n_kinds, shape=(ROWS, COLUMNS), dtype=np.int8),
                "next": spaces.Discrete(n_kinds + 1),
                "pending": spaces.MultiBinary(ROWS),
            }
        )
        self.action_space = spaces.Discrete(len(ENV_ACTIONS))

        self._last_obs: Optional[Dict[str, Any]] = None
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        pending = np.zeros((ROWS,), dtype=np.int8)
        for row in self.game.pending_rows:
            pending[row] = 1
        obs: Dict[str, Any] = {
            "board": self.game.get_state().astype(np.int8),
            "next": int(self.game.next_piece.kind),
            "pending": pending,
        }
        return obs

    def _get_info(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_locked": self.game.pieces_locked,
            "fall_interval": self.game.fall_interval,
            "steps": self._steps,
        }
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.restart()
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        before = self.game.score
        engine_action = ENV_ACTIONS[int(action)]
        if engine_action is not None:
            self.game.perform(engine_action)
        self.game.tick(self.frame_time)
        self._steps += 1

        reward = float(self.game.score - before)
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        if terminated:
            reward += self.terminal_penalty

        obs = self._get_obs()
        info = self._get_info()
        info["engine_score_delta"] = float(self.game.score - before)
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self._last_obs["board"] if self._last_obs is not None else self.game.get_state()
            pending = self.game.pending_rows
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    v = int(grid[y, x])
                    if v == 0:
                        color = (30, 30, 36)
                    elif y in pending and v > 0:
                        color = (255, 255, 255)
                    else:
                        color = _hex_to_rgb(color_for(v))
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        # human rendering delegated to the pygame frontend; noop
        return None

    def close(self) -> None:
        pass
