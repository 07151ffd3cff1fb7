from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_rl.game import MOVEMENT_ACTIONS, Action, GameConfig, TetrisGame, TetrominoType
from tetris_rl.visualization.text import render_text


class TetrisEnv(gym.Env):
    """Single-player Tetris driven one movement action per step.

    Gravity is applied after every ``gravity_every`` agent steps, standing in
    for the wall clock of the human loop. The episode ends when the game is
    over or when a piece locks with cells still above the board.
    """

    metadata = {"render_modes": ["ansi", "rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 gravity_every: int = 1,
                 max_episode_steps: int = 10000,
                 reward_weights: Optional[Dict[str, float]] = None,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        if gravity_every < 1:
            raise ValueError("gravity_every must be >= 1")
        self.game = TetrisGame(config)
        self.render_mode = render_mode
        self.gravity_every = int(gravity_every)
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            "score": 0.01,     # reward per engine score point
            "lines": 1.0,      # reward per line cleared
            "holes": 0.1,      # penalize holes created
            "height": 0.02,    # penalize max height increase
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        h, w = self.game.grid.height, self.game.grid.width
        n_kinds = len(TetrominoType)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=n_kinds, shape=(h, w), dtype=np.int8),
                "active": spaces.Box(low=0, high=n_kinds, shape=(h, w), dtype=np.int8),
                "next": spaces.Discrete(n_kinds + 1),
            }
        )
        self.action_space = spaces.Discrete(len(MOVEMENT_ACTIONS))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        board = self.game.grid.clone_state()
        active = np.zeros_like(board)
        piece = self.game.current_piece
        if piece is not None and not self.game.game_over:
            for x, y in piece.cells():
                if self.game.grid.is_inside(x, y):
                    active[y, x] = int(piece.kind)
        return {
            "board": board,
            "active": active,
            "next": int(self.game.next_kind),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "level": self.game.level,
            "lines_cleared_total": self.game.lines_cleared_total,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        move = MOVEMENT_ACTIONS[int(action)]
        holes_before = self.game.grid.count_holes()
        height_before = self.game.grid.get_max_height()

        result = self.game.step(move)
        gained = result.score_delta
        lines = result.lines_cleared
        topped_out = result.topped_out
        self._steps += 1
        if move != Action.HARD_DROP and self._steps % self.gravity_every == 0:
            fall = self.game.step(Action.SOFT_DROP)
            gained += fall.score_delta
            lines += fall.lines_cleared
            topped_out = topped_out or fall.topped_out

        reward_components: Dict[str, float] = {
            "score": self.reward_weights["score"] * float(gained),
            "lines": self.reward_weights["lines"] * float(lines),
            "holes": -self.reward_weights["holes"] * float(
                max(0, self.game.grid.count_holes() - holes_before)),
            "height": -self.reward_weights["height"] * float(
                max(0, self.game.grid.get_max_height() - height_before)),
        }

        terminated = bool(self.game.game_over or topped_out)
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = gained
        return self._get_obs(), reward, terminated, truncated, info

    def render(self):
        if self.render_mode == "ansi":
            return render_text(self.game.snapshot())
        if self.render_mode == "rgb_array":
            state = self.game.get_state()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = (70, 200, 120) if state[y, x] else (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        # human rendering delegated to external UI; noop
        return None

    def close(self) -> None:
        pass
