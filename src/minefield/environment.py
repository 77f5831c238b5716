"""
Gymnasium environment wrapper for the minefield engine.

Provides a standard RL interface for automated play.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig
from .cell import OBS_FLAGGED, OBS_MINE
from .snapshot import render_text


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment over a square board.

    Observation:
        2D int8 array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * size * size.
        Action i < size * size reveals cell (i // size, i % size);
        larger actions toggle the flag on cell i - size * size.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for clearing the board
        - -10 for hitting a mine
        - -0.1 for an action that changes nothing
        - 0 for toggling a flag
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 9x9 at 15% density).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.board: Optional[Board] = None

        size = self.config.size
        self._num_cells = size * size

        self.observation_space = spaces.Box(
            low=OBS_FLAGGED,
            high=OBS_MINE,
            shape=(size, size),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self._num_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new episode on a freshly generated board.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        board_seed = int(self.np_random.integers(0, 2**32))
        self.board = Board(config=self.config, rng=random.Random(board_seed))
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action.

        Args:
            action: Reveal or flag action index.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if self.board is None:
            raise RuntimeError("Call reset() before step()")

        self._steps += 1
        is_flag, row, col = self._decode_action(int(action))

        if is_flag:
            reward = 0.0 if self.board.toggle_flag(row, col) else -0.1
        else:
            reward = self._reveal_reward(row, col)

        terminated = self.board.is_over
        return self.board.get_observation(), reward, terminated, False, self._get_info()

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Split an action into (is_flag, row, col)."""
        is_flag = action >= self._num_cells
        index = action - self._num_cells if is_flag else action
        return is_flag, index // self.config.size, index % self.config.size

    def _reveal_reward(self, row: int, col: int) -> float:
        """Reveal a cell and score the result."""
        result = self.board.reveal(row, col)
        if not result:
            return -0.1
        if result.hit_mine:
            return -10.0
        if self.board.is_won:
            return 10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.cells_revealed,
            "total_safe": self._num_cells - self.config.total_mines,
            "flags": self.board.flags_placed,
            "game_state": self.board.game_state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.board is None:
            return None
        text = render_text(self.board.snapshot())
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the board.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.board is None or self.board.is_over:
            return mask
        for row, col, cell in self.board.iter_cells():
            index = row * self.config.size + col
            if cell.is_hidden:
                mask[index] = True
            if not cell.is_revealed:
                mask[self._num_cells + index] = True
        return mask
