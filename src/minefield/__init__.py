"""
Minefield game engine.

Provides the board-state engine, its text codec, persistence, a session
facade and a Gymnasium environment.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    GameState,
    RevealResult,
    DEFAULT_SIZE,
    SMALL,
    MEDIUM,
    LARGE,
)
from .errors import (
    MinefieldError,
    InvalidSizeError,
    CorruptSaveError,
    NoActiveGameError,
)
from .serialization import dumps, loads
from .snapshot import BoardSnapshot, CellView, build_snapshot, render_text
from .persistence import SaveStore, DEFAULT_SAVE_PATH
from .session import GameSession
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "GameState",
    "RevealResult",
    "DEFAULT_SIZE",
    "SMALL",
    "MEDIUM",
    "LARGE",
    "MinefieldError",
    "InvalidSizeError",
    "CorruptSaveError",
    "NoActiveGameError",
    "dumps",
    "loads",
    "BoardSnapshot",
    "CellView",
    "build_snapshot",
    "render_text",
    "SaveStore",
    "DEFAULT_SAVE_PATH",
    "GameSession",
    "MinesweeperEnv",
]
