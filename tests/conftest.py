"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Iterable, List

import pytest

# Add src (package) and the repo root (main.py) to path for imports
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT))

from minefield import Board, BoardConfig, Cell, SaveStore


# ============================================================================
# Layouts
# ============================================================================

# 5x5 board with three mines; adjacency counts are:
#   * 1 0 0 0
#   1 2 1 1 0
#   0 1 * 1 0
#   0 1 1 2 1
#   0 0 0 1 *
FIXED_MINES = [(0, 0), (2, 2), (4, 4)]

FIXED_COUNTS = [
    [0, 1, 0, 0, 0],
    [1, 2, 1, 1, 0],
    [0, 1, 0, 1, 0],
    [0, 1, 1, 2, 1],
    [0, 0, 0, 1, 0],
]

# Cells revealed by clicking (0, 4) on the fixed board
TOP_RIGHT_REGION = {
    (0, 1), (0, 2), (0, 3), (0, 4),
    (1, 1), (1, 2), (1, 3), (1, 4),
    (2, 3), (2, 4),
    (3, 3), (3, 4),
}


class ScriptedRandom:
    """Random source that replays a fixed list of draws."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values: List[int] = list(values)
        self.calls = 0

    def randrange(self, stop: int) -> int:
        value = self.values[self.calls]
        self.calls += 1
        assert 0 <= value < stop
        return value


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def fixed_board() -> Board:
    """5x5 board with mines at (0,0), (2,2), (4,4)."""
    return Board.from_mines(5, FIXED_MINES)


@pytest.fixture
def seeded_board() -> Board:
    """Default-sized board with reproducible mines."""
    return Board.create(9, rng=random.Random(1234))


@pytest.fixture
def single_cell_board() -> Board:
    """1x1 board; its only cell must be a mine."""
    return Board.create(1, rng=random.Random(0))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def default_config() -> BoardConfig:
    """Default 9x9 configuration."""
    return BoardConfig()


# ============================================================================
# Persistence Fixtures
# ============================================================================

@pytest.fixture
def save_path(tmp_path: Path) -> Path:
    return tmp_path / "saves" / "game.txt"


@pytest.fixture
def store(save_path: Path) -> SaveStore:
    return SaveStore(save_path)
