"""
Board module for the minefield engine.

Implements the square game board: mine placement, adjacency counts,
cascading reveals, flags, win/loss detection and the play clock.
"""
import logging
import random
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Deque, Iterable, List, Optional, Protocol, Sequence, Tuple

import numpy as np

from .cell import Cell, CellState
from .errors import InvalidSizeError

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
CellRecord = Tuple[bool, bool, bool]


# ============================================================================
# Constants
# ============================================================================

DEFAULT_SIZE = 9
MINE_PERCENT = 15


class GameState(Enum):
    """Possible outcomes of a board."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class RandomSource(Protocol):
    """Anything that can draw a uniform integer in [0, stop)."""

    def randrange(self, stop: int) -> int:
        ...


@dataclass
class BoardConfig:
    """
    Configuration for a square board.

    Attributes:
        size: Number of rows and columns.
        mine_percent: Mine density in percent of all cells.
        num_mines: Explicit mine count, overriding the density.
    """

    size: int = DEFAULT_SIZE
    mine_percent: int = MINE_PERCENT
    num_mines: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.size < 1:
            raise InvalidSizeError(self.size)
        if not 0 < self.mine_percent < 100:
            raise ValueError("Mine percent must be between 1 and 99")
        if self.num_mines is not None:
            if self.num_mines < 1:
                raise ValueError("Board needs at least one mine")
            if self.num_mines > self.total_cells:
                raise ValueError(f"Too many mines (max {self.total_cells})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.size * self.size

    @property
    def total_mines(self) -> int:
        """Mines to place: the explicit count, else floor(density * cells)."""
        if self.num_mines is not None:
            return self.num_mines
        return max(1, self.total_cells * self.mine_percent // 100)


# Preset board sizes
SMALL = BoardConfig(5)
MEDIUM = BoardConfig(9)
LARGE = BoardConfig(16)


@dataclass
class RevealResult:
    """
    Outcome of a single reveal command.

    Attributes:
        revealed: Positions revealed by the command, in reveal order.
        hit_mine: Whether the command exposed a mine.
    """

    revealed: List[Position] = field(default_factory=list)
    hit_mine: bool = False

    def __bool__(self) -> bool:
        return bool(self.revealed)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper board engine.

    A board gets exactly one mine layout for its lifetime: either drawn
    from ``rng`` at construction or supplied through ``from_mines`` /
    ``from_records``. Adjacency counts are always derived from the layout.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: Optional[RandomSource] = field(default=None, repr=False)
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _lost: bool = False
    _started_at: Optional[float] = None
    _finished_at: Optional[float] = None

    def __post_init__(self) -> None:
        """Plant mines unless a layout was supplied, then derive counts."""
        if not self._grid:
            self._init_grid()
            self._place_mines()
        self.recompute_adjacency()

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def create(
        cls,
        size: int,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "Board":
        """
        Create a fresh board with randomly placed mines.

        Args:
            size: Rows and columns of the board.
            rng: Random source; a new ``random.Random`` if omitted.
            clock: Time source for the play clock.

        Raises:
            InvalidSizeError: If size is smaller than one.
        """
        return cls(config=BoardConfig(size=size), rng=rng, clock=clock)

    @classmethod
    def from_mines(
        cls,
        size: int,
        mines: Iterable[Position],
        clock: Callable[[], float] = time.monotonic,
    ) -> "Board":
        """
        Create a board with a fixed mine layout.

        Raises:
            ValueError: If a position is off the board or repeated.
        """
        positions = list(mines)
        config = BoardConfig(size=size, num_mines=len(positions))
        grid = [[Cell() for _ in range(size)] for _ in range(size)]
        for row, col in positions:
            if not (0 <= row < size and 0 <= col < size):
                raise ValueError(f"Mine position {(row, col)} is off the board")
            if grid[row][col].is_mine:
                raise ValueError(f"Duplicate mine position {(row, col)}")
            grid[row][col].is_mine = True
        return cls(config=config, clock=clock, _grid=grid)

    @classmethod
    def from_records(
        cls,
        size: int,
        records: Sequence[Sequence[CellRecord]],
        clock: Callable[[], float] = time.monotonic,
    ) -> "Board":
        """
        Rebuild a board from per-cell (mine, revealed, flagged) records.

        The loss latch is set iff a mine is already revealed. The play
        clock starts over on the next reveal.
        """
        mines = [
            (row, col)
            for row in range(size)
            for col in range(size)
            if records[row][col][0]
        ]
        board = cls.from_mines(size, mines, clock=clock)
        for row in range(size):
            for col in range(size):
                _, revealed, flagged = records[row][col]
                cell = board._grid[row][col]
                if revealed:
                    cell.state = CellState.REVEALED
                elif flagged:
                    cell.state = CellState.FLAGGED
                if revealed and cell.is_mine:
                    board._lost = True
        board.recompute_adjacency()
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.size)]
            for _ in range(self.config.size)
        ]

    def _place_mines(self) -> None:
        """
        Plant mines by rejection sampling.

        Each draw picks a uniform (row, col); draws landing on a mine are
        discarded without being counted.
        """
        rng = self.rng if self.rng is not None else random.Random()
        size = self.config.size
        placed = 0
        draws = 0
        while placed < self.config.total_mines:
            row = rng.randrange(size)
            col = rng.randrange(size)
            draws += 1
            cell = self._grid[row][col]
            if cell.is_mine:
                continue
            cell.is_mine = True
            placed += 1
        logger.debug(
            "Placed %d mines on %dx%d board in %d draws",
            placed, size, size, draws,
        )

    def recompute_adjacency(self) -> None:
        """Set every cell's adjacent mine count from the current layout."""
        for row in range(self.config.size):
            for col in range(self.config.size):
                cell = self._grid[row][col]
                if cell.is_mine:
                    cell.adjacent_mines = 0
                else:
                    cell.adjacent_mines = self._count_adjacent_mines(row, col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the clipped Moore neighbourhood.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.size and 0 <= col < self.config.size

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Reveal a cell at the given position.

        Off-board, revealed and flagged cells are ignored. A mine sets the
        loss latch. A cell with no adjacent mines cascades to its whole
        zero region and the numbered cells bordering it.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            The positions revealed and whether a mine was hit.
        """
        result = RevealResult()
        if not self._is_valid_position(row, col):
            return result

        cell = self._grid[row][col]
        if not cell.reveal():
            return result

        self._start_clock()
        result.revealed.append((row, col))

        if cell.is_mine:
            result.hit_mine = True
            self._mark_lost(row, col)
            return result

        if cell.adjacent_mines == 0:
            self._flood_reveal(row, col, result.revealed)

        if not self._lost and self.check_win():
            self._stop_clock()
            logger.info("Board cleared after revealing (%d, %d)", row, col)
        return result

    def _flood_reveal(self, row: int, col: int, revealed: List[Position]) -> None:
        """
        Reveal the zero region containing (row, col).

        A neighbour is revealed on discovery, so the revealed state is the
        visited set and each cell enters the worklist at most once.
        """
        worklist: Deque[Position] = deque([(row, col)])
        while worklist:
            current_row, current_col = worklist.popleft()
            for neighbor_row, neighbor_col in self._get_neighbors(
                current_row, current_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if neighbor.is_mine or not neighbor.reveal():
                    continue
                revealed.append((neighbor_row, neighbor_col))
                if neighbor.adjacent_mines == 0:
                    worklist.append((neighbor_row, neighbor_col))
        logger.debug("Cascade from (%d, %d) revealed %d cells", row, col, len(revealed))

    def _mark_lost(self, row: int, col: int) -> None:
        """Latch the loss; later mine reveals leave it untouched."""
        if self._lost:
            return
        self._lost = True
        self._stop_clock()
        logger.info("Mine revealed at (%d, %d)", row, col)

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False for off-board or revealed cells.
        """
        if not self._is_valid_position(row, col):
            return False
        return self._grid[row][col].toggle_flag()

    def check_win(self) -> bool:
        """True iff every non-mine cell is revealed; flags do not matter."""
        return all(
            cell.is_revealed
            for grid_row in self._grid
            for cell in grid_row
            if not cell.is_mine
        )

    def has_lost(self) -> bool:
        """True once any mine has been revealed."""
        return self._lost

    # ========================================================================
    # Play Clock
    # ========================================================================

    def _start_clock(self) -> None:
        if self._started_at is None:
            self._started_at = self.clock()

    def _stop_clock(self) -> None:
        if self._started_at is not None and self._finished_at is None:
            self._finished_at = self.clock()

    @property
    def elapsed_seconds(self) -> float:
        """Seconds since the first reveal, frozen once the game ends."""
        if self._started_at is None:
            return 0.0
        end = self._finished_at if self._finished_at is not None else self.clock()
        return end - self._started_at

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        """
        Current outcome; a loss outranks a cleared board.

        A win is only decided by a reveal, so a board with no safe cells
        stays in play until its first move.
        """
        if self._lost:
            return GameState.LOST
        if self.check_win() and self.cells_revealed > 0:
            return GameState.WON
        return GameState.PLAYING

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self.game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self.game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._lost

    @property
    def is_over(self) -> bool:
        """Check if the game reached a terminal outcome."""
        return self.game_state != GameState.PLAYING

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def total_mines(self) -> int:
        return self.config.total_mines

    @property
    def flags_placed(self) -> int:
        """Number of flagged cells."""
        return sum(cell.is_flagged for grid_row in self._grid for cell in grid_row)

    @property
    def mines_remaining(self) -> int:
        """Mines minus flags; negative when over-flagged."""
        return self.total_mines - self.flags_placed

    @property
    def cells_revealed(self) -> int:
        """Number of revealed cells, mines included."""
        return sum(cell.is_revealed for grid_row in self._grid for cell in grid_row)

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def iter_cells(self) -> Iterable[Tuple[int, int, Cell]]:
        """Yield (row, col, cell) in row-major order."""
        for row, grid_row in enumerate(self._grid):
            for col, cell in enumerate(grid_row):
                yield row, col, cell

    def mine_positions(self) -> List[Position]:
        """Positions of all mines in row-major order."""
        return [(row, col) for row, col, cell in self.iter_cells() if cell.is_mine]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Hidden mines are never exposed.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.size, self.config.size), dtype=np.int8)
        for row, col, cell in self.iter_cells():
            obs[row, col] = cell.to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells a reveal would act on.

        Returns:
            List of (row, col) positions that are hidden and unflagged.
        """
        return [(row, col) for row, col, cell in self.iter_cells() if cell.is_hidden]

    # ========================================================================
    # Projections
    # ========================================================================

    def serialize(self) -> str:
        """Encode mine layout and marks as text."""
        from .serialization import dumps

        return dumps(self)

    @classmethod
    def deserialize(
        cls, text: str, clock: Callable[[], float] = time.monotonic
    ) -> "Board":
        """
        Decode a board produced by ``serialize``.

        Raises:
            CorruptSaveError: If the text is malformed.
        """
        from .serialization import loads

        return loads(text, clock=clock)

    def snapshot(self, debug: bool = False):
        """Read-only view for renderers; see ``minefield.snapshot``."""
        from .snapshot import build_snapshot

        return build_snapshot(self, debug=debug)
