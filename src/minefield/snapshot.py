"""
Read-only board projections for renderers.

Unrevealed mines stay hidden while the game is in progress unless the
snapshot is taken in debug mode.
"""
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .board import Board, GameState
from .cell import OBS_FLAGGED, OBS_HIDDEN, OBS_MINE


@dataclass(frozen=True)
class CellView:
    """
    What a renderer may know about one cell.

    Attributes:
        revealed: Whether the cell is revealed.
        flagged: Whether the cell carries a flag.
        mine: Whether the cell is a mine; False when not exposed.
        count: Adjacent mine count, or None when not exposed.
    """

    revealed: bool
    flagged: bool
    mine: bool = False
    count: Optional[int] = None


@dataclass(frozen=True)
class BoardSnapshot:
    """Immutable projection of a board for presentation."""

    size: int
    total_mines: int
    flags_placed: int
    outcome: GameState
    cells: List[List[CellView]]

    @property
    def mines_remaining(self) -> int:
        return self.total_mines - self.flags_placed

    def to_array(self) -> np.ndarray:
        """
        Encode the snapshot with observation codes.

        Exposed but unrevealed mines are reported as 9, other exposed
        unrevealed cells keep the hidden/flagged code.
        """
        obs = np.full((self.size, self.size), OBS_HIDDEN, dtype=np.int8)
        for row, view_row in enumerate(self.cells):
            for col, view in enumerate(view_row):
                if view.mine:
                    obs[row, col] = OBS_MINE
                elif view.flagged:
                    obs[row, col] = OBS_FLAGGED
                elif view.revealed:
                    obs[row, col] = view.count
        return obs


def build_snapshot(board: Board, debug: bool = False) -> BoardSnapshot:
    """Project a board, revealing everything once the game is over."""
    outcome = board.game_state
    expose_all = debug or outcome != GameState.PLAYING

    cells: List[List[CellView]] = [[] for _ in range(board.size)]
    for row, _, cell in board.iter_cells():
        if cell.is_revealed or expose_all:
            view = CellView(
                revealed=cell.is_revealed,
                flagged=cell.is_flagged,
                mine=cell.is_mine,
                count=cell.adjacent_mines,
            )
        else:
            view = CellView(revealed=False, flagged=cell.is_flagged)
        cells[row].append(view)

    return BoardSnapshot(
        size=board.size,
        total_mines=board.total_mines,
        flags_placed=board.flags_placed,
        outcome=outcome,
        cells=cells,
    )


# ============================================================================
# Text Rendering
# ============================================================================

def _cell_symbol(view: CellView) -> str:
    if view.flagged:
        return "F"
    if view.mine:
        return "*"
    if not view.revealed:
        return "."
    if view.count == 0:
        return " "
    return str(view.count)


def render_text(snapshot: BoardSnapshot) -> str:
    """
    Render a snapshot as a plain-text grid with row and column labels.

    Symbols: ``.`` hidden, ``F`` flag, ``*`` mine, blank for an empty
    cell, digits for counts.
    """
    width = len(str(snapshot.size - 1))
    header = " " * (width + 1) + " ".join(
        str(col % 10) for col in range(snapshot.size)
    )
    lines = [header]
    for row, view_row in enumerate(snapshot.cells):
        symbols = " ".join(_cell_symbol(view) for view in view_row)
        lines.append(f"{row:>{width}} {symbols}")
    return "\n".join(lines)
