"""
Text codec for board state.

Format (whitespace-delimited integers)::

    <size> <total_mines>
    <size rows of size triples: is_mine is_revealed is_flagged>

Adjacency counts are not stored; they are recomputed on load.
"""
import logging
import time
from typing import Callable, List

from .board import Board, CellRecord
from .errors import CorruptSaveError

logger = logging.getLogger(__name__)

HEADER_TOKENS = 2
FIELDS_PER_CELL = 3


def dumps(board: Board) -> str:
    """Serialize a board to its text form."""
    rows: List[List[str]] = [[] for _ in range(board.size)]
    for row, _, cell in board.iter_cells():
        rows[row].append("{} {} {}".format(*cell.to_record()))
    lines = [f"{board.size} {board.total_mines}"]
    lines.extend(" ".join(triples) for triples in rows)
    return "\n".join(lines) + "\n"


def _parse_tokens(text: str) -> List[int]:
    try:
        return [int(token) for token in text.split()]
    except ValueError as exc:
        raise CorruptSaveError(f"Non-integer token in save data: {exc}") from exc


def loads(text: str, clock: Callable[[], float] = time.monotonic) -> Board:
    """
    Deserialize a board, validating everything before building it.

    Raises:
        CorruptSaveError: If the header is missing or out of range, the
            token count does not match the header, the mine count disagrees
            with the header, or a cell is both revealed and flagged.
    """
    tokens = _parse_tokens(text)
    if len(tokens) < HEADER_TOKENS:
        raise CorruptSaveError("Save data is missing its header")

    size, total_mines = tokens[0], tokens[1]
    if size < 1:
        raise CorruptSaveError(f"Invalid board size {size}")
    if not 1 <= total_mines <= size * size:
        raise CorruptSaveError(
            f"Mine count {total_mines} out of range for {size}x{size} board"
        )

    expected = HEADER_TOKENS + FIELDS_PER_CELL * size * size
    if len(tokens) != expected:
        raise CorruptSaveError(
            f"Expected {expected} tokens for {size}x{size} board, got {len(tokens)}"
        )

    records: List[List[CellRecord]] = []
    mine_count = 0
    body = iter(tokens[HEADER_TOKENS:])
    for row in range(size):
        record_row = []
        for col in range(size):
            is_mine, revealed, flagged = (
                bool(next(body)), bool(next(body)), bool(next(body))
            )
            if revealed and flagged:
                raise CorruptSaveError(
                    f"Cell ({row}, {col}) is both revealed and flagged"
                )
            mine_count += is_mine
            record_row.append((is_mine, revealed, flagged))
        records.append(record_row)

    if mine_count != total_mines:
        raise CorruptSaveError(
            f"Header declares {total_mines} mines but data holds {mine_count}"
        )

    board = Board.from_records(size, records, clock=clock)
    logger.debug("Decoded %dx%d board with %d mines", size, size, total_mines)
    return board
