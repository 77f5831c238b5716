"""
Game session facade.

Owns the current board and the save store, and treats won and lost games
as final: once the outcome is decided, moves are ignored.
"""
import logging
from typing import Optional

from .board import Board, GameState, RandomSource, RevealResult
from .errors import NoActiveGameError
from .persistence import SaveStore
from .snapshot import BoardSnapshot

logger = logging.getLogger(__name__)


class GameSession:
    """
    A single player's session: at most one board at a time.

    Starting or loading a game replaces the current board.
    """

    def __init__(
        self,
        store: Optional[SaveStore] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        """
        Initialize the session.

        Args:
            store: Where games are saved; defaults to ``SaveStore()``.
            rng: Random source for new boards.
        """
        self.store = store or SaveStore()
        self.rng = rng
        self._board: Optional[Board] = None

    @property
    def board(self) -> Board:
        """The active board."""
        if self._board is None:
            raise NoActiveGameError("No game in progress")
        return self._board

    @property
    def has_game(self) -> bool:
        return self._board is not None

    @property
    def outcome(self) -> GameState:
        return self.board.game_state

    def new_game(self, size: int) -> Board:
        """Start a new game, discarding the current one."""
        self._board = Board.create(size, rng=self.rng)
        logger.info("New %dx%d game with %d mines", size, size, self._board.total_mines)
        return self._board

    def load_game(self) -> bool:
        """
        Replace the current board with the saved one.

        Returns:
            False if there is no saved game.

        Raises:
            CorruptSaveError: If the save is malformed; the current board
                is kept.
        """
        board = self.store.load()
        if board is None:
            return False
        self._board = board
        return True

    def save_game(self) -> bool:
        """Save the current board; False on IO failure."""
        return self.store.save(self.board)

    def reveal(self, row: int, col: int) -> RevealResult:
        """Reveal a cell unless the game is already decided."""
        board = self.board
        if board.is_over:
            return RevealResult()
        return board.reveal(row, col)

    def toggle_flag(self, row: int, col: int) -> bool:
        """Toggle a flag unless the game is already decided."""
        board = self.board
        if board.is_over:
            return False
        return board.toggle_flag(row, col)

    def snapshot(self, debug: bool = False) -> BoardSnapshot:
        return self.board.snapshot(debug=debug)
