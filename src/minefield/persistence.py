"""
File-backed storage for a single saved board.

Writes go to a sibling temporary file which then replaces the save, so a
reader sees either the old blob or the new one.
"""
import contextlib
import logging
import os
from pathlib import Path
from typing import Optional, Union

from .board import Board
from .errors import CorruptSaveError

logger = logging.getLogger(__name__)

DEFAULT_SAVE_PATH = "minefield_save.txt"


class SaveStore:
    """
    Whole-blob persistence for one board.

    IO failures are reported through return values; a corrupt blob raises
    ``CorruptSaveError`` from ``load``.
    """

    def __init__(self, path: Union[str, Path] = DEFAULT_SAVE_PATH) -> None:
        """
        Initialize the store.

        Args:
            path: File holding the serialized board.
        """
        self.path = Path(path)

    def exists(self) -> bool:
        """Check if a save file is present."""
        return self.path.is_file()

    def save(self, board: Board) -> bool:
        """
        Atomically overwrite the save with ``board``.

        Returns:
            True on success, False if the file could not be written.
        """
        data = board.serialize()
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.warning("Could not save board to %s: %s", self.path, exc)
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            return False
        logger.info("Saved %dx%d board to %s", board.size, board.size, self.path)
        return True

    def load(self) -> Optional[Board]:
        """
        Read the saved board.

        Returns:
            The board, or None if there is no readable save.

        Raises:
            CorruptSaveError: If the save exists but is malformed.
        """
        try:
            data = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No saved game at %s", self.path)
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read save %s: %s", self.path, exc)
            return None
        try:
            board = Board.deserialize(data)
        except CorruptSaveError:
            logger.warning("Save %s is corrupt", self.path)
            raise
        logger.info("Loaded %dx%d board from %s", board.size, board.size, self.path)
        return board

    def delete(self) -> bool:
        """Remove the save; returns False if there was none."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        return True
