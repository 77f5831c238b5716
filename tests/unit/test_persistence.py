"""
Unit tests for SaveStore.
"""
from pathlib import Path

import pytest

from minefield import Board, CorruptSaveError, SaveStore


class TestSave:
    """Test writing saves."""

    def test_save_writes_serialized_board(
        self, store: SaveStore, save_path: Path, fixed_board: Board
    ) -> None:
        """The save holds the serialized board."""
        assert store.save(fixed_board) is True
        assert save_path.read_text(encoding="utf-8") == fixed_board.serialize()
        assert store.exists() is True

    def test_save_overwrites(self, store: SaveStore, fixed_board: Board) -> None:
        """A second save replaces the first."""
        store.save(fixed_board)
        fixed_board.reveal(0, 4)
        store.save(fixed_board)
        assert store.load().cells_revealed == 12

    def test_save_leaves_no_temp_file(
        self, store: SaveStore, save_path: Path, fixed_board: Board
    ) -> None:
        """The temporary file is gone after a save."""
        store.save(fixed_board)
        assert sorted(p.name for p in save_path.parent.iterdir()) == ["game.txt"]

    def test_unwritable_location_reports_failure(
        self, tmp_path: Path, fixed_board: Board
    ) -> None:
        """An unwritable path makes save() return False."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = SaveStore(blocker / "game.txt")
        assert store.save(fixed_board) is False
        assert fixed_board.cells_revealed == 0

    def test_failed_cleanup_still_reports_failure(
        self, store: SaveStore, fixed_board: Board, monkeypatch
    ) -> None:
        """An error removing the temp file does not escape save()."""
        def fail(*args, **kwargs):
            raise OSError("disk gone")

        monkeypatch.setattr("minefield.persistence.os.replace", fail)
        monkeypatch.setattr(Path, "unlink", fail)
        assert store.save(fixed_board) is False
        assert not store.path.exists()


class TestLoad:
    """Test reading saves."""

    def test_missing_save_returns_none(self, store: SaveStore) -> None:
        """A missing save loads as None."""
        assert store.exists() is False
        assert store.load() is None

    def test_directory_in_place_of_save_returns_none(self, tmp_path: Path) -> None:
        """An unreadable save loads as None."""
        (tmp_path / "game.txt").mkdir()
        assert SaveStore(tmp_path / "game.txt").load() is None

    def test_round_trip(self, store: SaveStore, fixed_board: Board) -> None:
        """A saved board loads back equal."""
        fixed_board.toggle_flag(4, 4)
        fixed_board.reveal(0, 4)
        store.save(fixed_board)

        loaded = store.load()
        assert loaded.serialize() == fixed_board.serialize()
        assert loaded.get_cell(1, 1).adjacent_mines == 2

    def test_corrupt_save_raises(self, store: SaveStore, save_path: Path) -> None:
        """Malformed saves raise CorruptSaveError."""
        save_path.parent.mkdir(parents=True)
        save_path.write_text("3 2\n1 0 0\n", encoding="utf-8")
        with pytest.raises(CorruptSaveError):
            store.load()


class TestDelete:
    """Test removing saves."""

    def test_delete_existing(self, store: SaveStore, fixed_board: Board) -> None:
        """Deleting removes the save."""
        store.save(fixed_board)
        assert store.delete() is True
        assert store.exists() is False

    def test_delete_missing(self, store: SaveStore) -> None:
        """Deleting with no save returns False."""
        assert store.delete() is False
