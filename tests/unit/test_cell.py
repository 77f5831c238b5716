"""
Unit tests for Cell class.

Tests cell state management, reveal/flag behavior, observation codes and
persisted records.
"""
import pytest
from minefield import Cell, CellState


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        cell = Cell()
        assert cell.is_mine is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden and unflagged."""
        cell = Cell()
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True
        assert cell.is_revealed is False
        assert cell.is_flagged is False

    def test_default_cell_has_zero_adjacent_mines(self) -> None:
        """New cell should have no adjacent mines."""
        cell = Cell()
        assert cell.adjacent_mines == 0


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell succeeds."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True

    def test_reveal_twice_returns_false(self, hidden_cell: Cell) -> None:
        """A second reveal reports no change."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False

    def test_flag_guards_reveal(self, hidden_cell: Cell) -> None:
        """A flagged cell stays flagged when revealed."""
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.state == CellState.FLAGGED


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_then_unflag(self, hidden_cell: Cell) -> None:
        """Flag toggles back to hidden."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.is_flagged is True
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.is_hidden is True

    def test_flag_revealed_cell_returns_false(self, hidden_cell: Cell) -> None:
        """A revealed cell cannot be flagged."""
        hidden_cell.reveal()
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_revealed is True


# ============================================================================
# Observation and Record Tests
# ============================================================================

class TestCellObservation:
    """Test observation codes."""

    def test_hidden_mine_is_not_exposed(self, mine_cell: Cell) -> None:
        """A hidden mine observes as hidden."""
        assert mine_cell.to_observation() == -1

    def test_flagged_cell_observation(self, hidden_cell: Cell) -> None:
        """A flagged cell observes as flagged."""
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    @pytest.mark.parametrize("count", [0, 3, 8])
    def test_revealed_cell_shows_count(self, count: int) -> None:
        """A revealed safe cell observes as its count."""
        cell = Cell(adjacent_mines=count)
        cell.reveal()
        assert cell.to_observation() == count

    def test_revealed_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        """A revealed mine observes as 9."""
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9


class TestCellRecord:
    """Test the persisted (mine, revealed, flagged) triple."""

    def test_hidden_mine_record(self, mine_cell: Cell) -> None:
        """A hidden mine records only its mine bit."""
        assert mine_cell.to_record() == (1, 0, 0)

    def test_flagged_record(self, hidden_cell: Cell) -> None:
        """A flagged safe cell records its flag only."""
        hidden_cell.toggle_flag()
        assert hidden_cell.to_record() == (0, 0, 1)

    def test_revealed_record(self, hidden_cell: Cell) -> None:
        """A revealed safe cell records its reveal only."""
        hidden_cell.reveal()
        assert hidden_cell.to_record() == (0, 1, 0)
