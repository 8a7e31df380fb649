"""
Unit tests for Cell and CellView.

Tests cell state management, reveal/flag behavior, and the
player-visible projection.
"""
import pytest
from minesweeper import Cell, CellState, CellView


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
        """New cell should be hidden by default."""
        cell = Cell()
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True

    def test_default_cell_has_zero_adjacent_mines(self) -> None:
        """New cell should have 0 adjacent mines by default."""
        cell = Cell()
        assert cell.adjacent_mines == 0


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell should succeed."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True

    def test_reveal_already_revealed_returns_false(
        self, hidden_cell: Cell
    ) -> None:
        """Revealing an already revealed cell should fail."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot reveal a flagged cell."""
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.state == CellState.FLAGGED


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_changes_state_to_flagged(self, hidden_cell: Cell) -> None:
        """Flagging a cell should change its state."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.is_flagged is True

    def test_unflag_returns_to_hidden(self, hidden_cell: Cell) -> None:
        """Unflagging a cell should return it to hidden."""
        hidden_cell.toggle_flag()
        hidden_cell.toggle_flag()
        assert hidden_cell.is_hidden is True

    def test_flag_revealed_cell_returns_false(self, numbered_cell: Cell) -> None:
        """Cannot flag a revealed cell."""
        assert numbered_cell.toggle_flag() is False
        assert numbered_cell.is_revealed is True

    def test_flag_toggle_keeps_content(self, mine_cell: Cell) -> None:
        """Flagging never touches what is under the square."""
        assert mine_cell.toggle_flag() is True
        assert mine_cell.toggle_flag() is True
        assert mine_cell.is_mine is True
        assert mine_cell.is_hidden is True


# ============================================================================
# Cell View Tests
# ============================================================================

class TestCellView:
    """Test what a player is allowed to see."""

    def test_hidden_mine_is_opaque(self, mine_cell: Cell) -> None:
        """A hidden mine must not be exposed."""
        view = mine_cell.view()
        assert view == CellView(CellState.HIDDEN)
        assert view.is_mine is False
        assert view.adjacent_mines is None

    def test_flagged_mine_is_opaque(self, mine_cell: Cell) -> None:
        """A flagged mine must not be exposed."""
        mine_cell.toggle_flag()
        assert mine_cell.view() == CellView(CellState.FLAGGED)

    def test_hidden_number_is_opaque(self) -> None:
        """Counts of hidden cells must not be exposed."""
        assert Cell(adjacent_mines=4).view().adjacent_mines is None

    def test_revealed_number_shows_count(self, numbered_cell: Cell) -> None:
        """Revealed safe cell exposes its count."""
        view = numbered_cell.view()
        assert view.state == CellState.REVEALED
        assert view.adjacent_mines == 3
        assert view.is_mine is False

    def test_revealed_mine_shows_mine(self, mine_cell: Cell) -> None:
        """Revealed mine is shown as a mine without a count."""
        mine_cell.reveal()
        view = mine_cell.view()
        assert view.is_mine is True
        assert view.adjacent_mines is None


# ============================================================================
# Observation Code Tests
# ============================================================================

class TestObservationCode:
    """Test integer encoding of views."""

    def test_hidden_code(self, hidden_cell: Cell) -> None:
        """Hidden cell should return -1."""
        assert hidden_cell.view().to_observation() == -1

    def test_flagged_code(self, hidden_cell: Cell) -> None:
        """Flagged cell should return -2."""
        hidden_cell.toggle_flag()
        assert hidden_cell.view().to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_code_matches_adjacent_count(self, count: int) -> None:
        """Revealed cell returns its adjacent mine count."""
        cell = Cell(adjacent_mines=count)
        cell.reveal()
        assert cell.view().to_observation() == count

    def test_revealed_mine_code(self, mine_cell: Cell) -> None:
        """Revealed mine should return 9."""
        mine_cell.reveal()
        assert mine_cell.view().to_observation() == 9
