"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, GameSession


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines (not yet placed)."""
    return Board()


@pytest.fixture
def placed_board() -> Board:
    """Create a beginner board with mines placed around (4, 4)."""
    board = Board(BoardConfig(9, 9, 10))
    board.place_mines(42, (4, 4))
    return board


@pytest.fixture
def empty_board() -> Board:
    """Create a placed board with no mines for cascade testing."""
    return Board.from_mines(5, 5, [])


@pytest.fixture
def wall_board() -> Board:
    """
    Create a 5x5 board with a full row of mines across row 2.

    Rows 0 and 4 are all zeros, rows 1 and 3 are numbered.
    """
    return Board.from_mines(5, 5, [(2, col) for col in range(5)])


@pytest.fixture
def corner_board() -> Board:
    """
    Create a 3x3 board with mines in the two top corners.

        * 2 *
        1 2 1
        0 0 0
    """
    return Board.from_mines(3, 3, [(0, 0), (0, 2)])


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def session() -> GameSession:
    """Create a seeded beginner session."""
    return GameSession(BoardConfig(9, 9, 10), seed=42)


@pytest.fixture
def corner_session() -> GameSession:
    """Create a session on the corner_board layout."""
    return GameSession.from_layout(3, 3, [(0, 0), (0, 2)])


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


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(adjacent_mines=3)
    cell.reveal()
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
