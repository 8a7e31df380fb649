"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their state
(hidden/revealed/flagged) and content (mine/number), plus the
read-only view handed to presentation layers.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_CODE = -1
FLAGGED_CODE = -2
MINE_CODE = 9

_FLAG_TOGGLE = {
    CellState.HIDDEN: CellState.FLAGGED,
    CellState.FLAGGED: CellState.HIDDEN,
}


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    One square of the board: hidden content plus what the player did to it.

    ``is_mine`` and ``adjacent_mines`` are filled in by mine placement
    and never change afterwards. Player actions only move ``state``
    between HIDDEN, FLAGGED and REVEALED; REVEALED is final.

    Attributes:
        is_mine: Mine under this square.
        adjacent_mines: Mines among the up to eight surrounding squares.
        state: What the player currently sees.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Open the square.

        Returns:
            False when nothing changed: the square is flagged or was
            already open. Callers skip such squares in a cascade.
        """
        if not self.is_hidden:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Swap HIDDEN and FLAGGED. Content is untouched.

        Returns:
            False for an opened square, which cannot carry a flag.
        """
        if self.is_revealed:
            return False
        self.state = _FLAG_TOGGLE[self.state]
        return True

    @property
    def is_hidden(self) -> bool:
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Opened squares stay open for the rest of the game."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED

    def view(self) -> "CellView":
        """Project this cell to what a player is allowed to see."""
        if self.state != CellState.REVEALED:
            return CellView(self.state)
        if self.is_mine:
            return CellView(self.state, is_mine=True)
        return CellView(self.state, adjacent_mines=self.adjacent_mines)


# ============================================================================
# Cell View
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """
    Player-visible projection of a cell.

    Content is only populated for revealed cells, so a view of a hidden
    or flagged cell never tells whether it holds a mine.

    Attributes:
        state: Visual state of the cell.
        is_mine: True only for a revealed mine.
        adjacent_mines: Neighbor mine count of a revealed safe cell.
    """

    state: CellState
    is_mine: bool = False
    adjacent_mines: Optional[int] = None

    def to_observation(self) -> int:
        """
        Encode the view as a single integer.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_CODE
        if self.state == CellState.FLAGGED:
            return FLAGGED_CODE
        if self.is_mine:
            return MINE_CODE
        return self.adjacent_mines
