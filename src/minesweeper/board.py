"""
Board module for Minesweeper game.

Implements the game board with deferred mine placement, cell
revealing, flagging and chording. Phase tracking lives in the session.
"""
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState, CellView
from .config import BoardConfig
from .errors import AlreadyPlaced, NotPlaced, OutOfBounds
from .random_source import RandomSource
from .reveal import RevealEngine
from .solver import is_solvable

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

MAX_NO_GUESS_ATTEMPTS = 500


# ============================================================================
# Reveal Outcome
# ============================================================================

@dataclass(frozen=True)
class RevealOutcome:
    """
    Positions changed by one reveal or chord.

    Attributes:
        revealed: Newly revealed positions, in reveal order.
        mine_hit: Whether a mine was among them.
    """

    revealed: Tuple[Position, ...] = ()
    mine_hit: bool = False


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Owns a dense grid of cells indexed ``row * width + col``. Cells are
    never returned to callers; queries go through ``cell_view``.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    _cells: List[Cell] = field(default_factory=list, repr=False)
    _engine: Optional[RevealEngine] = field(default=None, repr=False)
    _mines: FrozenSet[int] = field(default_factory=frozenset, repr=False)
    _mines_placed: bool = False
    _hidden_safe: int = 0
    _flag_count: int = 0
    _correct_flags: int = 0

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._engine = RevealEngine(self.config.width, self.config.height)
        self._cells = [Cell() for _ in range(self.config.total_cells)]
        self._hidden_safe = self.config.safe_cells

    @classmethod
    def new(cls, width: int, height: int, mine_count: int) -> "Board":
        """Create an empty board; raises InvalidConfig for bad values."""
        return cls(BoardConfig(width, height, mine_count))

    @classmethod
    def from_mines(
        cls, width: int, height: int, mines: Iterable[Position]
    ) -> "Board":
        """
        Create a board with a fixed mine layout.

        Used for replays and scripted scenarios. The board counts as
        placed, so ``place_mines`` will refuse to run on it.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: (row, col) positions of the mines.

        Returns:
            Board ready to be revealed.
        """
        mines = set(mines)
        board = cls(BoardConfig(width, height, len(mines)))
        indices = set()
        for row, col in mines:
            board._check_bounds(row, col)
            indices.add(board._index(row, col))
        board._apply_layout(indices)
        return board

    # ========================================================================
    # Grid Addressing (Low-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def mine_count(self) -> int:
        return self.config.mine_count

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def _check_bounds(self, row: int, col: int) -> None:
        if not self._is_valid_position(row, col):
            raise OutOfBounds(row, col, self.config.width, self.config.height)

    def _index(self, row: int, col: int) -> int:
        return row * self.config.width + col

    def _position(self, index: int) -> Position:
        return divmod(index, self.config.width)

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        self._check_bounds(row, col)
        return [
            self._position(n)
            for n in self._engine.neighbors(self._index(row, col))
        ]

    # ========================================================================
    # Mine Placement
    # ========================================================================

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    def place_mines(
        self, seed: Optional[int], excluded_position: Position,
        no_guess: bool = False,
    ) -> None:
        """
        Place mines, keeping the first click and its neighbors clear.

        The neighbors are only kept clear when enough cells remain for
        every mine; otherwise just the clicked cell is excluded.

        Args:
            seed: Seed for the RandomSource (None derives one from time).
            excluded_position: (row, col) of the first click.
            no_guess: Resample until the board can be cleared from the
                first click by deduction alone.

        Raises:
            AlreadyPlaced: If mines were placed before.
            OutOfBounds: If the position is outside the grid.
        """
        if self._mines_placed:
            raise AlreadyPlaced("Mines can only be placed once per board")
        row, col = excluded_position
        self._check_bounds(row, col)

        start = self._index(row, col)
        excluded = self._safe_zone(start)
        source = RandomSource(seed)
        total = self.config.total_cells
        count = self.config.mine_count

        mines = source.generate_positions(total, count, excluded)
        if no_guess:
            attempts = 1
            while not is_solvable(self.width, self.height, mines, start):
                if attempts >= MAX_NO_GUESS_ATTEMPTS:
                    logger.warning(
                        "No guess-free layout after %d attempts (seed=%d)",
                        attempts, source.seed,
                    )
                    break
                mines = source.generate_positions(total, count, excluded)
                attempts += 1
            logger.debug("No-guess layout found after %d attempt(s)", attempts)

        self._apply_layout(mines)
        logger.debug(
            "Placed %d mines on %dx%d board (seed=%d, opening=%s)",
            count, self.width, self.height, source.seed, excluded_position,
        )

    def _safe_zone(self, start: int) -> FrozenSet[int]:
        """Cells kept mine-free around the first click."""
        zone = frozenset([start, *self._engine.neighbors(start)])
        if self.config.mine_count <= self.config.total_cells - len(zone):
            return zone
        return frozenset([start])

    def _apply_layout(self, mines: Iterable[int]) -> None:
        """Write mine content and adjacency counts into the grid."""
        self._mines = frozenset(mines)
        counts = self._engine.adjacency_counts(self._mines)
        for index, cell in enumerate(self._cells):
            cell.is_mine = index in self._mines
            cell.adjacent_mines = 0 if cell.is_mine else counts[index]
        self._correct_flags = sum(
            1 for index in self._mines if self._cells[index].is_flagged
        )
        self._mines_placed = True

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal a cell at the given position.

        Flagged and already revealed cells are left alone. A mine is
        revealed on its own; a safe cell cascades through zero counts.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            Positions revealed by this call and whether a mine was hit.

        Raises:
            OutOfBounds: If the position is outside the grid.
            NotPlaced: If mines have not been placed yet.
        """
        self._check_bounds(row, col)
        if not self._mines_placed:
            raise NotPlaced("Place mines before revealing")

        index = self._index(row, col)
        cell = self._cells[index]
        if cell.state != CellState.HIDDEN:
            return RevealOutcome()

        if cell.is_mine:
            cell.reveal()
            return RevealOutcome(((row, col),), mine_hit=True)

        return RevealOutcome(self._cascade(index))

    def _cascade(self, index: int) -> Tuple[Position, ...]:
        opened = self._engine.cascade(self._cells, index)
        self._hidden_safe -= len(opened)
        return tuple(self._position(i) for i in opened)

    def toggle_flag(self, row: int, col: int) -> CellState:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            State of the cell after the call (REVEALED cells are unchanged).
        """
        self._check_bounds(row, col)
        cell = self._cells[self._index(row, col)]
        if not cell.toggle_flag():
            return cell.state

        step = 1 if cell.is_flagged else -1
        self._flag_count += step
        if cell.is_mine:
            self._correct_flags += step
        return cell.state

    def chord(self, row: int, col: int) -> RevealOutcome:
        """
        Chord action: reveal all unflagged neighbors if flag count matches.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            Positions revealed and whether a mine was among them. Empty
            when the cell does not qualify for a chord.
        """
        if not self._can_chord(row, col):
            return RevealOutcome()

        revealed: List[Position] = []
        mine_hit = False
        for neighbor in self._engine.neighbors(self._index(row, col)):
            cell = self._cells[neighbor]
            if cell.state != CellState.HIDDEN:
                continue
            if cell.is_mine:
                cell.reveal()
                revealed.append(self._position(neighbor))
                mine_hit = True
            else:
                revealed.extend(self._cascade(neighbor))

        return RevealOutcome(tuple(revealed), mine_hit)

    def _can_chord(self, row: int, col: int) -> bool:
        """Check if chord action is valid."""
        self._check_bounds(row, col)
        if not self._mines_placed:
            return False
        cell = self._cells[self._index(row, col)]
        if not cell.is_revealed or cell.is_mine or cell.adjacent_mines == 0:
            return False
        flag_count = self._count_adjacent_flags(row, col)
        return flag_count == cell.adjacent_mines

    def _count_adjacent_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        return sum(
            1 for n in self._engine.neighbors(self._index(row, col))
            if self._cells[n].is_flagged
        )

    # ========================================================================
    # End-of-game Display
    # ========================================================================

    def reveal_mines(self) -> List[Position]:
        """Reveal every hidden mine; flagged mines keep their flag."""
        shown = []
        for index in sorted(self._mines):
            if self._cells[index].reveal():
                shown.append(self._position(index))
        return shown

    def flag_mines(self) -> List[Position]:
        """Flag every mine that is still hidden."""
        flagged = []
        for index in sorted(self._mines):
            cell = self._cells[index]
            if cell.is_hidden:
                cell.toggle_flag()
                self._flag_count += 1
                self._correct_flags += 1
                flagged.append(self._position(index))
        return flagged

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def is_won(self) -> bool:
        """Check if every safe cell is revealed; flags do not matter."""
        return self._mines_placed and self._hidden_safe == 0

    @property
    def hidden_safe_count(self) -> int:
        """Safe cells still waiting to be revealed."""
        return self._hidden_safe

    @property
    def flag_count(self) -> int:
        return self._flag_count

    @property
    def correct_flag_count(self) -> int:
        return self._correct_flags

    @property
    def remaining_flag_budget(self) -> int:
        """Mines minus flags; negative when over-flagged."""
        return self.config.mine_count - self._flag_count

    def cell_view(self, row: int, col: int) -> CellView:
        """Get the player-visible view of the cell at position."""
        self._check_bounds(row, col)
        return self._cells[self._index(row, col)].view()

    def snapshot(self) -> List[List[CellView]]:
        """Get views of every cell, one list per row."""
        width = self.config.width
        return [
            [cell.view() for cell in self._cells[row * width:(row + 1) * width]]
            for row in range(self.config.height)
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        codes = [cell.view().to_observation() for cell in self._cells]
        return np.array(codes, dtype=np.int8).reshape(
            self.config.height, self.config.width
        )

    def get_hidden_positions(self) -> List[Position]:
        """Get positions of cells that can still be revealed."""
        return [
            self._position(index)
            for index, cell in enumerate(self._cells)
            if cell.state == CellState.HIDDEN
        ]
