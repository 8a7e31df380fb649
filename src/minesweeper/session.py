"""
Game session: the state machine every player action goes through.

    NOT_STARTED --reveal--> IN_PROGRESS --mine hit--> LOST
                                        --all safe cells open--> WON

The session owns its board exclusively and never reads a clock;
elapsed time is accumulated from deltas supplied by the caller.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, FrozenSet, Iterable, List, Optional

import numpy as np

from .board import Board, Position, RevealOutcome
from .cell import CellState, CellView
from .config import BoardConfig
from .errors import ActionRejected, InvariantViolation
from .random_source import make_seed

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GamePhase(Enum):
    """Possible phases of a game."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GamePhase.WON, GamePhase.LOST)


class Outcome(Enum):
    """Terminal signal carried by a reveal result."""

    NONE = auto()
    MINE_HIT = auto()
    WON = auto()


# ============================================================================
# Action Results
# ============================================================================

@dataclass(frozen=True)
class RevealResult:
    """
    Cells changed by a reveal or chord.

    Attributes:
        newly_revealed: View of every cell revealed by the action,
            keyed by (row, col). On a loss this includes the mines
            uncovered for display.
        outcome: Whether the action ended the game.
        flagged: Mines flagged automatically on a win.
    """

    newly_revealed: Dict[Position, CellView] = field(default_factory=dict)
    outcome: Outcome = Outcome.NONE
    flagged: FrozenSet[Position] = frozenset()


@dataclass(frozen=True)
class FlagResult:
    """
    Result of toggling a flag.

    Attributes:
        position: (row, col) of the toggled cell.
        new_state: State of the cell after the toggle.
        remaining_flag_budget: Mines minus flags; display only, may be
            negative.
    """

    position: Position
    new_state: CellState
    remaining_flag_budget: int


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    Wraps a Board with phase tracking and an elapsed-time accumulator.

    Mines are placed on the first reveal using the session seed, so a
    game can be replayed exactly by reusing ``session.seed``.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        seed: Optional[int] = None,
        no_guess: bool = False,
    ) -> None:
        """
        Initialize a session with an empty board.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            seed: Seed for mine placement (default: derived from time).
            no_guess: Only deal layouts that can be solved without
                guessing from the first click.
        """
        self.no_guess = no_guess
        self._start(config or BoardConfig(), seed)

    def _start(
        self, config: BoardConfig, seed: Optional[int],
        board: Optional[Board] = None,
    ) -> None:
        self.config = config
        self._elapsed = 0.0
        if board is None:
            self.seed = make_seed() if seed is None else seed
            self._board = Board(config)
            self._phase = GamePhase.NOT_STARTED
            self._first_click = True
            logger.info(
                "New %dx%d game with %d mines (seed=%d)",
                config.width, config.height, config.mine_count, self.seed,
            )
        else:
            self.seed = seed
            self._board = board
            self._phase = GamePhase.IN_PROGRESS
            self._first_click = False
            logger.info(
                "Replaying %dx%d layout with %d mines",
                config.width, config.height, config.mine_count,
            )

    @classmethod
    def from_layout(
        cls,
        width: int,
        height: int,
        mines: Iterable[Position],
        seed: Optional[int] = None,
    ) -> "GameSession":
        """
        Start a session on a fixed mine layout, skipping placement.

        Used to replay a recorded board. The game is in progress from
        the start, so the opening click carries no safety guarantee.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: (row, col) positions of the mines.
            seed: Seed the layout was recorded with, if known. It is
                kept for reference only; nothing is drawn from it.
        """
        board = Board.from_mines(width, height, mines)
        session = cls.__new__(cls)
        session.no_guess = False
        session._start(board.config, seed, board)
        return session

    def new_game(
        self, config: Optional[BoardConfig] = None, seed: Optional[int] = None
    ) -> None:
        """
        Discard the current board and start over.

        Args:
            config: New configuration (default: keep the current one).
            seed: Seed for the new game (default: derived from time).
        """
        self._start(config or self.config, seed)

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reveal(self, row: int, col: int, delta: float = 0.0) -> RevealResult:
        """
        Reveal a cell, placing mines first if this is the opening click.

        Args:
            row: Row index.
            col: Column index.
            delta: Seconds elapsed since the previous call.

        Returns:
            Newly revealed cells and the terminal outcome, if any.

        Raises:
            ActionRejected: If the game is already over.
            OutOfBounds: If the position is outside the grid.
        """
        self._ensure_active("reveal")
        view = self._board.cell_view(row, col)
        self._tick(delta)
        if view.state != CellState.HIDDEN:
            return RevealResult()

        if self._first_click:
            self._board.place_mines(self.seed, (row, col), self.no_guess)
            self._first_click = False
            self._phase = GamePhase.IN_PROGRESS
            outcome = self._board.reveal(row, col)
            if outcome.mine_hit:
                raise InvariantViolation(
                    f"First reveal at ({row}, {col}) hit a mine"
                )
        else:
            outcome = self._board.reveal(row, col)

        return self._settle(outcome)

    def chord(self, row: int, col: int, delta: float = 0.0) -> RevealResult:
        """
        Reveal the unflagged neighbors of a satisfied number.

        Args:
            row: Row index.
            col: Column index.
            delta: Seconds elapsed since the previous call.

        Returns:
            Same shape as ``reveal``; empty when the cell does not
            qualify.

        Raises:
            ActionRejected: If the game is already over.
            OutOfBounds: If the position is outside the grid.
        """
        self._ensure_active("chord")
        self._board.cell_view(row, col)  # bounds check
        self._tick(delta)
        return self._settle(self._board.chord(row, col))

    def toggle_flag(self, row: int, col: int, delta: float = 0.0) -> FlagResult:
        """
        Flag or unflag a hidden cell.

        Args:
            row: Row index.
            col: Column index.
            delta: Seconds elapsed since the previous call.

        Returns:
            New cell state and the remaining flag budget.

        Raises:
            ActionRejected: If the game is already over.
            OutOfBounds: If the position is outside the grid.
        """
        self._ensure_active("flag")
        self._board.cell_view(row, col)  # bounds check
        self._tick(delta)
        new_state = self._board.toggle_flag(row, col)
        return FlagResult(
            (row, col), new_state, self._board.remaining_flag_budget
        )

    def _ensure_active(self, action: str) -> None:
        if self._phase.is_terminal:
            logger.warning("Rejected %s: game is %s", action, self._phase.name)
            raise ActionRejected(action, self._phase)

    def _settle(self, outcome: RevealOutcome) -> RevealResult:
        """Apply phase transitions for a reveal outcome."""
        revealed = list(outcome.revealed)
        flagged: List[Position] = []
        result = Outcome.NONE

        if outcome.mine_hit:
            self._phase = GamePhase.LOST
            revealed.extend(self._board.reveal_mines())
            result = Outcome.MINE_HIT
            logger.info("Game lost after %.1fs", self._elapsed)
        elif self._board.is_won():
            self._phase = GamePhase.WON
            flagged = self._board.flag_mines()
            result = Outcome.WON
            logger.info("Game won in %.1fs", self._elapsed)

        views = {pos: self._board.cell_view(*pos) for pos in revealed}
        return RevealResult(views, result, frozenset(flagged))

    # ========================================================================
    # Timer
    # ========================================================================

    def _tick(self, delta: float) -> None:
        if delta < 0:
            raise ValueError("Time delta cannot be negative")
        if self._phase == GamePhase.IN_PROGRESS:
            self._elapsed += delta

    def elapsed_time(self, delta: float = 0.0) -> float:
        """
        Feed a frame delta and get the total play time.

        The timer only runs while the game is in progress; it stays at
        zero before the first reveal and is frozen once the game ends.

        Args:
            delta: Seconds elapsed since the previous call.

        Returns:
            Total elapsed seconds.
        """
        self._tick(delta)
        return self._elapsed

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def is_over(self) -> bool:
        return self._phase.is_terminal

    @property
    def mines_placed(self) -> bool:
        return not self._first_click

    @property
    def remaining_flag_budget(self) -> int:
        return self._board.remaining_flag_budget

    def cell_view(self, row: int, col: int) -> CellView:
        return self._board.cell_view(row, col)

    def snapshot(self) -> List[List[CellView]]:
        """Views of every cell for a full repaint."""
        return self._board.snapshot()

    def get_observation(self) -> np.ndarray:
        return self._board.get_observation()


# ============================================================================
# Entry Points
# ============================================================================

def new_game(
    width: int,
    height: int,
    mine_count: int,
    seed: Optional[int] = None,
    no_guess: bool = False,
) -> GameSession:
    """
    Start a game from a (width, height, mine_count, seed) tuple.

    Raises:
        InvalidConfig: If the dimensions or mine count are not playable.
    """
    return GameSession(BoardConfig(width, height, mine_count), seed, no_guess)


def format_duration(seconds: float) -> str:
    """Format seconds as ``mm:ss`` for a timer display."""
    total = int(seconds)
    minutes, secs = divmod(total, 60)
    return f"{minutes:2}:{secs:02}"
