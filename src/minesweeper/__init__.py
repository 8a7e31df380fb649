"""
Minesweeper rule engine.

Owns the mine field, reveal/flag state and win/loss determination,
independent of rendering and input handling.
"""
from .cell import Cell, CellState, CellView
from .config import BoardConfig, Difficulty, BEGINNER, INTERMEDIATE, EXPERT
from .errors import (
    MinesweeperError,
    InvalidConfig,
    OutOfBounds,
    PlacementError,
    AlreadyPlaced,
    NotPlaced,
    ActionRejected,
    InvariantViolation,
)
from .random_source import RandomSource, make_seed
from .reveal import RevealEngine
from .board import Board, RevealOutcome
from .solver import is_solvable
from .session import (
    GameSession,
    GamePhase,
    Outcome,
    RevealResult,
    FlagResult,
    new_game,
    format_duration,
)

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "BoardConfig",
    "Difficulty",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "MinesweeperError",
    "InvalidConfig",
    "OutOfBounds",
    "PlacementError",
    "AlreadyPlaced",
    "NotPlaced",
    "ActionRejected",
    "InvariantViolation",
    "RandomSource",
    "make_seed",
    "RevealEngine",
    "Board",
    "RevealOutcome",
    "is_solvable",
    "GameSession",
    "GamePhase",
    "Outcome",
    "RevealResult",
    "FlagResult",
    "new_game",
    "format_duration",
]
