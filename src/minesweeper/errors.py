"""
Exception types for the Minesweeper rule engine.

Every error leaves the board and session exactly as they were before
the failing call.
"""
from typing import Any, Optional


class MinesweeperError(Exception):
    """Base class for all rule engine errors."""


class InvalidConfig(MinesweeperError, ValueError):
    """Board dimensions or mine count are not playable."""


class OutOfBounds(MinesweeperError, IndexError):
    """
    A position outside the grid was addressed.

    Usually a coordinate-mapping bug in the presentation layer.
    """

    def __init__(self, row: int, col: int, width: int, height: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) outside {width}x{height} board"
        )
        self.row = row
        self.col = col


class PlacementError(MinesweeperError, RuntimeError):
    """Mine placement was used out of order."""


class AlreadyPlaced(PlacementError):
    """Mines were already placed on this board."""


class NotPlaced(PlacementError):
    """A reveal was attempted before mines were placed."""


class ActionRejected(MinesweeperError):
    """The session is over; only a new game is accepted."""

    def __init__(self, action: str, phase: Optional[Any] = None) -> None:
        name = getattr(phase, "name", phase)
        super().__init__(f"Cannot {action} while game is {name}")
        self.action = action
        self.phase = phase


class InvariantViolation(MinesweeperError, AssertionError):
    """Internal state became inconsistent."""
