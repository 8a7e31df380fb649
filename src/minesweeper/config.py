"""
Board configuration and difficulty presets.
"""
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .errors import InvalidConfig


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Total mines to place.
    """

    width: int = 9
    height: int = 9
    mine_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidConfig("Board dimensions must be positive")
        if self.mine_count < 0:
            raise InvalidConfig("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.mine_count > max_mines:
            raise InvalidConfig(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.mine_count

    @classmethod
    def for_difficulty(
        cls, difficulty: "Difficulty", seed: Optional[int] = None
    ) -> "BoardConfig":
        """
        Build a configuration for a density-based difficulty.

        The mine count is drawn from the difficulty's density range, so
        two games at the same difficulty may differ by a few mines.

        Args:
            difficulty: Difficulty level.
            seed: Seed for the mine count draw.

        Returns:
            Validated configuration.
        """
        width, height = difficulty.size
        low, high = difficulty.density
        total = width * height
        minimum = int(low * total)
        maximum = int(high * total)
        rng = random.Random(seed)
        mine_count = rng.randrange(minimum, maximum) if maximum > minimum else minimum
        return cls(width, height, mine_count)


# Classic presets
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)


# ============================================================================
# Difficulty Levels
# ============================================================================

class Difficulty(Enum):
    """Density-based difficulty levels: ((width, height), (low, high))."""

    EASY = ((20, 14), (0.12, 0.13))
    MEDIUM = ((30, 18), (0.16, 0.17))
    HARD = ((40, 24), (0.21, 0.22))

    @property
    def size(self) -> Tuple[int, int]:
        return self.value[0]

    @property
    def density(self) -> Tuple[float, float]:
        return self.value[1]

    def __str__(self) -> str:
        return self.name.capitalize()
