"""
Seeded source of mine positions.

Usage:
    rng = RandomSource(seed=42)
    mines = rng.generate_positions(81, 10, excluded={40})

The same seed always yields the same sequence of layouts, so a game
can be replayed from its seed.
"""
import logging
import random
import time
from typing import AbstractSet, Optional, Set

from .errors import InvalidConfig

logger = logging.getLogger(__name__)

SEED_MASK = (1 << 64) - 1


def make_seed() -> int:
    """Derive a 64-bit seed from the wall clock."""
    return time.time_ns() & SEED_MASK


class RandomSource:
    """Deterministic sampler of distinct cell indices."""

    def __init__(self, seed: Optional[int] = None) -> None:
        if seed is None:
            seed = make_seed()
        self._seed = seed & SEED_MASK
        self._rng = random.Random(self._seed)

    @property
    def seed(self) -> int:
        return self._seed

    def generate_positions(
        self,
        total_cells: int,
        count: int,
        excluded: AbstractSet[int] = frozenset(),
    ) -> Set[int]:
        """
        Draw distinct cell indices uniformly at random.

        Args:
            total_cells: Size of the index range to draw from.
            count: Number of indices to draw.
            excluded: Indices that must not be drawn.

        Returns:
            Set of exactly ``count`` indices.

        Raises:
            InvalidConfig: If fewer than ``count`` indices are available.
        """
        candidates = [i for i in range(total_cells) if i not in excluded]
        if count < 0 or count > len(candidates):
            raise InvalidConfig(
                f"Cannot place {count} mines in {len(candidates)} free cells"
            )
        positions = set(self._rng.sample(candidates, count))
        logger.debug(
            "Sampled %d of %d cells (seed=%d)", count, len(candidates), self._seed
        )
        return positions
