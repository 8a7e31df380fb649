"""
Reveal engine: neighbor lookup, adjacency counting and flood fill.

Works on a dense flat list of cells indexed ``row * width + col``.
"""
import logging
from collections import deque
from typing import AbstractSet, List, Sequence

from .cell import Cell, CellState

logger = logging.getLogger(__name__)


class RevealEngine:
    """
    Grid algorithms shared by the board and the solver.

    The flood fill is iterative, so board size is bounded only by
    memory and not by the interpreter's recursion limit.
    """

    def __init__(self, width: int, height: int) -> None:
        """
        Initialize the engine for a fixed grid size.

        Args:
            width: Number of columns.
            height: Number of rows.
        """
        self.width = width
        self.height = height
        self.size = width * height
        self._neighbors = [self._compute_neighbors(i) for i in range(self.size)]

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _compute_neighbors(self, index: int) -> List[int]:
        row, col = divmod(index, self.width)
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if 0 <= new_row < self.height and 0 <= new_col < self.width:
                    neighbors.append(new_row * self.width + new_col)
        return neighbors

    def neighbors(self, index: int) -> List[int]:
        """Get flat indices of the up-to-8 neighbors of a cell."""
        return self._neighbors[index]

    def adjacency_counts(self, mines: AbstractSet[int]) -> List[int]:
        """
        Count neighboring mines for every cell.

        Args:
            mines: Flat indices of mine cells.

        Returns:
            List of counts indexed like the grid.
        """
        counts = [0] * self.size
        for index in range(self.size):
            counts[index] = sum(1 for n in self._neighbors[index] if n in mines)
        return counts

    # ========================================================================
    # Flood Fill
    # ========================================================================

    def cascade(self, cells: Sequence[Cell], start: int) -> List[int]:
        """
        Reveal ``start`` and every cell reachable through zero counts.

        Breadth-first over the 8-connected grid. Only hidden cells are
        visited; expansion continues only from cells with no adjacent
        mines, so the result is the connected zero region plus its
        numbered border.

        Args:
            cells: Flat cell list to mutate.
            start: Index of the triggering cell.

        Returns:
            Indices revealed by this call, in visiting order.
        """
        if cells[start].state != CellState.HIDDEN:
            return []

        visited = bytearray(self.size)
        visited[start] = 1
        queue = deque([start])
        revealed = []

        while queue:
            index = queue.popleft()
            cell = cells[index]
            if not cell.reveal():
                continue
            revealed.append(index)
            if cell.is_mine or cell.adjacent_mines > 0:
                continue
            for neighbor in self._neighbors[index]:
                if visited[neighbor]:
                    continue
                visited[neighbor] = 1
                if cells[neighbor].state == CellState.HIDDEN:
                    queue.append(neighbor)

        logger.debug("Cascade from %d revealed %d cells", start, len(revealed))
        return revealed
