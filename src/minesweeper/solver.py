"""
Deduction solver used to generate boards that never need a guess.

Uses constraint propagation over the numbers visible on the board:
each revealed number N with hidden neighbors gives the constraint
"exactly N - known_mines of these cells are mines".
"""
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import AbstractSet, Dict, FrozenSet, List, Set, Tuple

from .cell import Cell
from .errors import InvariantViolation
from .reveal import RevealEngine

logger = logging.getLogger(__name__)

MAX_PROPAGATION_ROUNDS = 100


# ============================================================================
# Constraint Types
# ============================================================================

@dataclass(frozen=True)
class Constraint:
    """
    Sum of mines over ``cells`` equals ``mine_count``.

    For example, if a revealed "2" has 3 unknown neighbors and no known
    mines around it, the constraint is: cells={A, B, C}, mine_count=2
    """

    cells: FrozenSet[int]
    mine_count: int


# ============================================================================
# Deduction
# ============================================================================

def build_constraints(
    engine: RevealEngine, cells: List[Cell], known_mines: AbstractSet[int]
) -> List[Constraint]:
    """Build one constraint per revealed number with unknown neighbors."""
    constraints = []
    for index, cell in enumerate(cells):
        if not cell.is_revealed or cell.adjacent_mines == 0:
            continue
        unknown = set()
        remaining = cell.adjacent_mines
        for neighbor in engine.neighbors(index):
            if neighbor in known_mines:
                remaining -= 1
            elif cells[neighbor].is_hidden:
                unknown.add(neighbor)
        if unknown:
            constraints.append(Constraint(frozenset(unknown), remaining))
    return constraints


def _apply_basic_rules(
    constraints: List[Constraint], safe: Set[int], mines: Set[int]
) -> Tuple[List[Constraint], bool]:
    """Settle constraints that are all-safe or all-mine; shrink the rest."""
    changed = False
    remaining_constraints = []
    for constraint in constraints:
        cells = constraint.cells - safe - mines
        count = constraint.mine_count - len(constraint.cells & mines)
        if not cells:
            continue
        if count == 0:
            safe.update(cells)
            changed = True
        elif count == len(cells):
            mines.update(cells)
            changed = True
        else:
            remaining_constraints.append(Constraint(frozenset(cells), count))
    return remaining_constraints, changed


def _subset_reduction(
    constraints: List[Constraint], safe: Set[int], mines: Set[int]
) -> Tuple[List[Constraint], bool]:
    """
    Derive new facts from constraints whose cells contain another's.

    Example:
        A: {X, Y} has 1 mine
        B: {X, Y, Z} has 1 mine
        -> Z must be safe (B - A = {Z} has 0 mines)
    """
    by_cell: Dict[int, List[int]] = defaultdict(list)
    for position, constraint in enumerate(constraints):
        for cell in constraint.cells:
            by_cell[cell].append(position)

    changed = False
    derived: Set[Constraint] = set()
    for position, small in enumerate(constraints):
        first_cell = next(iter(small.cells))
        for other in by_cell[first_cell]:
            if other == position:
                continue
            large = constraints[other]
            if not small.cells < large.cells:
                continue
            diff_cells = large.cells - small.cells
            diff_mines = large.mine_count - small.mine_count
            if diff_mines == 0:
                safe.update(diff_cells)
                changed = True
            elif diff_mines == len(diff_cells):
                mines.update(diff_cells)
                changed = True
            elif 0 < diff_mines < len(diff_cells):
                derived.add(Constraint(diff_cells, diff_mines))

    known = set(constraints)
    new_constraints = [c for c in derived if c not in known]
    if new_constraints:
        changed = True
    return constraints + new_constraints, changed


def deduce(
    engine: RevealEngine,
    cells: List[Cell],
    known_mines: AbstractSet[int],
    total_mines: int,
) -> Tuple[Set[int], Set[int]]:
    """
    Find cells that are certainly safe or certainly mines.

    Args:
        engine: Engine for the board's grid.
        cells: Flat cell list; only states of revealed cells are read.
        known_mines: Mines already deduced.
        total_mines: Mine count of the whole board.

    Returns:
        Tuple of (safe_cells, mine_cells) newly deduced.
    """
    safe: Set[int] = set()
    mines: Set[int] = set()
    constraints = build_constraints(engine, cells, known_mines)

    for _ in range(MAX_PROPAGATION_ROUNDS):
        constraints, changed = _apply_basic_rules(constraints, safe, mines)
        if not changed:
            constraints, changed = _subset_reduction(constraints, safe, mines)
        if not changed:
            break

    # Global mine count
    unknown = {
        index for index, cell in enumerate(cells)
        if cell.is_hidden and index not in known_mines
        and index not in mines and index not in safe
    }
    remaining = total_mines - len(known_mines) - len(mines)
    if unknown and remaining == 0:
        safe.update(unknown)
    elif unknown and remaining == len(unknown):
        mines.update(unknown)

    return safe, mines - set(known_mines)


# ============================================================================
# Solvability Check
# ============================================================================

def is_solvable(
    width: int, height: int, mines: AbstractSet[int], start: int
) -> bool:
    """
    Check whether a layout can be cleared from ``start`` without guessing.

    Args:
        width: Number of columns.
        height: Number of rows.
        mines: Flat indices of mines.
        start: Flat index of the opening click.

    Returns:
        True if pure deduction reveals every safe cell.
    """
    if start in mines:
        return False

    engine = RevealEngine(width, height)
    counts = engine.adjacency_counts(mines)
    cells = [
        Cell(is_mine=index in mines, adjacent_mines=0 if index in mines else counts[index])
        for index in range(engine.size)
    ]
    safe_total = engine.size - len(mines)
    known_mines: Set[int] = set()
    revealed = len(engine.cascade(cells, start))

    while revealed < safe_total:
        safe, found = deduce(engine, cells, known_mines, len(mines))
        known_mines |= found
        progress = bool(found)
        for index in safe:
            if cells[index].is_mine:
                raise InvariantViolation(f"Solver marked mine {index} as safe")
            opened = engine.cascade(cells, index)
            if opened:
                revealed += len(opened)
                progress = True
        if not progress:
            logger.debug("Stuck with %d of %d safe cells open", revealed, safe_total)
            return False

    return True
