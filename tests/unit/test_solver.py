"""
Unit tests for the no-guess solver.
"""
from minesweeper import Board, RevealEngine, is_solvable
from minesweeper.solver import Constraint, build_constraints, deduce


class TestDeduce:
    """Test single-step deductions."""

    def test_subset_reduction_finds_mine_and_safe(self) -> None:
        """Top corners of the corner layout are both deducible."""
        board = Board.from_mines(3, 3, [(0, 0), (0, 2)])
        board.reveal(2, 1)
        engine = RevealEngine(3, 3)
        safe, mines = deduce(engine, board._cells, set(), 2)
        assert safe == {1}
        assert mines == {0, 2}

    def test_constraints_skip_zero_cells(self) -> None:
        """Only revealed numbers with unknown neighbors form constraints."""
        board = Board.from_mines(3, 3, [(0, 0), (0, 2)])
        board.reveal(2, 1)
        constraints = build_constraints(RevealEngine(3, 3), board._cells, set())
        assert Constraint(frozenset({0, 1}), 1) in constraints
        assert Constraint(frozenset({0, 1, 2}), 2) in constraints
        assert len(constraints) == 3

    def test_global_count_settles_remaining_cells(self) -> None:
        """With every mine known, all other hidden cells are safe."""
        board = Board.from_mines(4, 1, [(0, 0)])
        board.reveal(0, 1)
        safe, mines = deduce(RevealEngine(4, 1), board._cells, {0}, 1)
        assert safe == {2, 3}
        assert mines == set()


class TestIsSolvable:
    """Test whole-board solvability."""

    def test_empty_board_is_solvable(self) -> None:
        """No mines means the opening clears everything."""
        assert is_solvable(5, 5, set(), 12) is True

    def test_corner_layout_is_solvable(self) -> None:
        """Subset reduction clears the corner layout."""
        assert is_solvable(3, 3, {0, 2}, 7) is True

    def test_fifty_fifty_is_not_solvable(self) -> None:
        """A lone 1 touching three unknowns needs a guess."""
        assert is_solvable(2, 2, {3}, 0) is False

    def test_opening_on_mine_is_not_solvable(self) -> None:
        """A layout with a mine under the first click is rejected."""
        assert is_solvable(3, 3, {4}, 4) is False

    def test_no_guess_placement_is_solvable(self) -> None:
        """Boards placed in no-guess mode pass the solver."""
        for seed in range(5):
            board = Board.new(9, 9, 10)
            board.place_mines(seed, (4, 4), no_guess=True)
            assert is_solvable(9, 9, board._mines, 40) is True
