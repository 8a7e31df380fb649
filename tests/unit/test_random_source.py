"""
Unit tests for RandomSource.
"""
import pytest
from minesweeper import RandomSource, InvalidConfig


class TestGeneratePositions:
    """Test seeded sampling of mine positions."""

    def test_returns_exact_count(self) -> None:
        """Should draw exactly the requested number of cells."""
        positions = RandomSource(1).generate_positions(81, 10)
        assert len(positions) == 10
        assert all(0 <= p < 81 for p in positions)

    def test_never_draws_excluded(self) -> None:
        """Excluded cells must never be drawn."""
        excluded = {0, 1, 2, 9, 10, 11}
        for seed in range(50):
            positions = RandomSource(seed).generate_positions(20, 14, excluded)
            assert not positions & excluded

    def test_can_fill_every_free_cell(self) -> None:
        """Count equal to the free cells takes all of them."""
        positions = RandomSource(5).generate_positions(9, 8, {4})
        assert positions == set(range(9)) - {4}

    def test_zero_count_returns_empty(self) -> None:
        """No mines is a valid request."""
        assert RandomSource(5).generate_positions(1, 0) == set()

    def test_too_many_raises(self) -> None:
        """Requesting more cells than available should fail."""
        with pytest.raises(InvalidConfig, match="Cannot place"):
            RandomSource(5).generate_positions(9, 5, set(range(5)))


class TestDeterminism:
    """Test reproducibility from the seed."""

    def test_same_seed_same_positions(self) -> None:
        """Same seed should give the same layout."""
        first = RandomSource(42).generate_positions(81, 10, {40})
        second = RandomSource(42).generate_positions(81, 10, {40})
        assert first == second

    def test_different_seeds_differ(self) -> None:
        """Different seeds should give different layouts."""
        first = RandomSource(1).generate_positions(480, 99)
        second = RandomSource(2).generate_positions(480, 99)
        assert first != second

    def test_successive_draws_follow_stream(self) -> None:
        """A replayed source repeats the whole sequence of draws."""
        source_a, source_b = RandomSource(9), RandomSource(9)
        draws_a = [source_a.generate_positions(50, 5) for _ in range(3)]
        draws_b = [source_b.generate_positions(50, 5) for _ in range(3)]
        assert draws_a == draws_b

    def test_missing_seed_is_derived(self) -> None:
        """Without a seed, one is derived and exposed for replay."""
        source = RandomSource()
        assert isinstance(source.seed, int)
        replay = RandomSource(source.seed)
        assert source.generate_positions(81, 10) == replay.generate_positions(81, 10)

    def test_seed_is_64_bit(self) -> None:
        """Seeds are masked to 64 bits."""
        assert RandomSource(2 ** 64 + 7).seed == 7
