"""
Unit tests for tri_noise/period_table.py.

Focus:
- Table agrees with the pure-Python segmentation
- Wrapping run lookup (indices before the first start)
- Read-only arrays (build once, read many)
- Size limits and base mismatch
"""

import numpy as np
import pytest

from tri_core.errors import InvalidBase, InvalidIndex, PeriodOverflow, TableTooLarge
from tri_core.index_space import period
from tri_core.types import Neighborhood
from tri_noise.neighborhoods import neighborhood_of, segment
from tri_noise.period_table import (
    DEFAULT_MAX_PERIOD,
    PeriodTable,
    build_period_table,
    find_runs,
)


@pytest.fixture(scope="module")
def table3():
    return build_period_table(3)


# =============================================================================
# Run detection
# =============================================================================


class TestFindRuns:
    """Boundary scan on cyclic depth arrays."""

    def test_wrapping(self):
        starts, lengths = find_runs(np.array([1, 2, 2, 1, 1], dtype=np.uint8))
        np.testing.assert_array_equal(starts, [1, 3])
        np.testing.assert_array_equal(lengths, [2, 3])

    def test_non_wrapping(self):
        starts, lengths = find_runs(np.array([0, 0, 1, 2, 2], dtype=np.uint8))
        np.testing.assert_array_equal(starts, [0, 2, 3])
        np.testing.assert_array_equal(lengths, [2, 1, 2])

    def test_constant(self):
        starts, lengths = find_runs(np.full(6, 3, dtype=np.uint8))
        np.testing.assert_array_equal(starts, [0])
        np.testing.assert_array_equal(lengths, [6])


# =============================================================================
# Table contents
# =============================================================================


class TestPeriodTable:
    """Table built for one base."""

    def test_base_3_shape(self, table3):
        assert table3.base == 3
        assert table3.period == 27
        assert table3.depths.shape == (27,)
        assert table3.num_runs == 14
        assert int(table3.lengths.sum()) == 27

    def test_base_3_depths(self, table3):
        np.testing.assert_array_equal(
            table3.depths,
            [2, 2, 1, 1, 1, 0, 2, 2, 1, 3, 3, 2, 2, 2, 1, 3, 3, 2, 3, 3, 2, 2, 2, 1, 3, 3, 2],
        )

    def test_wrapping_run_lookup(self, table3):
        """Indices 26, 0, 1 share one run."""
        expected = Neighborhood(26, 3, 2)
        assert table3.neighborhood_of(0) == expected
        assert table3.neighborhood_of(1) == expected
        assert table3.neighborhood_of(26) == expected
        assert table3.neighborhood_of(2) == Neighborhood(2, 3, 1)

    @pytest.mark.parametrize("base", [2, 3, 4, 5])
    def test_neighborhoods_match_segment(self, base):
        assert build_period_table(base).neighborhoods() == segment(base)

    @pytest.mark.parametrize("base", [2, 3, 4])
    def test_lookup_matches_streaming(self, base):
        table = build_period_table(base)
        for i in range(period(base)):
            assert table.neighborhood_of(i) == neighborhood_of(i, base)
            assert table.depth_of(i) == table.neighborhood_of(i).depth

    def test_reduction(self, table3):
        assert table3.neighborhood_of(27 * 10 ** 9 + 5) == table3.neighborhood_of(5)
        assert table3.depth_of(np.int64(32)) == 0

    def test_tri_values_base_2(self):
        np.testing.assert_array_equal(build_period_table(2).tri_values(), [1, 0, 0, 1])

    def test_tri_values_base_3(self, table3):
        np.testing.assert_array_equal(
            table3.tri_values(),
            [2, 2, 2, 2, 2, 0, 1, 1, 0, 1, 1, 2, 2, 2, 0, 1, 1, 0, 1, 1, 2, 2, 2, 0, 1, 1, 2],
        )

    def test_scan_lengths_start_with_wrapping_run(self, table3):
        assert table3.scan_lengths()[0] == 3
        assert table3.neighborhoods()[0] == Neighborhood(26, 3, 2)

    def test_arrays_read_only(self, table3):
        for arr in (table3.depths, table3.starts, table3.lengths):
            with pytest.raises(ValueError):
                arr[0] = 0

    def test_direct_construction_read_only(self):
        """Tables built without build_period_table are read-only too."""
        table = PeriodTable(
            base=2,
            period=4,
            depths=np.array([1, 0, 2, 1], dtype=np.uint8),
            starts=np.array([1, 2, 3], dtype=np.int64),
            lengths=np.array([1, 1, 2], dtype=np.int64),
        )
        for arr in (table.depths, table.starts, table.lengths):
            assert not arr.flags.writeable
            with pytest.raises(ValueError):
                arr[0] = 0

    def test_frozen(self, table3):
        with pytest.raises(AttributeError):
            table3.base = 4


# =============================================================================
# Errors
# =============================================================================


class TestPeriodTableErrors:
    """Limits and validation."""

    def test_default_limit_allows_base_8(self):
        assert period(8) <= DEFAULT_MAX_PERIOD

    def test_base_9_too_large_by_default(self):
        with pytest.raises(TableTooLarge):
            build_period_table(9)

    def test_custom_limit(self):
        with pytest.raises(TableTooLarge, match="max_period=100"):
            build_period_table(4, max_period=100)

    def test_overflow(self):
        with pytest.raises(PeriodOverflow):
            build_period_table(16, max_period=2 ** 70)

    def test_invalid_base(self):
        with pytest.raises(InvalidBase):
            build_period_table(1)

    def test_base_mismatch(self, table3):
        with pytest.raises(InvalidBase, match="built for base 3"):
            table3.check_base(4)

    def test_negative_index(self, table3):
        with pytest.raises(InvalidIndex):
            table3.neighborhood_of(-1)
