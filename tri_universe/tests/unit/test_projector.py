"""
Unit tests for tri_noise/projector.py.

Properties:
- Range: tri(i, N) in {0, N-2, N-1}
- Periodicity: tri(i, N) == tri(i + N^N, N)
- Streaming and table paths agree
- Base 2 collision between categories 0 and N-2 is preserved
- Invalid input fails fast instead of returning 0
"""

import pytest

from tri_core.errors import InvalidBase, InvalidIndex, PeriodOverflow
from tri_core.index_space import identity_index, period
from tri_noise.period_table import build_period_table
from tri_noise.projector import signature, tri, tri_code


TRI_BASE_3 = [2, 2, 2, 2, 2, 0, 1, 1, 0, 1, 1, 2, 2, 2, 0, 1, 1, 0, 1, 1, 2, 2, 2, 0, 1, 1, 2]


# =============================================================================
# tri
# =============================================================================


class TestTri:
    """Neighborhood length - 1."""

    def test_base_2_degenerate(self):
        """N-2 == 0 and N-1 == 1: every value lands in {0, 1}."""
        values = [tri(i, 2) for i in range(4)]
        assert values == [1, 0, 0, 1]
        assert set(values) <= {0, 1}

    def test_base_3_oracle(self):
        assert [tri(i, 3) for i in range(27)] == TRI_BASE_3

    @pytest.mark.parametrize("base", [3, 4, 5])
    def test_range(self, base):
        allowed = {0, base - 2, base - 1}
        table = build_period_table(base)
        for i in range(period(base)):
            assert tri(i, base, table) in allowed

    @pytest.mark.parametrize("base", [2, 3, 4, 5])
    def test_periodic(self, base):
        p = period(base)
        for i in range(p):
            assert tri(i, base) == tri(i + p, base) == tri(i + 3 * p, base)

    @pytest.mark.parametrize("base", [2, 3, 4])
    def test_table_matches_streaming(self, base):
        table = build_period_table(base)
        for i in range(period(base)):
            assert tri(i, base, table) == tri(i, base)

    def test_index_zero_is_top_value(self):
        for base in range(2, 12):
            assert tri(0, base) == base - 1

    def test_identity_is_zero(self):
        for base in range(2, 7):
            assert tri(identity_index(base), base) == 0

    def test_huge_index(self):
        i = 10 ** 50 + 17
        assert tri(i, 3) == TRI_BASE_3[i % 27]

    def test_streaming_beyond_table_limit(self):
        assert tri(987_654_321, 10) in {0, 8, 9}


class TestTriErrors:
    """Distinguishable errors, never a silent default."""

    def test_invalid_base(self):
        with pytest.raises(InvalidBase):
            tri(0, 1)
        with pytest.raises(InvalidBase):
            tri(0, 0)

    def test_invalid_index(self):
        with pytest.raises(InvalidIndex):
            tri(-1, 3)
        with pytest.raises(InvalidIndex):
            tri(2.5, 3)

    def test_invalid_index_with_table(self):
        table = build_period_table(3)
        with pytest.raises(InvalidIndex):
            tri(-1, 3, table)

    def test_table_for_other_base(self):
        table = build_period_table(3)
        with pytest.raises(InvalidBase):
            tri(0, 4, table)

    def test_overflow(self):
        with pytest.raises(PeriodOverflow):
            tri(0, 16)


# =============================================================================
# tri_code / signature
# =============================================================================


class TestTriCode:
    """0 -> 0, N-2 -> 1, N-1 -> 2."""

    def test_base_5(self):
        assert [tri_code(v, 5) for v in (0, 3, 4)] == [0, 1, 2]

    def test_base_2_zero_wins(self):
        assert tri_code(0, 2) == 0
        assert tri_code(1, 2) == 2

    def test_non_canonical_value(self):
        with pytest.raises(ValueError, match="not one of"):
            tri_code(2, 5)


class TestSignature:
    """Codes per neighborhood in scan order."""

    def test_base_3(self):
        assert signature(3) == [2, 2, 0, 1, 0, 1, 2, 0, 1, 0, 1, 2, 0, 1]

    def test_base_2(self):
        assert signature(2) == [2, 0, 0]

    @pytest.mark.parametrize("base,runs", [(3, 14), (4, 107), (5, 1094)])
    def test_one_code_per_neighborhood(self, base, runs):
        sig = signature(base)
        assert len(sig) == runs
        assert set(sig) <= {0, 1, 2}

    def test_accepts_prebuilt_table(self):
        table = build_period_table(4)
        assert signature(4, table) == signature(4)

    def test_table_for_other_base(self):
        with pytest.raises(InvalidBase):
            signature(4, build_period_table(3))
