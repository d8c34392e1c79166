"""
Neighborhood segmentation of the cyclic depth sequence.

The depth sequence depth(0), depth(1), ..., depth(N^N - 1) is cyclic:
index N^N - 1 is adjacent to index 0. A neighborhood is a maximal run
of adjacent indices with equal depth, so a run may wrap across the
boundary. In fact it always does: [N-1, ..., N-1] and [0, ..., 0] both
have depth N-1.

Provides:
- neighborhood_of(index, base): streaming lookup, no table (walks left
  and right from the index until the depth changes)
- successors(index, base): following indices that share the depth
- segment_depths(depths): reference linear scan over a depth sequence
- segment(base): full segmentation of one period via odometer enumeration

Run boundaries come from actual equal-depth adjacency only. The run
length conjecture (length in {1, N-1, N}) is checked separately by
frequencies.verify_run_lengths, never assumed here.
"""

from typing import List, Optional, Sequence

from tri_core.depth import depth, depth_of
from tri_core.index_space import check_base, iter_digit_arrays, period, reduce_index
from tri_core.types import Neighborhood

from .period_table import PeriodTable


# =============================================================================
# Streaming lookup
# =============================================================================


def neighborhood_of(index, base) -> Neighborhood:
    """
    Neighborhood containing index mod N^N, computed on demand.

    Walks left, then right, from the reduced index while the depth
    stays equal. Cost is proportional to the run length (at most N
    under the conjecture) and memory is O(N), so this works for any
    base whose period fits in 64 bits.

    Args:
        index: Non-negative integer
        base: Integer N >= 2

    Returns:
        Neighborhood(start, length, depth). If every index shared one
        depth the whole period would be a single run starting at 0.

    Raises:
        InvalidBase, InvalidIndex, PeriodOverflow

    Examples:
        >>> neighborhood_of(0, 3)
        Neighborhood(start=26, length=3, depth=2)
        >>> neighborhood_of(5, 3)
        Neighborhood(start=5, length=1, depth=0)
    """
    n = check_base(base)
    total = period(n)
    r = reduce_index(index, n)
    d = depth_of(r, n)

    left = 0
    while left < total - 1 and depth_of((r - left - 1) % total, n) == d:
        left += 1

    right = 0
    while left + right < total - 1 and depth_of((r + right + 1) % total, n) == d:
        right += 1

    length = left + right + 1
    if length == total:
        return Neighborhood(start=0, length=total, depth=d)
    return Neighborhood(start=(r - left) % total, length=length, depth=d)


def successors(index, base, table: Optional[PeriodTable] = None) -> int:
    """
    Number of indices after index mod N^N that share its depth.

    Counted up to the end of the containing neighborhood, so at a run
    start it equals tri() and adding it plus one to the index steps to
    the next run start.

    Args:
        index: Non-negative integer
        base: Integer N >= 2
        table: Prebuilt PeriodTable for this base (optional)

    Raises:
        InvalidBase, InvalidIndex, PeriodOverflow

    Examples:
        >>> [successors(i, 3) for i in range(7)]
        [1, 0, 2, 1, 0, 0, 1]
    """
    if table is not None:
        table.check_base(base)
        total = table.period
        nb = table.neighborhood_of(index)
    else:
        total = period(base)
        nb = neighborhood_of(index, base)
    r = reduce_index(index, base)
    return (nb.start + nb.length - 1 - r) % total


# =============================================================================
# Full-period segmentation
# =============================================================================


def segment_depths(depths: Sequence[int]) -> List[Neighborhood]:
    """
    Partition a cyclic depth sequence into maximal equal-depth runs.

    Algorithm:
    1. Find the first boundary s (depths[s-1] != depths[s], cyclically)
    2. Walk once around the cycle from s, closing a run at each change
    3. Rotate so the run containing position 0 comes first

    Args:
        depths: Depth of every reduced index, position = index

    Returns:
        Runs in scan order: the run containing index 0 first, then by
        ascending start. Lengths sum to len(depths) exactly.

    Raises:
        ValueError: If depths is empty
    """
    total = len(depths)
    if total == 0:
        raise ValueError("segment_depths requires a non-empty depth sequence")

    s = next((i for i in range(total) if depths[i - 1] != depths[i]), None)
    if s is None:
        return [Neighborhood(start=0, length=total, depth=int(depths[0]))]

    runs: List[Neighborhood] = []
    i = 0
    while i < total:
        start = (s + i) % total
        d = depths[start]
        length = 1
        while i + length < total and depths[(start + length) % total] == d:
            length += 1
        runs.append(Neighborhood(start=start, length=length, depth=int(d)))
        i += length

    # Last run ends at s-1; it holds index 0 unless s == 0
    if s != 0:
        runs.insert(0, runs.pop())
    return runs


def segment(base) -> List[Neighborhood]:
    """
    All neighborhoods of one period for base N, pure Python.

    Depths come from odometer enumeration (no per-index re-decoding).
    Prefer PeriodTable for repeated queries or bases above ~6.

    Raises:
        InvalidBase, PeriodOverflow
    """
    n = check_base(base)
    return segment_depths([depth(digits) for digits in iter_digit_arrays(n)])
