"""
Full-period table for one base (build once, read many).

Provides:
- PeriodTable: depths of every reduced index plus the run boundaries of
  the cyclic depth sequence, held in read-only numpy arrays
- build_period_table(base, max_period): the only constructor

Algorithm:
1. Depth of every index in [0, N^N), vectorised in fixed-size chunks
2. Run starts: positions whose depth differs from the cyclic predecessor
   (np.roll handles the N^N - 1 -> 0 join)
3. Run lengths: gaps between consecutive starts, the last one wrapping
   back to the first start
4. Lookup: binary search over starts; an index before the first start
   belongs to the wrapping last run

A table is an explicit value owned by the caller. Nothing is cached at
module level; once built the arrays are flagged read-only and the
table can be shared by any number of readers without locking.
"""

import logging
from dataclasses import dataclass

import numpy as np

from tri_core.depth import depth_vector
from tri_core.errors import InvalidBase, TableTooLarge
from tri_core.index_space import check_base, check_index, period
from tri_core.types import Depth, Neighborhood, TriValue

logger = logging.getLogger(__name__)

# 8^8 = 16,777,216 indices: ~17 MB of depths plus run arrays
DEFAULT_MAX_PERIOD = 8 ** 8

# Indices decoded per vectorised pass
CHUNK_SIZE = 1 << 20


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True, eq=False)
class PeriodTable:
    """
    Immutable depth and neighborhood table for one base.

    - base: N
    - period: N^N
    - depths: uint8[period], depth of each reduced index
    - starts: int64[runs], run start indices, ascending
    - lengths: int64[runs], run lengths aligned with starts

    When starts[0] != 0 the last run wraps across N^N - 1 -> 0. The
    arrays are flagged read-only on construction.
    """
    base: int
    period: int
    depths: np.ndarray
    starts: np.ndarray
    lengths: np.ndarray

    def __post_init__(self):
        for arr in (self.depths, self.starts, self.lengths):
            arr.setflags(write=False)

    @property
    def num_runs(self) -> int:
        return int(self.starts.shape[0])

    def check_base(self, base) -> None:
        """Raise InvalidBase unless base is the one this table was built for."""
        n = check_base(base)
        if n != self.base:
            raise InvalidBase(f"Table built for base {self.base}, queried with base {n}")

    def reduce(self, index) -> int:
        return check_index(index) % self.period

    def run_index(self, index) -> int:
        """Position in starts/lengths of the run containing index mod N^N."""
        r = self.reduce(index)
        j = int(np.searchsorted(self.starts, r, side="right")) - 1
        # Before the first start: inside the wrapping last run
        return j if j >= 0 else self.num_runs - 1

    def depth_of(self, index) -> Depth:
        return Depth(int(self.depths[self.reduce(index)]))

    def neighborhood_of(self, index) -> Neighborhood:
        j = self.run_index(index)
        start = int(self.starts[j])
        return Neighborhood(start=start, length=int(self.lengths[j]), depth=int(self.depths[start]))

    def tri(self, index) -> TriValue:
        return TriValue(int(self.lengths[self.run_index(index)]) - 1)

    def scan_lengths(self) -> np.ndarray:
        """Run lengths in scan order: the run containing index 0 first."""
        if self.starts[0] == 0:
            return self.lengths
        return np.roll(self.lengths, 1)

    def neighborhoods(self) -> list[Neighborhood]:
        """All runs in scan order (run containing index 0 first)."""
        order = list(range(self.num_runs))
        if self.starts[0] != 0:
            order = order[-1:] + order[:-1]
        return [
            Neighborhood(
                start=int(self.starts[j]),
                length=int(self.lengths[j]),
                depth=int(self.depths[self.starts[j]]),
            )
            for j in order
        ]

    def tri_values(self) -> np.ndarray:
        """
        tri() of every reduced index, as an int64[period] array.

        Allocates a fresh (writable) array on each call.
        """
        values = np.repeat(self.lengths - 1, self.lengths)
        # values[0] belongs to starts[0]; shift so position == index
        return np.roll(values, int(self.starts[0]))


# =============================================================================
# Construction
# =============================================================================


def compute_depths(base: int, total: int) -> np.ndarray:
    """Depth of every index in [0, total), decoded in CHUNK_SIZE passes."""
    depths = np.empty(total, dtype=np.uint8)
    for lo in range(0, total, CHUNK_SIZE):
        hi = min(lo + CHUNK_SIZE, total)
        depths[lo:hi] = depth_vector(np.arange(lo, hi, dtype=np.int64), base)
    return depths


def find_runs(depths: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Run starts and lengths of a cyclic depth array.

    Returns:
        (starts, lengths) as int64 arrays, starts ascending. A constant
        array yields a single run (start 0, length len(depths)).
    """
    total = int(depths.shape[0])
    starts = np.flatnonzero(depths != np.roll(depths, 1)).astype(np.int64)
    if starts.size == 0:
        return np.zeros(1, dtype=np.int64), np.full(1, total, dtype=np.int64)

    lengths = np.diff(np.append(starts, starts[0] + total))
    return starts, lengths.astype(np.int64)


def build_period_table(base, max_period: int = DEFAULT_MAX_PERIOD) -> PeriodTable:
    """
    Build the full-period table for base N.

    Cost is O(N * N^N) vectorised integer work and O(N^N) memory, so the
    usable range is N <= 8 with the default limit. Larger bases should
    use the streaming functions (neighborhoods.neighborhood_of, tri with
    no table).

    Args:
        base: Integer N >= 2
        max_period: Refuse to materialise a period larger than this

    Returns:
        PeriodTable with read-only arrays

    Raises:
        InvalidBase: If base < 2
        PeriodOverflow: If N^N exceeds the 64-bit range
        TableTooLarge: If N^N > max_period
    """
    n = check_base(base)
    total = period(n)
    if total > max_period:
        raise TableTooLarge(
            f"Period {n}^{n} = {total} exceeds max_period={max_period}; "
            f"use streaming lookups or raise the limit"
        )

    logger.debug(f"Building period table: base={n} period={total}")
    depths = compute_depths(n, total)
    starts, lengths = find_runs(depths)

    logger.info(f"Period table built: base={n} period={total} runs={starts.size}")
    return PeriodTable(base=n, period=total, depths=depths, starts=starts, lengths=lengths)
