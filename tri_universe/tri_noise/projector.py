"""
The trinoise projection.

tri(index, base) = (length of the neighborhood containing index) - 1.

While the run-length conjecture holds (lengths in {1, N-1, N}) the
result is one of the canonical triple {0, N-2, N-1}, so no further
remapping is applied. If a base ever produced another length, the true
value comes back unchanged.

Base 2 is degenerate: N-2 == 0, so the triple collapses to {0, 1}. It
is computed by the same formula.
"""

from typing import List, Optional

import numpy as np

from tri_core.index_space import check_base
from tri_core.types import TriCode, TriValue

from .neighborhoods import neighborhood_of
from .period_table import PeriodTable, build_period_table


def tri(index, base, table: Optional[PeriodTable] = None) -> TriValue:
    """
    Trinoise value of index for base N.

    Periodic: tri(i, N) == tri(i + N^N, N).

    Args:
        index: Non-negative integer
        base: Integer N >= 2
        table: Prebuilt PeriodTable for this base (optional). Without
            one the neighborhood is found by a streaming walk.

    Returns:
        Neighborhood length - 1

    Raises:
        InvalidBase: If base < 2, or table was built for another base
        InvalidIndex: If index is negative or not an integer
        PeriodOverflow: If N^N exceeds the 64-bit range

    Examples:
        >>> [tri(i, 2) for i in range(4)]
        [1, 0, 0, 1]
    """
    if table is not None:
        table.check_base(base)
        return table.tri(index)
    return TriValue(neighborhood_of(index, base).length - 1)


def tri_code(value: int, base) -> TriCode:
    """
    Compact code of a canonical value: 0 -> 0, N-2 -> 1, N-1 -> 2.

    0 is tested first, so at base 2 (where N-2 == 0) it maps to 0.

    Raises:
        InvalidBase: If base < 2
        ValueError: If value is not in {0, N-2, N-1}
    """
    n = check_base(base)
    if value == 0:
        return TriCode(0)
    if value == n - 2:
        return TriCode(1)
    if value == n - 1:
        return TriCode(2)
    raise ValueError(f"Value {value} is not one of 0, {n - 2}, {n - 1} for base {n}")


def signature(base, table: Optional[PeriodTable] = None) -> List[int]:
    """
    Tri codes of every neighborhood of one period, in scan order.

    Scan order starts with the neighborhood containing index 0 (which
    wraps in from the end of the period) and continues by ascending
    start.

    Args:
        base: Integer N >= 2
        table: Prebuilt PeriodTable for this base (built if omitted)

    Raises:
        InvalidBase, PeriodOverflow, TableTooLarge
        ValueError: If some neighborhood length is outside {1, N-1, N}

    Examples:
        >>> signature(3)
        [2, 2, 0, 1, 0, 1, 2, 0, 1, 0, 1, 2, 0, 1]
    """
    n = check_base(base)
    if table is None:
        table = build_period_table(n)
    else:
        table.check_base(n)

    values = table.scan_lengths() - 1
    codes = np.full(values.shape, -1, dtype=np.int64)
    codes[values == n - 1] = 2
    codes[values == n - 2] = 1
    codes[values == 0] = 0

    bad = np.unique(values[codes < 0])
    if bad.size:
        raise ValueError(f"Non-canonical tri values for base {n}: {bad.tolist()}")
    return codes.tolist()
