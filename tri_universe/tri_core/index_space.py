"""
Index space: period reduction and base-N digit arrays.

Provides:
- period(base): N^N, checked against the 64-bit index width
- reduce_index(index, base): index mod N^N
- to_digit_array / from_digit_array: MSD-first, zero-padded to N digits
- identity_array / identity_index: the zero-depth reference point
- iter_digit_arrays(base): odometer enumeration in counting order

Convention:
    Digit arrays are most-significant digit first. Position k of the
    array is compared against position k of the identity array
    [0, 1, ..., N-1]. Under this convention the identity array is NOT
    index 0; it is index sum(k * N^(N-1-k)), e.g. 5 for N=3.

All functions are pure. Invalid input fails fast with InvalidBase /
InvalidIndex / PeriodOverflow before anything is computed.
"""

import operator
from typing import Iterator, Sequence

import numpy as np

from .errors import InvalidBase, InvalidIndex, PeriodOverflow
from .types import DigitArray

# Indices and tables are int64; N^N must fit
MAX_PERIOD = int(np.iinfo(np.int64).max)


# =============================================================================
# Validation
# =============================================================================


def check_base(base) -> int:
    """
    Validate a base and return it as a plain int.

    Raises:
        InvalidBase: If base is not an integer or is < 2
    """
    if isinstance(base, bool):
        raise InvalidBase(f"Base must be an integer >= 2, got {base!r}")
    try:
        value = operator.index(base)
    except TypeError:
        raise InvalidBase(f"Base must be an integer >= 2, got {base!r}") from None
    if value < 2:
        raise InvalidBase(f"Base must be an integer >= 2, got {value}")
    return value


def check_index(index) -> int:
    """
    Validate a natural-number index and return it as a plain int.

    Accepts Python and numpy integers. Booleans, floats and negatives
    are rejected.

    Raises:
        InvalidIndex: If index is negative or not an integer
    """
    if isinstance(index, bool):
        raise InvalidIndex(f"Index must be a non-negative integer, got {index!r}")
    try:
        value = operator.index(index)
    except TypeError:
        raise InvalidIndex(f"Index must be a non-negative integer, got {index!r}") from None
    if value < 0:
        raise InvalidIndex(f"Index must be a non-negative integer, got {value}")
    return value


# =============================================================================
# Period
# =============================================================================


def period(base) -> int:
    """
    Number of distinct digit arrays for base N, i.e. N^N.

    The product is accumulated one factor at a time and checked against
    MAX_PERIOD at every step, so an oversized base is rejected without
    materialising N^N.

    Args:
        base: Integer N >= 2

    Returns:
        N^N

    Raises:
        InvalidBase: If base < 2
        PeriodOverflow: If N^N > MAX_PERIOD (first happens at N = 16)

    Examples:
        >>> period(2), period(3), period(8)
        (4, 27, 16777216)
    """
    n = check_base(base)
    result = 1
    for _ in range(n):
        result *= n
        if result > MAX_PERIOD:
            raise PeriodOverflow(
                f"Period {n}^{n} exceeds the 64-bit index range ({MAX_PERIOD})"
            )
    return result


def reduce_index(index, base) -> int:
    """
    Reduce a natural-number index into [0, N^N).

    Indices congruent modulo N^N are equivalent everywhere in trinoise.
    """
    n = check_base(base)
    i = check_index(index)
    return i % period(n)


# =============================================================================
# Digit arrays
# =============================================================================


def to_digit_array(index, base) -> DigitArray:
    """
    Base-N digits of index mod N^N, zero-padded to N digits, MSD first.

    Args:
        index: Non-negative integer (any size)
        base: Integer N >= 2

    Returns:
        Tuple of N digits in [0, N-1]

    Raises:
        InvalidBase: If base < 2
        InvalidIndex: If index is negative or not an integer

    Examples:
        >>> to_digit_array(5, 3)
        (0, 1, 2)
        >>> to_digit_array(27 + 5, 3)
        (0, 1, 2)
    """
    n = check_base(base)
    v = reduce_index(index, n)

    digits = [0] * n
    for pos in range(n - 1, -1, -1):
        v, digits[pos] = divmod(v, n)
    return tuple(digits)


def from_digit_array(digits: Sequence[int], base) -> int:
    """
    Evaluate an MSD-first digit array back into its reduced index.

    Inverse of to_digit_array on [0, N^N).

    Raises:
        InvalidBase: If base < 2
        ValueError: If the array does not have exactly N digits in [0, N-1]
    """
    n = check_base(base)
    if len(digits) != n:
        raise ValueError(f"Digit array must have {n} digits, got {len(digits)}")

    value = 0
    for d in digits:
        if not 0 <= d < n:
            raise ValueError(f"Digit {d} out of range for base {n}")
        value = value * n + d
    return value


def identity_array(base) -> DigitArray:
    """The identity array [0, 1, ..., N-1] (depth 0)."""
    n = check_base(base)
    return tuple(range(n))


def identity_index(base) -> int:
    """
    Reduced index whose digit array is the identity array.

    Examples:
        >>> identity_index(2), identity_index(3), identity_index(4)
        (1, 5, 27)
    """
    n = check_base(base)
    return from_digit_array(identity_array(n), n)


def iter_digit_arrays(base) -> Iterator[DigitArray]:
    """
    Enumerate all N^N digit arrays in counting order (index 0 first).

    Odometer increment: each step bumps the last digit and carries
    leftward, which is O(1) amortised instead of re-decoding every
    index from scratch.

    Raises:
        InvalidBase, PeriodOverflow: As for period()
    """
    n = check_base(base)
    total = period(n)

    digits = [0] * n
    for _ in range(total):
        yield tuple(digits)
        pos = n - 1
        while pos >= 0:
            digits[pos] += 1
            if digits[pos] < n:
                break
            digits[pos] = 0
            pos -= 1
