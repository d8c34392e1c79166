"""
Depth: divergence of a digit array from the identity array.

The identity array's value at position i is i itself, so no identity
array is materialised; digit i is compared against i directly. This is
not a general Hamming distance.

Provides:
- depth(digits): positions with digits[i] != i
- aligned(digits): positions with digits[i] == i (N - depth)
- aligned_of(index, base): aligned positions of index mod N^N
- depth_of(index, base): depth of the digit array of index mod N^N
- depth_vector(indices, base): vectorised depth for a numpy index array
"""

from typing import Sequence

import numpy as np

from .index_space import check_base, to_digit_array
from .types import Depth


def depth(digits: Sequence[int]) -> Depth:
    """
    Count positions where the digit array differs from the identity.

    Args:
        digits: Well-formed digit array (MSD first)

    Returns:
        Depth in [0, len(digits)]

    Examples:
        >>> depth((0, 1, 2))
        0
        >>> depth((0, 0, 0))
        2
    """
    return Depth(sum(1 for i, d in enumerate(digits) if d != i))


def aligned(digits: Sequence[int]) -> int:
    """Count positions that match the identity array (N - depth)."""
    return len(digits) - depth(digits)


def aligned_of(index, base) -> int:
    """
    Aligned positions of index mod N^N (N - depth_of).

    Examples:
        >>> [aligned_of(i, 3) for i in range(8)]
        [1, 1, 2, 2, 2, 3, 1, 1]
    """
    return aligned(to_digit_array(index, base))


def depth_of(index, base) -> Depth:
    """
    Depth of index mod N^N.

    Raises:
        InvalidBase: If base < 2
        InvalidIndex: If index is negative or not an integer
        PeriodOverflow: If N^N exceeds the 64-bit range
    """
    return depth(to_digit_array(index, base))


def depth_vector(indices: np.ndarray, base) -> np.ndarray:
    """
    Depth of every reduced index in an int64 array.

    Digit k (MSD first) of v is (v // N^(N-1-k)) % N; it is compared
    against k for all indices at once, one position per pass.

    Args:
        indices: int64 array of reduced indices in [0, N^N)
        base: Integer N >= 2

    Returns:
        uint8 array of depths, same shape as indices
    """
    n = check_base(base)
    v = np.asarray(indices, dtype=np.int64)

    out = np.zeros(v.shape, dtype=np.uint8)
    place = 1
    # Walk from the least significant position (k = N-1) upward
    for k in range(n - 1, -1, -1):
        digit = (v // place) % n
        out += (digit != k).astype(np.uint8)
        place *= n
    return out
