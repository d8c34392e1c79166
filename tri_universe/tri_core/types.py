"""
Core type definitions for the trinoise sequence.

Digit arrays are most-significant digit first, so position k of a digit
array lines up with position k of the identity array [0, 1, ..., N-1].
"""

from dataclasses import dataclass
from typing import NewType, Tuple

# Digit array: N digits in [0, N-1], MSD first
DigitArray = Tuple[int, ...]

# Count of positions differing from the identity array, in [0, N]
Depth = NewType("Depth", int)

# Output of tri(): one of {0, N-2, N-1} while the run-length conjecture holds
TriValue = NewType("TriValue", int)

# Compact code for a TriValue: 0 -> 0, N-2 -> 1, N-1 -> 2
TriCode = NewType("TriCode", int)

# 64-bit hash from SHA-256
Hash64 = NewType("Hash64", int)


@dataclass(frozen=True, order=True)
class Neighborhood:
    """
    Maximal cyclic run of reduced indices sharing one depth.

    - start: First reduced index of the run (may be near the end of the
      period when the run wraps across N^N - 1 -> 0)
    - length: Number of indices in the run (>= 1)
    - depth: Depth shared by every index in the run
    """
    start: int
    length: int
    depth: int

    def __iter__(self):
        """Allow tuple unpacking: start, length, depth = nb"""
        return iter((self.start, self.length, self.depth))

    def indices(self, period: int) -> list[int]:
        """Reduced indices covered by this run, in scan order."""
        return [(self.start + k) % period for k in range(self.length)]

    def contains(self, reduced: int, period: int) -> bool:
        """True if the reduced index falls inside this (possibly wrapping) run."""
        return (reduced - self.start) % period < self.length

    def wraps(self, period: int) -> bool:
        """True if the run crosses the N^N - 1 -> 0 boundary."""
        return self.start + self.length > period
