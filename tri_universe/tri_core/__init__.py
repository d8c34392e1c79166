"""
tri_core: Core primitives for the trinoise sequence.

Provides:
- types: DigitArray, Depth, TriValue, Neighborhood, and other fundamental types
- errors: InvalidBase, InvalidIndex, PeriodOverflow, TableTooLarge
- index_space: Period reduction and base-N digit arrays (MSD first)
- depth: Divergence from the identity array
- fingerprint: Deterministic hashing (SHA-256) for receipts
"""

from .errors import InvalidBase, InvalidIndex, PeriodOverflow, TableTooLarge, TrinoiseError
from .index_space import period, reduce_index, to_digit_array, from_digit_array
from .depth import depth, depth_of

__all__ = [
    "TrinoiseError",
    "InvalidBase",
    "InvalidIndex",
    "PeriodOverflow",
    "TableTooLarge",
    "period",
    "reduce_index",
    "to_digit_array",
    "from_digit_array",
    "depth",
    "depth_of",
]
