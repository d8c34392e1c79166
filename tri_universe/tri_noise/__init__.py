"""
tri_noise: Neighborhood segmentation and the trinoise projection.

Modules:
- neighborhoods.py: Streaming neighborhood lookup and the reference linear scan
- period_table.py: Immutable full-period table (build once, read many)
- projector.py: tri(), tri_code(), signature()
- frequencies.py: Full-period frequency sweep and conjecture checks
"""

from .neighborhoods import neighborhood_of, segment, segment_depths, successors
from .period_table import PeriodTable, build_period_table
from .projector import signature, tri, tri_code
from .frequencies import FrequencyReport, analyze, frequencies, verify_run_lengths

__all__ = [
    "neighborhood_of",
    "segment",
    "segment_depths",
    "successors",
    "PeriodTable",
    "build_period_table",
    "tri",
    "tri_code",
    "signature",
    "FrequencyReport",
    "analyze",
    "frequencies",
    "verify_run_lengths",
]
