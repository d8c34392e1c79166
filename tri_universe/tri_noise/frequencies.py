"""
Frequency analysis over one full period (diagnostic only; tri() never
depends on it).

Provides:
- frequencies(base): per-index counts of each tri value
- verify_run_lengths(table): neighborhoods whose length is outside {1, N-1, N}
- check_partition(table): runs tile [0, N^N) with no gaps or overlaps
- analyze(base): FrequencyReport with counts, ratios and conjecture flags

Two counts are reported:
- counts: how many INDICES map to each value (sums to N^N)
- neighborhood_counts: how many NEIGHBORHOODS have length value + 1

The conjectures from the construction refer to neighborhood counts:
equal frequency of 0 and N-2 for N > 2, and count(0) / count(N-1)
approaching N-2 as N grows. Both are computed from the data and
reported as flags and ratios. Nothing here asserts them.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

import numpy as np

from tri_core.index_space import check_base
from tri_core.types import Neighborhood

from .period_table import PeriodTable, build_period_table

logger = logging.getLogger(__name__)


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True)
class FrequencyReport:
    """
    Full-period statistics for one base.

    Ratios are None when the denominator is zero. equal_frequency is
    None for base 2, where the two low categories coincide.
    """
    base: int
    period: int
    counts: Dict[int, int]                  # tri value -> number of indices
    neighborhood_counts: Dict[int, int]     # tri value -> number of neighborhoods
    num_neighborhoods: int
    partition_ok: bool
    run_length_violations: int              # neighborhoods outside {1, N-1, N}
    conjecture_applicable: bool             # N > 2
    equal_frequency: Optional[bool]         # nb(0) == nb(N-2)
    ratio_low_to_top: Optional[float]       # nb(0) / nb(N-1)
    ratio_mid_to_top: Optional[float]       # nb(N-2) / nb(N-1)

    @property
    def run_lengths_hold(self) -> bool:
        return self.run_length_violations == 0

    @property
    def expected_ratio(self) -> int:
        """Conjectured limit of the ratios as N grows."""
        return self.base - 2

    def to_dict(self) -> dict:
        """JSON-ready dict (int keys become strings)."""
        d = asdict(self)
        d["counts"] = {str(k): v for k, v in self.counts.items()}
        d["neighborhood_counts"] = {str(k): v for k, v in self.neighborhood_counts.items()}
        d["run_lengths_hold"] = self.run_lengths_hold
        d["expected_ratio"] = self.expected_ratio
        return d


# =============================================================================
# Helpers
# =============================================================================


def _resolve_table(base, table: Optional[PeriodTable]) -> PeriodTable:
    n = check_base(base)
    if table is None:
        return build_period_table(n)
    table.check_base(n)
    return table


def _canonical_keys(n: int) -> Dict[int, int]:
    # At base 2 the keys 0 and N-2 coincide
    return {v: 0 for v in (0, n - 2, n - 1)}


def _ratio(num: int, den: int) -> Optional[float]:
    return num / den if den else None


# =============================================================================
# Counting
# =============================================================================


def frequencies(base, table: Optional[PeriodTable] = None) -> Dict[int, int]:
    """
    Number of indices in [0, N^N) for which tri() yields each value.

    Keys 0, N-2 and N-1 are always present (zero if unseen). Any other
    observed value is included as well, so the counts always sum to N^N.

    Args:
        base: Integer N >= 2
        table: Prebuilt PeriodTable for this base (built if omitted)

    Raises:
        InvalidBase, PeriodOverflow, TableTooLarge

    Examples:
        >>> frequencies(3)
        {0: 5, 1: 10, 2: 12}
    """
    table = _resolve_table(base, table)

    result = _canonical_keys(table.base)
    lengths, runs = np.unique(table.lengths, return_counts=True)
    for length, count in zip(lengths.tolist(), runs.tolist()):
        # Each run of this length contributes `length` indices
        result[length - 1] = result.get(length - 1, 0) + length * count
    return result


def neighborhood_frequencies(base, table: Optional[PeriodTable] = None) -> Dict[int, int]:
    """
    Number of neighborhoods with each tri value (length - 1).

    Examples:
        >>> neighborhood_frequencies(5)
        {0: 469, 3: 469, 4: 156}
    """
    table = _resolve_table(base, table)

    result = _canonical_keys(table.base)
    lengths, runs = np.unique(table.lengths, return_counts=True)
    for length, count in zip(lengths.tolist(), runs.tolist()):
        result[length - 1] = result.get(length - 1, 0) + count
    return result


# =============================================================================
# Verification
# =============================================================================


def verify_run_lengths(table: PeriodTable) -> List[Neighborhood]:
    """
    Neighborhoods whose length is not in {1, N-1, N}.

    An empty list means the run-length conjecture holds for this base.
    """
    n = table.base
    bad = np.flatnonzero(~np.isin(table.lengths, (1, n - 1, n)))
    return [
        Neighborhood(
            start=int(table.starts[j]),
            length=int(table.lengths[j]),
            depth=int(table.depths[table.starts[j]]),
        )
        for j in bad.tolist()
    ]


def check_partition(table: PeriodTable) -> bool:
    """
    True if the runs tile [0, N^N) exactly once.

    Every length is positive, consecutive runs abut, and the last run
    ends (cyclically) where the first begins.
    """
    starts, lengths = table.starts, table.lengths
    if starts.size == 0 or np.any(lengths < 1):
        return False
    if int(lengths.sum()) != table.period:
        return False
    ends = (starts + lengths) % table.period
    return bool(np.array_equal(ends, np.roll(starts, -1)))


# =============================================================================
# Report
# =============================================================================


def analyze(base, table: Optional[PeriodTable] = None) -> FrequencyReport:
    """
    Sweep one period and report counts, ratios and conjecture flags.

    Conjecture failures are logged as warnings; the report still carries
    the true values.

    Raises:
        InvalidBase, PeriodOverflow, TableTooLarge
    """
    table = _resolve_table(base, table)
    n = table.base

    counts = frequencies(n, table)
    nb_counts = neighborhood_frequencies(n, table)
    violations = verify_run_lengths(table)
    applicable = n > 2

    low, mid, top = nb_counts[0], nb_counts[n - 2], nb_counts[n - 1]
    report = FrequencyReport(
        base=n,
        period=table.period,
        counts=counts,
        neighborhood_counts=nb_counts,
        num_neighborhoods=table.num_runs,
        partition_ok=check_partition(table),
        run_length_violations=len(violations),
        conjecture_applicable=applicable,
        equal_frequency=(low == mid) if applicable else None,
        ratio_low_to_top=_ratio(low, top),
        ratio_mid_to_top=_ratio(mid, top),
    )

    logger.info(
        f"Base {n}: period={table.period} neighborhoods={table.num_runs} "
        f"counts={counts} neighborhood_counts={nb_counts}"
    )
    if not report.partition_ok:
        logger.warning(f"Base {n}: neighborhoods do not tile the period")
    if applicable and violations:
        logger.warning(
            f"Base {n}: {len(violations)} neighborhoods outside {{1, {n - 1}, {n}}}, "
            f"first={violations[0]}"
        )
    if applicable and not report.equal_frequency:
        logger.warning(f"Base {n}: nb(0)={low} != nb({n - 2})={mid}")

    return report
