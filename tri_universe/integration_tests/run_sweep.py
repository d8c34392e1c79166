#!/usr/bin/env python3
"""
Sweep: build a period table per base and check the trinoise conjectures.

For each base:
- Build the PeriodTable (depths + cyclic neighborhoods)
- Compute per-index and per-neighborhood frequencies
- Check the partition (runs tile [0, N^N))
- Check run lengths in {1, N-1, N} and the frequency conjectures
- Hash the signature for cross-run comparison

A base PASSES when the partition is exact and per-index counts sum to
N^N. Conjecture results are recorded in the receipt and logged; they do
not fail a base.

Logs:
- Period and neighborhood count per base
- Per-index and per-neighborhood counts
- Conjecture warnings

Usage:
    python run_sweep.py --max-base 7
    python run_sweep.py --bases 3,5,8 --max-period 16777216
"""

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tri_core.errors import TrinoiseError
from tri_core.fingerprint import signature_hash
from tri_noise.frequencies import analyze
from tri_noise.period_table import DEFAULT_MAX_PERIOD, build_period_table
from tri_noise.projector import signature

from utils import (
    build_receipt,
    compute_summary_stats,
    parse_bases,
    save_receipt,
    setup_logger,
)


def sweep_base(base: int, max_period: int, logger) -> Dict[str, Any]:
    """Build, analyze and receipt one base. Errors become FAIL receipts."""
    logger.info(f"\n--- Base {base} ---")
    t0 = time.perf_counter()

    try:
        table = build_period_table(base, max_period=max_period)
        report = analyze(base, table)
    except TrinoiseError as e:
        logger.error(f"Base {base}: {type(e).__name__}: {e}")
        return build_receipt(base, status="FAIL", error=f"{type(e).__name__}: {e}")

    sig_hash = None
    if report.run_lengths_hold:
        sig_hash = signature_hash(base, signature(base, table))

    elapsed = time.perf_counter() - t0
    ok = report.partition_ok and sum(report.counts.values()) == report.period

    logger.info(
        f"Base {base}: neighborhoods={report.num_neighborhoods} "
        f"nb_counts={report.neighborhood_counts} "
        f"ratio={report.ratio_low_to_top} (expected -> {report.expected_ratio}) "
        f"in {elapsed:.3f}s"
    )

    return build_receipt(
        base,
        report=report.to_dict(),
        signature_hash=sig_hash,
        elapsed_s=elapsed,
        status="PASS" if ok else "FAIL",
        error=None if ok else "partition or count mismatch",
    )


def main():
    parser = argparse.ArgumentParser(description="Trinoise frequency sweep")
    parser.add_argument("--bases", type=str, default=None,
                        help="Comma-separated bases (default: 2..max-base)")
    parser.add_argument("--max-base", type=int, default=7, help="Largest base when --bases is omitted")
    parser.add_argument("--max-period", type=int, default=DEFAULT_MAX_PERIOD,
                        help="Refuse tables larger than this many indices")
    parser.add_argument("--output-dir", type=Path, default=Path(__file__).parent / "receipts" / "sweep",
                        help="Directory for JSON receipts")
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"],
                        help="Log level for the run log")
    args = parser.parse_args()

    log_file = Path(__file__).parent / "logs" / "sweep.log"
    logger = setup_logger("sweep", log_file, level=args.log_level)

    bases = parse_bases(args.bases, args.max_base)

    logger.info("=" * 80)
    logger.info(f"Trinoise sweep: bases={bases} max_period={args.max_period}")
    logger.info("=" * 80)

    receipts = []
    for base in bases:
        receipt = sweep_base(base, args.max_period, logger)
        save_receipt(receipt, args.output_dir)
        receipts.append(receipt)

    summary = compute_summary_stats(receipts)
    summary_file = args.output_dir / "summary.json"
    with open(summary_file, "w") as f:
        json.dump(summary, f, indent=2)

    logger.info("=" * 80)
    logger.info(f"Passed {summary['passed']}/{summary['total_bases']} bases")
    logger.info(f"Summary written to {summary_file}")

    return 0 if summary["failed"] == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
