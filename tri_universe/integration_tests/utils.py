"""
Utility functions for trinoise sweep runs.

Provides:
- Base list parsing
- Receipt generation
- Summary statistics
- Logging setup
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


def parse_bases(text: Optional[str], max_base: int) -> List[int]:
    """
    Parse a comma-separated base list ("3,4,6") or fall back to 2..max_base.

    Raises:
        ValueError: If an entry is not an integer
    """
    if not text:
        return list(range(2, max_base + 1))
    return [int(part) for part in text.split(",") if part.strip()]


def setup_logger(name: str, log_file: Path, level=logging.INFO) -> logging.Logger:
    """
    Setup logger for sweep runs.

    The library loggers (tri_core, tri_noise) get the same file and
    console handlers, so table builds and conjecture warnings land in
    the run log and on the console in the run format.

    Args:
        name: Logger name
        log_file: Path to log file
        level: Logging level

    Returns:
        Configured logger
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # Clear any existing handlers
    logger.handlers = []

    file_handler = logging.FileHandler(log_file, mode="w")
    file_handler.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    for lib in ("tri_core", "tri_noise"):
        lib_logger = logging.getLogger(lib)
        lib_logger.setLevel(level)
        lib_logger.handlers = [file_handler, console_handler]

    return logger


def build_receipt(
    base: int,
    report: Optional[Dict[str, Any]] = None,
    signature_hash: Optional[int] = None,
    elapsed_s: Optional[float] = None,
    status: str = "PASS",
    error: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a receipt dictionary for one base.

    Args:
        base: Base N
        report: FrequencyReport.to_dict()
        signature_hash: hash64 of the base's signature
        elapsed_s: Wall time for table build + analysis
        status: "PASS" or "FAIL"
        error: Error message if status is FAIL

    Returns:
        Receipt dictionary
    """
    receipt = {
        "base": base,
        "timestamp": datetime.now().isoformat(),
        "status": status,
    }

    if report is not None:
        receipt["report"] = report

    if signature_hash is not None:
        receipt["signature_hash"] = signature_hash

    if elapsed_s is not None:
        receipt["elapsed_s"] = round(elapsed_s, 4)

    if error is not None:
        receipt["error"] = error

    return receipt


def save_receipt(receipt: Dict[str, Any], output_dir: Path) -> Path:
    """
    Save receipt to JSON file (output_dir/base_<N>.json).

    Returns:
        Path of the written file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    receipt_file = output_dir / f"base_{receipt['base']}.json"

    with open(receipt_file, "w") as f:
        json.dump(receipt, f, indent=2)

    return receipt_file


def compute_summary_stats(receipts: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Compute summary statistics from a list of receipts.

    Args:
        receipts: List of receipt dictionaries

    Returns:
        Summary statistics dictionary
    """
    total = len(receipts)
    passed = sum(1 for r in receipts if r["status"] == "PASS")

    stats = {
        "total_bases": total,
        "passed": passed,
        "failed": total - passed,
        "pass_rate": passed / total if total > 0 else 0.0,
    }

    reports = [r["report"] for r in receipts if "report" in r]
    if reports:
        stats["run_length_conjecture"] = {
            str(rep["base"]): rep["run_lengths_hold"]
            for rep in reports
            if rep["conjecture_applicable"]
        }
        stats["ratio_low_to_top"] = {
            str(rep["base"]): rep["ratio_low_to_top"] for rep in reports
        }

    return stats
