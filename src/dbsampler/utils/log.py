"""Console progress logging, silenced with ``quiet=True``."""

from __future__ import annotations

import sys
import time


def _elapsed(start_time: float | None) -> str:
    if start_time is None:
        return ""
    return f" in {time.perf_counter() - start_time:.2f}s"


def _write(message: str) -> None:
    print(message, file=sys.stderr, flush=True)


def log_section(method: str, target: str, *, quiet: bool = False) -> None:
    """Announce a top-level operation on a target."""
    if not quiet:
        _write(f"\n[{method}] {target}")


def log_start(message: str, *, quiet: bool = False) -> None:
    """Log the start of a step."""
    if not quiet:
        _write(f"  → {message}")


def log_done(
    message: str, *, quiet: bool = False, start_time: float | None = None
) -> None:
    """Log a finished step, with elapsed time if a start time is given."""
    if not quiet:
        _write(f"  ✓ {message}{_elapsed(start_time)}")


def log_warn(message: str, *, quiet: bool = False) -> None:
    """Log a non-fatal problem."""
    if not quiet:
        _write(f"  ⚠ {message}")


def log_summary(
    nb_tables: int,
    nb_skipped: int,
    *,
    quiet: bool = False,
    start_time: float | None = None,
) -> None:
    """Log the number of sampled and skipped tables."""
    if quiet:
        return
    summary = f"{nb_tables} table(s) sampled"
    if nb_skipped:
        summary += f", {nb_skipped} skipped"
    _write(f"→ {summary}{_elapsed(start_time)}")
