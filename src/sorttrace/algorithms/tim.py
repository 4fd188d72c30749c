"""
Simplified tim sort: fixed-size runs sorted by insertion, then bottom-up
merging with a doubling block size.

Config:
    run_size : int >= 1, default 32
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from sorttrace.algorithms.insertion import insert_range
from sorttrace.algorithms.merge import merge_ranges
from sorttrace.trace import Number, Recorder, Trace

NAME = "Tim Sort"
STRATEGY = "Hybrid stable sorting algorithm (merge + insertion)"
DEFAULT_RUN_SIZE = 32

__all__ = ["NAME", "DEFAULT_RUN_SIZE", "sort"]


def sort(a: Sequence[Number], *, config: Optional[Dict[str, Any]] = None) -> Trace:
    run_size = _parse_run_size(config or {})
    rec = Recorder(a, NAME, STRATEGY)
    if rec.n > 1:
        _tim(rec, run_size)
    return rec.finish()


def _tim(rec: Recorder, run_size: int) -> None:
    n = rec.n

    for start in range(0, n, run_size):
        end = min(start + run_size - 1, n - 1)
        rec.step(
            f"Sorting run [{start}...{end}] with insertion sort",
            comparing=range(start, end + 1),
        )
        insert_range(rec, start, end)

    size = run_size
    while size < n:
        rec.step(f"Merging runs of size {size}")
        for start in range(0, n, size * 2):
            mid = start + size - 1
            end = min(start + size * 2 - 1, n - 1)
            if mid < end:
                merge_ranges(rec, start, mid, end)
        size *= 2


def _parse_run_size(config: Dict[str, Any]) -> int:
    val = config.get("run_size", DEFAULT_RUN_SIZE)
    if not isinstance(val, int) or isinstance(val, bool) or val < 1:
        raise ValueError(f"tim.config.run_size must be an integer >= 1; got {val!r}")
    return val
