"""Selection sort: repeatedly select the minimum of the unsorted suffix."""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from sorttrace.trace import Number, Recorder, Trace

NAME = "Selection Sort"
STRATEGY = "Find minimum element and place it at the beginning"

__all__ = ["NAME", "sort"]


def sort(a: Sequence[Number], *, config: Optional[Dict[str, Any]] = None) -> Trace:
    rec = Recorder(a, NAME, STRATEGY)
    if rec.n > 1:
        _selection(rec)
    return rec.finish()


def _selection(rec: Recorder) -> None:
    arr, n = rec.arr, rec.n
    for i in range(n - 1):
        prefix = range(i)
        min_idx = i
        rec.step(
            f"Finding minimum element from position {i} onwards",
            comparing=(i,),
            sorted=prefix,
        )

        for j in range(i + 1, n):
            rec.compare()
            rec.step(
                f"Comparing current minimum {arr[min_idx]} with {arr[j]}",
                comparing=(min_idx, j),
                sorted=prefix,
            )
            if arr[j] < arr[min_idx]:
                min_idx = j
                rec.step(
                    f"New minimum found: {arr[min_idx]} at position {min_idx}",
                    comparing=(min_idx,),
                    sorted=prefix,
                )

        if min_idx != i:
            arr[i], arr[min_idx] = arr[min_idx], arr[i]
            rec.relocate()
            rec.step(
                f"Swapping {arr[min_idx]} with {arr[i]}",
                swapping=(i, min_idx),
                sorted=range(i + 1),
            )
        else:
            rec.step(
                f"{arr[i]} is already in place at position {i}",
                sorted=range(i + 1),
            )
