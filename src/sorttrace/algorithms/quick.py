"""
Quick sort with the Lomuto partition scheme (pivot = last element of range).

Partition step order:
    1. pivot announcement
    2. one comparing step per element-vs-pivot test, with an in-place
       exchange when `element <= pivot` (self-exchanges are skipped and not
       counted)
    3. the swap placing the pivot at its boundary (always recorded/counted)
    4. a step marking the boundary `sorted`

Already-sorted input drives this to O(n^2) comparisons; that is expected.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from sorttrace.trace import Number, Recorder, Trace

NAME = "Quick Sort"
STRATEGY = "Divide and conquer using pivot elements"

__all__ = ["NAME", "sort"]


def sort(a: Sequence[Number], *, config: Optional[Dict[str, Any]] = None) -> Trace:
    rec = Recorder(a, NAME, STRATEGY)
    if rec.n > 1:
        _quick(rec, 0, rec.n - 1)
    return rec.finish()


def _quick(rec: Recorder, low: int, high: int) -> None:
    if low >= high:
        return
    p = _partition(rec, low, high)
    rec.step(f"Pivot {rec.arr[p]} is now in correct position", sorted=(p,))
    _quick(rec, low, p - 1)
    _quick(rec, p + 1, high)


def _partition(rec: Recorder, low: int, high: int) -> int:
    arr = rec.arr
    pivot = arr[high]
    i = low - 1

    rec.step(f"Partitioning with pivot {pivot} at position {high}", pivot=high)

    for j in range(low, high):
        rec.compare()
        rec.step(f"Comparing {arr[j]} with pivot {pivot}", comparing=(j,), pivot=high)
        if arr[j] <= pivot:
            i += 1
            if i != j:
                arr[i], arr[j] = arr[j], arr[i]
                rec.relocate()
                rec.step(
                    f"Swapping {arr[j]} and {arr[i]}",
                    swapping=(i, j),
                    pivot=high,
                )

    boundary = i + 1
    arr[boundary], arr[high] = arr[high], arr[boundary]
    rec.relocate()
    rec.step(
        f"Placing pivot {pivot} at final position {boundary}",
        swapping=(boundary, high),
    )
    return boundary
