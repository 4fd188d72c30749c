"""
Bubble sort.

Sweeps adjacent pairs and exchanges them when out of order. After pass `i`
the last `i + 1` positions hold their final values. A pass with no exchange
ends the run early.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from sorttrace.trace import Number, Recorder, Trace

NAME = "Bubble Sort"
STRATEGY = "Compare adjacent elements and swap if needed"

__all__ = ["NAME", "sort"]


def sort(a: Sequence[Number], *, config: Optional[Dict[str, Any]] = None) -> Trace:
    rec = Recorder(a, NAME, STRATEGY)
    if rec.n > 1:
        _bubble(rec)
    return rec.finish()


def _bubble(rec: Recorder) -> None:
    arr, n = rec.arr, rec.n
    for i in range(n - 1):
        settled = range(n - i, n)
        swapped = False
        for j in range(n - i - 1):
            rec.compare()
            rec.step(
                f"Comparing elements at positions {j} and {j + 1}: {arr[j]} vs {arr[j + 1]}",
                comparing=(j, j + 1),
                sorted=settled,
            )
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                rec.relocate()
                swapped = True
                rec.step(
                    f"Swapping {arr[j + 1]} and {arr[j]}",
                    swapping=(j, j + 1),
                    sorted=settled,
                )

        if not swapped:
            rec.step("No swaps needed - array is sorted!", sorted=range(n))
            return

        rec.step(
            f"Pass {i + 1} complete: {arr[n - i - 1]} is in its final position",
            sorted=range(n - i - 1, n),
        )
