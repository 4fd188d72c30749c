"""
Top-down merge sort.

`merge_ranges` is shared with tim sort. It copies both halves before writing
(the copies travel with each step as `auxiliary`), counts one comparison per
head-to-head test and one swap per element written back, and takes the left
element on ties so equal values keep their input order.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from sorttrace.trace import Number, Recorder, Trace

NAME = "Merge Sort"
STRATEGY = "Divide array into smaller subarrays and merge them"

__all__ = ["NAME", "sort", "merge_ranges"]


def sort(a: Sequence[Number], *, config: Optional[Dict[str, Any]] = None) -> Trace:
    rec = Recorder(a, NAME, STRATEGY)
    if rec.n > 1:
        _merge_sort(rec, 0, rec.n - 1)
    return rec.finish()


def _merge_sort(rec: Recorder, left: int, right: int) -> None:
    if left >= right:
        return
    mid = (left + right) // 2
    _merge_sort(rec, left, mid)
    _merge_sort(rec, mid + 1, right)
    merge_ranges(rec, left, mid, right)


def merge_ranges(rec: Recorder, left: int, mid: int, right: int) -> None:
    """Merge the sorted runs `arr[left..mid]` and `arr[mid+1..right]`."""
    arr = rec.arr
    left_half = tuple(arr[left:mid + 1])
    right_half = tuple(arr[mid + 1:right + 1])
    halves = (left_half, right_half)

    rec.step(
        f"Merging subarrays [{left}...{mid}] and [{mid + 1}...{right}]",
        comparing=range(left, right + 1),
        auxiliary=halves,
    )

    i = j = 0
    k = left
    while i < len(left_half) and j < len(right_half):
        rec.compare()
        if left_half[i] <= right_half[j]:
            arr[k] = left_half[i]
            i += 1
            why = f"{arr[k]} <= {right_half[j]}"
        else:
            arr[k] = right_half[j]
            j += 1
            why = f"{arr[k]} < {left_half[i]}"
        rec.relocate()
        rec.step(
            f"Placing {arr[k]} at position {k} ({why})",
            swapping=(k,),
            auxiliary=halves,
        )
        k += 1

    for value in left_half[i:] + right_half[j:]:
        arr[k] = value
        rec.relocate()
        rec.step(
            f"Placing remaining {value} at position {k}",
            swapping=(k,),
            auxiliary=halves,
        )
        k += 1

    rec.step(
        f"Merged subarray [{left}...{right}]",
        sorted=range(left, right + 1),
    )
