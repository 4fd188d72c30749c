"""
Insertion sort.

`insert_range` is the shift-based routine shared with tim sort. Counting
rules:
- every `arr[j] > key` test is one comparison, including the failing test
  that stops the shift (no test happens once `j` runs off the range);
- every rightward shift is one swap;
- dropping the key into its slot is not a swap.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from sorttrace.trace import Number, Recorder, Trace

NAME = "Insertion Sort"
STRATEGY = "Build sorted array one element at a time"

__all__ = ["NAME", "sort", "insert_range"]


def sort(a: Sequence[Number], *, config: Optional[Dict[str, Any]] = None) -> Trace:
    rec = Recorder(a, NAME, STRATEGY)
    if rec.n > 1:
        insert_range(rec, 0, rec.n - 1)
    return rec.finish()


def insert_range(rec: Recorder, left: int, right: int) -> None:
    """Insertion-sort `rec.arr[left..right]` (inclusive) in place."""
    arr = rec.arr
    for i in range(left + 1, right + 1):
        key = arr[i]
        prefix = range(left, i)
        j = i - 1
        rec.step(
            f"Inserting element {key} into sorted portion",
            comparing=(i,),
            sorted=prefix,
        )

        while j >= left:
            rec.compare()
            if not arr[j] > key:
                rec.step(
                    f"{arr[j]} is not greater than {key}, stop shifting",
                    comparing=(j, j + 1),
                    sorted=prefix,
                )
                break
            rec.step(
                f"Comparing {arr[j]} with {key}: moving {arr[j]} one position ahead",
                comparing=(j, j + 1),
                sorted=prefix,
            )
            arr[j + 1] = arr[j]
            rec.relocate()
            rec.step(
                f"Moved {arr[j + 1]} to position {j + 1}",
                swapping=(j, j + 1),
                sorted=prefix,
            )
            j -= 1

        arr[j + 1] = key
        rec.step(
            f"Placed {key} at position {j + 1}",
            sorted=range(left, i + 1),
        )
