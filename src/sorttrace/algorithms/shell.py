"""
Shell sort with the halving gap sequence n//2, n//4, ..., 1.

Each gap phase is a gapped insertion sort and follows the insertion-sort
counting rules: one comparison per `arr[j - gap] > temp` test, one swap per
shift.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from sorttrace.trace import Number, Recorder, Trace

NAME = "Shell Sort"
STRATEGY = "Use gap sequence to sort subarrays"

__all__ = ["NAME", "sort"]


def sort(a: Sequence[Number], *, config: Optional[Dict[str, Any]] = None) -> Trace:
    rec = Recorder(a, NAME, STRATEGY)
    if rec.n > 1:
        _shell(rec)
    return rec.finish()


def _shell(rec: Recorder) -> None:
    arr, n = rec.arr, rec.n
    gap = n // 2
    while gap > 0:
        rec.step(f"Using gap of {gap} to sort subarrays")

        for i in range(gap, n):
            temp = arr[i]
            j = i
            rec.step(f"Inserting element {temp} using gap {gap}", comparing=(i,))

            while j >= gap:
                rec.compare()
                if not arr[j - gap] > temp:
                    rec.step(
                        f"Comparing {arr[j - gap]} with {temp} (gap {gap}): no move needed",
                        comparing=(j - gap, j),
                    )
                    break
                rec.step(
                    f"Comparing {arr[j - gap]} with {temp} (gap {gap})",
                    comparing=(j, j - gap),
                )
                arr[j] = arr[j - gap]
                rec.relocate()
                j -= gap
                rec.step(
                    f"Moving {arr[j + gap]} to position {j + gap}",
                    swapping=(j + gap, j),
                )

            arr[j] = temp
            if j != i:
                rec.step(f"Placed {temp} at position {j}", swapping=(j,))

        rec.step(f"Completed gap {gap} phase")
        gap //= 2
