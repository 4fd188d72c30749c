"""
LSD radix sort, base 10.

Preconditions (unchecked): non-negative integers. Negative or fractional
values are outside the contract; the run still terminates but the order is
undefined.

Each digit pass is a stable counting sort into an output buffer: a tally step
per element, then back-to-front placement (one swap per element written into
the buffer), then a copy back into the working array. The number of passes
is the decimal length of the maximum, so an all-zero input still makes one
pass.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from sorttrace.trace import Number, Recorder, Trace

NAME = "Radix Sort"
STRATEGY = "Sort by each digit from least to most significant"
BASE = 10

__all__ = ["NAME", "BASE", "sort", "digit_at"]


def sort(a: Sequence[Number], *, config: Optional[Dict[str, Any]] = None) -> Trace:
    rec = Recorder(a, NAME, STRATEGY)
    if rec.n > 1:
        _radix(rec)
    return rec.finish()


def digit_at(value: Number, place: int) -> int:
    return int(value // place) % BASE


def _radix(rec: Recorder) -> None:
    arr, n = rec.arr, rec.n
    top = max(arr)
    passes = len(str(int(top)))

    rec.step(f"Maximum value: {top}, requires {passes} digit passes")

    place = 1
    for digit in range(1, passes + 1):
        rec.step(f"Sorting by digit {digit} (place value {place})")

        count = [0] * BASE
        for i, value in enumerate(arr):
            d = digit_at(value, place)
            count[d] += 1
            rec.step(
                f"Element {value} has digit {d} at position {digit}",
                comparing=(i,),
                auxiliary=count,
            )

        for d in range(1, BASE):
            count[d] += count[d - 1]

        output: List[Optional[Number]] = [None] * n
        for i in range(n - 1, -1, -1):
            d = digit_at(arr[i], place)
            count[d] -= 1
            output[count[d]] = arr[i]
            rec.relocate()
            # the write lands in `output`; the working array changes at copy-back
            rec.step(
                f"Placing {arr[i]} at output position {count[d]} based on digit {d}",
                comparing=(i,),
                auxiliary=output,
            )

        arr[:] = output
        rec.step(f"Completed digit {digit} pass")
        place *= BASE
