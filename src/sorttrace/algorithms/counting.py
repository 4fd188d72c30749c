"""
Counting sort over the value range [min, max].

Every value must sit a whole number of steps above the minimum (integers,
or floats such as 1.0 and 3.0); anything else raises ValueError before the
table is built, since the table cannot represent it. The count table has
max - min + 1 slots, so memory and step count grow with the value range
rather than with n; a range far wider than the input is logged as a warning
but still sorted.

No value-vs-value comparisons happen, so `comparisons` stays 0. Every write
during reconstruction is one swap, and the written value is
`table index + min`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

from sorttrace.trace import Number, Recorder, Trace

NAME = "Counting Sort"
STRATEGY = "Count occurrences of each element"

# warn once the count table is this many times larger than the input
WIDE_RANGE_FACTOR = 100

__all__ = ["NAME", "WIDE_RANGE_FACTOR", "sort"]

logger = logging.getLogger(__name__)


def sort(a: Sequence[Number], *, config: Optional[Dict[str, Any]] = None) -> Trace:
    rec = Recorder(a, NAME, STRATEGY)
    if rec.n > 1:
        _counting(rec)
    return rec.finish()


def _counting(rec: Recorder) -> None:
    arr, n = rec.arr, rec.n
    lo, hi = min(arr), max(arr)
    for value in arr:
        if (value - lo) % 1 != 0:
            raise ValueError(
                f"counting sort needs integer offsets from the minimum; "
                f"{value!r} - {lo!r} is not a whole number"
            )
    span = int(hi - lo) + 1

    if span > WIDE_RANGE_FACTOR * n:
        logger.warning(
            "counting sort: value range %d is %dx wider than n=%d",
            span, span // n, n,
        )

    rec.step(f"Range: {lo} to {hi}, creating count array of size {span}")

    count = [0] * span
    for i, value in enumerate(arr):
        count[int(value - lo)] += 1
        rec.step(
            f"Counting element {value} at position {i}",
            comparing=(i,),
            auxiliary=count,
        )

    rec.step("Finished counting, now reconstructing sorted array", auxiliary=count)

    index = 0
    for slot in range(span):
        while count[slot] > 0:
            arr[index] = slot + lo
            rec.relocate()
            count[slot] -= 1
            rec.step(
                f"Placing {arr[index]} at position {index}",
                swapping=(index,),
                sorted=range(index + 1),
                auxiliary=count,
            )
            index += 1
