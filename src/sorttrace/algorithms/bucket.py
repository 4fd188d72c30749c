"""
Bucket sort.

Bucket count is min(n, max_buckets) with max_buckets = 10 by default; the
width of each bucket is ceil((max - min + 1) / bucket_count). Buckets are
insertion-sorted in place (one comparison per `>` test, steps carry the
bucket contents as `auxiliary`) and then written back in order, one swap per
element written.

Config:
    max_buckets : int >= 1, default 10
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sorttrace.trace import Number, Recorder, Trace

NAME = "Bucket Sort"
STRATEGY = "Distribute elements into buckets and sort each"
DEFAULT_MAX_BUCKETS = 10

__all__ = ["NAME", "DEFAULT_MAX_BUCKETS", "sort"]


def sort(a: Sequence[Number], *, config: Optional[Dict[str, Any]] = None) -> Trace:
    max_buckets = _parse_max_buckets(config or {})
    rec = Recorder(a, NAME, STRATEGY)
    if rec.n > 1:
        _bucket(rec, max_buckets)
    return rec.finish()


def _bucket(rec: Recorder, max_buckets: int) -> None:
    arr, n = rec.arr, rec.n
    lo, hi = min(arr), max(arr)
    bucket_count = min(n, max_buckets)
    width = math.ceil((hi - lo + 1) / bucket_count)

    rec.step(f"Using {bucket_count} buckets, each covering range of {width}")

    buckets: List[List[Number]] = [[] for _ in range(bucket_count)]
    for i, value in enumerate(arr):
        b = min(int((value - lo) // width), bucket_count - 1)
        buckets[b].append(value)
        rec.step(
            f"Placing {value} into bucket {b}",
            comparing=(i,),
            auxiliary=_snapshot(buckets),
        )

    index = 0
    for b, bucket in enumerate(buckets):
        if not bucket:
            continue
        rec.step(
            f"Sorting bucket {b} with {len(bucket)} elements",
            auxiliary=_snapshot(buckets),
        )
        _sort_bucket(rec, buckets, b)

        for value in bucket:
            arr[index] = value
            rec.relocate()
            rec.step(
                f"Placing {value} from bucket {b} to position {index}",
                swapping=(index,),
                sorted=range(index + 1),
                auxiliary=_snapshot(buckets),
            )
            index += 1


def _sort_bucket(rec: Recorder, buckets: List[List[Number]], b: int) -> None:
    bucket = buckets[b]
    for i in range(1, len(bucket)):
        key = bucket[i]
        j = i - 1
        while j >= 0:
            rec.compare()
            rec.step(
                f"Bucket {b}: comparing {bucket[j]} with {key}",
                auxiliary=_snapshot(buckets),
            )
            if not bucket[j] > key:
                break
            bucket[j + 1] = bucket[j]
            j -= 1
        bucket[j + 1] = key


def _snapshot(buckets: List[List[Number]]) -> Tuple[Tuple[Number, ...], ...]:
    return tuple(tuple(b) for b in buckets)


def _parse_max_buckets(config: Dict[str, Any]) -> int:
    val = config.get("max_buckets", DEFAULT_MAX_BUCKETS)
    if not isinstance(val, int) or isinstance(val, bool) or val < 1:
        raise ValueError(f"bucket.config.max_buckets must be an integer >= 1; got {val!r}")
    return val
