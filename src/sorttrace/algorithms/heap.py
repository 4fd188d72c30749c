"""
Heap sort.

Builds a max-heap bottom-up, then repeatedly moves the root to the end of the
shrinking heap. Each child-vs-largest test in `_heapify` is one comparison;
each sift exchange and each root extraction is one swap.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from sorttrace.trace import Number, Recorder, Trace

NAME = "Heap Sort"
STRATEGY = "Build max heap then extract elements"

__all__ = ["NAME", "sort"]


def sort(a: Sequence[Number], *, config: Optional[Dict[str, Any]] = None) -> Trace:
    rec = Recorder(a, NAME, STRATEGY)
    if rec.n > 1:
        _heap(rec)
    return rec.finish()


def _heap(rec: Recorder) -> None:
    arr, n = rec.arr, rec.n

    for i in range(n // 2 - 1, -1, -1):
        _heapify(rec, n, i)

    rec.step("Max heap built - largest element is at root")

    for end in range(n - 1, 0, -1):
        arr[0], arr[end] = arr[end], arr[0]
        rec.relocate()
        rec.step(
            f"Moving largest element {arr[end]} to position {end}",
            swapping=(0, end),
            sorted=range(end, n),
        )
        _heapify(rec, end, 0)


def _heapify(rec: Recorder, size: int, root: int) -> None:
    """Sift `root` down within the heap prefix `arr[:size]`."""
    arr = rec.arr
    settled = range(size, rec.n)
    # iterative sift-down; same exchanges as the recursive form
    while True:
        largest = root
        for child in (2 * root + 1, 2 * root + 2):
            if child < size:
                rec.compare()
                rec.step(
                    f"Comparing {arr[child]} with {arr[largest]} in heap of size {size}",
                    comparing=(largest, child),
                    sorted=settled,
                )
                if arr[child] > arr[largest]:
                    largest = child

        if largest == root:
            return

        arr[root], arr[largest] = arr[largest], arr[root]
        rec.relocate()
        rec.step(
            f"Heapifying: swapping {arr[largest]} and {arr[root]}",
            swapping=(root, largest),
            sorted=settled,
        )
        root = largest
