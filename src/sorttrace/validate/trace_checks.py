"""
Invariant checks for sort traces.

Used by the tests and, when `validate: true` is set in a sweep config, by the
benchmark runner after every timed call.

Public API (stable):
    is_nondecreasing(xs) -> bool
    first_nondecreasing_violation_index(xs) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict
    assert_no_mutation(before, after) -> None
    trace_violations(a, trace) -> list[str]
    check_trace(a, trace) -> None

The reference order is Python's built-in `sorted()`; a trace's final array
must equal it exactly.

Stability cannot be read off plain numbers (equal values are
indistinguishable), so it is left to the tests, which feed tagged integers.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Sequence

from sorttrace.trace import Number, Trace

__all__ = [
    "TraceInvariantError",
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "assert_no_mutation",
    "trace_violations",
    "check_trace",
]


class TraceInvariantError(AssertionError):
    """A trace broke one or more of its invariants; `violations` lists them."""

    def __init__(self, algorithm: str, violations: List[str]) -> None:
        self.algorithm = algorithm
        self.violations = violations
        super().__init__(f"{algorithm}: " + "; ".join(violations))


def first_nondecreasing_violation_index(xs: Sequence[Number]) -> Optional[int]:
    """Index i of the first xs[i] > xs[i+1], or None."""
    for i in range(len(xs) - 1):
        if xs[i] > xs[i + 1]:
            return i
    return None


def is_nondecreasing(xs: Sequence[Number]) -> bool:
    return first_nondecreasing_violation_index(xs) is None


def permutation_counter_diff(a: Sequence[Number], b: Sequence[Number]) -> Dict[Number, int]:
    """value -> count_a - count_b, for values whose multiplicities differ."""
    diff = Counter(a)
    diff.subtract(Counter(b))
    return {k: d for k, d in diff.items() if d != 0}


def is_permutation(a: Sequence[Number], b: Sequence[Number]) -> bool:
    return len(a) == len(b) and not permutation_counter_diff(a, b)


def assert_no_mutation(before: Sequence[Number], after: Sequence[Number]) -> None:
    """Raise AssertionError naming the first index where `after` differs."""
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Input mutated at index {i}: before={x}, after={y}")


def trace_violations(a: Sequence[Number], trace: Trace) -> List[str]:
    """Return a description of every broken invariant (empty when valid)."""
    out: List[str] = []
    n = len(a)

    if not trace.steps:
        return ["trace has no steps"]

    first, last = trace.steps[0], trace.steps[-1]
    if list(first.array) != list(a):
        out.append("first step does not show the input")
    if trace.algorithm not in first.description:
        out.append(f"first step does not name the algorithm: {first.description!r}")
    if last.sorted is None or sorted(last.sorted) != list(range(n)):
        out.append("last step does not mark every index sorted")

    final = list(last.array)
    i = first_nondecreasing_violation_index(final)
    if i is not None:
        out.append(f"final array not nondecreasing at i={i}: {final[i]} > {final[i + 1]}")
    diff = permutation_counter_diff(a, final)
    if diff:
        out.append(f"final array is not a permutation of the input: {diff}")
    elif final != sorted(a):
        out.append("final array differs from sorted(input)")

    if trace.comparisons < 0 or trace.swaps < 0:
        out.append("negative counter")
    if n <= 1 and (trace.comparisons or trace.swaps):
        out.append("trivial input produced nonzero counters")

    for k, step in enumerate(trace.steps):
        if len(step.array) != n:
            out.append(f"step {k} snapshot has length {len(step.array)}, expected {n}")
            break
        if not step.description:
            out.append(f"step {k} has no description")
            break

    return out


def check_trace(a: Sequence[Number], trace: Trace) -> None:
    """Raise TraceInvariantError if `trace` is not a valid run over `a`."""
    violations = trace_violations(a, trace)
    if violations:
        raise TraceInvariantError(trace.algorithm, violations)
