"""
Validation utilities public API.

Re-exports the trace checks so callers can write:
    from sorttrace.validate import check_trace, is_nondecreasing
"""

from .trace_checks import (
    TraceInvariantError,
    assert_no_mutation,
    check_trace,
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_permutation,
    permutation_counter_diff,
    trace_violations,
)

__all__ = [
    "TraceInvariantError",
    "assert_no_mutation",
    "check_trace",
    "first_nondecreasing_violation_index",
    "is_nondecreasing",
    "is_permutation",
    "permutation_counter_diff",
    "trace_violations",
]
