"""
Timing harness for trace-generating sorts.

One sample is exactly one call to an algorithm's `sort(a, config=...)`,
timed with a monotonic high-resolution clock. Copying, GC control and warmup
happen outside the timed block. Trace generation is part of what is timed:
the engine always builds the full trace.

Public API (stable):
    time_trace_call(...) -> dict

Returned dict schema:
    {
        "algo": str,
        "n": int,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each successful sample
        "comparisons": int | None,          # from the last successful trace
        "swaps": int | None,
        "steps": int | None,
        "trace": Trace | None,              # last successful trace
        "status": "ok" | "timeout" | "error",
        "error": str | None,                # populated if status == "error"
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
    }

Every repeat must report the same counters; a run whose counters drift
between repeats is reported as an error.
"""

from __future__ import annotations

import gc
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

from sorttrace.trace import Number, Trace

__all__ = ["time_trace_call"]

logger = logging.getLogger(__name__)


def time_trace_call(
    *,
    algo_name: str,
    algo_fn: Callable[..., Trace],
    a: Sequence[Number],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
    defensive_copy: bool = True,
) -> Dict[str, Any]:
    """
    Time repeated calls to `algo_fn(a, config=config)`.

    Parameters
    ----------
    algo_name : str
        Algorithm key (for records and log lines).
    algo_fn : Callable[..., Trace]
        `sort(a, *, config)` from one of the algorithm modules.
    a : sequence of numbers
        Input. The engine never mutates it, but with `defensive_copy` each
        call still gets its own list so repeats are comparable.
    config : dict | None
        Passed through unchanged.
    repeats : int
        Number of timed samples.
    warmup : bool
        Make one untimed call first.
    disable_gc : bool
        Collect, then disable GC around the timed loop; restore afterward.
    timeout_seconds : float
        A sample slower than this marks status="timeout" and stops sampling.
    defensive_copy : bool
        Copy `a` outside the timed block before each call.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    samples: List[int] = []
    result: Dict[str, Any] = {
        "algo": algo_name,
        "n": len(a),
        "repeats": repeats,
        "samples_ns": samples,
        "comparisons": None,
        "swaps": None,
        "steps": None,
        "trace": None,
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    if warmup and repeats > 0:
        try:
            algo_fn(list(a) if defensive_copy else a, config=config)
        except Exception as e:
            logger.warning("%s: warmup failed at n=%d: %r", algo_name, len(a), e)
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            try:
                arg = list(a) if defensive_copy else a

                t0 = time.perf_counter_ns()
                trace = algo_fn(arg, config=config)
                t1 = time.perf_counter_ns()
            except Exception as e:
                logger.warning("%s: run failed at n=%d repeat %d: %r", algo_name, len(a), r, e)
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            elapsed = t1 - t0
            samples.append(int(elapsed))

            if result["trace"] is not None and (
                trace.comparisons != result["comparisons"] or trace.swaps != result["swaps"]
            ):
                result["status"] = "error"
                result["error"] = f"counters changed between repeats at repeat {r}"
                break
            result["trace"] = trace
            result["comparisons"] = trace.comparisons
            result["swaps"] = trace.swaps
            result["steps"] = len(trace.steps)

            if elapsed > threshold_ns:
                logger.warning(
                    "%s: %.1f ms exceeds timeout at n=%d", algo_name, elapsed / 1e6, len(a)
                )
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break
    finally:
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result
