"""
In-memory benchmark result store.

A `BenchmarkStore` is an ordinary object: construct one, pass it to whatever
needs it. Nothing here is process-global.

    store = BenchmarkStore()
    store.run_comparison(["quick", "merge", "heap"], [5, 3, 8, 1])
    store.summary("quick")
    store.insights().insights

Scores:
    efficiency score (ranking)  = (comparisons + swaps) per second / sqrt(n)
    summary efficiency          = (avg comparisons + avg swaps) per millisecond
Both are 0.0 when the denominator would be zero.
"""

from __future__ import annotations

import json
import logging
import math
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import psutil

from sorttrace.algorithms import ALGORITHM_KEYS, get_algorithm
from sorttrace.bench.measure import time_trace_call
from sorttrace.datasets import generate_test_array
from sorttrace.trace import Number

__all__ = [
    "ARRAY_TYPES",
    "BenchmarkResult",
    "BenchmarkSummary",
    "AlgorithmComparison",
    "PerformanceInsights",
    "BenchmarkStore",
    "efficiency_score",
]

logger = logging.getLogger(__name__)

ARRAY_TYPES = ("random", "sorted", "reversed", "nearly_sorted", "custom")
DEFAULT_SIZES = (10, 25, 50, 100)
DEFAULT_ARRAY_TYPES = ("random", "sorted", "reversed", "nearly_sorted")

QUADRATIC = ("bubble", "selection", "insertion")
LOG_LINEAR = ("quick", "merge", "heap")

SMALL_ARRAY_MAX = 25
LARGE_ARRAY_MIN = 50


@dataclass(frozen=True)
class BenchmarkResult:
    algorithm: str
    array_size: int
    execution_time_ms: float
    comparisons: int
    swaps: int
    timestamp: float
    array_type: str
    input_array: Tuple[Number, ...]
    memory_bytes: Optional[int] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BenchmarkResult":
        return cls(
            algorithm=str(d["algorithm"]),
            array_size=int(d["array_size"]),
            execution_time_ms=float(d["execution_time_ms"]),
            comparisons=int(d["comparisons"]),
            swaps=int(d["swaps"]),
            timestamp=float(d["timestamp"]),
            array_type=str(d["array_type"]),
            input_array=tuple(d.get("input_array", ())),
            memory_bytes=d.get("memory_bytes"),
        )


@dataclass(frozen=True)
class BenchmarkSummary:
    algorithm: str
    average_time_ms: float
    min_time_ms: float
    max_time_ms: float
    total_runs: int
    average_comparisons: float
    average_swaps: float
    efficiency: float


@dataclass(frozen=True)
class AlgorithmComparison:
    array_size: int
    results: Tuple[BenchmarkResult, ...]
    winner: str
    rankings: Tuple[Tuple[str, float], ...]


@dataclass(frozen=True)
class PerformanceInsights:
    fastest_algorithm: str
    most_efficient_algorithm: str
    recommended_for_small_arrays: str
    recommended_for_large_arrays: str
    insights: Tuple[str, ...]


def efficiency_score(result: BenchmarkResult) -> float:
    """Operations per second, normalised by sqrt(n). Higher is better."""
    if result.execution_time_ms <= 0 or result.array_size <= 0:
        return 0.0
    ops_per_second = (result.comparisons + result.swaps) / (result.execution_time_ms / 1000)
    return ops_per_second / math.sqrt(result.array_size)


class BenchmarkStore:
    """Keeps the most recent `max_results` benchmark results."""

    def __init__(self, max_results: int = 1000, timeout_seconds: float = 60.0) -> None:
        if max_results < 1:
            raise ValueError("max_results must be >= 1")
        self.max_results = max_results
        self.timeout_seconds = timeout_seconds
        self._results: List[BenchmarkResult] = []
        self._process = psutil.Process()

    # ------------------------- running ------------------------- #

    def run_benchmark(
        self, algorithm: str, input_array: Sequence[Number], array_type: str = "random"
    ) -> BenchmarkResult:
        """Time one call of `algorithm` on a copy of `input_array` and store it."""
        sort_fn = get_algorithm(algorithm)
        rss_before = self._process.memory_info().rss
        res = time_trace_call(
            algo_name=algorithm,
            algo_fn=sort_fn,
            a=input_array,
            config=None,
            repeats=1,
            warmup=False,
            disable_gc=False,
            timeout_seconds=self.timeout_seconds,
        )
        rss_after = self._process.memory_info().rss
        if res["status"] == "error":
            raise RuntimeError(f"{algorithm}: {res['error']}")

        result = BenchmarkResult(
            algorithm=algorithm,
            array_size=len(input_array),
            execution_time_ms=res["samples_ns"][0] / 1e6,
            comparisons=res["comparisons"],
            swaps=res["swaps"],
            timestamp=time.time(),
            array_type=array_type,
            input_array=tuple(input_array),
            memory_bytes=max(0, rss_after - rss_before),
        )
        self._add(result)
        return result

    def run_comparison(
        self,
        algorithms: Sequence[str],
        input_array: Sequence[Number],
        array_type: str = "random",
    ) -> AlgorithmComparison:
        """Benchmark several algorithms on the same input and rank them."""
        if not algorithms:
            raise ValueError("algorithms must be a non-empty sequence")
        results = tuple(self.run_benchmark(k, input_array, array_type) for k in algorithms)
        rankings = tuple(
            sorted(
                ((r.algorithm, efficiency_score(r)) for r in results),
                key=lambda pair: pair[1],
                reverse=True,
            )
        )
        return AlgorithmComparison(
            array_size=len(input_array),
            results=results,
            winner=rankings[0][0],
            rankings=rankings,
        )

    def run_comprehensive(
        self,
        algorithms: Sequence[str] = ALGORITHM_KEYS,
        sizes: Iterable[int] = DEFAULT_SIZES,
        array_types: Iterable[str] = DEFAULT_ARRAY_TYPES,
        rng: Optional[np.random.Generator] = None,
    ) -> List[AlgorithmComparison]:
        """One comparison per (size, array type) pair."""
        rng = rng if rng is not None else np.random.default_rng()
        array_types = list(array_types)
        out: List[AlgorithmComparison] = []
        for size in sizes:
            for array_type in array_types:
                test_array = generate_test_array(int(size), array_type, rng)
                out.append(self.run_comparison(algorithms, test_array, array_type))
        logger.info("comprehensive benchmark finished: %d comparisons", len(out))
        return out

    # ------------------------- querying ------------------------- #

    def results(self) -> List[BenchmarkResult]:
        return list(self._results)

    def filtered(
        self,
        *,
        algorithm: Optional[str] = None,
        array_type: Optional[str] = None,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
        since: Optional[float] = None,
    ) -> List[BenchmarkResult]:
        out = []
        for r in self._results:
            if algorithm is not None and r.algorithm != algorithm:
                continue
            if array_type is not None and r.array_type != array_type:
                continue
            if min_size is not None and r.array_size < min_size:
                continue
            if max_size is not None and r.array_size > max_size:
                continue
            if since is not None and r.timestamp < since:
                continue
            out.append(r)
        return out

    def to_frame(self) -> pd.DataFrame:
        """Results as a DataFrame (input arrays omitted)."""
        columns = [
            "algorithm", "array_size", "execution_time_ms", "comparisons",
            "swaps", "timestamp", "array_type", "memory_bytes",
        ]
        rows = [{c: getattr(r, c) for c in columns} for r in self._results]
        return pd.DataFrame(rows, columns=columns)

    def summary(self, algorithm: str) -> Optional[BenchmarkSummary]:
        """Aggregate every stored run of `algorithm`; None if it has none."""
        df = self.to_frame()
        df = df[df["algorithm"] == algorithm]
        if df.empty:
            return None
        avg_time = float(df["execution_time_ms"].mean())
        avg_comparisons = float(df["comparisons"].mean())
        avg_swaps = float(df["swaps"].mean())
        return BenchmarkSummary(
            algorithm=algorithm,
            average_time_ms=avg_time,
            min_time_ms=float(df["execution_time_ms"].min()),
            max_time_ms=float(df["execution_time_ms"].max()),
            total_runs=int(len(df)),
            average_comparisons=avg_comparisons,
            average_swaps=avg_swaps,
            efficiency=(avg_comparisons + avg_swaps) / avg_time if avg_time > 0 else 0.0,
        )

    def summaries(self) -> List[BenchmarkSummary]:
        out = []
        for key in ALGORITHM_KEYS:
            s = self.summary(key)
            if s is not None:
                out.append(s)
        return out

    def insights(self) -> PerformanceInsights:
        if not self._results:
            return PerformanceInsights(
                fastest_algorithm="quick",
                most_efficient_algorithm="quick",
                recommended_for_small_arrays="insertion",
                recommended_for_large_arrays="quick",
                insights=("No benchmark data available",),
            )

        summaries = self.summaries()
        fastest = min(summaries, key=lambda s: s.average_time_ms)
        most_efficient = max(summaries, key=lambda s: s.efficiency)

        small = self._best_performer(self.filtered(max_size=SMALL_ARRAY_MAX))
        large = self._best_performer(self.filtered(min_size=LARGE_ARRAY_MIN + 1))

        return PerformanceInsights(
            fastest_algorithm=fastest.algorithm,
            most_efficient_algorithm=most_efficient.algorithm,
            recommended_for_small_arrays=small or "insertion",
            recommended_for_large_arrays=large or "quick",
            insights=tuple(_narrate(summaries)),
        )

    # ------------------------- persistence ------------------------- #

    def clear(self) -> None:
        self._results = []

    def export_json(self) -> str:
        return json.dumps([asdict(r) for r in self._results], indent=2)

    def import_json(self, text: str) -> None:
        """Append results previously produced by `export_json`."""
        try:
            imported = [BenchmarkResult.from_dict(d) for d in json.loads(text)]
        except (ValueError, TypeError, KeyError) as e:
            logger.error("Failed to import results: %r", e)
            raise ValueError("Invalid JSON data") from e
        self._results.extend(imported)
        self._trim()

    # ------------------------- internals ------------------------- #

    def _add(self, result: BenchmarkResult) -> None:
        self._results.append(result)
        self._trim()

    def _trim(self) -> None:
        if len(self._results) > self.max_results:
            self._results = self._results[-self.max_results:]

    @staticmethod
    def _best_performer(results: List[BenchmarkResult]) -> Optional[str]:
        if not results:
            return None
        df = pd.DataFrame(
            {
                "algorithm": [r.algorithm for r in results],
                "execution_time_ms": [r.execution_time_ms for r in results],
            }
        )
        means = df.groupby("algorithm", sort=False)["execution_time_ms"].mean()
        return str(means.idxmin())


def _narrate(summaries: List[BenchmarkSummary]) -> List[str]:
    lines: List[str] = []
    if not summaries:
        return lines

    fastest = min(summaries, key=lambda s: s.average_time_ms)
    slowest = max(summaries, key=lambda s: s.average_time_ms)
    lines.append(
        f"{fastest.algorithm} is the fastest with {fastest.average_time_ms:.2f}ms average time"
    )
    if fastest.algorithm != slowest.algorithm:
        lines.append(
            f"{slowest.algorithm} is the slowest with {slowest.average_time_ms:.2f}ms average time"
        )

    quadratic = [s.average_time_ms for s in summaries if s.algorithm in QUADRATIC]
    log_linear = [s.average_time_ms for s in summaries if s.algorithm in LOG_LINEAR]
    if quadratic and log_linear:
        log_linear_avg = sum(log_linear) / len(log_linear)
        if log_linear_avg > 0:
            speedup = (sum(quadratic) / len(quadratic)) / log_linear_avg
            lines.append(
                f"O(n log n) algorithms are {speedup:.1f}x faster than O(n²) algorithms on average"
            )
    return lines
