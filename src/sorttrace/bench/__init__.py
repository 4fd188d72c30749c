"""
Benchmark harness public API.

    from sorttrace.bench import BenchmarkStore, time_trace_call, run_experiment
"""

from .config import BenchConfig, load_config
from .measure import time_trace_call
from .runner import run_experiment
from .store import (
    AlgorithmComparison,
    BenchmarkResult,
    BenchmarkStore,
    BenchmarkSummary,
    PerformanceInsights,
    efficiency_score,
)

__all__ = [
    "AlgorithmComparison",
    "BenchConfig",
    "BenchmarkResult",
    "BenchmarkStore",
    "BenchmarkSummary",
    "PerformanceInsights",
    "efficiency_score",
    "load_config",
    "run_experiment",
    "time_trace_call",
]
