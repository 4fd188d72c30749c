"""
Algorithm registry.

Each algorithm lives in its own module `sorttrace.algorithms.<key>` and
exposes

    sort(a: Sequence[Number], *, config: dict | None = None) -> Trace

so callers can write:
    from sorttrace.algorithms import run
    trace = run("quick", [5, 3, 8, 1])
"""

from __future__ import annotations

import importlib
from typing import Any, Callable, Dict, Optional, Sequence

from sorttrace.trace import Number, Trace

SortFn = Callable[..., Trace]

ALGORITHM_KEYS = (
    "bubble",
    "selection",
    "insertion",
    "quick",
    "merge",
    "heap",
    "shell",
    "counting",
    "radix",
    "bucket",
    "tim",
)

# Stable for equal keys: the earlier element stays first.
STABLE_KEYS = frozenset({"bubble", "insertion", "merge", "counting", "radix", "bucket", "tim"})

__all__ = ["ALGORITHM_KEYS", "STABLE_KEYS", "SortFn", "get_algorithm", "display_name", "run"]


def get_algorithm(key: str) -> SortFn:
    """
    Return the `sort` callable for `key`.

    Raises
    ------
    ValueError
        If `key` is not one of ALGORITHM_KEYS.
    """
    if key not in ALGORITHM_KEYS:
        raise ValueError(f"Unsupported algorithm: {key!r}. Supported: {sorted(ALGORITHM_KEYS)}")
    mod = importlib.import_module(f"{__name__}.{key}")
    return getattr(mod, "sort")


def display_name(key: str) -> str:
    get_algorithm(key)
    return importlib.import_module(f"{__name__}.{key}").NAME


def run(key: str, a: Sequence[Number], *, config: Optional[Dict[str, Any]] = None) -> Trace:
    """Run algorithm `key` over a copy of `a` and return its full trace."""
    return get_algorithm(key)(a, config=config)
