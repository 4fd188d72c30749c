"""
Input generators for traces and benchmarks.

Implemented distributions:
- dist == "random":
    Integers drawn uniformly from an inclusive range (default [1, 1000]).

- dist == "sorted":
    [1, 2, ..., n].

- dist == "reversed":
    [n, n-1, ..., 1].

- dist == "nearly_sorted":
    Start from [1, 2, ..., n], then perform floor(swap_frac * n) random index
    swaps (default swap_frac 0.1). Pairs that draw the same index are no-ops.

- dist == "few_uniques":
    Pick up to k distinct integers from an inclusive range (default [1, 1000])
    and fill the array by sampling from them.

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]
    generate_test_array(size: int, array_type: str, rng) -> list[int]

Conventions:
- All values are non-negative integers by default, so every algorithm
  (radix included) accepts the output.
- Returns a plain Python `list[int]`; the engine stays NumPy-agnostic.
- The caller owns and seeds the RNG. "sorted" and "reversed" ignore it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

SUPPORTED_DISTS = {
    "random",
    "sorted",
    "reversed",
    "nearly_sorted",
    "few_uniques",
}
DEFAULT_RANGE = (1, 1000)
DEFAULT_SWAP_FRAC = 0.1

__all__ = ["SUPPORTED_DISTS", "make_dataset", "generate_test_array"]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer input of length `n` according to `spec`.

    Parameters
    ----------
    n : int
        Number of elements. Must be >= 0.
    spec : dict
        {"dist": <name>, "params": {...}}

        random:         {"range": [lo, hi]}      # optional, inclusive
        nearly_sorted:  {"swap_frac": 0.1}       # optional, in [0.0, 1.0]
        few_uniques:    {"k": 5, "range": [lo, hi]}
        sorted / reversed: params unused
    rng : numpy.random.Generator
        Caller-owned generator.

    Raises
    ------
    ValueError
        On a negative or non-int `n`, an unknown dist, or malformed params.
    """
    _validate_n(n)

    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params") or {}

    if dist == "random":
        lo, hi = _parse_range(params, DEFAULT_RANGE)
        if n == 0:
            return []
        # integers() is half-open; +1 makes hi inclusive
        return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()

    if dist == "sorted":
        return list(range(1, n + 1))

    if dist == "reversed":
        return list(range(n, 0, -1))

    if dist == "nearly_sorted":
        swap_frac = _parse_swap_frac(params)
        arr = list(range(1, n + 1))
        num_swaps = int(np.floor(swap_frac * n))
        if num_swaps <= 0:
            return arr
        idxs = rng.integers(0, n, size=2 * num_swaps)
        for k in range(num_swaps):
            i, j = int(idxs[2 * k]), int(idxs[2 * k + 1])
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    # few_uniques
    k = _parse_k(params)
    lo, hi = _parse_range(params, DEFAULT_RANGE)
    if n == 0:
        return []
    actual_k = int(min(k, n, hi - lo + 1))
    values = rng.choice(hi - lo + 1, size=actual_k, replace=False) + lo
    picks = rng.integers(0, actual_k, size=n)
    return [int(values[p]) for p in picks]


def generate_test_array(size: int, array_type: str, rng: np.random.Generator) -> List[int]:
    """Shorthand for the benchmark array types: random/sorted/reversed/nearly_sorted."""
    return make_dataset(size, {"dist": array_type, "params": {}}, rng)


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, int) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_range(params: Dict[str, Any], default: Tuple[int, int]) -> Tuple[int, int]:
    if "range" not in params:
        return default
    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError("params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    val = params.get("swap_frac", DEFAULT_SWAP_FRAC)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not 0.0 <= x <= 1.0:
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}")
    return x


def _parse_k(params: Dict[str, Any]) -> int:
    if "k" not in params:
        raise ValueError("few_uniques.params.k must be provided (int >= 1)")
    k = params["k"]
    if not isinstance(k, int) or isinstance(k, bool) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    return k


def _is_int_like(x: Any) -> bool:
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
