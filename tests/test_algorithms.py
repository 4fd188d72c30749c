"""
Invariants shared by all 11 trace-generating algorithms.

What we check for every algorithm:
- The trace passes `check_trace` (first step shows the input and names the
  algorithm, last step marks every index sorted, final array equals
  sorted(input), counters sane, snapshots full-length)
- No input mutation
- Determinism: identical counters and final array on an independent copy
- Trivial inputs short-circuit with zero counters
- Stability for the algorithms that promise it (tagged integers)
"""

from __future__ import annotations

from typing import List

import pytest
from hypothesis import given, settings, strategies as st

from conftest import equal_values_keep_order, tag_all
from sorttrace.algorithms import ALGORITHM_KEYS, STABLE_KEYS, display_name, get_algorithm, run
from sorttrace.trace import TRIVIAL_DESCRIPTION
from sorttrace.validate import check_trace

# comparison-based (plus bucket) accept arbitrary reals; counting and radix need integers
REAL_KEYS = [k for k in ALGORITHM_KEYS if k not in ("counting", "radix")]


def _check_one(key: str, a: List) -> None:
    a_before = list(a)
    trace = run(key, a)

    assert a == a_before, "Algorithm must not mutate its input"
    check_trace(a, trace)

    again = run(key, list(a_before))
    assert again.comparisons == trace.comparisons
    assert again.swaps == trace.swaps
    assert again.final_array == trace.final_array
    assert len(again.steps) == len(trace.steps)


# ------------------------- unit tests (deterministic) ------------------------- #

@pytest.mark.parametrize("key", ALGORITHM_KEYS)
@pytest.mark.parametrize(
    "a",
    [
        [2, 1],
        [1, 2, 3, 4],
        [4, 3, 2, 1],
        [7, 7, 7, 7],
        [1, 3, 2, 3, 1, 2],
        [0, 0, 0],
        [170, 45, 75, 90, 802, 24, 2, 66],
        list(range(40)),
        list(range(40))[::-1],
    ],
)
def test_unit_cases(key: str, a: List[int]) -> None:
    _check_one(key, a)


@pytest.mark.parametrize("key", ALGORITHM_KEYS)
@pytest.mark.parametrize("a", [[], [5]])
def test_trivial_inputs_short_circuit(key: str, a: List[int]) -> None:
    trace = run(key, a)

    assert trace.comparisons == 0
    assert trace.swaps == 0
    assert len(trace.steps) == 2
    assert trace.steps[0].array == tuple(a)
    assert trace.steps[-1].sorted == tuple(range(len(a)))
    assert trace.steps[-1].description == TRIVIAL_DESCRIPTION


@pytest.mark.parametrize("key", REAL_KEYS)
def test_negative_and_fractional_values(key: str) -> None:
    _check_one(key, [0.5, -1.25, 3.0, -10.0, 3.0, 2.75, 0.0])


@pytest.mark.parametrize("key", ["counting", "bucket"])
def test_negative_integers_for_range_based_sorts(key: str) -> None:
    _check_one(key, [0, -1, 5, -10, 3, 3, 2])


@pytest.mark.parametrize("key", ALGORITHM_KEYS)
def test_first_step_names_strategy_and_last_step_completes(key: str) -> None:
    trace = run(key, [3, 1, 2])

    assert trace.steps[0].description.startswith(f"Starting {trace.algorithm} - ")
    assert trace.steps[-1].description == f"{trace.algorithm} completed!"
    assert trace.steps[-1].sorted == (0, 1, 2)


@pytest.mark.parametrize("key", ALGORITHM_KEYS)
def test_module_sort_matches_registry_run(key: str) -> None:
    a = [9, 4, 7, 1, 4]
    direct = get_algorithm(key)(list(a))
    via_run = run(key, a)

    assert direct.comparisons == via_run.comparisons
    assert direct.swaps == via_run.swaps
    assert direct.steps == via_run.steps


def test_unknown_key_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported algorithm"):
        run("bogo", [2, 1])


# ------------------------- stability ------------------------- #

@pytest.mark.parametrize("key", sorted(STABLE_KEYS))
def test_equal_values_keep_input_order(key: str) -> None:
    a = tag_all([3, 1, 3, 2, 1, 3, 2, 2, 1, 0, 3])
    trace = run(key, a)

    assert trace.final_array == sorted(a)
    assert equal_values_keep_order(trace.final_array)


@settings(deadline=None, max_examples=40)
@given(st.lists(st.integers(min_value=0, max_value=20), min_size=0, max_size=40))
def test_property_stability(values: List[int]) -> None:
    a = tag_all(values)
    for key in STABLE_KEYS:
        trace = run(key, a)
        assert equal_values_keep_order(trace.final_array), key


# ------------------------- property-based tests (randomized) ------------------------- #

small_nonneg = st.integers(min_value=0, max_value=999)


@settings(deadline=None, max_examples=40)
@given(st.lists(small_nonneg, min_size=0, max_size=40))
def test_property_all_algorithms_nonnegative_ints(a: List[int]) -> None:
    for key in ALGORITHM_KEYS:
        _check_one(key, a)


@settings(deadline=None, max_examples=30)
@given(
    st.lists(
        st.floats(min_value=-1000, max_value=1000, allow_nan=False, allow_infinity=False),
        min_size=0,
        max_size=30,
    )
)
def test_property_real_valued_inputs(a: List[float]) -> None:
    for key in REAL_KEYS:
        _check_one(key, a)


@settings(deadline=None, max_examples=30)
@given(st.lists(st.integers(min_value=0, max_value=3), min_size=0, max_size=60))
def test_property_many_duplicates(a: List[int]) -> None:
    for key in ALGORITHM_KEYS:
        _check_one(key, a)


@settings(deadline=None, max_examples=25)
@given(st.lists(small_nonneg, min_size=2, max_size=30))
def test_property_swapping_steps_show_state_after_write(a: List[int]) -> None:
    # exchange-based sorts: both indices of a swapping pair are already in their new state
    for key in ("bubble", "selection", "quick", "heap"):
        trace = run(key, a)
        prev = trace.steps[0].array
        for step in trace.steps[1:]:
            if step.swapping is not None and len(step.swapping) == 2:
                i, j = step.swapping
                if i != j:
                    assert (step.array[i], step.array[j]) == (prev[j], prev[i]), key
            prev = step.array


def test_registry_resolves_display_names() -> None:
    assert display_name("heap") == "Heap Sort"
    assert run("heap", [2, 1]).algorithm == display_name("heap")
    with pytest.raises(ValueError, match="Unsupported algorithm"):
        display_name("bogo")
