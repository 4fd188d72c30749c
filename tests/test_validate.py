"""Tests for the trace invariant checks."""

from __future__ import annotations

import dataclasses

import pytest

from sorttrace.algorithms import run
from sorttrace.trace import Step, Trace
from sorttrace.validate import (
    TraceInvariantError,
    assert_no_mutation,
    check_trace,
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_permutation,
    permutation_counter_diff,
    trace_violations,
)


def test_nondecreasing_helpers() -> None:
    assert is_nondecreasing([])
    assert is_nondecreasing([1, 1, 2])
    assert not is_nondecreasing([1, 3, 2])
    assert first_nondecreasing_violation_index([1, 3, 2]) == 1
    assert first_nondecreasing_violation_index([0.5, 1.5]) is None


def test_permutation_helpers() -> None:
    assert is_permutation([3, 1, 1], [1, 3, 1])
    assert not is_permutation([1, 2], [1, 2, 2])
    assert permutation_counter_diff([1, 1, 2], [1, 2, 2]) == {1: 1, 2: -1}
    assert permutation_counter_diff([4], [4]) == {}


def test_assert_no_mutation() -> None:
    assert_no_mutation([1, 2], [1, 2])
    with pytest.raises(AssertionError, match="index 1"):
        assert_no_mutation([1, 2], [1, 5])
    with pytest.raises(AssertionError, match="length changed"):
        assert_no_mutation([1, 2], [1])


def test_valid_trace_has_no_violations() -> None:
    a = [5, 3, 8, 1]
    assert trace_violations(a, run("merge", a)) == []
    check_trace(a, run("merge", a))


def test_detects_wrong_final_array() -> None:
    a = [2, 1]
    good = run("bubble", a)
    last = dataclasses.replace(good.steps[-1], array=(2, 1))
    bad = dataclasses.replace(good, steps=good.steps[:-1] + (last,))

    violations = trace_violations(a, bad)
    assert any("nondecreasing" in v for v in violations)
    with pytest.raises(TraceInvariantError) as exc:
        check_trace(a, bad)
    assert exc.value.algorithm == "Bubble Sort"


def test_detects_lost_values() -> None:
    a = [2, 1]
    good = run("bubble", a)
    last = dataclasses.replace(good.steps[-1], array=(1, 1))
    bad = dataclasses.replace(good, steps=good.steps[:-1] + (last,))

    assert any("permutation" in v for v in trace_violations(a, bad))


def test_detects_missing_sorted_role_and_bad_opening() -> None:
    trace = Trace(
        algorithm="Demo Sort",
        steps=(
            Step(array=(9, 9), description="hello"),
            Step(array=(1, 2), description="done", sorted=(0,)),
        ),
        comparisons=0,
        swaps=0,
    )
    violations = trace_violations([2, 1], trace)

    assert "first step does not show the input" in violations
    assert any("name the algorithm" in v for v in violations)
    assert "last step does not mark every index sorted" in violations


def test_detects_counters_on_trivial_input() -> None:
    trace = Trace(
        algorithm="Demo Sort",
        steps=(
            Step(array=(1,), description="Starting Demo Sort"),
            Step(array=(1,), description="done", sorted=(0,)),
        ),
        comparisons=1,
        swaps=0,
    )

    assert trace_violations([1], trace) == ["trivial input produced nonzero counters"]


def test_empty_trace() -> None:
    trace = Trace(algorithm="Demo Sort", steps=(), comparisons=0, swaps=0)
    assert trace_violations([], trace) == ["trace has no steps"]
