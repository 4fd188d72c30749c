"""Tests for the Step/Trace records and the Recorder helper."""

from __future__ import annotations

import dataclasses
import logging

import pytest

from sorttrace.trace import TRIVIAL_DESCRIPTION, Recorder, Step, Trace


def test_recorder_copies_input_and_opens_with_strategy() -> None:
    a = [3, 1, 2]
    rec = Recorder(a, "Demo Sort", "do the thing")
    rec.arr[0] = 99

    assert a == [3, 1, 2]
    assert rec.n == 3
    trace = rec.finish()
    assert trace.steps[0].array == (3, 1, 2)
    assert trace.steps[0].description == "Starting Demo Sort - do the thing"


def test_steps_are_snapshots_not_views() -> None:
    rec = Recorder([1, 2], "Demo Sort", "x")
    rec.arr[0], rec.arr[1] = rec.arr[1], rec.arr[0]
    rec.relocate()
    rec.step("swapped", swapping=(0, 1))
    trace = rec.finish()

    assert trace.steps[0].array == (1, 2)
    assert trace.steps[1].array == (2, 1)
    assert trace.initial_array == [1, 2]
    assert trace.final_array == [2, 1]
    assert trace.swaps == 1
    assert len(trace) == 3


def test_counters() -> None:
    rec = Recorder([1, 2, 3], "Demo Sort", "x")
    rec.compare()
    rec.compare()
    rec.relocate(3)
    trace = rec.finish()

    assert (trace.comparisons, trace.swaps) == (2, 3)


def test_finish_marks_every_index_sorted() -> None:
    trace = Recorder([4, 5, 6], "Demo Sort", "x").finish()

    assert trace.steps[-1].sorted == (0, 1, 2)
    assert trace.steps[-1].description == "Demo Sort completed!"


@pytest.mark.parametrize("a", [[], [7]])
def test_finish_on_trivial_input(a) -> None:
    trace = Recorder(a, "Demo Sort", "x").finish()

    assert trace.steps[-1].description == TRIVIAL_DESCRIPTION
    assert trace.steps[-1].sorted == tuple(range(len(a)))


@pytest.mark.parametrize(
    "roles",
    [
        {"comparing": (0, 3)},
        {"swapping": (-1,)},
        {"sorted": range(4)},
        {"pivot": 3},
    ],
)
def test_out_of_range_role_index_is_a_bug(roles) -> None:
    rec = Recorder([1, 2, 3], "Demo Sort", "x")
    with pytest.raises(IndexError, match="out of range"):
        rec.step("bad", **roles)


def test_roles_are_independent_and_optional() -> None:
    rec = Recorder([1, 2, 3], "Demo Sort", "x")
    s = rec.step("both", swapping=[0, 1], sorted=[2], auxiliary=[0, 1])

    assert s.swapping == (0, 1)
    assert s.sorted == (2,)
    assert s.comparing is None
    assert s.pivot is None
    assert s.auxiliary == (0, 1)


def test_step_and_trace_are_frozen() -> None:
    trace = Recorder([2, 1], "Demo Sort", "x").finish()

    with pytest.raises(dataclasses.FrozenInstanceError):
        trace.swaps = 5  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        trace.steps[0].description = "changed"  # type: ignore[misc]
    assert isinstance(trace.steps, tuple)


def test_step_to_dict_omits_unset_roles_and_flattens_auxiliary() -> None:
    s = Step(array=(1, 2), description="d", pivot=0, auxiliary=((1,), (2, 3)))

    assert s.to_dict() == {
        "array": [1, 2],
        "description": "d",
        "pivot": 0,
        "auxiliary": [[1], [2, 3]],
    }


def test_trace_to_dict() -> None:
    trace = Trace(
        algorithm="Demo Sort",
        steps=(Step(array=(1,), description="only"),),
        comparisons=0,
        swaps=0,
    )

    assert trace.to_dict() == {
        "algorithm": "Demo Sort",
        "comparisons": 0,
        "swaps": 0,
        "steps": [{"array": [1], "description": "only"}],
    }


def test_finish_logs_a_debug_summary(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="sorttrace.trace"):
        Recorder([2, 1], "Demo Sort", "x").finish()

    assert any("Demo Sort: n=2" in r.getMessage() for r in caplog.records)
