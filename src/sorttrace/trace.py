"""
Trace records and the shared step-recording helper.

Every algorithm in `sorttrace.algorithms` builds its trace through a
`Recorder`. The recorder owns the working copy of the input, the two
counters, and the growing list of steps; algorithms never touch the caller's
sequence.

Public API (stable):
    Step      -- one immutable snapshot of a run
    Trace     -- the complete result of one run: steps + counters
    Recorder  -- helper passed into each algorithm body

Conventions:
- Index roles (`comparing`, `swapping`, `sorted`) are tuples of ints; `pivot`
  is a single int. Unset roles are None.
- `array` is a full snapshot, never a diff, so a display layer can jump to any
  step index.
- A `swapping` step is recorded *after* the write it documents.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

Number = Union[int, float]

__all__ = ["Number", "Step", "Trace", "Recorder", "TRIVIAL_DESCRIPTION"]

logger = logging.getLogger(__name__)

TRIVIAL_DESCRIPTION = "Array has 1 or fewer elements, already sorted!"


@dataclass(frozen=True)
class Step:
    """One recorded instant of a sort run."""

    array: Tuple[Number, ...]
    description: str
    comparing: Optional[Tuple[int, ...]] = None
    swapping: Optional[Tuple[int, ...]] = None
    sorted: Optional[Tuple[int, ...]] = None
    pivot: Optional[int] = None
    auxiliary: Optional[Tuple[Any, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"array": list(self.array), "description": self.description}
        for role in ("comparing", "swapping", "sorted"):
            value = getattr(self, role)
            if value is not None:
                out[role] = list(value)
        if self.pivot is not None:
            out["pivot"] = self.pivot
        if self.auxiliary is not None:
            out["auxiliary"] = _plain(self.auxiliary)
        return out


@dataclass(frozen=True)
class Trace:
    """
    Complete record of one sort run.

    `steps` is a tuple, so a trace can be replayed from any index any number
    of times; it carries no iteration state.
    """

    algorithm: str
    steps: Tuple[Step, ...]
    comparisons: int
    swaps: int

    @property
    def initial_array(self) -> List[Number]:
        return list(self.steps[0].array)

    @property
    def final_array(self) -> List[Number]:
        return list(self.steps[-1].array)

    def __len__(self) -> int:
        return len(self.steps)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "comparisons": self.comparisons,
            "swaps": self.swaps,
            "steps": [s.to_dict() for s in self.steps],
        }


class Recorder:
    """
    Working state for a single run: the array copy, the counters, the steps.

    Construct one per call; the constructor records the opening step, and
    `finish()` records the completion step and freezes everything into a
    `Trace`. Algorithms check `rec.n > 1` before entering their loops so
    that empty and single-element inputs go straight to `finish()`.
    """

    def __init__(self, a: Sequence[Number], name: str, strategy: str) -> None:
        self.name = name
        self.arr: List[Number] = list(a)
        self.n = len(self.arr)
        self.comparisons = 0
        self.swaps = 0
        self._steps: List[Step] = []
        self.step(f"Starting {name} - {strategy}")

    # ---- counters ----

    def compare(self) -> None:
        self.comparisons += 1

    def relocate(self, count: int = 1) -> None:
        self.swaps += count

    # ---- steps ----

    def step(
        self,
        description: str,
        *,
        comparing: Optional[Iterable[int]] = None,
        swapping: Optional[Iterable[int]] = None,
        sorted: Optional[Iterable[int]] = None,
        pivot: Optional[int] = None,
        auxiliary: Optional[Iterable[Any]] = None,
    ) -> Step:
        s = Step(
            array=tuple(self.arr),
            description=description,
            comparing=self._indices(comparing),
            swapping=self._indices(swapping),
            sorted=self._indices(sorted),
            pivot=self._index(pivot),
            auxiliary=None if auxiliary is None else tuple(auxiliary),
        )
        self._steps.append(s)
        return s

    def finish(self) -> Trace:
        if self.n <= 1:
            description = TRIVIAL_DESCRIPTION
        else:
            description = f"{self.name} completed!"
        self.step(description, sorted=range(self.n))
        trace = Trace(
            algorithm=self.name,
            steps=tuple(self._steps),
            comparisons=self.comparisons,
            swaps=self.swaps,
        )
        logger.debug(
            "%s: n=%d steps=%d comparisons=%d swaps=%d",
            self.name, self.n, len(trace.steps), trace.comparisons, trace.swaps,
        )
        return trace

    # ---- helpers ----

    def _index(self, i: Optional[int]) -> Optional[int]:
        if i is None:
            return None
        if not 0 <= i < self.n:
            raise IndexError(f"{self.name}: step index {i} out of range for n={self.n}")
        return i

    def _indices(self, idxs: Optional[Iterable[int]]) -> Optional[Tuple[int, ...]]:
        if idxs is None:
            return None
        out = tuple(idxs)
        for i in out:
            self._index(i)
        return out


def _plain(obj: Any) -> Any:
    # nested tuples (bucket contents, merge halves) -> nested lists
    if isinstance(obj, tuple):
        return [_plain(x) for x in obj]
    return obj
