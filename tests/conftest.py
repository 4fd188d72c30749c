"""
Shared fixtures for the sorttrace tests.

Inserts the project `src/` onto sys.path so `pytest` works from the repo root
without installing the package.
"""

from __future__ import annotations

import logging
import pathlib
import sys
from typing import List, Sequence

import pytest

_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))


class Tagged(int):
    """An int that remembers where it started, for stability checks."""

    def __new__(cls, value: int, tag: int) -> "Tagged":
        obj = super().__new__(cls, value)
        obj.tag = tag
        return obj


def tag_all(values: Sequence[int]) -> List[Tagged]:
    return [Tagged(v, i) for i, v in enumerate(values)]


def equal_values_keep_order(out: Sequence[int]) -> bool:
    """True iff, for every value, the tags of its copies appear in increasing order."""
    last_tag = {}
    for x in out:
        tag = getattr(x, "tag", None)
        if tag is None:
            continue
        key = int(x)
        if key in last_tag and last_tag[key] > tag:
            return False
        last_tag[key] = tag
    return True


@pytest.fixture(autouse=True)
def _reset_sorttrace_logger():
    yield
    logger = logging.getLogger("sorttrace")
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)
