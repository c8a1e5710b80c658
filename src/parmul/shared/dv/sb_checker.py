# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/sb_checker.py

"""In-order scoreboard engine shared by comparators.

This module holds the bookkeeping behind BaseSbComparator with no cocotb or
pyuvm dependency:

- ScoreboardQueue: FIFO of expected transactions, oldest first
- InOrderChecker: pairs each actual with the oldest expected, keeps counts
- Verdict: PASSED until the first mismatch, then FAILED for good

Popping an empty queue means a response arrived with nothing outstanding.
That is a bench or protocol bug, not a DUT mismatch, so it raises
ScoreboardUnderflowError instead of being counted.

Reference:
    C.E. Cummings, "OVM/UVM Scoreboards - Fundamental Architectures,"
    SNUG 2013 (Silicon Valley) - in-order array scoreboard
"""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Any, Callable, Generic, Iterable, NamedTuple, TypeVar

T = TypeVar("T")


class ScoreboardUnderflowError(RuntimeError):
    """An actual transaction arrived while no expected one was outstanding."""


class Verdict(Enum):
    PASSED = "PASSED"
    FAILED = "FAILED"


class FieldDiff(NamedTuple):
    """One output field that differs between expected and actual."""

    field: str
    expected: Any
    actual: Any


def diff_fields(exp: Any, act: Any, fields: Iterable[str]) -> list[FieldDiff]:
    """Return the named fields whose values differ (declared order)."""
    out: list[FieldDiff] = []
    for f in fields:
        e = getattr(exp, f)
        a = getattr(act, f)
        if e != a:
            out.append(FieldDiff(f, e, a))
    return out


class ScoreboardQueue(Generic[T]):
    """FIFO of outstanding expected transactions."""

    def __init__(self) -> None:
        self._q: deque[T] = deque()

    def __len__(self) -> int:
        return len(self._q)

    def push(self, item: T) -> None:
        self._q.append(item)

    def pop_oldest(self) -> T:
        if not self._q:
            raise ScoreboardUnderflowError(
                "scoreboard queue underflow: response with no outstanding transaction"
            )
        return self._q.popleft()

    def clear(self) -> int:
        """Drop everything; return how many entries were discarded."""
        n = len(self._q)
        self._q.clear()
        return n


class InOrderChecker(Generic[T]):
    """Match actuals to expecteds in arrival order and keep the verdict.

    diff(exp, act) returns the list of differing fields; empty means pass.
    """

    def __init__(self, diff: Callable[[T, T], list[FieldDiff]]) -> None:
        self._diff = diff
        self.queue: ScoreboardQueue[T] = ScoreboardQueue()
        self.vect_cnt: int = 0
        self.pass_cnt: int = 0
        self.err_cnt: int = 0
        self.flushed_cnt: int = 0

    @property
    def verdict(self) -> Verdict:
        return Verdict.FAILED if self.err_cnt else Verdict.PASSED

    @property
    def outstanding(self) -> int:
        return len(self.queue)

    def expect(self, exp: T) -> None:
        self.queue.push(exp)

    def check(self, act: T) -> tuple[T, list[FieldDiff]]:
        """Pop the oldest expected, compare, count; return (expected, diffs)."""
        exp = self.queue.pop_oldest()
        diffs = self._diff(exp, act)
        self.vect_cnt += 1
        if diffs:
            self.err_cnt += 1
        else:
            self.pass_cnt += 1
        return exp, diffs

    def reset(self) -> int:
        """Clear outstanding expecteds; counts and verdict are kept."""
        n = self.queue.clear()
        self.flushed_cnt += n
        return n
