# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/par_mul_cov_model.py

"""Coverage goals for par_mul as explicit hit flags.

Three families of equivalence classes are tracked:

- op sequencing: a MULTIPLY seen, RESET then MULTIPLY, MULTIPLY then RESET
- operand corners: six goal cells of the 5x5 cross of operand classes
- parity: which of the two declared parities are wrong

Goals are (family, class) tuples. A flag only ever goes from False to True.
Classification is done by the pure functions below so that the pyuvm
coverage component and the cocotb-coverage database agree on every bin.
"""

from __future__ import annotations

from .par_mul_calc import operand_parity
from .par_mul_types import (
    OPERAND_MAX,
    OPERAND_MIN,
    OPERAND_ONES,
    OPERAND_ZERO,
    MulOp,
    MulRequest,
)

FAMILY_OP = "op"
FAMILY_CORNER = "corner"
FAMILY_PARITY = "parity"

OP_MUL = "mul"
OP_RESET_MUL = "reset_mul"
OP_MUL_RESET = "mul_reset"
OP_CLASSES: tuple[str, ...] = (OP_MUL, OP_RESET_MUL, OP_MUL_RESET)

CLASS_MIN = "min"
CLASS_MAX = "max"
CLASS_ZERO = "zero"
CLASS_ONES = "ones"
CLASS_OTHER = "other"
OPERAND_CLASSES: tuple[str, ...] = (
    CLASS_MIN,
    CLASS_MAX,
    CLASS_ZERO,
    CLASS_ONES,
    CLASS_OTHER,
)
CORNER_GOALS: tuple[tuple[str, str], ...] = (
    (CLASS_MIN, CLASS_MIN),
    (CLASS_MAX, CLASS_MAX),
    (CLASS_MIN, CLASS_MAX),
    (CLASS_MAX, CLASS_MIN),
    (CLASS_ZERO, CLASS_ZERO),
    (CLASS_ONES, CLASS_ONES),
)

PARITY_BOTH_OK = "both_ok"
PARITY_A_BAD = "a_bad"
PARITY_B_BAD = "b_bad"
PARITY_BOTH_BAD = "both_bad"
PARITY_CLASSES: tuple[str, ...] = (
    PARITY_BOTH_OK,
    PARITY_A_BAD,
    PARITY_B_BAD,
    PARITY_BOTH_BAD,
)

Goal = tuple[str, object]

ALL_GOALS: tuple[Goal, ...] = (
    *((FAMILY_OP, c) for c in OP_CLASSES),
    *((FAMILY_CORNER, c) for c in CORNER_GOALS),
    *((FAMILY_PARITY, c) for c in PARITY_CLASSES),
)

_CORNER_CLASS = {
    OPERAND_MIN: CLASS_MIN,
    OPERAND_MAX: CLASS_MAX,
    OPERAND_ZERO: CLASS_ZERO,
    OPERAND_ONES: CLASS_ONES,
}


def classify_operand(value: int) -> str:
    return _CORNER_CLASS.get(value, CLASS_OTHER)


def classify_corner(req: MulRequest) -> tuple[str, str]:
    return classify_operand(req.operand_a), classify_operand(req.operand_b)


def classify_parity(req: MulRequest) -> str:
    bad_a = operand_parity(req.operand_a) != req.parity_a
    bad_b = operand_parity(req.operand_b) != req.parity_b
    if bad_a and bad_b:
        return PARITY_BOTH_BAD
    if bad_a:
        return PARITY_A_BAD
    if bad_b:
        return PARITY_B_BAD
    return PARITY_BOTH_OK


def classify_op(prev: MulOp | None, op: MulOp) -> frozenset[str]:
    """Op-sequence classes hit when `op` follows `prev` (None at start)."""
    hits: set[str] = set()
    if op is MulOp.MULTIPLY:
        hits.add(OP_MUL)
        if prev is MulOp.RESET:
            hits.add(OP_RESET_MUL)
    elif prev is MulOp.MULTIPLY:
        hits.add(OP_MUL_RESET)
    return frozenset(hits)


class CoverageModel:
    """Hit flags for every goal in ALL_GOALS plus the op-sequence history."""

    def __init__(self) -> None:
        self._hits: dict[Goal, bool] = {g: False for g in ALL_GOALS}
        self._prev_op: MulOp | None = None
        self.transactions: int = 0
        self.resets: int = 0

    def _hit(self, goal: Goal) -> None:
        if goal in self._hits:
            self._hits[goal] = True

    def sample_op(self, op: MulOp) -> frozenset[str]:
        hits = classify_op(self._prev_op, op)
        for c in hits:
            self._hit((FAMILY_OP, c))
        self._prev_op = op
        return hits

    def sample_transaction(self, req: MulRequest) -> frozenset[str]:
        """Sample one completed two-beat transaction.

        Returns the op-sequence classes it hit. RESET transactions count
        for corners and parity only; their sequencing sample comes from
        sample_reset() when the reset itself is observed.
        """
        self.transactions += 1
        self._hit((FAMILY_CORNER, classify_corner(req)))
        self._hit((FAMILY_PARITY, classify_parity(req)))
        if req.op is MulOp.MULTIPLY:
            return self.sample_op(MulOp.MULTIPLY)
        return frozenset()

    def sample_reset(self) -> frozenset[str]:
        """Sample a reset assertion; restarts the op-sequence history."""
        self.resets += 1
        return self.sample_op(MulOp.RESET)

    def is_hit(self, goal: Goal) -> bool:
        return self._hits[goal]

    def hit_goals(self) -> list[Goal]:
        return [g for g, v in self._hits.items() if v]

    def missing(self) -> list[Goal]:
        return [g for g, v in self._hits.items() if not v]

    @property
    def closed(self) -> bool:
        return all(self._hits.values())

    @property
    def percent(self) -> float:
        return 100.0 * len(self.hit_goals()) / len(self._hits)
