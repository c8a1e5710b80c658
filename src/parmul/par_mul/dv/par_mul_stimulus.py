# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/par_mul_stimulus.py

"""Weighted random draws for par_mul transactions, and the directed list."""

from __future__ import annotations

import random

from .par_mul_calc import operand_parity, to_signed
from .par_mul_types import (
    OPERAND_MAX,
    OPERAND_MIN,
    OPERAND_ONES,
    OPERAND_WIDTH,
    OPERAND_ZERO,
    MulOp,
    MulRequest,
)

# Selector slots 0..3 pick a corner value; 4..7 pick a uniform random value.
CORNER_VALUES: tuple[int, ...] = (OPERAND_ZERO, OPERAND_MIN, OPERAND_MAX, OPERAND_ONES)
SELECTOR_WAYS = 8
PARITY_FLIP_WAYS = 8
RESET_WAYS = 8


class ParMulStimulus:
    """Draw operands, parities, and operations with the bench's weights.

    - operand: 1/8 each of 0x0000, 0x8000, 0x7FFF, 0xFFFF; 4/8 uniform
    - parity: true parity, inverted with probability 1/8
    - op: RESET with probability 1/8, otherwise MULTIPLY

    The only state is the random source. When none is given a private
    random.Random is seeded from the global generator, which cocotb seeds
    from COCOTB_RANDOM_SEED, so runs replay from their seed.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random(random.getrandbits(64))

    def draw_operand(self) -> int:
        sel = self._rng.randrange(SELECTOR_WAYS)
        if sel < len(CORNER_VALUES):
            return CORNER_VALUES[sel]
        return to_signed(self._rng.getrandbits(OPERAND_WIDTH), OPERAND_WIDTH)

    def draw_parity(self, value: int) -> int:
        p = operand_parity(value)
        if self._rng.randrange(PARITY_FLIP_WAYS) == 0:
            p ^= 1
        return p

    def draw_op(self) -> MulOp:
        if self._rng.randrange(RESET_WAYS) == 0:
            return MulOp.RESET
        return MulOp.MULTIPLY

    def draw(self) -> MulRequest:
        a = self.draw_operand()
        pa = self.draw_parity(a)
        b = self.draw_operand()
        pb = self.draw_parity(b)
        return MulRequest(a, pa, b, pb, self.draw_op())


def make_request(
    a: int,
    b: int,
    *,
    bad_a: bool = False,
    bad_b: bool = False,
    op: MulOp = MulOp.MULTIPLY,
) -> MulRequest:
    """Request with true parities, optionally inverted per operand."""
    return MulRequest(
        a, operand_parity(a) ^ int(bad_a), b, operand_parity(b) ^ int(bad_b), op
    )


# Diagonal and off-diagonal corners, all four parity classes, one mid-run
# RESET, then a MULTIPLY after it.
DIRECTED_REQUESTS: tuple[MulRequest, ...] = (
    make_request(OPERAND_MIN, OPERAND_MIN),
    make_request(OPERAND_MAX, OPERAND_MAX),
    make_request(OPERAND_ZERO, OPERAND_ZERO),
    make_request(OPERAND_ONES, OPERAND_ONES),
    make_request(OPERAND_MIN, OPERAND_MAX),
    make_request(OPERAND_MAX, OPERAND_MIN),
    make_request(5, -3),
    make_request(5, -3, bad_a=True),
    make_request(5, -3, bad_b=True),
    make_request(5, -3, bad_a=True, bad_b=True),
    make_request(1234, -4321, op=MulOp.RESET),
    make_request(-7, 9),
)
