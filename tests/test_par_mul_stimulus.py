# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_par_mul_stimulus.py

import random
from collections import Counter

from parmul.par_mul.dv.par_mul_calc import operand_parity
from parmul.par_mul.dv.par_mul_stimulus import CORNER_VALUES, ParMulStimulus
from parmul.par_mul.dv.par_mul_types import OPERAND_MAX, OPERAND_MIN, MulOp

N = 40_000


def test_same_seed_same_stream():
    a = ParMulStimulus(random.Random(123))
    b = ParMulStimulus(random.Random(123))
    assert [a.draw() for _ in range(200)] == [b.draw() for _ in range(200)]


def test_operands_in_range():
    stim = ParMulStimulus(random.Random(1))
    for _ in range(5000):
        v = stim.draw_operand()
        assert OPERAND_MIN <= v <= OPERAND_MAX


def test_corner_values_are_weighted_one_eighth_each():
    stim = ParMulStimulus(random.Random(2))
    counts = Counter(stim.draw_operand() for _ in range(N))
    for corner in CORNER_VALUES:
        # 1/8 plus a negligible share from the uniform half
        assert abs(counts[corner] / N - 0.125) < 0.01


def test_parity_flip_rate_is_one_eighth():
    stim = ParMulStimulus(random.Random(3))
    flips = 0
    for _ in range(N):
        v = stim.draw_operand()
        flips += stim.draw_parity(v) != operand_parity(v)
    assert abs(flips / N - 0.125) < 0.01


def test_reset_rate_is_one_eighth():
    stim = ParMulStimulus(random.Random(4))
    resets = sum(stim.draw_op() is MulOp.RESET for _ in range(N))
    assert abs(resets / N - 0.125) < 0.01


def test_default_source_follows_global_seed():
    random.seed(99)
    first = [ParMulStimulus().draw() for _ in range(5)]
    random.seed(99)
    again = [ParMulStimulus().draw() for _ in range(5)]
    assert first == again
