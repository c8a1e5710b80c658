# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_par_mul_cov_model.py

import random

import pytest

from parmul.par_mul.dv.par_mul_cov_model import (
    ALL_GOALS,
    CORNER_GOALS,
    FAMILY_CORNER,
    FAMILY_OP,
    FAMILY_PARITY,
    OP_MUL,
    OP_MUL_RESET,
    OP_RESET_MUL,
    CoverageModel,
    classify_op,
    classify_operand,
    classify_parity,
)
from parmul.par_mul.dv.par_mul_stimulus import (
    DIRECTED_REQUESTS,
    ParMulStimulus,
    make_request,
)
from parmul.par_mul.dv.par_mul_types import (
    OPERAND_MAX,
    OPERAND_MIN,
    OPERAND_ONES,
    OPERAND_ZERO,
    MulOp,
)


def _replay(model: CoverageModel, requests) -> None:
    """Feed requests the way the bench sees them: a RESET op is followed by a reset."""
    for req in requests:
        model.sample_transaction(req)
        if req.op is MulOp.RESET:
            model.sample_reset()


def test_goal_count():
    assert len(ALL_GOALS) == 13
    assert len(CORNER_GOALS) == 6


@pytest.mark.parametrize(
    "value, cls",
    [
        (OPERAND_MIN, "min"),
        (OPERAND_MAX, "max"),
        (OPERAND_ZERO, "zero"),
        (OPERAND_ONES, "ones"),
        (1, "other"),
        (-32767, "other"),
    ],
)
def test_classify_operand(value, cls):
    assert classify_operand(value) == cls


def test_classify_parity():
    assert classify_parity(make_request(5, -3)) == "both_ok"
    assert classify_parity(make_request(5, -3, bad_a=True)) == "a_bad"
    assert classify_parity(make_request(5, -3, bad_b=True)) == "b_bad"
    assert classify_parity(make_request(5, -3, bad_a=True, bad_b=True)) == "both_bad"


def test_classify_op():
    assert classify_op(None, MulOp.MULTIPLY) == {OP_MUL}
    assert classify_op(MulOp.RESET, MulOp.MULTIPLY) == {OP_MUL, OP_RESET_MUL}
    assert classify_op(MulOp.MULTIPLY, MulOp.RESET) == {OP_MUL_RESET}
    assert classify_op(None, MulOp.RESET) == frozenset()
    assert classify_op(MulOp.RESET, MulOp.RESET) == frozenset()


def test_fresh_model_is_empty():
    model = CoverageModel()
    assert model.hit_goals() == []
    assert model.missing() == list(ALL_GOALS)
    assert not model.closed
    assert model.percent == 0.0


def test_four_diagonal_corners_hit_four_corner_goals():
    model = CoverageModel()
    _replay(
        model,
        [
            make_request(OPERAND_MIN, OPERAND_MIN),
            make_request(OPERAND_MAX, OPERAND_MAX),
            make_request(OPERAND_ZERO, OPERAND_ZERO),
            make_request(OPERAND_ONES, OPERAND_ONES),
        ],
    )
    corner_hits = {g for fam, g in model.hit_goals() if fam == FAMILY_CORNER}
    assert corner_hits == {("min", "min"), ("max", "max"), ("zero", "zero"), ("ones", "ones")}
    assert not model.is_hit((FAMILY_CORNER, ("min", "max")))
    assert not model.is_hit((FAMILY_CORNER, ("max", "min")))


def test_off_diagonal_pairs_complete_the_corner_goals():
    model = CoverageModel()
    _replay(
        model,
        [
            make_request(OPERAND_MIN, OPERAND_MIN),
            make_request(OPERAND_MAX, OPERAND_MAX),
            make_request(OPERAND_ZERO, OPERAND_ZERO),
            make_request(OPERAND_ONES, OPERAND_ONES),
            make_request(OPERAND_MIN, OPERAND_MAX),
            make_request(OPERAND_MAX, OPERAND_MIN),
        ],
    )
    assert all(model.is_hit((FAMILY_CORNER, g)) for g in CORNER_GOALS)


def test_non_goal_cells_are_not_tracked():
    model = CoverageModel()
    model.sample_transaction(make_request(OPERAND_MIN, 7))
    assert not any(fam == FAMILY_CORNER for fam, _ in model.hit_goals())


def test_reset_transaction_counts_for_corners_and_parity_only():
    model = CoverageModel()
    hits = model.sample_transaction(
        make_request(OPERAND_ZERO, OPERAND_ZERO, bad_b=True, op=MulOp.RESET)
    )
    assert hits == frozenset()
    assert model.is_hit((FAMILY_CORNER, ("zero", "zero")))
    assert model.is_hit((FAMILY_PARITY, "b_bad"))
    assert not any(fam == FAMILY_OP for fam, _ in model.hit_goals())


def test_op_sequence_history():
    model = CoverageModel()
    assert model.sample_transaction(make_request(1, 2)) == {OP_MUL}
    assert model.sample_reset() == {OP_MUL_RESET}
    assert model.sample_transaction(make_request(1, 2)) == {OP_MUL, OP_RESET_MUL}
    assert model.resets == 1
    assert model.transactions == 2


def test_reset_never_clears_hits():
    model = CoverageModel()
    model.sample_transaction(make_request(OPERAND_MAX, OPERAND_MAX))
    before = model.hit_goals()
    model.sample_reset()
    assert set(before) <= set(model.hit_goals())


def test_directed_requests_close_coverage_after_power_on_reset():
    model = CoverageModel()
    model.sample_reset()
    _replay(model, DIRECTED_REQUESTS)
    assert model.missing() == []
    assert model.closed
    assert model.percent == 100.0


def test_random_stimulus_closes_coverage():
    stim = ParMulStimulus(random.Random(2024))
    model = CoverageModel()
    model.sample_reset()
    for _ in range(20_000):
        _replay(model, [stim.draw()])
        if model.closed:
            break
    assert model.closed, model.missing()
