# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_par_mul_calc.py

import random

import pytest

from parmul.par_mul.dv.par_mul_calc import (
    expected_input_parity_error,
    expected_product,
    expected_product_parity,
    expected_response,
    operand_parity,
    parity,
    to_signed,
    to_unsigned,
)
from parmul.par_mul.dv.par_mul_types import (
    OPERAND_MAX,
    OPERAND_MIN,
    PRODUCT_WIDTH,
    MulRequest,
    MulResponse,
)

PRODUCT_MIN = -(1 << (PRODUCT_WIDTH - 1))
PRODUCT_MAX = (1 << (PRODUCT_WIDTH - 1)) - 1


def _random_operands(n: int, seed: int = 7) -> list[tuple[int, int]]:
    rng = random.Random(seed)
    return [
        (rng.randint(OPERAND_MIN, OPERAND_MAX), rng.randint(OPERAND_MIN, OPERAND_MAX))
        for _ in range(n)
    ]


@pytest.mark.parametrize(
    "a, b, product",
    [
        (OPERAND_MIN, OPERAND_MIN, 1073741824),
        (OPERAND_MAX, OPERAND_MAX, 1073676289),
        (OPERAND_MIN, OPERAND_MAX, -1073709056),
        (5, -3, -15),
        (0, OPERAND_MIN, 0),
        (-1, -1, 1),
    ],
)
def test_expected_product_boundaries(a, b, product):
    assert expected_product(a, b) == product


def test_product_always_fits_int32():
    for a, b in _random_operands(2000):
        p = expected_product(a, b)
        assert PRODUCT_MIN <= p <= PRODUCT_MAX
        assert to_signed(to_unsigned(p, PRODUCT_WIDTH), PRODUCT_WIDTH) == p


def test_to_signed_and_unsigned():
    assert to_signed(0x8000, 16) == -32768
    assert to_signed(0x7FFF, 16) == 32767
    assert to_signed(0xFFFF, 16) == -1
    assert to_unsigned(-1, 16) == 0xFFFF
    assert to_unsigned(-15, 32) == 0xFFFF_FFF1


def test_product_parity_is_xor_fold():
    for a, b in _random_operands(500):
        bits = to_unsigned(a * b, PRODUCT_WIDTH)
        fold = 0
        for i in range(PRODUCT_WIDTH):
            fold ^= (bits >> i) & 1
        assert expected_product_parity(a, b) == fold


def test_flipping_one_product_bit_flips_parity():
    for a, b in _random_operands(50, seed=11):
        p = to_unsigned(expected_product(a, b), PRODUCT_WIDTH)
        base = parity(p, PRODUCT_WIDTH)
        for i in range(PRODUCT_WIDTH):
            assert parity(p ^ (1 << i), PRODUCT_WIDTH) == base ^ 1


def test_true_parities_never_flag_an_error():
    for a, b in _random_operands(1000, seed=3):
        assert expected_input_parity_error(a, operand_parity(a), b, operand_parity(b)) == 0


def test_any_wrong_parity_flags_an_error():
    for a, b in _random_operands(200, seed=5):
        pa, pb = operand_parity(a), operand_parity(b)
        assert expected_input_parity_error(a, pa ^ 1, b, pb) == 1
        assert expected_input_parity_error(a, pa, b, pb ^ 1) == 1
        assert expected_input_parity_error(a, pa ^ 1, b, pb ^ 1) == 1


def test_expected_response_five_times_minus_three():
    req = MulRequest(5, operand_parity(5), -3, operand_parity(-3))
    assert expected_response(req) == MulResponse(
        product=-15, product_parity=1, input_parity_error=0
    )


def test_expected_response_bad_parity_on_a():
    req = MulRequest(5, operand_parity(5) ^ 1, -3, operand_parity(-3))
    rsp = expected_response(req)
    assert rsp.product == -15
    assert rsp.input_parity_error == 1
