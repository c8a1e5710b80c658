# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/par_mul_calc.py

"""Golden arithmetic for par_mul: product, product parity, parity check.

All functions are pure. Operands are signed Python ints in the 16-bit range;
the product always fits in 32 bits signed, so there is no overflow case.
"""

from __future__ import annotations

from .par_mul_types import (
    OPERAND_WIDTH,
    PRODUCT_WIDTH,
    MulRequest,
    MulResponse,
)


def to_signed(value: int, width: int) -> int:
    """Reinterpret the low `width` bits of value as two's complement."""
    value &= (1 << width) - 1
    if value >> (width - 1):
        value -= 1 << width
    return value


def to_unsigned(value: int, width: int) -> int:
    """Two's complement bit pattern of value in `width` bits."""
    return value & ((1 << width) - 1)


def parity(value: int, width: int) -> int:
    """XOR of all `width` bits of value (two's complement for negatives)."""
    return bin(to_unsigned(value, width)).count("1") & 1


def operand_parity(value: int) -> int:
    return parity(value, OPERAND_WIDTH)


def expected_product(a: int, b: int) -> int:
    return a * b


def expected_product_parity(a: int, b: int) -> int:
    return parity(expected_product(a, b), PRODUCT_WIDTH)


def expected_input_parity_error(a: int, parity_a: int, b: int, parity_b: int) -> int:
    """1 if either declared parity disagrees with the operand's true parity."""
    bad_a = operand_parity(a) != (parity_a & 1)
    bad_b = operand_parity(b) != (parity_b & 1)
    return int(bad_a or bad_b)


def expected_response(req: MulRequest) -> MulResponse:
    """Everything the DUT should report for one MULTIPLY request."""
    return MulResponse(
        product=expected_product(req.operand_a, req.operand_b),
        product_parity=expected_product_parity(req.operand_a, req.operand_b),
        input_parity_error=expected_input_parity_error(
            req.operand_a, req.parity_a, req.operand_b, req.parity_b
        ),
    )
