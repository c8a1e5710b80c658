# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/par_mul_types.py

"""Plain records exchanged by the par_mul model, stimulus, and checker.

Nothing here touches cocotb or pyuvm, so the model layer can be exercised
directly under pytest.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

OPERAND_WIDTH = 16
PRODUCT_WIDTH = 32

OPERAND_MIN = -(1 << (OPERAND_WIDTH - 1))  # 0x8000
OPERAND_MAX = (1 << (OPERAND_WIDTH - 1)) - 1  # 0x7FFF
OPERAND_ZERO = 0  # 0x0000
OPERAND_ONES = -1  # 0xFFFF


class MulOp(str, Enum):
    """Operation carried by one transaction."""

    MULTIPLY = "MULTIPLY"
    RESET = "RESET"


@dataclass(frozen=True)
class MulRequest:
    """Two operands with their declared parities, plus the operation.

    Parities are the bits presented on data_in_parity and may be wrong on
    purpose.
    """

    operand_a: int
    parity_a: int
    operand_b: int
    parity_b: int
    op: MulOp = MulOp.MULTIPLY

    def describe(self) -> str:
        return (
            f"A={self.operand_a} pA={self.parity_a} "
            f"B={self.operand_b} pB={self.parity_b} op={self.op.value}"
        )


@dataclass(frozen=True)
class MulResponse:
    """One response as seen on data_out / data_out_parity / input_parity_error."""

    product: int
    product_parity: int
    input_parity_error: int


RESPONSE_FIELDS: tuple[str, ...] = ("product", "product_parity", "input_parity_error")
