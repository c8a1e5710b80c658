# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/par_mul_item.py

"""Sequence item for par_mul verification."""

from __future__ import annotations

from parmul.shared.dv import BaseItem

from .par_mul_types import MulOp, MulRequest, MulResponse


class ParMulItem(BaseItem):
    """One request (inputs) and its response (outputs).

    Sequences and the input monitor fill the inputs. The reference model and
    the output monitor fill the outputs.
    """

    def __init__(self, name: str = "par_mul_item") -> None:
        super().__init__(name)
        self.operand_a: int = 0
        self.parity_a: int = 0
        self.operand_b: int = 0
        self.parity_b: int = 0
        self.op: MulOp = MulOp.MULTIPLY
        self.product: int | None = None
        self.product_parity: int | None = None
        self.input_parity_error: int | None = None

    def _in_fields(self) -> tuple[str, ...]:
        return ("operand_a", "parity_a", "operand_b", "parity_b", "op")

    def _out_fields(self) -> tuple[str, ...]:
        return ("product", "product_parity", "input_parity_error")

    def set_request(self, req: MulRequest) -> None:
        self.operand_a = req.operand_a
        self.parity_a = req.parity_a
        self.operand_b = req.operand_b
        self.parity_b = req.parity_b
        self.op = req.op

    def to_request(self) -> MulRequest:
        return MulRequest(
            self.operand_a, self.parity_a, self.operand_b, self.parity_b, self.op
        )

    def set_response(self, rsp: MulResponse) -> None:
        self.product = rsp.product
        self.product_parity = rsp.product_parity
        self.input_parity_error = rsp.input_parity_error
