# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/par_mul_ref_model.py

"""par_mul reference model."""

from __future__ import annotations

from parmul.shared.dv import BaseRefModel

from .par_mul_calc import expected_response
from .par_mul_item import ParMulItem
from .par_mul_types import MulOp


class ParMulRefModel(BaseRefModel[ParMulItem]):
    """Stateless: each MULTIPLY maps to one response, RESET to none."""

    def __init__(self, name: str = "par_mul_ref_model") -> None:
        super().__init__(name)

    def calc_exp(self, tr: ParMulItem) -> ParMulItem | None:
        if tr.op is MulOp.RESET:
            return None
        tr.set_response(expected_response(tr.to_request()))
        return tr
