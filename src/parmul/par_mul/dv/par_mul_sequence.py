# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/par_mul_sequence.py

"""Sequences for par_mul verification."""

from __future__ import annotations

from parmul.shared.dv import BaseSequence, utils_cli

from .par_mul_item import ParMulItem
from .par_mul_stimulus import DIRECTED_REQUESTS, ParMulStimulus


class ParMulSequence(BaseSequence[ParMulItem]):
    """Weighted-random requests; length from PAR_MUL_SEQ_LEN."""

    def __init__(self, name: str = "par_mul_seq", seq_len: int = 1000) -> None:
        super().__init__(name, seq_len)
        self.seq_len = max(0, utils_cli.get_int_setting("PAR_MUL_SEQ_LEN", self.seq_len))
        self.stim = ParMulStimulus()

    async def set_item_inputs(self, item: ParMulItem, index: int) -> None:
        item.set_request(self.stim.draw())


class ParMulClosureSequence(ParMulSequence):
    """Random requests with a large budget, meant to run until closure."""

    def __init__(self, name: str = "par_mul_closure_seq", seq_len: int = 20_000) -> None:
        super().__init__(name, seq_len)
        self.seq_len = max(
            0, utils_cli.get_int_setting("PAR_MUL_CLOSURE_SEQ_LEN", seq_len)
        )


class ParMulDirectedSequence(BaseSequence[ParMulItem]):
    """Corner operands, each parity combination, and a reset in between.

    Enough on its own to hit every coverage goal.
    """

    def __init__(self, name: str = "par_mul_directed_seq", seq_len: int = 0) -> None:
        super().__init__(name, len(DIRECTED_REQUESTS))
        self.requests = DIRECTED_REQUESTS

    async def set_item_inputs(self, item: ParMulItem, index: int) -> None:
        item.set_request(self.requests[index])
