# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/par_mul_driver.py

"""Two-beat handshake driver for par_mul."""

from __future__ import annotations

from typing import Any

import pyuvm

from parmul.shared.dv import BaseDriver, utils_dv

from .par_mul_calc import to_unsigned
from .par_mul_item import ParMulItem
from .par_mul_types import OPERAND_WIDTH, MulOp


class ParMulDriver(BaseDriver[ParMulItem]):  # pylint: disable=too-many-ancestors
    """Present A then B, then either reset the DUT or wait for its response.

    Per beat: sample busy on falling edges until it is low, then on the next
    falling edge drive data_in / data_in_parity with data_in_valid high, and
    drop valid one period later. For a RESET item the reset is asserted on
    the same edge that drops the second valid. For a MULTIPLY item the driver
    waits for data_out_valid before taking the next item.

    par_mul_response_timeout_cycles (config_db, default 0) bounds every wait;
    0 waits forever.
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.initial_dut_input_values = {
            "data_in": 0,
            "data_in_parity": 0,
            "data_in_valid": 0,
        }
        self.response_timeout_cycles: int = 0

    def end_of_elaboration_phase(self) -> None:
        super().end_of_elaboration_phase()
        v = utils_dv.uvm_config_db_get_try(self, "par_mul_response_timeout_cycles")
        if isinstance(v, int):
            self.response_timeout_cycles = max(0, v)

    async def drive_beat(self, dut: Any, value: int, parity: int) -> None:
        await self.wait_level("busy", 0, self.response_timeout_cycles)
        await self.clock_drive_edge()
        dut.data_in.value = to_unsigned(value, OPERAND_WIDTH)
        dut.data_in_parity.value = parity & 1
        dut.data_in_valid.value = 1
        await self.clock_drive_edge()
        dut.data_in_valid.value = 0

    async def drive_item(self, dut: Any, tr: ParMulItem) -> None:
        await self.drive_beat(dut, tr.operand_a, tr.parity_a)
        await self.drive_beat(dut, tr.operand_b, tr.parity_b)
        if tr.op is MulOp.RESET:
            await self.pulse_reset()
        else:
            await self.wait_level("data_out_valid", 1, self.response_timeout_cycles)
