# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/par_mul_monitor_out.py

"""Monitor for DUT outputs."""

from __future__ import annotations

from typing import Any

from parmul.shared.dv import BaseMonitorOut, utils_dv

from .par_mul_item import ParMulItem


class ParMulMonitorOut(BaseMonitorOut[ParMulItem]):  # pylint: disable=too-many-ancestors
    """Sample a response on every falling edge with data_out_valid high."""

    async def sample_dut(self, dut: Any) -> ParMulItem | None:
        await self.sample_dut_edge()
        if self._get_val(dut.data_out_valid.value) != 1:
            return None
        item = ParMulItem(f"rsp{self.item_count}")
        item.product = utils_dv.get_signal_value_signed(dut.data_out.value)
        item.product_parity = self._get_val(dut.data_out_parity.value)
        item.input_parity_error = self._get_val(dut.input_parity_error.value)
        return item
