# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/par_mul_monitor_in.py

"""Monitor for DUT inputs: rebuilds two-beat transactions."""

from __future__ import annotations

from typing import Any

import pyuvm

from parmul.shared.dv import BaseMonitorIn, utils_dv

from .par_mul_beat import BeatTracker
from .par_mul_item import ParMulItem
from .par_mul_types import MulRequest


class ParMulMonitorIn(BaseMonitorIn[ParMulItem]):  # pylint: disable=too-many-ancestors
    """Rebuild A/B pairs from the pins.

    The pair is written to `ap` on the edge that accepts its B beat, as a
    MULTIPLY. On the next edge the same pair goes to `cov_ap` as MULTIPLY or,
    when that edge has reset asserted, RESET. An unknown reset level counts
    as reset asserted.
    """

    late_classification = True

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self._reset_init_defaults()
        self.beats = BeatTracker()
        self.committed_count: int = 0

    def end_of_elaboration_phase(self) -> None:
        super().end_of_elaboration_phase()
        self._reset_pull_config()

    async def sample_dut(self, dut: Any) -> ParMulItem | None:
        assert self._rst is not None, "sample_dut before end_of_elaboration_phase"
        await self.sample_dut_edge()
        rst = self._get_val(self._rst.value)
        edge = self.beats.step(
            reset=rst is None or self.calc_active(rst),
            valid=self._get_val(dut.data_in_valid.value) == 1,
            value=utils_dv.get_signal_value_signed(dut.data_in.value) or 0,
            parity=self._get_val(dut.data_in_parity.value) or 0,
        )
        if edge.committed is not None:
            self.committed_count += 1
            self.logger.debug("committed %s", edge.committed.describe())
            self.cov_ap.write(self._item(f"op{self.committed_count}", edge.committed))
        if edge.accepted is None:
            return None
        self.logger.debug("accepted %s", edge.accepted.describe())
        return self._item(f"item{self.item_count}", edge.accepted)

    @staticmethod
    def _item(name: str, req: MulRequest) -> ParMulItem:
        item = ParMulItem(name)
        item.set_request(req)
        return item
