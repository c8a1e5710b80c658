# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_reset_monitor.py

"""Reset monitor publishing polarity-neutral reset changes."""

from __future__ import annotations

from typing import Any

import pyuvm

from .base_monitor_in import BaseMonitorIn
from .base_reset_item import BaseResetItem


class BaseResetMonitor(BaseMonitorIn[BaseResetItem]):  # pylint: disable=too-many-ancestors
    """Publish a BaseResetItem whenever the sampled reset level changes.

    The reset is a synchronous input, so it is sampled like every other
    input: on the rising edge in ReadOnly. The first resolvable sample is
    always published. Consumers use `active` and never the raw level.

    Configuration (config_db):
        reset_name (str): reset signal (default "rst_n")
        reset_active_low (bool): polarity (default True)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self._reset_init_defaults()
        self._last_val: int | None = None

    def end_of_elaboration_phase(self) -> None:
        super().end_of_elaboration_phase()
        self._reset_pull_config()

    async def sample_dut(self, dut: Any) -> BaseResetItem | None:
        assert self._rst is not None, "sample_dut before end_of_elaboration_phase"
        await self.sample_dut_edge()
        val = self._get_val(self._rst.value)
        if val is None or val == self._last_val:
            return None
        self._last_val = val
        tr = pyuvm.uvm_factory().create_object_by_type(BaseResetItem, name="reset_tr")
        tr.value = val
        tr.active = self.calc_active(val)
        self.logger.debug("reset %s", "asserted" if tr.active else "released")
        return tr
