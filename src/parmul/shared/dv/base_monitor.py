# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_monitor.py

"""Base monitor: sample, publish on the analysis port, repeat."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_clock_mixin import BaseClockMixin
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseMonitor(BaseClockMixin, pyuvm.uvm_monitor, Generic[T]):
    """Monitor run loop with an analysis port.

    sample_dut() waits for its own edge and returns an item, or None when the
    edge carried nothing to report. publish() writes items to `ap` in the
    same simulation phase they were sampled in; subscribers run synchronously.

    Subclasses implement:
        sample_dut_edge(): wait for the sampling point
        sample_dut(dut): return the next item or None
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self.ap: pyuvm.uvm_analysis_port
        self.item_count: int = 0
        self._get_val = utils_dv.get_signal_value_int

    def build_phase(self) -> None:
        super().build_phase()
        self.ap = pyuvm.uvm_analysis_port("ap", self)

    def end_of_elaboration_phase(self) -> None:
        super().end_of_elaboration_phase()
        self._clock_pull_config()
        self._clock_bind_handles()

    async def run_phase(self) -> None:
        tr: T | None
        while True:
            tr = await self.sample_dut(self._dut)
            if tr is not None:
                self.publish(tr)

    def publish(self, tr: T) -> None:
        self.item_count += 1
        self.ap.write(tr)

    async def sample_dut_edge(self) -> None:
        raise NotImplementedError("Implement sample_dut_edge here")

    async def sample_dut(self, dut: Any) -> T | None:
        raise NotImplementedError("Implement sample_dut here")
