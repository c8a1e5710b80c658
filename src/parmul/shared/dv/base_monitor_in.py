# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_monitor_in.py

"""Base monitor for DUT inputs (rising edge)."""

from __future__ import annotations

from typing import Generic, TypeVar

import pyuvm

from .base_item import BaseItem
from .base_monitor import BaseMonitor

T = TypeVar("T", bound=BaseItem)


class BaseMonitorIn(BaseMonitor[T], Generic[T]):  # pylint: disable=too-many-ancestors
    """Sample DUT inputs where the DUT does: the rising edge, in ReadOnly.

    Inputs are written on the falling edge, so at the rising edge they have
    been stable for half a period and match what the DUT registers.

    Ports:
        ap: each transaction on the edge the DUT accepts it (scoreboard)
        cov_ap: each transaction once its kind is final (coverage)

    By default both carry the same item on the same edge. A monitor that only
    learns the kind of a transaction on a later edge sets late_classification
    and writes cov_ap itself.
    """

    late_classification: bool = False

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.cov_ap: pyuvm.uvm_analysis_port

    def build_phase(self) -> None:
        super().build_phase()
        self.cov_ap = pyuvm.uvm_analysis_port("cov_ap", self)

    def publish(self, tr: T) -> None:
        super().publish(tr)
        if not self.late_classification:
            self.cov_ap.write(tr)

    async def sample_dut_edge(self) -> None:
        await self.clock_sample_rising()
