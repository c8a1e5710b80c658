# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_agent.py

"""Base agent wiring sequencer, driver, and monitors (factory-friendly)."""

from __future__ import annotations

import pyuvm

from . import utils_dv
from .base_driver import BaseDriver
from .base_monitor_in import BaseMonitorIn
from .base_monitor_out import BaseMonitorOut
from .base_sequencer import BaseSequencer


class BaseAgent(pyuvm.uvm_agent):
    """Sequencer, driver, input monitor and output monitor.

    The driver and sequencer exist only when the agent is active. The two
    monitors are always built; their ports are re-exported as ap_in,
    ap_cov and ap_out so the environment never reaches inside the agent.

    Reference:
        https://github.com/paradigm-works/uvmtb_template/blob/main/tb_agent.svh
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.ap_in: pyuvm.uvm_analysis_port
        self.ap_cov: pyuvm.uvm_analysis_port
        self.ap_out: pyuvm.uvm_analysis_port
        self.drv: BaseDriver
        self.mon_in: BaseMonitorIn
        self.mon_out: BaseMonitorOut
        self.sqr: BaseSequencer

    def build_phase(self) -> None:
        super().build_phase()
        create = pyuvm.uvm_factory().create_component_by_type
        path = self.get_full_name()
        if self.is_active == pyuvm.uvm_active_passive_enum.UVM_ACTIVE:
            self.drv = create(BaseDriver, parent_inst_path=path, name="drv", parent=self)
            self.sqr = create(
                BaseSequencer, parent_inst_path=path, name="sqr", parent=self
            )
        self.mon_in = create(
            BaseMonitorIn, parent_inst_path=path, name="mon_in", parent=self
        )
        self.mon_out = create(
            BaseMonitorOut, parent_inst_path=path, name="mon_out", parent=self
        )
        self.ap_in = pyuvm.uvm_analysis_port("ap_in", self)
        self.ap_cov = pyuvm.uvm_analysis_port("ap_cov", self)
        self.ap_out = pyuvm.uvm_analysis_port("ap_out", self)

    def connect_phase(self) -> None:
        super().connect_phase()
        if self.is_active == pyuvm.uvm_active_passive_enum.UVM_ACTIVE:
            self.drv.seq_item_port.connect(self.sqr.seq_item_export)
        self.mon_in.ap.connect(self.ap_in)
        self.mon_in.cov_ap.connect(self.ap_cov)
        self.mon_out.ap.connect(self.ap_out)
