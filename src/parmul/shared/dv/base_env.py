# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_env.py

"""Environment scaffold (UVM-style, factory-first)."""

from __future__ import annotations

import pyuvm

from . import utils_dv
from .base_agent import BaseAgent
from .base_coverage import BaseCoverage
from .base_reset_item import BaseResetItem
from .base_reset_monitor import BaseResetMonitor
from .base_reset_sink import BaseResetSink
from .base_sb import BaseSb


class BaseEnv(pyuvm.uvm_env):
    """Build agents, coverage, scoreboard and the reset path, then wire them.

    Connections per agent:
        ap_in  -> sb.prd          (inputs as accepted, rising edge)
        ap_cov -> cov             (inputs once classified, rising edge)
        ap_out -> sb.cmp          (outputs, falling edge)
    Reset:
        mon_rst -> reset_sink -> sb.reset_change(), cov.reset_change()

    Configuration (config_db):
        coverage_en (bool): build coverage (default True)
        check_en (bool): build the scoreboard (default True)
    """

    num_agents: int = 1

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.agents: list[BaseAgent] = []
        self.cov: BaseCoverage | None = None
        self.sb: BaseSb | None = None
        self.mon_rst: BaseResetMonitor
        self.reset_sink: BaseResetSink[BaseResetItem]
        self._coverage_en: bool = True
        self._check_en: bool = True

    def build_phase(self) -> None:
        super().build_phase()
        create = pyuvm.uvm_factory().create_component_by_type
        path = self.get_full_name()

        for idx in range(self.num_agents):
            self.agents.append(
                create(BaseAgent, parent_inst_path=path, name=f"agent{idx}", parent=self)
            )

        cvrg = utils_dv.uvm_config_db_get_try(self, "coverage_en")
        if isinstance(cvrg, bool):
            self._coverage_en = cvrg
        if self._coverage_en:
            self.cov = create(
                BaseCoverage, parent_inst_path=path, name="coverage", parent=self
            )

        chk = utils_dv.uvm_config_db_get_try(self, "check_en")
        if isinstance(chk, bool):
            self._check_en = chk
        if self._check_en:
            self.sb = create(BaseSb, parent_inst_path=path, name="sb", parent=self)

        self.mon_rst = create(
            BaseResetMonitor, parent_inst_path=path, name="mon_rst", parent=self
        )
        self.reset_sink = create(
            BaseResetSink, parent_inst_path=path, name="reset_sink", parent=self
        )

    def connect_phase(self) -> None:
        super().connect_phase()
        for agent in self.agents:
            if self.cov is not None:
                agent.ap_cov.connect(self.cov.analysis_export)
            if self.sb is not None:
                agent.ap_in.connect(self.sb.prd.analysis_export)
                agent.ap_out.connect(self.sb.cmp.analysis_export)
        self.mon_rst.ap.connect(self.reset_sink.analysis_export)
        self.reset_sink.sb = self.sb
        self.reset_sink.cov = self.cov
