# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_clock_driver.py

"""Clock generator with a cycle heartbeat."""

from __future__ import annotations

from typing import cast

import cocotb
import pyuvm
from cocotb.clock import Clock
from cocotb.handle import LogicObject
from cocotb.task import Task
from cocotb.triggers import Timer

from . import utils_dv
from .base_clock_mixin import BaseClockMixin


class BaseClockDriver(BaseClockMixin, pyuvm.uvm_component):
    """Drive the DUT clock with cocotb's Clock and log a heartbeat.

    Configuration (config_db):
        clock_enable (bool): drive the clock (default True); False when the
            clock comes from HDL
        clock_start_high (bool): first half period high (default False)
        clock_init_delay_ps (int): delay before the first edge (default 0)
        clock_heartbeat_cycles (int): log "heartbeat: N cycles" every N
            rising edges (default 1000, 0 disables)

    The clock starts in start_of_simulation_phase so it is running before any
    run_phase task awaits an edge. Every task it started is cancelled in
    final_phase.

    Reference:
        https://github.com/advanced-uvm/second_edition/blob/master/recipes/2.clk_drv.sv
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self.clock_enable: bool = True
        self.clock_start_high: bool = False
        self.clock_init_delay_ps: int = 0
        self.clock_heartbeat_cycles: int = 1000
        self.cycles: int = 0
        self._starter: Task | None = None
        self._task: Task | None = None
        self._heartbeat: Task | None = None

    def end_of_elaboration_phase(self) -> None:
        super().end_of_elaboration_phase()
        self._clock_pull_config()
        self._clock_driver_pull_config()
        self._clock_bind_handles()

    def start_of_simulation_phase(self) -> None:
        super().start_of_simulation_phase()
        if not self.clock_enable:
            self.logger.debug("Clock '%s' driven by HDL", self.clock_name)
        elif self.clock_init_delay_ps > 0:
            self._starter = cocotb.start_soon(self._delayed_start())
        else:
            self._start_clock()
        if self.clock_heartbeat_cycles > 0:
            self._heartbeat = cocotb.start_soon(self._run_heartbeat())

    def final_phase(self) -> None:
        for task in (self._starter, self._heartbeat, self._task):
            if task is not None:
                task.cancel()
        self._starter = None
        self._heartbeat = None
        self._task = None
        super().final_phase()

    def _clock_driver_pull_config(self) -> None:
        v = utils_dv.uvm_config_db_get_try(self, "clock_enable")
        if isinstance(v, bool):
            self.clock_enable = v
        v = utils_dv.uvm_config_db_get_try(self, "clock_start_high")
        if isinstance(v, bool):
            self.clock_start_high = v
        v = utils_dv.uvm_config_db_get_try(self, "clock_init_delay_ps")
        if isinstance(v, int):
            self.clock_init_delay_ps = v
        v = utils_dv.uvm_config_db_get_try(self, "clock_heartbeat_cycles")
        if isinstance(v, int):
            self.clock_heartbeat_cycles = max(0, v)
        if self.clock_enable and self.clock_period_ps <= 0:
            raise ValueError(f"clock_period_ps must be > 0, got {self.clock_period_ps}")

    async def _delayed_start(self) -> None:
        try:
            await Timer(self.clock_init_delay_ps, unit="ps")
            self._start_clock()
        finally:
            self._starter = None

    def _start_clock(self) -> None:
        assert self._clk is not None, "_start_clock before _clock_bind_handles"
        clk = cast(LogicObject, self._clk)
        self.logger.debug(
            "Starting clock dut.%s period=%d ps start_high=%s",
            self.clock_name,
            self.clock_period_ps,
            self.clock_start_high,
        )
        self._task = cocotb.start_soon(
            Clock(clk, self.clock_period_ps, unit="ps").start(
                start_high=self.clock_start_high
            )
        )

    async def _run_heartbeat(self) -> None:
        assert self._clk is not None, "_run_heartbeat before _clock_bind_handles"
        while True:
            await self._clk.rising_edge
            self.cycles += 1
            if self.cycles % self.clock_heartbeat_cycles == 0:
                self.logger.info("heartbeat: %d cycles", self.cycles)
