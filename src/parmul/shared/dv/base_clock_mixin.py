# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_clock_mixin.py

"""Clock config, handle binding, and edge waits shared by components."""

from __future__ import annotations

from typing import Any, cast

import pyuvm
from cocotb.handle import SimHandleBase
from cocotb.triggers import ReadOnly

from . import utils_dv


class BaseClockMixin:
    """Clock and reset plumbing for drivers, monitors and the clock driver.

    All DUT inputs are written on the falling edge of the clock, half a period
    away from the rising edge where the DUT samples them. Monitors sample in
    the ReadOnly phase after the edge they care about, after every write of
    that time step has settled.

    Configuration (config_db):
        clock_name (str): clock signal on the DUT (default "clk")
        clock_period_ps (int): period in picoseconds (default 1000)
        reset_name (str): reset signal (default "rst_n")
        reset_active_low (bool): reset polarity (default True)

    The reset helpers need _clock_bind_handles() to have run first.

    Reference:
        C.E. Cummings, "Applying Stimulus & Sampling Outputs - UVM Verification
        Testing Techniques," SNUG 2016 (Austin)
    """

    def _clock_init_defaults(self, *, name: str = "clk", period_ps: int = 1_000) -> None:
        self.clock_name: str = name
        self.clock_period_ps: int = period_ps
        self._dut: Any | None = None
        self._clk: SimHandleBase | None = None

    def _as_comp(self) -> pyuvm.uvm_component:
        return cast(pyuvm.uvm_component, self)

    def _clock_pull_config(self) -> None:
        comp = self._as_comp()
        v = utils_dv.uvm_config_db_get_try(comp, "clock_name")
        if isinstance(v, str) and v:
            self.clock_name = v
        v = utils_dv.uvm_config_db_get_try(comp, "clock_period_ps")
        if isinstance(v, int):
            self.clock_period_ps = v
        comp.logger.debug(
            "clock config: name=%s period_ps=%d", self.clock_name, self.clock_period_ps
        )

    def _clock_bind_handles(self) -> None:
        comp = self._as_comp()
        self._dut = utils_dv.uvm_config_db_get(comp, "dut")
        self._clk = utils_dv.get_signal(self._dut, self.clock_name)

    async def clock_drive_edge(self) -> None:
        """Wait for the next falling edge (the drive point)."""
        assert self._clk is not None, "clock_drive_edge before _clock_bind_handles"
        await self._clk.falling_edge

    async def clock_sample_rising(self) -> None:
        """Wait for the next rising edge, then for the values to settle."""
        assert self._clk is not None, "clock_sample_rising before _clock_bind_handles"
        await self._clk.rising_edge
        await ReadOnly()

    async def clock_sample_falling(self) -> None:
        """Wait for the next falling edge, then for the values to settle."""
        assert self._clk is not None, "clock_sample_falling before _clock_bind_handles"
        await self._clk.falling_edge
        await ReadOnly()

    def _reset_init_defaults(self, *, name: str = "rst_n", active_low: bool = True) -> None:
        self.reset_name: str = name
        self.reset_active_low: bool = active_low
        self._rst: SimHandleBase | None = None

    def _reset_pull_config(self) -> None:
        """Read reset_name / reset_active_low and bind the reset handle (EoE)."""
        comp = self._as_comp()
        v = utils_dv.uvm_config_db_get_try(comp, "reset_name")
        if isinstance(v, str) and v:
            self.reset_name = v
        v = utils_dv.uvm_config_db_get_try(comp, "reset_active_low")
        if isinstance(v, bool):
            self.reset_active_low = v
        self._rst = utils_dv.get_signal(self._dut, self.reset_name)

    def calc_active(self, level: int) -> bool:
        """True when the raw reset level means "in reset"."""
        return (level == 0) if self.reset_active_low else (level != 0)
