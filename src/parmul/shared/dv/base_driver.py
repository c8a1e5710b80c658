# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_driver.py

"""Base driver: initial values, reset pulses, level waits, item loop."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import pyuvm
from cocotb.triggers import NextTimeStep, ReadOnly, ReadWrite

from . import utils_dv
from .base_clock_mixin import BaseClockMixin
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class HandshakeTimeoutError(RuntimeError):
    """A DUT output did not reach the awaited level in time."""


class BaseDriver(BaseClockMixin, pyuvm.uvm_driver, Generic[T]):
    """UVM driver that owns the DUT reset and drives on falling edges.

    Run sequence:
        1. apply_initial_dut_inputs() at time 0, with reset asserted
        2. hold reset for reset_cycles falling edges, then release it
        3. loop: get_next_item(), drive_item(), item_done()

    Subclasses call pulse_reset() to reset the DUT mid-run and wait_level() to
    wait on a DUT output such as busy or a response strobe.

    Configuration (config_db):
        reset_name (str): reset signal (default "rst_n")
        reset_active_low (bool): polarity (default True)
        reset_cycles (int): falling edges reset is held (default 1)

    Subclasses implement:
        drive_item(dut, tr): drive one transaction

    Reference:
        C.E. Cummings, "Applying Stimulus & Sampling Outputs," SNUG 2016
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self.initial_dut_input_values: dict[str, int] = {}
        self._reset_init_defaults()
        self.reset_cycles: int = 1
        self.reset_count: int = 0

    def end_of_elaboration_phase(self) -> None:
        super().end_of_elaboration_phase()
        self._clock_pull_config()
        self._clock_bind_handles()
        self._reset_pull_config()
        v = utils_dv.uvm_config_db_get_try(self, "reset_cycles")
        if isinstance(v, int):
            self.reset_cycles = max(1, v)

    @property
    def reset_active_value(self) -> int:
        return 0 if self.reset_active_low else 1

    async def run_phase(self) -> None:
        tr: T
        await self.apply_initial_dut_inputs()
        await self.hold_reset()
        while True:
            tr = await self.seq_item_port.get_next_item()
            await self.drive_item(self._dut, tr)
            self.seq_item_port.item_done()

    async def apply_initial_dut_inputs(self) -> None:
        """Write initial input values and assert reset at time 0."""
        assert self._rst is not None, "apply_initial_dut_inputs before EoE"
        for sig_name, val in self.initial_dut_input_values.items():
            utils_dv.get_signal(self._dut, sig_name).value = val
        self._rst.value = self.reset_active_value
        await ReadWrite()
        await NextTimeStep()

    async def hold_reset(self) -> None:
        """Keep reset asserted for reset_cycles drive edges, then release."""
        assert self._rst is not None, "hold_reset before EoE"
        for _ in range(self.reset_cycles):
            await self.clock_drive_edge()
        self._rst.value = 1 - self.reset_active_value
        self.logger.debug("reset released")

    async def pulse_reset(self) -> None:
        """Assert reset now (caller is on a drive edge), hold, release."""
        assert self._rst is not None, "pulse_reset before EoE"
        self._rst.value = self.reset_active_value
        self.reset_count += 1
        self.logger.debug("reset asserted (%d)", self.reset_count)
        await self.hold_reset()

    async def wait_level(self, signal_name: str, level: int, max_cycles: int = 0) -> None:
        """Sample signal_name on falling edges until it equals level.

        max_cycles > 0 bounds the wait; running out raises HandshakeTimeoutError.
        Returns in the ReadOnly phase, so the next write needs a drive edge.
        """
        sig = utils_dv.get_signal(self._dut, signal_name)
        cycles = 0
        while True:
            await self.clock_drive_edge()
            await ReadOnly()
            if utils_dv.get_signal_value_int(sig.value) == level:
                return
            cycles += 1
            if max_cycles and cycles >= max_cycles:
                raise HandshakeTimeoutError(
                    f"{signal_name} not {level} after {cycles} cycles"
                )

    async def drive_item(self, dut: Any, tr: T) -> None:
        raise NotImplementedError("Implement DUT signal driving here")
